#!/usr/bin/env/ python
# encoding: utf-8

"""
Test the demo entry point.
"""

import unittest
import unittest.mock

import ecboracle.blocks
import ecboracle.demo
import ecboracle.oracle

__author__ = 'aldur'


class DemoTestCase(unittest.TestCase):
    def setUp(self):
        self.key = bytes(16)

    def test_run(self):
        result = ecboracle.demo.run_ecb_demo(self.key, "", "SECRETDATA")

        self.assertEqual(result.recovered, b"SECRETDATA")
        self.assertEqual(
            result.ciphertext,
            ecboracle.blocks.aes_ecb(self.key, b"SECRETDATA")
        )
        self.assertEqual(result.steps[0], "Ciphertext length: 16 bytes")
        self.assertEqual(result.steps[1], "Detected block size: 16")

    def test_run_with_prefix(self):
        result = ecboracle.demo.run_ecb_demo(self.key, b"attacker", b"SECRETDATA")

        self.assertEqual(
            result.ciphertext,
            ecboracle.blocks.aes_ecb(self.key, b"attackerSECRETDATA")
        )
        self.assertEqual(result.recovered, b"SECRETDATA")

    def test_run_utf8(self):
        secret = "café ✓"
        result = ecboracle.demo.run_ecb_demo(self.key, "", secret, workers=4)
        self.assertEqual(result.recovered, secret.encode("utf-8"))

    def test_invalid_key(self):
        with unittest.mock.patch.object(
                ecboracle.oracle.OracleByteAtATimeEcb, "experiment"
        ) as experiment:
            result = ecboracle.demo.run_ecb_demo(bytes(10), "", "SECRETDATA")

        experiment.assert_not_called()
        self.assertEqual(result.ciphertext, b"")
        self.assertEqual(result.recovered, b"")
        self.assertEqual(
            result.steps,
            ("Invalid key length: 10 (expected 16)",)
        )

    def test_empty_secret(self):
        result = ecboracle.demo.run_ecb_demo(self.key, "", "")

        self.assertEqual(result.recovered, b"")
        self.assertEqual(len(result.ciphertext), 16)

    def test_not_ecb(self):
        result = ecboracle.demo.run_ecb_demo(
            self.key, "", "SECRETDATA",
            oracle_class=ecboracle.oracle.OracleRandomizedBlocks
        )

        self.assertEqual(len(result.ciphertext), 16)
        self.assertEqual(result.recovered, b"")
        self.assertIn("ECB not detected; aborting attack", result.steps)

    def test_idempotent(self):
        f = ecboracle.demo.run_ecb_demo
        first = f(self.key, "", "SECRETDATA")
        second = f(self.key, "", "SECRETDATA")

        self.assertEqual(first.ciphertext, second.ciphertext)
        self.assertEqual(first.recovered, second.recovered)


if __name__ == '__main__':
    unittest.main()
