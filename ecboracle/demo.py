#!/usr/bin/env/ python
# encoding: utf-8

"""
Run the whole byte-at-a-time ECB demo,
from a key and a secret to the recovered secret.
"""

import ecboracle.attacker
import ecboracle.oracle
import ecboracle.util

__author__ = 'aldur'


def run_ecb_demo(
        key: bytes,
        attacker_input=b"",
        unknown=b"",
        workers: int = 1,
        oracle_class=ecboracle.oracle.OracleByteAtATimeEcb
) -> ecboracle.attacker.AttackResult:
    """
    Build an oracle hiding unknown under key,
    then let the attacker recover it.

    Nothing is raised: an invalid key comes back as
    an empty result whose only step explains the problem.

    :param key: The oracle key (16 bytes).
    :param attacker_input: The prefix whose encryption is reported (str or bytes).
    :param unknown: The secret the oracle appends (str or bytes).
    :param workers: How many threads send the dictionary probes.
    :param oracle_class: The oracle to attack.
    :return: The ciphertext, the recovered bytes and the steps.
    """
    try:
        oracle = oracle_class(
            key, ecboracle.util.to_bytes(unknown)
        )
    except ecboracle.oracle.InvalidKeyLengthException as e:
        return ecboracle.attacker.AttackResult(b"", b"", (str(e),))

    attacker = ecboracle.attacker.AttackerByteAtATimeEcb(
        oracle,
        attacker_prefix=ecboracle.util.to_bytes(attacker_input),
        workers=workers
    )
    return attacker.attack()
