#!/usr/bin/env python
# encoding: utf-8

"""The main file."""

import argparse
import binascii
import sys

import colorama

import ecboracle.demo
import ecboracle.oracle
import ecboracle.util

__author__ = "aldur"


def _hex_key(s: str) -> bytes:
    """
    Parse a hex encoded key for argparse.

    :param s: The hex string.
    :return: The key bytes.
    """
    try:
        return binascii.unhexlify(s)
    except (binascii.Error, ValueError):
        raise argparse.ArgumentTypeError("'{}' is not valid hex".format(s))


def _create_parser() -> argparse.ArgumentParser:
    """
    Create the command line argument parser.

    :return: The command line argument parser for this module.
    """
    parser = argparse.ArgumentParser(
        description='Byte-at-a-time ECB decryption demo.'
    )

    parser.add_argument(
        "secret",
        help="the string the oracle appends to the attacker input"
    )
    key_group = parser.add_mutually_exclusive_group()
    key_group.add_argument(
        "-k", "--key",
        type=_hex_key,
        default=bytes(16),
        help="the hex encoded oracle key (defaults to 16 zero bytes)"
    )
    key_group.add_argument(
        "-r", "--random-key",
        action="store_true",
        help="use a random oracle key"
    )
    parser.add_argument(
        "-p", "--prefix",
        default="",
        help="the attacker input whose ciphertext is reported"
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=1,
        help="threads used to build each dictionary"
    )
    parser.add_argument(
        "--randomized",
        action="store_true",
        help="attack an oracle that randomizes each block (the attack aborts)"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="only print the outcome"
    )

    return parser


def main(argv=None) -> int:
    """
    Read the arguments from the command line,
    run the attack and print what happened.

    :return: 0 if the secret was recovered, 1 otherwise.
    """
    colorama.init()

    args = _create_parser().parse_args(argv)
    if args.workers < 1:
        print("--workers must be at least 1", file=sys.stderr)
        return 2

    key = ecboracle.util.random_aes_key() if args.random_key else args.key
    oracle_class = ecboracle.oracle.OracleRandomizedBlocks \
        if args.randomized else ecboracle.oracle.OracleByteAtATimeEcb

    result = ecboracle.demo.run_ecb_demo(
        key,
        args.prefix,
        args.secret,
        workers=args.workers,
        oracle_class=oracle_class
    )

    if not args.quiet:
        for step in result.steps:
            print(step)
        print("Ciphertext: {}".format(binascii.hexlify(result.ciphertext).decode("ascii")))

    print("Recovered: {!r}".format(result.recovered))

    success = result.recovered == ecboracle.util.to_bytes(args.secret)
    print(
        "{}Attack {}.{}".format(
            colorama.Fore.GREEN if success else colorama.Fore.RED,
            "completed" if success else "failed",
            colorama.Fore.RESET
        ))

    return 0 if success else 1


if __name__ == '__main__':
    sys.exit(main())
