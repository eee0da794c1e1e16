#!/usr/bin/env python
# encoding: utf-8

__author__ = "aldur"

"""Various utils."""

import os
import string

_printable = set(
    (string.ascii_letters + string.digits + string.punctuation + " ").encode("ascii")
)


def xor(a: bytes, b: bytes) -> bytes:
    """Return a xor b.

    :param a: Some bytes.
    :param b: Some bytes.
    :returns: a xor b
    """
    assert len(a) == len(b), \
        "Arguments must have same length."

    return bytes(x ^ y for x, y in zip(a, b))


def random_bytes(n: int) -> bytes:
    """
    Return n random bytes.

    :param n: How many bytes.
    """
    assert n >= 0
    return os.urandom(n)


def random_aes_key() -> bytes:
    """Generate a random AES-128 key."""
    return random_bytes(16)


def display_byte(b: int) -> str:
    """
    Render a byte for humans:
    printable ASCII as itself, anything else as hex.

    :param b: A byte value.
    :return: The printable representation.
    """
    assert 0 <= b <= 0xff
    return chr(b) if b in _printable else "0x{:02x}".format(b)


def to_bytes(s) -> bytes:
    """
    Accept both str and bytes, return bytes.
    Strings are UTF-8 encoded.

    :param s: A str or a bytes-like object.
    """
    return s.encode("utf-8") if isinstance(s, str) else bytes(s)
