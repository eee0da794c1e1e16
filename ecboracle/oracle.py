#!/usr/bin/env/ python
# encoding: utf-8

"""
The oracle related stuff.
Each oracle hides a key and a secret,
and lets the attacker play with its encryption.
"""

import abc

import ecboracle.blocks
import ecboracle.util

__author__ = 'aldur'


class InvalidKeyLengthException(Exception):
    """
    Thrown when an oracle is built with a key
    whose length does not match the cipher block size.
    """

    def __init__(self, key_len: int, expected: int):
        super().__init__(
            "Invalid key length: {} (expected {})".format(key_len, expected)
        )
        self.key_len = key_len
        self.expected = expected


class Oracle(object, metaclass=abc.ABCMeta):
    """
    The base oracle abstract class.
    """

    @abc.abstractmethod
    def experiment(self, *args: bytes) -> bytes:
        """
        Experiment with the oracle.
        Usually this function can be called how many times you need.

        :param args: An iterable of bytes.
        :return: Some bytes.
        """
        return bytes()


class OracleByteAtATimeEcb(Oracle):
    """
    An encryption oracle that encrypts with AES ECB
    under a fixed key.
    Before encryption, it appends to the attacker's input
    a constant string, unknown to the caller.
    The attacker's goal are:
        - guess the block size of encryption, as used by the oracle (16)
        - guess the AES encryption mode (ECB)
        - discover the unknown fixed string, one byte at a time.

    :param key: The fixed key, must be as long as a block.
    :param unknown_string: The secret suffix.
    :raises InvalidKeyLengthException: On a key of the wrong size.
    """

    def __init__(self, key: bytes, unknown_string: bytes):
        super().__init__()
        key = bytes(key)
        if len(key) != ecboracle.blocks.BLOCK_SIZE:
            raise InvalidKeyLengthException(
                len(key), ecboracle.blocks.BLOCK_SIZE
            )

        """
        This is a consistent AES key.
        It is the same for the whole oracle lifetime,
        but it's hidden from anyone (kinda)
        """
        self._consistent_key = key
        """
        And this is the unknown string, that the attacker has to find.
        """
        self._unknown_string = bytes(unknown_string)

    def _encrypt(self, b: bytes) -> bytes:
        return ecboracle.blocks.aes_ecb(self._consistent_key, b)

    def experiment(self, prefix: bytes = b"") -> bytes:
        """
        Return an encryption of the attacker's prefix,
        followed by the fixed unknown string.

        :param prefix: The attacker controlled bytes (may be empty).
        :return: The ciphertext.
        """
        return self._encrypt(bytes(prefix) + self._unknown_string)

    encrypt = experiment


class OracleRandomizedBlocks(OracleByteAtATimeEcb):
    """
    Same as OracleByteAtATimeEcb, but on every call
    each plaintext block is XORed with a fresh random mask
    before going through the cipher.
    Ciphertext length is unchanged, repeated blocks are not.
    """

    def _encrypt(self, b: bytes) -> bytes:
        size = ecboracle.blocks.BLOCK_SIZE
        b = ecboracle.blocks.pkcs_7(b, size)
        return b"".join(
            ecboracle.blocks.aes_block(
                self._consistent_key,
                ecboracle.util.xor(block, ecboracle.util.random_bytes(size))
            )
            for block in ecboracle.blocks.chunks(b, size)
        )
