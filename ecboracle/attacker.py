#!/usr/bin/env/ python
# encoding: utf-8

"""
The attacker tools will implemented here.
"""

import abc
import collections
import concurrent.futures
import typing

import ecboracle.oracle
import ecboracle.blocks
import ecboracle.util

__author__ = 'aldur'

"""
How far the block size discovery goes before giving up.
"""
MAX_PROBE_LEN = 64

"""
The byte used to fill the attacker's input.
"""
FILL_BYTE = b"A"

AttackResult = collections.namedtuple(
    "AttackResult", ("ciphertext", "recovered", "steps")
)


class BlockSizeNotFoundException(Exception):
    """
    Thrown when the ciphertext length never grows
    while feeding the oracle up to MAX_PROBE_LEN bytes.
    """
    pass


class AttackState(object):
    """The phases an attack goes through."""
    INITIALIZING = "initializing"
    PROBING_BLOCK_SIZE = "probing block size"
    DETECTING_ECB = "detecting ECB"
    CRACKING = "cracking"
    DONE = "done"
    ABORTED = "aborted"


class Attacker(object, metaclass=abc.ABCMeta):
    """The generic, abstract, attacker."""

    @abc.abstractmethod
    def __init__(self, oracle: ecboracle.oracle.Oracle):
        self.oracle = oracle

    @abc.abstractmethod
    def attack(self):
        """
        Perform the attack against the oracle.
        The default implementation does nothing.
        """
        return None


class AttackerByteAtATimeEcb(Attacker):
    """
    The attacker against the One Byte at a Time Ecb Oracle.
    The oracle holds an unknown string.
    The attacker's goal are:
        - guess the block size of encryption, as used by the oracle (16)
        - guess the AES encryption mode (ECB)
        - discover the unknown fixed string, one byte at a time.

    :param oracle: An instance of OracleByteAtATimeEcb.
    :param attacker_prefix: The bytes whose encryption is reported in the result.
    :param workers: How many threads send the dictionary probes.
    """

    def __init__(
            self,
            oracle: ecboracle.oracle.OracleByteAtATimeEcb,
            attacker_prefix: bytes = b"",
            workers: int = 1
    ):
        super().__init__(oracle)
        assert workers >= 1

        self.attacker_prefix = bytes(attacker_prefix)
        self.workers = workers

        self.block_size = -1
        self.secret_len = -1
        self.is_ecb = False
        self.padding_reached = False
        self.ciphertext = b""
        self.unhidden_string = b""
        self.steps = []
        self.state = AttackState.INITIALIZING

    @staticmethod
    def get_fill_bytes_len(i: int, block_size: int) -> int:
        """
        We want the i-th byte of the hidden string to be the last of a block.
        Return how many filling bytes must precede it.

        ... | fill_bytes | ....i || ...

        :param i: The index of the interested byte.
        :param block_size: The block size.
        :return: A number between 0 and block_size - 1.
        """
        assert i >= 0
        assert block_size > 0
        return block_size - 1 - (i % block_size)

    @staticmethod
    def get_target_block_offset(i: int, block_size: int) -> int:
        """
        The offset of the block whose last byte is
        the i-th byte of the hidden string, once filled.

        :param i: The index of the interested byte.
        :param block_size: The block size.
        """
        return ecboracle.blocks.ith_byte_block(block_size, i) * block_size

    def _step(self, message: str):
        self.steps.append(message)

    def _result(self) -> AttackResult:
        return AttackResult(
            self.ciphertext, self.unhidden_string, tuple(self.steps)
        )

    def _block_at(self, b: bytes, offset: int) -> typing.Optional[bytes]:
        """
        Encrypt b and return the block starting at offset,
        or None if the ciphertext is too short.
        """
        cipher = self.oracle.experiment(b)
        if len(cipher) < offset + self.block_size:
            return None
        return cipher[offset:offset + self.block_size]

    def discover_block_size(self) -> int:
        """
        Discover the block size used by the oracle,
        by feeding it a byte at the time.
        When the size of the cipher will change,
        we'll have found our block size!

        The same probe tells the hidden string length:
        the first growth happens when input and hidden string
        exactly fill the baseline ciphertext.

        :return: The block size used by the oracle.
        :raises BlockSizeNotFoundException: If the size never changes.
        """
        baseline = len(self.oracle.experiment(b""))

        for i in range(1, MAX_PROBE_LEN + 1):
            t_len = len(self.oracle.experiment(FILL_BYTE * i))
            if t_len > baseline:
                self.block_size = t_len - baseline
                self.secret_len = baseline - i
                return self.block_size

        raise BlockSizeNotFoundException(
            "Could not find block size within {} bytes".format(MAX_PROBE_LEN)
        )

    def discover_encryption_mode(self) -> bool:
        """
        Try guessing the encryption mode of the oracle.
        As usual, finding equal blocks means that the encryption
        mode is probably stateless (ECB).

        :return: True if the oracle is using ECB.
        """
        assert self.block_size > 0, \
            "Please discover the block size before calling me!"

        cipher = self.oracle.experiment(FILL_BYTE * self.block_size * 4)
        self.is_ecb = ecboracle.blocks.any_equal_block(cipher, self.block_size)
        return self.is_ecb

    def build_dictionary(self, known: bytes) -> dict:
        """
        Map every possible encryption of the block
        ending with the byte after known, to that byte.

        The dictionary is only good for len(known):
        it must be built again at each step.

        :param known: The part of the hidden string discovered so far.
        :return: A dictionary from ciphertext block to byte value.
        """
        assert self.block_size > 0, \
            "Please discover the block size before calling me!"

        offset = AttackerByteAtATimeEcb.get_target_block_offset(
            len(known), self.block_size
        )
        trap = FILL_BYTE * AttackerByteAtATimeEcb.get_fill_bytes_len(
            len(known), self.block_size
        ) + known

        def probe(c: int) -> tuple:
            return self._block_at(trap + bytes((c,)), offset), c

        if self.workers > 1:
            with concurrent.futures.ThreadPoolExecutor(
                    max_workers=self.workers
            ) as executor:
                probes = list(executor.map(probe, range(256)))
        else:
            probes = [probe(c) for c in range(256)]

        return {block: c for block, c in probes if block is not None}

    def crack_next_byte(self, known: bytes) -> typing.Optional[int]:
        """
        Attack the oracle in order to know the byte
        following known in the hidden string.

        :param known: The part of the hidden string discovered so far.
        After a None, padding_reached tells whether the dictionary
        matched a padding byte or nothing at all.

        :param known: The part of the hidden string discovered so far.
        :return: The next byte, or None when the hidden string is over.
        """
        assert self.block_size > 0, \
            "Please discover the block size before calling me!"
        self.padding_reached = False

        offset = AttackerByteAtATimeEcb.get_target_block_offset(
            len(known), self.block_size
        )
        trap = FILL_BYTE * AttackerByteAtATimeEcb.get_fill_bytes_len(
            len(known), self.block_size
        )

        target = self._block_at(trap, offset)
        if target is None:
            return None

        byte = self.build_dictionary(known).get(target)

        # When we get to padding bytes, the match is padding.
        if byte is not None and 0 <= self.secret_len <= len(known):
            self.padding_reached = True
            return None
        return byte

    def attack(self) -> AttackResult:
        """
        Perform the attack against the oracle.
        Failures are reported through the result steps.

        :return: The ciphertext of the attacker prefix,
            the recovered string and the steps taken.
        """
        self.state = AttackState.INITIALIZING
        self.unhidden_string = b""
        self.steps = []

        self.ciphertext = self.oracle.experiment(self.attacker_prefix)
        self._step("Ciphertext length: {} bytes".format(len(self.ciphertext)))

        self.state = AttackState.PROBING_BLOCK_SIZE
        try:
            self.discover_block_size()
        except BlockSizeNotFoundException as e:
            self.state = AttackState.ABORTED
            self._step("{}; aborting attack".format(e))
            return self._result()
        self._step("Detected block size: {}".format(self.block_size))

        self.state = AttackState.DETECTING_ECB
        if not self.discover_encryption_mode():
            # We don't know how to do it!
            self.state = AttackState.ABORTED
            self._step("ECB not detected; aborting attack")
            return self._result()
        self._step("ECB detected via repeated-block heuristic")

        self.state = AttackState.CRACKING
        self._step(
            "Beginning byte-at-a-time recovery (unknown length approx {})".format(
                self.secret_len
            )
        )

        for _ in range(len(self.ciphertext)):
            byte = self.crack_next_byte(self.unhidden_string)
            if byte is None and self.padding_reached:
                self._step(
                    "Byte {} matched padding past the measured secret length ({})"
                    " - end of secret".format(
                        len(self.unhidden_string) + 1, self.secret_len
                    )
                )
                break
            if byte is None:
                self._step(
                    "No matching byte found - likely end of secret or padding reached"
                )
                break

            self.unhidden_string += bytes((byte,))
            self._step("Recovered byte {}: 0x{:02x} ({})".format(
                len(self.unhidden_string), byte, ecboracle.util.display_byte(byte)
            ))

        self.state = AttackState.DONE
        return self._result()
