#!/usr/bin/env python
# encoding: utf-8

"""Handle operations supporting blocks here."""

from Crypto.Cipher import AES

__author__ = 'aldur'

BLOCK_SIZE = AES.block_size


def ith_byte_block(block_size: int, i: int) -> int:
    """
    Return the block to which the byte at index i belongs.
    :param block_size: The block size.
    :param i: The index of the interesting byte.
    :return: The index of the block to which the byte at index i belongs.
    """
    assert block_size > 0
    assert i >= 0
    return i // block_size


def bytes_in_block(block_size: int, i: int) -> slice:
    """
    Given the block size and the desired block index,
    return the slice of interesting bytes.

    :param block_size: The block size.
    :param i: The block index.
    :return: slice of bytes pointing to given block index.
    """
    return slice(block_size * i, block_size * (i + 1))


def chunks(b: bytes, block_size: int) -> tuple:
    """
    Split the buffer into consecutive blocks.
    The last one may be shorter if b is not aligned.

    :param b: The input buffer.
    :param block_size: The block size.
    :return: A tuple of byte buffers.
    """
    assert block_size > 0
    return tuple(
        b[i:i + block_size] for i in range(0, len(b), block_size)
    )


def pkcs_7(b: bytes, size: int) -> bytes:
    """
    PKCS#7 padding.
    Given the block size, pad the input buffer,
    so that the result is a multiple of the specified size.

    Please note that this function will always pad,
    even if the buffer is already a multiple of the size.
    So, if size is 16 and b is "YELLOW SUBMARINE",
    it will be padded to "YELLOW SUBMARINE" followed
    by sixteen 0x10 bytes.

    :param b: A buffer of bytes.
    :param size: The block size.
    :return: The padded buffer.
    """
    assert 0 < size <= 0xff

    padding = size - (len(b) % size)
    return bytes(b) + bytes((padding,)) * padding


def any_equal_block(b: bytes, block_size: int = BLOCK_SIZE) -> bool:
    """
    Check the buffer block_size bytes at the time.

    :param b: A bytes buffer.
    :param block_size: The block size.
    :return: True if two or more blocks are equal.
    """
    blocks = chunks(b, block_size)
    return len(set(blocks)) != len(blocks)


def aes_block(key: bytes, block: bytes) -> bytes:
    """
    Encrypt a single AES block.

    :param key: The cipher key.
    :param block: Exactly one block of bytes.
    :return: The encrypted block.
    """
    assert len(block) == BLOCK_SIZE, \
        "Got wrong block size {}".format(len(block))
    assert len(key) == BLOCK_SIZE, \
        "Got wrong key size {}".format(len(key))

    return AES.new(key, AES.MODE_ECB).encrypt(block)


def aes_ecb(key: bytes, b: bytes) -> bytes:
    """AES ECB mode encryption.

    The buffer is PKCS#7 padded first,
    then each block goes through the cipher on its own.

    :param key: The cipher key.
    :param b: The buffer to be encrypted.
    :returns: The encrypted buffer.
    """
    assert len(key) == BLOCK_SIZE

    return b"".join(
        aes_block(key, block) for block in chunks(pkcs_7(b, BLOCK_SIZE), BLOCK_SIZE)
    )
