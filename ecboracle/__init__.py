"""Byte-at-a-time ECB decryption, from oracle to recovered secret."""
