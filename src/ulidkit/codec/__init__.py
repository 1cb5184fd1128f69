"""Text codec for ULID values."""

from ulidkit.codec.base32 import DECODE_TABLE, INVALID, decode, decode_char, encode, encode_into

__all__ = ["DECODE_TABLE", "INVALID", "decode", "decode_char", "encode", "encode_into"]
