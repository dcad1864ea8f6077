"""Multicodec wrap and unwrap functions for public key codecs."""

from enum import Enum
from io import BytesIO
from typing import NamedTuple, Tuple

import varint

# a 64 bit unsigned varint never needs more than 9 bytes
MAX_VARINT_LENGTH = 9


class Multicodec(NamedTuple):
    """Multicodec base class."""

    name: str
    code: int

    @property
    def prefix(self) -> bytes:
        """Varint encoded code, as it appears in front of the data."""
        return varint.encode(self.code)


class SupportedCodecs(Enum):
    """Enumeration of supported public key multicodecs."""

    ed25519_pub = Multicodec("ed25519-pub", 0xED)
    x25519_pub = Multicodec("x25519-pub", 0xEC)
    secp256k1_pub = Multicodec("secp256k1-pub", 0xE7)
    p256_pub = Multicodec("p256-pub", 0x1200)
    p384_pub = Multicodec("p384-pub", 0x1201)
    p521_pub = Multicodec("p521-pub", 0x1202)
    rsa_pub = Multicodec("rsa-pub", 0x1205)
    jwk_jcs_pub = Multicodec("jwk_jcs-pub", 0xEB51)

    @classmethod
    def by_code(cls, code: int) -> Multicodec:
        """Get multicodec by its numeric code."""
        for codec in cls:
            if codec.value.code == code:
                return codec.value
        raise ValueError(f"Unsupported key type multicodec: 0x{code:x}")


def read_varint(data: bytes) -> Tuple[int, int]:
    """Read an unsigned LEB128 varint from the start of `data`.

    Returns:
        The decoded value and the number of bytes it occupied

    Raises:
        ValueError: the data ends before a terminating byte, or no terminating
            byte appears within `MAX_VARINT_LENGTH` bytes

    """
    buffer = BytesIO(data[:MAX_VARINT_LENGTH])
    try:
        value = varint.decode_stream(buffer)
    except (EOFError, TypeError) as err:
        if len(data) > MAX_VARINT_LENGTH:
            raise ValueError("Varint too long") from err
        raise ValueError("Unexpected end of bytes while reading varint") from err
    return value, buffer.tell()


def wrap(codec: Multicodec, data: bytes) -> bytes:
    """Wrap data with multicodec prefix."""
    if not isinstance(codec, Multicodec):
        raise TypeError("codec must be a Multicodec")

    return codec.prefix + data


def unwrap(data: bytes) -> Tuple[Multicodec, bytes]:
    """Split prefixed data into its multicodec and payload.

    Raises:
        ValueError: the prefix is malformed or names an unsupported codec

    """
    code, length = read_varint(data)
    return SupportedCodecs.by_code(code), data[length:]
