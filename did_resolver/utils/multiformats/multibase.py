"""MultiBase decoding utilities."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import ClassVar

from ..encoding import b58_to_bytes, bytes_to_b58


class MultibaseEncoder(ABC):
    """Encoding details."""

    name: ClassVar[str]
    character: ClassVar[str]

    @abstractmethod
    def encode(self, value: bytes) -> str:
        """Encode a byte string using this encoding."""

    @abstractmethod
    def decode(self, value: str) -> bytes:
        """Decode a string using this encoding."""


class Base58BtcEncoder(MultibaseEncoder):
    """Base58BTC encoding."""

    name = "base58btc"
    character = "z"

    def encode(self, value: bytes) -> str:
        """Encode a byte string using the base58btc encoding."""
        return bytes_to_b58(value)

    def decode(self, value: str) -> bytes:
        """Decode a base58btc string; invalid characters raise `ValueError`."""
        return b58_to_bytes(value)


class Encoding(Enum):
    """Enum for supported encodings."""

    base58btc = Base58BtcEncoder()

    @classmethod
    def from_character(cls, character: str) -> MultibaseEncoder:
        """Get encoding from character."""
        for encoding in cls:
            if encoding.value.character == character:
                return encoding.value
        raise ValueError(f"Unsupported multibase prefix: {character!r}")


def decode(value: str) -> bytes:
    """Decode a multibase encoded string.

    Raises:
        ValueError: the value is empty, its prefix is unknown or the payload
            is not valid in the named encoding

    """
    if not value:
        raise ValueError("Empty multibase value")
    encoder = Encoding.from_character(value[0])
    return encoder.decode(value[1:])
