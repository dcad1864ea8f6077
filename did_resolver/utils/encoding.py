"""Encoding utility functions."""

import base64
import binascii

import base58


def pad(val: str) -> str:
    """Pad base64 values if need be: JWT calls to omit trailing padding."""
    return val + "=" * (-len(val) % 4)


def unpad(val: str) -> str:
    """Remove padding from base64 values if need be."""
    return val.rstrip("=")


def b64_to_bytes(val: str, urlsafe=False) -> bytes:
    """Convert a base 64 string to bytes.

    Decoding is strict: characters outside the alphabet raise `ValueError`.
    """
    try:
        if urlsafe:
            return base64.b64decode(pad(val), altchars=b"-_", validate=True)
        return base64.b64decode(pad(val), validate=True)
    except binascii.Error as err:
        raise ValueError(f"Invalid base64 encoding: {err}") from err


def bytes_to_b64(val: bytes, urlsafe=False, pad=True, encoding: str = "ascii") -> str:
    """Convert a byte string to base 64."""
    b64 = (
        base64.urlsafe_b64encode(val).decode(encoding)
        if urlsafe
        else base64.b64encode(val).decode(encoding)
    )
    return b64 if pad else unpad(b64)


def b64url(val: bytes) -> str:
    """Convert a byte string to unpadded base64url, as used in JWKs."""
    return bytes_to_b64(val, urlsafe=True, pad=False)


def b58_to_bytes(val: str) -> bytes:
    """Convert a base 58 (bitcoin alphabet) string to bytes.

    Each leading '1' character becomes a leading zero byte.
    """
    return base58.b58decode(val)


def bytes_to_b58(val: bytes) -> str:
    """Convert a byte string to base 58."""
    return base58.b58encode(val).decode("ascii")
