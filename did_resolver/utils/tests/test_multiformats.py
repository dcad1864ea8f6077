import pytest

from ..multiformats import multibase, multicodec
from ..multiformats.multicodec import SupportedCodecs

BASE58BTC = multibase.Encoding.base58btc.value


def test_encode_decode():
    value = b"Hello World!"
    encoded = BASE58BTC.character + BASE58BTC.encode(value)
    assert encoded == "z2NEpo7TZRRrLZSi2U"
    decoded = multibase.decode(encoded)
    assert decoded == value


def test_base58_leading_zeros():
    value = b"\x00\x00\x01"
    encoded = BASE58BTC.character + BASE58BTC.encode(value)
    assert encoded == "z112"
    assert multibase.decode(encoded) == value
    assert multibase.decode("z111") == b"\x00\x00\x00"


def test_x_unknown_character():
    with pytest.raises(ValueError):
        multibase.decode("fHello World!")
    with pytest.raises(ValueError):
        multibase.decode("u-_8")


def test_x_invalid_base58_character():
    with pytest.raises(ValueError):
        multibase.decode("z0OIl")


def test_x_empty():
    with pytest.raises(ValueError):
        multibase.decode("")


@pytest.mark.parametrize(
    "codec, prefix",
    [
        (SupportedCodecs.ed25519_pub, b"\xed\x01"),
        (SupportedCodecs.x25519_pub, b"\xec\x01"),
        (SupportedCodecs.secp256k1_pub, b"\xe7\x01"),
        (SupportedCodecs.p256_pub, b"\x80\x24"),
        (SupportedCodecs.p384_pub, b"\x81\x24"),
        (SupportedCodecs.p521_pub, b"\x82\x24"),
        (SupportedCodecs.rsa_pub, b"\x85\x24"),
        (SupportedCodecs.jwk_jcs_pub, b"\xd1\xd6\x03"),
    ],
)
def test_wrap_unwrap(codec, prefix):
    value = b"Hello World!"
    wrapped = multicodec.wrap(codec.value, value)
    assert wrapped == prefix + value
    unwrapped_codec, unwrapped = multicodec.unwrap(wrapped)
    assert unwrapped_codec == codec.value
    assert unwrapped == value


def test_unwrap_non_minimal_varint():
    codec, unwrapped = multicodec.unwrap(b"\xed\x81\x00" + b"key")
    assert codec == SupportedCodecs.ed25519_pub.value
    assert unwrapped == b"key"


def test_read_varint():
    assert multicodec.read_varint(b"\x00rest") == (0, 1)
    assert multicodec.read_varint(b"\x7f") == (0x7F, 1)
    assert multicodec.read_varint(b"\xed\x01\xff") == (0xED, 2)
    assert multicodec.read_varint(b"\xd1\xd6\x03") == (0xEB51, 3)


def test_read_varint_x_truncated():
    with pytest.raises(ValueError, match="end of bytes"):
        multicodec.read_varint(b"")
    with pytest.raises(ValueError, match="end of bytes"):
        multicodec.read_varint(b"\xff\xff")


def test_read_varint_x_too_long():
    with pytest.raises(ValueError, match="too long"):
        multicodec.read_varint(b"\xff" * 10)


def test_unwrap_x_unsupported():
    with pytest.raises(ValueError, match="0x0"):
        multicodec.unwrap(b"\x00" * 17)


def test_wrap_x_invalid_codec():
    with pytest.raises(TypeError):
        multicodec.wrap(123, b"data")
    with pytest.raises(TypeError):
        multicodec.wrap("ed25519-pub", b"data")
