"""Test DID and DID URL parsing."""

import pytest

from ..did import InvalidDIDError, ParsedDID, parse_params

TEST_DIDS = [
    "did:web:example.com",
    "did:web:example.com:users:alice",
    "did:web:localhost%3A8080",
    "did:key:z6MkhaXgBZDvotDkL5257faiztiGiC2QtKLGpbnnEGta2doK",
    "did:jwk:eyJrdHkiOiJPS1AiLCJjcnYiOiJYMjU1MTkifQ",
    "did:ethr:mainnet:0xb9c5714089478a327f09197987f16f9e5d936e8a",
]

INVALID_DIDS = [
    "",
    "   ",
    "not-a-did",
    "did:",
    "did:web",
    "did:web:",
    "did::123",
    "did:we-b:example.com",
    "urn:uuid:123",
]


@pytest.mark.parametrize("did", TEST_DIDS)
def test_parse_reconstructs_did(did):
    parsed = ParsedDID.parse(did)
    assert f"did:{parsed.method}:{parsed.id}" == did
    assert parsed.did == did
    assert parsed.did_url == did
    assert parsed.path is None
    assert parsed.query is None
    assert parsed.fragment is None
    assert parsed.params == {}


@pytest.mark.parametrize("value", INVALID_DIDS)
def test_parse_x_invalid(value):
    with pytest.raises(InvalidDIDError):
        ParsedDID.parse(value)


def test_parse_x_none():
    with pytest.raises(InvalidDIDError) as excinfo:
        ParsedDID.parse(None)
    assert "None" in excinfo.value.message


def test_parse_x_not_str():
    with pytest.raises(InvalidDIDError):
        ParsedDID.parse(b"did:web:example.com")


def test_method_lowercased():
    parsed = ParsedDID.parse("did:WEB:Example.com")
    assert parsed.method == "web"
    assert parsed.id == "Example.com"
    assert parsed.did == "did:web:Example.com"


def test_parse_strips_whitespace():
    assert ParsedDID.parse("  did:key:z6Mk  ").did == "did:key:z6Mk"


def test_parse_did_url():
    parsed = ParsedDID.parse(
        "did:example:123/some/path?service=agent&relativeRef=/x&no-cache#key-1"
    )
    assert parsed.did == "did:example:123"
    assert parsed.method == "example"
    assert parsed.id == "123"
    assert parsed.path == "/some/path"
    assert parsed.query == "?service=agent&relativeRef=/x&no-cache"
    assert parsed.fragment == "#key-1"
    assert parsed.params == {
        "service": "agent",
        "relativeRef": "/x",
        "no-cache": None,
    }
    assert str(parsed) == (
        "did:example:123/some/path?service=agent&relativeRef=/x&no-cache#key-1"
    )


def test_parse_fragment_only():
    parsed = ParsedDID.parse("did:example:123#key-1")
    assert parsed.fragment == "#key-1"
    assert parsed.path is None
    assert parsed.did_url == "did:example:123#key-1"


def test_params_read_only():
    parsed = ParsedDID.parse("did:example:123?a=1")
    with pytest.raises(TypeError):
        parsed.params["b"] = "2"


def test_parse_params():
    assert parse_params(None) == {}
    assert parse_params("") == {}
    assert parse_params("?a=1&&b=x=y&c") == {"a": "1", "b": "x=y", "c": None}


def test_serialize():
    parsed = ParsedDID.parse("did:example:123?versionId=1#frag")
    assert parsed.serialize() == {
        "did": "did:example:123",
        "method": "example",
        "id": "123",
        "query": "?versionId=1",
        "fragment": "#frag",
        "params": {"versionId": "1"},
    }


def test_equality():
    assert ParsedDID.parse("did:EXAMPLE:123") == ParsedDID.parse("did:example:123")
    assert ParsedDID.parse("did:example:123") != ParsedDID.parse("did:example:123#a")
    assert ParsedDID.parse("did:example:123") != "did:example:123"
    assert len({ParsedDID.parse("did:example:1"), ParsedDID.parse("did:example:1")}) == 1
