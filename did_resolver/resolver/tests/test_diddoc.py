"""Test DID Document model."""

import json

import pytest

from ..diddoc import DID_V1_CONTEXT_URL, DIDDocument, PublicKeyInfo, underscore
from . import DOC


@pytest.fixture
def doc():
    yield DIDDocument.deserialize(DOC)


def test_underscore():
    assert underscore("verificationMethod") == "verification_method"
    assert underscore("alsoKnownAs") == "also_known_as"
    assert underscore("DIDCommService") == "did_comm_service"
    assert underscore("assertion_method") == "assertion_method"


def test_deserialize(doc):
    assert doc.id == "did:example:1234abcd"
    assert doc.context == "https://www.w3.org/ns/did/v1"
    assert len(doc.verification_method) == 3
    assert len(doc.authentication) == 2
    assert doc.key_agreement == ["did:example:1234abcd#6"]
    assert len(doc.service) == 1
    assert doc.extra == {}


def test_serialize_round_trip(doc):
    assert doc.serialize() == DOC
    assert json.loads(doc.to_json()) == DOC


def test_deserialize_tolerant_casing():
    doc = DIDDocument.deserialize(
        {
            "context": ["https://www.w3.org/ns/did/v1"],
            "id": "did:example:123",
            "verification_method": {
                "id": "did:example:123#key-1",
                "type": "JsonWebKey2020",
            },
            "AssertionMethod": "did:example:123#key-1",
            "alsoKnownAs": "https://example.com/alice",
        }
    )
    assert doc.context == ["https://www.w3.org/ns/did/v1"]
    assert doc.verification_method == [
        {"id": "did:example:123#key-1", "type": "JsonWebKey2020"}
    ]
    assert doc.assertion_method == ["did:example:123#key-1"]
    assert doc.also_known_as == ["https://example.com/alice"]


def test_deserialize_extra_properties():
    data = {
        "@context": DID_V1_CONTEXT_URL,
        "id": "did:example:123",
        "created": "2024-01-01T00:00:00Z",
        "customProperty": {"nested": [1, 2]},
    }
    doc = DIDDocument.deserialize(data)
    assert doc.extra == {
        "created": "2024-01-01T00:00:00Z",
        "customProperty": {"nested": [1, 2]},
    }
    assert doc.serialize() == data


def test_deserialize_missing_id():
    doc = DIDDocument.deserialize({"verificationMethod": []})
    assert doc.id is None


def test_deserialize_x_not_mapping():
    with pytest.raises(TypeError):
        DIDDocument.deserialize(["did:example:123"])


def test_defaults():
    doc = DIDDocument("did:example:123")
    assert doc.context == [DID_V1_CONTEXT_URL]
    assert doc.authentication == []
    assert doc.serialize() == {
        "@context": [DID_V1_CONTEXT_URL],
        "id": "did:example:123",
    }


def test_find_verification_method(doc):
    assert doc.find_verification_method("#4")["type"] == "RsaVerificationKey2018"
    assert doc.find_verification_method("did:example:1234abcd#5")
    assert doc.find_verification_method("#missing") is None
    assert doc.find_verification_method("did:other:1#4") is None


def test_verification_methods_for(doc):
    authn = doc.verification_methods_for("authentication")
    assert [method["id"] for method in authn] == [
        "did:example:1234abcd#ted",
        "did:example:1234abcd#5",
    ]
    assert [m["id"] for m in doc.verification_methods_for("assertionMethod")] == [
        "did:example:1234abcd#5"
    ]
    assert doc.verification_methods_for("capability_invocation") == []


def test_verification_methods_for_skips_malformed_entries():
    doc = DIDDocument("did:example:1", authentication=[5, None, "#missing"])
    assert doc.verification_methods_for("authentication") == []
    assert doc.first_public_key_for("authentication") is None


def test_verification_methods_for_x_unknown(doc):
    with pytest.raises(ValueError):
        doc.verification_methods_for("signing")


def test_public_key_for(doc):
    info = doc.public_key_for("#6")
    assert info == PublicKeyInfo(
        "did:example:1234abcd#6",
        "JsonWebKey2020",
        "did:example:1234abcd",
        "jwk",
        DOC["verificationMethod"][2]["publicKeyJwk"],
    )
    assert doc.public_key_for("#4").format == "pem"
    assert doc.public_key_for("#nope") is None


def test_first_public_key_for(doc):
    info = doc.first_public_key_for("authentication")
    assert info.id == "did:example:1234abcd#ted"
    assert info.format == "multibase"
    assert doc.first_public_key_for("capabilityDelegation") is None


def test_equality(doc):
    assert doc == DIDDocument.deserialize(DOC)
    assert doc != DIDDocument("did:example:1234abcd")
    assert doc != DOC
