"""DID Key class and document construction.

A did:key carries its public key in the identifier: a multibase (base58btc)
string over a multicodec prefixed key. See
https://w3c-ccg.github.io/did-method-key/
"""

import json
from typing import Callable, Dict, Mapping, Tuple

from ecdsa import NIST256p, NIST384p, NIST521p, SECP256k1, VerifyingKey

from ..resolver.diddoc import DID_V1_CONTEXT_URL, DIDDocument
from ..utils.encoding import b64url
from ..utils.jwk import is_canonical_jwk
from ..utils.multiformats import multibase, multicodec
from ..utils.multiformats.multicodec import Multicodec, SupportedCodecs

ED25519_2020_CONTEXT_URL = "https://w3id.org/security/suites/ed25519-2020/v1"
X25519_2020_CONTEXT_URL = "https://w3id.org/security/suites/x25519-2020/v1"
SECP256K1_2019_CONTEXT_URL = "https://w3id.org/security/suites/secp256k1-2019/v1"
JWS_2020_CONTEXT_URL = "https://w3id.org/security/suites/jws-2020/v1"

RSA_PUBLIC_EXPONENT = b"\x01\x00\x01"

# multicodec -> (JWK crv, ecdsa curve)
EC_CURVES = {
    SupportedCodecs.secp256k1_pub.value: ("secp256k1", SECP256k1),
    SupportedCodecs.p256_pub.value: ("P-256", NIST256p),
    SupportedCodecs.p384_pub.value: ("P-384", NIST384p),
    SupportedCodecs.p521_pub.value: ("P-521", NIST521p),
}


class DIDKey:
    """DID Key parser and resolver."""

    _codec: Multicodec
    _public_key: bytes
    _fingerprint: str

    def __init__(self, fingerprint: str, public_key: bytes, codec: Multicodec) -> None:
        """Initialize new DIDKey instance.

        The fingerprint is kept as given, since a multicodec prefix may use a
        longer varint than needed and re-encoding would name another DID.
        """
        self._fingerprint = fingerprint
        self._public_key = public_key
        self._codec = codec

    @classmethod
    def from_fingerprint(cls, fingerprint: str) -> "DIDKey":
        """Initialize new DIDKey instance from multibase encoded fingerprint.

        The fingerprint contains both the public key and key type.

        Raises:
            ValueError: the fingerprint is not base58btc, or its multicodec
                prefix is malformed or unsupported

        """
        if not fingerprint.startswith("z"):
            raise ValueError("Unsupported multibase encoding. Expected 'z' (base58btc)")

        codec, public_key = multicodec.unwrap(multibase.decode(fingerprint))
        return cls(fingerprint, public_key, codec)

    @classmethod
    def from_did(cls, did: str) -> "DIDKey":
        """Initialize a new DIDKey instance from a fully qualified did:key string.

        Extracts the fingerprint from the did:key and uses that to construct the
        did:key.
        """
        did = did.split("#")[0]
        if not did.startswith("did:key:"):
            raise ValueError(f"Not a did:key: {did}")
        return cls.from_fingerprint(did[len("did:key:") :])

    @property
    def fingerprint(self) -> str:
        """Getter for did key fingerprint."""
        return self._fingerprint

    @property
    def did(self) -> str:
        """Getter for full did:key string."""
        return f"did:key:{self.fingerprint}"

    @property
    def did_doc(self) -> DIDDocument:
        """Getter for did document associated with did:key."""
        builder = DID_KEY_BUILDERS[self._codec]
        return builder(self)

    @property
    def public_key(self) -> bytes:
        """Getter for public key."""
        return self._public_key

    @property
    def codec(self) -> Multicodec:
        """Getter for the key multicodec."""
        return self._codec

    @property
    def key_id(self) -> str:
        """Getter for key id."""
        return f"{self.did}#{self.fingerprint}"


def ec_point(public_key: bytes, codec: Multicodec) -> Tuple[str, bytes, bytes]:
    """Return the curve name and the X and Y coordinates of an EC public key.

    Compressed points are decompressed; a point not on the curve raises.
    """
    crv, curve = EC_CURVES[codec]
    point = VerifyingKey.from_string(public_key, curve=curve).to_string("uncompressed")
    size = (len(point) - 1) // 2
    return crv, point[1 : 1 + size], point[1 + size :]


def _check_length(did_key: DIDKey, length: int):
    if len(did_key.public_key) != length:
        raise ValueError(
            f"Invalid {did_key.codec.name} key length: {len(did_key.public_key)}"
        )


def construct_did_key_ed25519(did_key: DIDKey) -> DIDDocument:
    """Construct Ed25519 did:key.

    Args:
        did_key (DIDKey): did key instance to parse ed25519 did:key document from

    Returns:
        DIDDocument: The ed25519 did:key did document

    """
    _check_length(did_key, 32)
    return construct_did_signature_key_base(
        id=did_key.did,
        key_id=did_key.key_id,
        context=[DID_V1_CONTEXT_URL, ED25519_2020_CONTEXT_URL],
        verification_method={
            "id": did_key.key_id,
            "type": "Ed25519VerificationKey2020",
            "controller": did_key.did,
            # full varint prefix, i.e. the method specific id itself
            "publicKeyMultibase": did_key.fingerprint,
        },
    )


def construct_did_key_x25519(did_key: DIDKey) -> DIDDocument:
    """Construct X25519 did:key.

    Args:
        did_key (DIDKey): did key instance to parse x25519 did:key document from

    Returns:
        DIDDocument: The x25519 did:key did document

    """
    _check_length(did_key, 32)
    return DIDDocument(
        id=did_key.did,
        context=[DID_V1_CONTEXT_URL, X25519_2020_CONTEXT_URL],
        verification_method=[
            {
                "id": did_key.key_id,
                "type": "X25519KeyAgreementKey2020",
                "controller": did_key.did,
                # full varint prefix, i.e. the method specific id itself
                "publicKeyMultibase": did_key.fingerprint,
            },
        ],
        key_agreement=[did_key.key_id],
    )


def construct_did_key_ec(did_key: DIDKey) -> DIDDocument:
    """Construct secp256k1, P-256, P-384 or P-521 did:key.

    The key is published as a JWK; secp256k1 keys keep their dedicated
    verification method type.
    """
    crv, x, y = ec_point(did_key.public_key, did_key.codec)
    if did_key.codec == SupportedCodecs.secp256k1_pub.value:
        vm_type = "EcdsaSecp256k1VerificationKey2019"
        suite = SECP256K1_2019_CONTEXT_URL
    else:
        vm_type = "JsonWebKey2020"
        suite = JWS_2020_CONTEXT_URL

    return construct_did_signature_key_base(
        id=did_key.did,
        key_id=did_key.key_id,
        context=[DID_V1_CONTEXT_URL, suite],
        verification_method={
            "id": did_key.key_id,
            "type": vm_type,
            "controller": did_key.did,
            "publicKeyJwk": {"kty": "EC", "crv": crv, "x": b64url(x), "y": b64url(y)},
        },
    )


def construct_did_key_rsa(did_key: DIDKey) -> DIDDocument:
    """Construct RSA did:key, using the key bytes as the modulus."""
    if not did_key.public_key:
        raise ValueError("Empty RSA key")
    return construct_did_signature_key_base(
        id=did_key.did,
        key_id=did_key.key_id,
        context=[DID_V1_CONTEXT_URL, JWS_2020_CONTEXT_URL],
        verification_method={
            "id": did_key.key_id,
            "type": "JsonWebKey2020",
            "controller": did_key.did,
            "publicKeyJwk": {
                "kty": "RSA",
                "n": b64url(did_key.public_key),
                "e": b64url(RSA_PUBLIC_EXPONENT),
            },
        },
    )


def construct_did_key_jwk_jcs(did_key: DIDKey) -> DIDDocument:
    """Construct a did:key embedding a JCS canonical JWK (jwk_jcs-pub).

    The key bytes are the UTF-8 JSON of the JWK, which must hold exactly its
    required members in lexicographic order.
    """
    try:
        jwk = json.loads(did_key.public_key.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise ValueError(f"Invalid JWK JSON in did:key: {err}") from err
    if not isinstance(jwk, Mapping):
        raise ValueError("Invalid JWK JSON in did:key: not an object")
    if not jwk.get("kty"):
        raise ValueError("JWK missing required 'kty' parameter")
    if not is_canonical_jwk(jwk):
        raise ValueError(
            "The JWK embedded in the DID is not correctly formatted "
            "(must be JCS canonical)"
        )

    return construct_did_signature_key_base(
        id=did_key.did,
        key_id=did_key.key_id,
        context=[DID_V1_CONTEXT_URL, JWS_2020_CONTEXT_URL],
        verification_method={
            "id": did_key.key_id,
            "type": "JsonWebKey2020",
            "controller": did_key.did,
            "publicKeyJwk": jwk,
        },
    )


def construct_did_signature_key_base(
    *, id: str, key_id: str, context: list, verification_method: dict
) -> DIDDocument:
    """Create base did key structure to use for signature keys."""
    return DIDDocument(
        id=id,
        context=context,
        verification_method=[verification_method],
        authentication=[key_id],
        assertion_method=[key_id],
        capability_invocation=[key_id],
        capability_delegation=[key_id],
    )


DID_KEY_BUILDERS: Dict[Multicodec, Callable[[DIDKey], DIDDocument]] = {
    SupportedCodecs.ed25519_pub.value: construct_did_key_ed25519,
    SupportedCodecs.x25519_pub.value: construct_did_key_x25519,
    SupportedCodecs.secp256k1_pub.value: construct_did_key_ec,
    SupportedCodecs.p256_pub.value: construct_did_key_ec,
    SupportedCodecs.p384_pub.value: construct_did_key_ec,
    SupportedCodecs.p521_pub.value: construct_did_key_ec,
    SupportedCodecs.rsa_pub.value: construct_did_key_rsa,
    SupportedCodecs.jwk_jcs_pub.value: construct_did_key_jwk_jcs,
}
