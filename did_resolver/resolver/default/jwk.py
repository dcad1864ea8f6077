"""did:jwk: resolver implementation."""

import json
from typing import Any, Mapping

from ...utils.encoding import b64_to_bytes
from ...utils.jwk import public_jwk
from ..base import BaseDIDResolver, InvalidDID, ResolutionResult
from ..did import ParsedDID
from ..diddoc import DID_V1_CONTEXT_URL, DIDDocument

JWS_2020_CONTEXT_URL = "https://w3id.org/security/suites/jws-2020/v1"

KEY_TYPES = {
    "EC": ("crv", "x"),
    "OKP": ("crv", "x"),
    "RSA": ("n", "e"),
}

KEY_AGREEMENT_CURVES = {"X25519", "X448", "P-256", "P-384", "P-521"}
SIGNING_CURVES = {"Ed25519", "Ed448", "P-256", "P-384", "P-521", "secp256k1"}


def decode_jwk(encoded: str) -> dict:
    """Decode and validate the JWK of a did:jwk method specific id."""
    try:
        jwk = json.loads(b64_to_bytes(encoded, urlsafe=True))
    except (ValueError, UnicodeDecodeError) as err:
        raise InvalidDID("Invalid base64url encoded JWK") from err
    if not isinstance(jwk, dict):
        raise InvalidDID("JWK must be a JSON object")

    kty = jwk.get("kty")
    if not kty:
        raise InvalidDID("JWK missing required 'kty' parameter")
    if not isinstance(kty, str) or kty not in KEY_TYPES:
        raise InvalidDID(f"Unsupported JWK kty: {kty}")
    for member in KEY_TYPES[kty]:
        if not jwk.get(member) or not isinstance(jwk[member], str):
            raise InvalidDID(f"{kty} JWK missing required '{member}' parameter")
    if "crv" in jwk and not isinstance(jwk["crv"], str):
        raise InvalidDID("JWK crv must be a string")
    return jwk


class JwkDIDResolver(BaseDIDResolver):
    """did:jwk: resolver implementation."""

    method = "jwk"

    async def _resolve(
        self,
        did: str,
        parsed: ParsedDID,
        resolver,
        options: Mapping[str, Any],
    ) -> ResolutionResult:
        """Resolve a DID."""
        jwk = decode_jwk(parsed.id)
        try:
            document = self.build_document(did, jwk)
        except Exception as err:
            raise InvalidDID("Failed to resolve did:jwk") from err
        return ResolutionResult.success(document)

    @staticmethod
    def build_document(did: str, jwk: Mapping[str, Any]) -> DIDDocument:
        """Build the document of a did:jwk from its validated JWK."""
        key_id = f"{did}#0"

        crv = jwk.get("crv")
        signing = jwk["kty"] == "RSA" or crv in SIGNING_CURVES
        key_agreement = crv in KEY_AGREEMENT_CURVES
        signing_refs = [key_id] if signing else []

        return DIDDocument(
            id=did,
            context=[DID_V1_CONTEXT_URL, JWS_2020_CONTEXT_URL],
            verification_method=[
                {
                    "id": key_id,
                    "type": "JsonWebKey2020",
                    "controller": did,
                    "publicKeyJwk": public_jwk(jwk),
                }
            ],
            authentication=signing_refs,
            assertion_method=signing_refs,
            capability_invocation=signing_refs,
            capability_delegation=signing_refs,
            key_agreement=[key_id] if key_agreement else [],
        )
