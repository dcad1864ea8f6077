"""JSON Web Key helpers."""

import json
from typing import Any, Mapping

PRIVATE_KEY_MEMBERS = ("d", "p", "q", "dp", "dq", "qi")

# RFC 7638 required members, in lexicographic order
REQUIRED_MEMBERS = {
    "EC": ("crv", "kty", "x", "y"),
    "OKP": ("crv", "kty", "x"),
    "RSA": ("e", "kty", "n"),
}


def canonical_jwk(jwk: Mapping[str, Any]) -> Mapping[str, Any]:
    """Reduce a JWK to its required members in lexicographic order.

    Key types without a known member set are returned unchanged.
    """
    members = REQUIRED_MEMBERS.get(jwk.get("kty"))
    if not members:
        return jwk
    return {member: jwk.get(member) for member in members}


def is_canonical_jwk(jwk: Mapping[str, Any]) -> bool:
    """Check that a JWK holds exactly its canonical members, in canonical order."""
    return json.dumps(jwk) == json.dumps(canonical_jwk(jwk))


def public_jwk(jwk: Mapping[str, Any]) -> dict:
    """Copy a JWK without its private key members."""
    return {key: value for key, value in jwk.items() if key not in PRIVATE_KEY_MEMBERS}
