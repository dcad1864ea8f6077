"""DID Document model.

Documents are built either by method resolvers from decoded key material or
from loosely typed JSON fetched over the network. Unrecognized top level
properties are kept in `extra` so that a document serializes back to what was
loaded.

See https://www.w3.org/TR/did-core/#did-document-properties
"""

import json
import re
from typing import Any, List, Mapping, NamedTuple, Optional, Sequence, Union

DID_V1_CONTEXT_URL = "https://www.w3.org/ns/did/v1"

VERIFICATION_RELATIONSHIPS = (
    "authentication",
    "assertion_method",
    "key_agreement",
    "capability_invocation",
    "capability_delegation",
)

# internal field name -> serialized property name
PROPERTY_NAMES = {
    "also_known_as": "alsoKnownAs",
    "controller": "controller",
    "verification_method": "verificationMethod",
    "authentication": "authentication",
    "assertion_method": "assertionMethod",
    "key_agreement": "keyAgreement",
    "capability_invocation": "capabilityInvocation",
    "capability_delegation": "capabilityDelegation",
    "service": "service",
}

# verification method member -> public key format, in lookup order
PUBLIC_KEY_FORMATS = (
    ("publicKeyJwk", "jwk"),
    ("publicKeyMultibase", "multibase"),
    ("publicKeyBase58", "base58"),
    ("publicKeyHex", "hex"),
    ("publicKeyPem", "pem"),
)

VerificationMethodRef = Union[str, Mapping[str, Any]]


def underscore(name: str) -> str:
    """Convert a camelCase property name to snake_case."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def _as_list(value) -> list:
    """Wrap a lone string or object in a list."""
    if not value:
        return []
    if isinstance(value, (str, Mapping)):
        return [value]
    return list(value)


class PublicKeyInfo(NamedTuple):
    """Public key material extracted from a verification method."""

    id: Optional[str]
    type: Optional[str]
    controller: Optional[str]
    format: str
    value: Any


class DIDDocument:
    """A resolved DID Document."""

    def __init__(
        self,
        id: str,
        context: Optional[Union[str, Sequence[Any]]] = None,
        also_known_as: Optional[Sequence[str]] = None,
        controller: Optional[Union[str, Sequence[str]]] = None,
        verification_method: Optional[Sequence[Mapping[str, Any]]] = None,
        authentication: Optional[Sequence[VerificationMethodRef]] = None,
        assertion_method: Optional[Sequence[VerificationMethodRef]] = None,
        key_agreement: Optional[Sequence[VerificationMethodRef]] = None,
        capability_invocation: Optional[Sequence[VerificationMethodRef]] = None,
        capability_delegation: Optional[Sequence[VerificationMethodRef]] = None,
        service: Optional[Sequence[Mapping[str, Any]]] = None,
        extra: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize the document; list properties default to empty lists."""
        self.id = id
        self.context = context or [DID_V1_CONTEXT_URL]
        self.also_known_as = _as_list(also_known_as)
        self.controller = controller
        self.verification_method = _as_list(verification_method)
        self.authentication = _as_list(authentication)
        self.assertion_method = _as_list(assertion_method)
        self.key_agreement = _as_list(key_agreement)
        self.capability_invocation = _as_list(capability_invocation)
        self.capability_delegation = _as_list(capability_delegation)
        self.service = _as_list(service)
        self.extra = dict(extra or {})

    def find_verification_method(self, id_or_ref: str) -> Optional[Mapping[str, Any]]:
        """Find a verification method by absolute id or '#fragment' reference.

        Ids of other documents are not dereferenced; they are simply not found.
        """
        target = f"{self.id}{id_or_ref}" if id_or_ref.startswith("#") else id_or_ref
        for method in self.verification_method:
            if isinstance(method, Mapping) and method.get("id") == target:
                return method
        return None

    def verification_methods_for(self, purpose: str) -> List[Mapping[str, Any]]:
        """Get the verification methods authorized for a relationship.

        `purpose` is a relationship name in snake_case or camelCase, such as
        `assertion_method` or `assertionMethod`. String references are looked
        up in `verification_method`; embedded methods are returned as they are. Entries of any
        other type are skipped.
        """
        name = underscore(purpose)
        if name not in VERIFICATION_RELATIONSHIPS:
            raise ValueError(f"Unknown verification relationship: {purpose}")

        methods = []
        for ref in getattr(self, name):
            if isinstance(ref, str):
                method = self.find_verification_method(ref)
            elif isinstance(ref, Mapping):
                method = ref
            else:
                continue
            if method is not None:
                methods.append(method)
        return methods

    def public_key_for(self, method_id: str) -> Optional[PublicKeyInfo]:
        """Extract the public key of a verification method."""
        method = self.find_verification_method(method_id)
        return self._extract_public_key(method) if method else None

    def first_public_key_for(self, purpose: str) -> Optional[PublicKeyInfo]:
        """Extract the public key of the first method authorized for a purpose."""
        methods = self.verification_methods_for(purpose)
        return self._extract_public_key(methods[0]) if methods else None

    @staticmethod
    def _extract_public_key(method: Mapping[str, Any]) -> Optional[PublicKeyInfo]:
        for member, key_format in PUBLIC_KEY_FORMATS:
            if method.get(member):
                return PublicKeyInfo(
                    method.get("id"),
                    method.get("type"),
                    method.get("controller"),
                    key_format,
                    method[member],
                )
        return None

    def serialize(self) -> dict:
        """Return the JSON-LD representation, omitting empty properties."""
        result = {"@context": self.context, "id": self.id}
        for field, name in PROPERTY_NAMES.items():
            value = getattr(self, field)
            if value:
                result[name] = value
        result.update(self.extra)
        return result

    def to_json(self) -> str:
        """Serialize the document to JSON text."""
        return json.dumps(self.serialize())

    @classmethod
    def deserialize(cls, data: Mapping[str, Any]) -> "DIDDocument":
        """Build a document from loosely typed input.

        Property names may use any casing; `@context` and `context` both bind
        to `context`. Unrecognized properties are kept verbatim in `extra`.
        Verification methods get string member keys and are otherwise left
        as they are.
        """
        if not isinstance(data, Mapping):
            raise TypeError("DID Document must be a JSON object")

        values = {}
        extra = {}
        for key, value in data.items():
            key = str(key)
            name = "context" if key in ("@context", "context") else underscore(key)
            if name == "id" or name == "context" or name in PROPERTY_NAMES:
                values[name] = value
            else:
                extra[key] = value

        values["verification_method"] = cls._normalize_verification_methods(
            values.get("verification_method")
        )
        document_id = values.pop("id", None)
        return cls(document_id, extra=extra, **values)

    @staticmethod
    def _normalize_verification_methods(methods) -> list:
        if not methods:
            return []
        if isinstance(methods, Mapping):
            methods = [methods]
        return [
            {str(key): value for key, value in method.items()}
            if isinstance(method, Mapping)
            else method
            for method in methods
        ]

    def __eq__(self, other):
        """Test equality of serialized forms."""
        if not isinstance(other, DIDDocument):
            return False
        return self.serialize() == other.serialize()

    def __repr__(self):
        """Return debug representation."""
        return "<DIDDocument {}>".format(self.id)
