"""Base Class for DID Resolvers."""

import logging
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional

from ..core.error import BaseError
from .did import ParsedDID
from .diddoc import DIDDocument

if TYPE_CHECKING:
    from .did_resolver import DIDResolver

LOGGER = logging.getLogger(__name__)

DID_LD_JSON = "application/did+ld+json"


class ResolverError(BaseError):
    """Base class for resolver exceptions."""

    code = "internalError"


class InvalidDID(ResolverError):
    """Raised when a DID or its encoded key material is malformed."""

    code = "invalidDid"


class DIDNotFound(ResolverError):
    """Raised when DID is not found in verifiable data registry."""

    code = "notFound"


class DIDMethodNotSupported(ResolverError):
    """Raised when no resolver is registered for a given did method."""

    code = "methodNotSupported"


class ResolverNetworkError(ResolverError):
    """Raised when the verifiable data registry cannot be reached."""

    code = "networkError"


class InvalidDIDDocument(ResolverError):
    """Raised when a retrieved document fails validation."""

    code = "invalidDidDocument"


class ResolutionResult:
    """Resolution Class to pack the DID Doc and the resolution information."""

    def __init__(
        self,
        did_document: Optional[DIDDocument] = None,
        did_resolution_metadata: Optional[Mapping[str, Any]] = None,
        did_document_metadata: Optional[Mapping[str, Any]] = None,
    ):
        """Initialize Resolution.

        Args:
            did_document: DID Document resolved, if any
            did_resolution_metadata: contentType on success, error and
                errorMessage on failure
            did_document_metadata: method specific document metadata
        """
        self._did_document = did_document
        self._did_resolution_metadata = MappingProxyType(
            dict(did_resolution_metadata or {})
        )
        self._did_document_metadata = MappingProxyType(
            dict(did_document_metadata or {})
        )

    @property
    def did_document(self) -> Optional[DIDDocument]:
        """Accessor for the resolved document."""
        return self._did_document

    @property
    def did_resolution_metadata(self) -> Mapping[str, Any]:
        """Accessor for the resolution metadata."""
        return self._did_resolution_metadata

    @property
    def did_document_metadata(self) -> Mapping[str, Any]:
        """Accessor for the document metadata."""
        return self._did_document_metadata

    @property
    def is_error(self) -> bool:
        """Check whether resolution failed."""
        return bool(self._did_resolution_metadata.get("error"))

    @property
    def error(self) -> Optional[str]:
        """Accessor for the error code."""
        return self._did_resolution_metadata.get("error")

    @property
    def error_message(self) -> Optional[str]:
        """Accessor for the error message."""
        return self._did_resolution_metadata.get("errorMessage")

    @property
    def content_type(self) -> str:
        """Accessor for the content type of the document."""
        return self._did_resolution_metadata.get("contentType") or DID_LD_JSON

    def serialize(self) -> dict:
        """Return serialized resolution result."""
        return {
            "didResolutionMetadata": dict(self._did_resolution_metadata),
            "didDocument": (
                self._did_document.serialize() if self._did_document else None
            ),
            "didDocumentMetadata": dict(self._did_document_metadata),
        }

    @classmethod
    def success(
        cls,
        did_document: DIDDocument,
        metadata: Optional[Mapping[str, Any]] = None,
        document_metadata: Optional[Mapping[str, Any]] = None,
    ) -> "ResolutionResult":
        """Create a successful result."""
        return cls(
            did_document,
            {"contentType": DID_LD_JSON, **(metadata or {})},
            document_metadata,
        )

    @classmethod
    def from_error(cls, code: str, message: Optional[str] = None) -> "ResolutionResult":
        """Create an error result."""
        metadata = {"error": code}
        if message:
            metadata["errorMessage"] = message
        return cls(did_resolution_metadata=metadata)

    @classmethod
    def from_exception(cls, error: ResolverError) -> "ResolutionResult":
        """Create an error result from a resolver exception."""
        return cls.from_error(error.code, error.roll_up)

    @classmethod
    def not_found(cls, did: str) -> "ResolutionResult":
        """Create a notFound result."""
        return cls.from_error(DIDNotFound.code, f"DID not found: {did}")

    @classmethod
    def method_not_supported(cls, method: str) -> "ResolutionResult":
        """Create a methodNotSupported result."""
        return cls.from_error(
            DIDMethodNotSupported.code, f"DID method not supported: {method}"
        )

    @classmethod
    def invalid_did(cls, did: str, reason: Optional[str] = None) -> "ResolutionResult":
        """Create an invalidDid result."""
        return cls.from_error(InvalidDID.code, reason or f"Invalid DID format: {did}")

    def __eq__(self, other):
        """Test equality of serialized forms."""
        if not isinstance(other, ResolutionResult):
            return False
        return self.serialize() == other.serialize()

    def __repr__(self):
        """Return debug representation."""
        if self.is_error:
            return "<ResolutionResult error={}>".format(self.error)
        return "<ResolutionResult document={!r}>".format(self._did_document)


class BaseDIDResolver(ABC):
    """Base Class for DID method resolvers.

    Each subclass resolves one DID method, named by `method`. Subclasses
    implement `_resolve` and may raise any `ResolverError`; `resolve` turns
    those into error results.
    """

    method: str = None

    async def resolve(
        self,
        did: str,
        parsed: ParsedDID,
        resolver: "DIDResolver",
        options: Optional[Mapping[str, Any]] = None,
    ) -> ResolutionResult:
        """Resolve a DID using this resolver.

        Args:
            did: the base DID
            parsed: the parsed DID URL being resolved
            resolver: the calling resolver, for resolving related DIDs
            options: resolution options such as `timeout`
        """
        try:
            return await self._resolve(did, parsed, resolver, options or {})
        except ResolverError as err:
            LOGGER.debug("Resolution of %s failed: %s", did, err.roll_up)
            return ResolutionResult.from_exception(err)

    @abstractmethod
    async def _resolve(
        self,
        did: str,
        parsed: ParsedDID,
        resolver: "DIDResolver",
        options: Mapping[str, Any],
    ) -> ResolutionResult:
        """Resolve a DID using this resolver."""

    def __repr__(self) -> str:
        """Human readable representation of this instance."""
        return "<{} method={}>".format(self.__class__.__name__, self.method)
