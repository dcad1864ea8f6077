"""Web DID Resolver."""

import json
import logging
from typing import Any, Mapping, Optional

from ...utils.http import DEFAULT_TIMEOUT, AiohttpTransport, BaseHTTPTransport, FetchError
from ...version import __version__
from ..base import (
    BaseDIDResolver,
    DIDNotFound,
    InvalidDIDDocument,
    ResolutionResult,
    ResolverNetworkError,
)
from ..did import ParsedDID
from ..diddoc import DIDDocument

LOGGER = logging.getLogger(__name__)

ACCEPT = "application/did+ld+json, application/json"
USER_AGENT = f"did_resolver/{__version__}"

DOCUMENT_METADATA_KEYS = ("created", "updated")


def build_url(method_specific_id: str) -> str:
    """Transform a did:web method specific id to the URL of its document.

    According to https://w3c-ccg.github.io/did-method-web/#read-resolve
    colons separate path segments, and a percent encoded colon carries a
    port number.
    """
    segments = [
        segment.replace("%3A", ":").replace("%3a", ":")
        for segment in method_specific_id.split(":")
    ]
    authority, path = segments[0], segments[1:]
    if path:
        return "https://{}/{}/did.json".format(authority, "/".join(path))
    return f"https://{authority}/.well-known/did.json"


class WebDIDResolver(BaseDIDResolver):
    """Web DID Resolver."""

    method = "web"

    def __init__(
        self,
        transport: Optional[BaseHTTPTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize Web DID Resolver.

        Args:
            transport: HTTP transport, defaults to a new `AiohttpTransport`
            timeout: fetch timeout in seconds when the caller sets none
        """
        self.transport = transport or AiohttpTransport()
        self.timeout = timeout

    async def _resolve(
        self,
        did: str,
        parsed: ParsedDID,
        resolver,
        options: Mapping[str, Any],
    ) -> ResolutionResult:
        """Resolve did:web DIDs."""
        url = build_url(parsed.id)
        timeout = options.get("timeout") or self.timeout
        try:
            response = await self.transport.fetch(
                url,
                headers={"Accept": ACCEPT, "User-Agent": USER_AGENT},
                timeout=timeout,
            )
        except FetchError as err:
            raise ResolverNetworkError(f"Could not fetch {url}") from err

        if response.status == 404:
            raise DIDNotFound(f"No document found for {did}")
        if not response.ok:
            raise ResolverNetworkError(f"HTTP {response.status}: {response.reason}")

        try:
            data = json.loads(response.body)
        except json.JSONDecodeError as err:
            raise InvalidDIDDocument("Response was incorrectly formatted") from err
        if not isinstance(data, dict):
            raise InvalidDIDDocument("DID Document must be a JSON object")

        if data.get("id") != did:
            raise InvalidDIDDocument(
                "DID Document id '{}' does not match DID '{}'".format(
                    data.get("id"), did
                )
            )

        try:
            document = DIDDocument.deserialize(data)
        except (AttributeError, TypeError, ValueError) as err:
            raise InvalidDIDDocument(f"Could not load document for {did}") from err

        LOGGER.debug("Fetched document for %s from %s", did, url)
        return ResolutionResult.success(
            document, document_metadata=self.document_metadata(data)
        )

    @staticmethod
    def document_metadata(data: Mapping[str, Any]) -> dict:
        """Collect document metadata published in the document itself."""
        metadata = {key: data[key] for key in DOCUMENT_METADATA_KEYS if data.get(key)}
        if "deactivated" in data:
            metadata["deactivated"] = data["deactivated"]
        return metadata
