"""W3C DID and DID URL parsing.

Syntax follows the DID Core recommendation:

    https://www.w3.org/TR/did-core/#did-syntax

    did:<method>:<method-specific-id>[/<path>][?<query>][#<fragment>]

The method-specific id is kept verbatim, including any ':' separated segments;
interpreting those is left to the method resolvers.
"""

import re
from types import MappingProxyType
from typing import Mapping, Optional

from ..core.error import BaseError

DID_URL_PATTERN = re.compile(
    r"did:([a-z0-9]+):([^#?/]+)(/[^#?]*)?(\?[^#]*)?(#.*)?", re.IGNORECASE
)


class DIDError(BaseError):
    """General did error."""


class InvalidDIDError(DIDError):
    """Invalid DID."""


def parse_params(query: Optional[str]) -> Mapping[str, Optional[str]]:
    """Parse DID parameters from a query string.

    Pairs are split on '&', then once on '='. A pair without '=' maps to `None`.
    """
    if not query:
        return {}
    if query.startswith("?"):
        query = query[1:]
    params = {}
    for pair in query.split("&"):
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        params[key] = value if sep else None
    return params


class ParsedDID:
    """Components of a DID or DID URL."""

    __slots__ = ("_did", "_method", "_id", "_path", "_query", "_fragment", "_params")

    def __init__(
        self,
        did: str,
        method: str,
        id: str,
        path: str = None,
        query: str = None,
        fragment: str = None,
        params: Mapping[str, Optional[str]] = None,
    ):
        """Initialize the parsed DID; use `ParsedDID.parse` for untrusted input."""
        self._did = did
        self._method = method
        self._id = id
        self._path = path
        self._query = query
        self._fragment = fragment
        self._params = MappingProxyType(dict(params or {}))

    @property
    def did(self) -> str:
        """Base DID, `did:<method>:<method-specific-id>`."""
        return self._did

    @property
    def method(self) -> str:
        """Lowercase method name."""
        return self._method

    @property
    def id(self) -> str:
        """Method-specific identifier."""
        return self._id

    @property
    def path(self) -> Optional[str]:
        """Path, with its leading '/'."""
        return self._path

    @property
    def query(self) -> Optional[str]:
        """Query, with its leading '?'."""
        return self._query

    @property
    def fragment(self) -> Optional[str]:
        """Fragment, with its leading '#'."""
        return self._fragment

    @property
    def params(self) -> Mapping[str, Optional[str]]:
        """DID parameters parsed from the query."""
        return self._params

    @property
    def did_url(self) -> str:
        """The full DID URL: did, path, query and fragment."""
        return "".join(
            part
            for part in (self._did, self._path, self._query, self._fragment)
            if part
        )

    def serialize(self) -> dict:
        """Return the populated components as a dict."""
        values = {
            "did": self._did,
            "method": self._method,
            "id": self._id,
            "path": self._path,
            "query": self._query,
            "fragment": self._fragment,
            "params": dict(self._params) or None,
        }
        return {key: value for key, value in values.items() if value is not None}

    @classmethod
    def parse(cls, value: str) -> "ParsedDID":
        """Parse a DID or DID URL string.

        Raises:
            InvalidDIDError: the value is missing, empty or not a DID

        """
        if value is None:
            raise InvalidDIDError("DID cannot be None")
        if not isinstance(value, str):
            raise InvalidDIDError(f"DID must be a string, not {type(value).__name__}")
        value = value.strip()
        if not value:
            raise InvalidDIDError("DID cannot be empty")

        matched = DID_URL_PATTERN.fullmatch(value)
        if not matched:
            raise InvalidDIDError(f"Invalid DID format: {value}")

        method = matched.group(1).lower()
        method_specific_id = matched.group(2)
        query = matched.group(4)
        return cls(
            did=f"did:{method}:{method_specific_id}",
            method=method,
            id=method_specific_id,
            path=matched.group(3),
            query=query,
            fragment=matched.group(5),
            params=parse_params(query),
        )

    def __str__(self):
        """Return the DID URL."""
        return self.did_url

    def __repr__(self):
        """Return debug representation."""
        return "<ParsedDID {}>".format(self.did_url)

    def __eq__(self, other):
        """Test equality."""
        if not isinstance(other, ParsedDID):
            return False
        return self.did_url == other.did_url

    def __hash__(self):
        """Hash the DID URL."""
        return hash(self.did_url)
