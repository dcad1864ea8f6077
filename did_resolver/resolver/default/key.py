"""Key DID Resolver.

Resolution is performed by decoding the key carried in the identifier.
"""

from typing import Any, Mapping

from ...did.did_key import DIDKey
from ..base import BaseDIDResolver, InvalidDID, ResolutionResult
from ..did import ParsedDID


class KeyDIDResolver(BaseDIDResolver):
    """Key DID Resolver."""

    method = "key"

    async def _resolve(
        self,
        did: str,
        parsed: ParsedDID,
        resolver,
        options: Mapping[str, Any],
    ) -> ResolutionResult:
        """Resolve a Key DID."""
        try:
            did_key = DIDKey.from_did(did)
            document = did_key.did_doc
        except Exception as err:
            raise InvalidDID("Failed to resolve did:key") from err

        return ResolutionResult.success(document)
