"""the did resolver.

responsible for keeping track of all method resolvers. more importantly
retrieving did documents from different sources provided by the method type.
"""

import logging
from contextvars import ContextVar
from typing import Any, List, Mapping, Optional

from ..cache.base import BaseCache
from ..utils.http import FetchError
from .base import (
    BaseDIDResolver,
    DIDNotFound,
    ResolutionResult,
    ResolverError,
    ResolverNetworkError,
)
from .did import InvalidDIDError, ParsedDID
from .did_resolver_registry import DIDResolverRegistry

LOGGER = logging.getLogger(__name__)

_resolution_depth: ContextVar[int] = ContextVar("resolution_depth", default=0)


class DIDResolver:
    """DID resolver dispatching to method resolvers by DID method."""

    DEFAULT_MAX_DEPTH = 8

    def __init__(
        self,
        *resolvers: BaseDIDResolver,
        cache: Optional[BaseCache] = None,
        logger: Optional[logging.Logger] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        """Create DID Resolver.

        Args:
            resolvers: method resolvers, registered under their `method` name
            cache: optional cache for document-bearing results
            logger: logger for unexpected failures, defaults to the module logger
            max_depth: how deeply method resolvers may nest `resolve` calls
        """
        self.registry = DIDResolverRegistry()
        self.cache = cache
        self.logger = logger or LOGGER
        self.max_depth = max_depth
        for resolver in resolvers:
            self.register_resolver(resolver)

    def register(self, method: str, resolver: BaseDIDResolver):
        """Register a method resolver; the last registration for a method wins."""
        self.registry.register(method, resolver)

    def register_resolver(self, resolver: BaseDIDResolver):
        """Register a method resolver under its own method name."""
        if not resolver.method:
            raise ValueError(f"{resolver!r} does not declare a DID method")
        self.registry.register(resolver.method, resolver)

    def supports(self, method: str) -> bool:
        """Check if a method has a registered resolver."""
        return str(method).lower() in self.registry

    def supported_methods(self) -> List[str]:
        """List the methods with a registered resolver."""
        return list(self.registry)

    async def resolve(
        self,
        did: str,
        *,
        no_cache: bool = False,
        timeout: Optional[float] = None,
        **options: Any,
    ) -> ResolutionResult:
        """Resolve a DID or DID URL.

        Failures are reported in the result's resolution metadata; this
        method does not raise.

        Args:
            did: the DID or DID URL to resolve
            no_cache: skip the cache lookup (successful results are still stored)
            timeout: network timeout in seconds for methods that fetch documents
            options: further options handed to the method resolver
        """
        depth = _resolution_depth.get()
        if depth >= self.max_depth:
            return ResolutionResult.from_error(
                ResolverError.code,
                f"Maximum resolution depth of {self.max_depth} exceeded: {did}",
            )

        token = _resolution_depth.set(depth + 1)
        try:
            return await self._resolve(did, no_cache, timeout, options)
        except Exception as err:
            self.logger.exception("[DID Resolver] Unexpected error resolving %s", did)
            return ResolutionResult.from_error(ResolverError.code, str(err))
        finally:
            _resolution_depth.reset(token)

    async def _resolve(
        self,
        did: str,
        no_cache: bool,
        timeout: Optional[float],
        options: Mapping[str, Any],
    ) -> ResolutionResult:
        try:
            parsed = ParsedDID.parse(did)
        except InvalidDIDError as err:
            return ResolutionResult.invalid_did(did, err.message)

        use_cache = (
            self.cache is not None and not no_cache and "no-cache" not in parsed.params
        )
        if use_cache:
            cached = await self.cache.get(parsed.did)
            if cached:
                LOGGER.debug("Resolved %s from cache", parsed.did)
                return cached

        method_resolver = self.registry.get_resolver(parsed.method)
        if not method_resolver:
            return ResolutionResult.method_not_supported(parsed.method)

        method_options = dict(options)
        if timeout is not None:
            method_options["timeout"] = timeout

        LOGGER.debug("Resolving DID %s with %s", parsed.did, method_resolver)
        try:
            result = await method_resolver.resolve(
                parsed.did, parsed, self, method_options
            )
        except FetchError as err:
            return ResolutionResult.from_error(ResolverNetworkError.code, err.roll_up)
        except (DIDNotFound, ResolverNetworkError) as err:
            return ResolutionResult.from_exception(err)
        except ResolverError as err:
            self.logger.error("[DID Resolver] Resolution of %s failed: %s", did, err)
            return ResolutionResult.from_exception(err)

        if not isinstance(result, ResolutionResult):
            raise ResolverError(
                f"{method_resolver!r} returned {type(result).__name__}, "
                "expected ResolutionResult"
            )

        if self.cache is not None and not result.is_error and result.did_document:
            await self.cache.set(parsed.did, result)
            LOGGER.debug("Cached resolution result for %s", parsed.did)

        return result

    async def dereference(self, did_url: str, **options: Any) -> Mapping[str, Any]:
        """Dereference a DID URL to the verification method it identifies."""
        try:
            parsed = ParsedDID.parse(did_url)
        except InvalidDIDError as err:
            raise ResolverError(
                "Failed to parse DID URL from {}".format(did_url)
            ) from err
        if not parsed.fragment:
            raise ResolverError(f"DID URL has no fragment: {did_url}")

        result = await self.resolve(did_url, **options)
        if result.is_error or not result.did_document:
            raise ResolverError(
                "Failed to resolve {}: {}".format(
                    parsed.did, result.error_message or result.error
                )
            )

        method = result.did_document.find_verification_method(
            parsed.did + parsed.fragment
        )
        if method is None:
            method = result.did_document.find_verification_method(parsed.fragment)
        if method is None:
            raise ResolverError(
                "Failed to dereference DID URL: {} not found".format(did_url)
            )
        return method
