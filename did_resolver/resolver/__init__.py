"""Interfaces and base classes for DID Resolution."""

import logging
from importlib import import_module
from typing import Optional, Type

from ..cache.base import BaseCache
from ..cache.in_memory import InMemoryCache
from ..config.base import BaseSettings, SettingsError
from ..config.settings import Settings
from ..utils.http import BaseHTTPTransport
from .base import BaseDIDResolver
from .did_resolver import DIDResolver

LOGGER = logging.getLogger(__name__)

# DID method -> method resolver class path
METHOD_RESOLVERS = {
    "web": "did_resolver.resolver.default.web.WebDIDResolver",
    "key": "did_resolver.resolver.default.key.KeyDIDResolver",
    "jwk": "did_resolver.resolver.default.jwk.JwkDIDResolver",
}


def load_resolver_class(method: str) -> Type[BaseDIDResolver]:
    """Load the built-in resolver class for a DID method."""
    class_path = METHOD_RESOLVERS.get(method)
    if not class_path:
        raise SettingsError(f"No built-in resolver for DID method: {method}")
    mod_path, class_name = class_path.rsplit(".", 1)
    return getattr(import_module(mod_path), class_name)


def build_resolver(
    settings: Optional[BaseSettings] = None,
    *,
    transport: Optional[BaseHTTPTransport] = None,
    cache: Optional[BaseCache] = None,
    logger: Optional[logging.Logger] = None,
) -> DIDResolver:
    """Set up a resolver with the built-in method resolvers.

    Each call returns a new resolver; callers own it and pass it along.

    Args:
        settings: resolver settings, defaults to `Settings.defaults()`
        transport: HTTP transport for did:web, defaults to aiohttp
        cache: cache to use instead of the one `resolver.cache` would create
        logger: logger for unexpected resolution failures
    """
    settings = Settings.defaults().extend(settings or {})

    if cache is None and settings.get_bool("resolver.cache"):
        # 0 or none: entries never expire
        ttl = settings.get_float("resolver.cache_ttl")
        cache = InMemoryCache(ttl or None)

    resolver = DIDResolver(
        cache=cache,
        logger=logger,
        max_depth=settings.get_int("resolver.max_depth"),
    )

    methods = [
        method.strip().lower()
        for method in settings.get_str("resolver.methods", default="").split(",")
        if method.strip()
    ]
    for method in methods:
        resolver_class = load_resolver_class(method)
        if method == "web":
            method_resolver = resolver_class(
                transport=transport,
                timeout=settings.get_float("resolver.web.timeout"),
            )
        else:
            method_resolver = resolver_class()
        resolver.register_resolver(method_resolver)

    LOGGER.debug("Built resolver for methods: %s", ", ".join(methods))
    return resolver
