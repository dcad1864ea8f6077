"""In memory storage for registering did method resolvers."""

import logging
from typing import Iterator, Mapping, Optional

from .base import BaseDIDResolver

LOGGER = logging.getLogger(__name__)


class DIDResolverRegistry(Mapping[str, BaseDIDResolver]):
    """Registry mapping DID method names to method resolvers."""

    def __init__(self):
        """Initialize the mapping of method resolvers."""
        self._resolvers = {}

    def register(self, method: str, resolver: BaseDIDResolver) -> None:
        """Register a resolver for a method, replacing any earlier one."""
        method = str(method).lower()
        if method in self._resolvers:
            LOGGER.debug("Replacing resolver for did:%s with %s", method, resolver)
        else:
            LOGGER.debug("Registering resolver for did:%s: %s", method, resolver)
        self._resolvers[method] = resolver

    def get_resolver(self, method: str) -> Optional[BaseDIDResolver]:
        """Look up the resolver for a method."""
        return self._resolvers.get(method)

    def __getitem__(self, method: str) -> BaseDIDResolver:
        """Fetch the resolver for a method."""
        return self._resolvers[method]

    def __iter__(self) -> Iterator[str]:
        """Iterate registered method names."""
        return iter(self._resolvers)

    def __len__(self) -> int:
        """Count registered methods."""
        return len(self._resolvers)
