"""Test did resolver registry."""

from ..did_resolver_registry import DIDResolverRegistry
from .test_did_resolver import MockResolver


def test_create_registry():
    registry = DIDResolverRegistry()
    assert list(registry.values()) == []
    assert len(registry) == 0


def test_register():
    registry = DIDResolverRegistry()
    resolver = MockResolver("example")
    registry.register("Example", resolver)
    assert list(registry.values()) == [resolver]
    assert registry["example"] is resolver
    assert registry.get_resolver("example") is resolver
    assert list(registry) == ["example"]


def test_register_last_wins():
    registry = DIDResolverRegistry()
    first = MockResolver("example")
    second = MockResolver("example")
    registry.register("example", first)
    registry.register("example", second)
    assert len(registry) == 1
    assert registry.get_resolver("example") is second


def test_get_resolver_missing():
    registry = DIDResolverRegistry()
    assert registry.get_resolver("cowsay") is None
    assert "cowsay" not in registry
