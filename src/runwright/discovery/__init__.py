"""Declaration markers and metadata providers."""

from runwright.discovery.loader import ModuleLoader, load_registry
from runwright.discovery.registry import (
    MetadataProvider,
    Registry,
    fixture,
    tag,
    test,
    test_class,
    use_fixture,
)

__all__ = [
    "MetadataProvider",
    "ModuleLoader",
    "Registry",
    "fixture",
    "load_registry",
    "tag",
    "test",
    "test_class",
    "use_fixture",
]
