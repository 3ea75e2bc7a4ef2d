"""
Centralized test fixtures for the microdata-rdf test suite.

This package provides reusable fixtures for testing, including:
- Item Tree JSON documents
- Vocabulary registries (valid and malformed)
- Configuration fixtures

Usage:
    from fixtures import PERSON_ITEMS, EXPANSION_REGISTRY

Or use the pytest fixtures in conftest.py which import from here.
"""

from .item_fixtures import (
    PERSON_ITEMS,
    NESTED_ITEMS,
    MUSIC_ALBUM_ITEMS,
    ALIASED_VALUE_ITEMS,
    UNTYPED_ITEMS,
    EMPTY_ITEMS,
)

from .registry_fixtures import (
    EXPANSION_REGISTRY,
    OVERLAPPING_REGISTRY,
    CONTEXTUAL_REGISTRY,
    NEEDHASH_REGISTRY,
    LIST_DEFAULT_REGISTRY,
    INVALID_PROPERTY_URI_REGISTRY,
    INVALID_MULTIPLE_VALUES_REGISTRY,
    INVALID_TARGETS_REGISTRY,
)

from .config_fixtures import (
    SAMPLE_EXTRACTOR_CONFIG,
    MINIMAL_EXTRACTOR_CONFIG,
)

__all__ = [
    # Items
    'PERSON_ITEMS',
    'NESTED_ITEMS',
    'MUSIC_ALBUM_ITEMS',
    'ALIASED_VALUE_ITEMS',
    'UNTYPED_ITEMS',
    'EMPTY_ITEMS',
    # Registries
    'EXPANSION_REGISTRY',
    'OVERLAPPING_REGISTRY',
    'CONTEXTUAL_REGISTRY',
    'NEEDHASH_REGISTRY',
    'LIST_DEFAULT_REGISTRY',
    'INVALID_PROPERTY_URI_REGISTRY',
    'INVALID_MULTIPLE_VALUES_REGISTRY',
    'INVALID_TARGETS_REGISTRY',
    # Config
    'SAMPLE_EXTRACTOR_CONFIG',
    'MINIMAL_EXTRACTOR_CONFIG',
]
