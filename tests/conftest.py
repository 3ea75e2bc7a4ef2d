"""
Pytest configuration and fixtures for the test suite.

Defines markers for selective test execution:
    pytest -m unit          # Fast unit tests
    pytest -m integration   # Integration tests

Fixtures are centralized in tests/fixtures/ for reuse across all test modules.
"""

import pytest
import json
import sys
import os

# IMPORTANT: Patch tenacity's sleep function BEFORE any other imports
# This must happen before tenacity.Retrying class is defined (which captures defaults)
import tenacity.nap
tenacity.nap.sleep = lambda seconds: None

# Add src to path for imports
src_dir = os.path.join(os.path.dirname(__file__), '..', 'src')
if src_dir not in sys.path:
    sys.path.insert(0, src_dir)

# Add tests directory to path for fixtures import
tests_dir = os.path.dirname(__file__)
if tests_dir not in sys.path:
    # Ensure src directory stays ahead of tests for module resolution
    sys.path.insert(1, tests_dir)

# Import centralized fixtures
from fixtures import (
    PERSON_ITEMS,
    NESTED_ITEMS,
    MUSIC_ALBUM_ITEMS,
    EXPANSION_REGISTRY,
    SAMPLE_EXTRACTOR_CONFIG,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "integration: Integration tests requiring setup")


# =============================================================================
# Item Tree Fixtures
# =============================================================================

@pytest.fixture
def person_items():
    """Single typed Person item with a name."""
    return json.loads(json.dumps(PERSON_ITEMS))


@pytest.fixture
def nested_items():
    """Person with a nested item, a URI value, a time value and a lang literal."""
    return json.loads(json.dumps(NESTED_ITEMS))


@pytest.fixture
def temp_items_file(tmp_path, nested_items):
    """Create a temporary Item Tree JSON file for testing."""
    items_file = tmp_path / "items.json"
    items_file.write_text(json.dumps(nested_items, indent=2))
    return str(items_file)


@pytest.fixture
def temp_album_file(tmp_path):
    """Create a temporary Item Tree JSON file with an ordered property."""
    items_file = tmp_path / "album.json"
    items_file.write_text(json.dumps(MUSIC_ALBUM_ITEMS, indent=2))
    return str(items_file)


# =============================================================================
# Registry Fixtures
# =============================================================================

@pytest.fixture
def expansion_registry():
    """Registry with expansion, datatype and list rules."""
    from formats.microdata import VocabularyRegistry
    return VocabularyRegistry.from_dict(EXPANSION_REGISTRY, source="<test>")


@pytest.fixture
def temp_registry_file(tmp_path):
    """Create a temporary registry JSON file for testing."""
    registry_file = tmp_path / "registry.json"
    registry_file.write_text(json.dumps(EXPANSION_REGISTRY, indent=2))
    return str(registry_file)


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def sample_config():
    """Sample extractor configuration dictionary."""
    return json.loads(json.dumps(SAMPLE_EXTRACTOR_CONFIG))


@pytest.fixture
def temp_config_file(tmp_path, sample_config):
    """Create a temporary configuration file for testing."""
    config_file = tmp_path / "config.json"
    config_file.write_text(json.dumps(sample_config, indent=2))
    return str(config_file)
