"""
Microdata Vocabulary Registry.

This module loads and indexes the vocabulary registry that drives the
"Microdata to RDF" conversion rules: how property URIs are generated for a
vocabulary, whether multiple values form an RDF collection, which datatype a
property's literals get, and which properties are expanded to
sub-/equivalent properties.

The registry is a JSON document keyed by vocabulary URI prefix:

    {
      "http://schema.org/": {
        "propertyURI": "vocabulary",
        "multipleValues": "unordered",
        "properties": {
          "track": {"multipleValues": "list"},
          "additionalType": {"subPropertyOf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"}
        }
      }
    }

Usage:
    from formats.microdata.microdata_registry import VocabularyRegistry, get_default_registry

    registry = get_default_registry()
    prefix = registry.find_prefix("http://schema.org/Person")

    custom = VocabularyRegistry.load("my_registry.json")
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import requests
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from constants import RegistryConfig

logger = logging.getLogger(__name__)


# =============================================================================
# Errors
# =============================================================================

class RegistryError(Exception):
    """Base exception for registry problems."""

    def __init__(self, message: str, source: Optional[str] = None, details: Optional[str] = None):
        self.source = source
        self.details = details
        super().__init__(message)


class RegistryLoadError(RegistryError):
    """Exception raised when a registry source is missing or unreadable."""


class RegistryFormatError(RegistryError):
    """Exception raised when a registry document is malformed."""


# =============================================================================
# Models
# =============================================================================

class PropertyURIScheme(Enum):
    """How property URIs are generated for a vocabulary."""
    VOCABULARY = "vocabulary"
    CONTEXTUAL = "contextual"


class MultipleValues(Enum):
    """How multiple values of one property are emitted."""
    UNORDERED = "unordered"
    LIST = "list"


class PrefixScheme(Enum):
    """Resolved vocabulary base scheme of a registry prefix."""
    VOCAB_HASHLESS = 0
    VOCAB_NEEDHASH = 1
    CONTEXTUAL = 2


RELATION_KINDS: Tuple[str, ...] = ("equivalentProperty", "subPropertyOf")
"""Expansion relations, in the order they are applied."""


@dataclass(frozen=True)
class PropertyDefinition:
    """
    Property-level override record.

    Attributes:
        multiple_values: Own ordering rule, if declared.
        datatype: Own literal datatype URI, if declared.
        sub_property_of: Super-property URIs for vocabulary expansion.
        equivalent_property: Equivalent property URIs for vocabulary expansion.
    """
    multiple_values: Optional[MultipleValues] = None
    datatype: Optional[str] = None
    sub_property_of: Tuple[str, ...] = ()
    equivalent_property: Tuple[str, ...] = ()

    def expansions(self) -> Iterator[Tuple[str, str]]:
        """Yield ``(relation_kind, target)`` pairs in application order."""
        for target in self.equivalent_property:
            yield "equivalentProperty", target
        for target in self.sub_property_of:
            yield "subPropertyOf", target

    def to_dict(self) -> Dict[str, Any]:
        """Convert to registry JSON format."""
        result: Dict[str, Any] = {}
        if self.multiple_values:
            result["multipleValues"] = self.multiple_values.value
        if self.datatype:
            result["datatype"] = self.datatype
        if self.sub_property_of:
            result["subPropertyOf"] = _collapse(self.sub_property_of)
        if self.equivalent_property:
            result["equivalentProperty"] = _collapse(self.equivalent_property)
        return result


@dataclass(frozen=True)
class VocabularyDefinition:
    """
    Vocabulary-level definition record.

    Attributes:
        prefix: Vocabulary URI prefix (the registry key).
        property_uri: Property URI generation scheme.
        multiple_values: Default ordering rule for the vocabulary's properties.
        properties: Local property name to override record.
    """
    prefix: str
    property_uri: PropertyURIScheme = PropertyURIScheme.VOCABULARY
    multiple_values: Optional[MultipleValues] = None
    properties: Dict[str, PropertyDefinition] = field(default_factory=dict)

    @property
    def datatype(self) -> Optional[str]:
        """Vocabularies carry no datatype of their own."""
        return None

    @property
    def scheme(self) -> PrefixScheme:
        """Resolved vocabulary base scheme for this prefix."""
        if self.property_uri == PropertyURIScheme.CONTEXTUAL:
            return PrefixScheme.CONTEXTUAL
        if self.prefix.endswith(("#", "/")):
            return PrefixScheme.VOCAB_HASHLESS
        return PrefixScheme.VOCAB_NEEDHASH

    def get_property(self, name: str) -> Optional[PropertyDefinition]:
        """Get the override record for a property, if any."""
        return self.properties.get(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to registry JSON format."""
        result: Dict[str, Any] = {"propertyURI": self.property_uri.value}
        if self.multiple_values:
            result["multipleValues"] = self.multiple_values.value
        if self.properties:
            result["properties"] = {
                name: prop.to_dict() for name, prop in self.properties.items()
            }
        return result


def _collapse(values: Tuple[str, ...]) -> Any:
    """Single targets are written as a plain string."""
    return values[0] if len(values) == 1 else list(values)


# =============================================================================
# Registry
# =============================================================================

class VocabularyRegistry:
    """
    Read-only lookup structure over vocabulary definitions.

    Prefixes keep their declaration order, which decides ties when several
    prefixes match one type URI: the first declared prefix wins.

    Example:
        >>> registry = VocabularyRegistry.from_dict({"http://schema.org/": {"propertyURI": "vocabulary"}})
        >>> registry.find_prefix("http://schema.org/Person")
        'http://schema.org/'
    """

    def __init__(self, definitions: Dict[str, VocabularyDefinition], source: Optional[str] = None):
        self._definitions: Dict[str, VocabularyDefinition] = dict(definitions)
        self.source = source

    def __len__(self) -> int:
        return len(self._definitions)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._definitions

    def __iter__(self) -> Iterator[VocabularyDefinition]:
        return iter(self._definitions.values())

    @property
    def prefixes(self) -> List[str]:
        """Registered prefixes in declaration order."""
        return list(self._definitions)

    def get(self, prefix: str) -> Optional[VocabularyDefinition]:
        """Get the definition for a prefix, if registered."""
        return self._definitions.get(prefix)

    def find_prefix(self, type_uri: str) -> Optional[str]:
        """
        Find the registered prefix governing a type URI.

        Args:
            type_uri: Absolute item type URI.

        Returns:
            The first declared prefix that is a string prefix of ``type_uri``,
            or None.
        """
        for prefix in self._definitions:
            if type_uri.startswith(prefix):
                return prefix
        return None

    def get_property(self, prefix: str, name: str) -> Optional[PropertyDefinition]:
        """Get a property override for ``prefix`` + ``name``, if any."""
        definition = self._definitions.get(prefix)
        if definition is None:
            return None
        return definition.get_property(name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to registry JSON format."""
        return {prefix: d.to_dict() for prefix, d in self._definitions.items()}

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "VocabularyRegistry":
        """
        Build a registry from decoded registry JSON.

        Args:
            data: Decoded JSON document.
            source: Optional source label for error messages.

        Returns:
            VocabularyRegistry.

        Raises:
            RegistryFormatError: If the document does not follow the registry format.
        """
        if not isinstance(data, dict):
            raise RegistryFormatError(
                f"Registry must be a JSON object, got {type(data).__name__}",
                source=source,
            )

        definitions: Dict[str, VocabularyDefinition] = {}
        for prefix, raw in data.items():
            definitions[prefix] = _parse_vocabulary(prefix, raw, source)

        return cls(definitions, source=source)

    @classmethod
    def from_json(cls, content: str, source: Optional[str] = None) -> "VocabularyRegistry":
        """Build a registry from a JSON string."""
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise RegistryFormatError(
                f"Invalid registry JSON: {e}",
                source=source,
                details=str(e),
            )
        return cls.from_dict(data, source=source)

    @classmethod
    def from_file(cls, path: str) -> "VocabularyRegistry":
        """
        Load a registry from a local JSON file.

        Raises:
            RegistryLoadError: If the file is missing or unreadable.
            RegistryFormatError: If the content is malformed.
        """
        file_path = Path(path)
        try:
            content = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise RegistryLoadError(f"Registry file not found: {path}", source=str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryLoadError(
                f"Cannot read registry file {path}: {e}",
                source=str(path),
                details=str(e),
            )
        return cls.from_json(content, source=str(path))

    @classmethod
    def from_uri(cls, uri: str, timeout: int = RegistryConfig.FETCH_TIMEOUT_SECONDS) -> "VocabularyRegistry":
        """
        Fetch a registry over HTTP(S).

        Timeouts and connection errors are retried; HTTP error statuses are not.

        Raises:
            RegistryLoadError: If the registry cannot be fetched.
            RegistryFormatError: If the content is malformed.
        """
        try:
            content = _fetch_registry_text(uri, timeout)
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            raise RegistryLoadError(
                f"HTTP error {status} fetching registry {uri}",
                source=uri,
                details=str(e),
            )
        except requests.exceptions.RequestException as e:
            raise RegistryLoadError(
                f"Error fetching registry {uri}: {e}",
                source=uri,
                details=str(e),
            )
        return cls.from_json(content, source=uri)

    @classmethod
    def load(cls, path_or_uri: str) -> "VocabularyRegistry":
        """
        Load a registry from a file path or an http(s) URI.

        Raises:
            RegistryLoadError: If the source is missing or unreadable.
            RegistryFormatError: If the content is malformed.
        """
        if not path_or_uri:
            raise RegistryLoadError("Registry location cannot be empty", source=path_or_uri)

        if path_or_uri.startswith(("http://", "https://")):
            registry = cls.from_uri(path_or_uri)
        else:
            if path_or_uri.startswith("file://"):
                path_or_uri = path_or_uri[len("file://"):]
            registry = cls.from_file(path_or_uri)

        logger.info(f"Loaded vocabulary registry from {registry.source} ({len(registry)} prefixes)")
        return registry


def _is_transient_error(exception: BaseException) -> bool:
    """Check if a fetch error should be retried."""
    return isinstance(exception, (requests.exceptions.Timeout, requests.exceptions.ConnectionError))


@retry(
    stop=stop_after_attempt(RegistryConfig.FETCH_ATTEMPTS),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception(_is_transient_error),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
def _fetch_registry_text(uri: str, timeout: int) -> str:
    """GET a registry document and return its body."""
    logger.debug(f"Fetching vocabulary registry {uri}")
    response = requests.get(
        uri,
        timeout=timeout,
        headers={"Accept": "application/json", "User-Agent": RegistryConfig.USER_AGENT},
    )
    response.raise_for_status()
    return response.text


# =============================================================================
# Parsing helpers
# =============================================================================

def _parse_enum(enum_cls, value: Any, field_name: str, where: str, source: Optional[str]):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise RegistryFormatError(
            f"Invalid {field_name} '{value}' for {where} (expected one of: {allowed})",
            source=source,
        )


def _parse_targets(value: Any, field_name: str, where: str, source: Optional[str]) -> Tuple[str, ...]:
    """A relation target is a URI string or a list of URI strings."""
    if isinstance(value, str):
        return (value,)
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return tuple(value)
    raise RegistryFormatError(
        f"{field_name} for {where} must be a string or a list of strings",
        source=source,
    )


def _parse_property(prefix: str, name: str, raw: Any, source: Optional[str]) -> PropertyDefinition:
    where = f"property '{name}' of '{prefix}'"
    if not isinstance(raw, dict):
        raise RegistryFormatError(f"Definition of {where} must be an object", source=source)

    multiple_values = None
    if "multipleValues" in raw:
        multiple_values = _parse_enum(MultipleValues, raw["multipleValues"], "multipleValues", where, source)

    datatype = raw.get("datatype")
    if datatype is not None and not isinstance(datatype, str):
        raise RegistryFormatError(f"datatype for {where} must be a string", source=source)

    sub_property_of: Tuple[str, ...] = ()
    if "subPropertyOf" in raw:
        sub_property_of = _parse_targets(raw["subPropertyOf"], "subPropertyOf", where, source)

    equivalent_property: Tuple[str, ...] = ()
    if "equivalentProperty" in raw:
        equivalent_property = _parse_targets(raw["equivalentProperty"], "equivalentProperty", where, source)

    return PropertyDefinition(
        multiple_values=multiple_values,
        datatype=datatype or None,
        sub_property_of=sub_property_of,
        equivalent_property=equivalent_property,
    )


def _parse_vocabulary(prefix: str, raw: Any, source: Optional[str]) -> VocabularyDefinition:
    where = f"vocabulary '{prefix}'"
    if not isinstance(raw, dict):
        raise RegistryFormatError(f"Definition of {where} must be an object", source=source)

    property_uri = _parse_enum(
        PropertyURIScheme, raw.get("propertyURI", "vocabulary"), "propertyURI", where, source
    )

    multiple_values = None
    if "multipleValues" in raw:
        multiple_values = _parse_enum(MultipleValues, raw["multipleValues"], "multipleValues", where, source)

    raw_properties = raw.get("properties", {})
    if not isinstance(raw_properties, dict):
        raise RegistryFormatError(f"properties of {where} must be an object", source=source)

    properties = {
        name: _parse_property(prefix, name, prop, source)
        for name, prop in raw_properties.items()
    }

    return VocabularyDefinition(
        prefix=prefix,
        property_uri=property_uri,
        multiple_values=multiple_values,
        properties=properties,
    )


# =============================================================================
# Default registry
# =============================================================================

_LIST_PROPERTIES = (
    "blogPosts", "breadcrumb", "byArtist", "creator", "episode", "episodes",
    "event", "events", "founder", "founders", "itemListElement",
    "musicGroupMember", "performerIn", "actor", "actors", "performer",
    "performers", "producer", "recipeInstructions", "season", "seasons",
    "subEvent", "subEvents", "track", "tracks",
)

# JSON registry published at http://www.w3.org/ns/md (md.json, 2012-12-01)
DEFAULT_REGISTRY_DATA: Dict[str, Any] = {
    "http://schema.org/": {
        "propertyURI": "vocabulary",
        "multipleValues": "unordered",
        "properties": {
            "additionalType": {"subPropertyOf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"},
            **{name: {"multipleValues": "list"} for name in _LIST_PROPERTIES},
        },
    },
    "http://microformats.org/profile/hcard": {
        "propertyURI": "vocabulary",
        "multipleValues": "unordered",
    },
    "http://microformats.org/profile/hcalendar#": {
        "propertyURI": "vocabulary",
        "multipleValues": "unordered",
        "properties": {
            "categories": {"multipleValues": "list"},
        },
    },
}


@lru_cache(maxsize=1)
def get_default_registry() -> VocabularyRegistry:
    """Get the built-in registry, built once per process."""
    return VocabularyRegistry.from_dict(DEFAULT_REGISTRY_DATA, source="<default>")
