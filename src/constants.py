"""
Centralized configuration constants for the Microdata to RDF extractor.

This module provides a single source of truth for the extraction option flags,
RDF namespaces, default values, and limits used throughout the application.
"""

from enum import IntEnum, IntFlag
from typing import Final, Iterable, Union

# ============================================================================
# Exit Codes
# ============================================================================

class ExitCode(IntEnum):
    """Standard exit codes for CLI commands.

    Following Unix conventions:
    - 0: Success
    - 1: General error
    - 2: Validation/syntax error
    - 3+: Specific error categories
    """
    SUCCESS = 0
    ERROR = 1
    VALIDATION_ERROR = 2
    CONFIG_ERROR = 3
    FILE_NOT_FOUND = 5


# ============================================================================
# Extraction Options
# ============================================================================

class ExtractionOption(IntFlag):
    """
    Selects which extra triples from the "Microdata to RDF" note are added.

    Section numbers refer to the W3C note. Flags combine with ``|``; the
    default used by the extractor is ``PROPURI``.
    """
    NONE = 0
    PROPURI = 1          # propertyURI in registry, section 3.1
    MULTIVAL = 2         # multipleValues in registry, section 3.2
    PURI_MVAL = 3
    VEXPANSION = 4       # subPropertyOf / equivalentProperty, section 4
    PURI_MVAL_VEXP = 7
    DATATYPE = 8         # xsd:date etc., section 5.1
    TOPITEMS = 16        # md:item, section 5.6
    RDFAVOCAB = 32       # rdfa:usesVocabulary, section 5.3 step 7
    VENTAIL = 64         # vocabulary entailment (partial), section 4.1
    ALL = 127

    @classmethod
    def from_names(cls, names: Union[str, Iterable[str]]) -> "ExtractionOption":
        """
        Build a flag from option names such as ``"propuri,multival"``.

        Args:
            names: Comma separated string or iterable of names (case-insensitive).

        Returns:
            Combined ExtractionOption.

        Raises:
            ValueError: If a name is not a known option.
        """
        if isinstance(names, str):
            names = names.split(",")

        result = cls.NONE
        for name in names:
            key = name.strip().upper()
            if not key:
                continue
            try:
                result |= cls[key]
            except KeyError:
                known = ", ".join(m.name.lower() for m in cls)
                raise ValueError(f"Unknown extraction option '{name.strip()}'. Known: {known}")
        return result


DEFAULT_OPTIONS: Final[ExtractionOption] = ExtractionOption.PROPURI


# ============================================================================
# Namespaces
# ============================================================================

class Namespaces:
    """RDF namespaces and fixed predicates used by the extractor."""

    RDF: Final[str] = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
    RDFS: Final[str] = "http://www.w3.org/2000/01/rdf-schema#"
    OWL: Final[str] = "http://www.w3.org/2002/07/owl#"
    XSD: Final[str] = "http://www.w3.org/2001/XMLSchema#"
    MD: Final[str] = "http://www.w3.org/ns/md#"
    RDFA: Final[str] = "http://www.w3.org/ns/rdfa#"
    SCHEMA: Final[str] = "http://schema.org/"

    RDF_TYPE: Final[str] = RDF + "type"
    RDF_FIRST: Final[str] = RDF + "first"
    RDF_REST: Final[str] = RDF + "rest"
    RDF_NIL: Final[str] = RDF + "nil"

    MD_ITEM: Final[str] = MD + "item"
    """Predicate attaching the top-level item collection to the document."""

    RDFA_USES_VOCABULARY: Final[str] = RDFA + "usesVocabulary"
    """Predicate asserting that the document uses a registered vocabulary."""

    OWL_EQUIVALENT_PROPERTY: Final[str] = OWL + "equivalentProperty"
    RDFS_SUB_PROPERTY_OF: Final[str] = RDFS + "subPropertyOf"

    CONTEXTUAL_BASE: Final[str] = "http://www.w3.org/ns/md"
    """Namespace for synthetic contextual property URIs."""

    PREFIXES: Final[dict] = {
        "rdf": RDF,
        "rdfs": RDFS,
        "owl": OWL,
        "xsd": XSD,
        "md": MD,
        "rdfa": RDFA,
        "schema": SCHEMA,
    }
    """Prefix bindings used when serializing graphs."""


# ============================================================================
# Blank Nodes
# ============================================================================

class BNodeConfig:
    """Blank node identifier generation."""

    SIGIL: Final[str] = "_:"
    """Leading characters marking a blank node identifier."""

    PREFIX_STEM: Final[str] = "md"
    """Start of the generated per-extractor prefix."""

    PREFIX_RANDOM_LENGTH: Final[int] = 4
    """Number of random hex digits in the generated prefix."""

    PREFIX_SUFFIX: Final[str] = "b"
    """Separator between the prefix and the counter."""


# ============================================================================
# Registry
# ============================================================================

class RegistryConfig:
    """Vocabulary registry loading configuration."""

    FETCH_TIMEOUT_SECONDS: Final[int] = 30
    """HTTP timeout when fetching a remote registry."""

    FETCH_ATTEMPTS: Final[int] = 3
    """Attempts for transient fetch failures (timeouts, connection errors)."""

    USER_AGENT: Final[str] = "microdata-rdf/1.0"
    """User-Agent header for registry requests."""


# ============================================================================
# Output
# ============================================================================

class OutputConfig:
    """Serialization defaults."""

    DEFAULT_FORMAT: Final[str] = "turtle"
    """Default rdflib serialization format."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("turtle", "nt", "xml", "json-ld", "n3", "simple")
    """Formats accepted by the CLI; 'simple' is the JSON simple index."""


# ============================================================================
# Logging
# ============================================================================

class LoggingConfig:
    """Logging configuration."""

    DEFAULT_LOG_LEVEL: Final[str] = "WARNING"
    """Default logging level."""

    LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    """Default log format string."""

    DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"
    """Default date format for logs."""

    DEFAULT_FORMAT_STYLE: Final[str] = "text"
    """Human-readable formatter style."""

    JSON_DATE_FORMAT: Final[str] = "%Y-%m-%dT%H:%M:%S.%fZ"
    """ISO-8601 timestamp format for structured logs."""

    SUPPORTED_FORMATS: Final[tuple[str, ...]] = ("text", "json")
    """Supported formatter styles."""
