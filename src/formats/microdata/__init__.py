"""
Microdata to RDF Module

This module converts HTML Microdata Item Trees into RDF triples following
the W3C "Microdata to RDF" algorithm.

Key Components:
- microdata_models: Item Tree and triple data structures
- microdata_registry: Vocabulary registry (property URI, ordering, datatype, expansion rules)
- vocab_resolver: Vocabulary base resolution and order/datatype policy
- datatype_inferencer: XSD datatype inference for <time> values
- collection_builder: RDF collection (rdf:first/rdf:rest) encoding
- microdata_extractor: The extraction engine
- post_processor: Top-item, vocabulary-usage and entailment triples
- triple_sink: Output sink with rdflib export
- item_reader: Microdata JSON reader

Usage:
    from constants import ExtractionOption
    from formats.microdata import MicrodataExtractor, MicrodataItemReader

    items = MicrodataItemReader().parse_file("items.json")

    extractor = MicrodataExtractor(options=ExtractionOption.ALL)
    result = extractor.parse(items, base_uri="http://example.org/page")
    print(result.get_summary())
    print(result.serialize("turtle"))
"""

from .microdata_models import (
    Item,
    LiteralValue,
    ObjectSpec,
    PropertyValue,
    TermKind,
    Triple,
)

from .microdata_registry import (
    DEFAULT_REGISTRY_DATA,
    MultipleValues,
    PrefixScheme,
    PropertyDefinition,
    PropertyURIScheme,
    RegistryError,
    RegistryFormatError,
    RegistryLoadError,
    VocabularyDefinition,
    VocabularyRegistry,
    get_default_registry,
)

from .triple_sink import TripleSink

from .datatype_inferencer import find_datatype

from .collection_builder import CollectionBuilder, frag_escape

from .vocab_resolver import VocabularyResolver, resolve_order_datatype, split_uri

from .post_processor import PostProcessor

from .microdata_extractor import (
    ExtractionContext,
    ExtractionResult,
    MicrodataExtractor,
    parse_items,
)

from .item_reader import ItemParseError, MicrodataItemReader

__all__ = [
    # Models
    "Item",
    "LiteralValue",
    "ObjectSpec",
    "PropertyValue",
    "TermKind",
    "Triple",
    # Registry
    "DEFAULT_REGISTRY_DATA",
    "MultipleValues",
    "PrefixScheme",
    "PropertyDefinition",
    "PropertyURIScheme",
    "RegistryError",
    "RegistryFormatError",
    "RegistryLoadError",
    "VocabularyDefinition",
    "VocabularyRegistry",
    "get_default_registry",
    # Building blocks
    "TripleSink",
    "find_datatype",
    "CollectionBuilder",
    "frag_escape",
    "VocabularyResolver",
    "resolve_order_datatype",
    "split_uri",
    "PostProcessor",
    # Extraction
    "ExtractionContext",
    "ExtractionResult",
    "MicrodataExtractor",
    "parse_items",
    # Input
    "ItemParseError",
    "MicrodataItemReader",
]
