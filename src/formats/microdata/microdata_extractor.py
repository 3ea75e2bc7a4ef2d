"""
Microdata to RDF Extractor.

This module implements the "Microdata to RDF" algorithm (W3C note) over an
already parsed Item Tree: every item becomes a subject, its types become
``rdf:type`` triples, and each property value becomes an object, either a
literal or the subject of a nested item.

Optional extra triples are selected with ``ExtractionOption`` flags:
registry-driven property URIs, RDF collections for ordered properties,
vocabulary expansion, datatype inference, the top-level item list,
vocabulary usage and entailment triples.

Usage:
    from constants import ExtractionOption
    from formats.microdata import MicrodataExtractor, Item, LiteralValue

    item = Item(types=["http://schema.org/Person"])
    item.add_property("name", LiteralValue("Alice"))

    extractor = MicrodataExtractor(options=ExtractionOption.PURI_MVAL)
    result = extractor.parse([item], base_uri="http://example.org/page")
    print(result.serialize("turtle"))
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from rdflib import Graph

from constants import BNodeConfig, DEFAULT_OPTIONS, ExtractionOption, Namespaces, OutputConfig
from .collection_builder import CollectionBuilder, frag_escape
from .datatype_inferencer import find_datatype
from .microdata_models import Item, LiteralValue, ObjectSpec, TermKind, Triple
from .microdata_registry import (
    MultipleValues,
    PropertyDefinition,
    RELATION_KINDS,
    VocabularyRegistry,
    get_default_registry,
)
from .post_processor import PostProcessor
from .triple_sink import TripleSink
from .vocab_resolver import VocabularyResolver, resolve_order_datatype

logger = logging.getLogger(__name__)

ABSOLUTE_PROPERTY_SCHEMES = ("http:", "https:")


def generate_bnode_prefix() -> str:
    """Generate a run-unique blank node prefix such as ``md3f2ab``."""
    random_part = uuid.uuid4().hex[:BNodeConfig.PREFIX_RANDOM_LENGTH]
    return f"{BNodeConfig.PREFIX_STEM}{random_part}{BNodeConfig.PREFIX_SUFFIX}"


class ExtractionContext:
    """
    State owned by a single extraction call.

    Holds the blank node counter, the vocabulary usage tally (through the
    resolver), the expansion record and the output sink. Nothing here is
    shared between calls, so concurrent parses stay independent.
    """

    def __init__(
        self,
        base_uri: str,
        options: ExtractionOption,
        registry: Optional[VocabularyRegistry],
        bnode_prefix: str,
        sink: TripleSink,
    ):
        self.base_uri = base_uri
        self.options = options
        self.registry = registry
        self.bnode_prefix = bnode_prefix
        self.sink = sink
        self.bnode_id = 0
        self.adhoc_vocab_base = frag_escape(base_uri) + "#"
        self.resolver = VocabularyResolver(registry, options)
        self.collections = CollectionBuilder(self.add, self.new_bnode)
        # relation kind -> original predicate -> entailed predicate -> count
        self.expansions: Dict[str, Dict[str, Dict[str, int]]] = {kind: {} for kind in RELATION_KINDS}

    def new_bnode(self) -> str:
        """Allocate the next blank node identifier."""
        self.bnode_id += 1
        return f"{BNodeConfig.SIGIL}{self.bnode_prefix}{self.bnode_id}"

    def add(self, triple: Triple) -> bool:
        """Hand a triple to the sink."""
        return self.sink.add(triple)

    def record_expansion(self, relation: str, original: str, entailed: str) -> None:
        """Count one expanded triple for later entailment output."""
        targets = self.expansions[relation].setdefault(original, {})
        targets[entailed] = targets.get(entailed, 0) + 1


@dataclass
class ExtractionResult:
    """
    Outcome of one extraction call.

    Attributes:
        base_uri: Document base URI.
        options: Options the extraction ran with.
        sink: Sink holding the emitted triples.
        top_items: ``(subject, kind)`` of every item without a parent.
        used_vocabularies: Registry prefix to number of typed items resolved through it.
        expansions: Relation kind -> original predicate -> entailed predicate -> count.
    """
    base_uri: str
    options: ExtractionOption
    sink: TripleSink
    top_items: List[Tuple[str, TermKind]] = field(default_factory=list)
    used_vocabularies: Dict[str, int] = field(default_factory=dict)
    expansions: Dict[str, Dict[str, Dict[str, int]]] = field(default_factory=dict)

    @property
    def triples(self) -> List[Triple]:
        """Emitted triples in order."""
        return self.sink.triples

    @property
    def triple_count(self) -> int:
        """Total number of emitted triples."""
        return self.sink.count

    def to_graph(self) -> Graph:
        """Build an rdflib Graph from the emitted triples."""
        return self.sink.to_graph()

    def serialize(self, format: str = OutputConfig.DEFAULT_FORMAT) -> str:
        """Serialize the emitted triples with rdflib."""
        return self.sink.serialize(format=format)

    def get_summary(self) -> str:
        """Generate human-readable summary of the extraction."""
        lines = [
            "Extraction Summary:",
            f"  ✓ Top-level items: {len(self.top_items)}",
            f"  ✓ Triples: {self.triple_count}",
        ]
        if self.used_vocabularies:
            lines.append(f"  ✓ Registered vocabularies used: {len(self.used_vocabularies)}")
            for prefix, count in self.used_vocabularies.items():
                lines.append(f"      - {prefix} ({count} items)")
        expanded = sum(
            count
            for by_original in self.expansions.values()
            for targets in by_original.values()
            for count in targets.values()
        )
        if expanded:
            lines.append(f"  ✓ Expanded triples: {expanded}")
        return "\n".join(lines)


class MicrodataExtractor:
    """
    Converts microdata Item Trees to RDF triples.

    The registry is resolved lazily on the first parse that needs it: an
    explicit registry, then a registry location set with
    ``set_vocab_registry``, then the built-in default. Once loaded it is only
    read, so one extractor may serve many parses.

    Example:
        >>> extractor = MicrodataExtractor(bnode_prefix="b")
        >>> result = extractor.parse([item], "http://example.org/")
        >>> result.triple_count
        2
    """

    def __init__(
        self,
        registry: Optional[VocabularyRegistry] = None,
        options: ExtractionOption = DEFAULT_OPTIONS,
        bnode_prefix: Optional[str] = None,
        skip_duplicates: bool = False,
        decode_entities: bool = False,
        registry_source: Optional[str] = None,
    ):
        """
        Initialize the extractor.

        Args:
            registry: Registry to use instead of loading one.
            options: Default extra-triple options for ``parse``.
            bnode_prefix: Blank node prefix; a random prefix is generated
                for this extractor when omitted.
            skip_duplicates: Suppress duplicate triples in the output.
            decode_entities: Decode HTML character references in objects.
            registry_source: Path or URI of a registry to load lazily.
        """
        self.options = ExtractionOption(options)
        self.bnode_prefix = bnode_prefix or generate_bnode_prefix()
        self.skip_duplicates = skip_duplicates
        self.decode_entities = decode_entities
        self._registry = registry
        self._registry_source = registry_source

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def set_vocab_registry(self, path_or_uri: str) -> None:
        """Use the registry at ``path_or_uri``; it is loaded on the next parse."""
        self._registry_source = path_or_uri
        self._registry = None

    def set_registry(self, registry: VocabularyRegistry) -> None:
        """Use an already built registry."""
        self._registry = registry
        self._registry_source = None

    @property
    def registry(self) -> VocabularyRegistry:
        """
        The active registry, loading it on first access.

        Raises:
            RegistryLoadError: If a requested registry cannot be read.
            RegistryFormatError: If a requested registry is malformed.
        """
        if self._registry is None:
            if self._registry_source:
                self._registry = VocabularyRegistry.load(self._registry_source)
            else:
                self._registry = get_default_registry()
        return self._registry

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    def parse(
        self,
        items: Sequence[Item],
        base_uri: str,
        options: Optional[ExtractionOption] = None,
    ) -> ExtractionResult:
        """
        Extract RDF from a list of top-level items.

        Args:
            items: Top-level items (items that are not property values).
            base_uri: Document base URI.
            options: Options for this call; defaults to the extractor's.

        Returns:
            ExtractionResult with the emitted triples and tallies.
        """
        options = self.options if options is None else ExtractionOption(options)
        registry = self.registry if options else None

        context = ExtractionContext(
            base_uri=base_uri,
            options=options,
            registry=registry,
            bnode_prefix=self.bnode_prefix,
            sink=TripleSink(skip_duplicates=self.skip_duplicates, decode_entities=self.decode_entities),
        )

        logger.info(f"Extracting RDF from {len(items)} items (base <{base_uri}>, options {options!r})")

        top_items: List[Tuple[str, TermKind]] = []
        for item in items:
            top_items.append(self.extract(item, context))

        PostProcessor(options).process(context, top_items)

        logger.info(f"Extracted {context.sink.count} triples from {len(items)} items")

        return ExtractionResult(
            base_uri=base_uri,
            options=options,
            sink=context.sink,
            top_items=top_items,
            used_vocabularies=dict(context.resolver.used_vocabularies),
            expansions=context.expansions,
        )

    def extract(
        self,
        item: Item,
        context: ExtractionContext,
        parent_vocab_base: str = "",
        parent_uri_prefix: str = "",
    ) -> Tuple[str, TermKind]:
        """
        Convert one item, and recursively its nested items, to triples.

        Args:
            item: Item to convert.
            context: State of the current extraction call.
            parent_vocab_base: Vocabulary base of the item holding this one.
            parent_uri_prefix: Registry prefix of the item holding this one.

        Returns:
            ``(subject, subject_kind)`` of the item.
        """
        if item.id:
            subject = item.id
            subject_kind = TermKind.for_identifier(subject)
        else:
            subject = context.new_bnode()
            subject_kind = TermKind.BNODE
            logger.debug(f"Allocated subject {subject}")

        if item.is_typed:
            vocab_base, uri_prefix = context.resolver.find_vocab_base(item.types[0])
            for type_uri in item.types:
                context.add(Triple(subject, subject_kind, Namespaces.RDF_TYPE, type_uri, TermKind.URI))
        else:
            # untyped items take the vocabulary of the item they are a value of
            vocab_base = parent_vocab_base or context.adhoc_vocab_base
            uri_prefix = parent_uri_prefix

        self._set_triples(item, subject, subject_kind, vocab_base, uri_prefix, context)
        return subject, subject_kind

    def _set_triples(
        self,
        item: Item,
        subject: str,
        subject_kind: TermKind,
        vocab_base: str,
        uri_prefix: str,
        context: ExtractionContext,
    ) -> None:
        """Emit the triples of every property of an item."""
        options = context.options
        vocabulary = context.registry.get(uri_prefix) if context.registry is not None and uri_prefix else None
        default_order, _ = resolve_order_datatype(vocabulary, MultipleValues.UNORDERED, options)

        for name, values in item.properties.items():
            if not values:
                continue

            if name.startswith(ABSOLUTE_PROPERTY_SCHEMES):
                predicate = name
            else:
                predicate = vocab_base + name

            prop_def = vocabulary.get_property(name) if vocabulary is not None else None
            order, registry_datatype = resolve_order_datatype(prop_def, default_order, options)

            candidates: List[Triple] = []
            for value in values:
                triple = self._make_triple(
                    value, subject, subject_kind, predicate,
                    vocab_base, uri_prefix, registry_datatype, context,
                )
                candidates.append(triple)
                if options & ExtractionOption.VEXPANSION and prop_def is not None:
                    self._vocab_expansion(prop_def, triple, context)

            if order == MultipleValues.LIST:
                context.collections.build(
                    [ObjectSpec.from_triple(t) for t in candidates],
                    subject, subject_kind, predicate,
                )
            else:
                for triple in candidates:
                    context.add(triple)

    def _make_triple(
        self,
        value,
        subject: str,
        subject_kind: TermKind,
        predicate: str,
        vocab_base: str,
        uri_prefix: str,
        registry_datatype: str,
        context: ExtractionContext,
    ) -> Triple:
        """Build the candidate triple for one property value."""
        if isinstance(value, Item):
            obj, obj_kind = self.extract(value, context, vocab_base, uri_prefix)
            return Triple(subject, subject_kind, predicate, obj, obj_kind)

        if isinstance(value, LiteralValue):
            if value.kind != TermKind.LITERAL:
                return Triple(subject, subject_kind, predicate, value.value, value.kind)

            datatype = ""
            if context.options & ExtractionOption.DATATYPE and not value.lang:
                datatype = find_datatype(value.value, value.element, registry_datatype)
            return Triple(
                subject, subject_kind, predicate, value.value, TermKind.LITERAL,
                lang=value.lang, datatype=datatype,
            )

        raise TypeError(f"Property value must be Item or LiteralValue, got {type(value).__name__}")

    def _vocab_expansion(self, prop_def: PropertyDefinition, triple: Triple, context: ExtractionContext) -> None:
        """Emit expanded triples for equivalent and super properties."""
        for relation, entailed in prop_def.expansions():
            context.add(triple.with_predicate(entailed))
            context.record_expansion(relation, triple.predicate, entailed)


def parse_items(
    items: Sequence[Item],
    base_uri: str,
    options: ExtractionOption = DEFAULT_OPTIONS,
    registry: Optional[VocabularyRegistry] = None,
    bnode_prefix: Optional[str] = None,
) -> ExtractionResult:
    """Convenience wrapper: extract ``items`` with a throwaway extractor."""
    extractor = MicrodataExtractor(registry=registry, options=options, bnode_prefix=bnode_prefix)
    return extractor.parse(items, base_uri)
