"""
Tests for document-level extra triples.
"""

import pytest

from constants import ExtractionOption, Namespaces
from formats.microdata import (
    ExtractionContext,
    Item,
    LiteralValue,
    MicrodataExtractor,
    PostProcessor,
    TermKind,
    Triple,
    TripleSink,
)


BASE = "http://example.org/page"
SCHEMA = "http://schema.org/"
HCARD = "http://microformats.org/profile/hcard"


def typed(type_uri: str, item_id: str = "") -> Item:
    item = Item(id=item_id, types=[type_uri])
    item.add_property("name", LiteralValue("x"))
    return item


@pytest.mark.unit
class TestTopItems:
    """md:item collection of top-level items."""

    def test_top_items_collection(self):
        items = [typed(SCHEMA + "Person", "http://example.org/a"), typed(SCHEMA + "Person")]
        extractor = MicrodataExtractor(bnode_prefix="b", options=ExtractionOption.PROPURI | ExtractionOption.TOPITEMS)

        result = extractor.parse(items, BASE)

        assert result.triples[-5:] == [
            Triple(BASE, TermKind.URI, Namespaces.MD_ITEM, "_:b2", TermKind.BNODE),
            Triple("_:b2", TermKind.BNODE, Namespaces.RDF_FIRST, "http://example.org/a", TermKind.URI),
            Triple("_:b2", TermKind.BNODE, Namespaces.RDF_REST, "_:b3", TermKind.BNODE),
            Triple("_:b3", TermKind.BNODE, Namespaces.RDF_FIRST, "_:b1", TermKind.BNODE),
            Triple("_:b3", TermKind.BNODE, Namespaces.RDF_REST, Namespaces.RDF_NIL, TermKind.URI),
        ]

    def test_nested_items_not_listed(self):
        outer = typed(SCHEMA + "Person", "http://example.org/a")
        outer.add_property("knows", typed(SCHEMA + "Person", "http://example.org/b"))
        extractor = MicrodataExtractor(bnode_prefix="b", options=ExtractionOption.TOPITEMS)

        result = extractor.parse([outer], BASE)

        firsts = [t.obj for t in result.triples if t.predicate == Namespaces.RDF_FIRST]
        assert firsts == ["http://example.org/a"]

    def test_empty_document(self):
        result = MicrodataExtractor(options=ExtractionOption.TOPITEMS).parse([], BASE)

        assert result.triples == [
            Triple(BASE, TermKind.URI, Namespaces.MD_ITEM, Namespaces.RDF_NIL, TermKind.URI),
        ]

    def test_not_emitted_by_default(self):
        result = MicrodataExtractor().parse([typed(SCHEMA + "Person")], BASE)
        assert Namespaces.MD_ITEM not in [t.predicate for t in result.triples]


@pytest.mark.unit
class TestVocabularyUsage:
    """rdfa:usesVocabulary triples."""

    def test_each_used_prefix_once_in_first_use_order(self):
        items = [typed(HCARD), typed(SCHEMA + "Person"), typed(HCARD), typed("http://other.org/T")]
        extractor = MicrodataExtractor(options=ExtractionOption.PROPURI | ExtractionOption.RDFAVOCAB)

        result = extractor.parse(items, BASE)

        usage = [t for t in result.triples if t.predicate == Namespaces.RDFA_USES_VOCABULARY]
        assert [(t.subject, t.obj, t.object_kind) for t in usage] == [
            (BASE, HCARD, TermKind.URI),
            (BASE, SCHEMA, TermKind.URI),
        ]
        assert result.used_vocabularies == {HCARD: 2, SCHEMA: 1}

    def test_needs_property_uri_resolution(self):
        extractor = MicrodataExtractor(options=ExtractionOption.RDFAVOCAB)
        result = extractor.parse([typed(SCHEMA + "Person")], BASE)

        assert Namespaces.RDFA_USES_VOCABULARY not in [t.predicate for t in result.triples]


@pytest.mark.unit
class TestEntailment:
    """owl:equivalentProperty / rdfs:subPropertyOf triples."""

    def recipe(self) -> Item:
        item = Item(types=["http://example.org/vocab/Recipe"])
        item.add_property("title", LiteralValue("Soup"))
        return item

    def test_entailment_triples(self, expansion_registry):
        extractor = MicrodataExtractor(
            registry=expansion_registry,
            options=ExtractionOption.PURI_MVAL_VEXP | ExtractionOption.VENTAIL,
        )
        result = extractor.parse([self.recipe(), self.recipe()], BASE)

        title = "http://example.org/vocab/title"
        assert result.triples[-3:] == [
            Triple(title, TermKind.URI, Namespaces.OWL_EQUIVALENT_PROPERTY,
                   "http://purl.org/dc/terms/title", TermKind.URI),
            Triple(title, TermKind.URI, Namespaces.RDFS_SUB_PROPERTY_OF,
                   "http://www.w3.org/2000/01/rdf-schema#label", TermKind.URI),
            Triple(title, TermKind.URI, Namespaces.RDFS_SUB_PROPERTY_OF,
                   "http://example.org/other#name", TermKind.URI),
        ]

    def test_requires_expansion(self, expansion_registry):
        extractor = MicrodataExtractor(
            registry=expansion_registry,
            options=ExtractionOption.PROPURI | ExtractionOption.VENTAIL,
        )
        result = extractor.parse([self.recipe()], BASE)

        assert result.triple_count == 2


@pytest.mark.unit
class TestPostProcessor:
    """Direct use of the post-processor."""

    def test_order_of_extras(self, expansion_registry):
        item = Item(types=["http://example.org/vocab/Recipe"])
        item.add_property("title", LiteralValue("Soup"))
        extractor = MicrodataExtractor(registry=expansion_registry, bnode_prefix="b", options=ExtractionOption.ALL)

        result = extractor.parse([item], BASE)

        assert [t.predicate for t in result.triples[-7:]] == [
            Namespaces.MD_ITEM,
            Namespaces.RDF_FIRST,
            Namespaces.RDF_REST,
            Namespaces.RDFA_USES_VOCABULARY,
            Namespaces.OWL_EQUIVALENT_PROPERTY,
            Namespaces.RDFS_SUB_PROPERTY_OF,
            Namespaces.RDFS_SUB_PROPERTY_OF,
        ]

    def test_returns_added_count(self):
        sink = TripleSink()
        context = ExtractionContext(BASE, ExtractionOption.TOPITEMS, None, "b", sink)
        top_items = [("http://example.org/a", TermKind.URI), ("http://example.org/b", TermKind.URI)]

        added = PostProcessor(ExtractionOption.TOPITEMS).process(context, top_items)

        assert added == 5
        assert len(sink) == 5

    def test_count_excludes_rejected_duplicates(self):
        sink = TripleSink(skip_duplicates=True)
        sink.add(Triple("_:b1", TermKind.BNODE, Namespaces.RDF_FIRST, "http://example.org/a", TermKind.URI))
        context = ExtractionContext(BASE, ExtractionOption.TOPITEMS, None, "b", sink)

        added = PostProcessor(ExtractionOption.TOPITEMS).process(context, [("http://example.org/a", TermKind.URI)])

        assert added == 2
        assert len(sink) == 3

    def test_nothing_selected(self):
        sink = TripleSink()
        context = ExtractionContext(BASE, ExtractionOption.PROPURI, None, "b", sink)

        assert PostProcessor(ExtractionOption.PROPURI).process(context, [("_:b1", TermKind.BNODE)]) == 0
        assert len(sink) == 0
