"""
Tests for the Item Tree and triple models.
"""

import pytest
from rdflib import BNode, Literal, URIRef

from formats.microdata import Item, LiteralValue, ObjectSpec, TermKind, Triple


@pytest.mark.unit
class TestTermKind:

    def test_for_identifier(self):
        assert TermKind.for_identifier("_:x") == TermKind.BNODE
        assert TermKind.for_identifier("http://example.org/x") == TermKind.URI


@pytest.mark.unit
class TestItem:

    def test_add_property_keeps_order(self):
        item = Item(types=["http://schema.org/Person"])
        item.add_property("name", LiteralValue("A")).add_property("name", LiteralValue("B"))

        assert [v.value for v in item.properties["name"]] == ["A", "B"]
        assert item.is_typed

    def test_to_dict(self):
        item = Item(id="http://example.org/a", types=["http://schema.org/Person"])
        item.add_property("url", LiteralValue("http://example.org/", kind=TermKind.URI))

        assert item.to_dict() == {
            "id": "http://example.org/a",
            "type": ["http://schema.org/Person"],
            "properties": {"url": [{"value": "http://example.org/", "kind": "uri"}]},
        }

    def test_untyped(self):
        assert not Item().is_typed


@pytest.mark.unit
class TestTriple:

    def test_with_predicate(self):
        triple = Triple("_:b1", TermKind.BNODE, "http://example.org/p", "v", TermKind.LITERAL, lang="en")
        moved = triple.with_predicate("http://example.org/q")

        assert moved.predicate == "http://example.org/q"
        assert (moved.subject, moved.obj, moved.lang) == ("_:b1", "v", "en")

    def test_to_dict(self):
        triple = Triple("http://example.org/s", TermKind.URI, "http://example.org/p", "v", TermKind.LITERAL)
        assert triple.to_dict() == {
            "s": "http://example.org/s",
            "s_type": "uri",
            "p": "http://example.org/p",
            "o": "v",
            "o_type": "literal",
            "o_lang": "",
            "o_datatype": "",
        }

    def test_to_rdflib_lang_wins_over_datatype(self):
        triple = Triple(
            "_:b1", TermKind.BNODE, "http://example.org/p", "v", TermKind.LITERAL,
            lang="en", datatype="http://www.w3.org/2001/XMLSchema#string",
        )
        s, p, o = triple.to_rdflib()

        assert s == BNode("b1")
        assert p == URIRef("http://example.org/p")
        assert o == Literal("v", lang="en")

    def test_object_spec_round_trip(self):
        triple = Triple("_:b1", TermKind.BNODE, "http://example.org/p", "v", TermKind.LITERAL, lang="en")
        spec = ObjectSpec.from_triple(triple)

        assert spec.as_object_of("_:b1", TermKind.BNODE, "http://example.org/p") == triple
