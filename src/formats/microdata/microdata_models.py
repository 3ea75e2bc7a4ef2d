"""
Microdata Data Models.

This module defines the data structures flowing through the extractor:
the Item Tree handed over by an HTML microdata parser, and the RDF triples
produced from it.

Models:
- TermKind: Kind tag of an RDF term (uri, bnode, literal)
- LiteralValue: A non-item property value with its source hints
- Item: A microdata item with id, types and ordered properties
- PropertyValue: Either an Item or a LiteralValue
- Triple: One subject-predicate-object statement
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Union

from rdflib import BNode, Literal, URIRef

from constants import BNodeConfig


class TermKind(Enum):
    """Kind tag of an RDF term."""
    URI = "uri"
    BNODE = "bnode"
    LITERAL = "literal"

    @classmethod
    def for_identifier(cls, identifier: str) -> "TermKind":
        """Classify an item identifier as a blank node or a URI."""
        if identifier.startswith(BNodeConfig.SIGIL):
            return cls.BNODE
        return cls.URI


@dataclass(frozen=True)
class LiteralValue:
    """
    A property value that is not a nested item.

    Attributes:
        value: Raw string value as extracted from the document.
        kind: Kind of the value; ``LITERAL`` for text, ``URI`` for link-like
            attributes (href, src, ...).
        lang: Lang tag, only when explicitly present on the source element.
        element: Source element hint (e.g. ``"time"``) used for datatype
            inference.
    """
    value: str
    kind: TermKind = TermKind.LITERAL
    lang: str = ""
    element: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format."""
        result: Dict[str, Any] = {"value": self.value, "kind": self.kind.value}
        if self.lang:
            result["lang"] = self.lang
        if self.element:
            result["element"] = self.element
        return result


@dataclass
class Item:
    """
    Represents a microdata item.

    Attributes:
        id: Absolute URI (itemid) or ``_:``-prefixed blank node identifier;
            empty when a fresh blank node is needed.
        types: Item type URIs in declaration order.
        properties: Property name to ordered values. Insertion order is the
            declaration order in the document.
    """
    id: str = ""
    types: List[str] = field(default_factory=list)
    properties: Dict[str, List["PropertyValue"]] = field(default_factory=dict)

    def add_property(self, name: str, value: "PropertyValue") -> "Item":
        """Append a value to a property, creating it if needed."""
        self.properties.setdefault(name, []).append(value)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the microdata JSON shape."""
        result: Dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        if self.types:
            result["type"] = list(self.types)
        result["properties"] = {
            name: [v.to_dict() for v in values]
            for name, values in self.properties.items()
        }
        return result

    @property
    def is_typed(self) -> bool:
        """Check if the item declares at least one type."""
        return bool(self.types)


PropertyValue = Union[Item, LiteralValue]


@dataclass(frozen=True)
class Triple:
    """
    One RDF statement.

    Subjects are URIs or blank nodes; objects may also be literals, in which
    case ``lang`` and ``datatype`` may be set (never both).
    """
    subject: str
    subject_kind: TermKind
    predicate: str
    obj: str
    object_kind: TermKind
    lang: str = ""
    datatype: str = ""

    def with_predicate(self, predicate: str) -> "Triple":
        """Return a copy of this triple with another predicate."""
        return Triple(
            subject=self.subject,
            subject_kind=self.subject_kind,
            predicate=predicate,
            obj=self.obj,
            object_kind=self.object_kind,
            lang=self.lang,
            datatype=self.datatype,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the flat s/p/o record format."""
        return {
            "s": self.subject,
            "s_type": self.subject_kind.value,
            "p": self.predicate,
            "o": self.obj,
            "o_type": self.object_kind.value,
            "o_lang": self.lang,
            "o_datatype": self.datatype,
        }

    def to_rdflib(self) -> tuple:
        """Convert to an rdflib ``(subject, predicate, object)`` tuple."""
        def node(value: str, kind: TermKind):
            if kind == TermKind.BNODE:
                return BNode(value[len(BNodeConfig.SIGIL):] if value.startswith(BNodeConfig.SIGIL) else value)
            return URIRef(value)

        if self.object_kind == TermKind.LITERAL:
            obj = Literal(
                self.obj,
                lang=self.lang or None,
                datatype=URIRef(self.datatype) if self.datatype and not self.lang else None,
            )
        else:
            obj = node(self.obj, self.object_kind)

        return (node(self.subject, self.subject_kind), URIRef(self.predicate), obj)


@dataclass(frozen=True)
class ObjectSpec:
    """
    A pre-built object term waiting to be placed in a collection.

    Attributes:
        value: Term value (URI, blank node id or lexical form).
        kind: Term kind.
        lang: Lang tag for literals.
        datatype: Datatype URI for literals.
    """
    value: str
    kind: TermKind
    lang: str = ""
    datatype: str = ""

    @classmethod
    def from_triple(cls, triple: Triple) -> "ObjectSpec":
        """Take the object part of a triple."""
        return cls(triple.obj, triple.object_kind, triple.lang, triple.datatype)

    def as_object_of(self, subject: str, subject_kind: TermKind, predicate: str) -> Triple:
        """Build a triple with this value as its object."""
        return Triple(
            subject=subject,
            subject_kind=subject_kind,
            predicate=predicate,
            obj=self.value,
            object_kind=self.kind,
            lang=self.lang,
            datatype=self.datatype,
        )
