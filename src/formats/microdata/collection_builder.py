"""
RDF Collection Builder.

Encodes an ordered sequence of RDF terms as an RDF collection, a linked list
of blank nodes threaded with ``rdf:first`` / ``rdf:rest`` and terminated by
``rdf:nil``:

    <s> <p> _:b1 .
    _:b1 rdf:first "a" ; rdf:rest _:b2 .
    _:b2 rdf:first "b" ; rdf:rest rdf:nil .

Also provides ``frag_escape``, the HTML fragment escape used when
synthesizing contextual property URIs.
"""

import logging
from typing import Callable, Sequence

from constants import Namespaces
from .microdata_models import ObjectSpec, TermKind, Triple

logger = logging.getLogger(__name__)

_FRAG_ESCAPES = {
    '"': "%22",
    "#": "%23",
    "%": "%25",
    "<": "%3C",
    ">": "%3E",
    "[": "%5B",
    "\\": "%5C",
    "]": "%5D",
    "^": "%5E",
    "{": "%7B",
    "|": "%7C",
    "}": "%7D",
}
_FRAG_TABLE = str.maketrans(_FRAG_ESCAPES)


def frag_escape(uri: str) -> str:
    """
    Perform the HTML "fragment escape" on a URI.

    Each of ``" # % < > [ \\ ] ^ { | }`` is replaced by its percent-encoded
    form in a single pass.
    """
    return uri.translate(_FRAG_TABLE)


class CollectionBuilder:
    """
    Emits RDF collections through a triple acceptor.

    Args:
        emit: Accepts one triple (returns whether it was newly added).
        new_bnode: Allocates a fresh blank node identifier.
    """

    def __init__(self, emit: Callable[[Triple], bool], new_bnode: Callable[[], str]):
        self._emit = emit
        self._new_bnode = new_bnode

    def build(
        self,
        objects: Sequence[ObjectSpec],
        subject: str,
        subject_kind: TermKind,
        predicate: str,
    ) -> str:
        """
        Attach ``objects`` as an RDF collection to ``subject`` via ``predicate``.

        Args:
            objects: Ordered object terms.
            subject: Subject holding the collection.
            subject_kind: Kind of the subject.
            predicate: Predicate linking subject and list head.

        Returns:
            The list head (a blank node, or ``rdf:nil`` for an empty sequence).
        """
        if not objects:
            self._emit(Triple(subject, subject_kind, predicate, Namespaces.RDF_NIL, TermKind.URI))
            return Namespaces.RDF_NIL

        head = self._new_bnode()
        self._emit(Triple(subject, subject_kind, predicate, head, TermKind.BNODE))

        node = head
        for obj in objects[:-1]:
            next_node = self._new_bnode()
            self._add_member(node, obj, next_node, TermKind.BNODE)
            node = next_node
        self._add_member(node, objects[-1], Namespaces.RDF_NIL, TermKind.URI)

        logger.debug(f"Built collection of {len(objects)} members for <{predicate}> at {head}")
        return head

    def _add_member(self, node: str, obj: ObjectSpec, rest: str, rest_kind: TermKind) -> None:
        """Add the rdf:first / rdf:rest pair of one list node."""
        self._emit(obj.as_object_of(node, TermKind.BNODE, Namespaces.RDF_FIRST))
        self._emit(Triple(node, TermKind.BNODE, Namespaces.RDF_REST, rest, rest_kind))
