"""
Triple Sink.

Collects the triples produced by an extraction run and exposes them for
serialization. The sink owns the duplicate policy: ``add()`` reports whether
a triple was newly added, and with ``skip_duplicates`` a triple equal to one
already stored is rejected.

Usage:
    from formats.microdata.triple_sink import TripleSink

    sink = TripleSink(skip_duplicates=True)
    sink.add(triple)
    print(sink.serialize(format="turtle"))
"""

import html
import logging
from typing import Any, Dict, Iterator, List, Set

from rdflib import Graph

from constants import Namespaces, OutputConfig
from .microdata_models import Triple

logger = logging.getLogger(__name__)


class TripleSink:
    """
    Ordered triple store for one extraction run.

    Attributes:
        skip_duplicates: Reject triples equal to an already stored one.
        decode_entities: Decode HTML character references in object values.
    """

    def __init__(self, skip_duplicates: bool = False, decode_entities: bool = False):
        self.skip_duplicates = skip_duplicates
        self.decode_entities = decode_entities
        self._triples: List[Triple] = []
        self._seen: Set[Triple] = set()

    def add(self, triple: Triple) -> bool:
        """
        Accept a triple.

        Returns:
            True if the triple was stored, False if it was a rejected duplicate.
        """
        if self.decode_entities:
            decoded = html.unescape(triple.obj)
            if decoded != triple.obj:
                triple = Triple(
                    subject=triple.subject,
                    subject_kind=triple.subject_kind,
                    predicate=triple.predicate,
                    obj=decoded,
                    object_kind=triple.object_kind,
                    lang=triple.lang,
                    datatype=triple.datatype,
                )

        if self.skip_duplicates:
            if triple in self._seen:
                return False
            self._seen.add(triple)

        self._triples.append(triple)
        return True

    def __len__(self) -> int:
        return len(self._triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    @property
    def triples(self) -> List[Triple]:
        """Stored triples in emission order."""
        return list(self._triples)

    @property
    def count(self) -> int:
        """Number of stored triples."""
        return len(self._triples)

    def simple_index(self, flatten_objects: bool = True) -> Dict[str, Dict[str, List[Any]]]:
        """
        Build a ``{subject: {predicate: [objects]}}`` index.

        Args:
            flatten_objects: Keep only object values; otherwise each object is a
                dict with ``value``, ``type`` and, for literals, ``lang`` /
                ``datatype`` when set.
        """
        index: Dict[str, Dict[str, List[Any]]] = {}
        for triple in self._triples:
            objects = index.setdefault(triple.subject, {}).setdefault(triple.predicate, [])
            if flatten_objects:
                objects.append(triple.obj)
                continue

            entry: Dict[str, Any] = {"value": triple.obj, "type": triple.object_kind.value}
            if triple.lang:
                entry["lang"] = triple.lang
            if triple.datatype:
                entry["datatype"] = triple.datatype
            objects.append(entry)
        return index

    def to_graph(self) -> Graph:
        """Build an rdflib Graph holding the stored triples."""
        graph = Graph()
        for prefix, namespace in Namespaces.PREFIXES.items():
            graph.bind(prefix, namespace, override=True, replace=True)
        for triple in self._triples:
            graph.add(triple.to_rdflib())
        return graph

    def serialize(self, format: str = OutputConfig.DEFAULT_FORMAT) -> str:
        """Serialize the stored triples with rdflib."""
        logger.debug(f"Serializing {len(self._triples)} triples as {format}")
        return self.to_graph().serialize(format=format)
