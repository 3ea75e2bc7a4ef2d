"""
Extraction Post-Processor.

Adds the optional document-level triples once every item has been extracted:

- ``TOPITEMS``: an RDF collection of all top-level items, attached to the
  document base URI with ``md:item``.
- ``RDFAVOCAB``: one ``rdfa:usesVocabulary`` triple per registry prefix that
  resolved at least one item type, in order of first use.
- ``VENTAIL``: ``owl:equivalentProperty`` / ``rdfs:subPropertyOf`` triples
  between each expanded predicate and its entailed predicates.
"""

import logging
from typing import TYPE_CHECKING, List, Sequence, Tuple

from constants import ExtractionOption, Namespaces
from .microdata_models import ObjectSpec, TermKind, Triple

if TYPE_CHECKING:
    from .microdata_extractor import ExtractionContext

logger = logging.getLogger(__name__)

ENTAILMENT_PREDICATES = {
    "equivalentProperty": Namespaces.OWL_EQUIVALENT_PROPERTY,
    "subPropertyOf": Namespaces.RDFS_SUB_PROPERTY_OF,
}


class PostProcessor:
    """Emits the document-level extra triples selected by the options."""

    def __init__(self, options: ExtractionOption):
        self.options = options

    def process(self, context: "ExtractionContext", top_items: Sequence[Tuple[str, TermKind]]) -> int:
        """
        Emit the extra triples for one extraction call.

        Args:
            context: State of the finished extraction call.
            top_items: ``(subject, kind)`` of every top-level item, in document order.

        Returns:
            Number of triples handed to the sink.
        """
        added = 0
        if self.options & ExtractionOption.TOPITEMS:
            added += self._add_top_items(context, top_items)
        if self.options & ExtractionOption.RDFAVOCAB:
            added += self._add_vocabulary_usage(context)
        if self.options & ExtractionOption.VENTAIL:
            added += self._add_entailments(context)

        if added:
            logger.debug(f"Post-processing emitted {added} triples")
        return added

    def _add_top_items(self, context: "ExtractionContext", top_items: Sequence[Tuple[str, TermKind]]) -> int:
        objects = [ObjectSpec(subject, kind) for subject, kind in top_items]
        before = len(context.sink)
        context.collections.build(
            objects,
            context.base_uri,
            TermKind.for_identifier(context.base_uri),
            Namespaces.MD_ITEM,
        )
        return len(context.sink) - before

    def _add_vocabulary_usage(self, context: "ExtractionContext") -> int:
        subject_kind = TermKind.for_identifier(context.base_uri)
        added = 0
        for prefix in context.resolver.used_vocabularies:
            added += context.add(Triple(
                context.base_uri, subject_kind,
                Namespaces.RDFA_USES_VOCABULARY,
                prefix, TermKind.URI,
            ))
        return added

    def _add_entailments(self, context: "ExtractionContext") -> int:
        triples: List[Triple] = []
        for relation, by_original in context.expansions.items():
            predicate = ENTAILMENT_PREDICATES[relation]
            for original, targets in by_original.items():
                for entailed in targets:
                    triples.append(Triple(original, TermKind.URI, predicate, entailed, TermKind.URI))
        return sum(context.add(triple) for triple in triples)
