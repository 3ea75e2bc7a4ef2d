"""
Vocabulary Resolver.

Determines the base URI used to expand bare property names of a typed item,
and the order/datatype policy applied to a property's values.

Resolution of an item type URI:
1. With ``PROPURI`` enabled, the first registry prefix (in declaration order)
   that the type URI starts with is used. ``contextual`` vocabularies get a
   synthetic ``http://www.w3.org/ns/md?type=...&prop=`` base, ``vocabulary``
   ones use the prefix itself (plus ``#`` when it lacks a separator).
2. Otherwise the type URI is split at its last ``/`` or ``#``.
"""

import logging
import re
from collections import Counter
from typing import Any, Optional, Tuple

from constants import ExtractionOption, Namespaces
from .collection_builder import frag_escape
from .microdata_registry import MultipleValues, PrefixScheme, VocabularyRegistry

logger = logging.getLogger(__name__)

_SPLIT_SLASH_HASH = re.compile(r"^(.*[/#])([^/#]+)$")
_SPLIT_COLON = re.compile(r"^(.*:)([^:/]+)$")


def split_uri(uri: str) -> Tuple[str, str]:
    """
    Split a URI into namespace and local name.

    Examples:
        >>> split_uri("http://example.org/vocab#Thing")
        ('http://example.org/vocab#', 'Thing')
        >>> split_uri("urn:example:Thing")
        ('urn:example:', 'Thing')
    """
    match = _SPLIT_SLASH_HASH.match(uri) or _SPLIT_COLON.match(uri)
    if match:
        return match.group(1), match.group(2)
    return uri, ""


def contextual_base(type_uri: str) -> str:
    """Property base for a contextual vocabulary."""
    return f"{Namespaces.CONTEXTUAL_BASE}?type={frag_escape(type_uri)}&prop="


def resolve_order_datatype(
    definition: Any,
    default_order: MultipleValues,
    options: ExtractionOption,
) -> Tuple[MultipleValues, str]:
    """
    Compute the effective ordering rule and datatype for a property.

    Args:
        definition: Registry record with ``multiple_values`` and ``datatype``
            attributes (property or vocabulary definition), or None.
        default_order: Order used when the record declares none.
        options: Active extraction options.

    Returns:
        ``(order, datatype)``; the datatype is empty when none applies.
    """
    if options & ExtractionOption.MULTIVAL:
        declared = definition.multiple_values if definition is not None else None
        order = declared or default_order
    else:
        order = MultipleValues.UNORDERED

    datatype = ""
    if options & ExtractionOption.DATATYPE and definition is not None:
        datatype = definition.datatype or ""

    return order, datatype


class VocabularyResolver:
    """
    Resolves item types to vocabulary bases and tallies vocabulary usage.

    One resolver belongs to one extraction call; ``used_vocabularies`` counts
    how many typed items resolved through each registry prefix, in order of
    first use.
    """

    def __init__(self, registry: Optional[VocabularyRegistry], options: ExtractionOption):
        self.registry = registry
        self.options = options
        self.used_vocabularies: Counter = Counter()

    def find_vocab_base(self, type_uri: str) -> Tuple[str, str]:
        """
        Determine the property base URI for an item type.

        Args:
            type_uri: Absolute URI of the item's first type.

        Returns:
            ``(vocab_base, registry_prefix)``; the prefix is empty when no
            registry entry applies.
        """
        if self.options & ExtractionOption.PROPURI and self.registry is not None:
            prefix = self.registry.find_prefix(type_uri)
            if prefix is not None:
                self.used_vocabularies[prefix] += 1
                scheme = self.registry.get(prefix).scheme
                if scheme == PrefixScheme.CONTEXTUAL:
                    base = contextual_base(type_uri)
                elif scheme == PrefixScheme.VOCAB_NEEDHASH:
                    base = prefix + "#"
                else:
                    base = prefix
                logger.debug(f"Type <{type_uri}> resolved via registry prefix <{prefix}> to base <{base}>")
                return base, prefix

        base, _ = split_uri(type_uri)
        logger.debug(f"Type <{type_uri}> resolved by splitting to base <{base}>")
        return base, ""
