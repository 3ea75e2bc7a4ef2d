"""
Microdata Item Reader.

This module reads Item Trees serialized in the microdata JSON shape, as
produced by HTML microdata parsers:

    {
      "items": [
        {
          "id": "http://example.org/alice",
          "type": ["http://schema.org/Person"],
          "properties": {
            "name": ["Alice"],
            "birthDate": [{"value": "1990-01-01", "element": "time"}],
            "knows": [{"type": "http://schema.org/Person", "properties": {"name": "Bob"}}]
          }
        }
      ]
    }

A value is a nested item (an object with ``type`` or ``properties``), a bare
string, or an explicit literal object with ``value`` and optional ``kind``,
``lang`` and ``element`` keys (``vtype`` and ``elt_type`` are accepted as
aliases).

Usage:
    from formats.microdata.item_reader import MicrodataItemReader

    reader = MicrodataItemReader()
    items = reader.parse_file("items.json")
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .microdata_models import Item, LiteralValue, PropertyValue, TermKind

logger = logging.getLogger(__name__)

KIND_KEYS = ("kind", "vtype")
ELEMENT_KEYS = ("element", "elt_type")


class ItemParseError(Exception):
    """Exception raised when an Item Tree document cannot be read."""

    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[str] = None):
        self.file_path = file_path
        self.details = details
        super().__init__(message)


class MicrodataItemReader:
    """
    Read microdata JSON documents into ``Item`` trees.

    Example:
        >>> reader = MicrodataItemReader()
        >>> items = reader.parse('{"items": [{"type": "http://schema.org/Thing"}]}')
        >>> items[0].types
        ['http://schema.org/Thing']
    """

    def parse(self, content: str, file_path: Optional[str] = None) -> List[Item]:
        """
        Parse an Item Tree JSON string.

        Args:
            content: JSON document.
            file_path: Optional path for error messages.

        Returns:
            Top-level items in document order.

        Raises:
            ItemParseError: If the content is not a valid Item Tree.
        """
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ItemParseError(
                f"Invalid JSON: {e}",
                file_path=file_path,
                details=str(e)
            )
        return self.parse_data(data, file_path)

    def parse_file(self, file_path: str) -> List[Item]:
        """
        Parse an Item Tree JSON file.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ItemParseError: If content cannot be parsed.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Item file not found: {file_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise ItemParseError(
                f"Item file {file_path} is not valid UTF-8",
                file_path=file_path,
                details=str(e)
            )

        return self.parse(content, file_path)

    def parse_data(self, data: Any, file_path: Optional[str] = None) -> List[Item]:
        """
        Build items from already decoded JSON.

        Args:
            data: ``{"items": [...]}`` or a bare list of items.
            file_path: Optional path for error messages.

        Returns:
            Top-level items in document order.
        """
        if isinstance(data, dict):
            if "items" not in data:
                raise ItemParseError("Document object must have an 'items' key", file_path=file_path)
            data = data["items"]

        if not isinstance(data, list):
            raise ItemParseError(
                f"Items must be a list, got {type(data).__name__}",
                file_path=file_path
            )

        items = [self._parse_item(raw, f"items[{i}]", file_path) for i, raw in enumerate(data)]
        logger.debug(f"Read {len(items)} top-level items from {file_path or 'data'}")
        return items

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _parse_item(self, raw: Any, where: str, file_path: Optional[str]) -> Item:
        if not isinstance(raw, dict):
            raise ItemParseError(f"{where} must be an object", file_path=file_path)

        item_id = raw.get("id", "")
        if not isinstance(item_id, str):
            raise ItemParseError(f"{where}.id must be a string", file_path=file_path)

        types = raw.get("type", [])
        if isinstance(types, str):
            types = [types]
        if not isinstance(types, list) or not all(isinstance(t, str) for t in types):
            raise ItemParseError(f"{where}.type must be a string or a list of strings", file_path=file_path)

        raw_properties = raw.get("properties", {})
        if not isinstance(raw_properties, dict):
            raise ItemParseError(f"{where}.properties must be an object", file_path=file_path)

        item = Item(id=item_id, types=list(types))
        for name, values in raw_properties.items():
            if not isinstance(values, list):
                values = [values]
            item.properties[name] = [
                self._parse_value(value, f"{where}.properties.{name}[{i}]", file_path)
                for i, value in enumerate(values)
            ]
        return item

    def _parse_value(self, raw: Any, where: str, file_path: Optional[str]) -> PropertyValue:
        if isinstance(raw, str):
            return LiteralValue(raw)

        if not isinstance(raw, dict):
            raise ItemParseError(
                f"{where} must be a string or an object, got {type(raw).__name__}",
                file_path=file_path
            )

        if "type" in raw or "properties" in raw:
            return self._parse_item(raw, where, file_path)

        if "value" not in raw:
            raise ItemParseError(f"{where} must be a nested item or have a 'value'", file_path=file_path)
        return self._parse_literal(raw, where, file_path)

    def _parse_literal(self, raw: Dict[str, Any], where: str, file_path: Optional[str]) -> LiteralValue:
        value = raw["value"]
        if not isinstance(value, str):
            raise ItemParseError(f"{where}.value must be a string", file_path=file_path)

        kind_name = _first_of(raw, KIND_KEYS, TermKind.LITERAL.value)
        try:
            kind = TermKind(kind_name)
        except ValueError:
            allowed = ", ".join(k.value for k in TermKind)
            raise ItemParseError(
                f"Unknown value kind '{kind_name}' at {where} (expected one of: {allowed})",
                file_path=file_path
            )

        lang = raw.get("lang", "")
        element = _first_of(raw, ELEMENT_KEYS, "")
        if not isinstance(lang, str) or not isinstance(element, str):
            raise ItemParseError(f"{where}.lang and element must be strings", file_path=file_path)

        return LiteralValue(value=value, kind=kind, lang=lang, element=element)


def _first_of(raw: Dict[str, Any], keys, default: Any) -> Any:
    for key in keys:
        if key in raw:
            return raw[key]
    return default
