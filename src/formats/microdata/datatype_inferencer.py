"""
Datatype Inferencer.

Infers an XML Schema datatype for a literal from its lexical form and the
element it was read from. Only values taken from a ``<time>`` element are
considered; a datatype declared in the vocabulary registry always wins.

Usage:
    from formats.microdata.datatype_inferencer import find_datatype

    find_datatype("2014-07-10", "time")   # 'http://www.w3.org/2001/XMLSchema#date'
    find_datatype("2014-07-10", "")       # ''
"""

import re
from typing import List, Optional, Pattern, Tuple

from constants import Namespaces

_DATE = r"\d{4}-[01]\d-[0-3]\d"
_TIME = r"[0-2]\d:[0-6]\d:[0-6]\d(\.\d+)?"
_TZ = r"(Z|[+-][0-2]\d:[0-6]\d)"
_DURATION = (
    r"-?P(?=\d|T\d)"
    r"(\d+Y)?(\d+M)?(\d+D)?"
    r"(T(?=\d)(\d+H)?(\d+M)?(\d+(\.\d+)?S)?)?"
)

XSD_GYEAR = Namespaces.XSD + "gYear"
XSD_DATE = Namespaces.XSD + "date"
XSD_DATETIME = Namespaces.XSD + "dateTime"
XSD_TIME = Namespaces.XSD + "time"
XSD_DURATION = Namespaces.XSD + "duration"

# Checked in order; first match wins.
TIME_ELEMENT_RULES: List[Tuple[Pattern[str], str]] = [
    (re.compile(r"^\d{4}$", re.ASCII), XSD_GYEAR),
    (re.compile(rf"^{_DATE}$", re.ASCII), XSD_DATE),
    (re.compile(rf"^{_DATE}T{_TIME}{_TZ}?$", re.ASCII), XSD_DATETIME),
    (re.compile(rf"^{_TIME}$", re.ASCII), XSD_TIME),
    (re.compile(rf"^{_DURATION}$", re.ASCII), XSD_DURATION),
]

TIME_ELEMENT = "time"


def find_datatype(value: str, element: str = "", registry_datatype: Optional[str] = "") -> str:
    """
    Determine the datatype of a literal.

    Args:
        value: Lexical form of the literal.
        element: Source element hint (only ``"time"`` triggers inference).
        registry_datatype: Datatype declared in the registry, if any.

    Returns:
        Datatype URI, or an empty string when no rule applies.
    """
    if registry_datatype:
        return registry_datatype

    if element != TIME_ELEMENT:
        return ""

    for pattern, datatype in TIME_ELEMENT_RULES:
        if pattern.match(value):
            return datatype
    return ""
