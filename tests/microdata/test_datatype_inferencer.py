"""
Tests for XSD datatype inference on <time> values.
"""

import pytest

from formats.microdata.datatype_inferencer import (
    XSD_DATE,
    XSD_DATETIME,
    XSD_DURATION,
    XSD_GYEAR,
    XSD_TIME,
    find_datatype,
)


@pytest.mark.unit
class TestTimeElementInference:
    """Lexical pattern matching for values read from <time> elements."""

    @pytest.mark.parametrize("value,expected", [
        ("2014", XSD_GYEAR),
        ("2014-07-10", XSD_DATE),
        ("13:30:00", XSD_TIME),
        ("13:30:00.25", XSD_TIME),
        ("2014-07-10T13:30:00", XSD_DATETIME),
        ("2014-07-10T13:30:00Z", XSD_DATETIME),
        ("2014-07-10T13:30:00+02:00", XSD_DATETIME),
        ("P3D", XSD_DURATION),
        ("PT1H30M", XSD_DURATION),
        ("-P1Y2M3DT4H5M6.5S", XSD_DURATION),
    ])
    def test_recognized_values(self, value, expected):
        """Each lexical form maps to its XSD datatype."""
        assert find_datatype(value, "time") == expected

    @pytest.mark.parametrize("value", [
        "P", "PT", "P1DT", "next tuesday", "14", "2014-7-10",
        "\u0662\u0660\u0661\u0664", "\uff12\uff10\uff11\uff14-07-10", "P\u0663D",
    ])
    def test_unrecognized_values(self, value):
        """Values matching no rule get no datatype."""
        assert find_datatype(value, "time") == ""

    def test_hint_required(self):
        """Without the time element hint nothing is inferred."""
        assert find_datatype("2014-07-10", "") == ""
        assert find_datatype("2014-07-10", "span") == ""


@pytest.mark.unit
class TestRegistryPrecedence:
    """Registry-declared datatypes win over inference."""

    def test_registry_datatype_wins(self):
        custom = "http://example.org/types#day"
        assert find_datatype("2014-07-10", "time", custom) == custom

    def test_registry_datatype_without_hint(self):
        assert find_datatype("hello", "", XSD_DATE) == XSD_DATE

    def test_none_registry_datatype_falls_back(self):
        assert find_datatype("2014", "time", None) == XSD_GYEAR
