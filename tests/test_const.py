# ruff: noqa: PLR2004
"""Tests for tabreport.const module."""

import pytest

from tabreport.const import (
    HTML_TAB_MARKERS,
    MARKDOWN_TAB_MARKERS,
    ChartKind,
    EmptyCategoryPolicy,
    OutputFormat,
    RendererKind,
    StrEnum,
)


class TestStrEnum:
    """Test StrEnum functionality."""

    def test_str_enum_values(self) -> None:
        """Test members compare equal to their string values."""
        assert OutputFormat.HTML == "html"
        assert RendererKind.MATPLOTLIB == "matplotlib"
        assert EmptyCategoryPolicy.PLACEHOLDER == "placeholder"

    def test_str_enum_invalid_type(self) -> None:
        """Test StrEnum rejects non-string values."""
        with pytest.raises(TypeError, match="StrEnum values must be strings"):

            class InvalidEnum(StrEnum):
                NUMBER = 123

    def test_str_enum_string_methods(self) -> None:
        """Test __str__ and __repr__."""
        assert str(ChartKind.SCATTER) == "scatter"
        assert repr(ChartKind.SCATTER) == "<ChartKind.SCATTER: 'scatter'>"

    def test_str_enum_case_insensitive_lookup(self) -> None:
        """Test case-insensitive lookup."""
        assert OutputFormat("HTML") == OutputFormat.HTML
        assert OutputFormat("Markdown") == OutputFormat.MARKDOWN

    def test_str_enum_invalid_value(self) -> None:
        """Test lookup of an unknown value."""
        with pytest.raises(ValueError, match="'pdf' is not a valid OutputFormat"):
            OutputFormat("pdf")

        with pytest.raises(ValueError, match="123 is not a valid OutputFormat"):
            OutputFormat._missing_(123)


class TestOutputFormat:
    """Test OutputFormat helpers."""

    def test_extension(self) -> None:
        """Test file extensions per format."""
        assert OutputFormat.HTML.extension == "html"
        assert OutputFormat.MARKDOWN.extension == "md"


class TestTabMarkers:
    """Test tab group markers."""

    def test_markers_are_distinct(self) -> None:
        """Test start and end markers differ for each format."""
        for markers in (HTML_TAB_MARKERS, MARKDOWN_TAB_MARKERS):
            assert markers.start != markers.end
            assert markers.start not in markers.end

    def test_opening_fills_title(self) -> None:
        """Test the Markdown start line carries the heading."""
        assert MARKDOWN_TAB_MARKERS.opening("Iris") == "## Iris {.tabset}"
        assert HTML_TAB_MARKERS.opening("Iris") == HTML_TAB_MARKERS.start
