"""Constants used throughout tabreport.

This module defines enumerations for output formats, renderer kinds,
chart kinds and empty-category policies, plus the marker strings that
delimit a tab group in each output format.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class StrEnum(str, Enum):
    """A string enumeration that combines str and Enum functionality.

    Members are strings and can be compared directly to string values.
    Lookup by value is case-insensitive.
    """

    def __new__(cls, value: str) -> "StrEnum":
        """Create a new StrEnum member."""
        if not isinstance(value, str):
            msg = f"StrEnum values must be strings, got {type(value).__name__}"
            raise TypeError(msg)

        obj = str.__new__(cls, value)
        obj._value_ = value
        return obj

    def __str__(self) -> str:
        """Return the string value."""
        return str(self.value)

    def __repr__(self) -> str:
        """Return a detailed representation."""
        return f"<{self.__class__.__name__}.{self.name}: '{self.value}'>"

    @classmethod
    def _missing_(cls, value: Any) -> "StrEnum":
        """Handle missing values during lookup."""
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.lower():
                    return member

        msg = f"{value!r} is not a valid {cls.__name__}"
        raise ValueError(msg)


class OutputFormat(StrEnum):
    r"""Document formats the tab emitter can produce."""

    HTML = "html"
    MARKDOWN = "markdown"

    @property
    def extension(self) -> str:
        """File extension used when writing a document of this format."""
        return "html" if self is OutputFormat.HTML else "md"


class RendererKind(StrEnum):
    r"""Built-in per-category renderers."""

    MATPLOTLIB = "matplotlib"
    PLOTLY = "plotly"
    TABLE = "table"
    DISTRIBUTION = "distribution"


class ChartKind(StrEnum):
    r"""Chart types drawn by the chart renderers."""

    BAR = "bar"
    LINE = "line"
    SCATTER = "scatter"
    HIST = "hist"


class EmptyCategoryPolicy(StrEnum):
    r"""What to do when a category label matches no rows.

    PLACEHOLDER emits a section with a placeholder artifact, SKIP drops the
    section, ERROR aborts the generation pass.
    """

    PLACEHOLDER = "placeholder"
    SKIP = "skip"
    ERROR = "error"


@dataclass(frozen=True)
class TabMarkers:
    r"""Sentinel lines that open and close a tab group.

    ``start`` may contain a ``{title}`` field for formats whose opening
    line carries the group heading.
    """

    start: str
    end: str

    def opening(self, title: str) -> str:
        """Get the start line with the heading filled in."""
        return self.start.replace("{title}", title)


MARKDOWN_TAB_MARKERS = TabMarkers(start="## {title} {.tabset}", end="## {-}")
HTML_TAB_MARKERS = TabMarkers(start='<div class="tabset">', end="</div><!-- /tabset -->")

DEFAULT_REPORT_TITLE = "Report"
WAREHOUSE_URL_ENV = "TABREPORT_WAREHOUSE_URL"
WAREHOUSE_SCHEMA_ENV = "TABREPORT_WAREHOUSE_SCHEMA"
