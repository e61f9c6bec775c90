"""Tab group emission.

Turns an ordered sequence of (label, artifact) sections into document text
with a single Jinja2 render. Markdown output follows the R Markdown tabset
convention: a ``{.tabset}`` header opens the group, one sub-header per
section follows, and an empty ``## {-}`` header closes it. HTML output
wraps the sections in a ``<div class="tabset">`` block.
"""

import logging
from collections.abc import Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from tabreport.const import DEFAULT_REPORT_TITLE, HTML_TAB_MARKERS, MARKDOWN_TAB_MARKERS, OutputFormat, TabMarkers
from tabreport.data import TabSection

_TABSET_TEMPLATES = {
    OutputFormat.HTML: "tabset.html",
    OutputFormat.MARKDOWN: "tabset.md",
}
_DOCUMENT_TEMPLATES = {
    OutputFormat.HTML: "document.html",
    OutputFormat.MARKDOWN: "document.md",
}


def create_environment() -> Environment:
    """Create the Jinja2 environment for the bundled templates."""
    return Environment(
        loader=PackageLoader("tabreport", "templates"),
        autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


class TabEmitter:
    """Emit a tab group, or a full document around one, for rendered sections."""

    def __init__(
        self,
        output_format: OutputFormat | str = OutputFormat.HTML,
        environment: Environment | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the emitter."""
        self.output_format = OutputFormat(output_format)
        self.environment = environment or create_environment()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def markers(self) -> TabMarkers:
        """The start and end markers for this emitter's format."""
        return HTML_TAB_MARKERS if self.output_format == OutputFormat.HTML else MARKDOWN_TAB_MARKERS

    def emit(self, sections: Sequence[TabSection], title: str | None = None) -> str:
        """Emit the tab group for the sections, in input order.

        Args:
            sections: Ordered (label, artifact) pairs
            title: Heading of the tab group in Markdown output

        Returns:
            The start marker, one header plus inline artifact per section, and
            the end marker

        """
        context = [
            {"label": section.label, "inline": section.artifact.to_inline(self.output_format)}
            for section in sections
        ]
        self.logger.debug("Emitting %d %s tab sections", len(context), self.output_format)

        template = self.environment.get_template(_TABSET_TEMPLATES[self.output_format])
        markers = self.markers
        return template.render(
            sections=context,
            start=markers.opening(title or DEFAULT_REPORT_TITLE),
            end=markers.end,
        )

    def render_document(self, sections: Sequence[TabSection], title: str | None = None) -> str:
        """Emit a standalone document containing the tab group.

        HTML documents carry the stylesheet and script that make the tabs
        selectable. Markdown documents carry an R Markdown front matter block.
        Scripts required by the artifacts are loaded once, before the body.
        """
        title = title or DEFAULT_REPORT_TITLE
        body = self.emit(sections, title=title)
        scripts = list(dict.fromkeys(script for section in sections for script in section.artifact.scripts))
        template = self.environment.get_template(_DOCUMENT_TEMPLATES[self.output_format])
        return template.render(title=title, body=body, scripts=scripts)
