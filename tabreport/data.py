"""Data classes for tabreport."""

import html
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from tabreport.const import OutputFormat


class ArtifactFormat(Enum):
    """Formats a rendered artifact can carry."""

    PNG = "png"
    SVG = "svg"
    HTML = "html"

    @property
    def mime_type(self) -> str:
        """MIME type used in data URIs."""
        if self is ArtifactFormat.SVG:
            return "image/svg+xml"
        return f"image/{self.value}"

    @property
    def is_image(self) -> bool:
        """Check if the artifact content is a base64 encoded image."""
        return self is not ArtifactFormat.HTML


@dataclass(frozen=True)
class Artifact:
    """A rendered, displayable unit of output for one category."""

    label: str
    format: ArtifactFormat
    content: str
    row_count: int = 0
    placeholder: bool = False
    # Script URLs the content needs, loaded once per document.
    scripts: tuple[str, ...] = ()

    @classmethod
    def placeholder_for(cls, label: str) -> "Artifact":
        """Build an empty artifact for a label with no rows."""
        return cls(
            label=label,
            format=ArtifactFormat.HTML,
            content=f'<p class="placeholder">No data for {html.escape(label)}.</p>',
            placeholder=True,
        )

    def to_inline(self, output_format: OutputFormat = OutputFormat.HTML) -> str:
        """Get the inline text representation of the artifact.

        Images become data URIs, HTML fragments are returned unchanged.
        Markdown documents embed images with Markdown image syntax and pass
        HTML fragments through, as Pandoc does.
        """
        if not self.format.is_image:
            return self.content

        uri = f"data:{self.format.mime_type};base64,{self.content}"
        if output_format == OutputFormat.MARKDOWN:
            return f"![{self.label}]({uri})"
        return f'<img src="{uri}" alt="{html.escape(self.label, quote=True)}">'


@dataclass(frozen=True)
class TabSection:
    """One tab: a category label paired with its artifact."""

    label: str
    artifact: Artifact


@dataclass
class ReportDocument:
    """A generated report, held only for the duration of one run."""

    title: str
    output_format: OutputFormat
    sections: list[TabSection] = field(default_factory=list)
    text: str = ""

    @property
    def labels(self) -> list[str]:
        """Labels of the sections in emission order."""
        return [section.label for section in self.sections]

    def write(self, path: str | Path) -> Path:
        """Write the document text as UTF-8, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.text, encoding="utf-8")
        return target
