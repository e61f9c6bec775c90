# ruff: noqa: PLR2004
"""Tests for the tab emitter."""

import re

import pytest

from tabreport.const import HTML_TAB_MARKERS, MARKDOWN_TAB_MARKERS, OutputFormat
from tabreport.data import Artifact, ArtifactFormat, TabSection
from tabreport.emitter import TabEmitter


def _section(label: str) -> TabSection:
    return TabSection(label, Artifact(label=label, format=ArtifactFormat.HTML, content=f"<p>artifact {label}</p>"))


@pytest.fixture
def sections() -> list[TabSection]:
    """Two sections in discovery order."""
    return [_section("setosa"), _section("versicolor")]


class TestMarkdownEmitter:
    """Test the R Markdown tabset output."""

    def test_exact_output(self, sections: list[TabSection]) -> None:
        """Test the full emitted text."""
        text = TabEmitter(OutputFormat.MARKDOWN).emit(sections, title="Iris")

        assert text == (
            "## Iris {.tabset}\n"
            "\n"
            "### setosa\n"
            "\n"
            "<p>artifact setosa</p>\n"
            "\n"
            "### versicolor\n"
            "\n"
            "<p>artifact versicolor</p>\n"
            "\n"
            "## {-}\n"
        )

    def test_markers_and_headers(self, sections: list[TabSection]) -> None:
        """Test one start marker, one end marker and one header per section."""
        text = TabEmitter(OutputFormat.MARKDOWN).emit(sections)
        lines = text.splitlines()

        assert text.count(MARKDOWN_TAB_MARKERS.opening("Report")) == 1
        assert lines.count(MARKDOWN_TAB_MARKERS.end) == 1
        assert [line for line in lines if line.startswith("### ")] == ["### setosa", "### versicolor"]

    def test_header_followed_by_artifact(self, sections: list[TabSection]) -> None:
        """Test each header is immediately followed by its own artifact."""
        lines = [line for line in TabEmitter(OutputFormat.MARKDOWN).emit(sections).splitlines() if line]

        for index, line in enumerate(lines):
            if line.startswith("### "):
                assert lines[index + 1] == f"<p>artifact {line[4:]}</p>"

    def test_no_sections(self) -> None:
        """Test only the markers are emitted for zero sections."""
        text = TabEmitter(OutputFormat.MARKDOWN).emit([], title="Empty")

        assert text == "## Empty {.tabset}\n\n## {-}\n"

    def test_image_artifact(self) -> None:
        """Test images are embedded with Markdown image syntax."""
        artifact = Artifact(label="a", format=ArtifactFormat.PNG, content="dGVzdA==")

        text = TabEmitter(OutputFormat.MARKDOWN).emit([TabSection("a", artifact)])

        assert "![a](data:image/png;base64,dGVzdA==)" in text

    def test_document_front_matter(self, sections: list[TabSection]) -> None:
        """Test the Markdown document carries an R Markdown header."""
        text = TabEmitter("markdown").render_document(sections, title='Iris "2024"')

        assert text.startswith('---\ntitle: "Iris \\"2024\\""\noutput: html_document\n---\n')
        assert text.count(MARKDOWN_TAB_MARKERS.opening('Iris "2024"')) == 1


class TestHtmlEmitter:
    """Test the HTML tabset output."""

    def test_markers_and_order(self, sections: list[TabSection]) -> None:
        """Test markers bound the group and headers keep input order."""
        text = TabEmitter(OutputFormat.HTML).emit(sections)

        assert text.count(HTML_TAB_MARKERS.start) == 1
        assert text.count(HTML_TAB_MARKERS.end) == 1
        assert text.index(HTML_TAB_MARKERS.start) < text.index("setosa") < text.index("versicolor")
        assert text.rstrip().endswith(HTML_TAB_MARKERS.end)
        assert re.findall(r'<h3 class="tab-title">(.*?)</h3>', text) == ["setosa", "versicolor"]

    def test_header_followed_by_artifact(self, sections: list[TabSection]) -> None:
        """Test each header line is followed by its artifact line."""
        lines = TabEmitter(OutputFormat.HTML).emit(sections).splitlines()

        for index, line in enumerate(lines):
            match = re.fullmatch(r'<h3 class="tab-title">(.*)</h3>', line)
            if match:
                assert lines[index + 1] == f"<p>artifact {match.group(1)}</p>"

    def test_labels_escaped(self) -> None:
        """Test labels are HTML-escaped while artifacts are not."""
        text = TabEmitter(OutputFormat.HTML).emit([_section("<b>bold</b>")])

        assert '<h3 class="tab-title">&lt;b&gt;bold&lt;/b&gt;</h3>' in text
        assert "<p>artifact <b>bold</b></p>" in text

    def test_no_sections(self) -> None:
        """Test only the markers are emitted for zero sections."""
        text = TabEmitter(OutputFormat.HTML).emit([])

        assert text.count(HTML_TAB_MARKERS.start) == 1
        assert text.count(HTML_TAB_MARKERS.end) == 1
        assert "tab-title" not in text

    def test_document(self, sections: list[TabSection]) -> None:
        """Test the standalone page wraps the tab group once."""
        text = TabEmitter(OutputFormat.HTML).render_document(sections, title="Iris & friends")

        assert text.startswith("<!DOCTYPE html>")
        assert "<title>Iris &amp; friends</title>" in text
        assert text.count(HTML_TAB_MARKERS.start) == 1
        assert text.count(HTML_TAB_MARKERS.end) == 1
        assert "<script>" in text

    def test_deterministic(self, sections: list[TabSection]) -> None:
        """Test repeated emission is byte-identical."""
        emitter = TabEmitter(OutputFormat.HTML)

        assert emitter.render_document(sections) == emitter.render_document(sections)


class TestDocumentScripts:
    """Test scripts required by artifacts are loaded once per document."""

    @staticmethod
    def _scripted(label: str) -> TabSection:
        artifact = Artifact(
            label=label,
            format=ArtifactFormat.HTML,
            content=f'<div id="plot-{label}"></div>',
            scripts=("https://cdn.example.org/plot.js",),
        )
        return TabSection(label, artifact)

    @pytest.mark.parametrize("output_format", [OutputFormat.HTML, OutputFormat.MARKDOWN])
    def test_script_loaded_once(self, output_format: OutputFormat) -> None:
        """Test two sections sharing a script produce one script tag."""
        sections = [self._scripted("a"), self._scripted("b")]

        text = TabEmitter(output_format).render_document(sections, title="Plots")

        assert text.count('<script src="https://cdn.example.org/plot.js" charset="utf-8"></script>') == 1
        assert text.index("cdn.example.org") < text.index('<div id="plot-a">')

    def test_no_scripts_without_artifacts_needing_them(self, sections: list[TabSection]) -> None:
        """Test documents without scripted artifacts carry no script includes."""
        text = TabEmitter(OutputFormat.MARKDOWN).render_document(sections, title="Iris")

        assert "<script" not in text
        assert text.startswith('---\ntitle: "Iris"\noutput: html_document\n---\n\n## Iris {.tabset}\n')


class TestMarkersInOutput:
    """Test the emitted tab group is bounded by the marker constants."""

    def test_markdown_bounds(self, sections: list[TabSection]) -> None:
        """Test the Markdown group opens and closes with the marker lines."""
        emitter = TabEmitter(OutputFormat.MARKDOWN)
        lines = emitter.emit(sections, title="Iris").splitlines()

        assert lines[0] == emitter.markers.opening("Iris")
        assert lines[-1] == emitter.markers.end

    def test_html_bounds(self, sections: list[TabSection]) -> None:
        """Test the HTML group opens and closes with the marker lines."""
        emitter = TabEmitter(OutputFormat.HTML)
        lines = emitter.emit(sections).splitlines()

        assert lines[0] == emitter.markers.start
        assert lines[-1] == emitter.markers.end
