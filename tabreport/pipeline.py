"""Report pipeline: build sections first, then emit the document in one step."""

import logging
from pathlib import Path

import pandas as pd

from tabreport.const import EmptyCategoryPolicy
from tabreport.core.config import ReportConfig
from tabreport.data import Artifact, ReportDocument, TabSection
from tabreport.emitter import TabEmitter
from tabreport.enumerator import enumerate_categories, select_rows
from tabreport.exceptions import EmptyCategoryError, MissingColumnError, ReportError
from tabreport.renderers import AbstractRenderer, RendererFactory
from tabreport.utils import configure_logger, slugify

logger = logging.getLogger(__name__)


def build_sections(
    table: pd.DataFrame,
    config: ReportConfig,
    renderer: AbstractRenderer | None = None,
) -> list[TabSection]:
    """Render one section per category, in category order.

    Labels come from ``config.categories`` when set, otherwise from the
    grouping column in first-appearance order. Labels without rows are
    handled by ``config.empty_category_policy``. Any other rendering error
    aborts the pass.

    Args:
        table: Source table
        config: Report configuration
        renderer: Renderer to use. If None, one is created from ``config.renderer``.

    Returns:
        list[TabSection]: The ordered (label, artifact) pairs

    Raises:
        MissingColumnError: If the grouping column does not exist
        EmptyCategoryError: If a label has no rows and the policy is ``error``
        RenderError: If an artifact cannot be drawn

    """
    if config.group_column not in table.columns:
        raise MissingColumnError(config.group_column, table.columns)

    renderer = renderer or RendererFactory.create_renderer(config.renderer, config, logger=logger)
    labels = config.categories if config.categories is not None else enumerate_categories(table, config.group_column)
    logger.info("Building %d sections grouped by %r", len(labels), config.group_column)

    sections: list[TabSection] = []
    for label in labels:
        try:
            artifact = renderer.render_category(table, config.group_column, label)
        except EmptyCategoryError:
            if config.empty_category_policy == EmptyCategoryPolicy.ERROR:
                raise
            if config.empty_category_policy == EmptyCategoryPolicy.SKIP:
                logger.warning("Skipping category %r: no matching rows", label)
                continue
            logger.warning("Category %r has no matching rows, emitting placeholder", label)
            artifact = Artifact.placeholder_for(label)
        except ReportError:
            logger.exception("Aborting report: category %r failed to render", label)
            raise
        sections.append(TabSection(label=label, artifact=artifact))

    return sections


def generate_report(
    table: pd.DataFrame,
    config: ReportConfig,
    renderer: AbstractRenderer | None = None,
    title: str | None = None,
) -> ReportDocument:
    """Generate a tabbed report document for a table.

    Args:
        table: Source table
        config: Report configuration
        renderer: Optional renderer overriding ``config.renderer``
        title: Optional title overriding ``config.title``

    Returns:
        ReportDocument: The sections and the emitted document text

    """
    configure_logger(logger, config.verbose)

    sections = build_sections(table, config, renderer)
    title = title or config.format_title()
    emitter = TabEmitter(config.output_format, logger=logger)

    return ReportDocument(
        title=title,
        output_format=config.output_format,
        sections=sections,
        text=emitter.render_document(sections, title=title),
    )


def render_parameterised(
    table: pd.DataFrame,
    parameter_column: str,
    config: ReportConfig,
    output_dir: str | Path,
    renderer: AbstractRenderer | None = None,
) -> list[Path]:
    """Write one tabbed report per value of a parameter column.

    Each report is built from only the rows of its parameter value and is
    tabbed by ``config.group_column``. Every document is generated before
    any file is written, so a failure leaves no partial output.

    Args:
        table: Source table
        parameter_column: Column whose distinct values each get a report
        config: Report configuration. ``{parameter}`` in the title is replaced
            by the parameter value.
        output_dir: Directory for the report files
        renderer: Optional renderer overriding ``config.renderer``

    Returns:
        list[Path]: Written report paths, in parameter order

    """
    configure_logger(logger, config.verbose)

    documents: list[tuple[str, ReportDocument]] = []
    for value in enumerate_categories(table, parameter_column):
        subset = select_rows(table, parameter_column, value)
        document = generate_report(subset, config, renderer=renderer, title=config.format_title(value))
        documents.append((value, document))

    output_dir = Path(output_dir)
    paths: list[Path] = []
    used: set[str] = set()
    for value, document in documents:
        stem = slugify(value)
        while stem in used:
            stem = f"{stem}-{len(used)}"
        used.add(stem)
        path = document.write(output_dir / f"{stem}.{config.output_format.extension}")
        logger.info("Wrote report for %s=%r to %s", parameter_column, value, path)
        paths.append(path)

    return paths
