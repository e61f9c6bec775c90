import base64
import io
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import pandas as pd

from tabreport.core.config import ReportConfig
from tabreport.data import Artifact, ArtifactFormat
from tabreport.enumerator import select_rows
from tabreport.exceptions import EmptyCategoryError, MissingColumnError, RenderError, ReportError

if TYPE_CHECKING:
    from matplotlib.figure import Figure


class AbstractRenderer(ABC):
    """Abstract base class for per-category renderers."""

    name: str = "abstract"

    def __init__(self, config: ReportConfig, logger: logging.Logger | None = None) -> None:
        """Initialize the renderer."""
        self.config = config
        self.logger: logging.Logger = logger or logging.getLogger(__name__)

    def render_category(self, table: pd.DataFrame, column: str, label: str) -> Artifact:
        """Render the artifact for one category of the table.

        Only the rows whose grouping value matches the label are passed on
        to the drawing step.

        Args:
            table: The full source table
            column: Grouping column name
            label: Category label to render

        Returns:
            Artifact: The rendered artifact for the label

        Raises:
            EmptyCategoryError: If no rows match the label
            RenderError: If drawing the artifact fails

        """
        rows = select_rows(table, column, label)
        if rows.empty:
            raise EmptyCategoryError(label)

        self.logger.debug("Rendering %s artifact for %r from %d rows", self.name, label, len(rows))
        try:
            return self.render(label, rows)
        except ReportError:
            raise
        except Exception as e:
            raise RenderError(label, str(e)) from e

    @abstractmethod
    def render(self, label: str, rows: pd.DataFrame) -> Artifact:
        """Draw an artifact from the rows of a single category."""

    def _require(self, rows: pd.DataFrame, *columns: str | None) -> None:
        """Check that the configured chart columns exist in the rows."""
        for column in columns:
            if column is not None and column not in rows.columns:
                raise MissingColumnError(column, rows.columns)

    def _figure_to_artifact(self, figure: "Figure", label: str, row_count: int) -> Artifact:
        """Encode a matplotlib figure as a base64 PNG artifact."""
        buffer = io.BytesIO()
        figure.savefig(buffer, format="png", dpi=self.config.dpi, bbox_inches="tight", metadata={"Software": None})
        return Artifact(
            label=label,
            format=ArtifactFormat.PNG,
            content=base64.b64encode(buffer.getvalue()).decode("ascii"),
            row_count=row_count,
        )


class ChartRenderer(AbstractRenderer):
    """Shared data preparation for the x/y chart renderers."""

    def _bar_data(self, label: str, rows: pd.DataFrame) -> tuple[list[str], list[float]]:
        """Get bar positions and heights.

        With x and y the y values are summed per x value. With only x the
        rows are counted per x value. With only y each row is one bar.
        """
        x, y = self.config.x, self.config.y
        self._require(rows, x, y)

        if x is not None and y is not None:
            grouped = rows.groupby(x, sort=False)[y].sum()
            return [str(key) for key in grouped.index], [float(value) for value in grouped.to_numpy()]
        if x is not None:
            counts = rows[x].astype(str).value_counts(sort=False)
            return list(counts.index), [float(value) for value in counts.to_numpy()]
        if y is not None:
            return [str(key) for key in rows.index], [float(value) for value in rows[y].to_numpy()]

        raise RenderError(label, "bar charts need 'x' or 'y'")

    def _hist_values(self, label: str, rows: pd.DataFrame) -> pd.Series:
        """Get the numeric values of the histogram column."""
        column = self.config.y or self.config.x
        if column is None:
            raise RenderError(label, "histograms need 'x' or 'y'")
        self._require(rows, column)
        return pd.to_numeric(rows[column], errors="coerce").dropna()
