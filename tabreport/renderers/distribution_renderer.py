import numpy as np
import pandas as pd
from matplotlib.figure import Figure
from scipy import stats

from tabreport.const import RendererKind
from tabreport.data import Artifact
from tabreport.renderers.base import ChartRenderer

DEFAULT_VALUE_COLUMN = "value"


class DistributionRenderer(ChartRenderer):
    """Draw a density histogram of a sample with a fitted normal curve."""

    name = str(RendererKind.DISTRIBUTION)

    def render(self, label: str, rows: pd.DataFrame) -> Artifact:
        """Draw the sample histogram and overlay the normal density fitted to it."""
        column = self.config.y or self.config.x or DEFAULT_VALUE_COLUMN
        self._require(rows, column)
        values = pd.to_numeric(rows[column], errors="coerce").dropna().to_numpy()

        figure = Figure(figsize=(self.config.figure_width, self.config.figure_height))
        ax = figure.add_subplot()
        ax.hist(values, bins="auto", density=True, color="#4C72B0", alpha=0.6, edgecolor="white", label="sample")

        if len(values) > 1 and np.ptp(values) > 0:
            mean, sd = stats.norm.fit(values)
            grid = np.linspace(values.min(), values.max(), 200)
            ax.plot(grid, stats.norm.pdf(grid, mean, sd), color="#C44E52", label=f"normal fit (mean={mean:.2f}, sd={sd:.2f})")
        else:
            self.logger.debug("Skipping density overlay for %r: sample has no spread", label)

        ax.set_title(label)
        ax.set_xlabel(column)
        ax.set_ylabel("density")
        ax.legend(loc="upper right")

        return self._figure_to_artifact(figure, label, len(rows))
