import pandas as pd
from matplotlib.figure import Figure

from tabreport.const import ChartKind, RendererKind
from tabreport.data import Artifact
from tabreport.renderers.base import ChartRenderer


class MatplotlibRenderer(ChartRenderer):
    """Draw one static PNG chart per category."""

    name = str(RendererKind.MATPLOTLIB)

    def render(self, label: str, rows: pd.DataFrame) -> Artifact:
        """Draw the configured chart kind for the rows of one category."""
        config = self.config
        # Figure objects are not tracked by pyplot, so nothing needs closing.
        figure = Figure(figsize=(config.figure_width, config.figure_height))
        ax = figure.add_subplot()

        if config.chart_kind == ChartKind.BAR:
            positions, heights = self._bar_data(label, rows)
            ax.bar(positions, heights, color="#4C72B0")
            ax.tick_params(axis="x", labelrotation=45)
        elif config.chart_kind == ChartKind.HIST:
            ax.hist(self._hist_values(label, rows), bins="auto", color="#4C72B0", edgecolor="white")
        else:
            self._require(rows, config.x, config.y)
            if config.chart_kind == ChartKind.LINE:
                ax.plot(rows[config.x], rows[config.y], marker="o")
            else:
                ax.scatter(rows[config.x], rows[config.y])

        ax.set_title(label)
        if config.x:
            ax.set_xlabel(config.x)
        if config.y:
            ax.set_ylabel(config.y)
        ax.grid(axis="y", linestyle="--", alpha=0.7)

        return self._figure_to_artifact(figure, label, len(rows))
