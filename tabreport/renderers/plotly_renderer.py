import hashlib

import pandas as pd
import plotly.graph_objects as go
from plotly.offline import get_plotlyjs_version

from tabreport.const import ChartKind, RendererKind
from tabreport.data import Artifact, ArtifactFormat
from tabreport.renderers.base import ChartRenderer
from tabreport.utils import slugify


def plotly_script_url() -> str:
    """Get the CDN URL of the plotly.js bundle matching the installed plotly."""
    return f"https://cdn.plot.ly/plotly-{get_plotlyjs_version()}.min.js"


def plot_div_id(label: str) -> str:
    """Get a stable div id that differs for every distinct label."""
    digest = hashlib.sha1(label.encode("utf-8"), usedforsecurity=False).hexdigest()[:8]
    return f"plot-{slugify(label)}-{digest}"


class PlotlyRenderer(ChartRenderer):
    """Draw one interactive chart per category as an HTML fragment."""

    name = str(RendererKind.PLOTLY)

    def render(self, label: str, rows: pd.DataFrame) -> Artifact:
        """Draw the configured chart kind for the rows of one category.

        The div id is derived from the label so repeated runs emit the same
        markup. plotly.js itself is not embedded; the artifact lists it in
        ``scripts`` for the document to load once.
        """
        config = self.config

        if config.chart_kind == ChartKind.BAR:
            positions, heights = self._bar_data(label, rows)
            trace = go.Bar(x=positions, y=heights, name=label)
        elif config.chart_kind == ChartKind.HIST:
            trace = go.Histogram(x=self._hist_values(label, rows).tolist(), name=label)
        else:
            self._require(rows, config.x, config.y)
            mode = "lines+markers" if config.chart_kind == ChartKind.LINE else "markers"
            trace = go.Scatter(x=rows[config.x].tolist(), y=rows[config.y].tolist(), mode=mode, name=label)

        figure = go.Figure(data=[trace])
        figure.update_layout(
            title=label,
            xaxis_title=config.x,
            yaxis_title=config.y,
            width=int(config.figure_width * config.dpi),
            height=int(config.figure_height * config.dpi),
        )

        fragment = figure.to_html(full_html=False, include_plotlyjs=False, div_id=plot_div_id(label))
        return Artifact(
            label=label,
            format=ArtifactFormat.HTML,
            content=fragment,
            row_count=len(rows),
            scripts=(plotly_script_url(),),
        )
