from .base import AbstractRenderer, ChartRenderer
from .distribution_renderer import DistributionRenderer
from .factory import RendererFactory
from .matplotlib_renderer import MatplotlibRenderer
from .plotly_renderer import PlotlyRenderer
from .table_renderer import TableRenderer

__all__ = [
    "AbstractRenderer",
    "ChartRenderer",
    "DistributionRenderer",
    "MatplotlibRenderer",
    "PlotlyRenderer",
    "RendererFactory",
    "TableRenderer",
]
