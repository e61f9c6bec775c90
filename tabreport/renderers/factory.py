import logging
from typing import Any, ClassVar

from tabreport.const import RendererKind
from tabreport.core.config import ReportConfig
from tabreport.exceptions import RendererNotSupportedError

from .base import AbstractRenderer
from .distribution_renderer import DistributionRenderer
from .matplotlib_renderer import MatplotlibRenderer
from .plotly_renderer import PlotlyRenderer
from .table_renderer import TableRenderer


class RendererFactory:
    """Factory for creating per-category renderers."""

    _renderers: ClassVar[dict[str, Any]] = {
        str(RendererKind.MATPLOTLIB): MatplotlibRenderer,
        str(RendererKind.PLOTLY): PlotlyRenderer,
        str(RendererKind.TABLE): TableRenderer,
        str(RendererKind.DISTRIBUTION): DistributionRenderer,
    }

    @classmethod
    def create_renderer(
        cls, kind: str, config: ReportConfig, logger: logging.Logger | None = None
    ) -> AbstractRenderer:
        """Create renderer of the specified kind."""
        if str(kind).lower() not in cls._renderers:
            raise RendererNotSupportedError(str(kind))

        renderer_class = cls._renderers[str(kind).lower()]
        if not issubclass(renderer_class, AbstractRenderer):
            msg = f"Renderer class {renderer_class} is not a subclass of AbstractRenderer"
            raise TypeError(msg)

        return renderer_class(config, logger=logger)  # type: ignore[no-any-return]

    @classmethod
    def get_supported_renderers(cls) -> list[str]:
        """Get list of supported renderer kinds."""
        return list(cls._renderers.keys())

    @classmethod
    def register_renderer(cls, kind: str, renderer_class: type[AbstractRenderer]) -> None:
        """Register new renderer."""
        cls._renderers[kind.lower()] = renderer_class
