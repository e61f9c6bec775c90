"""tabreport - dynamic tabbed reports from tabular data."""

from .const import ChartKind, EmptyCategoryPolicy, OutputFormat, RendererKind
from .core.config import ReportConfig, WarehouseConfig
from .data import Artifact, ArtifactFormat, ReportDocument, TabSection
from .distributions import Distribution, DistributionSpec, simulate, simulation_table
from .emitter import TabEmitter
from .enumerator import enumerate_categories, select_rows
from .exceptions import (
    EmptyCategoryError,
    MissingColumnError,
    RenderError,
    ReportError,
    WarehouseError,
)
from .pipeline import build_sections, generate_report, render_parameterised
from .renderers import RendererFactory
from .tidy import TidySpec, load_table, tidy_table
from .warehouse import WarehouseSession

__all__ = [
    "Artifact",
    "ArtifactFormat",
    "ChartKind",
    "Distribution",
    "DistributionSpec",
    "EmptyCategoryError",
    "EmptyCategoryPolicy",
    "MissingColumnError",
    "OutputFormat",
    "RenderError",
    "RendererFactory",
    "RendererKind",
    "ReportConfig",
    "ReportDocument",
    "ReportError",
    "TabEmitter",
    "TabSection",
    "TidySpec",
    "WarehouseConfig",
    "WarehouseError",
    "WarehouseSession",
    "build_sections",
    "enumerate_categories",
    "generate_report",
    "load_table",
    "render_parameterised",
    "select_rows",
    "simulate",
    "simulation_table",
    "tidy_table",
]
