import os

from pydantic import BaseModel, Field, model_validator

from tabreport.const import (
    DEFAULT_REPORT_TITLE,
    WAREHOUSE_SCHEMA_ENV,
    WAREHOUSE_URL_ENV,
    ChartKind,
    EmptyCategoryPolicy,
    OutputFormat,
    RendererKind,
)


class ReportConfig(BaseModel):
    """Configuration for a tabbed report run."""

    # Core settings
    group_column: str = Field(
        ...,
        description="The column whose distinct values become tabs (e.g., 'species', 'region').",
    )
    title: str = Field(
        default=DEFAULT_REPORT_TITLE,
        description="The report title. May contain '{parameter}' for parameterised reports.",
    )
    output_format: OutputFormat = Field(
        default=OutputFormat.HTML,
        description="The document format: 'html' for a standalone page, 'markdown' for an R Markdown tabset.",
    )
    renderer: RendererKind = Field(
        default=RendererKind.TABLE,
        description="The per-category renderer used to draw each tab's artifact.",
    )
    empty_category_policy: EmptyCategoryPolicy = Field(
        default=EmptyCategoryPolicy.PLACEHOLDER,
        description="What to do when a category label matches no rows.",
    )
    categories: list[str] | None = Field(
        default=None,
        description="Explicit tab labels in display order. If None, labels are discovered from `group_column`.",
    )

    # Chart settings
    x: str | None = Field(default=None, description="The column plotted on the x axis.")
    y: str | None = Field(default=None, description="The column plotted on the y axis.")
    chart_kind: ChartKind = Field(default=ChartKind.BAR, description="The chart type drawn by chart renderers.")
    figure_width: float = Field(default=7.0, gt=0, description="Figure width in inches.")
    figure_height: float = Field(default=4.0, gt=0, description="Figure height in inches.")
    dpi: int = Field(default=100, gt=0, description="Resolution of raster artifacts.")

    # Behaviour settings
    verbose: bool = Field(default=False, description="Whether to print verbose output.")

    @model_validator(mode="after")
    def validate_chart_columns(self) -> "ReportConfig":
        """Validate that line and scatter charts have both axes."""
        if self.chart_kind in {ChartKind.LINE, ChartKind.SCATTER} and (self.x is None or self.y is None):
            msg = f"Chart kind '{self.chart_kind}' requires both 'x' and 'y'"
            raise ValueError(msg)
        return self

    @model_validator(mode="after")
    def validate_categories_unique(self) -> "ReportConfig":
        """Validate that explicit categories contain no duplicates."""
        if self.categories is not None and len(set(self.categories)) != len(self.categories):
            msg = "'categories' must not contain duplicate labels"
            raise ValueError(msg)
        return self

    def format_title(self, parameter: str | None = None) -> str:
        """Get the title, substituting the report parameter if any."""
        if parameter is None:
            return self.title.replace("{parameter}", "").strip()
        return self.title.replace("{parameter}", parameter)


class WarehouseConfig(BaseModel):
    """Configuration for a SQL warehouse session."""

    url: str = Field(
        ...,
        description="SQLAlchemy database URL (e.g., 'snowflake://user@account/db', 'sqlite:///local.db').",
    )
    schema_name: str | None = Field(
        default=None,
        description="The schema used for table listing and writes. If None, the connection default is used.",
    )
    connect_args: dict = Field(
        default={},
        description="Extra keyword arguments passed to the DBAPI driver's connect() call.",
    )
    verbose: bool = Field(default=False, description="Whether to print verbose output.")

    @classmethod
    def from_env(cls, **overrides: object) -> "WarehouseConfig":
        """Build a config from TABREPORT_WAREHOUSE_URL and TABREPORT_WAREHOUSE_SCHEMA."""
        values: dict[str, object] = {}
        if url := os.environ.get(WAREHOUSE_URL_ENV):
            values["url"] = url
        if schema := os.environ.get(WAREHOUSE_SCHEMA_ENV):
            values["schema_name"] = schema
        values.update(overrides)
        if "url" not in values:
            msg = f"Environment variable {WAREHOUSE_URL_ENV} is not set"
            raise ValueError(msg)
        return cls.model_validate(values)
