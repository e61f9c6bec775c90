"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from tabreport.const import ChartKind, EmptyCategoryPolicy, OutputFormat, RendererKind
from tabreport.core.config import ReportConfig, WarehouseConfig


class TestReportConfig:
    """Test ReportConfig model."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = ReportConfig(group_column="species")

        assert config.output_format == OutputFormat.HTML
        assert config.renderer == RendererKind.TABLE
        assert config.empty_category_policy == EmptyCategoryPolicy.PLACEHOLDER
        assert config.chart_kind == ChartKind.BAR
        assert config.categories is None
        assert not config.verbose

    def test_string_values_coerced(self) -> None:
        """Test enum fields accept their string values."""
        config = ReportConfig(group_column="g", output_format="markdown", renderer="plotly", chart_kind="hist", x="v")

        assert config.output_format == OutputFormat.MARKDOWN
        assert config.renderer == RendererKind.PLOTLY
        assert config.chart_kind == ChartKind.HIST

    def test_group_column_required(self) -> None:
        """Test group_column has no default."""
        with pytest.raises(ValidationError):
            ReportConfig()

    @pytest.mark.parametrize("kind", [ChartKind.LINE, ChartKind.SCATTER])
    def test_line_and_scatter_need_both_axes(self, kind: ChartKind) -> None:
        """Test line and scatter charts require x and y."""
        with pytest.raises(ValidationError, match="requires both 'x' and 'y'"):
            ReportConfig(group_column="g", chart_kind=kind, x="a")

    def test_duplicate_categories_rejected(self) -> None:
        """Test explicit categories must be unique."""
        with pytest.raises(ValidationError, match="duplicate"):
            ReportConfig(group_column="g", categories=["a", "b", "a"])

    def test_positive_figure_settings(self) -> None:
        """Test figure size and dpi must be positive."""
        with pytest.raises(ValidationError):
            ReportConfig(group_column="g", dpi=0)

    def test_format_title(self) -> None:
        """Test parameter substitution in titles."""
        config = ReportConfig(group_column="g", title="Labour force: {parameter}")

        assert config.format_title("NSW") == "Labour force: NSW"
        assert config.format_title() == "Labour force:"


class TestWarehouseConfig:
    """Test WarehouseConfig model."""

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test reading the URL and schema from the environment."""
        monkeypatch.setenv("TABREPORT_WAREHOUSE_URL", "sqlite://")
        monkeypatch.setenv("TABREPORT_WAREHOUSE_SCHEMA", "main")

        config = WarehouseConfig.from_env()

        assert config.url == "sqlite://"
        assert config.schema_name == "main"

    def test_from_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test explicit overrides win over the environment."""
        monkeypatch.setenv("TABREPORT_WAREHOUSE_URL", "sqlite://")

        config = WarehouseConfig.from_env(url="sqlite:///other.db", verbose=True)

        assert config.url == "sqlite:///other.db"
        assert config.verbose

    def test_from_env_missing_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a missing URL is reported."""
        monkeypatch.delenv("TABREPORT_WAREHOUSE_URL", raising=False)

        with pytest.raises(ValueError, match="TABREPORT_WAREHOUSE_URL"):
            WarehouseConfig.from_env()
