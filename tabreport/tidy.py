"""Loading and reshaping of wide statistical spreadsheets.

Published statistical tables (labour force surveys and the like) are
usually wide: one row per series, one column per period. ``tidy_table``
turns them into long tables that the report pipeline can group by.
"""

import logging
import zipfile
from pathlib import Path

import pandas as pd
from pydantic import BaseModel, Field, model_validator

from tabreport.exceptions import MissingColumnError, TidyError

logger = logging.getLogger(__name__)

CSV_SUFFIXES = {".csv", ".txt"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


class TidySpec(BaseModel):
    """How to reshape a wide table into a long one."""

    id_columns: list[str] = Field(
        ...,
        min_length=1,
        description="Columns identifying each series; kept as-is on every output row.",
    )
    value_columns: list[str] = Field(
        default=[],
        description="Wide columns to stack into rows. If empty, every non-id column is stacked.",
    )
    var_name: str = Field(default="variable", description="Name of the column holding the former column names.")
    value_name: str = Field(default="value", description="Name of the column holding the stacked values.")
    rename: dict[str, str] = Field(default={}, description="Final column renames, applied after reshaping.")
    numeric: bool = Field(default=True, description="Whether to coerce stacked values to numbers.")
    dropna: bool = Field(default=True, description="Whether to drop rows whose stacked value is null.")

    @model_validator(mode="after")
    def validate_disjoint_columns(self) -> "TidySpec":
        """Validate that a column is not both an id and a value column."""
        overlap = set(self.id_columns) & set(self.value_columns)
        if overlap:
            msg = f"Columns cannot be both id and value columns: {sorted(overlap)}"
            raise ValueError(msg)
        return self


def load_table(path: str | Path, sheet_name: str | int | None = None, skiprows: int = 0) -> pd.DataFrame:
    """Load a CSV or Excel file into a DataFrame.

    Args:
        path: File to read
        sheet_name: Excel sheet to read. If None, the first sheet is used.
        skiprows: Leading rows to skip (title blocks above the header row)

    Returns:
        The loaded table

    Raises:
        TidyError: If the file is missing, of an unsupported type, or cannot be parsed

    """
    path = Path(path)
    suffix = path.suffix.lower()
    if not path.exists():
        msg = f"File not found: {path}"
        raise TidyError(msg)

    if suffix not in CSV_SUFFIXES | EXCEL_SUFFIXES:
        msg = f"Unsupported file type {suffix!r} for {path}"
        raise TidyError(msg)

    logger.debug("Loading %s (sheet=%s, skiprows=%d)", path, sheet_name, skiprows)
    try:
        if suffix in CSV_SUFFIXES:
            return pd.read_csv(path, skiprows=skiprows)
        return pd.read_excel(path, sheet_name=0 if sheet_name is None else sheet_name, skiprows=skiprows)
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        msg = f"Failed to read {path}: {e}"
        raise TidyError(msg) from e


def tidy_table(table: pd.DataFrame, spec: TidySpec) -> pd.DataFrame:
    """Select, reshape to long form, and rename in a single pass.

    Args:
        table: Wide source table
        spec: Reshaping instructions

    Returns:
        Long table with the id columns, ``spec.var_name`` and ``spec.value_name``

    Raises:
        MissingColumnError: If an id or value column does not exist

    """
    for column in [*spec.id_columns, *spec.value_columns]:
        if column not in table.columns:
            raise MissingColumnError(column, table.columns)

    value_columns = spec.value_columns or [column for column in table.columns if column not in spec.id_columns]
    selected = table[[*spec.id_columns, *value_columns]]

    long = selected.melt(
        id_vars=spec.id_columns,
        value_vars=value_columns,
        var_name=spec.var_name,
        value_name=spec.value_name,
    )
    if spec.numeric:
        long[spec.value_name] = pd.to_numeric(long[spec.value_name], errors="coerce")
    if spec.dropna:
        long = long.dropna(subset=[spec.value_name])

    long = long.rename(columns=spec.rename).reset_index(drop=True)
    logger.info("Reshaped %d x %d table into %d rows", len(table), len(table.columns), len(long))
    return long
