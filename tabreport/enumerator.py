"""Category discovery and row selection for per-category reports."""

import pandas as pd

from tabreport.exceptions import MissingColumnError


def _require_column(table: pd.DataFrame, column: str) -> None:
    if column not in table.columns:
        raise MissingColumnError(column, table.columns)


def enumerate_categories(table: pd.DataFrame, column: str) -> list[str]:
    """Get the distinct labels of a grouping column in first-appearance order.

    Null values are ignored. Labels are the string form of each value.

    Args:
        table: Source table
        column: Grouping column name

    Returns:
        Unique labels, ordered by first appearance in the table

    Raises:
        MissingColumnError: If the column does not exist

    """
    _require_column(table, column)

    labels: list[str] = []
    seen: set[str] = set()
    for value in pd.unique(table[column].dropna()):
        label = str(value)
        if label not in seen:
            seen.add(label)
            labels.append(label)
    return labels


def select_rows(table: pd.DataFrame, column: str, label: str) -> pd.DataFrame:
    """Get the rows whose grouping value matches a label.

    Args:
        table: Source table
        column: Grouping column name
        label: Category label as returned by enumerate_categories

    Returns:
        Matching rows, in table order

    Raises:
        MissingColumnError: If the column does not exist

    """
    _require_column(table, column)

    values = table[column]
    mask = values.notna() & (values.astype(str) == label)
    return table.loc[mask]
