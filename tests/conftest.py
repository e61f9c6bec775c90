"""Shared test fixtures and configuration for tabreport tests."""

import matplotlib
import pandas as pd
import pytest

matplotlib.use("Agg")


@pytest.fixture
def iris_table() -> pd.DataFrame:
    """Small iris-like table with categories in a known first-appearance order."""
    return pd.DataFrame(
        {
            "species": ["setosa", "setosa", "versicolor", "virginica", "versicolor", "setosa"],
            "sepal_length": [5.1, 4.9, 7.0, 6.3, 6.4, 4.7],
            "sepal_width": [3.5, 3.0, 3.2, 3.3, 3.2, 3.2],
            "site": ["north", "south", "north", "south", "south", "north"],
        }
    )


@pytest.fixture
def labour_table() -> pd.DataFrame:
    """Wide labour-force style table: one row per series, one column per month."""
    return pd.DataFrame(
        {
            "state": ["NSW", "NSW", "VIC", "VIC"],
            "sex": ["Males", "Females", "Males", "Females"],
            "2023-01": [2100.5, 1900.2, 1700.0, 1550.3],
            "2023-02": [2110.1, "..", 1705.4, 1560.0],
            "notes": ["a", "b", "c", "d"],
        }
    )
