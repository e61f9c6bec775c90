"""SQL warehouse session.

A thin lifecycle around a SQLAlchemy connection: connect, send a query,
fetch its rows as a DataFrame, clear the result, and disconnect.
"""

import logging
from types import TracebackType
from typing import Any

import pandas as pd
from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError

from tabreport.core.config import WarehouseConfig
from tabreport.exceptions import NoPendingResultError, NotConnectedError, QueryError, WarehouseError
from tabreport.utils import configure_logger


class WarehouseSession:
    """Session against a SQL warehouse."""

    def __init__(self, config: WarehouseConfig, logger: logging.Logger | None = None) -> None:
        """Initialize the session. No connection is made until open()."""
        self.config = config
        self.logger = configure_logger(logger or logging.getLogger(__name__), config.verbose)

        self.engine: Engine | None = None
        self.connection: Connection | None = None
        self._pending: CursorResult | None = None

    @property
    def is_open(self) -> bool:
        """Check if the session holds a live connection."""
        return self.connection is not None

    def open(self) -> None:
        """Connect to the warehouse."""
        if self.is_open:
            return
        try:
            self.engine = create_engine(self.config.url, connect_args=self.config.connect_args)
            self.connection = self.engine.connect()
        except SQLAlchemyError as e:
            if self.engine is not None:
                self.engine.dispose()
                self.engine = None
            msg = f"Failed to connect: {e}"
            raise WarehouseError(msg) from e
        self.logger.info("Connected to %s", self.engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        """Clear any pending result and disconnect."""
        self.clear()
        if self.connection is not None:
            self.connection.close()
            self.connection = None
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self.logger.info("Disconnected")

    def __enter__(self) -> "WarehouseSession":
        """Enter the context manager."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the context manager."""
        self.close()

    def _require_connection(self) -> Connection:
        if self.connection is None:
            raise NotConnectedError
        return self.connection

    def send_query(self, sql: str, params: dict[str, Any] | None = None) -> None:
        """Execute a query and keep its result pending until fetched or cleared.

        Args:
            sql: SQL text. Named parameters use ``:name`` placeholders.
            params: Values for the named parameters

        Raises:
            NotConnectedError: If the session is not open
            QueryError: If the driver rejects the query

        """
        connection = self._require_connection()
        self.clear()

        self.logger.debug("Sending query: %s", sql)
        try:
            self._pending = connection.execute(text(sql), params or {})
        except SQLAlchemyError as e:
            connection.rollback()
            raise QueryError(sql, str(e.orig if getattr(e, "orig", None) else e)) from e

    def fetch(self, n: int | None = None) -> pd.DataFrame:
        """Fetch rows of the pending result.

        Args:
            n: Number of rows to fetch. If None, all remaining rows are fetched.

        Returns:
            pd.DataFrame: The fetched rows, with the result's column names

        Raises:
            NoPendingResultError: If no query is pending

        """
        self._require_connection()
        if self._pending is None:
            raise NoPendingResultError

        columns = list(self._pending.keys()) if self._pending.returns_rows else []
        if not columns:
            return pd.DataFrame()

        rows = self._pending.fetchall() if n is None else self._pending.fetchmany(n)
        return pd.DataFrame([tuple(row) for row in rows], columns=columns)

    def clear(self) -> None:
        """Release the pending result, if any."""
        if self._pending is not None:
            self._pending.close()
            self._pending = None

    def query(self, sql: str, params: dict[str, Any] | None = None) -> pd.DataFrame:
        """Send a query, fetch all of its rows, and clear the result."""
        self.send_query(sql, params)
        try:
            return self.fetch()
        finally:
            self.clear()

    def execute(self, sql: str, params: dict[str, Any] | None = None) -> int:
        """Run a statement that returns no rows and commit it.

        Returns:
            int: Number of affected rows as reported by the driver

        """
        self.send_query(sql, params)
        pending = self._pending
        rowcount = pending.rowcount if pending is not None else 0
        self.clear()
        self._require_connection().commit()
        return rowcount

    def list_tables(self) -> list[str]:
        """List table names in the configured schema."""
        connection = self._require_connection()
        return sorted(inspect(connection).get_table_names(schema=self.config.schema_name))

    def write_table(self, table: pd.DataFrame, name: str, if_exists: str = "fail") -> int:
        """Write a DataFrame to a warehouse table.

        Args:
            table: Rows to write
            name: Target table name
            if_exists: 'fail', 'replace' or 'append'

        Returns:
            int: Number of rows written

        """
        connection = self._require_connection()
        self.clear()
        try:
            table.to_sql(name, connection, schema=self.config.schema_name, if_exists=if_exists, index=False)
            connection.commit()
        except (SQLAlchemyError, ValueError) as e:
            connection.rollback()
            raise QueryError(f"<write {name}>", str(e)) from e
        self.logger.info("Wrote %d rows to %s", len(table), name)
        return len(table)
