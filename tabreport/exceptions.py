"""Custom exceptions for tabreport."""

from collections.abc import Iterable


class ReportError(Exception):
    """Base exception for all report generation errors."""

    def __init__(self, message: str) -> None:
        """Initialize the ReportError."""
        super().__init__(message)


class MissingColumnError(ReportError):
    """Raised when a required column does not exist in the source table."""

    def __init__(self, column: str, available: Iterable[str] | None = None) -> None:
        """Initialize the MissingColumnError."""
        self.column = column
        self.available = [str(name) for name in available] if available is not None else []
        message = f"Column {column!r} not found in table"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class EmptyCategoryError(ReportError):
    """Raised when a category label matches no rows."""

    def __init__(self, label: str) -> None:
        """Initialize the EmptyCategoryError."""
        self.label = label
        super().__init__(f"No rows found for category {label!r}")


class RenderError(ReportError):
    """Raised when a renderer fails to draw an artifact."""

    def __init__(self, label: str, reason: str) -> None:
        """Initialize the RenderError."""
        self.label = label
        super().__init__(f"Failed to render category {label!r}: {reason}")


class RendererNotSupportedError(ReportError):
    """Raised when the renderer kind is not registered."""

    def __init__(self, kind: str) -> None:
        """Initialize the RendererNotSupportedError."""
        super().__init__(f"Renderer {kind} is not supported")


class TidyError(ReportError):
    """Raised when a source table cannot be loaded or reshaped."""


class DistributionError(ReportError):
    """Raised for invalid distribution parameters or intervals."""


class WarehouseError(ReportError):
    """Base exception for SQL warehouse errors."""


class NotConnectedError(WarehouseError):
    """Raised when the warehouse session is not open."""

    def __init__(self) -> None:
        """Initialize the NotConnectedError."""
        super().__init__("Session is not connected. Please call open() before sending queries.")


class NoPendingResultError(WarehouseError):
    """Raised when fetching without a pending query result."""

    def __init__(self) -> None:
        """Initialize the NoPendingResultError."""
        super().__init__("No pending result. Please call send_query() before fetch().")


class QueryError(WarehouseError):
    """Raised when the database driver rejects a query."""

    def __init__(self, sql: str, reason: str) -> None:
        """Initialize the QueryError."""
        self.sql = sql
        super().__init__(f"Query failed: {reason}\n{sql}")
