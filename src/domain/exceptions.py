"""
Domain error taxonomy for the analytics service.
Entry points map these onto transport-level status codes; nothing here knows
about HTTP.
"""


class AnalyticsError(Exception):
    """Base class for every error the query layer raises on purpose."""


class MissingParameter(AnalyticsError, ValueError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name.capitalize()} parameter is required")
        self.name = name


class InvalidField(AnalyticsError, ValueError):
    def __init__(self, field: str, valid: list[str]) -> None:
        super().__init__(f"Invalid field. Must be one of: {', '.join(valid)}")
        self.field = field
        self.valid = valid


class InvalidDateRange(AnalyticsError, ValueError):
    pass


class NoDataFound(AnalyticsError, LookupError):
    def __init__(self, message: str = "No data found for the specified criteria") -> None:
        super().__init__(message)


class StoreFailure(AnalyticsError, RuntimeError):
    """The record store was unreachable or failed while answering a query."""


class InvalidSelection(AnalyticsError, ValueError):
    """A comparison was requested for no companies, or for too many."""


class UpstreamError(AnalyticsError):
    """The analytics API answered with an error, or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
