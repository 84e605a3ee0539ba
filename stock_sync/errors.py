"""Exception hierarchy for the stock synchronizer.

ConfigError and FetchError abort the run. The others are raised per product
and the orchestrator records them without stopping the loop.
"""


class StockSyncError(Exception):
    """Base class for all stock sync errors."""


class ConfigError(StockSyncError):
    """Required configuration is missing or malformed."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid configuration: " + "; ".join(problems))


class _HttpError(StockSyncError):
    """Error carrying an optional HTTP status code and response body."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is not None:
            message = f"{message}: HTTP {status_code} {body}".rstrip()
        super().__init__(message)


class FetchError(_HttpError):
    """Catalog request failed."""


class UpdateError(_HttpError):
    """Stock update request failed."""


class NavigationError(StockSyncError):
    """Supplier page could not be loaded."""


class ScrapeError(StockSyncError):
    """Supplier page loaded but no stock quantity could be read."""


class StockNotFound(ScrapeError):
    """No "Available Stock" label on the page."""


class StockUnparsable(ScrapeError):
    """Label found but no digits follow it."""
