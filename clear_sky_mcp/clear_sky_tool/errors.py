"""Exceptions raised by the clear sky tools and converted to flagged tool results."""

from typing import Iterable, Optional


class ClearSkyError(Exception):
    """Base class for failures reported back to the tool caller."""


class ArgumentValidationError(ClearSkyError):
    """Caller arguments violate the declared shape or range of an operation."""

    def __init__(self, issues: Iterable[str]):
        self.issues = list(issues)
        super().__init__("Invalid arguments: " + ("; ".join(self.issues) or "arguments: invalid"))


class UpstreamUnavailableError(ClearSkyError):
    """The NWS API answered with an error status, a malformed body, or not at all."""

    def __init__(self, url: str, message: Optional[str] = None):
        self.url = url
        super().__init__(message or f"Request to {url} failed.")


class CoverageGapError(ClearSkyError):
    """The coordinate or its data lies outside what the NWS grid covers."""
