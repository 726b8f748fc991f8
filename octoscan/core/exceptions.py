"""Exceptions raised by octoscan."""

from typing import Optional


class GitHubAPIError(Exception):
    """
    Error response returned by the GitHub REST API.

    Attributes:
        status_code: HTTP status code of the failed response
        message: Error message reported by GitHub (or the raw body)
        url: Requested URL
    """

    def __init__(self, status_code: int, message: str, url: Optional[str] = None):
        self.status_code = status_code
        self.message = message
        self.url = url
        super().__init__(f"{status_code} {message}" + (f" ({url})" if url else ""))


class PaginationError(RuntimeError):
    """A paginated iterator produced an error where none was tolerated."""


class IteratorNotExhaustedError(RuntimeError):
    """The error function of a scan iterator was read before iteration ended."""
