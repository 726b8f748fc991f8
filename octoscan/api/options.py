"""Query options shared by the paginated list endpoints."""

from dataclasses import dataclass, fields
from typing import Any, Dict


@dataclass
class ListOptions:
    """
    Optional parameters for list endpoints that use offset pagination.

    Attributes:
        page: Page of results to retrieve (0 means the first page)
        per_page: Number of results per page (0 means GitHub's default)
    """

    page: int = 0
    per_page: int = 0

    def to_params(self) -> Dict[str, Any]:
        return _non_empty(self)


@dataclass
class ListCursorOptions:
    """
    Optional parameters for list endpoints that use cursor pagination.

    Attributes:
        page: Page token to retrieve
        per_page: Number of results per page
        first: Number of results from the start of the list
        last: Number of results from the end of the list
        after: Cursor to start after
        before: Cursor to end before
        cursor: Opaque cursor used by the audit log endpoints
    """

    page: str = ""
    per_page: int = 0
    first: int = 0
    last: int = 0
    after: str = ""
    before: str = ""
    cursor: str = ""

    def to_params(self) -> Dict[str, Any]:
        return _non_empty(self)


def _non_empty(options) -> Dict[str, Any]:
    return {f.name: getattr(options, f.name) for f in fields(options) if getattr(options, f.name)}
