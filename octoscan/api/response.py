"""Page descriptor for GitHub API responses."""

import logging
import re
from typing import Dict, Optional
from urllib.parse import parse_qs, urlparse

import requests

logger = logging.getLogger(__name__)

# "%" not followed by two hex digits
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class Response:
    """
    GitHub API response with the pagination values taken from its Link header.

    Integer fields are 0 and string fields are "" when the Link header does
    not advertise them.

    Attributes:
        raw: The underlying requests.Response
        next_page: Page number of the next page (offset pagination)
        prev_page: Page number of the previous page
        first_page: Page number of the first page
        last_page: Page number of the last page
        next_page_token: Next page value when it is not an integer (e.g. ``since``)
        cursor: Next cursor for endpoints paginated with ``cursor``
        before: Cursor of the previous page (cursor pagination)
        after: Cursor of the next page (cursor pagination)
    """

    def __init__(self, raw: requests.Response):
        self.raw = raw
        self.next_page = 0
        self.prev_page = 0
        self.first_page = 0
        self.last_page = 0
        self.next_page_token = ""
        self.cursor = ""
        self.before = ""
        self.after = ""
        self._populate_page_values()

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self):
        return self.raw.headers

    def _populate_page_values(self) -> None:
        for rel, link in self.raw.links.items():
            url = link.get("url", "")
            # requests keys links without a rel by their url
            if link.get("rel") != rel or not url:
                logger.debug(f"Skipping Link entry without rel: {link!r}")
                continue
            if _INVALID_ESCAPE.search(url):
                logger.debug(f"Skipping Link entry with invalid URL: {url!r}")
                continue

            query = _parse_query(url)

            cursor = query.get("cursor", "")
            if cursor:
                if rel == "next":
                    self.cursor = cursor
                continue

            page = query.get("page", "")
            since = query.get("since", "")
            before = query.get("before", "")
            after = query.get("after", "")
            if not (page or since or before or after):
                continue
            if since and not page:
                page = since

            if rel == "next":
                number = _to_int(page)
                if number is None:
                    self.next_page_token = page
                else:
                    self.next_page = number
                self.after = after
            elif rel == "prev":
                self.prev_page = _to_int(page) or 0
                self.before = before
            elif rel == "first":
                self.first_page = _to_int(page) or 0
            elif rel == "last":
                self.last_page = _to_int(page) or 0

    def __repr__(self) -> str:
        return (
            f"Response(status_code={self.status_code}, next_page={self.next_page}, "
            f"after={self.after!r}, cursor={self.cursor!r})"
        )


def _parse_query(url: str) -> Dict[str, str]:
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items() if v}


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except ValueError:
        return None
