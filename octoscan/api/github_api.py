"""
GitHub API client for octoscan.

This module provides the HTTP layer used by the list endpoints: a persistent
requests session carrying GitHub's headers, query parameter handling for
pagination options, and conversion of responses into ``(data, Response)``
pairs that the pagination helpers understand.
"""

import os
import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import requests

from octoscan.core.constants import (
    GITHUB_API_BASE,
    GITHUB_API_VERSION,
    GITHUB_MEDIA_TYPE,
    GITHUB_TOKEN_ENV,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from octoscan.core.exceptions import GitHubAPIError
from octoscan.core.pagination import PaginationOption
from octoscan.api.github_api_rest import GitHubRestMethods
from octoscan.api.response import Response

# Configure module logger
logger = logging.getLogger(__name__)


class GitHubAPI(GitHubRestMethods):
    """
    GitHub REST API client.

    Every list method returns ``(items, Response)`` and accepts trailing
    :class:`PaginationOption` arguments, so it can be handed to
    :func:`octoscan.core.pagination.scan` and friends through a lambda.

    Attributes:
        token: GitHub token used for authentication, if any
        base_url: API root URL, without trailing slash
        headers: HTTP headers sent with every request
        session: Persistent session for making HTTP requests
    """

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = GITHUB_API_BASE,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the GitHub API client.

        Args:
            token: GitHub personal access token. Falls back to the
                   GITHUB_TOKEN environment variable.
            base_url: API root, e.g. for GitHub Enterprise Server
            session: Session to reuse instead of creating a new one
        """
        self.token = (token or "").strip() or self._get_token_from_env()
        self.base_url = base_url.rstrip("/")

        # Set up headers for REST API requests
        self.headers = {
            "Accept": GITHUB_MEDIA_TYPE,
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": USER_AGENT,
        }
        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

        self.session = session or requests.Session()
        self.session.headers.update(self.headers)

        logger.debug(
            "GitHub API client initialized for %s (%s)",
            self.base_url,
            "authenticated" if self.token else "anonymous",
        )

    def _get_token_from_env(self) -> Optional[str]:
        """Get GitHub token from environment variables."""
        token = os.environ.get(GITHUB_TOKEN_ENV)
        if token and token.strip():
            return token.strip()
        return None

    def request(
        self,
        endpoint: str,
        method: str = "GET",
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict] = None,
        options: Iterable[PaginationOption] = (),
        headers: Optional[Dict[str, str]] = None,
    ) -> Tuple[Any, Response]:
        """
        Make a request to the GitHub REST API.

        Args:
            endpoint: API endpoint path (appended to the base URL)
            method: HTTP method to use (GET, POST, etc.)
            params: URL query parameters
            data: Request body, JSON encoded
            options: Pagination options applied to the query parameters
            headers: Extra headers for this request only

        Returns:
            Tuple of the decoded JSON body (None for 204) and the Response

        Raises:
            GitHubAPIError: If GitHub answers with a non-2xx status
            requests.RequestException: On network errors
        """
        url = f"{self.base_url}{endpoint}"
        for opt in options:
            params = opt.apply(params)

        logger.debug(f"{method} {url} params={params}")
        raw = self.session.request(
            method, url, params=params, json=data, headers=headers, timeout=REQUEST_TIMEOUT
        )
        response = Response(raw)

        if raw.status_code == 204:
            return None, response

        if not 200 <= raw.status_code < 300:
            message = _error_message(raw)
            logger.debug(f"GitHub API error: {raw.status_code} - {message}")
            raise GitHubAPIError(raw.status_code, message, url)

        return raw.json(), response


def _error_message(raw: requests.Response) -> str:
    """Extract GitHub's error message from a failed response."""
    try:
        body = raw.json()
    except ValueError:
        return raw.text or raw.reason or "unknown error"
    if isinstance(body, dict) and body.get("message"):
        return body["message"]
    return raw.text
