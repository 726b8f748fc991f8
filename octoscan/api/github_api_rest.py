"""GitHub REST API list endpoints."""

import logging
from typing import Dict, Iterator, List, Optional, Tuple, Union

from octoscan.core.constants import STAR_MEDIA_TYPE
from octoscan.core.pagination import PaginationOption, scan2
from octoscan.api.options import ListCursorOptions, ListOptions
from octoscan.api.response import Response
from octoscan.utils.date_utils import parse_timestamp

logger = logging.getLogger(__name__)

Options = Union[ListOptions, ListCursorOptions, None]


class GitHubRestMethods:
    """
    Implementation of paginated GitHub REST API list methods.

    This class is mixed into :class:`octoscan.api.github_api.GitHubAPI`,
    which provides ``request``. Each method returns one page of results and
    the Response describing where the next page is.
    """

    def _list(
        self, endpoint: str, opts: Options, options: Tuple[PaginationOption, ...], **kwargs
    ) -> Tuple[List[Dict], Response]:
        params = opts.to_params() if opts is not None else {}
        data, response = self.request(endpoint, params=params, options=options, **kwargs)
        if data is None:
            return [], response
        if not isinstance(data, list):
            # API returned unexpected data type
            logger.warning(f"Unexpected data type from {endpoint}: {type(data)}")
            return [], response
        return data, response

    def list_issue_comments(
        self,
        owner: str,
        repo: str,
        number: int,
        opts: Optional[ListOptions] = None,
        *options: PaginationOption,
    ) -> Tuple[List[Dict], Response]:
        """
        List comments on an issue or pull request.

        Uses offset pagination.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Issue number
            opts: Page size and starting page
            options: Pagination options supplied by the scan helpers
        """
        endpoint = f"/repos/{owner}/{repo}/issues/{number}/comments"
        return self._list(endpoint, opts, options)

    def list_stargazers(
        self,
        owner: str,
        repo: str,
        opts: Optional[ListOptions] = None,
        *options: PaginationOption,
    ) -> Tuple[List[Dict], Response]:
        """
        List users who starred a repository, with the time they starred it.

        Uses offset pagination. ``starred_at`` values are returned as
        datetimes.
        """
        endpoint = f"/repos/{owner}/{repo}/stargazers"
        stars, response = self._list(
            endpoint, opts, options, headers={"Accept": STAR_MEDIA_TYPE}
        )

        for star in stars:
            if "starred_at" in star:
                star["starred_at"] = parse_timestamp(star["starred_at"])
        return stars, response

    def list_org_repos(
        self,
        org: str,
        opts: Optional[ListOptions] = None,
        *options: PaginationOption,
    ) -> Tuple[List[Dict], Response]:
        """List repositories of an organization. Uses offset pagination."""
        return self._list(f"/orgs/{org}/repos", opts, options)

    def list_repository_security_advisories_for_org(
        self,
        org: str,
        opts: Optional[ListCursorOptions] = None,
        *options: PaginationOption,
    ) -> Tuple[List[Dict], Response]:
        """
        List repository security advisories for an organization.

        Uses cursor pagination through the ``after`` parameter.
        """
        return self._list(f"/orgs/{org}/security-advisories", opts, options)

    def list_org_audit_log(
        self,
        org: str,
        opts: Optional[ListCursorOptions] = None,
        *options: PaginationOption,
    ) -> Tuple[List[Dict], Response]:
        """List audit log events of an organization. Uses cursor pagination."""
        return self._list(f"/orgs/{org}/audit-log", opts, options)

    # Iterators over all pages of the list methods above. Each yields
    # (item, error) pairs as produced by scan2.

    def list_issue_comments_iter(
        self, owner: str, repo: str, number: int, opts: Optional[ListOptions] = None
    ) -> Iterator[Tuple[Optional[Dict], Optional[Exception]]]:
        """Iterate over the comments of an issue across all pages."""
        return scan2(lambda p: self.list_issue_comments(owner, repo, number, opts, p))

    def list_stargazers_iter(
        self, owner: str, repo: str, opts: Optional[ListOptions] = None
    ) -> Iterator[Tuple[Optional[Dict], Optional[Exception]]]:
        return scan2(lambda p: self.list_stargazers(owner, repo, opts, p))

    def list_org_repos_iter(
        self, org: str, opts: Optional[ListOptions] = None
    ) -> Iterator[Tuple[Optional[Dict], Optional[Exception]]]:
        return scan2(lambda p: self.list_org_repos(org, opts, p))

    def list_repository_security_advisories_for_org_iter(
        self, org: str, opts: Optional[ListCursorOptions] = None
    ) -> Iterator[Tuple[Optional[Dict], Optional[Exception]]]:
        return scan2(
            lambda p: self.list_repository_security_advisories_for_org(org, opts, p)
        )

    def list_org_audit_log_iter(
        self, org: str, opts: Optional[ListCursorOptions] = None
    ) -> Iterator[Tuple[Optional[Dict], Optional[Exception]]]:
        return scan2(lambda p: self.list_org_audit_log(org, opts, p))
