"""Command-line interface for octoscan."""

import sys
import argparse
import json
import logging
from itertools import islice
from urllib.parse import urlparse

from octoscan.api.github_api import GitHubAPI
from octoscan.api.options import ListOptions
from octoscan.core.constants import DEFAULT_PER_PAGE, MAX_PER_PAGE
from octoscan.core.exceptions import PaginationError
from octoscan.core.pagination import must_iter, scan2
from octoscan.utils.date_utils import format_timestamp, parse_timestamp

logger = logging.getLogger("octoscan")


def parse_owner_repo(value: str):
    """Split 'owner/repo' or a github.com URL into (owner, repo)."""
    if value.startswith(("http://", "https://")):
        parsed_url = urlparse(value)
        path_parts = parsed_url.path.strip("/").split("/")
        if len(path_parts) < 2 or parsed_url.netloc.lower() != "github.com":
            raise ValueError("Invalid GitHub URL structure.")
        owner, repo = path_parts[0], path_parts[1]
        if repo.endswith(".git"):
            repo = repo[:-4]
        return owner, repo

    parts = value.split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError("Use 'owner/repo' or a full GitHub URL.")
    return parts[0], parts[1]


def non_negative_int(value: str) -> int:
    """argparse type for counts that cannot be negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="octoscan - list GitHub issue comments across all pages"
    )
    parser.add_argument("owner_repo", help="GitHub repository in format 'owner/repo' or full URL")
    parser.add_argument("issue", type=int, help="Issue or pull request number")
    parser.add_argument(
        "-t", "--token", help="GitHub personal access token (or set GITHUB_TOKEN env var)"
    )
    parser.add_argument(
        "--per-page",
        type=int,
        default=DEFAULT_PER_PAGE,
        help=f"Results per page (max {MAX_PER_PAGE})",
    )
    parser.add_argument(
        "--limit", type=non_negative_int, help="Stop after this many comments"
    )
    parser.add_argument(
        "-f", "--format", choices=["text", "json"], default="text", help="Output format"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose DEBUG logging")
    return parser


def format_comment(comment: dict) -> str:
    body = comment.get("body") or ""
    if len(body) > 50:
        body = body[:50]
    created = parse_timestamp(comment.get("created_at"))
    created_str = format_timestamp(created) if created else "unknown"
    login = (comment.get("user") or {}).get("login", "ghost")
    return f"{created_str} {login}: {body!r}"


def main(argv=None) -> int:
    """Command-line entry point."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    args = build_parser().parse_args(argv)

    if args.verbose:
        logger.setLevel(logging.DEBUG)
        logging.getLogger("urllib3").setLevel(logging.INFO)

    try:
        owner, repo = parse_owner_repo(args.owner_repo)
    except ValueError as e:
        logger.error(f"Invalid repository: {e}")
        return 1

    per_page = max(1, min(args.per_page, MAX_PER_PAGE))
    api = GitHubAPI(args.token)
    if not api.token:
        logger.warning(
            "No GitHub token provided via --token or GITHUB_TOKEN env var. "
            "API rate limits will be significantly lower."
        )

    opts = ListOptions(per_page=per_page)
    logger.info(f"Listing comments for issue {args.issue} in repository {owner}/{repo}")

    comments = must_iter(
        scan2(lambda p: api.list_issue_comments(owner, repo, args.issue, opts, p))
    )
    if args.limit is not None:
        comments = islice(comments, args.limit)

    try:
        if args.format == "json":
            sys.stdout.write(json.dumps(list(comments), indent=2, default=str) + "\n")
        else:
            count = 0
            for comment in comments:
                sys.stdout.write(format_comment(comment) + "\n")
                count += 1
            logger.info(f"Listed {count} comment(s)")
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return 130
    except PaginationError as e:
        logger.error(f"Listing comments failed: {e}", exc_info=args.verbose)
        if not args.verbose:
            logger.error("Run with -v or --verbose for detailed traceback.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
