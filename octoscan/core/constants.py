"""Constants used across the octoscan package."""

# GitHub API constants
GITHUB_API_BASE = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
GITHUB_MEDIA_TYPE = "application/vnd.github+json"
STAR_MEDIA_TYPE = "application/vnd.github.star+json"  # includes starred_at
USER_AGENT = "octoscan"

# Environment variable consulted when no token is passed explicitly
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"

# Pagination defaults
DEFAULT_PER_PAGE = 30
MAX_PER_PAGE = 100  # Maximum allowed by GitHub

REQUEST_TIMEOUT = 30  # seconds
