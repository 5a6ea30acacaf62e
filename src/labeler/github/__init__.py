"""GitHub API client for issue comments and labels."""

from src.labeler.github.client import (
    GitHubAPIError,
    GitHubClient,
    RateLimitError,
)

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "RateLimitError",
]
