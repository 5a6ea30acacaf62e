"""GitHub API client for issue comments and labels.

This module provides an async wrapper around the GitHub REST API for:
- Creating comments on issues
- Adding labels to issues

Each call is a single request. Rate-limit responses are reported as
RateLimitError and every other failure as GitHubAPIError, leaving it to
the caller whether the event carries on.

Source:
- src/labeler/config.py (github_token, github_base_url)
"""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx


logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API request fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response.
        response_body: Response body from GitHub API.
        request_url: The URL that was requested.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url
        super().__init__(message)


class RateLimitError(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded.

    Attributes:
        reset_at: Unix timestamp when the rate limit resets.
        retry_after: Seconds to wait before retrying.
    """

    def __init__(
        self,
        message: str,
        reset_at: Optional[int] = None,
        retry_after: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.reset_at = reset_at
        self.retry_after = retry_after


class GitHubClient:
    """Async GitHub API client for issue comments and labels.

    Supports both github.com and GitHub Enterprise Server.

    Attributes:
        token: GitHub API token (PAT or GitHub App installation token).
        base_url: Base URL for GitHub API (default: https://api.github.com).
        timeout: Request timeout in seconds.

    Example:
        >>> client = GitHubClient(token="ghp_xxx")
        >>> async with client:
        ...     await client.create_comment("owner", "repo", 123, "Hello!")
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the GitHub client.

        Args:
            token: GitHub API token for authentication.
            base_url: Base URL for GitHub API. Use this to support
                      GitHub Enterprise Server endpoints.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used in tests.
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary.

        Returns:
            The httpx AsyncClient instance.
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._default_headers(),
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "IssueLabeler/1.0",
        }

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: Any,
        exc_val: Any,
        exc_tb: Any,
    ) -> None:
        """Async context manager exit - close the client."""
        await self.close()

    def _parse_int_header(
        self,
        headers: httpx.Headers,
        name: str,
    ) -> Optional[int]:
        value = headers.get(name)
        if value is not None:
            try:
                return int(value)
            except ValueError:
                pass
        return None

    def _is_rate_limited(self, response: httpx.Response) -> bool:
        if response.status_code == 429:
            return True
        if response.status_code == 403:
            remaining = self._parse_int_header(
                response.headers,
                "x-ratelimit-remaining",
            )
            return remaining == 0
        return False

    def _rate_limit_error(self, response: httpx.Response) -> RateLimitError:
        """Build a RateLimitError from a rate-limited response.

        Args:
            response: The rate-limited response from GitHub.

        Returns:
            RateLimitError with information about when to retry.
        """
        reset_at = self._parse_int_header(response.headers, "x-ratelimit-reset")

        retry_after = None
        if reset_at is not None:
            retry_after = max(0, reset_at - int(time.time()))

        # Retry-After takes precedence when present
        retry_after_header = self._parse_int_header(response.headers, "retry-after")
        if retry_after_header is not None:
            retry_after = retry_after_header

        logger.warning(
            "GitHub API rate limit exceeded",
            extra={
                "reset_at": reset_at,
                "retry_after": retry_after,
                "limit": self._parse_int_header(response.headers, "x-ratelimit-limit"),
                "used": self._parse_int_header(response.headers, "x-ratelimit-used"),
            },
        )

        return RateLimitError(
            message="GitHub API rate limit exceeded",
            status_code=response.status_code,
            reset_at=reset_at,
            retry_after=retry_after,
            request_url=str(response.url),
        )

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """Make a single HTTP request to the GitHub API.

        Args:
            method: HTTP method (GET, POST, ...).
            path: API path (e.g., /repos/owner/repo/issues/1/comments).
            json_data: Optional JSON body for the request.

        Returns:
            The HTTP response from GitHub.

        Raises:
            RateLimitError: If rate limit is exceeded.
            GitHubAPIError: For any other failed request.
        """
        try:
            response = await self.client.request(
                method=method,
                url=path,
                json=json_data,
            )
        except httpx.RequestError as e:
            logger.error(
                "GitHub API request failed",
                extra={"path": path, "method": method, "error": str(e)},
            )
            raise GitHubAPIError(
                message=f"GitHub API request failed: {e}",
                request_url=f"{self.base_url}{path}",
            ) from e

        if self._is_rate_limited(response):
            raise self._rate_limit_error(response)

        if response.status_code >= 400:
            error_body = response.text
            logger.error(
                "GitHub API error",
                extra={
                    "status_code": response.status_code,
                    "path": path,
                    "method": method,
                    "response_body": error_body[:500],
                },
            )
            raise GitHubAPIError(
                message=f"GitHub API error: {response.status_code}",
                status_code=response.status_code,
                response_body=error_body,
                request_url=str(response.url),
            )

        return response

    async def create_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> Dict[str, Any]:
        """Create a comment on an issue.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            issue_number: Issue number to comment on.
            body: Comment body in markdown format.

        Returns:
            The created comment data from GitHub API.

        Raises:
            GitHubAPIError: If the request fails.
        """
        path = f"/repos/{owner}/{repo}/issues/{issue_number}/comments"

        logger.info(
            "Creating comment on issue",
            extra={
                "owner": owner,
                "repo": repo,
                "issue_number": issue_number,
                "body_length": len(body),
            },
        )

        response = await self._request(
            method="POST",
            path=path,
            json_data={"body": body},
        )

        result = response.json()
        logger.info(
            "Comment created successfully",
            extra={
                "owner": owner,
                "repo": repo,
                "issue_number": issue_number,
                "comment_id": result.get("id"),
            },
        )

        return result

    async def add_labels(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        labels: List[str],
    ) -> List[Dict[str, Any]]:
        """Add labels to an issue.

        Labels already on the issue are left as they are; GitHub creates
        labels that do not exist in the repository yet.

        Args:
            owner: Repository owner (user or organization).
            repo: Repository name.
            issue_number: Issue number to label.
            labels: Label names to add.

        Returns:
            List of all labels on the issue after adding.

        Raises:
            GitHubAPIError: If the request fails.
        """
        path = f"/repos/{owner}/{repo}/issues/{issue_number}/labels"

        logger.info(
            "Adding labels to issue",
            extra={
                "owner": owner,
                "repo": repo,
                "issue_number": issue_number,
                "labels": labels,
            },
        )

        response = await self._request(
            method="POST",
            path=path,
            json_data={"labels": labels},
        )

        result = response.json()
        logger.info(
            "Labels added successfully",
            extra={
                "owner": owner,
                "repo": repo,
                "issue_number": issue_number,
                "labels": labels,
                "total_labels": len(result),
            },
        )

        return result
