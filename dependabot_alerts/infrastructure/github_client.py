"""GitHub REST API client for workflow run queries."""

import logging
import os
from typing import List, Optional, Dict, Any
import requests

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the GitHub API returns an error response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(GitHubAPIError):
    """Raised when the GitHub token is rejected."""
    pass


class RateLimitExceeded(GitHubAPIError):
    """Raised when GitHub API rate limit is exceeded."""
    pass


class GitHubRestClient:
    """Client for the GitHub Actions REST API."""

    # Requests are not retried: a failed call surfaces to the caller as-is.

    DEFAULT_API_URL = "https://api.github.com"
    API_VERSION = "2022-11-28"
    PER_PAGE = 100
    REQUEST_TIMEOUT_SECONDS = 30

    def __init__(self, token: Optional[str] = None, api_url: Optional[str] = None):
        """
        Initialize GitHub REST client.

        Args:
            token: GitHub token. If None, uses GITHUB_TOKEN env var.
            api_url: API base URL. If None, uses GITHUB_API_URL env var
                (set by GitHub Enterprise runners) or the public API.
        """
        if token is None:
            token = os.getenv("GITHUB_TOKEN")
        if api_url is None:
            api_url = os.getenv("GITHUB_API_URL") or self.DEFAULT_API_URL

        self.token = token
        self.api_url = api_url.rstrip("/")
        self.headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.API_VERSION,
        }

        if self.token:
            self.headers["Authorization"] = f"Bearer {self.token}"

    def _get(self, url: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        """
        Issue a GET request and translate error responses.

        Args:
            url: Absolute request URL
            params: Query parameters

        Returns:
            The successful response

        Raises:
            AuthenticationError: If the token is rejected (401)
            RateLimitExceeded: If the rate limit is exhausted
            GitHubAPIError: For any other non-success status
            requests.RequestException: If the request itself fails
        """
        response = requests.get(
            url,
            params=params,
            headers=self.headers,
            timeout=self.REQUEST_TIMEOUT_SECONDS
        )

        if response.ok:
            return response

        message = self._error_message(response)

        if response.status_code == 401:
            raise AuthenticationError(
                f"Authentication failed: {message}. Check your GitHub token.",
                response.status_code
            )
        if response.status_code in (403, 429):
            remaining = response.headers.get("X-RateLimit-Remaining")
            if remaining == "0" or "rate limit" in message.lower():
                reset_time = response.headers.get("X-RateLimit-Reset", "unknown")
                raise RateLimitExceeded(
                    f"API rate limit exceeded (resets at {reset_time}): {message}",
                    response.status_code
                )
            raise GitHubAPIError(f"Forbidden: {message}", response.status_code)

        raise GitHubAPIError(
            f"GitHub API request failed with status {response.status_code}: {message}",
            response.status_code
        )

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text
        if isinstance(payload, dict) and payload.get("message"):
            return payload["message"]
        return response.text

    def list_workflow_runs(
        self,
        owner: str,
        repo: str,
        actor: Optional[str] = None,
        status: Optional[str] = None,
        created: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        List workflow runs for a repository.

        Follows ``Link: rel="next"`` headers so that the returned list is
        complete for the given filters.

        Args:
            owner: Repository owner
            repo: Repository name
            actor: Only runs triggered by this user (e.g. "dependabot[bot]")
            status: Only runs with this status or conclusion (e.g. "failure")
            created: Date filter in GitHub search syntax (e.g. ">=2025-01-01")

        Returns:
            Raw workflow run objects in the order returned by GitHub
        """
        params: Dict[str, Any] = {"per_page": self.PER_PAGE}
        if actor:
            params["actor"] = actor
        if status:
            params["status"] = status
        if created:
            params["created"] = created

        url: Optional[str] = f"{self.api_url}/repos/{owner}/{repo}/actions/runs"
        logger.info(f"Listing workflow runs for {owner}/{repo} with filters {params}")

        runs: List[Dict[str, Any]] = []
        while url:
            response = self._get(url, params)
            runs.extend(response.json().get("workflow_runs", []))

            # The next-page URL already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None

        logger.info(f"Fetched {len(runs)} workflow runs for {owner}/{repo}")
        return runs
