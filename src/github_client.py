"""HTTP client for reading billing data from the GitHub REST API."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import ValidationError
from rich.console import Console

from models.billing import Account, BillingFacet, BillingRecord

console = Console()

DEFAULT_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


class GitHubBillingError(RuntimeError):
    """Raised when a billing endpoint cannot be fetched or decoded."""


class GitHubBillingClient:
    """Client for the GitHub ``settings/billing`` endpoints."""

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Personal access token or app token with billing scope
            api_url: API base URL, overridden for GitHub Enterprise Server
            timeout: Request timeout in seconds, None waits indefinitely
            transport: Optional httpx transport, used to fake the API in tests
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        # Ensure api_url doesn't have trailing slash
        self.api_url = api_url.rstrip("/")
        self._http = httpx.Client(
            headers=self._get_headers(),
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> GitHubBillingClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._http.close()

    def _get_headers(self) -> dict[str, str]:
        """Get HTTP headers for GitHub API requests."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }

    def build_url(self, account: Account, facet: BillingFacet) -> str:
        """Get the billing endpoint URL for an account and facet."""
        return (
            f"{self.api_url}/{account.scope.value}/{account.name}"
            f"/settings/billing/{facet.value}"
        )

    def fetch_billing(self, account: Account, facet: BillingFacet) -> BillingRecord:
        """
        Fetch and decode one billing endpoint.

        Args:
            account: Organization or user to query
            facet: Billing endpoint to query

        Returns:
            The decoded record, of the model type registered for the facet

        Raises:
            GitHubBillingError: On transport errors, non-2xx responses or
                payloads that do not match the facet's model
        """
        url = self.build_url(account, facet)
        console.log(f"[dim]GET {url}[/dim]")

        try:
            response = self._http.get(url)
            # Raise exception for 4xx/5xx status codes
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            raise GitHubBillingError(
                f"Request for {facet.value} billing of {account.name} failed: {exc}"
            ) from exc
        except ValueError as exc:
            raise GitHubBillingError(
                f"Malformed JSON in {facet.value} billing of {account.name}: {exc}"
            ) from exc

        try:
            return facet.model.model_validate(payload)
        except ValidationError as exc:
            raise GitHubBillingError(
                f"Unexpected {facet.value} billing payload for {account.name}: {exc}"
            ) from exc


__all__ = ["GitHubBillingClient", "GitHubBillingError", "DEFAULT_API_URL"]
