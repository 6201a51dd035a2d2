"""Exporter settings read from the environment."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field, model_validator

from github_client import DEFAULT_API_URL
from models.billing import Account, AccountScope


class ExporterConfig(BaseModel):
    """Validated exporter configuration."""

    token: str = Field(..., min_length=1, description="GitHub API token")
    organization: Optional[str] = Field(None, description="Organization to export")
    user: Optional[str] = Field(None, description="User to export")
    api_url: str = Field(DEFAULT_API_URL, description="GitHub API base URL")
    api_timeout: Optional[float] = Field(
        None, description="Request timeout in seconds, unset waits indefinitely", gt=0
    )
    refresh_seconds: float = Field(60, description="Poll interval in seconds", gt=0)
    listen_addr: str = Field("0.0.0.0", description="Metrics server bind address")
    listen_port: int = Field(9999, description="Metrics server port", ge=1, le=65535)

    @model_validator(mode="after")
    def _require_account(self) -> ExporterConfig:
        if not self.organization and not self.user:
            raise ValueError(
                "GITHUB_ORGANIZATION or GITHUB_USER environment variable is required"
            )
        return self

    @property
    def accounts(self) -> list[Account]:
        """Accounts to poll, organization first."""
        accounts = []
        if self.organization:
            accounts.append(
                Account(scope=AccountScope.ORGANIZATION, name=self.organization)
            )
        if self.user:
            accounts.append(Account(scope=AccountScope.USER, name=self.user))
        return accounts

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> ExporterConfig:
        """
        Build the configuration from environment variables.

        Raises:
            ValueError: If a variable is missing or invalid
        """
        env = os.environ if environ is None else environ

        if not env.get("GITHUB_TOKEN"):
            raise ValueError("GITHUB_TOKEN environment variable is required")

        values = {
            "token": env.get("GITHUB_TOKEN"),
            "organization": env.get("GITHUB_ORGANIZATION") or None,
            "user": env.get("GITHUB_USER") or None,
            "api_url": env.get("GITHUB_API_URL", DEFAULT_API_URL),
            "api_timeout": env.get("GITHUB_API_TIMEOUT") or None,
            "refresh_seconds": env.get("EXPORTER_REFRESH_SECONDS", "60"),
            "listen_addr": env.get("EXPORTER_LISTEN_ADDR", "0.0.0.0"),
            "listen_port": env.get("EXPORTER_LISTEN_PORT", "9999"),
        }
        return cls.model_validate(values)


__all__ = ["ExporterConfig"]
