"""Poll one GitHub billing endpoint and republish it as gauges."""

from __future__ import annotations

import threading

from rich.console import Console

from github_client import GitHubBillingClient
from models.billing import Account, BillingFacet, BillingRecord
from transform.gauges import BillingGauges

console = Console()


class BillingPoller:
    """Fetch-decode-publish loop for a single (account, facet) pair."""

    def __init__(
        self,
        client: GitHubBillingClient,
        gauges: BillingGauges,
        account: Account,
        facet: BillingFacet,
        interval: float,
    ):
        if interval <= 0:
            raise ValueError("Poll interval must be positive")

        self.client = client
        self.gauges = gauges
        self.account = account
        self.facet = facet
        self.interval = interval

    @property
    def name(self) -> str:
        """Identifier of the polled endpoint, used in logs and thread names."""
        return f"{self.account.scope.value}/{self.account.name}/{self.facet.value}"

    def poll_once(self) -> BillingRecord:
        """
        Fetch the endpoint once and copy the decoded values into the gauges.

        Raises:
            GitHubBillingError: If the request or decoding fails
        """
        record = self.client.fetch_billing(self.account, self.facet)
        self.gauges.publish(self.account.name, record)
        console.log(f"[green]✓ Updated {self.name} billing gauges[/green]")
        return record

    def run(self, stop_event: threading.Event) -> None:
        """
        Poll until ``stop_event`` is set.

        Errors are not retried; they propagate to the caller.
        """
        console.log(
            f"[cyan]Polling {self.name} every {self.interval:g} seconds[/cyan]"
        )
        while not stop_event.is_set():
            self.poll_once()
            stop_event.wait(self.interval)


__all__ = ["BillingPoller"]
