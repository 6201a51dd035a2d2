"""GitHub billing exporter - republish GitHub billing usage as Prometheus gauges."""

from __future__ import annotations

import queue
import sys
import threading
from typing import Optional

from prometheus_client import start_http_server
from rich.console import Console
from rich.markup import escape

from config import ExporterConfig
from github_client import GitHubBillingClient
from models.billing import BillingFacet
from providers.github.billing_collect import BillingPoller
from transform.gauges import BillingGauges

console = Console()


def build_pollers(
    config: ExporterConfig,
    client: GitHubBillingClient,
    gauges: BillingGauges,
) -> list[BillingPoller]:
    """One poller per configured account and billing facet."""
    return [
        BillingPoller(
            client=client,
            gauges=gauges,
            account=account,
            facet=facet,
            interval=config.refresh_seconds,
        )
        for account in config.accounts
        for facet in BillingFacet
    ]


def run_pollers(
    pollers: list[BillingPoller],
    stop_event: threading.Event,
) -> Optional[BaseException]:
    """
    Run every poller on its own daemon thread until one fails.

    Returns:
        The first exception raised by a poller, or None if ``stop_event``
        was set before any failure
    """
    failures: queue.Queue[tuple[BillingPoller, BaseException]] = queue.Queue()

    def _target(poller: BillingPoller) -> None:
        try:
            poller.run(stop_event)
        except Exception as exc:  # reported to the main thread
            failures.put((poller, exc))

    threads = [
        threading.Thread(target=_target, args=(poller,), name=poller.name, daemon=True)
        for poller in pollers
    ]
    for thread in threads:
        thread.start()

    while True:
        try:
            poller, exc = failures.get(timeout=1.0)
        except queue.Empty:
            threads_done = not any(thread.is_alive() for thread in threads)
            if not (threads_done or stop_event.is_set()):
                continue
            # A poller can fail between the timeout and the liveness check.
            try:
                poller, exc = failures.get_nowait()
            except queue.Empty:
                return None
        console.log(
            f"[red]✗ Polling {poller.name} failed: {escape(str(exc))}[/red]"
        )
        stop_event.set()
        return exc


def main() -> None:
    """Exporter entry point - serve metrics and poll GitHub billing forever."""

    try:
        config = ExporterConfig.from_env()
    except ValueError as exc:
        console.log(f"[red]Invalid configuration: {escape(str(exc))}[/red]")
        sys.exit(2)

    console.log(
        f"[cyan]Metrics HTTP server running on "
        f"http://{config.listen_addr}:{config.listen_port}[/cyan]"
    )
    start_http_server(port=config.listen_port, addr=config.listen_addr)

    gauges = BillingGauges()
    stop_event = threading.Event()

    with GitHubBillingClient(
        token=config.token,
        api_url=config.api_url,
        timeout=config.api_timeout,
    ) as client:
        pollers = build_pollers(config, client, gauges)
        try:
            failure = run_pollers(pollers, stop_event)
        except KeyboardInterrupt:
            console.log("[yellow]Shutting down gracefully...[/yellow]")
            stop_event.set()
            return

    if failure is not None:
        sys.exit(1)


if __name__ == "__main__":
    main()
