import threading

import httpx
import pytest

from github_client import GitHubBillingError
from models.billing import BillingFacet, PackagesBilling
from providers.github.billing_collect import BillingPoller


def test_interval_must_be_positive(make_client, gauges, org_account):
    with pytest.raises(ValueError):
        BillingPoller(make_client(), gauges, org_account, BillingFacet.ACTIONS, 0)


def test_name(make_client, gauges, user_account):
    poller = BillingPoller(
        make_client(), gauges, user_account, BillingFacet.SHARED_STORAGE, 60
    )

    assert poller.name == "users/octocat/shared-storage"


def test_poll_once_publishes_record(make_client, gauges, registry, org_account):
    poller = BillingPoller(make_client(), gauges, org_account, BillingFacet.PACKAGES, 60)

    record = poller.poll_once()

    assert isinstance(record, PackagesBilling)
    assert (
        registry.get_sample_value(
            "total_paid_gigabytes_bandwidth_used", {"owner": "octo-org"}
        )
        == 40
    )


def test_run_polls_until_stopped(make_client, gauges, registry, org_account):
    stop_event = threading.Event()
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) == 3:
            stop_event.set()
        return httpx.Response(200, json={"total_minutes_used": len(calls)})

    poller = BillingPoller(
        make_client(handler), gauges, org_account, BillingFacet.ACTIONS, 0.001
    )
    poller.run(stop_event)

    assert len(calls) == 3
    assert registry.get_sample_value("total_minutes_used", {"owner": "octo-org"}) == 3


def test_run_does_not_poll_when_already_stopped(make_client, gauges, org_account):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    stop_event = threading.Event()
    stop_event.set()
    BillingPoller(
        make_client(handler), gauges, org_account, BillingFacet.ACTIONS, 60
    ).run(stop_event)

    assert calls == []


def test_run_propagates_first_error(make_client, gauges, org_account):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, content=b"<html>")

    poller = BillingPoller(
        make_client(handler), gauges, org_account, BillingFacet.SHARED_STORAGE, 0.001
    )

    with pytest.raises(GitHubBillingError):
        poller.run(threading.Event())

    assert len(calls) == 1
