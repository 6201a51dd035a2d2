from typing import Callable

import httpx
import pytest
from prometheus_client import CollectorRegistry

from github_client import GitHubBillingClient
from models.billing import Account, AccountScope
from transform.gauges import BillingGauges

ACTIONS_PAYLOAD = {
    "total_minutes_used": 305,
    "total_paid_minutes_used": 0,
    "included_minutes": 3000,
    "minutes_used_breakdown": {"UBUNTU": 205, "MACOS": 10, "WINDOWS": 90},
}

PACKAGES_PAYLOAD = {
    "total_gigabytes_bandwidth_used": 50,
    "total_paid_gigabytes_bandwidth_used": 40,
    "included_gigabytes_bandwidth": 10,
}

SHARED_STORAGE_PAYLOAD = {
    "days_left_in_billing_cycle": 20,
    "estimated_paid_storage_for_month": 15,
    "estimated_storage_for_month": 40,
}

PAYLOADS = {
    "actions": ACTIONS_PAYLOAD,
    "packages": PACKAGES_PAYLOAD,
    "shared-storage": SHARED_STORAGE_PAYLOAD,
}


def billing_handler(request: httpx.Request) -> httpx.Response:
    facet = request.url.path.rsplit("/", 1)[-1]
    return httpx.Response(200, json=PAYLOADS[facet])


@pytest.fixture
def registry():
    return CollectorRegistry()


@pytest.fixture
def gauges(registry):
    return BillingGauges(registry=registry)


@pytest.fixture
def org_account():
    return Account(scope=AccountScope.ORGANIZATION, name="octo-org")


@pytest.fixture
def user_account():
    return Account(scope=AccountScope.USER, name="octocat")


@pytest.fixture
def make_client() -> Callable[..., GitHubBillingClient]:
    clients = []

    def _make(handler=billing_handler, **kwargs) -> GitHubBillingClient:
        client = GitHubBillingClient(
            token=kwargs.pop("token", "ghp_test"),
            transport=httpx.MockTransport(handler),
            **kwargs,
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
