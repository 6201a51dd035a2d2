"""Publish decoded billing records as Prometheus gauges."""

from __future__ import annotations

import threading

from prometheus_client import REGISTRY, CollectorRegistry, Gauge

from models.billing import (
    ActionsBilling,
    BillingRecord,
    PackagesBilling,
    SharedStorageBilling,
)

OWNER_LABELS = ["owner"]
BREAKDOWN_LABELS = ["owner", "os"]


class BillingGauges:  # pylint: disable=too-many-instance-attributes
    """The exporter's gauges, registered on one registry."""

    def __init__(self, registry: CollectorRegistry = REGISTRY):
        self.total_minutes_used = Gauge(
            "total_minutes_used",
            "github actions total minutes used",
            OWNER_LABELS,
            registry=registry,
        )
        self.total_paid_minutes_used = Gauge(
            "total_paid_minutes_used",
            "github actions total paid minutes used",
            OWNER_LABELS,
            registry=registry,
        )
        self.included_minutes = Gauge(
            "included_minutes",
            "github actions included minutes",
            OWNER_LABELS,
            registry=registry,
        )
        self.minutes_used_breakdown = Gauge(
            "minutes_used_breakdown",
            "github actions minutes used breakdown",
            BREAKDOWN_LABELS,
            registry=registry,
        )

        self.total_gigabytes_bandwidth_used = Gauge(
            "total_gigabytes_bandwidth_used",
            "github packages total gigabytes bandwidth used",
            OWNER_LABELS,
            registry=registry,
        )
        self.total_paid_gigabytes_bandwidth_used = Gauge(
            "total_paid_gigabytes_bandwidth_used",
            "github packages total paid gigabytes bandwidth used",
            OWNER_LABELS,
            registry=registry,
        )
        self.included_gigabytes_bandwidth = Gauge(
            "included_gigabytes_bandwidth",
            "github packages included gigabytes bandwidth",
            OWNER_LABELS,
            registry=registry,
        )

        self.days_left_in_billing_cycle = Gauge(
            "days_left_in_billing_cycle",
            "github shared storage days left in billing cycle",
            OWNER_LABELS,
            registry=registry,
        )
        self.estimated_paid_storage_for_month = Gauge(
            "estimated_paid_storage_for_month",
            "github shared storage estimated paid storage for month",
            OWNER_LABELS,
            registry=registry,
        )
        self.estimated_storage_for_month = Gauge(
            "estimated_storage_for_month",
            "github shared storage estimated storage for month",
            OWNER_LABELS,
            registry=registry,
        )

        self._breakdown_labels: dict[str, set[str]] = {}
        self._breakdown_lock = threading.Lock()

    def publish(self, owner: str, record: BillingRecord) -> None:
        """Copy every field of ``record`` into the gauges labelled ``owner``."""
        if isinstance(record, ActionsBilling):
            self.publish_actions(owner, record)
        elif isinstance(record, PackagesBilling):
            self.publish_packages(owner, record)
        elif isinstance(record, SharedStorageBilling):
            self.publish_shared_storage(owner, record)
        else:
            raise TypeError(f"Unsupported billing record: {type(record).__name__}")

    def publish_actions(self, owner: str, record: ActionsBilling) -> None:
        """Set the actions minutes gauges and the per-OS breakdown for ``owner``."""
        self.total_minutes_used.labels(owner=owner).set(record.total_minutes_used)
        self.total_paid_minutes_used.labels(owner=owner).set(
            record.total_paid_minutes_used
        )
        self.included_minutes.labels(owner=owner).set(record.included_minutes)

        categories = dict(record.minutes_used_breakdown.categories())
        with self._breakdown_lock:
            # Runner categories missing from this response stop being exported.
            stale = self._breakdown_labels.get(owner, set()) - set(categories)
            for os_label in stale:
                self.minutes_used_breakdown.remove(owner, os_label)
            for os_label, minutes in categories.items():
                self.minutes_used_breakdown.labels(owner=owner, os=os_label).set(
                    minutes
                )
            self._breakdown_labels[owner] = set(categories)

    def publish_packages(self, owner: str, record: PackagesBilling) -> None:
        """Set the packages bandwidth gauges for ``owner``."""
        self.total_gigabytes_bandwidth_used.labels(owner=owner).set(
            record.total_gigabytes_bandwidth_used
        )
        self.total_paid_gigabytes_bandwidth_used.labels(owner=owner).set(
            record.total_paid_gigabytes_bandwidth_used
        )
        self.included_gigabytes_bandwidth.labels(owner=owner).set(
            record.included_gigabytes_bandwidth
        )

    def publish_shared_storage(self, owner: str, record: SharedStorageBilling) -> None:
        """Set the shared storage gauges for ``owner``."""
        self.days_left_in_billing_cycle.labels(owner=owner).set(
            record.days_left_in_billing_cycle
        )
        self.estimated_paid_storage_for_month.labels(owner=owner).set(
            record.estimated_paid_storage_for_month
        )
        self.estimated_storage_for_month.labels(owner=owner).set(
            record.estimated_storage_for_month
        )


__all__ = ["BillingGauges"]
