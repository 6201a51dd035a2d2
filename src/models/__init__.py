"""GitHub billing data models."""

from .billing import (
    Account,
    AccountScope,
    ActionsBilling,
    BillingFacet,
    BillingRecord,
    MinutesUsedBreakdown,
    PackagesBilling,
    SharedStorageBilling,
)

__all__ = [
    "Account",
    "AccountScope",
    "ActionsBilling",
    "BillingFacet",
    "BillingRecord",
    "MinutesUsedBreakdown",
    "PackagesBilling",
    "SharedStorageBilling",
]
