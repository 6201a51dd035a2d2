"""Pydantic models for GitHub billing API responses."""

from __future__ import annotations

from enum import Enum
from typing import Iterator, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class AccountScope(str, Enum):
    """Kind of account the billing endpoints are queried for."""

    ORGANIZATION = "orgs"
    USER = "users"


class BillingFacet(str, Enum):
    """Billing endpoints exposed under ``settings/billing``."""

    ACTIONS = "actions"
    PACKAGES = "packages"
    SHARED_STORAGE = "shared-storage"

    @property
    def model(self) -> type[BillingRecord]:
        return _FACET_MODELS[self]


class Account(BaseModel):
    """An organization or user whose billing is exported."""

    model_config = ConfigDict(frozen=True)

    scope: AccountScope = Field(..., description="Organization or user scope")
    name: str = Field(..., min_length=1, description="Login, used as the owner label")


class MinutesUsedBreakdown(BaseModel):
    """Actions minutes split by runner operating system."""

    model_config = ConfigDict(extra="allow")

    UBUNTU: float = Field(0, description="Minutes used on Linux runners")
    MACOS: float = Field(0, description="Minutes used on macOS runners")
    WINDOWS: float = Field(0, description="Minutes used on Windows runners")

    @model_validator(mode="after")
    def _coerce_extra_categories(self) -> MinutesUsedBreakdown:
        # Larger runner SKUs (e.g. UBUNTU_4_CORE) arrive as extra keys.
        extra = self.__pydantic_extra__ or {}
        seen = {"ubuntu", "macos", "windows"}
        for key, value in extra.items():
            label = key.lower()
            if label in seen:
                raise ValueError(
                    f"minutes_used_breakdown.{key} duplicates category {label!r}"
                )
            seen.add(label)
            if isinstance(value, bool):
                raise ValueError(
                    f"minutes_used_breakdown.{key} is not numeric: {value!r}"
                )
            try:
                extra[key] = float(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(
                    f"minutes_used_breakdown.{key} is not numeric: {value!r}"
                ) from exc
        return self

    def categories(self) -> Iterator[tuple[str, float]]:
        """Yield ``(os_label, minutes)`` pairs with lower-cased labels."""
        yield "ubuntu", self.UBUNTU
        yield "macos", self.MACOS
        yield "windows", self.WINDOWS
        for key, value in (self.__pydantic_extra__ or {}).items():
            yield key.lower(), value


class ActionsBilling(BaseModel):
    """Response of ``settings/billing/actions``."""

    total_minutes_used: float = Field(0, description="Minutes used this cycle")
    total_paid_minutes_used: float = Field(
        0, description="Paid minutes used this cycle"
    )
    included_minutes: float = Field(0, description="Minutes included in the plan")
    minutes_used_breakdown: MinutesUsedBreakdown = Field(
        default_factory=MinutesUsedBreakdown,
        description="Minutes used per runner operating system",
    )


class PackagesBilling(BaseModel):
    """Response of ``settings/billing/packages``."""

    total_gigabytes_bandwidth_used: float = Field(
        0, description="Bandwidth used this cycle in GB"
    )
    total_paid_gigabytes_bandwidth_used: float = Field(
        0, description="Paid bandwidth used this cycle in GB"
    )
    included_gigabytes_bandwidth: float = Field(
        0, description="Bandwidth included in the plan in GB"
    )


class SharedStorageBilling(BaseModel):
    """Response of ``settings/billing/shared-storage``."""

    days_left_in_billing_cycle: float = Field(
        0, description="Days until the billing cycle resets"
    )
    estimated_paid_storage_for_month: float = Field(
        0, description="Estimated paid storage for the month in GB"
    )
    estimated_storage_for_month: float = Field(
        0, description="Estimated storage for the month in GB"
    )


BillingRecord = Union[ActionsBilling, PackagesBilling, SharedStorageBilling]

_FACET_MODELS: dict[BillingFacet, type[BillingRecord]] = {
    BillingFacet.ACTIONS: ActionsBilling,
    BillingFacet.PACKAGES: PackagesBilling,
    BillingFacet.SHARED_STORAGE: SharedStorageBilling,
}
