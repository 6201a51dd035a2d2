"""Transform layer for publishing billing records as Prometheus gauges."""

from .gauges import BillingGauges

__all__ = ["BillingGauges"]
