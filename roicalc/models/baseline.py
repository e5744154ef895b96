from __future__ import annotations

from dataclasses import dataclass

from .enums import ServiceType


@dataclass(frozen=True)
class Baseline:
    """Current-state business metrics the service formulas start from.

    Percent fields (conversion_rate, gross_margin, churn_rate) are stored in
    percent form (2.5 means 2.5%). Values are not range-checked: negative or
    implausible inputs flow through the formulas as given.
    """

    # Funnel
    traffic: float = 0.0
    conversion_rate: float = 0.0
    aov: float = 0.0
    gross_margin: float = 0.0

    # Subscriptions
    subscribers: float = 0.0
    churn_rate: float = 0.0

    # Paid media
    ad_spend: float = 0.0
    roas: float = 0.0

    # Operations
    hourly_rate: float = 0.0
    wasted_hours_per_week: float = 0.0
    monthly_errors: float = 0.0
    cost_per_error: float = 0.0

    @property
    def monthly_revenue(self) -> float:
        return self.traffic * (self.conversion_rate / 100) * self.aov

    @property
    def monthly_orders(self) -> float:
        """Orders implied by revenue and AOV; 0 when AOV is 0."""
        if self.aov == 0:
            return 0.0
        return self.monthly_revenue / self.aov


@dataclass(frozen=True)
class BaselineSummary:
    revenue: float
    gross_profit: float
    orders: float


def baseline_summary(baseline: Baseline) -> BaselineSummary:
    """Derive current monthly revenue, gross profit and order count."""
    revenue = baseline.monthly_revenue
    return BaselineSummary(
        revenue=revenue,
        gross_profit=revenue * (baseline.gross_margin / 100),
        orders=baseline.monthly_orders,
    )


@dataclass(frozen=True)
class FeeSchedule:
    """One-time fee per service. Only the active service's fee is used."""

    blueprint: float = 0.0
    operations_dev_lab: float = 0.0
    accelerator: float = 0.0

    def fee_for(self, service: ServiceType) -> float:
        return getattr(self, ServiceType(service).value)
