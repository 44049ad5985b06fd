"""Tiered hourly billing.

Any started hour is billed as a full hour. The first tier whose ``max_hours``
covers the billed hours applies; past the last tier the daily cap applies.
"""
import math
from typing import Iterable, List, Optional

MS_PER_HOUR = 60 * 60 * 1000
MS_PER_MINUTE = 60 * 1000


class BillingTier:
    def __init__(self, max_hours: int, fee: float):
        self.max_hours = max_hours
        self.fee = fee

    def __repr__(self):
        return f"BillingTier(max_hours={self.max_hours}, fee={self.fee})"


class BillingPolicy:
    def __init__(self, tiers: Iterable[BillingTier], daily_cap_fee: float, day_pass_fee: float):
        self.tiers: List[BillingTier] = sorted(tiers, key=lambda t: t.max_hours)
        self.daily_cap_fee = daily_cap_fee
        self.day_pass_fee = day_pass_fee

    @classmethod
    def from_settings(cls, settings) -> "BillingPolicy":
        return cls(
            tiers=[BillingTier(t.max_hours, t.fee) for t in settings.HOURLY_TIERS],
            daily_cap_fee=settings.DAILY_CAP_FEE,
            day_pass_fee=settings.DAY_PASS_FEE,
        )

    def hourly_fee(self, duration_ms: float) -> float:
        return compute_hourly_fee(duration_ms, self.tiers, self.daily_cap_fee)


DEFAULT_TIERS = [BillingTier(1, 50), BillingTier(3, 100), BillingTier(6, 150)]
DEFAULT_DAILY_CAP_FEE = 200


def billable_hours(duration_ms: float) -> int:
    return math.ceil(duration_ms / MS_PER_HOUR)


def compute_hourly_fee(
    duration_ms: float,
    tiers: Optional[Iterable[BillingTier]] = None,
    daily_cap_fee: float = DEFAULT_DAILY_CAP_FEE,
) -> float:
    hours = billable_hours(duration_ms)
    for tier in sorted(tiers if tiers is not None else DEFAULT_TIERS, key=lambda t: t.max_hours):
        if hours <= tier.max_hours:
            return tier.fee
    return daily_cap_fee


def duration_minutes(duration_ms: float) -> int:
    # Round half up, matching how the exit receipt reports minutes
    return int(math.floor(duration_ms / MS_PER_MINUTE + 0.5))
