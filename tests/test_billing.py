import pytest

from parking_lot.domain.billing import (
    BillingPolicy,
    BillingTier,
    billable_hours,
    compute_hourly_fee,
    duration_minutes,
)

HOUR_MS = 3_600_000
MINUTE_MS = 60_000


@pytest.mark.parametrize(
    "duration_ms, expected_fee",
    [
        (0, 50),
        (1, 50),
        (HOUR_MS, 50),
        (HOUR_MS + 1, 100),
        (HOUR_MS + MINUTE_MS, 100),
        (3 * HOUR_MS, 100),
        (3 * HOUR_MS + 1, 150),
        (6 * HOUR_MS, 150),
        (6 * HOUR_MS + 1, 200),
        (24 * HOUR_MS, 200),
        (72 * HOUR_MS, 200),
    ],
)
def test_hourly_fee_tiers(duration_ms, expected_fee):
    assert compute_hourly_fee(duration_ms) == expected_fee


def test_hourly_fee_is_monotonic():
    fees = [compute_hourly_fee(m * MINUTE_MS) for m in range(0, 12 * 60, 7)]
    assert fees == sorted(fees)


def test_billable_hours_rounds_partial_hours_up():
    assert billable_hours(0) == 0
    assert billable_hours(1) == 1
    assert billable_hours(HOUR_MS) == 1
    assert billable_hours(HOUR_MS + MINUTE_MS) == 2


def test_custom_tiers_are_sorted_before_matching():
    tiers = [BillingTier(4, 30), BillingTier(2, 10)]
    assert compute_hourly_fee(HOUR_MS, tiers, daily_cap_fee=99) == 10
    assert compute_hourly_fee(3 * HOUR_MS, tiers, daily_cap_fee=99) == 30
    assert compute_hourly_fee(5 * HOUR_MS, tiers, daily_cap_fee=99) == 99


def test_empty_tier_table_always_charges_cap():
    assert compute_hourly_fee(0, [], daily_cap_fee=75) == 75


def test_policy_from_settings(test_settings):
    policy = BillingPolicy.from_settings(test_settings)

    assert [t.max_hours for t in policy.tiers] == [1, 3, 6]
    assert policy.day_pass_fee == 150
    assert policy.hourly_fee(2 * HOUR_MS) == 100
    assert policy.hourly_fee(7 * HOUR_MS) == 200


@pytest.mark.parametrize(
    "duration_ms, minutes",
    [(0, 0), (29_999, 0), (30_000, 1), (90 * MINUTE_MS, 90), (90 * MINUTE_MS + 29_000, 90)],
)
def test_duration_minutes_rounds_to_nearest(duration_ms, minutes):
    assert duration_minutes(duration_ms) == minutes
