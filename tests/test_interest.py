from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone

import pytest

from ledgerbook.interest import (
    InterestPolicy,
    InvalidDateError,
    compute_entry,
    compute_interest,
    days_passed,
    interest_rate,
)
from ledgerbook.models import LedgerEntry


NOW = date(2025, 6, 15)


def _ago(days: int) -> str:
    return (NOW - timedelta(days=days)).isoformat()


def test_rate_threshold() -> None:
    assert interest_rate(100) == 2
    assert interest_rate(30000) == 2
    assert interest_rate(30000.01) == 1.75
    assert interest_rate(40000) == 1.75


def test_scenario_over_a_year_large_amount() -> None:
    b = compute_interest(_ago(400), 40000, now=NOW)
    assert b.rate == 1.75
    assert b.applicable_principal == pytest.approx(48400)
    assert b.interest_today == pytest.approx(48400 * 1.75 * 35 / 3000)
    assert round(b.interest_today, 2) == 988.17
    assert round(b.total_payable, 2) == 49388.17


def test_no_compounding_before_a_year() -> None:
    b = compute_interest(_ago(364), 10000, now=NOW)
    assert b.applicable_principal == 10000


def test_compounding_at_exactly_a_year() -> None:
    b = compute_interest(_ago(365), 10000, now=NOW)
    assert b.applicable_principal == pytest.approx(12400)
    # 365 % 365 == 0: a fresh cycle accrues nothing yet.
    assert b.interest_today == 0
    assert b.total_payable == pytest.approx(12400)


def test_first_month_charges_full_month() -> None:
    assert compute_interest(_ago(0), 10000, now=NOW).interest_today == pytest.approx(200)
    assert compute_interest(_ago(29), 10000, now=NOW).interest_today == pytest.approx(200)


def test_prorated_after_first_month() -> None:
    assert compute_interest(_ago(30), 10000, now=NOW).interest_today == pytest.approx(200)
    assert compute_interest(_ago(45), 10000, now=NOW).interest_today == pytest.approx(300)
    assert compute_interest(_ago(45), 10000, now=NOW).total_payable == pytest.approx(10300)


def test_total_is_applicable_plus_interest() -> None:
    for days in (0, 10, 31, 200, 364, 365, 366, 800):
        for amount in (500, 30000, 30001, 125000.5):
            b = compute_interest(_ago(days), amount, now=NOW)
            assert b.total_payable == b.applicable_principal + b.interest_today


def test_future_date_uses_same_formulas() -> None:
    b = compute_interest(_ago(-10), 10000, now=NOW)
    assert b.applicable_principal == 10000
    assert b.interest_today == pytest.approx(200)


def test_non_positive_and_non_finite_amounts_do_not_raise() -> None:
    zero = compute_interest(_ago(100), 0, now=NOW)
    assert (zero.applicable_principal, zero.interest_today, zero.total_payable) == (0, 0, 0)

    neg = compute_interest(_ago(5), -500, now=NOW)
    assert neg.rate == 2
    assert neg.interest_today == pytest.approx(-10)
    assert neg.total_payable == pytest.approx(-510)

    nan = compute_interest(_ago(5), math.nan, now=NOW)
    assert math.isnan(nan.total_payable)


@pytest.mark.parametrize("bad", ["2025-13-01", "2025-02-30", "28-07-2025", "20250728", "", "yesterday"])
def test_malformed_date_raises(bad: str) -> None:
    with pytest.raises(InvalidDateError) as exc:
        compute_interest(bad, 1000, now=NOW)
    assert exc.value.value == bad
    assert isinstance(exc.value, ValueError)


def test_non_string_date_raises() -> None:
    with pytest.raises(InvalidDateError):
        compute_interest(None, 1000, now=NOW)  # type: ignore[arg-type]


def test_days_passed_with_datetimes() -> None:
    aware = datetime(2025, 1, 31, 0, 0, tzinfo=timezone.utc)
    assert days_passed("2025-01-01", aware) == 30
    assert days_passed("2025-01-01", aware - timedelta(minutes=1)) == 29
    assert days_passed("2025-01-01", datetime(2025, 1, 31, 12, 0)) == 30
    assert days_passed("2025-01-10", datetime(2025, 1, 9, 12, 0)) == -1
    assert days_passed(date(2025, 1, 1), date(2025, 1, 31)) == 30


def test_idempotent() -> None:
    a = compute_interest(_ago(400), 40000, now=NOW)
    b = compute_interest(_ago(400), 40000, now=NOW)
    assert a == b


def test_custom_policy() -> None:
    policy = InterestPolicy(threshold=1000)
    assert compute_interest(_ago(10), 5000, now=NOW, policy=policy).rate == 1.75


def test_policy_rejects_non_positive_rate() -> None:
    with pytest.raises(ValueError):
        InterestPolicy(reduced_rate=0)


def test_compute_entry_keeps_fields_and_adds_interest() -> None:
    entry = LedgerEntry.model_validate(
        {
            "id": "doc-1",
            "serialNumber": "A12",
            "displayDate": "01-05-2025",
            "date": "2025-05-01",
            "weight": "12g",
            "amount": 10000,
            "note": "gold chain",
        }
    )
    computed = compute_entry(entry, now=NOW)
    assert computed.id == "doc-1"
    assert computed.serial_number == "A12"
    assert computed.weight == "12g"
    assert computed.interest_rate == 2
    assert computed.interest_applicable_amount == 10000
    assert computed.interest_today == pytest.approx(10000 * 2 * 45 / 3000)

    record = computed.model_dump(by_alias=True)
    assert record["note"] == "gold chain"
    assert record["totalPayable"] == pytest.approx(10300)


def test_now_defaults_to_current_instant() -> None:
    today = datetime.now(timezone.utc).date()
    b = compute_interest(today.isoformat(), 100)
    assert b.applicable_principal == 100
    assert b.interest_today == pytest.approx(2)
    assert days_passed((today - timedelta(days=400)).isoformat()) == 400


def test_aware_non_utc_now_is_measured_from_utc_midnight() -> None:
    ist = timezone(timedelta(hours=5, minutes=30))
    # 2025-01-31 03:00 in +05:30 is still 2025-01-30 21:30 UTC.
    assert days_passed("2025-01-01", datetime(2025, 1, 31, 3, 0, tzinfo=ist)) == 29
    assert days_passed("2025-01-01", datetime(2025, 1, 31, 6, 0, tzinfo=ist)) == 30
