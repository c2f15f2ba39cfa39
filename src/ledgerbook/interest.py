from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Union

from pydantic import BaseModel, Field, model_validator

from .models import ComputedLedgerEntry, LedgerEntry
from .util.dates import parse_iso_date


DateLike = Union[str, date]
Now = Union[datetime, date, None]


class InvalidDateError(ValueError):
    """The entry date is not a valid `YYYY-MM-DD` calendar date."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid ledger date {value!r}; expected YYYY-MM-DD")
        self.value = value


class InterestPolicy(BaseModel):
    """
    Business rules for interest accrual.

    Entries above `threshold` accrue at `reduced_rate`, everything else at `standard_rate` (both are
    percent per month). Once an entry is `compounding_days` old the principal compounds once for
    `compounding_months` months. Within a cycle, interest accrues per day as rate% per
    `full_month_days`, with a full month charged for the first `full_month_days` days.
    """

    threshold: float = 30000
    standard_rate: float = 2.0
    reduced_rate: float = 1.75
    compounding_days: int = Field(default=365, gt=0)
    compounding_months: int = Field(default=12, ge=0)
    full_month_days: int = Field(default=30, gt=0)

    @model_validator(mode="after")
    def _validate_rates(self) -> "InterestPolicy":
        if self.standard_rate <= 0 or self.reduced_rate <= 0:
            raise ValueError("interest rates must be positive percentages")
        return self


DEFAULT_POLICY = InterestPolicy()


@dataclass(frozen=True)
class InterestBreakdown:
    rate: float
    applicable_principal: float
    interest_today: float
    total_payable: float


def _to_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidDateError(value)
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise InvalidDateError(value) from e


def days_passed(entry_date: DateLike, now: Now = None) -> int:
    """
    Whole days between the entry date (taken at midnight) and `now`, floored.

    `now` defaults to the current UTC instant. Aware datetimes are measured from midnight UTC of the
    entry date, naive ones from naive midnight; a plain `date` gives the calendar-day difference.
    Future entry dates give negative values.
    """
    start = _to_date(entry_date)
    if now is None:
        now = datetime.now(timezone.utc)

    if not isinstance(now, datetime):
        return (now - start).days

    midnight = datetime(start.year, start.month, start.day)
    if now.tzinfo is not None:
        midnight = midnight.replace(tzinfo=timezone.utc)
    return math.floor((now - midnight).total_seconds() / 86400)


def interest_rate(amount: float, policy: InterestPolicy = DEFAULT_POLICY) -> float:
    return policy.reduced_rate if amount > policy.threshold else policy.standard_rate


def interest_applicable_amount(
    amount: float,
    rate: float,
    days: int,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> float:
    if days >= policy.compounding_days:
        return amount + amount * rate * policy.compounding_months / 100
    return amount


def interest_today(
    applicable: float,
    rate: float,
    days: int,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> float:
    if days < policy.full_month_days:
        return applicable * rate / 100
    return applicable * rate * (days % policy.compounding_days) / (100 * policy.full_month_days)


def compute_interest(
    entry_date: DateLike,
    amount: float,
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> InterestBreakdown:
    """
    Compute rate, interest-bearing principal, today's interest and the total payable.

    Pure function of its inputs. Raises InvalidDateError for a malformed `entry_date`; any amount,
    including zero, negative or non-finite ones, is computed arithmetically.
    """
    days = days_passed(entry_date, now)
    rate = interest_rate(amount, policy)
    applicable = interest_applicable_amount(amount, rate, days, policy)
    today = interest_today(applicable, rate, days, policy)
    return InterestBreakdown(
        rate=rate,
        applicable_principal=applicable,
        interest_today=today,
        total_payable=applicable + today,
    )


def compute_entry(
    entry: LedgerEntry,
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> ComputedLedgerEntry:
    b = compute_interest(entry.date, entry.amount, now=now, policy=policy)
    return ComputedLedgerEntry.model_validate(
        {
            **entry.model_dump(by_alias=True),
            "interestRate": b.rate,
            "interestApplicableAmount": b.applicable_principal,
            "interestToday": b.interest_today,
            "totalPayable": b.total_payable,
        }
    )
