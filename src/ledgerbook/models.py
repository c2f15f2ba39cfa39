from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LedgerEntry(BaseModel):
    """
    One ledger record as the entry store hands it over.

    Field names follow Python conventions; the store's camelCase keys (`serialNumber`, `displayDate`)
    are accepted as aliases. Unknown keys are kept so they pass through untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: Optional[str] = None
    serial_number: str = Field(alias="serialNumber")
    display_date: str = Field(default="", alias="displayDate")
    # Canonical YYYY-MM-DD date used for all interest math.
    date: str
    weight: str = ""
    amount: float

    def to_record(self) -> dict:
        # camelCase, the shape the store and CSV import use.
        return self.model_dump(by_alias=True, exclude_none=True)


class ComputedLedgerEntry(LedgerEntry):
    # Derived per (entry, now); never persisted.
    interest_rate: float = Field(alias="interestRate")
    interest_applicable_amount: float = Field(alias="interestApplicableAmount")
    interest_today: float = Field(alias="interestToday")
    total_payable: float = Field(alias="totalPayable")


class LedgerSummary(BaseModel):
    entry_count: int = 0
    total_interest_today: float = 0.0
    total_payable: float = 0.0
    # Sum of one month's interest (rate% of the applicable amount) across entries.
    monthly_growth: float = 0.0
