from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Iterable, Union

from .interest import DEFAULT_POLICY, InterestPolicy, Now, compute_entry
from .models import ComputedLedgerEntry, LedgerEntry
from .store import LedgerStore
from .util.dates import parse_display_date
from .util.money import to_fixed, to_plain


logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Serial Number",
    "Display Date",
    "ISO Date",
    "Weight",
    "Amount",
    "Interest Rate",
    "Applicable Amount",
    "Interest Today",
    "Total Payable",
]

IMPORT_HEADERS = ["serialNumber", "displayDate", "weight", "amount"]


def _export_row(e: ComputedLedgerEntry) -> list[str]:
    return [
        e.serial_number,
        e.display_date,
        e.date,
        e.weight,
        to_plain(e.amount),
        to_plain(e.interest_rate),
        to_fixed(e.interest_applicable_amount),
        to_fixed(e.interest_today),
        to_fixed(e.total_payable),
    ]


def render_csv(
    entries: Iterable[LedgerEntry],
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> str:
    """
    Entries as CSV, interest fields computed as of `now`, rows in the order given.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    for entry in entries:
        computed = entry if isinstance(entry, ComputedLedgerEntry) else compute_entry(entry, now=now, policy=policy)
        writer.writerow(_export_row(computed))
    return buf.getvalue()


def export_csv(
    entries: Iterable[LedgerEntry],
    path: Union[str, Path],
    now: Now = None,
    policy: InterestPolicy = DEFAULT_POLICY,
) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_csv(entries, now=now, policy=policy), encoding="utf-8")
    logger.info("Wrote ledger export: %s", out)
    return out


def _row_to_entry(record: dict) -> LedgerEntry:
    display_date = (record.get("displayDate") or "").strip()
    iso_date = parse_display_date(display_date).isoformat()
    return LedgerEntry(
        serial_number=(record.get("serialNumber") or "").strip(),
        display_date=display_date,
        date=iso_date,
        weight=(record.get("weight") or "").strip(),
        amount=float(record.get("amount") or ""),
    )


def read_import_rows(path: Union[str, Path]) -> list[LedgerEntry]:
    """
    Read entries from a CSV with `serialNumber,displayDate,weight,amount` headers.

    Rows that fail to parse are logged and skipped.
    """
    p = Path(path)
    entries: list[LedgerEntry] = []
    with p.open(newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = [h for h in IMPORT_HEADERS if h not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"{p}: missing CSV columns: {', '.join(missing)}")

        for line_no, record in enumerate(reader, start=2):
            if not any((v or "").strip() for v in record.values() if isinstance(v, str)):
                continue
            try:
                entries.append(_row_to_entry(record))
            except ValueError as e:
                logger.warning("Skipping row %d (serial=%r): %s", line_no, record.get("serialNumber"), e)
    return entries


def import_csv(store: LedgerStore, path: Union[str, Path]) -> int:
    entries = read_import_rows(path)
    for entry in entries:
        store.add_entry(entry)
        logger.info("Added: %s", entry.serial_number)
    logger.info("Import complete (%d entries)", len(entries))
    return len(entries)
