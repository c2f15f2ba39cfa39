from __future__ import annotations

import argparse
import logging
import math
import os
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from .config import AppConfig, load_config
from .export import export_csv, import_csv
from .interest import InvalidDateError
from .ledger import search_entries, summarize, view_entries
from .logging_config import configure_logging
from .models import ComputedLedgerEntry, LedgerEntry
from .store import LedgerStore
from .util.dates import format_display_date, parse_display_date, parse_iso_date
from .util.money import format_inr, to_fixed, to_plain


logger = logging.getLogger("ledgerbook")

_TABLE_COLUMNS = ("Serial", "Date", "Weight", "Amount", "Interest", "Total")


def _add_config_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default="config.yaml", help="Path to YAML config (default: config.yaml)")


def _add_as_of_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--as-of",
        default="",
        help="Compute interest as of this date (YYYY-MM-DD) instead of now.",
    )


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ledgerbook")
    p.add_argument(
        "--env-file",
        default=".env",
        help="Path to a dotenv file (default: .env). If missing, env vars must already be set.",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    add = sub.add_parser("add", help="Add a ledger entry")
    _add_config_arg(add)
    add.add_argument("--serial", required=True, help="Serial number, e.g. A12")
    add.add_argument("--date", required=True, help="Entry date (DD-MM-YYYY)")
    add.add_argument("--weight", required=True, help="Weight (free text)")
    add.add_argument("--amount", required=True, help="Principal amount")

    edit = sub.add_parser("edit", help="Update fields of an existing entry")
    _add_config_arg(edit)
    edit.add_argument("id", help="Entry id (see `view --ids`)")
    edit.add_argument("--serial", default=None)
    edit.add_argument("--date", default=None, help="New entry date (DD-MM-YYYY)")
    edit.add_argument("--weight", default=None)
    edit.add_argument("--amount", default=None)

    delete = sub.add_parser("delete", help="Delete one or more entries by id")
    _add_config_arg(delete)
    delete.add_argument("ids", nargs="+", help="Entry ids")

    view = sub.add_parser("view", help="List all entries with interest, ordered by serial")
    _add_config_arg(view)
    _add_as_of_arg(view)
    view.add_argument("--ids", action="store_true", help="Also print entry ids")

    search = sub.add_parser("search", help="Show entries matching serials, e.g. '1,3-5,NS1'")
    _add_config_arg(search)
    _add_as_of_arg(search)
    search.add_argument("expression", help="Comma separated serials and ranges (A1-A5)")

    export = sub.add_parser("export", help="Export all entries with interest to CSV")
    _add_config_arg(export)
    _add_as_of_arg(export)
    export.add_argument("--out", default="", help="Output path (default: export.path from config)")

    imp = sub.add_parser("import", help="Import entries from a CSV (serialNumber,displayDate,weight,amount)")
    _add_config_arg(imp)
    imp.add_argument("file", help="CSV file to import")

    summary = sub.add_parser("summary", help="Totals across the whole ledger")
    _add_config_arg(summary)
    _add_as_of_arg(summary)

    return p


def _parse_as_of(value: str) -> Optional[date]:
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError as e:
        raise SystemExit(f"--as-of must be YYYY-MM-DD: {e}") from e


def _parse_entry_date(value: str) -> date:
    try:
        return parse_display_date(value)
    except ValueError as e:
        raise SystemExit("Invalid Date: use format DD-MM-YYYY.") from e


def _require_text(value: str) -> str:
    s = (value or "").strip()
    if not s:
        raise SystemExit("Serial number and weight are required.")
    return s


def _parse_amount(value: str) -> float:
    try:
        amount = float(value)
    except ValueError:
        amount = math.nan
    if not math.isfinite(amount) or amount <= 0:
        raise SystemExit("Invalid Amount: enter a positive number.")
    return amount


def _print_table(entries: Sequence[ComputedLedgerEntry], *, show_ids: bool = False) -> None:
    cols = list(_TABLE_COLUMNS)
    if show_ids:
        cols.insert(0, "Id")
    print("\t".join(cols))
    for e in entries:
        row = [
            e.serial_number,
            e.display_date,
            e.weight,
            to_plain(e.amount),
            to_fixed(e.interest_today),
            to_fixed(e.total_payable),
        ]
        if show_ids:
            row.insert(0, e.id or "")
        print("\t".join(row))

    totals = summarize(entries)
    print(
        f"Total Entries ({totals.entry_count})\t"
        f"Interest {format_inr(totals.total_interest_today)}\t"
        f"Total {format_inr(totals.total_payable)}"
    )


def _run(args: argparse.Namespace, cfg: AppConfig) -> int:
    policy = cfg.interest

    with LedgerStore(cfg.store.db_path) as store:
        if args.cmd == "add":
            entry_date = _parse_entry_date(args.date)
            entry = LedgerEntry(
                serial_number=_require_text(args.serial),
                display_date=format_display_date(entry_date),
                date=entry_date.isoformat(),
                weight=_require_text(args.weight),
                amount=_parse_amount(args.amount),
            )
            entry_id = store.add_entry(entry)
            logger.info("Entry added (id=%s serial=%s)", entry_id, entry.serial_number)
            print(entry_id)
            return 0

        if args.cmd == "edit":
            changes: dict[str, object] = {}
            if args.serial is not None:
                changes["serial_number"] = _require_text(args.serial)
            if args.date is not None:
                entry_date = _parse_entry_date(args.date)
                changes["display_date"] = format_display_date(entry_date)
                changes["date"] = entry_date.isoformat()
            if args.weight is not None:
                changes["weight"] = _require_text(args.weight)
            if args.amount is not None:
                changes["amount"] = _parse_amount(args.amount)
            if not changes:
                raise SystemExit("Nothing to update; pass at least one of --serial/--date/--weight/--amount.")
            try:
                store.update_entry(args.id, **changes)
            except KeyError as e:
                raise SystemExit(f"No entry with id {args.id!r}") from e
            logger.info("Entry updated (id=%s)", args.id)
            return 0

        if args.cmd == "delete":
            deleted = store.delete_entries(args.ids)
            logger.info("Deleted %d of %d entries", deleted, len(args.ids))
            return 0 if deleted == len(args.ids) else 1

        if args.cmd == "import":
            count = import_csv(store, args.file)
            store.backup()
            print(f"Imported {count} entries")
            return 0

        now = _parse_as_of(args.as_of)
        entries = store.list_entries()

        if args.cmd == "view":
            _print_table(view_entries(entries, now=now, policy=policy), show_ids=args.ids)
            return 0

        if args.cmd == "search":
            results = search_entries(entries, args.expression, now=now, policy=policy)
            if not results:
                print("No matching entries.")
                return 0
            _print_table(results)
            return 0

        if args.cmd == "export":
            out = export_csv(
                view_entries(entries, now=now, policy=policy),
                args.out or cfg.export.path,
                now=now,
                policy=policy,
            )
            print(out)
            return 0

        if args.cmd == "summary":
            totals = summarize(view_entries(entries, now=now, policy=policy))
            print(f"Total Entries: {totals.entry_count}")
            print(f"Total Payable: ₹{format_inr(totals.total_payable)}")
            print(f"Daily Interest: ₹{format_inr(totals.total_interest_today)}")
            print(f"Monthly Growth: ₹{format_inr(totals.monthly_growth)}")
            return 0

    raise AssertionError("Unhandled command")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    env_path = Path(args.env_file)
    if env_path.exists():
        load_dotenv(env_path)

    # Default logging: can be overridden once config is loaded.
    configure_logging(level=os.getenv("LOG_LEVEL", "INFO"))

    cfg = load_config(args.config)
    configure_logging(level=cfg.logging.level, file_path=cfg.logging.file_path)

    try:
        return _run(args, cfg)
    except InvalidDateError as e:
        logger.error("Cannot compute interest: %s", e)
        raise SystemExit(str(e)) from e


if __name__ == "__main__":
    raise SystemExit(main())
