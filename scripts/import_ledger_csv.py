#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path


def _ensure_src_on_path() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src = repo_root / "src"
    if str(src) not in sys.path:
        sys.path.insert(0, str(src))


def main(argv: list[str] | None = None) -> int:
    _ensure_src_on_path()

    from ledgerbook.config import load_config
    from ledgerbook.export import read_import_rows
    from ledgerbook.logging_config import configure_logging
    from ledgerbook.store import LedgerStore

    p = argparse.ArgumentParser(
        prog="import_ledger_csv",
        description=(
            "Bulk-load a ledger CSV (serialNumber,displayDate,weight,amount) into the entry store.\n"
            "Use --dry-run to print the parsed entries as JSON without writing anything."
        ),
    )
    p.add_argument("--file", default="data/ledger.csv", help="CSV to import (default: data/ledger.csv)")
    p.add_argument("--config", default="config.yaml", help="Path to YAML config (default: config.yaml)")
    p.add_argument("--dry-run", action="store_true", help="Parse and print entries; do not touch the store")
    args = p.parse_args(argv)

    if not Path(args.file).exists():
        raise SystemExit(f"File not found: {args.file}")

    cfg = load_config(args.config)
    configure_logging(level=cfg.logging.level)

    entries = read_import_rows(args.file)
    if args.dry_run:
        payload = {"entries": [e.to_record() for e in entries]}
        print(json.dumps(payload, indent=2, sort_keys=False))
        return 0

    with LedgerStore(cfg.store.db_path) as store:
        for entry in entries:
            store.add_entry(entry)
        store.backup()
    print(f"Imported {len(entries)} entries into {cfg.store.db_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
