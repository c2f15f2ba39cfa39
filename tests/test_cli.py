from __future__ import annotations

from pathlib import Path

import pytest

from ledgerbook.cli import main


@pytest.fixture
def run(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("LEDGER_DB_PATH", str(tmp_path / "ledger.db"))
    monkeypatch.setenv("LEDGER_EXPORT_PATH", str(tmp_path / "export.csv"))
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "ledgerbook.log"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    def _run(*args: str) -> int:
        return main(["--env-file", str(tmp_path / "missing.env"), *args])

    return _run


def _add(run, serial: str, when: str, amount: str) -> None:
    assert run("add", "--serial", serial, "--date", when, "--weight", "5g", "--amount", amount) == 0


def test_add_then_search(run, capsys) -> None:
    _add(run, "A1", "01-01-2025", "10000")
    _add(run, "A3", "01-01-2025", "2000")
    _add(run, "B1", "01-01-2025", "5000")
    capsys.readouterr()

    assert run("search", "A1-A5", "--as-of", "2025-02-15") == 0
    out = capsys.readouterr().out
    lines = out.strip().splitlines()
    assert lines[1].startswith("A1\t01-01-2025\t5g\t10000\t300.00\t10300.00")
    assert lines[2].startswith("A3\t")
    assert "B1" not in out
    assert "Total Entries (2)" in lines[-1]


def test_search_without_match(run, capsys) -> None:
    _add(run, "A1", "01-01-2025", "10000")
    capsys.readouterr()
    assert run("search", "Z9") == 0
    assert "No matching entries." in capsys.readouterr().out


def test_add_validates_input(run) -> None:
    with pytest.raises(SystemExit):
        run("add", "--serial", "A1", "--date", "2025-01-01", "--weight", "5g", "--amount", "100")
    with pytest.raises(SystemExit):
        run("add", "--serial", "A1", "--date", "01-01-2025", "--weight", "5g", "--amount", "-5")
    with pytest.raises(SystemExit):
        run("add", "--serial", "A1", "--date", "01-01-2025", "--weight", "5g", "--amount", "abc")
    with pytest.raises(SystemExit, match="Serial number and weight are required"):
        run("add", "--serial", "   ", "--date", "01-01-2025", "--weight", "5g", "--amount", "100")
    with pytest.raises(SystemExit, match="Serial number and weight are required"):
        run("add", "--serial", "A1", "--date", "01-01-2025", "--weight", "", "--amount", "100")


def test_edit_delete_and_summary(run, capsys, tmp_path: Path) -> None:
    _add(run, "1", "01-01-2025", "10000")
    entry_id = capsys.readouterr().out.strip()

    assert run("edit", entry_id, "--amount", "40000", "--date", "10-05-2024") == 0
    assert run("summary", "--as-of", "2025-06-14") == 0
    out = capsys.readouterr().out
    # 400 days old: 48,400 compounded + 988.17 interest.
    assert "Total Entries: 1" in out
    assert "Total Payable: ₹49,388.17" in out
    assert "Daily Interest: ₹988.17" in out

    assert run("export", "--as-of", "2025-06-14") == 0
    export_path = Path(capsys.readouterr().out.strip())
    assert export_path == tmp_path / "export.csv"
    assert "49388.17" in export_path.read_text(encoding="utf-8")

    assert run("delete", entry_id) == 0
    assert run("delete", entry_id) == 1
    with pytest.raises(SystemExit):
        run("edit", entry_id, "--weight", "1g")


def test_import_then_view(run, capsys, tmp_path: Path) -> None:
    src = tmp_path / "in.csv"
    src.write_text(
        "serialNumber,displayDate,weight,amount\nB2,01-01-2025,5g,100\nA10,01-01-2025,5g,100\nA2,01-01-2025,5g,100\n",
        encoding="utf-8",
    )
    assert run("import", str(src)) == 0
    assert "Imported 3 entries" in capsys.readouterr().out

    assert run("view", "--as-of", "2025-01-02") == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert [line.split("\t")[0] for line in lines[1:-1]] == ["A2", "A10", "B2"]


def test_edit_rejects_blank_serial_and_weight(run, capsys) -> None:
    _add(run, "A1", "01-01-2025", "100")
    entry_id = capsys.readouterr().out.strip()

    with pytest.raises(SystemExit, match="Serial number and weight are required"):
        run("edit", entry_id, "--serial", "  ")
    with pytest.raises(SystemExit, match="Serial number and weight are required"):
        run("edit", entry_id, "--weight", "")

    # Nothing blank was stored, so an empty search token matches nothing.
    assert run("search", "1,,2", "--as-of", "2025-01-02") == 0
    assert "No matching entries." in capsys.readouterr().out


def test_view_without_as_of_uses_today(run, capsys) -> None:
    from datetime import date

    _add(run, "A1", date.today().strftime("%d-%m-%Y"), "100")
    capsys.readouterr()

    assert run("view") == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[1].endswith("\t100\t2.00\t102.00")
