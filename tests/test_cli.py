"""Tests for the eph command line."""

import csv
import json
import sys

import pytest
import yaml

from ephemeris.cli import main


HEADER = ["uuid", "date", "text"]
ROWS = [
    ["U1", "2024-03-05T09:00:00Z", "First entry"],
    ["U2", "2024-03-05T18:00:00Z", "Second entry"],
    ["U3", "2024-03-07T08:00:00Z", "Third entry"],
]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory so no stray ephemeris.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    with (tmp_path / "Journal.csv").open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        writer.writerows(ROWS)
    return tmp_path


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["eph", *argv])
    with pytest.raises(SystemExit) as exc:
        main()
    return exc.value.code


def test_import_into_document(workdir, monkeypatch, capsys):
    """Test importing into a new document file."""
    code = run_cli(monkeypatch, "import", "Journal.csv", "--document", "journal.org")

    assert code == 0
    text = (workdir / "journal.org").read_text()
    assert text.startswith("* 2024\n** 2024-03 March\n*** 2024-03-05 Tuesday\n")
    assert "*** 2024-03-05 Tuesday (U2)\n" in text
    assert "Imported 3 entries from Journal.csv" in capsys.readouterr().out


def test_import_twice_reports_skips(workdir, monkeypatch, capsys):
    """Test a repeated import reports skipped entries and imports nothing."""
    run_cli(monkeypatch, "-q", "import", "Journal.csv", "--document", "journal.org")
    before = (workdir / "journal.org").read_text()
    capsys.readouterr()

    code = run_cli(monkeypatch, "import", "Journal.csv", "--document", "journal.org")

    out = capsys.readouterr().out
    assert code == 0
    assert "Skipped U1: already imported" in out
    assert "Imported 0 entries from Journal.csv" in out
    assert (workdir / "journal.org").read_text() == before


def test_import_to_stdout(workdir, monkeypatch, capsys):
    """Test without --document the new document goes to stdout."""
    code = run_cli(monkeypatch, "import", "Journal.csv")

    captured = capsys.readouterr()
    assert code == 0
    assert captured.out.startswith("* 2024\n")
    assert ":DAYONE_UUID: U3\n" in captured.out
    assert "Imported 3 entries" in captured.err


def test_import_json(workdir, monkeypatch, capsys):
    """Test machine-readable completion report."""
    code = run_cli(monkeypatch, "--json", "import", "Journal.csv", "-o", "journal.org")

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["imported"] == 3
    assert data["source"] == "Journal.csv"
    assert data["document"] == "journal.org"
    assert data["skipped"] == []


def test_import_dry_run(workdir, monkeypatch, capsys):
    """Test --dry-run does not write the document."""
    code = run_cli(monkeypatch, "import", "Journal.csv", "-o", "journal.org", "--dry-run")

    assert code == 0
    assert not (workdir / "journal.org").exists()
    assert "[DRY RUN] Would write: journal.org" in capsys.readouterr().out


def test_import_report(workdir, monkeypatch):
    """Test --report saves a YAML report."""
    code = run_cli(
        monkeypatch, "-q", "import", "Journal.csv", "-o", "journal.org", "--report", "import.yaml",
    )

    data = yaml.safe_load((workdir / "import.yaml").read_text())
    assert code == 0
    assert data["imported"] == 3
    assert data["source"] == "Journal.csv"


def test_import_missing_anchor(workdir, monkeypatch, capsys):
    """Test a missing anchor fails and leaves the document alone."""
    (workdir / "journal.org").write_text("* Inbox\n")

    code = run_cli(monkeypatch, "import", "Journal.csv", "-o", "journal.org", "--root", "Journal")

    assert code == 1
    assert "Error: Anchor not found: Journal" in capsys.readouterr().err
    assert (workdir / "journal.org").read_text() == "* Inbox\n"


def test_import_missing_csv(workdir, monkeypatch, capsys):
    """Test an unreadable CSV is reported as an error."""
    code = run_cli(monkeypatch, "import", "missing.csv", "-o", "journal.org")

    assert code == 1
    assert "Cannot read CSV file" in capsys.readouterr().err
    assert not (workdir / "journal.org").exists()


def test_import_uses_config_defaults(workdir, monkeypatch, capsys):
    """Test CSV, document and anchor can come from ephemeris.toml."""
    (workdir / "ephemeris.toml").write_text(
        '[import]\ncsv = "Journal.csv"\ndocument = "journal.org"\nroot = ["Journal"]\n'
    )

    code = run_cli(monkeypatch, "-q", "import")

    assert code == 0
    assert (workdir / "journal.org").read_text().startswith("* Journal\n** 2024\n")


def test_find(workdir, monkeypatch, capsys):
    """Test locating an imported entry by UUID."""
    run_cli(monkeypatch, "-q", "import", "Journal.csv", "-o", "journal.org")
    capsys.readouterr()

    code = run_cli(monkeypatch, "find", "U2", "-o", "journal.org")
    assert code == 0
    assert capsys.readouterr().out.strip() == (
        "2024 / 2024-03 March / 2024-03-05 Tuesday (U2)"
    )

    code = run_cli(monkeypatch, "--json", "find", "U9", "-o", "journal.org")
    assert code == 1
    assert json.loads(capsys.readouterr().out) == {"uuid": "U9", "path": None}
