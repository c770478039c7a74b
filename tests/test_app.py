from __future__ import annotations

import importlib
import json

import pytest

SWIGGY_DEBIT = "Rs.500.00 debited from A/c XX1234 on 05-01-24 at SWIGGY. Avl Bal Rs 4500.00"


@pytest.fixture
def app_module(tmp_path, monkeypatch):
    config = {
        "db_path": "ledger.db",
        "classification": {"mode": "rules", "strict": True},
        "logging": {"enabled": False},
    }
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps(config), encoding="utf-8")
    monkeypatch.setenv("SMSLEDGER_HOME", str(tmp_path))
    monkeypatch.setenv("SMSLEDGER_CONFIG", str(config_path))

    import smsledger.settings as settings

    importlib.reload(settings)
    import smsledger.app as app

    return importlib.reload(app)


def _export(tmp_path) -> str:
    path = tmp_path / "export.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "address": "VM-HDFCBK", "body": SWIGGY_DEBIT, "date": 1000},
                {"id": 2, "address": "VM-HDFCBK", "body": SWIGGY_DEBIT, "date": 1000},
                {"id": 3, "address": "JIO", "body": "Your Jio plan will expire on 12-01.", "date": 2000},
            ]
        ),
        encoding="utf-8",
    )
    return str(path)


def test_ingest_then_totals(app_module, tmp_path, capsys) -> None:
    export = _export(tmp_path)

    app_module.main(["--no-banner", "ingest", export])
    summary = capsys.readouterr().out
    assert "Inserted:        1" in summary
    assert "Duplicates:      1" in summary
    assert "informational_message: 1" in summary

    app_module.main(["--no-banner", "totals"])
    totals = capsys.readouterr().out
    assert "Transactions: 1" in totals
    assert "₹500.00" in totals


def test_missing_export_exits_non_zero(app_module, tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        app_module.main(["--no-banner", "parse", str(tmp_path / "missing.json")])
    assert excinfo.value.code == 1
