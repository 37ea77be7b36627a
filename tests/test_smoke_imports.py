"""Smoke tests for module imports and the CLI."""
from __future__ import annotations

import json

import pytest
import yaml

from prices.client import PriceClient


def test_imports():
    """All main modules should be importable."""
    import cli.main
    import common.config_loader
    import common.errors
    import common.logging_config
    import portfolio.catalog
    import portfolio.holding
    import portfolio.store
    import portfolio.tracker
    import prices.cache
    import prices.client
    import engine.valuation_engine
    import engine.refresh_scheduler
    import reporting.export
    import reporting.formatting
    import reporting.summary
    import storage.kv_store


def test_cli_main_help(capsys):
    """CLI should show help without error."""
    import sys
    from cli.main import main

    # Capture help output
    sys.argv = ["cli.main", "--help"]
    try:
        main()
    except SystemExit as e:
        assert e.code == 0

    captured = capsys.readouterr()
    assert "add" in captured.out or "export" in captured.out


def test_config_loader():
    """Config loader should work with or without a config file."""
    from common.config_loader import load_config

    cfg = load_config()
    assert cfg.storage_key == "cryptoHoldings"
    assert cfg.refresh_interval == 60

    missing = load_config("does/not/exist.yaml")
    assert missing.raw == {}
    assert missing.request_timeout == 15


@pytest.fixture
def cli_config(tmp_path, monkeypatch):
    """Config file with storage under tmp_path and a canned price response."""
    path = tmp_path / "tracker.yaml"
    path.write_text(
        yaml.safe_dump({
            "storage": {"path": str(tmp_path / "holdings.json")},
            "logging": {"level": "WARNING"},
        }),
        encoding="utf-8",
    )
    monkeypatch.setattr(PriceClient, "fetch_prices", lambda self, ids: {"bitcoin": 30000.0})
    return str(path)


def run_cli(*argv) -> int:
    from cli.main import main

    with pytest.raises(SystemExit) as exc:
        main(list(argv))
    return exc.value.code


class TestCli:
    """Tests for the CLI commands against file storage."""

    def test_add_list_export_remove(self, cli_config, tmp_path, capsys):
        """A full add → list → export → remove cycle should succeed."""
        assert run_cli("add", "--config", cli_config, "--asset", "bitcoin", "--amount", "0.5", "--price", "20000") == 0

        assert run_cli("list", "--config", cli_config) == 0
        out = capsys.readouterr().out
        assert "Bitcoin" in out
        assert "+$5,000.00 (+50.00%)" in out
        assert "total_value: $15,000.00" in out

        target = tmp_path / "out.json"
        assert run_cli("export", "--config", cli_config, "--format", "json", "--output", str(target)) == 0
        [row] = json.loads(target.read_text(encoding="utf-8"))
        assert row["pnl"] == pytest.approx(5000.0)

        holdings = json.loads(json.loads((tmp_path / "holdings.json").read_text())["cryptoHoldings"])
        assert run_cli("remove", "--config", cli_config, "--id", str(holdings[0]["id"]), "--yes") == 0
        assert run_cli("list", "--config", cli_config) == 0
        assert "No holdings yet" in capsys.readouterr().out

    def test_add_invalid_amount(self, cli_config, capsys):
        """Invalid input should exit with status 1."""
        assert run_cli("add", "--config", cli_config, "--asset", "bitcoin", "--amount", "", "--price", "1") == 1
        assert "Please fill in all fields" in capsys.readouterr().out

    def test_export_empty(self, cli_config, tmp_path, capsys):
        """Exporting nothing should not create a file."""
        target = tmp_path / "out.csv"
        assert run_cli("export", "--config", cli_config, "--output", str(target)) == 1
        assert "No holdings to export" in capsys.readouterr().out
        assert not target.exists()

    def test_remove_declined(self, cli_config, tmp_path, monkeypatch):
        """Answering no at the prompt should keep the holding."""
        run_cli("add", "--config", cli_config, "--asset", "ethereum", "--amount", "1", "--price", "1000")
        stored = json.loads((tmp_path / "holdings.json").read_text())["cryptoHoldings"]
        hid = json.loads(stored)[0]["id"]

        monkeypatch.setattr("builtins.input", lambda prompt: "n")
        assert run_cli("remove", "--config", cli_config, "--id", str(hid)) == 0
        assert json.loads((tmp_path / "holdings.json").read_text())["cryptoHoldings"] == stored

    @pytest.mark.parametrize("interval", ["0", "-5", "nan", "inf", "soon"])
    def test_watch_rejects_bad_interval(self, cli_config, interval, capsys):
        """Non-positive or non-numeric intervals should be a usage error."""
        assert run_cli("watch", "--config", cli_config, f"--interval={interval}") == 2
        assert "--interval" in capsys.readouterr().err

    def test_positive_float(self):
        from cli.main import positive_float

        assert positive_float("2.5") == 2.5

    def test_assets(self, capsys):
        assert run_cli("assets") == 0
        assert "avalanche-2" in capsys.readouterr().out
