"""Tests for the amm-broker command line."""

import json
import sys
from decimal import Decimal

import pytest

from amm_broker.cli import main as cli


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["amm-broker", *argv])
    cli.main()


class TestTradeSize:
    """`amm-broker trade-size` runs offline."""

    def test_moves_replayed_pool_to_target(self, monkeypatch, tmp_path, capsys):
        """900/1 reserves, target 1000/1: sells A and lands next to 1000."""
        monkeypatch.chdir(tmp_path)
        run_cli(monkeypatch, "trade-size", "1000", "1", str(900 * 10**18), str(10**18))

        result = json.loads(capsys.readouterr().out)
        assert result["a_to_b"] is True
        assert result["amount_in"] > 0
        assert Decimal(result["price_before"]) == Decimal(900)
        assert abs(Decimal(result["price_after"]) - 1000) / 1000 < Decimal("0.001")
        assert result["target_price"] == "1000/1"

        saved = json.loads((tmp_path / "results" / "trade_size.json").read_text())
        assert saved == result

    def test_fee_multiplier(self, monkeypatch, tmp_path, capsys):
        """The fee-aware multiplier trades less."""
        monkeypatch.chdir(tmp_path)
        args = ["trade-size", "1000", "1", str(900 * 10**18), str(10**18)]

        run_cli(monkeypatch, *args)
        plain = json.loads(capsys.readouterr().out)
        run_cli(monkeypatch, *args, "--fee-numerator", "997", "--fee-denominator", "1000")
        with_fee = json.loads(capsys.readouterr().out)

        assert with_fee["amount_in"] < plain["amount_in"]

    def test_invalid_reserves_exit_non_zero(self, monkeypatch, tmp_path, capsys):
        """Errors are printed and the process exits with status 1."""
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc:
            run_cli(monkeypatch, "trade-size", "1000", "1", "0", str(10**18))

        assert exc.value.code == 1
        assert capsys.readouterr().out.startswith("Error:")


class TestHelp:
    def test_no_command_prints_help(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(monkeypatch)
        assert exc.value.code == 1
        assert "trade-size" in capsys.readouterr().out

    def test_univ3_without_subcommand(self, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            run_cli(monkeypatch, "univ3")
        assert "swap-to-price" in capsys.readouterr().out
