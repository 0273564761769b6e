"""Tests for CLI commands."""

import json
from decimal import Decimal

import pytest
from typer.testing import CliRunner

from taxcompare.cli import app
from taxcompare.config import CONFIG_PATH_ENV

runner = CliRunner()


@pytest.fixture(autouse=True)
def _bundled_config(monkeypatch):
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)


class TestCLI:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "taxcompare" in result.output

    def test_banner(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "Same income, different bill." in result.output

    def test_countries_help(self):
        result = runner.invoke(app, ["countries", "--help"])
        assert result.exit_code == 0

    def test_brackets_help(self):
        result = runner.invoke(app, ["brackets", "--help"])
        assert result.exit_code == 0

    def test_lookup_help(self):
        result = runner.invoke(app, ["lookup", "--help"])
        assert result.exit_code == 0

    def test_compare_help(self):
        result = runner.invoke(app, ["compare", "--help"])
        assert result.exit_code == 0


class TestCountriesCommand:
    def test_lists_bundled_countries(self):
        result = runner.invoke(app, ["countries"])
        assert result.exit_code == 0
        assert "NZD  New Zealand" in result.output

    def test_config_file(self, sample_config_file):
        result = runner.invoke(app, ["countries", "--config", str(sample_config_file)])
        assert result.exit_code == 0
        assert "Australia" in result.output
        assert "Ireland" not in result.output


class TestBracketsCommand:
    def test_table(self):
        result = runner.invoke(app, ["brackets", "New Zealand"])
        assert result.exit_code == 0
        assert "39.00%" in result.output
        assert "and above" in result.output

    def test_unknown_country(self):
        result = runner.invoke(app, ["brackets", "Atlantis"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestLookupCommand:
    def test_known_value(self):
        result = runner.invoke(app, ["lookup", "Ireland", "50000"])
        assert result.exit_code == 0
        assert "11,600.00" in result.output
        assert "23.20%" in result.output

    def test_negative_income(self):
        result = runner.invoke(app, ["lookup", "Ireland", "--", "-5"])
        assert result.exit_code == 1
        assert "Negative income" in result.output


class TestCompareCommand:
    def _compare(self, config_file, *extra):
        return runner.invoke(app, [
            "compare", "New Zealand", "Australia",
            "--config", str(config_file),
            "--max-income", "390000",
            "--step", "1000",
            *extra,
        ])

    def test_json_output(self, sample_config_file):
        result = self._compare(sample_config_file, "--break-even", "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data["country_specific_data"]["New Zealand"]["incomes"]) == 391
        breakeven = data["country_comb_data"]["New Zealand-Australia"]
        assert [Decimal(str(x)) for x in breakeven["breakeven_incomes"]] == [Decimal("75000")]

    def test_text_output(self, sample_config_file):
        result = self._compare(sample_config_file, "--break-even", "--income", "25000")
        assert result.exit_code == 0
        assert "NEW ZEALAND" in result.output
        assert "96,000.00" in result.output
        assert "BREAK-EVEN POINTS" in result.output
        assert "75,000.00" in result.output

    def test_warning_section(self, sample_config_file):
        result = self._compare(sample_config_file, "--income", "500000")
        assert result.exit_code == 0
        assert "WARNINGS:" in result.output

    def test_currency_normalization(self, sample_config_file, tmp_path):
        rates = tmp_path / "rates.json"
        rates.write_text(json.dumps({"rates": {"AUD": 0.5}}))
        result = self._compare(sample_config_file, "--currency", "NZD", "--rates", str(rates), "--json")
        assert result.exit_code == 0
        data = json.loads(result.output)
        australia = data["country_specific_data"]["Australia"]
        assert Decimal(str(australia["tax_amounts"][-1])) == Decimal("87000")

    def test_missing_rates(self, sample_config_file):
        result = self._compare(sample_config_file, "--currency", "NZD")
        assert result.exit_code == 1
        assert "Exchange rate error" in result.output

    def test_unknown_country(self, sample_config_file):
        result = runner.invoke(app, ["compare", "Atlantis", "--config", str(sample_config_file)])
        assert result.exit_code == 1
        assert "Atlantis" in result.output

    def test_invalid_step(self, sample_config_file):
        result = self._compare(sample_config_file, "--step", "0")
        assert result.exit_code == 1
        assert "Error:" in result.output
