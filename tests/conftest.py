"""Shared test fixtures for taxcompare."""

import json
from decimal import Decimal
from pathlib import Path

import pytest

from taxcompare.config import TaxesConfig
from taxcompare.engines.amount_schedule import AmountSchedule
from taxcompare.engines.marginal_schedule import MarginalRateSchedule
from taxcompare.models.knots import IncomeTaxKnot


@pytest.fixture
def progressive_schedule() -> MarginalRateSchedule:
    """Worked example from https://en.wikipedia.org/wiki/Progressive_tax"""
    return MarginalRateSchedule.from_brackets([
        (Decimal("10000"), Decimal("0.1")),
        (Decimal("20000"), Decimal("0.2")),
        (None, Decimal("0.3")),
    ])


@pytest.fixture
def progressive_amounts() -> AmountSchedule:
    return AmountSchedule(knots=(
        IncomeTaxKnot(income_limit=Decimal("0"), income_tax_amount=Decimal("0")),
        IncomeTaxKnot(income_limit=Decimal("10000"), income_tax_amount=Decimal("1000")),
        IncomeTaxKnot(income_limit=Decimal("20000"), income_tax_amount=Decimal("3000")),
        IncomeTaxKnot(income_limit=Decimal("100000"), income_tax_amount=Decimal("27000")),
    ))


@pytest.fixture
def step_amounts() -> AmountSchedule:
    return AmountSchedule(knots=(
        IncomeTaxKnot(income_limit=Decimal("0"), income_tax_amount=Decimal("0")),
        IncomeTaxKnot(income_limit=Decimal("1000"), income_tax_amount=Decimal("0")),
        IncomeTaxKnot(income_limit=Decimal("2000"), income_tax_amount=Decimal("1")),
        IncomeTaxKnot(income_limit=Decimal("3000"), income_tax_amount=Decimal("3")),
    ))


@pytest.fixture
def foo_schedule() -> MarginalRateSchedule:
    return MarginalRateSchedule.from_brackets([
        (Decimal("100000"), Decimal("0.1")),
        (Decimal("200000"), Decimal("0.2")),
        (Decimal("300000"), Decimal("0.3")),
        (None, Decimal("0.4")),
    ])


@pytest.fixture
def sample_config_data() -> dict:
    return {
        "country_map": {
            "New Zealand": {
                "knots": [
                    {"marginal_rate": 0.1, "income_limit": 100000},
                    {"marginal_rate": 0.2, "income_limit": 200000},
                    {"marginal_rate": 0.3, "income_limit": 300000},
                    {"marginal_rate": 0.4, "income_limit": None},
                ]
            },
            "Australia": [
                {"marginal_rate": 0, "income_limit": 50000},
                {"marginal_rate": 0.3},
            ],
        }
    }


@pytest.fixture
def sample_config_file(tmp_path: Path, sample_config_data: dict) -> Path:
    path = tmp_path / "taxes.json"
    path.write_text(json.dumps(sample_config_data))
    return path


@pytest.fixture
def sample_config(sample_config_file: Path) -> TaxesConfig:
    return TaxesConfig.from_file(sample_config_file)
