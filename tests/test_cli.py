"""CLI command tests."""

from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from debtsage.cli import main


@pytest.fixture(autouse=True)
def _reset_logging(isolated_env):
    yield
    logger = logging.getLogger("debtsage")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def debt_file(tmp_path):
    path = tmp_path / "debts.json"
    path.write_text(
        json.dumps(
            [
                {
                    "id": "A",
                    "name": "Car loan",
                    "current_balance": 5000,
                    "interest_rate": 20,
                    "minimum_payment": 150,
                },
                {
                    "id": "B",
                    "name": "Store card",
                    "current_balance": 1000,
                    "interest_rate": 5,
                    "minimum_payment": 40,
                },
            ]
        ),
        encoding="utf-8",
    )
    return path


def test_strategy_json(runner, debt_file):
    result = runner.invoke(main, ["strategy", str(debt_file), "--strategy", "snowball", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["strategy"] == "snowball"
    assert [entry["debt_id"] for entry in data["payoff_order"]] == ["B", "A"]


def test_strategy_uses_configured_default(runner, debt_file, monkeypatch):
    monkeypatch.setenv("DEBTSAGE_DEFAULT_STRATEGY", "avalanche")

    result = runner.invoke(main, ["strategy", str(debt_file)])

    assert result.exit_code == 0, result.output
    assert "Strategy:        avalanche" in result.output
    assert result.output.index("Car loan") < result.output.index("Store card")


def test_strategy_accepts_wrapped_debt_list(runner, tmp_path):
    path = tmp_path / "wrapped.json"
    path.write_text(
        json.dumps({"debts": [{"id": 1, "name": "Loan", "current_balance": 300, "interest_rate": 0,
                               "minimum_payment": 100}]}),
        encoding="utf-8",
    )

    result = runner.invoke(main, ["strategy", str(path), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["total_months"] == 3


def _write(tmp_path, debts):
    path = tmp_path / "debts.json"
    path.write_text(json.dumps(debts), encoding="utf-8")
    return path


def test_strategy_debt_paid_on_final_month_shows_month(runner, tmp_path):
    path = _write(
        tmp_path,
        [{"id": 1, "name": "Exact", "current_balance": 600, "interest_rate": 0, "minimum_payment": 1}],
    )

    result = runner.invoke(main, ["strategy", str(path)])

    assert result.exit_code == 0, result.output
    row = next(line for line in result.output.splitlines() if "Exact" in line)
    assert row.split()[2] == "600"
    assert "never" not in result.output


def test_strategy_unpayable_debt_shows_never(runner, tmp_path):
    path = _write(
        tmp_path,
        [{"id": 1, "name": "Stuck", "current_balance": 10000, "interest_rate": 24, "minimum_payment": 10}],
    )

    result = runner.invoke(main, ["strategy", str(path)])

    assert result.exit_code == 0, result.output
    row = next(line for line in result.output.splitlines() if "Stuck" in line)
    assert row.split()[2] == "never"


def test_compare(runner, debt_file):
    result = runner.invoke(main, ["compare", str(debt_file), "--extra", "100", "--json"])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["snowball"]["strategy"] == "snowball"
    assert data["avalanche"]["strategy"] == "avalanche"
    assert data["comparison"]["cheaper_strategy"] in {"snowball", "avalanche", "tie"}


def test_compare_text(runner, debt_file):
    result = runner.invoke(main, ["compare", str(debt_file)])
    assert result.exit_code == 0, result.output
    assert "Faster:" in result.output


def test_split(runner):
    result = runner.invoke(
        main, ["split", "--amount", "100", "--balance", "1000", "--rate", "12", "--days", "30"]
    )

    assert result.exit_code == 0, result.output
    assert "Principal: 90.14" in result.output
    assert "Interest:  9.86" in result.output


def test_breakdown_json(runner):
    result = runner.invoke(
        main,
        ["breakdown", "--principal", "1000", "--rate", "12", "--periods", "3", "--json"],
    )

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["interest_amount"] == 29.58
    assert len(data["breakdown"]) == 3


def test_payoff_date(runner, tmp_path):
    path = tmp_path / "debts.json"
    path.write_text(
        json.dumps(
            [
                {"id": 1, "name": "Easy", "current_balance": 1000, "interest_rate": 0},
                {"id": 2, "name": "Stuck", "current_balance": 10000, "interest_rate": 24},
            ]
        ),
        encoding="utf-8",
    )

    result = runner.invoke(
        main, ["payoff-date", str(path), "--payment", "100", "--today", "2024-01-15"]
    )

    assert result.exit_code == 0, result.output
    assert "Easy: 2024-11-10" in result.output
    assert "Stuck: will not pay off" in result.output


def test_invalid_debt_file(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"id": 1, "name": "Bad", "current_balance": 10, "interest_rate": 400}]))

    result = runner.invoke(main, ["strategy", str(path)])

    assert result.exit_code == 1
    assert "Debt #1 is invalid" in result.output
    assert "interest_rate" in result.output


def test_unreadable_debt_file(runner, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")

    result = runner.invoke(main, ["strategy", str(path)])

    assert result.exit_code == 1
    assert "Could not read debt file" in result.output


def test_bad_configuration_is_reported(runner, debt_file, monkeypatch):
    monkeypatch.setenv("DEBTSAGE_DEFAULT_STRATEGY", "tortoise")

    result = runner.invoke(main, ["strategy", str(debt_file)])

    assert result.exit_code == 1
    assert "DEBTSAGE_DEFAULT_STRATEGY" in result.output
