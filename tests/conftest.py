"""Pytest configuration and shared fixtures for DebtSage tests."""

from __future__ import annotations

import pytest

from debtsage.models.debt import DebtSnapshot


@pytest.fixture
def debt_factory():
    """Factory for debt snapshots with sensible defaults."""

    counter = {"value": 0}

    def _create_debt(**overrides) -> DebtSnapshot:
        counter["value"] += 1
        values = {
            "id": f"debt-{counter['value']}",
            "name": f"Debt {counter['value']}",
            "current_balance": 1000.0,
            "interest_rate": 12.0,
            "interest_type": "simple",
            "compounding_frequency": None,
            "minimum_payment": 50.0,
            "payment_frequency": "monthly",
        }
        values.update(overrides)
        return DebtSnapshot(**values)

    return _create_debt


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Point configuration at a temporary data directory."""

    monkeypatch.setenv("DEBTSAGE_DATA_DIR", str(tmp_path / "data"))
    for name in (
        "DEBTSAGE_DEV_MODE",
        "DEBTSAGE_LOG_LEVEL",
        "DEBTSAGE_DEFAULT_STRATEGY",
        "DEBTSAGE_DEFAULT_EXTRA_PAYMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    return tmp_path


def assert_float_equal(actual: float, expected: float, tolerance: float = 0.01):
    """Assert that two floats are equal within a tolerance.

    Args:
        actual: Actual value
        expected: Expected value
        tolerance: Maximum allowed difference (default 0.01 = 1 cent)
    """
    assert (
        abs(actual - expected) < tolerance
    ), f"Expected {expected}, got {actual} (difference: {abs(actual - expected)})"


def assert_cents(value: float):
    """Assert a monetary value carries at most two decimal places."""
    assert abs(round(value, 2) - value) < 1e-9, f"{value!r} has more than 2 decimals"
