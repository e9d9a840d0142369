"""DebtSage debt interest and payoff strategy engine."""

from __future__ import annotations

from .config import BaseConfig, DevConfig
from .models.debt import (
    CompoundingFrequency,
    DebtSnapshot,
    InterestType,
    PaymentFrequency,
    PayoffStrategy,
    PayoffStrategyName,
)
from .services.debts import calculate_strategy, compare_strategies, projected_payoff_date
from .services.interest import interest_breakdown, payment_split, period_interest

__all__ = [
    "BaseConfig",
    "CompoundingFrequency",
    "DebtSnapshot",
    "DevConfig",
    "InterestType",
    "PaymentFrequency",
    "PayoffStrategy",
    "PayoffStrategyName",
    "calculate_strategy",
    "compare_strategies",
    "interest_breakdown",
    "payment_split",
    "period_interest",
    "projected_payoff_date",
]
