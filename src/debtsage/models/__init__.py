"""Engine value types."""

from .debt import (
    CompoundingFrequency,
    DebtPayoffPlan,
    DebtProgress,
    DebtSnapshot,
    InterestCalculation,
    InterestPeriod,
    InterestType,
    PaymentFrequency,
    PaymentRow,
    PaymentSplit,
    RecordedPayment,
    PayoffEntry,
    PayoffStrategy,
    PayoffStrategyName,
    StrategyComparison,
)

__all__ = [
    "CompoundingFrequency",
    "DebtPayoffPlan",
    "DebtProgress",
    "DebtSnapshot",
    "InterestCalculation",
    "InterestPeriod",
    "InterestType",
    "PaymentFrequency",
    "PaymentRow",
    "PaymentSplit",
    "RecordedPayment",
    "PayoffEntry",
    "PayoffStrategy",
    "PayoffStrategyName",
    "StrategyComparison",
]
