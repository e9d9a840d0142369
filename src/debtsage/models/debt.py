"""Debt snapshots and payoff result values."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class InterestType(str, Enum):
    """How interest accrues on a debt."""

    SIMPLE = "simple"
    COMPOUND = "compound"
    FIXED = "fixed"
    # Computed as simple until rate history is tracked.
    VARIABLE = "variable"


class CompoundingFrequency(str, Enum):
    """Compounding cadence for compound-interest debts."""

    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def periods_per_year(self) -> int:
        return _PERIODS_PER_YEAR[self]


class PaymentFrequency(str, Enum):
    """Payment cadence, approximated as a fixed number of days."""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @property
    def days(self) -> int:
        return _DAYS_PER_PERIOD[self]


class PayoffStrategyName(str, Enum):
    """Debt ordering strategies."""

    SNOWBALL = "snowball"
    AVALANCHE = "avalanche"


_PERIODS_PER_YEAR = {
    CompoundingFrequency.DAILY: 365,
    CompoundingFrequency.MONTHLY: 12,
    CompoundingFrequency.YEARLY: 1,
}

_DAYS_PER_PERIOD = {
    PaymentFrequency.WEEKLY: 7,
    PaymentFrequency.BIWEEKLY: 14,
    PaymentFrequency.MONTHLY: 30,
    PaymentFrequency.YEARLY: 365,
}


@dataclass(slots=True, frozen=True)
class DebtSnapshot:
    """A liability at a point in time, as fed to the payoff simulator.

    String values for the enum fields are coerced on construction, so
    records loaded from storage can be passed through unchanged.
    """

    id: str | int
    name: str
    current_balance: float
    interest_rate: float  # annual percent, 0-100
    interest_type: InterestType = InterestType.SIMPLE
    compounding_frequency: Optional[CompoundingFrequency] = None
    minimum_payment: Optional[float] = None
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY

    def __post_init__(self) -> None:
        object.__setattr__(self, "interest_type", InterestType(self.interest_type))
        object.__setattr__(self, "payment_frequency", PaymentFrequency(self.payment_frequency))
        if self.compounding_frequency is not None:
            object.__setattr__(
                self, "compounding_frequency", CompoundingFrequency(self.compounding_frequency)
            )


@dataclass(slots=True, frozen=True)
class RecordedPayment:
    """A payment already stored against a debt."""

    amount: float
    payment_date: date
    principal_paid: float = 0.0
    interest_paid: float = 0.0


@dataclass(slots=True, frozen=True)
class PaymentSplit:
    """Principal/interest division of a single payment."""

    principal_paid: float
    interest_paid: float

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class InterestPeriod:
    """One row of an interest breakdown."""

    period: int
    principal: float
    interest: float
    total: float


@dataclass(slots=True, frozen=True)
class InterestCalculation:
    """Totals and per-period ledger for an interest breakdown."""

    principal: float
    rate: float
    time_in_years: float
    interest_amount: float
    total_amount: float
    breakdown: list[InterestPeriod] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class PaymentRow:
    """One simulated payment period of a debt payoff plan."""

    month: int
    balance: float
    payment: float
    principal_paid: float
    interest_paid: float


@dataclass(slots=True, frozen=True)
class DebtPayoffPlan:
    """Full amortization of a single debt inside a strategy run."""

    debt_id: str | int
    debt_name: str
    payoff_month: int
    total_paid: float
    interest_paid: float
    remaining_balance: float
    payments: list[PaymentRow] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class PayoffEntry:
    """Summary row of the payoff order table."""

    debt_id: str | int
    debt_name: str
    payoff_month: int
    total_paid: float
    interest_paid: float


@dataclass(slots=True, frozen=True)
class PayoffStrategy:
    """Result of simulating a snowball or avalanche payoff."""

    strategy: PayoffStrategyName
    total_months: int
    total_interest: float
    total_payments: float
    payoff_order: list[PayoffEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["strategy"] = self.strategy.value
        return data


@dataclass(slots=True, frozen=True)
class StrategyComparison:
    """Side-by-side outcome of two strategy runs.

    ``faster_strategy`` and ``cheaper_strategy`` are ``"snowball"``,
    ``"avalanche"`` or ``"tie"``.
    """

    faster_strategy: str
    cheaper_strategy: str
    time_difference: int
    interest_difference: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class DebtProgress:
    """Repayment progress for one debt."""

    percentage_paid: float
    amount_remaining: float
    total_paid: float
    total_interest_paid: float
    projected_payoff_date: Optional[date]
    days_remaining: Optional[int]
    is_paid_off: bool

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        if self.projected_payoff_date is not None:
            data["projected_payoff_date"] = self.projected_payoff_date.isoformat()
        return data


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
