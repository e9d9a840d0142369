"""Debt payoff calculators."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional, Protocol

from ..logging_config import get_logger
from ..models.debt import (
    DebtPayoffPlan,
    DebtSnapshot,
    PaymentFrequency,
    PaymentRow,
    PayoffEntry,
    PayoffStrategy,
    PayoffStrategyName,
    StrategyComparison,
)
from ..money import round_currency
from .interest import period_interest

logger = get_logger(__name__)

MAX_MONTHS = 600  # 50 years of monthly periods
MAX_PROJECTION_DAYS = 365 * 50
PAID_OFF_TOLERANCE = 0.01  # float residue left after the final payment


class PayoffPlanWriter(Protocol):
    """Persists payoff plans for later retrieval."""

    def write_plan(
        self, *, debt_id: str | int, rows: list[PaymentRow]
    ) -> None:  # pragma: no cover - interface
        ...


def days_per_period(frequency: PaymentFrequency | str) -> int:
    """Return the fixed day count used for one payment period."""

    return PaymentFrequency(frequency).days


def get_minimum_payment(debt: DebtSnapshot) -> float:
    """Return the configured minimum, or a floor that guarantees progress.

    Without a configured minimum the floor is 110% of one period's
    interest or 2% of the balance, whichever is larger.
    """

    if debt.minimum_payment and debt.minimum_payment > 0:
        return debt.minimum_payment
    interest_portion = period_interest(
        debt.current_balance,
        debt.interest_rate,
        debt.interest_type,
        debt.compounding_frequency,
        days_per_period(debt.payment_frequency),
    )
    return max(interest_portion * 1.1, debt.current_balance * 0.02)


def calculate_debt_payoff(
    debt: DebtSnapshot, *, start_month: int = 0, payment_amount: float
) -> DebtPayoffPlan:
    """Amortize a single debt at a fixed payment, period by period.

    The month counter continues from ``start_month`` and stops at
    ``MAX_MONTHS``; a plan that hits the cap keeps its remaining balance.
    """

    balance = debt.current_balance
    month = start_month
    total_paid = 0.0
    total_interest_paid = 0.0
    period_days = days_per_period(debt.payment_frequency)
    rows: list[PaymentRow] = []

    while balance > PAID_OFF_TOLERANCE and month < MAX_MONTHS:
        month += 1

        interest = period_interest(
            balance,
            debt.interest_rate,
            debt.interest_type,
            debt.compounding_frequency,
            period_days,
        )

        # Never pay more than what is left, interest included.
        actual_payment = min(payment_amount, balance + interest)
        principal_paid = max(0.0, actual_payment - interest)
        interest_paid = min(interest, actual_payment)

        balance = round_currency(balance - principal_paid)
        total_paid += actual_payment
        total_interest_paid += interest_paid

        rows.append(
            PaymentRow(
                month=month,
                balance=balance,
                payment=round_currency(actual_payment),
                principal_paid=round_currency(principal_paid),
                interest_paid=round_currency(interest_paid),
            )
        )

    if balance > PAID_OFF_TOLERANCE:
        logger.warning(
            "Debt %s not paid off within %d months; payment too low",
            debt.id,
            MAX_MONTHS,
            extra={"debt_id": debt.id, "remaining_balance": balance},
        )

    return DebtPayoffPlan(
        debt_id=debt.id,
        debt_name=debt.name,
        payoff_month=month,
        total_paid=round_currency(total_paid),
        interest_paid=round_currency(total_interest_paid),
        remaining_balance=round_currency(max(balance, 0.0)),
        payments=rows,
    )


def is_payoff_achievable(plan: DebtPayoffPlan) -> bool:
    """Return ``False`` when the plan ran out of months with balance left."""

    return plan.remaining_balance <= PAID_OFF_TOLERANCE


def sort_debts(
    debts: Iterable[DebtSnapshot], strategy: PayoffStrategyName | str
) -> list[DebtSnapshot]:
    """Drop paid-off debts and order the rest for the given strategy."""

    name = PayoffStrategyName(strategy)
    active = [d for d in debts if d.current_balance > 0]
    if name is PayoffStrategyName.SNOWBALL:
        # Smallest balance first; sorted() is stable so ties keep input order.
        return sorted(active, key=lambda d: d.current_balance)
    if name is PayoffStrategyName.AVALANCHE:
        # Highest rate first, smaller balance breaks ties.
        return sorted(active, key=lambda d: (-d.interest_rate, d.current_balance))
    raise ValueError("Invalid debt payoff strategy.")


def build_payoff_plans(
    debts: Iterable[DebtSnapshot],
    strategy: PayoffStrategyName | str,
    extra_payment: float = 0.0,
) -> list[DebtPayoffPlan]:
    """Simulate each debt in strategy order, one after another.

    Each debt is paid off completely before the clock starts on the next;
    the next plan's months continue from the previous payoff month. The
    debt being paid receives the rolling extra payment, and once it is
    cleared its minimum payment joins that extra for the debt after it.
    """

    ordered = sort_debts(debts, strategy)
    plans: list[DebtPayoffPlan] = []
    current_month = 0
    rolling_extra = extra_payment

    for debt in ordered:
        minimum = get_minimum_payment(debt)
        plan = calculate_debt_payoff(
            debt, start_month=current_month, payment_amount=minimum + rolling_extra
        )
        plans.append(plan)
        current_month = plan.payoff_month
        rolling_extra += minimum

    return plans


def calculate_strategy(
    debts: Iterable[DebtSnapshot],
    strategy: PayoffStrategyName | str,
    extra_payment: float = 0.0,
) -> PayoffStrategy:
    """Return totals and the payoff order for a snowball or avalanche run."""

    name = PayoffStrategyName(strategy)
    return _summarize(name, build_payoff_plans(debts, name, extra_payment))


def _summarize(name: PayoffStrategyName, plans: list[DebtPayoffPlan]) -> PayoffStrategy:
    total_interest = sum(p.interest_paid for p in plans)
    total_payments = sum(p.total_paid for p in plans)
    total_months = plans[-1].payoff_month if plans else 0

    logger.debug(
        "Simulated %s strategy for %d debts over %d months",
        name.value,
        len(plans),
        total_months,
    )

    return PayoffStrategy(
        strategy=name,
        total_months=total_months,
        total_interest=round_currency(total_interest),
        total_payments=round_currency(total_payments),
        payoff_order=[
            PayoffEntry(
                debt_id=p.debt_id,
                debt_name=p.debt_name,
                payoff_month=p.payoff_month,
                total_paid=p.total_paid,
                interest_paid=p.interest_paid,
            )
            for p in plans
        ],
    )


def calculate_snowball_strategy(
    debts: Iterable[DebtSnapshot], extra_payment: float = 0.0
) -> PayoffStrategy:
    """Pay off smallest balances first."""
    return calculate_strategy(debts, PayoffStrategyName.SNOWBALL, extra_payment)


def calculate_avalanche_strategy(
    debts: Iterable[DebtSnapshot], extra_payment: float = 0.0
) -> PayoffStrategy:
    """Pay off highest interest rates first."""
    return calculate_strategy(debts, PayoffStrategyName.AVALANCHE, extra_payment)


def _winner(snowball_value: float, avalanche_value: float) -> str:
    if snowball_value < avalanche_value:
        return PayoffStrategyName.SNOWBALL.value
    if snowball_value > avalanche_value:
        return PayoffStrategyName.AVALANCHE.value
    return "tie"


def compare_strategies(snowball: PayoffStrategy, avalanche: PayoffStrategy) -> StrategyComparison:
    """Report which strategy finishes sooner and which pays less interest."""

    return StrategyComparison(
        faster_strategy=_winner(snowball.total_months, avalanche.total_months),
        cheaper_strategy=_winner(snowball.total_interest, avalanche.total_interest),
        time_difference=abs(snowball.total_months - avalanche.total_months),
        interest_difference=round_currency(abs(snowball.total_interest - avalanche.total_interest)),
    )


def projected_payoff_date(
    debt: DebtSnapshot, monthly_payment: float, *, today: date | None = None
) -> Optional[date]:
    """Return the date the balance is cleared paying ``monthly_payment`` per period.

    ``None`` means the debt will not be paid off within 50 years at this
    payment level.
    """

    if monthly_payment <= 0:
        return None

    period_days = days_per_period(debt.payment_frequency)
    balance = debt.current_balance
    days = 0

    while balance > PAID_OFF_TOLERANCE and days < MAX_PROJECTION_DAYS:
        interest = period_interest(
            balance,
            debt.interest_rate,
            debt.interest_type,
            debt.compounding_frequency,
            period_days,
        )
        actual_payment = min(monthly_payment, balance + interest)
        principal_paid = max(0.0, actual_payment - interest)
        balance = round_currency(balance - principal_paid)
        days += period_days

    if balance > PAID_OFF_TOLERANCE:
        logger.warning(
            "Debt %s has no payoff date at payment %.2f",
            debt.id,
            monthly_payment,
            extra={"debt_id": debt.id, "remaining_balance": balance},
        )
        return None

    return (today or date.today()) + timedelta(days=days)


def persist_strategy(
    *,
    writer: PayoffPlanWriter,
    debts: Iterable[DebtSnapshot],
    strategy: str,
    extra_payment: float = 0.0,
) -> PayoffStrategy:
    """Compute plans for the desired strategy and hand them to persistence."""
    try:
        name = PayoffStrategyName(strategy)
    except ValueError as exc:
        raise ValueError("Invalid debt payoff strategy.") from exc

    plans = build_payoff_plans(debts, name, extra_payment)
    for plan in plans:
        writer.write_plan(debt_id=plan.debt_id, rows=plan.payments)
    return _summarize(name, plans)


__all__ = [
    "MAX_MONTHS",
    "MAX_PROJECTION_DAYS",
    "PayoffPlanWriter",
    "build_payoff_plans",
    "calculate_avalanche_strategy",
    "calculate_debt_payoff",
    "calculate_snowball_strategy",
    "calculate_strategy",
    "compare_strategies",
    "days_per_period",
    "get_minimum_payment",
    "is_payoff_achievable",
    "persist_strategy",
    "projected_payoff_date",
    "sort_debts",
]
