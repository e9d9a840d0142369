"""Interest accrual and payment split calculators."""

from __future__ import annotations

from typing import Optional

from ..models.debt import (
    CompoundingFrequency,
    InterestCalculation,
    InterestPeriod,
    InterestType,
    PaymentSplit,
)
from ..money import round_currency

DAYS_PER_YEAR = 365


def simple_interest(principal: float, annual_rate_percent: float, time_in_years: float) -> float:
    """Return ``principal * rate * time`` rounded to cents.

    Inputs are not validated; negative values yield negative interest.
    """

    return round_currency(principal * annual_rate_percent * time_in_years / 100)


def compound_interest(
    principal: float,
    annual_rate_percent: float,
    time_in_years: float,
    compounding_frequency: CompoundingFrequency | str,
) -> float:
    """Return interest earned under ``A = P(1 + r/n)^(nt)``.

    ``n`` is the number of compounding periods per year for the frequency.
    """

    n = CompoundingFrequency(compounding_frequency).periods_per_year
    r = annual_rate_percent / 100
    amount = principal * (1 + r / n) ** (n * time_in_years)
    return round_currency(amount - principal)


def _interest_for_years(
    principal: float,
    rate: float,
    interest_type: InterestType | str,
    compounding_frequency: Optional[CompoundingFrequency | str],
    time_in_years: float,
) -> float:
    """Dispatch on interest type. The only place interest types are told apart."""

    kind = InterestType(interest_type)
    if kind is InterestType.SIMPLE or kind is InterestType.FIXED:
        return simple_interest(principal, rate, time_in_years)
    if kind is InterestType.COMPOUND:
        frequency = compounding_frequency or CompoundingFrequency.MONTHLY
        return compound_interest(principal, rate, time_in_years, frequency)
    if kind is InterestType.VARIABLE:
        # No rate history yet, so variable debts accrue like simple ones.
        return simple_interest(principal, rate, time_in_years)
    raise ValueError(f"Unsupported interest type: {kind!r}")


def period_interest(
    principal: float,
    rate: float,
    interest_type: InterestType | str,
    compounding_frequency: Optional[CompoundingFrequency | str],
    period_in_days: float,
) -> float:
    """Interest accrued on ``principal`` over ``period_in_days`` days."""

    return _interest_for_years(
        principal, rate, interest_type, compounding_frequency, period_in_days / DAYS_PER_YEAR
    )


def project_future_interest(
    current_balance: float,
    rate: float,
    interest_type: InterestType | str,
    compounding_frequency: Optional[CompoundingFrequency | str],
    months_ahead: float,
) -> float:
    """Interest that accrues over ``months_ahead`` months if nothing is paid."""

    return _interest_for_years(
        current_balance, rate, interest_type, compounding_frequency, months_ahead / 12
    )


def payment_split(
    payment_amount: float,
    current_balance: float,
    rate: float,
    interest_type: InterestType | str,
    compounding_frequency: Optional[CompoundingFrequency | str],
    days_since_last_payment: float,
) -> PaymentSplit:
    """Divide a payment into the principal and interest it covers.

    Interest accrued since the last payment is settled first and is capped
    at the payment amount, so principal is never negative. Each side is
    rounded on its own; their sum may differ from the rounded payment by
    one cent.
    """

    accrued = period_interest(
        current_balance, rate, interest_type, compounding_frequency, days_since_last_payment
    )
    interest_paid = min(accrued, payment_amount)
    principal_paid = max(0.0, payment_amount - interest_paid)
    return PaymentSplit(
        principal_paid=round_currency(principal_paid),
        interest_paid=round_currency(interest_paid),
    )


def interest_breakdown(
    principal: float,
    rate: float,
    interest_type: InterestType | str,
    compounding_frequency: Optional[CompoundingFrequency | str],
    number_of_periods: int,
    period_in_days: float = 30,
) -> InterestCalculation:
    """Per-period interest ledger over ``number_of_periods`` periods.

    Compound debts carry each period's total forward as the next period's
    principal; every other type accrues on the original principal.
    """

    kind = InterestType(interest_type)
    breakdown: list[InterestPeriod] = []
    current_principal = principal
    total_interest = 0.0

    for period in range(1, number_of_periods + 1):
        interest = period_interest(
            current_principal, rate, kind, compounding_frequency, period_in_days
        )
        total_interest += interest
        total = current_principal + interest

        breakdown.append(
            InterestPeriod(
                period=period,
                principal=round_currency(current_principal),
                interest=round_currency(interest),
                total=round_currency(total),
            )
        )

        if kind is InterestType.COMPOUND:
            current_principal = total

    return InterestCalculation(
        principal=principal,
        rate=rate,
        time_in_years=number_of_periods * period_in_days / DAYS_PER_YEAR,
        interest_amount=round_currency(total_interest),
        total_amount=round_currency(principal + total_interest),
        breakdown=breakdown,
    )


__all__ = [
    "compound_interest",
    "interest_breakdown",
    "payment_split",
    "period_interest",
    "project_future_interest",
    "simple_interest",
]
