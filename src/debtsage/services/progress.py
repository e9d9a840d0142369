"""Payment history helpers and repayment progress."""

from __future__ import annotations

import calendar
import math
from datetime import date
from typing import Iterable, Optional

from ..models.debt import DebtProgress, DebtSnapshot, PaymentSplit, RecordedPayment
from ..money import round_currency
from .interest import payment_split


def days_between(earlier: date, later: date) -> int:
    """Whole days from ``earlier`` to ``later``, never negative."""

    return max(0, (later - earlier).days)


def last_payment_anchor(start_date: date, payment_dates: Iterable[date]) -> date:
    """Date interest has been accruing from: the latest payment, else the start date."""

    return max(payment_dates, default=start_date)


def split_for_new_payment(
    debt: DebtSnapshot,
    amount: float,
    payment_date: date,
    *,
    start_date: date,
    payment_dates: Iterable[date] = (),
) -> PaymentSplit:
    """Preview the principal/interest split of a payment about to be recorded."""

    if amount <= 0:
        return PaymentSplit(principal_paid=0.0, interest_paid=0.0)

    anchor = last_payment_anchor(start_date, payment_dates)
    return payment_split(
        amount,
        debt.current_balance,
        debt.interest_rate,
        debt.interest_type,
        debt.compounding_frequency,
        days_between(anchor, payment_date),
    )


def _add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month's length."""

    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def debt_progress(
    *,
    principal_amount: float,
    current_balance: float,
    payments: Iterable[RecordedPayment] = (),
    minimum_payment: Optional[float] = None,
    next_payment_date: Optional[date] = None,
    today: Optional[date] = None,
) -> DebtProgress:
    """Summarise how far a debt has been repaid.

    The projected payoff date assumes only the minimum payment is made
    from the next due date on; interest is ignored.
    """

    payments = list(payments)
    total_paid = sum(p.amount for p in payments)
    total_interest_paid = sum(p.interest_paid for p in payments)

    if principal_amount > 0:
        percentage_paid = (principal_amount - current_balance) / principal_amount * 100
    else:
        percentage_paid = 0.0
    amount_remaining = max(0.0, current_balance)

    projected: Optional[date] = None
    if next_payment_date is not None and minimum_payment and minimum_payment > 0:
        months_remaining = math.ceil(amount_remaining / minimum_payment)
        projected = _add_months(next_payment_date, months_remaining)

    days_remaining: Optional[int] = None
    if projected is not None:
        days_remaining = (projected - (today or date.today())).days

    return DebtProgress(
        percentage_paid=round_currency(min(100.0, max(0.0, percentage_paid))),
        amount_remaining=round_currency(amount_remaining),
        total_paid=round_currency(total_paid),
        total_interest_paid=round_currency(total_interest_paid),
        projected_payoff_date=projected,
        days_remaining=days_remaining,
        is_paid_off=current_balance <= 0,
    )


__all__ = ["days_between", "debt_progress", "last_payment_anchor", "split_for_new_payment"]
