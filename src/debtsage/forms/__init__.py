"""Input forms that produce engine values."""

from .debt import DebtForm, PaymentForm

__all__ = ["DebtForm", "PaymentForm"]
