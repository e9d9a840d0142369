"""Debt and payment form definitions."""

from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..models.debt import (
    CompoundingFrequency,
    DebtSnapshot,
    InterestType,
    PaymentFrequency,
    PaymentSplit,
)
from ..money import parse_amount
from ..services.progress import split_for_new_payment


def _structured_errors(exc: ValidationError) -> dict[str, list[str]]:
    structured: dict[str, list[str]] = {}
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        key = str(loc[0]) if loc else "__root__"
        structured.setdefault(key, []).append(error.get("msg", "Invalid value"))
    return structured


class DebtForm(BaseModel):
    """Validated debt record, as supplied by storage or a debt file."""

    model_config = ConfigDict(str_strip_whitespace=True)

    id: str | int = Field(description="Opaque debt identifier")
    name: str = Field(max_length=100, description="Display label")
    current_balance: float = Field(ge=0, description="Outstanding balance")
    interest_rate: float = Field(ge=0, le=100, description="Annual rate in percent")
    interest_type: InterestType = Field(default=InterestType.SIMPLE)
    compounding_frequency: Optional[CompoundingFrequency] = Field(default=None)
    minimum_payment: Optional[float] = Field(default=None, ge=0)
    payment_frequency: PaymentFrequency = Field(default=PaymentFrequency.MONTHLY)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Ensure the debt has a label."""

        if not value:
            raise ValueError("Please provide a debt name.")
        return value

    @field_validator("current_balance", "minimum_payment", mode="before")
    @classmethod
    def parse_money(cls, value: Any) -> Any:
        """Accept "1,250.00" style strings and round to cents."""

        if value is None or value == "":
            return None
        return parse_amount(value)

    @model_validator(mode="after")
    def default_compounding(self) -> "DebtForm":
        """Compound debts without a frequency compound monthly."""

        if self.interest_type is InterestType.COMPOUND and self.compounding_frequency is None:
            self.compounding_frequency = CompoundingFrequency.MONTHLY
        return self

    def to_snapshot(self) -> DebtSnapshot:
        """Return the engine value for this debt."""

        return DebtSnapshot(
            id=self.id,
            name=self.name,
            current_balance=self.current_balance,
            interest_rate=self.interest_rate,
            interest_type=self.interest_type,
            compounding_frequency=self.compounding_frequency,
            minimum_payment=self.minimum_payment,
            payment_frequency=self.payment_frequency,
        )

    @classmethod
    def validation_errors(cls, payload: dict[str, Any]) -> dict[str, list[str]]:
        """Return validation errors for ``payload`` keyed by field."""

        try:
            cls.model_validate(payload)
        except ValidationError as exc:
            return _structured_errors(exc)
        return {}


class PaymentForm(BaseModel):
    """A payment about to be recorded against a debt.

    ``principal_paid`` and ``interest_paid`` are optional overrides; when
    both are left empty the split is computed from accrued interest.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    amount: float = Field(gt=0, description="Payment amount")
    payment_date: date = Field(default_factory=date.today)
    principal_paid: Optional[float] = Field(default=None, ge=0)
    interest_paid: Optional[float] = Field(default=None, ge=0)
    notes: str = Field(default="", max_length=400)

    @field_validator("amount", "principal_paid", "interest_paid", mode="before")
    @classmethod
    def parse_money(cls, value: Any) -> Any:
        if value is None or value == "":
            return None
        return parse_amount(value)

    @model_validator(mode="after")
    def check_overrides(self) -> "PaymentForm":
        """Explicit splits must add up to the payment amount."""

        if self.principal_paid is None and self.interest_paid is None:
            return self
        principal = self.principal_paid or 0.0
        interest = self.interest_paid or 0.0
        if abs(principal + interest - self.amount) > 0.01:
            raise ValueError("Principal and interest must add up to the payment amount.")
        return self

    def resolve_split(
        self,
        debt: DebtSnapshot,
        *,
        start_date: date,
        payment_dates: Iterable[date] = (),
    ) -> PaymentSplit:
        """Return the user's explicit split, or the computed one."""

        if self.principal_paid is not None or self.interest_paid is not None:
            return PaymentSplit(
                principal_paid=self.principal_paid or 0.0,
                interest_paid=self.interest_paid or 0.0,
            )
        return split_for_new_payment(
            debt,
            self.amount,
            self.payment_date,
            start_date=start_date,
            payment_dates=payment_dates,
        )


__all__ = ["DebtForm", "PaymentForm"]
