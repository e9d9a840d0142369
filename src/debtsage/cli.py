"""Command line entry points for DebtSage."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import AbstractSet, Any

import click
from pydantic import ValidationError

from .config import DevConfig
from .forms.debt import DebtForm
from .logging_config import get_logger, setup_logging
from .models.debt import (
    CompoundingFrequency,
    DebtSnapshot,
    InterestType,
    PayoffStrategy,
    PayoffStrategyName,
)
from .services.debts import (
    build_payoff_plans,
    calculate_strategy,
    compare_strategies,
    is_payoff_achievable,
    projected_payoff_date,
)
from .services.interest import interest_breakdown, payment_split

logger = get_logger(__name__)

_INTEREST_TYPES = click.Choice([t.value for t in InterestType])
_FREQUENCIES = click.Choice([f.value for f in CompoundingFrequency])
_STRATEGIES = click.Choice([s.value for s in PayoffStrategyName])


def load_debts(path: Path) -> list[DebtSnapshot]:
    """Read a JSON debt file (a list, or ``{"debts": [...]}``) into snapshots."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise click.ClickException(f"Could not read debt file {path}: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("debts", [])
    if not isinstance(payload, list):
        raise click.ClickException("Debt file must contain a list of debts.")

    debts: list[DebtSnapshot] = []
    for index, item in enumerate(payload):
        try:
            debts.append(DebtForm.model_validate(item).to_snapshot())
        except ValidationError as exc:
            problems = "; ".join(
                f"{field}: {', '.join(messages)}"
                for field, messages in DebtForm.validation_errors(item).items()
            ) or str(exc)
            raise click.ClickException(f"Debt #{index + 1} is invalid ({problems})") from exc
    logger.debug("Loaded %d debts from %s", len(debts), path)
    return debts


def _emit_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _unpaid_debt_ids(
    debts: list[DebtSnapshot], strategy: PayoffStrategyName | str, extra_payment: float
) -> set[Any]:
    return {
        plan.debt_id
        for plan in build_payoff_plans(debts, strategy, extra_payment)
        if not is_payoff_achievable(plan)
    }


def _echo_strategy(result: PayoffStrategy, unpaid: AbstractSet[Any] = frozenset()) -> None:
    click.echo(f"Strategy:        {result.strategy.value}")
    click.echo(f"Total months:    {result.total_months}")
    click.echo(f"Total interest:  {result.total_interest:,.2f}")
    click.echo(f"Total payments:  {result.total_payments:,.2f}")
    if not result.payoff_order:
        click.echo("No active debts.")
        return
    click.echo("")
    click.echo(f"{'#':>2}  {'Debt':<24} {'Month':>6} {'Paid':>12} {'Interest':>12}")
    for position, entry in enumerate(result.payoff_order, start=1):
        month = "never" if entry.debt_id in unpaid else f"{entry.payoff_month}"
        click.echo(
            f"{position:>2}  {entry.debt_name[:24]:<24} {month:>6} "
            f"{entry.total_paid:>12,.2f} {entry.interest_paid:>12,.2f}"
        )


@click.group()
@click.option("--verbose", is_flag=True, default=False, help="Log debug output to the console.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Debt interest and payoff strategy calculator."""

    try:
        config = DevConfig()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    if verbose:
        config.LOG_LEVEL = logging.DEBUG
    setup_logging(config)
    ctx.obj = config


@main.command("strategy")
@click.argument("debt_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", "strategy_name", type=_STRATEGIES, default=None, help="Ordering strategy.")
@click.option("--extra", type=float, default=None, help="Extra amount paid each period.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_obj
def strategy_command(
    config: DevConfig, debt_file: Path, strategy_name: str | None, extra: float | None, as_json: bool
) -> None:
    """Simulate paying off every debt in DEBT_FILE."""

    debts = load_debts(debt_file)
    name = strategy_name or config.DEFAULT_STRATEGY
    extra_payment = config.DEFAULT_EXTRA_PAYMENT if extra is None else extra
    result = calculate_strategy(debts, name, extra_payment)
    if as_json:
        _emit_json(result.to_dict())
    else:
        _echo_strategy(result, _unpaid_debt_ids(debts, name, extra_payment))


@main.command("compare")
@click.argument("debt_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--extra", type=float, default=None, help="Extra amount paid each period.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
@click.pass_obj
def compare_command(config: DevConfig, debt_file: Path, extra: float | None, as_json: bool) -> None:
    """Compare snowball and avalanche for DEBT_FILE."""

    debts = load_debts(debt_file)
    extra_payment = config.DEFAULT_EXTRA_PAYMENT if extra is None else extra
    snowball = calculate_strategy(debts, PayoffStrategyName.SNOWBALL, extra_payment)
    avalanche = calculate_strategy(debts, PayoffStrategyName.AVALANCHE, extra_payment)
    comparison = compare_strategies(snowball, avalanche)

    if as_json:
        _emit_json(
            {
                "snowball": snowball.to_dict(),
                "avalanche": avalanche.to_dict(),
                "comparison": comparison.to_dict(),
            }
        )
        return

    _echo_strategy(snowball, _unpaid_debt_ids(debts, PayoffStrategyName.SNOWBALL, extra_payment))
    click.echo("")
    _echo_strategy(avalanche, _unpaid_debt_ids(debts, PayoffStrategyName.AVALANCHE, extra_payment))
    click.echo("")
    click.echo(
        f"Faster: {comparison.faster_strategy} (by {comparison.time_difference} months); "
        f"cheaper: {comparison.cheaper_strategy} (by {comparison.interest_difference:,.2f})"
    )


@main.command("split")
@click.option("--amount", type=float, required=True, help="Payment amount.")
@click.option("--balance", type=float, required=True, help="Balance before the payment.")
@click.option("--rate", type=float, required=True, help="Annual rate in percent.")
@click.option("--type", "interest_type", type=_INTEREST_TYPES, default="simple", show_default=True)
@click.option("--frequency", type=_FREQUENCIES, default=None, help="Compounding frequency.")
@click.option("--days", type=int, required=True, help="Days since the previous payment.")
def split_command(
    amount: float, balance: float, rate: float, interest_type: str, frequency: str | None, days: int
) -> None:
    """Show how a payment divides into principal and interest."""

    split = payment_split(amount, balance, rate, interest_type, frequency, days)
    click.echo(f"Principal: {split.principal_paid:,.2f}")
    click.echo(f"Interest:  {split.interest_paid:,.2f}")


@main.command("breakdown")
@click.option("--principal", type=float, required=True)
@click.option("--rate", type=float, required=True, help="Annual rate in percent.")
@click.option("--type", "interest_type", type=_INTEREST_TYPES, default="simple", show_default=True)
@click.option("--frequency", type=_FREQUENCIES, default=None, help="Compounding frequency.")
@click.option("--periods", type=click.IntRange(min=0), required=True)
@click.option("--days", type=click.IntRange(min=0), default=30, show_default=True, help="Days per period.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON.")
def breakdown_command(
    principal: float,
    rate: float,
    interest_type: str,
    frequency: str | None,
    periods: int,
    days: int,
    as_json: bool,
) -> None:
    """Print a per-period interest ledger."""

    result = interest_breakdown(principal, rate, interest_type, frequency, periods, days)
    if as_json:
        _emit_json(result.to_dict())
        return
    click.echo(f"{'Period':>6} {'Principal':>14} {'Interest':>12} {'Total':>14}")
    for row in result.breakdown:
        click.echo(f"{row.period:>6} {row.principal:>14,.2f} {row.interest:>12,.2f} {row.total:>14,.2f}")
    click.echo(f"Interest: {result.interest_amount:,.2f}  Total: {result.total_amount:,.2f}")


@main.command("payoff-date")
@click.argument("debt_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--payment", type=float, required=True, help="Amount paid each period.")
@click.option("--today", type=click.DateTime(formats=["%Y-%m-%d"]), default=None)
def payoff_date_command(debt_file: Path, payment: float, today: datetime | None) -> None:
    """Estimate the payoff date of each debt in DEBT_FILE."""

    anchor: date | None = today.date() if today else None
    for debt in load_debts(debt_file):
        projected = projected_payoff_date(debt, payment, today=anchor)
        label = projected.isoformat() if projected else "will not pay off"
        click.echo(f"{debt.name}: {label}")


if __name__ == "__main__":  # pragma: no cover
    main()
