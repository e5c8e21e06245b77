from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Optional, Tuple

import pandas as pd

from ..logging_config import get_logger
from .utils import MONTHS_IN_YEAR, monthly_rate, round_currency
from .utils import period_count as periods_in_term


logger = get_logger(__name__)

# Hard ceiling on generated periods (50 years), whatever the nominal term.
MAX_PERIODS: Final[int] = 600
# Periods allowed past the nominal count to absorb rounding shortfalls.
GRACE_PERIODS: Final[int] = 1
# Balances below half a cent count as paid off.
BALANCE_EPSILON: Final[float] = 0.005

SCHEDULE_COLUMNS: Final[Tuple[str, ...]] = ("period", "payment", "principal", "interest", "balance")
YEARLY_COLUMNS: Final[Tuple[str, ...]] = ("year", "months", "payment", "interest", "principal", "end_balance")


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    annual_rate_percent: float
    term_years: float
    extra_payment: Optional[float] = 0.0

    @property
    def period_count(self) -> int:
        return periods_in_term(self.term_years)


@dataclass(frozen=True)
class PeriodRecord:
    period: int
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


@dataclass(frozen=True)
class ScheduleResult:
    periods: Tuple[PeriodRecord, ...] = ()
    total_interest: float = 0.0
    total_payment: float = 0.0
    periods_used: int = 0

    @classmethod
    def empty(cls) -> "ScheduleResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.periods_used == 0

    def to_frame(self) -> pd.DataFrame:
        """Monthly schedule as a DataFrame.

        Columns: period (1..N), payment, principal, interest, balance
        """
        if not self.periods:
            return pd.DataFrame(columns=list(SCHEDULE_COLUMNS), data=[])
        rows = [
            {
                "period": p.period,
                "payment": p.payment,
                "principal": p.principal_portion,
                "interest": p.interest_portion,
                "balance": p.remaining_balance,
            }
            for p in self.periods
        ]
        return pd.DataFrame(rows, columns=list(SCHEDULE_COLUMNS))


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def compute_periodic_payment(principal: float, annual_rate_percent: float, term_years: float) -> float:
    """Compute the fixed monthly payment for a fully amortizing loan.

    Parameters
    ----------
    principal : float
        Initial loan amount.
    annual_rate_percent : float
        Nominal annual interest rate as a percentage (e.g., 6.5 for 6.5%).
    term_years : float
        Loan term in years, converted to ``round(term_years * 12)`` months.

    Returns
    -------
    float
        The constant monthly payment, or 0.0 when the inputs cannot describe
        a loan. Never raises.
    """
    if not _finite(principal, annual_rate_percent, term_years):
        return 0.0
    if principal <= 0 or term_years <= 0:
        return 0.0
    n_months = periods_in_term(term_years)
    if n_months <= 0:
        return 0.0
    if annual_rate_percent == 0:
        return principal / n_months

    rate = monthly_rate(annual_rate_percent)
    try:
        factor = (1 + rate) ** n_months
    except OverflowError:
        factor = math.inf
    # Straight-line fallback instead of dividing by zero or infinity
    if not math.isfinite(factor) or factor == 1:
        return principal / n_months
    return principal * (rate * factor) / (factor - 1)


def generate_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: float,
    extra_payment: Optional[float] = 0.0,
) -> ScheduleResult:
    """Generate a monthly amortization schedule with a constant extra payment.

    Every money amount is rounded to cents as soon as it is computed, so the
    next period's interest is charged on the rounded balance.

    Notes
    -----
    - Unusable inputs produce ``ScheduleResult.empty()`` instead of raising.
    - The payment is clamped on the period that would overpay the loan, and
      the last nominal period settles whatever rounding residue is left.
    - Iteration stops after ``period_count + GRACE_PERIODS`` periods and,
      independently, after ``MAX_PERIODS`` periods.
    """
    if not _finite(principal, annual_rate_percent, term_years):
        logger.debug("Non-finite loan inputs, returning empty schedule")
        return ScheduleResult.empty()
    if principal <= 0 or term_years <= 0:
        logger.debug("Non-positive principal=%s or term_years=%s", principal, term_years)
        return ScheduleResult.empty()
    n_months = periods_in_term(term_years)
    if n_months <= 0:
        logger.debug("term_years=%s rounds to zero periods", term_years)
        return ScheduleResult.empty()

    extra = max(0.0, extra_payment or 0.0)
    rate = monthly_rate(annual_rate_percent)
    base_payment = compute_periodic_payment(principal, annual_rate_percent, term_years)
    if not math.isfinite(base_payment) or base_payment <= 0:
        logger.debug("Unusable base payment %s", base_payment)
        return ScheduleResult.empty()

    periods = []
    balance = float(principal)
    total_interest = 0.0
    total_payment = 0.0
    period = 0
    while (
        balance > BALANCE_EPSILON
        and period < n_months + GRACE_PERIODS
        and period < MAX_PERIODS
    ):
        period += 1
        interest = round_currency(balance * rate)

        payoff = round_currency(balance + interest)
        scheduled = base_payment + extra
        if period == n_months or round_currency(scheduled) > payoff:
            payment = payoff
        else:
            payment = round_currency(scheduled)
        # Payment below the interest due: interest-only period
        if payment < interest:
            payment = interest

        principal_component = round_currency(payment - interest)
        balance = balance - principal_component
        if balance < BALANCE_EPSILON:
            balance = 0.0
        balance = round_currency(balance)

        total_interest += interest
        total_payment += payment
        periods.append(
            PeriodRecord(
                period=period,
                payment=payment,
                principal_portion=principal_component,
                interest_portion=interest,
                remaining_balance=balance,
            )
        )

    if balance > BALANCE_EPSILON and period >= MAX_PERIODS:
        logger.warning(
            "Schedule truncated at %d periods with %.2f outstanding", MAX_PERIODS, balance
        )

    return ScheduleResult(
        periods=tuple(periods),
        total_interest=total_interest,
        total_payment=total_payment,
        periods_used=len(periods),
    )


def generate_schedule_for(terms: LoanTerms) -> ScheduleResult:
    """Convenience wrapper taking a LoanTerms value."""
    return generate_schedule(
        terms.principal, terms.annual_rate_percent, terms.term_years, terms.extra_payment
    )


def aggregate_yearly(schedule: pd.DataFrame) -> pd.DataFrame:
    """Aggregate a monthly amortization schedule by year.

    Returns a DataFrame with columns: year, months, payment, interest, principal,
    end_balance. ``months`` is below 12 for a final year cut short by early payoff.
    """
    if schedule.empty:
        return pd.DataFrame(columns=list(YEARLY_COLUMNS), data=[])

    years = (schedule["period"] - 1) // MONTHS_IN_YEAR + 1
    return (
        schedule.assign(year=years)
        .sort_values("period")
        .groupby("year")
        .agg(
            months=("period", "size"),
            payment=("payment", "sum"),
            interest=("interest", "sum"),
            principal=("principal", "sum"),
            end_balance=("balance", "last"),
        )
        .reset_index()[list(YEARLY_COLUMNS)]
    )
