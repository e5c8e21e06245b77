from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from .. import config
from ..logging_config import get_logger
from .amortization import (
    LoanTerms,
    ScheduleResult,
    aggregate_yearly,
    compute_periodic_payment,
    generate_schedule_for,
)
from .utils import MONTHS_IN_YEAR


logger = get_logger(__name__)


@dataclass
class MortgageInputs:
    # Loan
    principal: float = 300_000.0
    annual_rate_percent: float = 6.5
    term_years: float = 30
    extra_payment: float = 0.0

    # Escrow, annual amounts
    property_tax_annual: float = 0.0
    insurance_annual: float = 0.0

    @classmethod
    def from_config(cls) -> "MortgageInputs":
        return cls(
            principal=config.LOAN_AMOUNT,
            annual_rate_percent=config.INTEREST_RATE,
            term_years=config.LOAN_YEARS,
            extra_payment=config.EXTRA_PAYMENT,
            property_tax_annual=config.PROPERTY_TAX_ANNUAL,
            insurance_annual=config.INSURANCE_ANNUAL,
        )

    @property
    def terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.principal,
            annual_rate_percent=self.annual_rate_percent,
            term_years=self.term_years,
            extra_payment=self.extra_payment,
        )


@dataclass(frozen=True)
class ExtraPaymentSavings:
    interest_saved: float = 0.0
    periods_saved: int = 0


@dataclass(frozen=True)
class MortgageSummary:
    base_payment: float
    monthly_escrow: float
    monthly_total: float
    total_interest: float
    total_cost: float
    periods_used: int
    savings: ExtraPaymentSavings
    schedule_monthly: pd.DataFrame
    schedule_yearly: pd.DataFrame


class MortgageModel:
    def __init__(self, inputs: MortgageInputs):
        self.inputs = inputs
        self.terms = inputs.terms
        self.period_count = self.terms.period_count

        self.base_payment = compute_periodic_payment(
            self.terms.principal, self.terms.annual_rate_percent, self.terms.term_years
        )
        self.schedule: ScheduleResult = generate_schedule_for(self.terms)
        self._baseline: ScheduleResult | None = None

    # ------------------------- Escrow ------------------------- #
    @property
    def monthly_escrow(self) -> float:
        return (self.inputs.property_tax_annual + self.inputs.insurance_annual) / MONTHS_IN_YEAR

    @property
    def monthly_total(self) -> float:
        return self.base_payment + self.monthly_escrow

    @property
    def total_cost(self) -> float:
        """Everything paid over the life of the loan, escrow included."""
        return self.schedule.total_payment + self.monthly_escrow * self.schedule.periods_used

    # ------------------------- Extra payments ------------------------- #
    def _pays_off_early(self) -> bool:
        return (
            self.inputs.extra_payment > 0
            and not self.schedule.is_empty
            and self.schedule.periods_used < self.period_count
        )

    @property
    def baseline(self) -> ScheduleResult:
        """The same loan without extra payments."""
        if self._baseline is None:
            if self.inputs.extra_payment > 0:
                self._baseline = generate_schedule_for(
                    LoanTerms(
                        principal=self.terms.principal,
                        annual_rate_percent=self.terms.annual_rate_percent,
                        term_years=self.terms.term_years,
                        extra_payment=0.0,
                    )
                )
            else:
                self._baseline = self.schedule
        return self._baseline

    def savings(self) -> ExtraPaymentSavings:
        if not self._pays_off_early():
            return ExtraPaymentSavings()
        savings = ExtraPaymentSavings(
            interest_saved=self.baseline.total_interest - self.schedule.total_interest,
            periods_saved=self.period_count - self.schedule.periods_used,
        )
        logger.debug(
            "Extra payment %.2f saves %.2f interest over %d periods",
            self.inputs.extra_payment,
            savings.interest_saved,
            savings.periods_saved,
        )
        return savings

    # ------------------------- Reporting ------------------------- #
    def summary(self) -> MortgageSummary:
        monthly = self.schedule.to_frame()
        return MortgageSummary(
            base_payment=self.base_payment,
            monthly_escrow=self.monthly_escrow,
            monthly_total=self.monthly_total,
            total_interest=self.schedule.total_interest,
            total_cost=self.total_cost,
            periods_used=self.schedule.periods_used,
            savings=self.savings(),
            schedule_monthly=monthly,
            schedule_yearly=aggregate_yearly(monthly),
        )


def summarize(inputs: MortgageInputs) -> MortgageSummary:
    """Convenience wrapper returning payment, totals and schedules."""
    return MortgageModel(inputs).summary()
