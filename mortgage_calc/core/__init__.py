from .amortization import (
	LoanTerms,
	PeriodRecord,
	ScheduleResult,
	aggregate_yearly,
	compute_periodic_payment,
	generate_schedule,
	generate_schedule_for,
)
from .export import schedule_to_csv
from .model import ExtraPaymentSavings, MortgageInputs, MortgageModel, MortgageSummary, summarize
from .utils import period_count, round_currency
from .validation import InputValidationError, MortgageForm, parse_inputs, validate_inputs

__all__ = [
	"LoanTerms",
	"PeriodRecord",
	"ScheduleResult",
	"aggregate_yearly",
	"compute_periodic_payment",
	"generate_schedule",
	"generate_schedule_for",
	"schedule_to_csv",
	"ExtraPaymentSavings",
	"MortgageInputs",
	"MortgageModel",
	"MortgageSummary",
	"summarize",
	"period_count",
	"round_currency",
	"InputValidationError",
	"MortgageForm",
	"parse_inputs",
	"validate_inputs",
]
