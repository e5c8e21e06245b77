"""Data contract for raw mortgage form values."""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .model import MortgageInputs


# Leading decimal number, the way a browser's parseFloat reads "1,000" as 1
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class MortgageForm(BaseModel):
    """Range rules for the values a caller collects before scheduling."""

    model_config = ConfigDict(allow_inf_nan=False)

    principal: float = Field(..., ge=1_000, le=10_000_000, title="Loan Amount")
    annual_rate_percent: float = Field(..., ge=0, le=25, title="Interest Rate")
    term_years: float = Field(..., ge=1, le=50, title="Loan Term")
    extra_payment: float = Field(0.0, ge=0, le=1_000_000, title="Extra Payment")
    property_tax_annual: float = Field(0.0, ge=0, le=500_000, title="Property Tax")
    insurance_annual: float = Field(0.0, ge=0, le=100_000, title="Insurance")

    @field_validator("term_years")
    @classmethod
    def _whole_years(cls, value: float) -> float:
        if value != math.floor(value):
            raise ValueError("Must be a whole number.")
        return value

    def to_inputs(self) -> MortgageInputs:
        return MortgageInputs(
            principal=self.principal,
            annual_rate_percent=self.annual_rate_percent,
            term_years=int(self.term_years),
            extra_payment=self.extra_payment,
            property_tax_annual=self.property_tax_annual,
            insurance_annual=self.insurance_annual,
        )


class InputValidationError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        super().__init__("; ".join(errors.values()))
        self.errors = errors


def _blank(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and raw.strip() == "")


def _fmt_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


def _message(name: str, error: Dict[str, Any]) -> str:
    kind = error["type"]
    ctx = error.get("ctx") or {}
    if kind == "greater_than_equal":
        return f"Minimum is {_fmt_bound(ctx['ge'])}."
    if kind == "less_than_equal":
        return f"Maximum is {_fmt_bound(ctx['le'])}."
    if kind == "value_error":
        return str(ctx["error"])
    if kind == "missing":
        return f"{MortgageForm.model_fields[name].title} is required."
    return "Enter a valid number."


def parse_number(value: Any) -> float:
    """Parse a user-entered number from its leading digits; NaN when none are finite."""
    if isinstance(value, bool) or value is None:
        return math.nan
    if isinstance(value, (int, float)):
        n = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if match is None:
            return math.nan
        n = float(match.group(1))
    return n if math.isfinite(n) else math.nan


def _validate(raw: Mapping[str, Any]) -> tuple[Optional[MortgageForm], Dict[str, str]]:
    errors: Dict[str, str] = {}
    values: Dict[str, float] = {}
    for name, info in MortgageForm.model_fields.items():
        item = raw.get(name)
        if _blank(item):
            continue
        number = parse_number(item)
        if math.isnan(number):
            # Unparseable required fields read as missing
            if not info.is_required():
                errors[name] = "Enter a valid number."
            continue
        values[name] = number

    form = None
    try:
        form = MortgageForm.model_validate(values)
    except ValidationError as exc:
        for error in exc.errors():
            name = str(error["loc"][0])
            errors.setdefault(name, _message(name, error))

    ordered = {name: errors[name] for name in MortgageForm.model_fields if name in errors}
    return (form if not ordered else None), ordered


def validate_field(name: str, raw: Any) -> Optional[str]:
    """Return the error message for one field, or None when it is valid."""
    if name not in MortgageForm.model_fields:
        return None
    _, errors = _validate({name: raw})
    return errors.get(name)


def validate_inputs(raw: Mapping[str, Any]) -> Dict[str, str]:
    """Validate every known field; returns {field: message} for the invalid ones."""
    return _validate(raw)[1]


def parse_inputs(raw: Mapping[str, Any]) -> MortgageInputs:
    """Validate raw field values and build model inputs.

    Blank optional fields become 0. Raises InputValidationError listing every
    invalid field.
    """
    form, errors = _validate(raw)
    if form is None:
        raise InputValidationError(errors)
    return form.to_inputs()
