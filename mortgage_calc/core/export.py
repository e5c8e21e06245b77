from __future__ import annotations

from typing import Dict, Final

from .amortization import ScheduleResult


CSV_HEADERS: Final[Dict[str, str]] = {
    "period": "Month",
    "payment": "Payment",
    "principal": "Principal",
    "interest": "Interest",
    "balance": "Remaining Balance",
}


def schedule_to_csv(result: ScheduleResult) -> str:
    """Serialize a schedule as comma-separated text.

    Header ``Month,Payment,Principal,Interest,Remaining Balance``, one row per
    period, money columns with exactly two decimals. An empty schedule has
    nothing to export and yields an empty string.
    """
    if result.is_empty:
        return ""
    df = result.to_frame()[list(CSV_HEADERS)].rename(columns=CSV_HEADERS)
    return df.to_csv(index=False, float_format="%.2f", lineterminator="\n")
