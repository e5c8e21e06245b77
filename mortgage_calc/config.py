from __future__ import annotations

import yaml
from pathlib import Path
from typing import Any, Dict

# Package directory (holds config.yaml)
BASE_DIR = Path(__file__).resolve().parent
CONFIG_PATH = BASE_DIR / "config.yaml"


def _load_yaml(path: Path = CONFIG_PATH) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


CFG = _load_yaml()

# Loan defaults
LOAN_AMOUNT: float = float(CFG.get("loan_amount", 300_000))
INTEREST_RATE: float = float(CFG.get("interest_rate", 6.5))  # percent, 6.5 means 6.5%
LOAN_YEARS: int = int(CFG.get("loan_years", 30))
EXTRA_PAYMENT: float = float(CFG.get("extra_payment", 0))

# Escrow
PROPERTY_TAX_ANNUAL: float = float(CFG.get("property_tax_annual", 0))
INSURANCE_ANNUAL: float = float(CFG.get("insurance_annual", 0))

# Logging
LOG_LEVEL: str = str(CFG.get("log_level", "WARNING")).upper()
LOG_FORMAT: str = str(CFG.get("log_format", "%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
