# constants.py

MONTHS_PER_YEAR: int = 12

# Withdrawal-rate policy bounds (inclusive upper bounds of SAFE and MODERATE)
SAFE_WITHDRAWAL_RATE: float = 0.04
MODERATE_WITHDRAWAL_RATE: float = 0.06

MAX_REPLACEMENT_RATIO: float = 2.0
# Range the wizard accepts for a custom replacement ratio
MIN_CUSTOM_REPLACEMENT_RATIO: float = 0.10
MAX_CUSTOM_REPLACEMENT_RATIO: float = 1.10

CONFIG_ENV_VAR: str = "RETIREMENT_ESTIMATOR_CONFIG"

# Structural limits; ages and horizon outside them fail rather than clamp
MAX_AGE: int = 120
MAX_YEARS_IN_RETIREMENT: int = 80
