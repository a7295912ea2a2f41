from .config import (
    ACCOUNT_KEYS,
    DEFAULT_CONFIG,
    CashAccount,
    Configuration,
    DbPension,
    DrawdownSettings,
    IsaAccount,
    PremiumBondsAccount,
    SippAccount,
    StatePension,
    YearOverride,
)
from .projection import OutcomeRow, ProjectionSummary, ScenarioValues, YearRow

__all__ = [
    "ACCOUNT_KEYS",
    "DEFAULT_CONFIG",
    "CashAccount",
    "Configuration",
    "DbPension",
    "DrawdownSettings",
    "IsaAccount",
    "OutcomeRow",
    "PremiumBondsAccount",
    "ProjectionSummary",
    "ScenarioValues",
    "SippAccount",
    "StatePension",
    "YearOverride",
    "YearRow",
]
