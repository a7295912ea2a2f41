"""Fixed pension income (defined benefit and state) active at a given age."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from fireplan.schemas.config import Configuration


@dataclass(frozen=True)
class PensionIncome:
    total: float
    db_income: float
    state_income: float


def pension_income(config: Configuration, age: int) -> PensionIncome:
    """
    Pension income is a fixed nominal amount once started. It is not drawn
    from any account, it reduces the spending gap directly.
    """
    db_income = 0.0
    state_income = 0.0

    if config.dbPension.enabled and age >= config.dbPension.startAge:
        db_income = config.dbPension.annualIncome

    if config.statePension.enabled and age >= config.statePensionAge:
        state_income = config.statePension.annualIncome

    return PensionIncome(
        total=db_income + state_income,
        db_income=db_income,
        state_income=state_income,
    )


def pension_start_year(
    config: Configuration,
    pension: Literal["dbPension", "statePension"],
    base_year: int,
) -> Optional[int]:
    """Calendar year the pension begins, or None if it is disabled."""
    if pension == "dbPension" and config.dbPension.enabled:
        return base_year + (config.dbPension.startAge - config.currentAge)
    if pension == "statePension" and config.statePension.enabled:
        return base_year + (config.statePensionAge - config.currentAge)
    return None
