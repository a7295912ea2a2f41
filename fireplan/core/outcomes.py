from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from fireplan.core.projection import inflation_rate, round_currency, run_projection
from fireplan.schemas.config import Configuration
from fireplan.schemas.projection import OutcomeRow, ScenarioValues

# percentage points added to every growth/prize rate per scenario
SCENARIO_OFFSET = 3.0


class Scenario(str, Enum):
    MIN = "min"
    AVG = "avg"
    MAX = "max"


def _shifted(rate: Optional[float], delta: float) -> float:
    return max(0.0, (rate or 0.0) + delta)


def shift_growth_rates(config: Configuration, delta: float) -> Configuration:
    """
    Return a copy of `config` with every growth/prize rate moved by `delta`
    percentage points, floored at zero. The input is left unchanged.
    """
    return config.model_copy(
        update={
            "isa": config.isa.model_copy(update={"growthRate": _shifted(config.isa.growthRate, delta)}),
            "sipp": config.sipp.model_copy(update={"growthRate": _shifted(config.sipp.growthRate, delta)}),
            "premiumBonds": config.premiumBonds.model_copy(
                update={"prizeRate": _shifted(config.premiumBonds.prizeRate, delta)}
            ),
            "cash": config.cash.model_copy(update={"growthRate": _shifted(config.cash.growthRate, delta)}),
        }
    )


def scenario_config(config: Configuration, scenario: Scenario) -> Configuration:
    """
    MIN: pessimistic -> rates - 3pp
    AVG: typical     -> rates as configured
    MAX: optimistic  -> rates + 3pp
    """
    if scenario == Scenario.MIN:
        return shift_growth_rates(config, -SCENARIO_OFFSET)
    elif scenario == Scenario.MAX:
        return shift_growth_rates(config, SCENARIO_OFFSET)
    else:  # AVG
        return shift_growth_rates(config, 0.0)


def run_outcomes(config: Configuration, base_year: Optional[int] = None) -> List[OutcomeRow]:
    """
    Run the projection for the three scenarios and combine each year's net
    worth, deflated to today's money, into min/avg/max bands.
    """
    year0 = base_year or datetime.now().year
    inflation = inflation_rate(config)

    rows_min = run_projection(scenario_config(config, Scenario.MIN), year0)
    rows_avg = run_projection(scenario_config(config, Scenario.AVG), year0)
    rows_max = run_projection(scenario_config(config, Scenario.MAX), year0)

    result: List[OutcomeRow] = []
    for step, (r_min, r_avg, r_max) in enumerate(zip(rows_min, rows_avg, rows_max)):
        assert r_min.year == r_avg.year == r_max.year

        deflator = (1 + inflation) ** step
        result.append(
            OutcomeRow(
                year=r_avg.year,
                age=r_avg.age,
                netWorth=ScenarioValues(
                    min=round_currency(r_min.totalNetWorth / deflator),
                    avg=round_currency(r_avg.totalNetWorth / deflator),
                    max=round_currency(r_max.totalNetWorth / deflator),
                ),
            )
        )

    return result
