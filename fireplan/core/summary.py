"""Headline figures derived from a list of projection rows."""

from __future__ import annotations

from typing import Sequence

from fireplan.schemas.config import Configuration
from fireplan.schemas.projection import ProjectionSummary, YearRow


def summarize(rows: Sequence[YearRow], config: Configuration) -> ProjectionSummary:
    if not rows:
        return ProjectionSummary()

    # first row wins on ties
    peak = max(rows, key=lambda row: row.totalNetWorth)
    retirement_row = next((row for row in rows if row.age == config.retirementAge), rows[0])
    exhausted = next(
        (row for row in rows if row.totalNetWorth <= 0 and row.age > config.retirementAge),
        None,
    )

    return ProjectionSummary(
        peakNetWorth=peak.totalNetWorth,
        peakAge=peak.age,
        netWorthAtRetirement=retirement_row.totalNetWorth,
        finalNetWorth=rows[-1].totalNetWorth,
        exhaustedAge=exhausted.age if exhausted else None,
        sustainable=exhausted is None,
        shortfallYears=sum(1 for row in rows if row.shortfall > 0),
        totalPensionIncome=sum(row.totalPensionIncome for row in rows if row.phase == "retire"),
    )
