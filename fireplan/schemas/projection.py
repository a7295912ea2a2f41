"""Data contracts for projection output."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class YearRow(BaseModel):
    """One simulated year. Currency figures are rounded to whole units."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    age: int
    phase: Literal["accumulate", "retire"]

    isaBalance: int
    sippBalance: int
    premiumBondsBalance: int
    cashBalance: int
    totalNetWorth: int = Field(..., ge=0)
    realTotalNetWorth: int = Field(..., ge=0)
    inflationFactor: float

    isaContribution: int
    sippContribution: int
    cashContribution: int

    isaWithdrawn: int
    sippWithdrawn: int
    premiumBondsWithdrawn: int
    cashWithdrawn: int
    totalWithdrawn: int

    dbIncome: int
    stateIncome: int
    totalPensionIncome: int
    totalIncome: int

    requiredSpending: int
    spendingCovered: int
    shortfall: int = Field(..., ge=0)

    # None when no maxIncome threshold is configured
    excessIncome: Optional[bool] = None
    note: str = ""


class ScenarioValues(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    avg: float
    max: float


class OutcomeRow(BaseModel):
    """
    Net worth in today's money for one year across three growth scenarios.
    min = pessimistic (rates - 3pp), avg = typical, max = optimistic (+3pp).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    age: int
    netWorth: ScenarioValues


class ProjectionSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    peakNetWorth: int = 0
    peakAge: Optional[int] = None
    netWorthAtRetirement: int = 0
    finalNetWorth: int = 0
    # first post-retirement age with an empty portfolio; None = lasts to endAge
    exhaustedAge: Optional[int] = None
    sustainable: bool = True
    shortfallYears: int = 0
    totalPensionIncome: int = 0
