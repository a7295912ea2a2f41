"""Data contracts for a projection configuration."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

AccountKey = Literal["isa", "sipp", "premiumBonds", "cash"]

ACCOUNT_KEYS: tuple[str, ...] = ("isa", "sipp", "premiumBonds", "cash")


class IsaAccount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    balance: float = Field(default=75000.0, ge=0)
    growthRate: Optional[float] = 5.0
    annualContribution: float = Field(default=10000.0, ge=0)
    stopContributionAge: Optional[int] = None
    # null = same as retirement
    drawdownStartAge: Optional[int] = None


class SippAccount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    balance: float = Field(default=45000.0, ge=0)
    growthRate: Optional[float] = 5.0
    annualContribution: float = Field(default=5000.0, ge=0)
    stopContributionAge: Optional[int] = None
    # minimum pension access age, used when drawdownStartAge is null
    accessAge: Optional[int] = 57
    drawdownStartAge: Optional[int] = None


class PremiumBondsAccount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    balance: float = Field(default=50000.0, ge=0)
    prizeRate: Optional[float] = 3.0
    drawdownStartAge: Optional[int] = None


class CashAccount(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    balance: float = Field(default=10000.0, ge=0)
    growthRate: Optional[float] = 2.0
    annualContribution: float = Field(default=0.0, ge=0)
    stopContributionAge: Optional[int] = None
    drawdownStartAge: Optional[int] = None


class DbPension(BaseModel):
    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    annualIncome: float = Field(default=12000.0, ge=0)
    startAge: int = 65


class StatePension(BaseModel):
    """Start age comes from Configuration.statePensionAge."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = True
    annualIncome: float = Field(default=11000.0, ge=0)


class DrawdownSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    rate: Optional[float] = 4.0
    # older saved configurations stored the rate here
    phase1Rate: Optional[float] = None


class YearOverride(BaseModel):
    """
    Sparse adjustments for one calendar year.

    Every field is optional: None means "not set", while an explicit 0 is a
    real override (e.g. a contribution override of 0 skips that year's
    contribution).
    """

    model_config = ConfigDict(extra="forbid")

    isaLumpSum: Optional[float] = Field(default=None, ge=0)
    sippLumpSum: Optional[float] = Field(default=None, ge=0)
    premiumBondLumpSum: Optional[float] = Field(default=None, ge=0)
    cashLumpSum: Optional[float] = Field(default=None, ge=0)

    isaCustomDrawdown: Optional[float] = Field(default=None, ge=0)
    sippCustomDrawdown: Optional[float] = Field(default=None, ge=0)
    premiumBondsCustomDrawdown: Optional[float] = Field(default=None, ge=0)
    cashCustomDrawdown: Optional[float] = Field(default=None, ge=0)

    isaContributionOverride: Optional[float] = Field(default=None, ge=0)
    sippContributionOverride: Optional[float] = Field(default=None, ge=0)
    cashContributionOverride: Optional[float] = Field(default=None, ge=0)

    isaDrawdownRateOverride: Optional[float] = Field(default=None, ge=0)
    sippDrawdownRateOverride: Optional[float] = Field(default=None, ge=0)
    cashDrawdownRateOverride: Optional[float] = Field(default=None, ge=0)

    drawdownRateOverride: Optional[float] = Field(default=None, ge=0)
    note: Optional[str] = None


class Configuration(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: int = 1

    currentAge: int = 40
    retirementAge: int = 58
    endAge: int = 100

    retirementSpending: float = Field(default=35000.0, ge=0)
    inflationRate: Optional[float] = 2.5

    statePensionAge: int = 67

    isa: IsaAccount = Field(default_factory=IsaAccount)
    sipp: SippAccount = Field(default_factory=SippAccount)
    premiumBonds: PremiumBondsAccount = Field(default_factory=PremiumBondsAccount)
    cash: CashAccount = Field(default_factory=CashAccount)

    dbPension: DbPension = Field(default_factory=DbPension)
    statePension: StatePension = Field(default_factory=StatePension)

    drawdown: DrawdownSettings = Field(default_factory=DrawdownSettings)

    withdrawalOrder: List[AccountKey] = Field(
        default_factory=lambda: ["premiumBonds", "isa", "sipp", "cash"]
    )

    # years where totalIncome exceeds this are flagged; None disables the check
    maxIncome: Optional[float] = None

    overrides: Dict[int, YearOverride] = Field(default_factory=dict)

    @field_validator("withdrawalOrder")
    @classmethod
    def ensure_unique_order(cls, order: List[str]) -> List[str]:
        if len(set(order)) != len(order):
            raise ValueError("withdrawalOrder must not repeat an account")
        return order


DEFAULT_CONFIG = Configuration()
