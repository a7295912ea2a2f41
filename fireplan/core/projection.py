from __future__ import annotations

import math
from datetime import datetime
from typing import Dict, List, Optional

from fireplan.core.eligibility import isa_drawdown_allowed, sipp_access_allowed
from fireplan.core.pensions import pension_income
from fireplan.core.withdrawal import allocate_withdrawal
from fireplan.core.year_update import project_year
from fireplan.schemas.config import ACCOUNT_KEYS, Configuration, YearOverride
from fireplan.schemas.projection import YearRow

PREMIUM_BONDS_CAP = 50000.0
DEFAULT_DRAWDOWN_RATE = 4.0
DEFAULT_INFLATION_RATE = 2.5


def inflation_rate(config: Configuration) -> float:
    """Configured inflation as a decimal (2.5% when unset)."""
    rate = config.inflationRate if config.inflationRate is not None else DEFAULT_INFLATION_RATE
    return rate / 100


def round_currency(value: float) -> int:
    # half-up, matching how figures are displayed
    return int(math.floor(value + 0.5))


def _enabled(config: Configuration) -> Dict[str, bool]:
    return {
        "isa": config.isa.enabled,
        "sipp": config.sipp.enabled,
        "premiumBonds": config.premiumBonds.enabled,
        "cash": config.cash.enabled,
    }


def _growth_rates(config: Configuration) -> Dict[str, float]:
    return {
        "isa": (config.isa.growthRate or 0.0) / 100,
        "sipp": (config.sipp.growthRate or 0.0) / 100,
        "premiumBonds": (config.premiumBonds.prizeRate or 0.0) / 100,
        "cash": (config.cash.growthRate or 0.0) / 100,
    }


def _effective_drawdown_rate(config: Configuration, override: YearOverride) -> float:
    rate = config.drawdown.rate
    if rate is None:
        rate = config.drawdown.phase1Rate
    if rate is None:
        rate = DEFAULT_DRAWDOWN_RATE

    # a zero global override means "no override", not "stop drawing"
    if override.drawdownRateOverride is not None and override.drawdownRateOverride != 0:
        rate = override.drawdownRateOverride

    return rate / 100


def _contribution(regular: float, stop_age: Optional[int], override: Optional[float], age: int) -> float:
    """An override replaces the regular amount for the year; it is never added to it."""
    if override is not None:
        return override
    if stop_age is None or age < stop_age:
        return regular
    return 0.0


def _eligibility(config: Configuration, age: int) -> Dict[str, bool]:
    pb_start = config.premiumBonds.drawdownStartAge
    cash_start = config.cash.drawdownStartAge
    return {
        "isa": isa_drawdown_allowed(config.isa, age, config.retirementAge),
        "sipp": sipp_access_allowed(config.sipp, age),
        "premiumBonds": config.premiumBonds.enabled
        and age >= (pb_start if pb_start is not None else config.retirementAge),
        "cash": config.cash.enabled
        and age >= (cash_start if cash_start is not None else config.retirementAge),
    }


def run_projection(config: Configuration, base_year: Optional[int] = None) -> List[YearRow]:
    """
    Build one row per year from currentAge..endAge (inclusive).

    Order of operations (per year):
      1) Snapshot the opening portfolio (sum of enabled balances).
      2) Apply growth to every enabled account in account order, capping
         Premium Bonds as soon as they grow and moving the excess into cash
         (dropped if cash is disabled) before cash itself grows.
      3) Add regular contributions while age < retirementAge.
      4) Add the year's lump sums.
      5) Withdraw, once retired or once any account is eligible:
           a) account-specific rate overrides draw from their own account,
           b) the main gap (opening portfolio * rate, or the spending gap
              when the rate is zero) less those draws is allocated over the
              remaining accounts in withdrawal order.
      6) Apply custom per-account drawdowns.
      7) Record the row, rounding currency at the end only.

    The configuration is never modified. An endAge below currentAge gives
    an empty list.
    """
    year0 = base_year or datetime.now().year

    enabled = _enabled(config)
    growth_rates = _growth_rates(config)
    inflation = inflation_rate(config)

    balances: Dict[str, float] = {
        "isa": config.isa.balance if enabled["isa"] else 0.0,
        "sipp": config.sipp.balance if enabled["sipp"] else 0.0,
        "premiumBonds": config.premiumBonds.balance if enabled["premiumBonds"] else 0.0,
        "cash": config.cash.balance if enabled["cash"] else 0.0,
    }

    rows: List[YearRow] = []

    for step, age in enumerate(range(config.currentAge, config.endAge + 1)):
        year = year0 + step
        retired = age >= config.retirementAge
        inflation_factor = (1 + inflation) ** step
        override = config.overrides.get(year) or YearOverride()

        # ---------- 1) Opening portfolio ----------
        opening_portfolio = sum(balances[key] for key in ACCOUNT_KEYS if enabled[key])

        # ---------- 2) Growth ----------
        # growth keeps compounding after contributions stop; Premium Bonds
        # overflow lands in cash before cash grows
        for key in ACCOUNT_KEYS:
            if not enabled[key]:
                continue
            balances[key] = project_year(balances[key], growth_rates[key])

            if key == "premiumBonds" and balances[key] > PREMIUM_BONDS_CAP:
                excess = balances[key] - PREMIUM_BONDS_CAP
                balances[key] = PREMIUM_BONDS_CAP
                if enabled["cash"]:
                    balances["cash"] += excess

        # ---------- 3) Contributions ----------
        contributions = {"isa": 0.0, "sipp": 0.0, "cash": 0.0}
        if not retired:
            if enabled["isa"]:
                contributions["isa"] = _contribution(
                    config.isa.annualContribution,
                    config.isa.stopContributionAge,
                    override.isaContributionOverride,
                    age,
                )
            if enabled["sipp"]:
                contributions["sipp"] = _contribution(
                    config.sipp.annualContribution,
                    config.sipp.stopContributionAge,
                    override.sippContributionOverride,
                    age,
                )
            if enabled["cash"]:
                contributions["cash"] = _contribution(
                    config.cash.annualContribution,
                    config.cash.stopContributionAge,
                    override.cashContributionOverride,
                    age,
                )
            for key, amount in contributions.items():
                balances[key] += amount

        # ---------- 4) Lump sums ----------
        lump_sums = {
            "isa": override.isaLumpSum,
            "sipp": override.sippLumpSum,
            "premiumBonds": override.premiumBondLumpSum,
            "cash": override.cashLumpSum,
        }
        for key, amount in lump_sums.items():
            if amount and enabled[key]:
                balances[key] += amount
                # ISA/SIPP lump sums count toward the year's contribution
                if key in ("isa", "sipp"):
                    contributions[key] += amount

        # ---------- 5) Withdrawals ----------
        withdrawn = {key: 0.0 for key in ACCOUNT_KEYS}
        required_spending = 0.0
        shortfall = 0.0
        spending_covered = 0.0

        pension = pension_income(config, age)
        eligibility = _eligibility(config, age)

        if retired or any(eligibility.values()):
            rate = _effective_drawdown_rate(config, override)

            # spending only applies once retired; earlier draws are rate-based
            if retired:
                required_spending = config.retirementSpending * inflation_factor

            spending_gap = max(0.0, required_spending - pension.total)
            rate_drawdown = opening_portfolio * rate

            # a non-zero rate always sizes the withdrawal; spending only
            # drives it when the rate is zero
            gap = rate_drawdown if rate > 0 else spending_gap

            account_rates = {
                "isa": override.isaDrawdownRateOverride,
                "sipp": override.sippDrawdownRateOverride,
                "cash": override.cashDrawdownRateOverride,
            }
            overridden = set()
            specific_total = 0.0
            for key, account_rate in account_rates.items():
                if account_rate is None:
                    continue
                overridden.add(key)
                if not eligibility[key]:
                    continue
                available = max(0.0, balances[key])
                take = min(available, available * account_rate / 100)
                balances[key] -= take
                withdrawn[key] += take
                specific_total += take

            gap = max(0.0, gap - specific_total)
            order = [
                key for key in config.withdrawalOrder if enabled[key] and key not in overridden
            ]

            result = allocate_withdrawal(balances, gap, order, eligibility)
            balances = result.balances
            for key in ACCOUNT_KEYS:
                withdrawn[key] += result.withdrawn[key]

            if retired:
                shortfall = max(0.0, required_spending - (pension.total + sum(withdrawn.values())))
                spending_covered = required_spending - shortfall

        # ---------- 6) Custom drawdowns ----------
        custom_drawdowns = {
            "isa": override.isaCustomDrawdown,
            "sipp": override.sippCustomDrawdown,
            "premiumBonds": override.premiumBondsCustomDrawdown,
            "cash": override.cashCustomDrawdown,
        }
        for key, amount in custom_drawdowns.items():
            if amount is None or amount <= 0 or not enabled[key]:
                continue
            if key == "sipp" and not eligibility["sipp"]:
                continue
            take = min(max(0.0, balances[key]), amount)
            balances[key] -= take
            withdrawn[key] += take

        # ---------- 7) Record ----------
        total_withdrawn = sum(withdrawn.values())
        total_income = pension.total + total_withdrawn
        total_net_worth = max(0.0, sum(balances[key] for key in ACCOUNT_KEYS if enabled[key]))

        excess_income = None
        if config.maxIncome is not None:
            excess_income = total_income > config.maxIncome

        rows.append(
            YearRow(
                year=year,
                age=age,
                phase="retire" if retired else "accumulate",
                isaBalance=round_currency(balances["isa"]),
                sippBalance=round_currency(balances["sipp"]),
                premiumBondsBalance=round_currency(balances["premiumBonds"]),
                cashBalance=round_currency(balances["cash"]),
                totalNetWorth=round_currency(total_net_worth),
                realTotalNetWorth=round_currency(total_net_worth / inflation_factor),
                inflationFactor=round(inflation_factor, 4),
                isaContribution=round_currency(contributions["isa"]),
                sippContribution=round_currency(contributions["sipp"]),
                cashContribution=round_currency(contributions["cash"]),
                isaWithdrawn=round_currency(withdrawn["isa"]),
                sippWithdrawn=round_currency(withdrawn["sipp"]),
                premiumBondsWithdrawn=round_currency(withdrawn["premiumBonds"]),
                cashWithdrawn=round_currency(withdrawn["cash"]),
                totalWithdrawn=round_currency(total_withdrawn),
                dbIncome=round_currency(pension.db_income),
                stateIncome=round_currency(pension.state_income),
                totalPensionIncome=round_currency(pension.total),
                totalIncome=round_currency(total_income),
                requiredSpending=round_currency(required_spending),
                spendingCovered=round_currency(spending_covered),
                shortfall=round_currency(shortfall),
                excessIncome=excess_income,
                note=override.note or "",
            )
        )

    return rows


__all__ = [
    "DEFAULT_DRAWDOWN_RATE",
    "DEFAULT_INFLATION_RATE",
    "PREMIUM_BONDS_CAP",
    "inflation_rate",
    "round_currency",
    "run_projection",
]
