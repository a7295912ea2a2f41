from __future__ import annotations

import pytest
from pydantic import ValidationError

from fireplan.schemas.config import DEFAULT_CONFIG, Configuration, YearOverride


def test_default_configuration():
    assert DEFAULT_CONFIG.version == 1
    assert DEFAULT_CONFIG.withdrawalOrder == ["premiumBonds", "isa", "sipp", "cash"]
    assert DEFAULT_CONFIG.cash.enabled is False
    assert DEFAULT_CONFIG.sipp.accessAge == 57
    assert DEFAULT_CONFIG.overrides == {}


def test_withdrawal_order_must_not_repeat_accounts():
    with pytest.raises(ValidationError):
        Configuration.model_validate({"withdrawalOrder": ["isa", "isa"]})


def test_withdrawal_order_only_accepts_known_accounts():
    with pytest.raises(ValidationError):
        Configuration.model_validate({"withdrawalOrder": ["isa", "crypto"]})


def test_override_year_keys_are_coerced_to_int():
    config = Configuration.model_validate({"overrides": {"2031": {"isaLumpSum": 500}}})
    assert config.overrides[2031].isaLumpSum == 500


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        Configuration.model_validate({"isa": {"balanse": 10}})
    with pytest.raises(ValidationError):
        YearOverride.model_validate({"bonus": 1})


def test_negative_balances_are_rejected():
    with pytest.raises(ValidationError):
        Configuration.model_validate({"sipp": {"balance": -1}})


def test_zero_override_is_kept_distinct_from_unset():
    override = YearOverride.model_validate({"isaContributionOverride": 0})
    assert override.isaContributionOverride == 0
    assert override.sippContributionOverride is None


@pytest.mark.parametrize(
    "field",
    [
        "isaLumpSum",
        "sippLumpSum",
        "premiumBondLumpSum",
        "cashLumpSum",
        "isaCustomDrawdown",
        "premiumBondsCustomDrawdown",
        "isaContributionOverride",
        "cashContributionOverride",
        "sippDrawdownRateOverride",
        "cashDrawdownRateOverride",
        "drawdownRateOverride",
    ],
)
def test_negative_override_amounts_are_rejected(field):
    with pytest.raises(ValidationError):
        YearOverride.model_validate({field: -5000})


def test_negative_lump_sum_cannot_reach_the_engine():
    """
    A negative lump sum would otherwise push the ISA below zero.
    """
    with pytest.raises(ValidationError):
        Configuration.model_validate({"overrides": {2030: {"isaLumpSum": -5000}}})
