from fireplan.core.pensions import pension_income, pension_start_year
from fireplan.schemas.config import Configuration


def make_config(**overrides) -> Configuration:
    data = {
        "currentAge": 40,
        "statePensionAge": 67,
        "dbPension": {"enabled": True, "annualIncome": 12000, "startAge": 65},
        "statePension": {"enabled": True, "annualIncome": 11000},
    }
    data.update(overrides)
    return Configuration.model_validate(data)


def test_db_pension_starts_at_start_age_and_continues():
    config = make_config()
    assert pension_income(config, 64).db_income == 0
    assert pension_income(config, 65).db_income == 12000
    assert pension_income(config, 70).db_income == 12000


def test_disabled_db_pension_pays_nothing():
    config = make_config(dbPension={"enabled": False, "annualIncome": 12000, "startAge": 65})
    assert pension_income(config, 70).db_income == 0


def test_state_pension_follows_state_pension_age():
    config = make_config()
    assert pension_income(config, 66).state_income == 0
    assert pension_income(config, 67).state_income == 11000

    later = make_config(statePensionAge=68)
    assert pension_income(later, 67).state_income == 0


def test_disabled_state_pension_pays_nothing():
    config = make_config(statePension={"enabled": False, "annualIncome": 11000})
    assert pension_income(config, 80).state_income == 0


def test_total_combines_both_streams_without_inflation():
    config = make_config()
    assert pension_income(config, 60).total == 0
    assert pension_income(config, 65).total == 12000
    assert pension_income(config, 67).total == 23000
    assert pension_income(config, 90).total == 23000


def test_pension_start_years():
    config = make_config()
    assert pension_start_year(config, "dbPension", 2030) == 2055
    assert pension_start_year(config, "statePension", 2030) == 2057

    disabled = make_config(statePension={"enabled": False, "annualIncome": 0})
    assert pension_start_year(disabled, "statePension", 2030) is None
