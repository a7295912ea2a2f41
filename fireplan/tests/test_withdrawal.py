from fireplan.core.withdrawal import allocate_withdrawal

ORDER = ["isa", "sipp", "premiumBonds", "cash"]
ALL_ALLOWED = {"isa": True, "sipp": True, "premiumBonds": True, "cash": True}


def test_first_account_covers_the_whole_amount():
    balances = {"isa": 50000.0, "sipp": 50000.0}

    result = allocate_withdrawal(balances, 10000.0, ["isa", "sipp"], ALL_ALLOWED)

    assert result.withdrawn["isa"] == 10000
    assert result.withdrawn["sipp"] == 0
    assert result.balances["isa"] == 40000
    assert result.balances["sipp"] == 50000


def test_moves_to_next_account_when_first_runs_out():
    balances = {"isa": 3000.0, "sipp": 50000.0}

    result = allocate_withdrawal(balances, 10000.0, ["isa", "sipp"], ALL_ALLOWED)

    assert result.withdrawn["isa"] == 3000
    assert result.withdrawn["sipp"] == 7000
    assert result.balances["isa"] == 0
    assert result.balances["sipp"] == 43000
    assert result.shortfall == 0


def test_spreads_across_every_account_when_needed():
    balances = {"isa": 5000.0, "sipp": 5000.0, "premiumBonds": 5000.0, "cash": 5000.0}

    result = allocate_withdrawal(balances, 18000.0, ORDER, ALL_ALLOWED)

    assert result.withdrawn == {"isa": 5000, "sipp": 5000, "premiumBonds": 5000, "cash": 3000}


def test_ineligible_accounts_are_skipped():
    balances = {"isa": 50000.0, "sipp": 50000.0, "premiumBonds": 50000.0, "cash": 0.0}

    no_sipp = allocate_withdrawal(balances, 10000.0, ["sipp", "isa"], {**ALL_ALLOWED, "sipp": False})
    no_isa = allocate_withdrawal(balances, 10000.0, ["isa", "sipp"], {**ALL_ALLOWED, "isa": False})
    no_pb = allocate_withdrawal(
        balances, 10000.0, ["premiumBonds", "isa"], {**ALL_ALLOWED, "premiumBonds": False}
    )

    assert (no_sipp.withdrawn["sipp"], no_sipp.withdrawn["isa"]) == (0, 10000)
    assert (no_isa.withdrawn["isa"], no_isa.withdrawn["sipp"]) == (0, 10000)
    assert (no_pb.withdrawn["premiumBonds"], no_pb.withdrawn["isa"]) == (0, 10000)


def test_missing_eligibility_flag_counts_as_ineligible():
    result = allocate_withdrawal({"isa": 50000.0}, 1000.0, ["isa"], {})
    assert result.withdrawn["isa"] == 0
    assert result.shortfall == 1000


def test_reports_shortfall_when_accounts_are_exhausted():
    result = allocate_withdrawal({"isa": 3000.0}, 10000.0, ["isa"], ALL_ALLOWED)

    assert result.withdrawn["isa"] == 3000
    assert result.shortfall == 7000


def test_shortfall_is_full_amount_when_nothing_is_accessible():
    balances = {"isa": 50000.0, "sipp": 50000.0, "premiumBonds": 50000.0, "cash": 0.0}
    blocked = {"isa": False, "sipp": False, "premiumBonds": False, "cash": True}

    result = allocate_withdrawal(balances, 10000.0, ORDER, blocked)

    assert result.shortfall == 10000


def test_balances_never_go_negative():
    balances = {"isa": 5000.0, "sipp": 5000.0, "premiumBonds": 5000.0, "cash": -10.0}

    result = allocate_withdrawal(balances, 1_000_000.0, ORDER, ALL_ALLOWED)

    for key in ("isa", "sipp", "premiumBonds"):
        assert result.balances[key] == 0
    assert result.withdrawn["cash"] == 0
    assert result.shortfall == 1_000_000 - 15000


def test_zero_amount_changes_nothing():
    balances = {"isa": 50000.0, "sipp": 50000.0, "premiumBonds": 50000.0, "cash": 50000.0}

    result = allocate_withdrawal(balances, 0.0, ORDER, {key: False for key in ORDER})

    assert result.balances == balances
    assert result.withdrawn == {"isa": 0, "sipp": 0, "premiumBonds": 0, "cash": 0}
    assert result.shortfall == 0


def test_input_balances_are_not_mutated():
    balances = {"isa": 50000.0, "sipp": 50000.0}

    result = allocate_withdrawal(balances, 60000.0, ["isa", "sipp"], ALL_ALLOWED)

    assert balances == {"isa": 50000.0, "sipp": 50000.0}
    assert result.balances is not balances
