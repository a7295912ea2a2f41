"""Single-account balance update for one projected year."""


def project_year(
    opening: float,
    growth_rate: float,
    drawdown_rate: float = 0.0,
    lump_sum_in: float = 0.0,
    extra_draw_out: float = 0.0,
) -> float:
    """
    Move one balance forward a year.

    Growth and drawdown are both taken from the opening balance, so the net
    change is opening * (growth_rate - drawdown_rate) before any lump sum or
    extra withdrawal. Rates are decimals (0.05 for 5%). Never returns a
    negative balance.
    """
    growth = opening * growth_rate
    withdrawal = opening * drawdown_rate
    closing = opening + growth - withdrawal + lump_sum_in - extra_draw_out
    return max(0.0, closing)
