"""Drawdown eligibility checks for ISA-style and pension-style accounts."""

from __future__ import annotations

from fireplan.schemas.config import IsaAccount, SippAccount

DEFAULT_SIPP_ACCESS_AGE = 57


def isa_drawdown_allowed(isa: IsaAccount, age: int, retirement_age: int) -> bool:
    """ISA can be drawn from drawdownStartAge, or from retirement when unset."""
    if not isa.enabled:
        return False
    if isa.drawdownStartAge is not None:
        return age >= isa.drawdownStartAge
    return age >= retirement_age


def sipp_access_allowed(sipp: SippAccount, age: int) -> bool:
    """
    An explicit drawdownStartAge always wins, even when it is later than the
    statutory access age. Without one the access age applies (57 if unset).
    """
    if not sipp.enabled:
        return False
    if sipp.drawdownStartAge is not None:
        return age >= sipp.drawdownStartAge
    return age >= (sipp.accessAge or DEFAULT_SIPP_ACCESS_AGE)
