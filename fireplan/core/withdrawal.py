"""Withdraw a required amount from accounts in priority order."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Sequence

from fireplan.schemas.config import ACCOUNT_KEYS


@dataclass(frozen=True)
class WithdrawalResult:
    balances: Dict[str, float]
    withdrawn: Dict[str, float]
    shortfall: float


def allocate_withdrawal(
    balances: Mapping[str, float],
    amount: float,
    order: Sequence[str],
    eligibility: Mapping[str, bool],
) -> WithdrawalResult:
    """
    Take `amount` from the accounts in `order`, skipping any account whose
    eligibility flag is false (or missing). Each account gives at most its
    own balance; whatever cannot be funded is reported as shortfall.

    The input mapping is left untouched; a new balances dict is returned.
    """
    new_balances = dict(balances)
    withdrawn = {key: 0.0 for key in ACCOUNT_KEYS}
    remaining = amount

    for key in order:
        if remaining <= 0:
            break
        if not eligibility.get(key, False):
            continue

        available = max(0.0, new_balances.get(key, 0.0))
        take = min(available, remaining)

        new_balances[key] = new_balances.get(key, 0.0) - take
        withdrawn[key] = withdrawn.get(key, 0.0) + take
        remaining -= take

    return WithdrawalResult(
        balances=new_balances,
        withdrawn=withdrawn,
        shortfall=max(0.0, remaining),
    )
