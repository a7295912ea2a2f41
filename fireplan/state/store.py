"""
Central configuration store.

Holds the single current Configuration, hands out deep-copied snapshots and
notifies subscribers after every change.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar

from pydantic import BaseModel

from fireplan.schemas.config import DEFAULT_CONFIG, Configuration, YearOverride

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
Subscriber = Callable[[Configuration], None]


def merge_model(model: ModelT, partial: Mapping[str, Any]) -> ModelT:
    """
    Deep-merge a partial dict over a typed model and re-validate.

    Nested models merge field by field; lists, dicts and scalars are
    replaced wholesale. Unknown keys fail validation.
    """
    fields = type(model).model_fields
    data = model.model_dump()
    for key, value in partial.items():
        current = getattr(model, key) if key in fields else None
        if isinstance(current, BaseModel) and isinstance(value, Mapping):
            data[key] = merge_model(current, value).model_dump()
        else:
            data[key] = value
    return type(model).model_validate(data)


def backfill_config(raw: Mapping[str, Any]) -> Configuration:
    """Build a Configuration from saved data, filling missing fields from the defaults."""
    return merge_model(DEFAULT_CONFIG, raw)


class ConfigStore:
    def __init__(self, initial: Optional[Configuration] = None):
        self._state = (initial or DEFAULT_CONFIG).model_copy(deep=True)
        self._subscribers: List[Subscriber] = []

    def get_state(self) -> Configuration:
        return self._state.model_copy(deep=True)

    def set_state(self, partial: Mapping[str, Any]) -> None:
        self._state = merge_model(self._state, partial)
        self._notify()

    def load_state(self, raw: Mapping[str, Any]) -> None:
        """Replace the whole state, e.g. when restoring a saved or shared plan."""
        self._state = backfill_config(raw)
        self._notify()

    def set_override(self, year: int, data: Optional[Mapping[str, Any]]) -> None:
        """Merge fields into one year's override, or clear it when data is None."""
        overrides = dict(self._state.overrides)
        if data is None:
            overrides.pop(year, None)
        else:
            overrides[year] = merge_model(overrides.get(year) or YearOverride(), data)
        self._state = self._state.model_copy(update={"overrides": overrides})
        self._notify()

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        """Register `fn`; the returned callable unsubscribes it."""
        self._subscribers.append(fn)

        def unsubscribe() -> None:
            if fn in self._subscribers:
                self._subscribers.remove(fn)

        return unsubscribe

    def _notify(self) -> None:
        for fn in list(self._subscribers):
            try:
                fn(self.get_state())
            except Exception:
                logger.exception("Store subscriber %r failed", fn)
