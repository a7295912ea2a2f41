from __future__ import annotations

import json
import logging
import math
import os
from typing import Any, Callable, Optional

from pydantic import ValidationError

from fireplan.schemas.config import Configuration
from fireplan.state.store import ConfigStore, backfill_config

logger = logging.getLogger(__name__)

DEFAULT_WRITE_ATTEMPTS = 3


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


class JsonFileStorage:
    """Saves the configuration verbatim as JSON. Failures are logged, never raised."""

    def __init__(self, path: str, write_attempts: int = DEFAULT_WRITE_ATTEMPTS):
        self.path = path
        self.write_attempts = max(1, write_attempts)

    def save(self, config: Configuration) -> bool:
        clean = _sanitize_json_compat(config.model_dump(mode="json"))
        tmp_path = f"{self.path}.tmp"

        for attempt in range(1, self.write_attempts + 1):
            try:
                ensure_user_data_dir(self.path)
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(clean, f, allow_nan=False)
                os.replace(tmp_path, self.path)
                return True
            except OSError as exc:
                logger.warning(
                    "Could not save state to %s (attempt %d/%d): %s",
                    self.path,
                    attempt,
                    self.write_attempts,
                    exc,
                )
        return False

    def load(self) -> Optional[Configuration]:
        """Return the saved configuration, or None if nothing usable is stored."""
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw_text = f.read().strip()
            if not raw_text:
                return None
            raw = json.loads(raw_text)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Could not load state from %s: %s", self.path, exc)
            return None

        if not isinstance(raw, dict) or "version" not in raw:
            logger.warning("Ignoring saved state in %s: no version marker", self.path)
            return None

        try:
            return backfill_config(raw)
        except ValidationError as exc:
            logger.warning("Ignoring invalid saved state in %s: %s", self.path, exc)
            return None

    def restore(self, store: ConfigStore) -> bool:
        """Load the saved configuration into `store`. Returns True if one was loaded."""
        config = self.load()
        if config is None:
            return False
        store.load_state(config.model_dump())
        return True

    def attach(self, store: ConfigStore) -> Callable[[], None]:
        """Save on every store change. Returns the unsubscribe callable."""
        return store.subscribe(self.save)
