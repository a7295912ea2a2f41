"""Encode a configuration into a shareable URL and back."""

from __future__ import annotations

import base64
import binascii
import json
import logging
from typing import Optional
from urllib.parse import parse_qs, urlencode, urlsplit, urlunsplit

from pydantic import ValidationError

from fireplan.schemas.config import Configuration
from fireplan.state.store import backfill_config

logger = logging.getLogger(__name__)

SHARE_PARAM = "s"


def encode_config(config: Configuration) -> str:
    payload = json.dumps(config.model_dump(mode="json"), separators=(",", ":"))
    token = base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")
    return token.rstrip("=")


def decode_config(token: str) -> Optional[Configuration]:
    """Decode a share token. Anything undecodable or unversioned gives None."""
    try:
        padded = token + "=" * (-len(token) % 4)
        raw = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8"))
    except (binascii.Error, ValueError) as exc:
        # ValueError covers JSONDecodeError and Unicode errors
        logger.warning("Could not decode shared configuration: %s", exc)
        return None

    if not isinstance(raw, dict) or "version" not in raw:
        logger.warning("Shared configuration has no version marker")
        return None

    try:
        return backfill_config(raw)
    except ValidationError as exc:
        logger.warning("Shared configuration is invalid: %s", exc)
        return None


def share_url(base_url: str, config: Configuration) -> str:
    """`base_url` with any existing query replaced by the encoded configuration."""
    parts = urlsplit(base_url)
    query = urlencode({SHARE_PARAM: encode_config(config)})
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def config_from_url(url: str) -> Optional[Configuration]:
    tokens = parse_qs(urlsplit(url).query).get(SHARE_PARAM)
    if not tokens:
        return None
    return decode_config(tokens[0])
