from __future__ import annotations

import base64
import json

from fireplan.schemas.config import DEFAULT_CONFIG, Configuration
from fireplan.state.share import config_from_url, decode_config, encode_config, share_url


def _token(payload) -> str:
    return base64.urlsafe_b64encode(json.dumps(payload).encode("utf-8")).decode("ascii")


def test_shared_configuration_decodes_to_the_same_plan():
    config = Configuration.model_validate({"currentAge": 31, "overrides": {2035: {"note": "move"}}})
    token = encode_config(config)

    assert "=" not in token
    assert decode_config(token) == config


def test_garbage_token_gives_none():
    assert decode_config("%%%not-base64%%%") is None
    assert decode_config(_token("just a string")) is None


def test_token_without_version_gives_none():
    assert decode_config(_token({"currentAge": 30})) is None


def test_invalid_values_give_none():
    assert decode_config(_token({"version": 1, "endAge": "soon"})) is None


def test_partial_token_is_backfilled():
    config = decode_config(_token({"version": 1, "currentAge": 50}))
    assert config.currentAge == 50
    assert config.sipp == DEFAULT_CONFIG.sipp


def test_share_url_replaces_existing_query():
    url = share_url("https://plan.example/app?s=old&x=1#top", DEFAULT_CONFIG)

    assert url.startswith("https://plan.example/app?s=")
    assert "x=1" not in url
    assert url.endswith("#top")
    assert config_from_url(url) == DEFAULT_CONFIG


def test_url_without_token_gives_none():
    assert config_from_url("https://plan.example/app") is None
    assert config_from_url("https://plan.example/app?s=bad!") is None
