"""HTTP routes for the Flask API."""

import json
from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, abort, current_app, jsonify, request
from pydantic import ValidationError

from fireplan.core.outcomes import run_outcomes
from fireplan.core.projection import run_projection
from fireplan.core.summary import summarize
from fireplan.schemas.config import DEFAULT_CONFIG, Configuration
from fireplan.state.share import SHARE_PARAM, decode_config, share_url
from fireplan.state.store import ConfigStore

STORE_EXTENSION = "fireplan.store"

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return jsonify({"detail": json.loads(exc.json())}), HTTPStatus.UNPROCESSABLE_ENTITY


def _json_object() -> Dict[str, Any]:
    payload = request.get_json(force=True, silent=False)
    if not isinstance(payload, dict):
        abort(HTTPStatus.BAD_REQUEST, description="expected a JSON object")
    return payload


def _posted_config() -> Configuration:
    return Configuration.model_validate(_json_object())


def _base_year() -> Optional[int]:
    return request.args.get("baseYear", type=int)


def _store() -> ConfigStore:
    return current_app.extensions[STORE_EXTENSION]


@api_bp.get("/config/default")
def default_config() -> Any:
    return jsonify(DEFAULT_CONFIG.model_dump(mode="json"))


@api_bp.post("/projection")
def projection() -> Any:
    """Year-by-year rows for the posted configuration."""
    rows = run_projection(_posted_config(), _base_year())
    return jsonify([row.model_dump() for row in rows])


@api_bp.post("/outcomes")
def outcomes() -> Any:
    """Pessimistic/typical/optimistic net worth in today's money."""
    rows = run_outcomes(_posted_config(), _base_year())
    return jsonify([row.model_dump() for row in rows])


@api_bp.post("/summary")
def summary() -> Any:
    config = _posted_config()
    result = summarize(run_projection(config, _base_year()), config)
    return jsonify(result.model_dump())


@api_bp.post("/share")
def create_share_link() -> Any:
    raw_payload = _json_object()
    config = Configuration.model_validate(raw_payload.get("config") or {})
    base_url = raw_payload.get("baseUrl") or current_app.config["SHARE_BASE_URL"]
    return jsonify({"url": share_url(base_url, config)})


@api_bp.get("/share")
def open_share_link() -> Any:
    token = request.args.get(SHARE_PARAM)
    config = decode_config(token) if token else None
    if config is None:
        return jsonify({"detail": "invalid or missing share token"}), HTTPStatus.BAD_REQUEST
    return jsonify(config.model_dump(mode="json"))


@api_bp.get("/state")
def get_state() -> Any:
    return jsonify(_store().get_state().model_dump(mode="json"))


@api_bp.patch("/state")
def update_state() -> Any:
    """Deep-merge a partial configuration into the stored plan."""
    store = _store()
    store.set_state(_json_object())
    return jsonify(store.get_state().model_dump(mode="json"))


@api_bp.put("/state/overrides/<int:year>")
def set_year_override(year: int) -> Any:
    store = _store()
    store.set_override(year, _json_object())
    return jsonify(store.get_state().overrides[year].model_dump())


@api_bp.delete("/state/overrides/<int:year>")
def clear_year_override(year: int) -> Any:
    _store().set_override(year, None)
    return "", HTTPStatus.NO_CONTENT
