from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from fireplan.app import create_app


@pytest.fixture()
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "STATE_PATH": str(tmp_path / "user_data" / "state.json"),
        }
    )
    yield app


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
