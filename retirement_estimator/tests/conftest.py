from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from retirement_estimator.app import create_app
from retirement_estimator.config import Settings


@pytest.fixture()
def client() -> FlaskClient:
    app = create_app(Settings())
    with app.test_client() as test_client:
        yield test_client
