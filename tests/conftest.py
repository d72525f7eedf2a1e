"""
Pytest configuration and shared fixtures for TurfTrack tests.
"""

import os
import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")

from turftrack import create_app
from turftrack.extensions import db as _db

PASSWORD = "correct-horse-battery"


@pytest.fixture
def app(tmp_path):
    app = create_app("testing")
    app.config["UPLOAD_DIR"] = str(tmp_path / "uploads")
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register(app):
    """Register a user on a fresh test client and return (client, user_json)."""

    def _register(email, first_name="Pat", last_name="Greens"):
        user_client = app.test_client()
        response = user_client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": PASSWORD, "first_name": first_name, "last_name": last_name},
        )
        assert response.status_code == 201, response.get_json()
        return user_client, response.get_json()

    return _register


@pytest.fixture
def equipment_payload():
    return {
        "name": "Fairway Master 5000",
        "make": "Toro",
        "model": "Reelmaster 5010-H",
        "year": 2022,
        "current_hours": "450",
        "serial_number": "TR-5010-22-001",
        "status": "active",
        "notes": "Primary fairway mower. Check reels weekly.",
    }
