import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from keymaze import create_app  # noqa: E402


@pytest.fixture()
def test_app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SECRET_KEY": "test-secret",
            "KEYMAZE_DEFAULT_ROWS": 8,
            "KEYMAZE_DEFAULT_COLS": 8,
            "KEYMAZE_MAX_SESSIONS": 4,
        }
    )
    app.instance_path = str(tmp_path)
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def started_client(client):
    r = client.post("/api/maze/start", json={"rows": 6, "cols": 6, "seed": 1234})
    assert r.status_code == 200
    return client
