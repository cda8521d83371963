# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from marketplace.config import Settings
from marketplace.main import create_app

@pytest.fixture
def settings(tmp_path):
    return Settings(PUBLIC_DIR=str(tmp_path / "public"), CORS_ORIGIN="http://frontend.test")

@pytest.fixture
def app(settings):
    return create_app(settings)

@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c

@pytest.fixture
def uploads_dir(app):
    return app.state.uploads_dir
