import pytest
from fastapi.testclient import TestClient

from config import AppConfig, get_app_config
from db import database
from main import app


@pytest.fixture
def app_config(tmp_path):
    config_dir = tmp_path / ".vidoverlay"
    config = AppConfig(
        config_dir=config_dir,
        db_path=config_dir / "vidoverlay.db",
        shuffle_options=False,
    )
    database.init_db(config.db_path)
    return config


@pytest.fixture
def conn(app_config):
    with database.get_conn(app_config.db_path) as conn:
        yield conn


@pytest.fixture
def client(app_config):
    app.dependency_overrides[get_app_config] = lambda: app_config
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
