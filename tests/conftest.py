import os
import tempfile
from urllib.parse import urlsplit

import pytest

from tourism_app import create_app
from tourism_app.config import Config
from tourism_app.extensions import db
from tourism_app.services.load_data import load_seed_data
from tourism_app.services.pool import with_connection

LOG_DIR = os.path.join(tempfile.gettempdir(), 'tourism_app_tests', 'logs')


class SQLiteConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    # StaticPool для sqlite в памяти не принимает pool_size/max_overflow
    SQLALCHEMY_ENGINE_OPTIONS = {}
    CACHE_TYPE = 'SimpleCache'
    AUTO_CREATE_TABLES = True
    SEED_ON_START = False
    LOG_DIR = LOG_DIR
    API_BASE_URL = 'http://testserver'


@pytest.fixture
def app():
    return create_app(SQLiteConfig)


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seeded(app_ctx):
    load_seed_data(app_ctx.config['SEED_DATA_DIR'])
    return app_ctx


def count_rows(table):
    return with_connection(
        lambda connection: connection.execute(db.text(f"SELECT COUNT(*) FROM {table}")).scalar()
    )


class FlaskResponse:
    """Ответ тестового клиента Flask с интерфейсом requests.Response."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self.text = response.get_data(as_text=True)

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("not json")
        return data


class FlaskSession:
    """Подменяет requests.Session: запросы уходят в тестовый клиент Flask."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, timeout=None, json=None):
        path = urlsplit(url).path
        self.calls.append((method, path, json))
        return FlaskResponse(self.test_client.open(path, method=method, json=json))


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)
