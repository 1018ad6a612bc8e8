import pytest
from fastapi.testclient import TestClient

from notemarks.api.deps import get_enricher
from notemarks.config import Settings
from notemarks.main import create_app


class FakeEnricher:
    """Stands in for the network-backed enricher; records the URLs it was asked about."""

    def __init__(self):
        self.result = None
        self.calls = []

    async def enrich(self, url):
        self.calls.append(url)
        return self.result

    async def aclose(self):
        pass


@pytest.fixture()
def enricher():
    return FakeEnricher()


@pytest.fixture()
def app(tmp_path, monkeypatch, enricher):
    # isolate data dir per test
    monkeypatch.setenv("APP_DATA_DIR", str(tmp_path))
    app = create_app(Settings.from_env())
    app.dependency_overrides[get_enricher] = lambda: enricher
    return app


@pytest.fixture()
def client(app):
    # the context manager runs the lifespan, which opens the stores
    with TestClient(app) as c:
        yield c
