"""Pytest fixtures for DayFlow"""

import os
import tempfile

# Point the global configuration at a scratch directory before dayflow is imported
os.environ.setdefault(
    "DAYFLOW_CONFIG",
    os.path.join(tempfile.mkdtemp(prefix="dayflow-tests-"), "config.toml"),
)

from pathlib import Path  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from dayflow.app import create_app  # noqa: E402
from dayflow.config.loader import ConfigLoader  # noqa: E402
from dayflow.core.auth import StaticTokenIdentityProvider  # noqa: E402
from dayflow.core.db import DatabaseManager  # noqa: E402
from dayflow.core.rate_limit import RateLimiter  # noqa: E402
from dayflow.services.metadata import LinkMetadata  # noqa: E402

ALICE_TOKEN = "token-alice"
BOB_TOKEN = "token-bob"

TOKENS = {
    ALICE_TOKEN: {"id": "alice", "email": "alice@example.com", "name": "Alice"},
    BOB_TOKEN: "bob",
}


class StubMetadataFetcher:
    """Records requested URLs and returns canned metadata"""

    def __init__(self, metadata: LinkMetadata = LinkMetadata()):
        self.metadata = metadata
        self.urls = []

    async def fetch(self, url: str) -> LinkMetadata:
        self.urls.append(url)
        return self.metadata


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def config(tmp_path: Path) -> ConfigLoader:
    loader = ConfigLoader(str(tmp_path / "config.toml"))
    loader.load()
    return loader


@pytest.fixture()
def db(tmp_path: Path) -> DatabaseManager:
    return DatabaseManager(str(tmp_path / "test.db"))


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def metadata_fetcher() -> StubMetadataFetcher:
    return StubMetadataFetcher(
        LinkMetadata(
            title="Example Domain",
            description="An example page",
            image="https://example.com/og.png",
            favicon="https://example.com/favicon.ico",
        )
    )


@pytest.fixture()
def app(config, db, clock, metadata_fetcher):
    return create_app(
        config=config,
        db=db,
        rate_limiter=RateLimiter(max_requests=5, window_seconds=60, clock=clock),
        metadata_fetcher=metadata_fetcher,
        identity_provider=StaticTokenIdentityProvider(TOKENS),
    )


@pytest.fixture()
def client(app) -> TestClient:
    with TestClient(app) as test_client:
        test_client.headers["Authorization"] = f"Bearer {ALICE_TOKEN}"
        yield test_client
