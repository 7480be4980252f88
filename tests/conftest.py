"""
dockfix Test Configuration

Shared pytest fixtures and configuration for all test types.
"""

import os
from typing import Generator

import pytest

from dockfix.core.config import Settings
from dockfix.fixtures.identity import IdentityStore
from dockfix.fixtures.lifecycle import FixtureController
from tests.fixtures.fake_engine import FakeEngine


ENGINE_ENV_VARS = ("DOCKER_HOST", "DOCKER_CERT_PATH", "DOCKER_TLS_VERIFY")


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (require a Docker engine)")


@pytest.fixture
def clean_env(monkeypatch) -> Generator[pytest.MonkeyPatch, None, None]:
    """Remove engine and DOCKFIX_ variables so defaults apply."""
    for key in ENGINE_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    for key in list(os.environ):
        if key.startswith("DOCKFIX_"):
            monkeypatch.delenv(key, raising=False)
    yield monkeypatch
    # variables set behind monkeypatch's back (load_dotenv)
    for key in list(os.environ):
        if key in ENGINE_ENV_VARS or key.startswith("DOCKFIX_"):
            del os.environ[key]


@pytest.fixture
def settings(clean_env, tmp_path) -> Settings:
    """Settings pointing at the local socket with state in tmp_path."""
    return Settings(state_dir=str(tmp_path))


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def store(tmp_path) -> IdentityStore:
    return IdentityStore(tmp_path)


@pytest.fixture
def controller(settings, fake_engine, store) -> FixtureController:
    """Controller wired to the in-memory engine."""
    return FixtureController(
        settings=settings,
        engine_factory=fake_engine.factory,
        store=store,
    )
