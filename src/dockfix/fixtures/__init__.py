"""Fixture identity, lifecycle and port resolution."""

from dockfix.fixtures.identity import IdentityStore
from dockfix.fixtures.lifecycle import (
    FixtureController,
    remove_fixture,
    start_fixture,
    stop_fixture,
)
from dockfix.fixtures.ports import engine_hostname, resolve_url

__all__ = [
    "FixtureController",
    "IdentityStore",
    "engine_hostname",
    "remove_fixture",
    "resolve_url",
    "start_fixture",
    "stop_fixture",
]
