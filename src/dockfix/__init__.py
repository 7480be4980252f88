"""
dockfix - Identity-stable Docker containers for test fixtures

Start a named container once, reuse it across test runs, and reach its
published ports whether the engine is local or remote over TLS.
"""

from dockfix.core.exceptions import DockfixError
from dockfix.core.models import Fixture, PortSpec
from dockfix.fixtures import (
    FixtureController,
    remove_fixture,
    resolve_url,
    start_fixture,
    stop_fixture,
)

__version__ = "0.1.0"

__all__ = [
    "DockfixError",
    "Fixture",
    "FixtureController",
    "PortSpec",
    "remove_fixture",
    "resolve_url",
    "start_fixture",
    "stop_fixture",
]
