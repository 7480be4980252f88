"""Core module for dockfix.

Exports the core components: exceptions, data models, and configuration.
"""

from dockfix.core.exceptions import (
    DockfixError,
    ConfigurationError,
    EngineConnectionError,
    EngineAddressError,
    EngineOperationError,
    ContainerNotFoundError,
    IdentityStoreError,
    PortNotPublishedError,
)
from dockfix.core.models import (
    TLSMaterial,
    ConnectionTarget,
    PortSpec,
    PortBinding,
    RuntimeState,
    FixturePhase,
    Fixture,
)
from dockfix.core.config import (
    DEFAULT_DOCKER_HOST,
    Settings,
    create_settings,
)

__all__ = [
    # Exceptions
    "DockfixError",
    "ConfigurationError",
    "EngineConnectionError",
    "EngineAddressError",
    "EngineOperationError",
    "ContainerNotFoundError",
    "IdentityStoreError",
    "PortNotPublishedError",
    # Models
    "TLSMaterial",
    "ConnectionTarget",
    "PortSpec",
    "PortBinding",
    "RuntimeState",
    "FixturePhase",
    "Fixture",
    # Config
    "DEFAULT_DOCKER_HOST",
    "Settings",
    "create_settings",
]
