"""Engine access: connection resolution and the Docker SDK adapter."""

from dockfix.engine.connection import resolve_target, tls_material
from dockfix.engine.docker_engine import DockerEngine, EngineFactory, open_engine

__all__ = [
    "DockerEngine",
    "EngineFactory",
    "open_engine",
    "resolve_target",
    "tls_material",
]
