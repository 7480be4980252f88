"""Protocol abstractions for dockfix.

Protocols:
    EngineProtocol: Interface to the container engine (create, start,
        kill, remove, inspect).

Usage:
    from dockfix.protocols import EngineProtocol
"""

from dockfix.protocols.engine import EngineProtocol

__all__ = [
    "EngineProtocol",
]
