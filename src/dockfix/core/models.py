"""Core Data Models for dockfix.

Models:
    TLSMaterial: CA, client certificate and client key paths for mutual TLS.
    ConnectionTarget: How to reach the engine (address + optional TLS).
    PortSpec: Container-side port and protocol ("8080/tcp").
    PortBinding: One host-side binding of a published port.
    RuntimeState: Call-scoped snapshot of a container inspect result.
    FixturePhase: Lifecycle phase of a fixture.
    Fixture: Caller identity (name + container id) plus the latest snapshot.

Usage:
    from dockfix.core.models import PortSpec, RuntimeState

    spec = PortSpec.parse("8080/tcp")
    state = RuntimeState.from_inspect(api.inspect_container(container_id))
    state.ports[str(spec)]  # [PortBinding(host_ip="0.0.0.0", host_port="33000")]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Optional, Union


VALID_PROTOCOLS = frozenset({"tcp", "udp", "sctp"})


@dataclass(frozen=True)
class TLSMaterial:
    """Paths of the PEM files used for a mutual-TLS engine connection.

    The files are not checked for existence here; a missing or unreadable
    file surfaces when the engine connection is opened.
    """

    ca_cert: str
    client_cert: str
    client_key: str


@dataclass(frozen=True)
class ConnectionTarget:
    """Resolved engine address plus optional TLS material."""

    address: str
    tls: Optional[TLSMaterial] = None

    @property
    def is_tls(self) -> bool:
        return self.tls is not None


@dataclass(frozen=True)
class PortSpec:
    """A container-side port and its protocol."""

    port: int
    protocol: str = "tcp"

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"Port out of range: {self.port}")
        if self.protocol not in VALID_PROTOCOLS:
            raise ValueError(
                f"Invalid protocol '{self.protocol}'. "
                f"Must be one of {sorted(VALID_PROTOCOLS)}"
            )

    @classmethod
    def parse(cls, value: Union["PortSpec", str, int]) -> "PortSpec":
        """Build a PortSpec from "8080/tcp", "8080", 8080 or a PortSpec.

        Raises:
            ValueError: If the value is not a valid port spec.
        """
        if isinstance(value, PortSpec):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid port spec: {value!r}")
        if isinstance(value, int):
            return cls(port=value)

        text = str(value).strip()
        port_text, _, protocol = text.partition("/")
        if not port_text.isdigit():
            raise ValueError(f"Invalid port spec: {value!r}")
        return cls(port=int(port_text), protocol=(protocol or "tcp").lower())

    def __str__(self) -> str:
        return f"{self.port}/{self.protocol}"


@dataclass(frozen=True)
class PortBinding:
    """Host side of a published port."""

    host_ip: str
    host_port: str


@dataclass
class RuntimeState:
    """Snapshot of the engine's view of a container.

    Owned by the engine and only valid for the inspect call that produced
    it; re-inspect instead of trusting an old snapshot.

    Attributes:
        container_id: Full engine-assigned id.
        name: Container name without the leading slash.
        image: Image reference the container was created from.
        status: Engine status string ("running", "exited", ...).
        running: Whether the engine reports the container as running.
        ip_address: Container address on the default bridge, may be empty.
        ports: "<port>/<proto>" -> host bindings. Exposed but unpublished
            ports map to an empty list.
        raw: The untouched inspect document.
    """

    container_id: str
    name: str = ""
    image: str = ""
    status: str = ""
    running: bool = False
    ip_address: str = ""
    ports: dict[str, list[PortBinding]] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_inspect(cls, document: dict[str, Any]) -> "RuntimeState":
        """Build a snapshot from a Docker ``inspect`` response."""
        state = document.get("State") or {}
        config = document.get("Config") or {}
        network = document.get("NetworkSettings") or {}

        ports: dict[str, list[PortBinding]] = {}
        for key, bindings in (network.get("Ports") or {}).items():
            ports[key] = [
                PortBinding(
                    host_ip=binding.get("HostIp", "") or "",
                    host_port=str(binding.get("HostPort", "") or ""),
                )
                for binding in (bindings or [])
            ]

        return cls(
            container_id=document.get("Id", ""),
            name=(document.get("Name") or "").lstrip("/"),
            image=config.get("Image", "") or "",
            status=state.get("Status", "") or "",
            running=bool(state.get("Running", False)),
            ip_address=network.get("IPAddress", "") or "",
            ports=ports,
            raw=document,
        )


class FixturePhase(StrEnum):
    """Lifecycle phase of a fixture.

    Transitions:
        UNRESOLVED -> REUSED | CREATED
        REUSED | CREATED -> RUNNING
        RUNNING -> STOPPED
        RUNNING | STOPPED -> REMOVED
    """

    UNRESOLVED = "unresolved"
    REUSED = "reused"
    CREATED = "created"
    RUNNING = "running"
    STOPPED = "stopped"
    REMOVED = "removed"


@dataclass
class Fixture:
    """A named, identity-stable test container.

    ``name`` and ``container_id`` are the caller-owned identity. ``state``
    is fetched separately by inspect and may be stale; ``target`` is the
    engine the fixture was started on.
    """

    name: str
    container_id: str = ""
    state: Optional[RuntimeState] = None
    target: Optional[ConnectionTarget] = None
    phase: FixturePhase = FixturePhase.UNRESOLVED
    reused: bool = False

    @property
    def short_id(self) -> str:
        return self.container_id[:12]
