"""Published port to reachable URL translation.

When the engine runs on another machine the host IP in a port binding is
usually 0.0.0.0 or a loopback address that means nothing to the caller,
so the engine's own hostname is used instead. With a local engine socket
the binding's host IP is used as reported.
"""

from __future__ import annotations

from typing import Optional, Union
from urllib.parse import urlsplit

from dockfix.core.config import create_settings
from dockfix.core.exceptions import EngineAddressError, PortNotPublishedError
from dockfix.core.models import ConnectionTarget, Fixture, PortBinding, PortSpec


def engine_hostname(address: str) -> Optional[str]:
    """Return the hostname of a remote engine address, or None.

    ``tcp://10.0.0.9:2376`` gives ``10.0.0.9``; socket addresses such as
    ``unix:///var/run/docker.sock`` have no host and give None. An address
    without a scheme, e.g. ``10.0.0.9:2376``, is read as ``tcp://`` the way
    the Docker client reads DOCKER_HOST.

    Raises:
        EngineAddressError: The address cannot be parsed.
    """
    if not address:
        return None
    if "://" not in address and not address.startswith("/"):
        address_url = f"tcp://{address}"
    else:
        address_url = address
    try:
        parts = urlsplit(address_url)
        # .port validates the port component
        parts.port
    except ValueError as e:
        raise EngineAddressError(address, str(e)) from e
    if parts.scheme in ("tcp", "http", "https") and not parts.hostname:
        raise EngineAddressError(address, "no host in engine address")
    return parts.hostname or None


def first_binding(fixture: Fixture, spec: PortSpec) -> PortBinding:
    """Return the first host binding of spec on the fixture.

    Raises:
        PortNotPublishedError: No snapshot, or no binding for spec.
    """
    if fixture.state is None:
        raise PortNotPublishedError(
            fixture.name,
            str(spec),
            message=f"Fixture '{fixture.name}' has not been inspected; "
            f"no published ports known for {spec}.",
        )
    bindings = fixture.state.ports.get(str(spec))
    if not bindings:
        raise PortNotPublishedError(fixture.name, str(spec))
    return bindings[0]


def resolve_url(
    fixture: Fixture,
    port: Union[PortSpec, str, int],
    target: Optional[ConnectionTarget] = None,
) -> str:
    """Return a URL the caller can use to reach a published container port.

    Args:
        fixture: Started fixture carrying a runtime snapshot.
        port: Container-side port, e.g. "8080/tcp".
        target: Engine target to derive the host from. Defaults to the
            target the fixture was started on, then to configuration.

    Returns:
        ``"<protocol>://<host>:<host_port>"``

    Raises:
        PortNotPublishedError: The fixture does not publish the port.
        EngineAddressError: The engine address is malformed.
        ValueError: The port spec is invalid.
    """
    spec = PortSpec.parse(port)
    binding = first_binding(fixture, spec)

    if target is None:
        target = fixture.target
    address = target.address if target is not None else create_settings().docker_host

    host = engine_hostname(address) or binding.host_ip
    if ":" in host:
        host = f"[{host}]"
    return f"{spec.protocol}://{host}:{binding.host_port}"
