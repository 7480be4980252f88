"""Engine connection resolution.

Turns the current configuration into a ConnectionTarget: a plain address
(usually the local engine socket) or an address plus the mutual-TLS
material found under DOCKER_CERT_PATH.

Resolution is a pure read of configuration. Nothing is cached, so callers
resolve again for every operation that talks to the engine.
"""

from __future__ import annotations

import os
from typing import Optional

import structlog

from dockfix.core.config import Settings, create_settings
from dockfix.core.models import ConnectionTarget, TLSMaterial

log = structlog.get_logger()

CA_CERT_FILE = "ca.pem"
CLIENT_CERT_FILE = "cert.pem"
CLIENT_KEY_FILE = "key.pem"


def tls_material(cert_dir: str) -> TLSMaterial:
    """Return the fixed PEM file paths inside cert_dir (not checked)."""
    return TLSMaterial(
        ca_cert=os.path.join(cert_dir, CA_CERT_FILE),
        client_cert=os.path.join(cert_dir, CLIENT_CERT_FILE),
        client_key=os.path.join(cert_dir, CLIENT_KEY_FILE),
    )


def resolve_target(settings: Optional[Settings] = None) -> ConnectionTarget:
    """Resolve how to reach the container engine.

    Args:
        settings: Settings to resolve from. When omitted the environment
            is read now.

    Returns:
        A TLS target when ``docker_cert_path`` is set, otherwise a plain
        target at ``docker_host``.
    """
    if settings is None:
        settings = create_settings()

    if settings.docker_cert_path:
        target = ConnectionTarget(
            address=settings.docker_host,
            tls=tls_material(settings.docker_cert_path),
        )
    else:
        target = ConnectionTarget(address=settings.docker_host)

    log.debug(
        "engine_target_resolved",
        address=target.address,
        tls=target.is_tls,
    )
    return target
