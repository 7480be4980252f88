"""Docker SDK adapter for EngineProtocol.

Wraps the low-level ``docker.APIClient`` and translates SDK and transport
errors into the dockfix exception hierarchy, so the lifecycle controller
can recognize "already running" and "not running" conditions by kind
instead of by SDK type.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

import docker
import requests
import structlog
from docker.errors import APIError, DockerException, NotFound, TLSParameterError
from docker.tls import TLSConfig

from dockfix.core.exceptions import (
    ContainerNotFoundError,
    EngineConnectionError,
    EngineOperationError,
)
from dockfix.core.models import ConnectionTarget
from dockfix.protocols.engine import EngineProtocol


EngineFactory = Callable[[ConnectionTarget], EngineProtocol]


def _explain(error: Exception) -> str:
    explanation = getattr(error, "explanation", None)
    if isinstance(explanation, bytes):
        explanation = explanation.decode("utf-8", errors="replace")
    return explanation or str(error)


class DockerEngine(EngineProtocol):
    """EngineProtocol backed by the Docker Engine API.

    The client is created (and the engine API version negotiated) in the
    constructor, which is where unreadable TLS material or an unreachable
    engine first surfaces as EngineConnectionError.

    Args:
        target: Resolved connection target.
        client: Pre-built APIClient (tests); skips connecting.
    """

    def __init__(
        self,
        target: ConnectionTarget,
        client: Optional[docker.APIClient] = None,
    ) -> None:
        self._target = target
        self._log = structlog.get_logger().bind(
            component="docker_engine",
            address=target.address,
        )
        self._client = client if client is not None else self._connect(target)

    @property
    def target(self) -> ConnectionTarget:
        return self._target

    @staticmethod
    def _connect(target: ConnectionTarget) -> docker.APIClient:
        tls = None
        try:
            if target.tls is not None:
                tls = TLSConfig(
                    client_cert=(target.tls.client_cert, target.tls.client_key),
                    ca_cert=target.tls.ca_cert,
                    verify=True,
                )
            return docker.APIClient(base_url=target.address, tls=tls, version="auto")
        except TLSParameterError as e:
            raise EngineConnectionError(target.address, f"TLS material: {e}") from e
        except (DockerException, requests.exceptions.RequestException) as e:
            raise EngineConnectionError(target.address, str(e)) from e

    @contextmanager
    def _translate(self, operation: str, ref: str) -> Iterator[None]:
        try:
            yield
        except NotFound as e:
            if operation == "create":
                raise EngineOperationError(
                    operation, ref, status_code=404, explanation=_explain(e)
                ) from e
            raise ContainerNotFoundError(operation, ref, explanation=_explain(e)) from e
        except APIError as e:
            raise EngineOperationError(
                operation, ref, status_code=e.status_code, explanation=_explain(e)
            ) from e
        except (DockerException, requests.exceptions.RequestException) as e:
            raise EngineConnectionError(self._target.address, str(e)) from e

    def create_container(self, image: str) -> str:
        with self._translate("create", image):
            host_config = self._client.create_host_config(publish_all_ports=True)
            result = self._client.create_container(image=image, host_config=host_config)
        for warning in result.get("Warnings") or []:
            self._log.info("engine_create_warning", image=image, warning=warning)
        return result["Id"]

    def start_container(self, container_id: str) -> None:
        with self._translate("start", container_id):
            self._client.start(container_id)

    def kill_container(self, container_id: str) -> None:
        with self._translate("kill", container_id):
            self._client.kill(container_id)

    def remove_container(self, container_id: str, force: bool = False) -> None:
        with self._translate("remove", container_id):
            self._client.remove_container(container_id, force=force)

    def inspect_container(self, container_id: str) -> dict[str, Any]:
        with self._translate("inspect", container_id):
            return self._client.inspect_container(container_id)

    def close(self) -> None:
        self._client.close()


def open_engine(target: ConnectionTarget) -> DockerEngine:
    """Connect to the engine described by target.

    Raises:
        EngineConnectionError: TLS material unreadable or engine unreachable.
    """
    return DockerEngine(target)
