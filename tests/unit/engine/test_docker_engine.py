"""Unit tests for the Docker SDK adapter.

The SDK client is a MagicMock; these tests cover call shapes and the
translation of SDK errors into the dockfix hierarchy.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests
from docker.errors import APIError, DockerException, NotFound, TLSParameterError

from dockfix.core.exceptions import (
    ContainerNotFoundError,
    EngineConnectionError,
    EngineOperationError,
)
from dockfix.core.models import ConnectionTarget, TLSMaterial
from dockfix.engine.docker_engine import DockerEngine, open_engine


pytestmark = pytest.mark.unit

TARGET = ConnectionTarget(address="unix:///var/run/docker.sock")


def _response(status_code: int) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    return response


def _api_error(status_code: int, explanation: str) -> APIError:
    return APIError("engine error", response=_response(status_code), explanation=explanation)


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def engine(client) -> DockerEngine:
    return DockerEngine(TARGET, client=client)


class TestConnect:
    def test_plain_connection(self) -> None:
        with patch("dockfix.engine.docker_engine.docker.APIClient") as api_cls:
            engine = open_engine(TARGET)

        api_cls.assert_called_once_with(base_url=TARGET.address, tls=None, version="auto")
        assert engine.target is TARGET

    def test_tls_connection(self) -> None:
        target = ConnectionTarget(
            address="tcp://10.0.0.9:2376",
            tls=TLSMaterial("/certs/ca.pem", "/certs/cert.pem", "/certs/key.pem"),
        )
        with patch("dockfix.engine.docker_engine.TLSConfig") as tls_cls, patch(
            "dockfix.engine.docker_engine.docker.APIClient"
        ) as api_cls:
            open_engine(target)

        tls_cls.assert_called_once_with(
            client_cert=("/certs/cert.pem", "/certs/key.pem"),
            ca_cert="/certs/ca.pem",
            verify=True,
        )
        api_cls.assert_called_once_with(
            base_url="tcp://10.0.0.9:2376", tls=tls_cls.return_value, version="auto"
        )

    def test_missing_tls_material_is_connection_error(self, tmp_path) -> None:
        certs = tmp_path / "certs"
        target = ConnectionTarget(
            address="tcp://10.0.0.9:2376",
            tls=TLSMaterial(str(certs / "ca.pem"), str(certs / "cert.pem"), str(certs / "key.pem")),
        )
        with patch(
            "dockfix.engine.docker_engine.TLSConfig",
            side_effect=TLSParameterError("Path to a certificate and key files must be provided"),
        ):
            with pytest.raises(EngineConnectionError) as exc_info:
                open_engine(target)

        assert exc_info.value.address == "tcp://10.0.0.9:2376"
        assert "TLS" in exc_info.value.reason

    def test_unreachable_engine_is_connection_error(self) -> None:
        with patch(
            "dockfix.engine.docker_engine.docker.APIClient",
            side_effect=DockerException("Error while fetching server API version"),
        ):
            with pytest.raises(EngineConnectionError):
                open_engine(TARGET)


class TestOperations:
    def test_create_publishes_all_ports(self, engine, client) -> None:
        client.create_container.return_value = {"Id": "abc123", "Warnings": []}

        container_id = engine.create_container("nginx:alpine")

        assert container_id == "abc123"
        client.create_host_config.assert_called_once_with(publish_all_ports=True)
        client.create_container.assert_called_once_with(
            image="nginx:alpine", host_config=client.create_host_config.return_value
        )

    def test_start_kill_remove_inspect(self, engine, client) -> None:
        client.inspect_container.return_value = {"Id": "abc123"}

        engine.start_container("abc123")
        engine.kill_container("abc123")
        engine.remove_container("abc123")
        document = engine.inspect_container("abc123")

        client.start.assert_called_once_with("abc123")
        client.kill.assert_called_once_with("abc123")
        client.remove_container.assert_called_once_with("abc123", force=False)
        assert document == {"Id": "abc123"}

    def test_remove_force(self, engine, client) -> None:
        engine.remove_container("abc123", force=True)
        client.remove_container.assert_called_once_with("abc123", force=True)

    def test_close_and_context_manager(self, engine, client) -> None:
        with engine as entered:
            assert entered is engine
        client.close.assert_called_once()


class TestErrorTranslation:
    def test_not_found_on_inspect(self, engine, client) -> None:
        client.inspect_container.side_effect = NotFound(
            "404", response=_response(404), explanation="No such container: abc123"
        )

        with pytest.raises(ContainerNotFoundError) as exc_info:
            engine.inspect_container("abc123")

        assert exc_info.value.container_id == "abc123"
        assert exc_info.value.operation == "inspect"
        assert "No such container" in exc_info.value.explanation

    def test_missing_image_on_create_is_operation_error(self, engine, client) -> None:
        client.create_container.side_effect = NotFound(
            "404", response=_response(404), explanation="No such image: nope:latest"
        )

        with pytest.raises(EngineOperationError) as exc_info:
            engine.create_container("nope:latest")

        assert not isinstance(exc_info.value, ContainerNotFoundError)
        assert exc_info.value.status_code == 404

    def test_conflict_on_kill_is_recognized(self, engine, client) -> None:
        client.kill.side_effect = _api_error(409, "Container abc123 is not running")

        with pytest.raises(EngineOperationError) as exc_info:
            engine.kill_container("abc123")

        assert exc_info.value.status_code == 409
        assert exc_info.value.is_not_running

    def test_server_error_on_remove(self, engine, client) -> None:
        client.remove_container.side_effect = _api_error(500, "driver failure")

        with pytest.raises(EngineOperationError) as exc_info:
            engine.remove_container("abc123")

        assert exc_info.value.status_code == 500
        assert exc_info.value.operation == "remove"

    def test_transport_failure_is_connection_error(self, engine, client) -> None:
        client.start.side_effect = requests.exceptions.ConnectionError("reset by peer")

        with pytest.raises(EngineConnectionError) as exc_info:
            engine.start_container("abc123")

        assert exc_info.value.address == TARGET.address
