"""Unit tests for dockfix data models."""

import pytest

from dockfix.core.models import (
    ConnectionTarget,
    Fixture,
    FixturePhase,
    PortBinding,
    PortSpec,
    RuntimeState,
    TLSMaterial,
)


pytestmark = pytest.mark.unit


INSPECT_DOCUMENT = {
    "Id": "4f66ad9a0b2e1d3c5b7a9e8f6d4c2b1a0f9e8d7c6b5a4f3e2d1c0b9a8f7e6d5c",
    "Name": "/web-fixture",
    "Config": {"Image": "nginx:alpine"},
    "State": {"Status": "running", "Running": True},
    "NetworkSettings": {
        "IPAddress": "172.17.0.3",
        "Ports": {
            "80/tcp": [
                {"HostIp": "0.0.0.0", "HostPort": "49153"},
                {"HostIp": "::", "HostPort": "49153"},
            ],
            "443/tcp": None,
        },
    },
}


class TestPortSpec:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("8080/tcp", PortSpec(8080, "tcp")),
            ("53/udp", PortSpec(53, "udp")),
            ("8080/TCP", PortSpec(8080, "tcp")),
            ("8080", PortSpec(8080, "tcp")),
            (8080, PortSpec(8080, "tcp")),
        ],
    )
    def test_parse(self, value, expected) -> None:
        assert PortSpec.parse(value) == expected

    def test_parse_returns_existing_spec(self) -> None:
        spec = PortSpec(5432)
        assert PortSpec.parse(spec) is spec

    @pytest.mark.parametrize("value", ["", "http", "80/http", "0/tcp", "70000/tcp", "-1", True])
    def test_parse_rejects_invalid(self, value) -> None:
        with pytest.raises(ValueError):
            PortSpec.parse(value)

    def test_str_is_engine_key(self) -> None:
        assert str(PortSpec(8080, "tcp")) == "8080/tcp"
        assert str(PortSpec.parse("53/udp")) == "53/udp"


class TestRuntimeState:
    def test_from_inspect(self) -> None:
        state = RuntimeState.from_inspect(INSPECT_DOCUMENT)

        assert state.container_id == INSPECT_DOCUMENT["Id"]
        assert state.name == "web-fixture"
        assert state.image == "nginx:alpine"
        assert state.status == "running"
        assert state.running is True
        assert state.ip_address == "172.17.0.3"
        assert state.raw is INSPECT_DOCUMENT

    def test_ports_keep_binding_order(self) -> None:
        state = RuntimeState.from_inspect(INSPECT_DOCUMENT)
        assert state.ports["80/tcp"] == [
            PortBinding(host_ip="0.0.0.0", host_port="49153"),
            PortBinding(host_ip="::", host_port="49153"),
        ]

    def test_unpublished_port_maps_to_empty_list(self) -> None:
        state = RuntimeState.from_inspect(INSPECT_DOCUMENT)
        assert state.ports["443/tcp"] == []

    def test_from_minimal_document(self) -> None:
        state = RuntimeState.from_inspect({"Id": "abc"})
        assert state.container_id == "abc"
        assert state.running is False
        assert state.ports == {}


class TestConnectionTarget:
    def test_plain_target(self) -> None:
        target = ConnectionTarget(address="unix:///var/run/docker.sock")
        assert target.is_tls is False

    def test_tls_target(self) -> None:
        tls = TLSMaterial("/certs/ca.pem", "/certs/cert.pem", "/certs/key.pem")
        target = ConnectionTarget(address="tcp://10.0.0.9:2376", tls=tls)
        assert target.is_tls is True


class TestFixture:
    def test_defaults(self) -> None:
        fixture = Fixture(name="db")
        assert fixture.container_id == ""
        assert fixture.state is None
        assert fixture.target is None
        assert fixture.phase is FixturePhase.UNRESOLVED
        assert fixture.reused is False

    def test_short_id(self) -> None:
        fixture = Fixture(name="db", container_id=INSPECT_DOCUMENT["Id"])
        assert fixture.short_id == "4f66ad9a0b2e"
