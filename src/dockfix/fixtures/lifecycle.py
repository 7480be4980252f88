"""Fixture Lifecycle Controller.

Create-or-reuse, start, stop and remove for named fixture containers.

Three sources of truth meet here: the identity file on disk, the live
state reported by the engine, and the address the caller must use. None
of them is assumed to agree with the others:

- a persisted id is adopted without checking the engine; a stale id fails
  at start/inspect time, never by creating a second container
- start errors other than "already running" are deferred to inspect,
  whose result is authoritative
- the identity file is cleared only after the engine confirms removal

States:
    UNRESOLVED -> REUSED | CREATED -> RUNNING -> STOPPED -> REMOVED

Usage:
    from dockfix.fixtures.lifecycle import FixtureController

    controller = FixtureController()
    fixture = controller.start("redis-cache", "redis:7-alpine")
    url = controller.url_for(fixture, "6379/tcp")
    controller.stop(fixture)
    controller.remove(fixture)
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Union

import structlog

from dockfix.core.config import Settings, create_settings
from dockfix.core.exceptions import DockfixError, EngineOperationError, IdentityStoreError
from dockfix.core.models import (
    ConnectionTarget,
    Fixture,
    FixturePhase,
    PortSpec,
    RuntimeState,
)
from dockfix.engine.connection import resolve_target
from dockfix.engine.docker_engine import EngineFactory, open_engine
from dockfix.fixtures.identity import IdentityStore
from dockfix.fixtures.ports import resolve_url
from dockfix.protocols.engine import EngineProtocol


class FixtureController:
    """Drives fixture containers through their lifecycle.

    Args:
        settings: Settings to use for every call. When omitted the
            environment is re-read on each operation.
        engine_factory: Builds an engine for a resolved target. Defaults to
            the Docker SDK adapter.
        store: Identity store. Defaults to one rooted at ``state_dir``.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine_factory: Optional[EngineFactory] = None,
        store: Optional[IdentityStore] = None,
    ) -> None:
        self._settings = settings
        self._engine_factory = engine_factory if engine_factory is not None else open_engine
        self._store = store
        self._log = structlog.get_logger().bind(component="fixture_controller")

    def _current_settings(self) -> Settings:
        if self._settings is not None:
            return self._settings
        return create_settings()

    def _identity_store(self, settings: Settings) -> IdentityStore:
        if self._store is not None:
            return self._store
        return IdentityStore(settings.state_path)

    def _connect(self, settings: Settings) -> tuple[ConnectionTarget, EngineProtocol]:
        target = resolve_target(settings)
        return target, self._engine_factory(target)

    def start(self, name: str, base_image: str) -> Fixture:
        """Start the fixture called name, creating its container if needed.

        Args:
            name: Logical fixture name; also the identity file key.
            base_image: Image used when a new container must be created.

        Returns:
            Fixture with a fresh runtime snapshot.

        Raises:
            EngineConnectionError: The engine cannot be reached.
            EngineOperationError: Create or inspect failed.
            ContainerNotFoundError: A persisted id no longer exists.
            IdentityStoreError: The identity file exists but is unreadable.
        """
        settings = self._current_settings()
        store = self._identity_store(settings)
        fixture = Fixture(name=name)
        log = self._log.bind(fixture=name)

        target, engine = self._connect(settings)
        with engine:
            container_id = store.load(name)
            if container_id:
                fixture.container_id = container_id
                fixture.phase = FixturePhase.REUSED
                fixture.reused = True
                log.info("fixture_reused", container_id=fixture.short_id)
            else:
                log.info("fixture_creating", image=base_image)
                fixture.container_id = engine.create_container(base_image)
                fixture.phase = FixturePhase.CREATED
                log.info(
                    "fixture_created",
                    image=base_image,
                    container_id=fixture.short_id,
                )
                try:
                    store.save(name, fixture.container_id)
                except IdentityStoreError as e:
                    log.warning("fixture_identity_save_failed", **e.context)

            self._start(engine, fixture, log)
            fixture.state = RuntimeState.from_inspect(
                engine.inspect_container(fixture.container_id)
            )

        fixture.target = target
        fixture.phase = FixturePhase.RUNNING
        log.info(
            "fixture_started",
            container_id=fixture.short_id,
            status=fixture.state.status,
            reused=fixture.reused,
        )
        return fixture

    @staticmethod
    def _start(engine: EngineProtocol, fixture: Fixture, log) -> None:
        try:
            engine.start_container(fixture.container_id)
        except EngineOperationError as e:
            if e.is_already_running:
                log.debug("fixture_already_running", container_id=fixture.short_id)
            else:
                # inspect decides whether the container is usable
                log.warning("fixture_start_deferred", **e.context)

    def stop(self, fixture: Fixture) -> None:
        """Kill the fixture's container; the identity file is kept.

        "Not running" and "no such container" are expected and ignored.
        Other engine errors are logged, not raised. Failing to reach the
        engine at all is not swallowed, so teardown code calling stop must
        be prepared for it.

        Raises:
            EngineConnectionError: The engine cannot be reached or the
                connection drops during the kill.
        """
        settings = self._current_settings()
        log = self._log.bind(fixture=fixture.name, container_id=fixture.short_id)

        _, engine = self._connect(settings)
        with engine:
            try:
                engine.kill_container(fixture.container_id)
            except EngineOperationError as e:
                if e.is_not_running:
                    log.debug("fixture_stop_ignored", reason=e.explanation)
                else:
                    log.warning("fixture_stop_failed", **e.context)
            else:
                log.info("fixture_stopped")

        fixture.phase = FixturePhase.STOPPED

    def remove(self, fixture: Fixture, force: bool = False) -> None:
        """Remove the fixture's container, then its identity file.

        If the engine refuses, the identity file is left untouched so the
        container stays tracked.

        Args:
            fixture: Fixture to remove.
            force: Ask the engine to kill a running container first.

        Raises:
            EngineConnectionError: The engine cannot be reached.
            EngineOperationError: The engine refused the removal.
            IdentityStoreError: The identity file could not be deleted.
        """
        settings = self._current_settings()
        store = self._identity_store(settings)
        log = self._log.bind(fixture=fixture.name, container_id=fixture.short_id)

        _, engine = self._connect(settings)
        with engine:
            engine.remove_container(fixture.container_id, force=force)

        store.clear(fixture.name)
        fixture.state = None
        fixture.phase = FixturePhase.REMOVED
        log.info("fixture_removed")

    def url_for(self, fixture: Fixture, port: Union[PortSpec, str, int]) -> str:
        """Reachable URL for a published port; see resolve_url."""
        target = fixture.target
        if target is None:
            target = resolve_target(self._current_settings())
        return resolve_url(fixture, port, target)

    @contextmanager
    def session(
        self,
        name: str,
        base_image: str,
        remove: bool = False,
    ) -> Iterator[Fixture]:
        """Start a fixture for the duration of a with-block.

        The container is stopped on exit, and removed (with its identity
        file) when remove is true. If the block raised, a failing teardown
        is logged and the block's exception propagates; otherwise teardown
        errors (e.g. EngineConnectionError) are raised.
        """
        fixture = self.start(name, base_image)
        try:
            yield fixture
        except BaseException:
            try:
                self._teardown(fixture, remove)
            except DockfixError as e:
                self._log.warning(
                    "fixture_teardown_failed",
                    fixture=name,
                    error_type=type(e).__name__,
                    **e.context,
                )
            raise
        else:
            self._teardown(fixture, remove)

    def _teardown(self, fixture: Fixture, remove: bool) -> None:
        if remove:
            self.remove(fixture, force=True)
        else:
            self.stop(fixture)


def start_fixture(name: str, base_image: str) -> Fixture:
    """Start a fixture using configuration from the environment."""
    return FixtureController().start(name, base_image)


def stop_fixture(fixture: Fixture) -> None:
    """Stop a fixture using configuration from the environment."""
    FixtureController().stop(fixture)


def remove_fixture(fixture: Fixture, force: bool = False) -> None:
    """Remove a fixture and its identity file."""
    FixtureController().remove(fixture, force=force)
