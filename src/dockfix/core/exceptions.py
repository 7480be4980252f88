"""dockfix Exception Hierarchy.

All custom exceptions inherit from DockfixError, enabling consistent
error handling for callers that drive fixtures from test suites.

Exception Categories:
- Fatal errors (connection, create, inspect, remove) -> always raised
- Idempotency-expected engine errors (already running, not running)
  -> recognized by the lifecycle controller and suppressed
- Advisory failures (identity file write) -> logged, never raised

Usage:
    from dockfix.core.exceptions import EngineOperationError

    try:
        controller.remove(fixture)
    except EngineOperationError as e:
        log.error("remove_failed", **e.context)
"""

from typing import Any, Optional


class DockfixError(Exception):
    """Base exception for all dockfix errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        """Initialize DockfixError.

        Args:
            message: Optional custom message. Defaults to a generic message.
        """
        self.message = message or "A dockfix error occurred."
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context dictionary for structured logging."""
        return {}

    def __repr__(self) -> str:
        """Return debug representation."""
        return f"{self.__class__.__name__}({self.message!r})"


class ConfigurationError(DockfixError):
    """A configuration value is invalid.

    Attributes:
        key: The configuration key that caused the error, if known.
    """

    def __init__(
        self,
        key: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.key = key

        if message is None:
            message = (
                f"Invalid configuration value for '{key}'."
                if key
                else "Invalid configuration."
            )

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for configuration error."""
        return {"key": self.key}

    def __repr__(self) -> str:
        return f"ConfigurationError(key={self.key!r}, message={self.message!r})"


class EngineConnectionError(DockfixError):
    """The container engine could not be reached.

    Raised when the engine address is unusable, the TLS material cannot
    be loaded, or the engine does not answer. Fatal to the calling
    operation; never retried.

    Attributes:
        address: The engine address that was attempted.
        reason: Underlying failure description.
    """

    def __init__(
        self,
        address: str,
        reason: str,
        message: Optional[str] = None,
    ) -> None:
        self.address = address
        self.reason = reason

        if message is None:
            message = f"Cannot connect to container engine at '{address}': {reason}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for connection failure."""
        return {"address": self.address, "reason": self.reason}

    def __repr__(self) -> str:
        return (
            f"EngineConnectionError(address={self.address!r}, "
            f"reason={self.reason!r})"
        )


class EngineAddressError(DockfixError):
    """The configured engine address cannot be parsed.

    Raised by port resolution; a malformed address is never silently
    replaced by the binding's host IP.

    Attributes:
        address: The malformed address.
        reason: Parser failure description.
    """

    def __init__(
        self,
        address: str,
        reason: str,
        message: Optional[str] = None,
    ) -> None:
        self.address = address
        self.reason = reason

        if message is None:
            message = f"Malformed engine address '{address}': {reason}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for address error."""
        return {"address": self.address, "reason": self.reason}

    def __repr__(self) -> str:
        return (
            f"EngineAddressError(address={self.address!r}, "
            f"reason={self.reason!r})"
        )


class EngineOperationError(DockfixError):
    """The engine rejected a container operation.

    Attributes:
        operation: Engine operation name (create, start, kill, remove, inspect).
        container_id: Container the operation targeted, or the image for create.
        status_code: HTTP status reported by the engine, if any.
        explanation: Engine-provided explanation text.
    """

    def __init__(
        self,
        operation: str,
        container_id: Optional[str] = None,
        status_code: Optional[int] = None,
        explanation: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.operation = operation
        self.container_id = container_id
        self.status_code = status_code
        self.explanation = explanation or ""

        if message is None:
            target = f" '{container_id}'" if container_id else ""
            status = f" ({status_code})" if status_code is not None else ""
            message = f"Engine {operation}{target} failed{status}: {self.explanation}"

        super().__init__(message)

    @property
    def is_already_running(self) -> bool:
        """Whether a start failed only because the container is running."""
        if self.status_code == 304:
            return True
        text = self.explanation.lower()
        return "already started" in text or "already running" in text

    @property
    def is_not_running(self) -> bool:
        """Whether a kill failed because the container is stopped or gone."""
        if self.status_code == 404:
            return True
        return self.status_code == 409 and "not running" in self.explanation.lower()

    @property
    def context(self) -> dict[str, Any]:
        """Return context for engine failure."""
        return {
            "operation": self.operation,
            "container_id": self.container_id,
            "status_code": self.status_code,
            "explanation": self.explanation,
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(operation={self.operation!r}, "
            f"container_id={self.container_id!r}, "
            f"status_code={self.status_code!r})"
        )


class ContainerNotFoundError(EngineOperationError):
    """The engine has no container with the requested id.

    Typical cause is a stale identity file left behind after the
    container was removed out-of-band.
    """

    def __init__(
        self,
        operation: str,
        container_id: Optional[str] = None,
        explanation: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"No such container '{container_id}' (during {operation})."
        super().__init__(
            operation=operation,
            container_id=container_id,
            status_code=404,
            explanation=explanation,
            message=message,
        )


class IdentityStoreError(DockfixError):
    """Reading, writing or deleting an identity file failed.

    Attributes:
        name: Fixture name.
        path: Identity file path.
        reason: Underlying OS error description.
    """

    def __init__(
        self,
        name: str,
        path: str,
        reason: str,
        message: Optional[str] = None,
    ) -> None:
        self.name = name
        self.path = path
        self.reason = reason

        if message is None:
            message = f"Identity file '{path}' for fixture '{name}': {reason}"

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for identity store failure."""
        return {"name": self.name, "path": self.path, "reason": self.reason}

    def __repr__(self) -> str:
        return (
            f"IdentityStoreError(name={self.name!r}, path={self.path!r}, "
            f"reason={self.reason!r})"
        )


class PortNotPublishedError(DockfixError):
    """The fixture does not publish the requested container port.

    Attributes:
        fixture_name: Name of the fixture.
        port: Port spec in engine form, e.g. "8080/tcp".
    """

    def __init__(
        self,
        fixture_name: str,
        port: str,
        message: Optional[str] = None,
    ) -> None:
        self.fixture_name = fixture_name
        self.port = port

        if message is None:
            message = f"Fixture '{fixture_name}' does not publish port {port}."

        super().__init__(message)

    @property
    def context(self) -> dict[str, Any]:
        """Return context for unpublished port."""
        return {"fixture_name": self.fixture_name, "port": self.port}

    def __repr__(self) -> str:
        return (
            f"PortNotPublishedError(fixture_name={self.fixture_name!r}, "
            f"port={self.port!r})"
        )
