from abc import ABC, abstractmethod
from typing import Any


class EngineProtocol(ABC):
    """Container engine operations a fixture needs.

    Implementations raise the dockfix exception hierarchy
    (EngineOperationError, ContainerNotFoundError, EngineConnectionError)
    rather than SDK-specific errors.
    """

    @abstractmethod
    def create_container(self, image: str) -> str:
        """Create a container from image with all ports published; return its id."""
        pass

    @abstractmethod
    def start_container(self, container_id: str) -> None:
        """Start the container."""
        pass

    @abstractmethod
    def kill_container(self, container_id: str) -> None:
        """Kill the container."""
        pass

    @abstractmethod
    def remove_container(self, container_id: str, force: bool = False) -> None:
        """Remove the container."""
        pass

    @abstractmethod
    def inspect_container(self, container_id: str) -> dict[str, Any]:
        """Return the engine's inspect document for the container."""
        pass

    def close(self) -> None:
        """Release the underlying connection."""

    def __enter__(self) -> "EngineProtocol":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
