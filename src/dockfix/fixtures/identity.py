"""Fixture identity persistence.

One file per fixture name, ``<name>.container``, holding the raw engine
container id. The file is what lets a later test run rediscover its
container; deleting it forces a fresh container on the next start.

No locking is done: concurrent starts of the same fixture name must be
serialized by the caller.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

import structlog

from dockfix.core.exceptions import IdentityStoreError

IDENTITY_SUFFIX = ".container"

log = structlog.get_logger()


class IdentityStore:
    """Maps fixture names to persisted container ids.

    Args:
        directory: Directory holding the identity files. Relative paths
            are resolved against the working directory at call time.
    """

    def __init__(self, directory: Union[str, Path] = ".") -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Path:
        """Return the identity file path for name.

        Raises:
            ValueError: If name is empty or contains a path separator.
        """
        if not name or name in (".", ".."):
            raise ValueError(f"Invalid fixture name: {name!r}")
        if os.sep in name or (os.altsep and os.altsep in name) or "/" in name:
            raise ValueError(f"Fixture name must not contain a path separator: {name!r}")
        return self._directory / f"{name}{IDENTITY_SUFFIX}"

    def load(self, name: str) -> Optional[str]:
        """Return the persisted container id, or None if there is none.

        A missing or blank file counts as "none".

        Raises:
            IdentityStoreError: The file exists but cannot be read.
        """
        path = self.path_for(name)
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise IdentityStoreError(name, str(path), str(e)) from e

        container_id = content.strip()
        return container_id or None

    def save(self, name: str, container_id: str) -> None:
        """Persist container_id for name, replacing any previous value.

        Raises:
            IdentityStoreError: The file cannot be written.
        """
        path = self.path_for(name)
        try:
            path.write_text(container_id, encoding="utf-8")
        except OSError as e:
            raise IdentityStoreError(name, str(path), str(e)) from e
        log.debug("fixture_identity_saved", name=name, path=str(path))

    def clear(self, name: str) -> None:
        """Delete the identity file; a missing file is not an error.

        Raises:
            IdentityStoreError: The file exists but cannot be deleted.
        """
        path = self.path_for(name)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise IdentityStoreError(name, str(path), str(e)) from e
        log.debug("fixture_identity_cleared", name=name, path=str(path))
