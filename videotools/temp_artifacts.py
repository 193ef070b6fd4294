"""Temporary artifact allocation and guaranteed cleanup.

Multi-stage operations allocate intermediate files through a
:class:`TempScope`; everything the scope created is removed when the
``with`` block exits, whether it returns early, completes, or raises::

    with temp_manager.scope() as scope:
        normalized = scope.create(suffix=".mp4", prefix="normalized_")
        ...
        scope.promote(rendered, output)   # kept, moved into place
"""

import logging
import os
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger("videotools")


class TempArtifactManager:
    """Allocates uniquely named paths under a temp directory."""

    def __init__(self, temp_dir: Optional[str | Path] = None):
        self.temp_dir = Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())

    def create_temp(self, suffix: str = "", prefix: str = "videotools_") -> Path:
        """Return a fresh, unused path in the temp directory.

        The file is not created; names carry a uuid4 token so concurrent
        callers never collide and names are never reused.
        """
        return self.temp_dir / f"{prefix}{uuid.uuid4().hex}{suffix}"

    def release(self, artifact: str | Path) -> None:
        """Delete an artifact if present. A missing file is not an error."""
        try:
            os.remove(artifact)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove temp artifact %s: %s", artifact, e)

    @contextmanager
    def scope(self) -> Iterator["TempScope"]:
        """Track artifacts for one operation and release them on exit."""
        scope = TempScope(self)
        try:
            yield scope
        finally:
            scope.release_all()


class TempScope:
    """Artifacts owned by one operation. Obtain via ``TempArtifactManager.scope``."""

    def __init__(self, manager: TempArtifactManager):
        self._manager = manager
        self._artifacts: list[Path] = []

    @property
    def artifacts(self) -> list[Path]:
        return list(self._artifacts)

    def create(self, suffix: str = "", prefix: str = "videotools_") -> Path:
        """Allocate a temp path that will be released with the scope."""
        return self.track(self._manager.create_temp(suffix=suffix, prefix=prefix))

    def track(self, artifact: str | Path) -> Path:
        """Register an externally created artifact with the scope."""
        path = Path(artifact)
        self._artifacts.append(path)
        return path

    def promote(self, artifact: Path, destination: str | Path) -> Path:
        """Move an artifact into its final location and stop tracking it."""
        destination = Path(destination)
        shutil.move(str(artifact), str(destination))
        if artifact in self._artifacts:
            self._artifacts.remove(artifact)
        return destination

    def release_all(self) -> None:
        while self._artifacts:
            self._manager.release(self._artifacts.pop())
