"""Flat-directory storage for uploaded profile images."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import urlparse

log = logging.getLogger(__name__)


class LocalImageStore:
    """Stores image files directly under ``root`` (no subdirectories)."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, filename: str) -> Path:
        """Resolve ``filename`` inside the root.

        :raises ValueError: If the name would escape the storage root.
        """
        path = (self._root / filename).resolve()
        if path.parent != self._root:
            raise ValueError("Attempted directory traversal outside storage root")
        return path

    def write_bytes(self, filename: str, data: bytes) -> Path:
        path = self.path_for(filename)
        path.write_bytes(data)
        log.debug("storage.write", extra={"image_file": filename, "size": len(data)})
        return path

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def delete(self, filename: str) -> None:
        """Remove ``filename``.

        :raises FileNotFoundError: If the file does not exist.
        """
        self.path_for(filename).unlink()
        log.info("storage.delete", extra={"image_file": filename})

    def list_filenames(self) -> list[str]:
        return sorted(p.name for p in self._root.iterdir() if p.is_file())

    @staticmethod
    def filename_from_url(url: str) -> str:
        """Return the last path segment of an image URL."""
        path = urlparse(url).path
        return path.rstrip("/").rsplit("/", 1)[-1]
