"""Archive writer capability with an in-memory zip backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO
from logging import getLogger
import zipfile

from ..errors import ArchiveAssemblyError

logger = getLogger("iconkit_core.imaging.archive_writer")


class ArchiveWriter(ABC):
    @abstractmethod
    def add_file(self, path: str, data: bytes) -> None:
        raise NotImplementedError

    @abstractmethod
    def finalize(self) -> bytes:
        raise NotImplementedError


class ZipArchiveWriter(ArchiveWriter):
    """Collects entries in memory and serializes them once, on finalize."""

    def __init__(self, *, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.compression = compression
        self._entries: dict[str, bytes] = {}
        self._finalized = False

    @staticmethod
    def _normalize_path(path: str) -> str:
        clean = path.replace("\\", "/").strip("/")
        parts = clean.split("/")
        if not clean or any(part in ("", ".", "..") for part in parts):
            raise ArchiveAssemblyError(f"Invalid archive path: {path!r}")
        return clean

    def add_file(self, path: str, data: bytes) -> None:
        if self._finalized:
            raise ArchiveAssemblyError("Archive has already been finalized")
        clean = self._normalize_path(path)
        if clean in self._entries:
            raise ArchiveAssemblyError(f"Duplicate archive entry: {clean}")
        self._entries[clean] = bytes(data)

    @property
    def paths(self) -> list[str]:
        return list(self._entries)

    def finalize(self) -> bytes:
        if self._finalized:
            raise ArchiveAssemblyError("Archive has already been finalized")
        buf = BytesIO()
        try:
            with zipfile.ZipFile(buf, mode="w", compression=self.compression) as zf:
                for path, data in self._entries.items():
                    zf.writestr(path, data)
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise ArchiveAssemblyError(f"Could not finalize archive: {exc}") from exc
        self._finalized = True
        payload = buf.getvalue()
        logger.debug("[ARCHIVE] Finalized zip with %d entries (%d bytes)", len(self._entries), len(payload))
        self._entries.clear()
        return payload
