"""Package generated icon sets into a single archive."""

from __future__ import annotations

from logging import getLogger
from typing import Callable, Iterable, Optional

from ..errors import ArchiveAssemblyError
from ..imaging.archive_writer import ArchiveWriter, ZipArchiveWriter
from .orchestrator import IconSetResult

logger = getLogger("iconkit_core.icons.archive")

WriterFactory = Callable[[], ArchiveWriter]


def write_icon_set(writer: ArchiveWriter, result: IconSetResult, *, prefix: str = "") -> int:
    """Add one set: its icon folder with Contents.json, then its flat web folder."""
    count = 0
    for path, data in result.archive_entries(prefix):
        writer.add_file(path, data)
        count += 1
    return count


def build_archive(
    results: Iterable[tuple[str, IconSetResult]] | Iterable[IconSetResult],
    *,
    writer_factory: Optional[WriterFactory] = None,
) -> bytes:
    """Serialize icon sets into one archive.

    Items are either bare results or ``(prefix, result)`` pairs, where the
    prefix places the set's folders under a parent directory.
    """
    writer = (writer_factory or ZipArchiveWriter)()
    entries = 0
    try:
        for item in results:
            prefix, result = item if isinstance(item, tuple) else ("", item)
            entries += write_icon_set(writer, result, prefix=prefix)
        payload = writer.finalize()
    except ArchiveAssemblyError as exc:
        logger.error("[ARCHIVE] Archive assembly failed after %d entr(ies): %s", entries, exc)
        raise
    logger.info("[ARCHIVE] Built archive with %d entr(ies), %d bytes", entries, len(payload))
    return payload
