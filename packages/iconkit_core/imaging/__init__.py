"""Pluggable raster and archive backends."""

from .archive_writer import ArchiveWriter, ZipArchiveWriter
from .codec import ImageCodec, PillowImageCodec

__all__ = [
    "ArchiveWriter",
    "ZipArchiveWriter",
    "ImageCodec",
    "PillowImageCodec",
]
