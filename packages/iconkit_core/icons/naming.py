"""Deterministic output filenames."""

from __future__ import annotations

from typing import Optional

from .catalog import IconSpec

# Well-known web sizes keep the names browsers and manifests look for.
WEB_FILENAMES: dict[int, str] = {
    180: "apple-touch-icon.png",
    192: "android-chrome-192x192.png",
    512: "android-chrome-512x512.png",
}

FAMILY_SUFFIXES: dict[str, str] = {
    "ipad": "~ipad",
    "watch": "~watch",
    "watch-marketing": "~watch",
}


def format_points(size: float) -> str:
    return f"{size:g}"


def native_filename(spec: IconSpec, appearance: Optional[str] = None) -> str:
    parts = [f"Icon-{format_points(spec.size)}"]
    if spec.scale > 1:
        parts.append(f"@{spec.scale}x")
    parts.append(FAMILY_SUFFIXES.get(spec.family, ""))
    if spec.subtype:
        parts.append(f"-{spec.subtype}")
    if appearance:
        parts.append(f"-{appearance}")
    return "".join(parts) + ".png"


def web_filename(spec: IconSpec) -> str:
    dimension = spec.dimension
    return WEB_FILENAMES.get(dimension, f"favicon-{dimension}.png")


def output_filename(spec: IconSpec, appearance: Optional[str] = None) -> str:
    if spec.is_web:
        if appearance:
            raise ValueError("Web icons do not carry appearance variants")
        return web_filename(spec)
    return native_filename(spec, appearance)
