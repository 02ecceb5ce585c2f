"""Asset-catalog manifest (Contents.json) assembly."""

from __future__ import annotations

import json
from typing import Any, Iterable

from .naming import format_points
from .plan import PlannedOutput

MANIFEST_FILENAME = "Contents.json"


def manifest_entry(output: PlannedOutput) -> dict[str, Any]:
    spec = output.spec
    points = format_points(spec.size)
    entry: dict[str, Any] = {
        "size": f"{points}x{points}",
        "idiom": spec.family,
        "filename": output.filename,
        "scale": f"{spec.scale}x",
    }
    if spec.role:
        entry["role"] = spec.role
    if spec.subtype:
        entry["subtype"] = spec.subtype
    if output.appearance:
        entry["appearances"] = [{"appearance": "luminosity", "value": output.appearance}]
    return entry


def build_manifest(outputs: Iterable[PlannedOutput], *, author: str = "xcode") -> dict[str, Any]:
    images = [manifest_entry(output) for output in outputs if not output.is_web]
    return {
        "images": images,
        "info": {
            "version": 1,
            "author": author,
        },
    }


def manifest_bytes(manifest: dict[str, Any]) -> bytes:
    return json.dumps(manifest, indent=2).encode("utf-8")
