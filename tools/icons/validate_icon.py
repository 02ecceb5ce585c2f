#!/usr/bin/env python3
"""Check a master icon image for size, aspect ratio and transparency problems."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.iconkit_core.config import get_pipeline_config
from packages.iconkit_core.errors import UnreadableImageError
from packages.iconkit_core.icons.validator import validate_image
from packages.iconkit_core.imaging.codec import PillowImageCodec


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate a master icon image")
    parser.add_argument("source", type=Path, help="Path to the image")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")
    args = parser.parse_args()

    cfg = get_pipeline_config()
    codec = PillowImageCodec.from_config(cfg)
    try:
        image = codec.decode(args.source.read_bytes())
    except (UnreadableImageError, OSError) as exc:
        print(f"ERR: {exc}", file=sys.stderr)
        return 2
    try:
        validation = validate_image(image, sample_size=cfg.alpha_sample_size)
    finally:
        image.close()

    payload = {"ok": not validation.warnings, **validation.as_dict()}
    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        print("OK: image looks good" if payload["ok"] else "WARN: image has issues")
        print(f"Size: {validation.width}x{validation.height}")
        for warning in validation.warnings:
            print(f"WARN: {warning}")

    return 0 if payload["ok"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
