#!/usr/bin/env python3
"""Remove transparency from an icon by compositing it onto a solid colour."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.iconkit_core.errors import IconPipelineError
from packages.iconkit_core.icons.flatten import DEFAULT_BACKGROUND, flatten_image_bytes


def main() -> int:
    parser = argparse.ArgumentParser(description="Flatten an icon's alpha channel onto a background color")
    parser.add_argument("source", type=Path, help="Input image")
    parser.add_argument("--out", type=Path, required=True, help="Output PNG path")
    parser.add_argument("--color", default=DEFAULT_BACKGROUND, help="Background color (default: #FFFFFF)")
    args = parser.parse_args()

    try:
        data = flatten_image_bytes(args.source.read_bytes(), args.color)
    except (IconPipelineError, OSError) as exc:
        print(f"ERR: {exc}", file=sys.stderr)
        return 1

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(data)
    print(f"OK: wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
