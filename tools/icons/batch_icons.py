#!/usr/bin/env python3
"""Generate one icon set per master image into a single archive."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.iconkit_core.errors import IconPipelineError
from packages.iconkit_core.icons.bundle import generate_batch
from packages.iconkit_core.icons.resolver import platforms_from_names


def main() -> int:
    parser = argparse.ArgumentParser(description="Batch-generate app icons")
    parser.add_argument("sources", type=Path, nargs="+", help="Master images")
    parser.add_argument("--out", type=Path, required=True, help="Output .zip path")
    parser.add_argument("--platforms", default="iphone,ipad,watch", help="Comma-separated platforms or 'all'")
    parser.add_argument("--single-size", action="store_true", help="Single 1024px universal icon mode")
    args = parser.parse_args()

    try:
        result = generate_batch(
            [(path.name, path.read_bytes()) for path in args.sources],
            platforms_from_names(args.platforms),
            single_size=args.single_size,
        )
    except (IconPipelineError, ValueError, OSError) as exc:
        print(f"ERR: {exc}", file=sys.stderr)
        return 1

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(result.archive)
    print(f"OK: wrote {len(result.icon_sets)} icon set(s), {result.file_count} image(s) to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
