#!/usr/bin/env python3
"""Generate an app icon archive (asset-catalog folder + web icons) from a master image."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.iconkit_core.errors import IconPipelineError
from packages.iconkit_core.icons.bundle import generate_icon_bundle
from packages.iconkit_core.icons.orchestrator import GenerateOptions
from packages.iconkit_core.icons.resolver import platforms_from_names


def _parse_variant(raw: str) -> tuple[str, Path]:
    name, sep, path = raw.partition("=")
    if not sep or not name.strip() or not path.strip():
        raise argparse.ArgumentTypeError(f"Expected NAME=PATH, got {raw!r}")
    return name.strip(), Path(path.strip())


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate app icons from a master image")
    parser.add_argument("source", type=Path, help="Master image (PNG/JPG, ideally 1024x1024)")
    parser.add_argument("--out", type=Path, required=True, help="Output .zip path")
    parser.add_argument(
        "--platforms",
        default="iphone,ipad,watch",
        help="Comma-separated: iphone,ipad,watch,mac,web or 'all' (default: iphone,ipad,watch)",
    )
    parser.add_argument("--single-size", action="store_true", help="Emit a single 1024px universal icon")
    parser.add_argument("--dark", type=Path, help="Dark appearance image")
    parser.add_argument("--tinted", type=Path, help="Tinted appearance image")
    parser.add_argument("--variant-name", help="Name the primary icon set (default: AppIcon)")
    parser.add_argument(
        "--variant",
        action="append",
        default=[],
        type=_parse_variant,
        metavar="NAME=PATH",
        help="Alternate icon set; may be repeated",
    )
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")
    args = parser.parse_args()

    appearances = {}
    if args.dark:
        appearances["dark"] = args.dark.read_bytes()
    if args.tinted:
        appearances["tinted"] = args.tinted.read_bytes()

    last_progress = {"value": -1}

    def on_progress(value: int) -> None:
        if args.json or value == last_progress["value"]:
            return
        last_progress["value"] = value
        print(f"\rProgress: {value:3d}%", end="", file=sys.stderr, flush=True)

    try:
        platforms = platforms_from_names(args.platforms)
        result = generate_icon_bundle(
            args.source.read_bytes(),
            platforms,
            GenerateOptions(
                single_size=args.single_size,
                appearances=appearances or None,
                variant_name=args.variant_name,
            ),
            variants=[(name, path.read_bytes()) for name, path in args.variant],
            on_progress=on_progress,
        )
    except (IconPipelineError, ValueError, OSError) as exc:
        if not args.json:
            print(file=sys.stderr)
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    args.out.parent.mkdir(parents=True, exist_ok=True)
    args.out.write_bytes(result.archive)

    if args.json:
        payload = {
            "ok": True,
            "out": str(args.out),
            "file_count": result.file_count,
            "entries": [entry.as_dict() for entry in result.summary],
        }
        print(json.dumps(payload, indent=2))
    else:
        print(file=sys.stderr)
        print(f"OK: wrote {result.file_count} image(s) to {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
