#!/usr/bin/env python3
"""List the files a generation run would produce, without touching any image."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from packages.iconkit_core.icons.resolver import platforms_from_names
from packages.iconkit_core.icons.summary import build_asset_summary


def main() -> int:
    parser = argparse.ArgumentParser(description="Preview planned icon outputs")
    parser.add_argument("--platforms", default="iphone,ipad,watch", help="Comma-separated platforms or 'all'")
    parser.add_argument("--single-size", action="store_true", help="Single 1024px universal icon mode")
    parser.add_argument(
        "--appearance",
        action="append",
        default=[],
        choices=["dark", "tinted"],
        help="Include an appearance variant; may be repeated",
    )
    parser.add_argument("--variant-name", help="Icon set name (default: AppIcon)")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON output")
    args = parser.parse_args()

    try:
        entries = build_asset_summary(
            platforms_from_names(args.platforms),
            single_size=args.single_size,
            appearances=args.appearance,
            variant_name=args.variant_name,
        )
    except ValueError as exc:
        print(f"ERR: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"count": len(entries), "entries": [e.as_dict() for e in entries]}, indent=2))
        return 0

    for entry in entries:
        look = entry.appearance or "-"
        print(f"{entry.filename:<36} {entry.width:>4}x{entry.height:<4} {entry.platform_label:<18} {look}")
    print(f"{len(entries)} files total")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
