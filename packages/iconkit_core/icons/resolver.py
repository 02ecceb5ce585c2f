"""Resolve platform selections into an ordered, de-duplicated spec list."""

from __future__ import annotations

from logging import getLogger
from typing import Mapping, Optional

from .catalog import IOS_MARKETING_SPEC, PLATFORMS, SPECS_BY_PLATFORM, IconSpec

logger = getLogger("iconkit_core.icons.resolver")


def normalize_platforms(platforms: Optional[Mapping[str, bool]]) -> dict[str, bool]:
    """Return a flag for every known platform; unknown keys are rejected."""
    raw = dict(platforms or {})
    unknown = sorted(set(raw) - set(PLATFORMS))
    if unknown:
        raise ValueError(f"Unknown platform(s): {', '.join(unknown)}")
    return {name: bool(raw.get(name, False)) for name in PLATFORMS}


def dedupe_specs(specs: list[IconSpec]) -> list[IconSpec]:
    seen: set[tuple] = set()
    out: list[IconSpec] = []
    for spec in specs:
        if spec.identity in seen:
            continue
        seen.add(spec.identity)
        out.append(spec)
    return out


def resolve_specs(platforms: Optional[Mapping[str, bool]]) -> list[IconSpec]:
    flags = normalize_platforms(platforms)
    specs: list[IconSpec] = []

    for name in PLATFORMS:
        if flags[name]:
            specs.extend(SPECS_BY_PLATFORM[name])
        # Shared by phone and tablet; sits between the two tables.
        if name == "iphone" and (flags["iphone"] or flags["ipad"]):
            specs.append(IOS_MARKETING_SPEC)

    resolved = dedupe_specs(specs)
    logger.debug(
        "[RESOLVER] Resolved %d spec(s) for platforms=%s",
        len(resolved),
        [name for name in PLATFORMS if flags[name]],
    )
    return resolved


def platforms_from_names(names: str | list[str] | tuple[str, ...]) -> dict[str, bool]:
    """Build flags from ``"iphone,ipad"`` style input; ``"all"`` selects everything."""
    if isinstance(names, str):
        names = names.split(",")
    wanted = {n.strip().lower() for n in names if n and n.strip()}
    if "all" in wanted:
        return {name: True for name in PLATFORMS}
    return normalize_platforms({name: True for name in wanted})
