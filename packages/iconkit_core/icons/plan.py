"""Planned output set for one icon set.

Both the orchestrator and the summary builder walk the same plan, so the
filenames a preview reports are the filenames a run writes.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Iterable, Mapping, Optional

from .catalog import APPEARANCES, SINGLE_SIZE_DIMENSION, IconSpec, family_label
from .naming import output_filename
from .resolver import normalize_platforms, resolve_specs

DEFAULT_ICONSET_NAME = "AppIcon"
DEFAULT_WEB_FOLDER = "web"
VALID_VARIANT_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9 _.-]{0,63}$")

SINGLE_SIZE_SPEC = IconSpec(SINGLE_SIZE_DIMENSION, 1, "universal")


@dataclass(frozen=True)
class AssetSummaryEntry:
    filename: str
    width: int
    height: int
    platform_label: str
    family: str
    appearance: Optional[str] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "width": self.width,
            "height": self.height,
            "platform": self.platform_label,
            "family": self.family,
            "appearance": self.appearance,
        }


@dataclass(frozen=True)
class PlannedOutput:
    spec: IconSpec
    filename: str
    appearance: Optional[str] = None

    @property
    def dimension(self) -> int:
        return self.spec.dimension

    @property
    def is_web(self) -> bool:
        return self.spec.is_web

    def summary_entry(self) -> AssetSummaryEntry:
        return AssetSummaryEntry(
            filename=self.filename,
            width=self.dimension,
            height=self.dimension,
            platform_label=family_label(self.spec.family),
            family=self.spec.family,
            appearance=self.appearance,
        )


@dataclass(frozen=True)
class IconSetPlan:
    single_size: bool
    appearances: tuple[str, ...]
    folder_name: str
    web_folder_name: str
    native: tuple[PlannedOutput, ...]
    web: tuple[PlannedOutput, ...]

    @property
    def outputs(self) -> tuple[PlannedOutput, ...]:
        return self.native + self.web

    @property
    def total(self) -> int:
        return len(self.native) + len(self.web)


def normalize_appearances(appearances: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Known appearances in canonical order (dark before tinted)."""
    requested = {str(name).strip().lower() for name in (appearances or ()) if str(name).strip()}
    unknown = sorted(requested - set(APPEARANCES))
    if unknown:
        raise ValueError(f"Unknown appearance(s): {', '.join(unknown)}")
    return tuple(name for name in APPEARANCES if name in requested)


def validate_variant_name(variant_name: Optional[str]) -> Optional[str]:
    if variant_name is None:
        return None
    name = variant_name.strip()
    if not name:
        return None
    if not VALID_VARIANT_NAME_RE.match(name):
        raise ValueError(f"Invalid variant name: {variant_name!r}")
    return name


def folder_names(variant_name: Optional[str]) -> tuple[str, str]:
    name = validate_variant_name(variant_name)
    if name is None:
        return f"{DEFAULT_ICONSET_NAME}.appiconset", DEFAULT_WEB_FOLDER
    return f"{name}.appiconset", f"{name}-{DEFAULT_WEB_FOLDER}"


def plan_icon_set(
    platforms: Optional[Mapping[str, bool]],
    *,
    single_size: bool = False,
    appearances: Optional[Iterable[str]] = None,
    variant_name: Optional[str] = None,
) -> IconSetPlan:
    flags = normalize_platforms(platforms)
    looks = normalize_appearances(appearances)
    folder_name, web_folder_name = folder_names(variant_name)

    if single_size:
        native = [PlannedOutput(SINGLE_SIZE_SPEC, output_filename(SINGLE_SIZE_SPEC))]
        native.extend(
            PlannedOutput(SINGLE_SIZE_SPEC, output_filename(SINGLE_SIZE_SPEC, look), look) for look in looks
        )
        return IconSetPlan(
            single_size=True,
            appearances=looks,
            folder_name=folder_name,
            web_folder_name=web_folder_name,
            native=tuple(native),
            web=(),
        )

    specs = resolve_specs(flags)
    native_specs = [spec for spec in specs if not spec.is_web]
    web_specs = [spec for spec in specs if spec.is_web]

    native = [PlannedOutput(spec, output_filename(spec)) for spec in native_specs]
    for look in looks:
        native.extend(PlannedOutput(spec, output_filename(spec, look), look) for spec in native_specs)
    web = [PlannedOutput(spec, output_filename(spec)) for spec in web_specs]

    return IconSetPlan(
        single_size=False,
        appearances=looks,
        folder_name=folder_name,
        web_folder_name=web_folder_name,
        native=tuple(native),
        web=tuple(web),
    )
