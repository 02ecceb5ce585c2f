"""Output size tables for each target platform family."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


PLATFORMS = ("iphone", "ipad", "watch", "mac", "web")
NATIVE_PLATFORMS = ("iphone", "ipad", "watch", "mac")
APPEARANCES = ("dark", "tinted")

SINGLE_SIZE_DIMENSION = 1024
MIN_SOURCE_DIMENSION = 1024

PLATFORM_LABELS: dict[str, str] = {
    "iphone": "iPhone",
    "ipad": "iPad",
    "watch": "watchOS",
    "mac": "macOS",
    "web": "Web / Favicon",
}

# Keyed by family tag (manifest idiom), not by platform flag.
FAMILY_LABELS: dict[str, str] = {
    "iphone": "iPhone",
    "ipad": "iPad",
    "ios-marketing": "App Store",
    "watch": "watchOS",
    "watch-marketing": "watchOS App Store",
    "mac": "macOS",
    "universal": "Universal",
    "web": "Web / Favicon",
}


@dataclass(frozen=True)
class IconSpec:
    size: float
    scale: int
    family: str
    min_os: Optional[str] = None
    subtype: Optional[str] = None
    role: Optional[str] = None

    @property
    def identity(self) -> tuple[Any, ...]:
        return (self.size, self.scale, self.family, self.subtype, self.role)

    @property
    def dimension(self) -> int:
        pixels = self.size * self.scale
        if pixels != int(pixels):
            raise ValueError(f"Spec {self.size}@{self.scale}x does not map to whole pixels")
        return int(pixels)

    @property
    def is_web(self) -> bool:
        return self.family == "web"

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "size": self.size,
            "scale": self.scale,
            "family": self.family,
            "dimension": self.dimension,
        }
        for key in ("min_os", "subtype", "role"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


IPHONE_SPECS: tuple[IconSpec, ...] = (
    IconSpec(20, 2, "iphone"),
    IconSpec(20, 3, "iphone"),
    IconSpec(29, 2, "iphone"),
    IconSpec(29, 3, "iphone"),
    IconSpec(40, 2, "iphone"),
    IconSpec(40, 3, "iphone"),
    IconSpec(60, 2, "iphone"),
    IconSpec(60, 3, "iphone"),
)

IPAD_SPECS: tuple[IconSpec, ...] = (
    IconSpec(20, 1, "ipad"),
    IconSpec(20, 2, "ipad"),
    IconSpec(29, 1, "ipad"),
    IconSpec(29, 2, "ipad"),
    IconSpec(40, 1, "ipad"),
    IconSpec(40, 2, "ipad"),
    IconSpec(76, 1, "ipad"),
    IconSpec(76, 2, "ipad"),
    IconSpec(83.5, 2, "ipad"),
)

IOS_MARKETING_SPEC = IconSpec(1024, 1, "ios-marketing")

WATCH_SPECS: tuple[IconSpec, ...] = (
    IconSpec(24, 2, "watch", subtype="38mm", role="notificationCenter"),
    IconSpec(27.5, 2, "watch", subtype="42mm", role="notificationCenter"),
    IconSpec(29, 2, "watch", role="companionSettings"),
    IconSpec(29, 3, "watch", role="companionSettings"),
    IconSpec(40, 2, "watch", subtype="38mm", role="appLauncher"),
    IconSpec(44, 2, "watch", subtype="40mm", role="appLauncher"),
    IconSpec(46, 2, "watch", subtype="41mm", role="appLauncher"),
    IconSpec(50, 2, "watch", subtype="44mm", role="appLauncher"),
    IconSpec(51, 2, "watch", subtype="45mm", role="appLauncher"),
    IconSpec(86, 2, "watch", subtype="38mm", role="quickLook"),
    IconSpec(98, 2, "watch", subtype="42mm", role="quickLook"),
    IconSpec(108, 2, "watch", subtype="44mm", role="quickLook"),
    IconSpec(1024, 1, "watch-marketing"),
)

MAC_SPECS: tuple[IconSpec, ...] = (
    IconSpec(16, 1, "mac"),
    IconSpec(16, 2, "mac"),
    IconSpec(32, 1, "mac"),
    IconSpec(32, 2, "mac"),
    IconSpec(128, 1, "mac"),
    IconSpec(128, 2, "mac"),
    IconSpec(256, 1, "mac"),
    IconSpec(256, 2, "mac"),
    IconSpec(512, 1, "mac"),
    IconSpec(512, 2, "mac"),
)

WEB_SPECS: tuple[IconSpec, ...] = (
    IconSpec(16, 1, "web"),
    IconSpec(32, 1, "web"),
    IconSpec(48, 1, "web"),
    IconSpec(180, 1, "web"),
    IconSpec(192, 1, "web"),
    IconSpec(512, 1, "web"),
)

SPECS_BY_PLATFORM: dict[str, tuple[IconSpec, ...]] = {
    "iphone": IPHONE_SPECS,
    "ipad": IPAD_SPECS,
    "watch": WATCH_SPECS,
    "mac": MAC_SPECS,
    "web": WEB_SPECS,
}


def family_label(family: str) -> str:
    return FAMILY_LABELS.get(family, family)


def platform_catalog() -> list[dict[str, Any]]:
    """Describe every platform table, marketing spec included, for clients."""
    out: list[dict[str, Any]] = []
    for platform in PLATFORMS:
        specs = list(SPECS_BY_PLATFORM[platform])
        if platform in ("iphone", "ipad"):
            specs.append(IOS_MARKETING_SPEC)
        out.append(
            {
                "id": platform,
                "label": PLATFORM_LABELS[platform],
                "native": platform in NATIVE_PLATFORMS,
                "specs": [spec.as_dict() for spec in specs],
            }
        )
    return out
