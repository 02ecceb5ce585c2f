"""App icon asset generation: spec tables, planning, image work and packaging."""

from .archive import build_archive
from .bundle import GenerationResult, generate_app_icons, generate_batch, generate_icon_bundle
from .catalog import APPEARANCES, PLATFORMS, IconSpec, platform_catalog
from .flatten import flatten_alpha, flatten_image_bytes
from .manifest import build_manifest
from .orchestrator import GenerateOptions, IconSetResult, generate_icon_set
from .plan import AssetSummaryEntry, plan_icon_set
from .resolver import resolve_specs
from .summary import build_asset_summary
from .validator import ImageValidation, validate_image

__all__ = [
    "build_archive",
    "GenerationResult",
    "generate_app_icons",
    "generate_batch",
    "generate_icon_bundle",
    "APPEARANCES",
    "PLATFORMS",
    "IconSpec",
    "platform_catalog",
    "flatten_alpha",
    "flatten_image_bytes",
    "build_manifest",
    "GenerateOptions",
    "IconSetResult",
    "generate_icon_set",
    "AssetSummaryEntry",
    "plan_icon_set",
    "resolve_specs",
    "build_asset_summary",
    "ImageValidation",
    "validate_image",
]
