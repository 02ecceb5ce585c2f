"""Environment-driven settings for the icon pipeline."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger("iconkit_core.config")

RESAMPLE_FILTERS = ("lanczos", "bicubic", "bilinear", "hamming", "box")
DEFAULT_RESAMPLE = "lanczos"
DEFAULT_ALPHA_SAMPLE_SIZE = 256
DEFAULT_MANIFEST_AUTHOR = "xcode"
DEFAULT_MAX_IMAGE_BYTES = 25 * 1024 * 1024
DEFAULT_GENERATE_RATE_LIMIT = 60


def _truthy_env(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _first_non_empty(*values: str | None) -> str | None:
    for value in values:
        if value and value.strip():
            return value.strip()
    return None


def _int_env(name: str, default: int, *, minimum: int = 1) -> int:
    raw = _first_non_empty(os.environ.get(name))
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("[CONFIG] Ignoring non-integer %s=%r, using %d", name, raw, default)
        return default
    return max(minimum, value)


@dataclass(frozen=True)
class IconPipelineConfig:
    resample: str = DEFAULT_RESAMPLE
    alpha_sample_size: int = DEFAULT_ALPHA_SAMPLE_SIZE
    manifest_author: str = DEFAULT_MANIFEST_AUTHOR
    png_optimize: bool = False
    max_image_bytes: int = DEFAULT_MAX_IMAGE_BYTES
    generate_rate_limit: int = DEFAULT_GENERATE_RATE_LIMIT


def get_pipeline_config() -> IconPipelineConfig:
    resample = (_first_non_empty(os.environ.get("ICONKIT_RESAMPLE")) or DEFAULT_RESAMPLE).lower()
    if resample not in RESAMPLE_FILTERS:
        logger.warning("[CONFIG] Unknown ICONKIT_RESAMPLE=%r, falling back to %s", resample, DEFAULT_RESAMPLE)
        resample = DEFAULT_RESAMPLE

    return IconPipelineConfig(
        resample=resample,
        alpha_sample_size=_int_env("ICONKIT_ALPHA_SAMPLE_SIZE", DEFAULT_ALPHA_SAMPLE_SIZE),
        manifest_author=_first_non_empty(os.environ.get("ICONKIT_MANIFEST_AUTHOR")) or DEFAULT_MANIFEST_AUTHOR,
        png_optimize=_truthy_env("ICONKIT_PNG_OPTIMIZE", default=False),
        max_image_bytes=_int_env("ICONKIT_MAX_IMAGE_BYTES", DEFAULT_MAX_IMAGE_BYTES),
        generate_rate_limit=_int_env("ICONKIT_GENERATE_RATE_LIMIT", DEFAULT_GENERATE_RATE_LIMIT),
    )
