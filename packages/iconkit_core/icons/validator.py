"""Source image checks: square aspect, minimum size, transparency."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import Any

from PIL import Image

from ..config import DEFAULT_ALPHA_SAMPLE_SIZE
from ..imaging.codec import has_alpha_band
from .catalog import MIN_SOURCE_DIMENSION

logger = getLogger("iconkit_core.icons.validator")


@dataclass(frozen=True)
class ImageValidation:
    width: int
    height: int
    is_square: bool
    is_min_size: bool
    has_alpha: bool
    warnings: list[str] = field(default_factory=list)

    def as_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "is_square": self.is_square,
            "is_min_size": self.is_min_size,
            "has_alpha": self.has_alpha,
            "warnings": list(self.warnings),
        }


def _alpha_band(image: Image.Image) -> Image.Image:
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    return rgba.getchannel("A")


def _alpha_sample(alpha: Image.Image, sample_size: int) -> Image.Image:
    shorter = min(alpha.width, alpha.height)
    if shorter <= sample_size:
        return alpha
    ratio = sample_size / shorter
    size = (max(1, round(alpha.width * ratio)), max(1, round(alpha.height * ratio)))
    return alpha.resize(size, resample=Image.Resampling.BOX)


def detect_alpha(image: Image.Image, *, sample_size: int = DEFAULT_ALPHA_SAMPLE_SIZE) -> bool:
    """True when any pixel is not fully opaque.

    The downscaled sample answers quickly for visible transparency. Box
    averaging can round a lone transparent pixel back up to 255, so an
    opaque-looking sample is confirmed against the full alpha band.
    """
    if not has_alpha_band(image):
        return False
    alpha = _alpha_band(image)
    sample = _alpha_sample(alpha, sample_size)
    low, _ = sample.getextrema()
    if low < 255 or sample is alpha:
        return low < 255
    low, _ = alpha.getextrema()
    return low < 255


def validate_image(image: Image.Image, *, sample_size: int = DEFAULT_ALPHA_SAMPLE_SIZE) -> ImageValidation:
    width, height = image.size
    warnings: list[str] = []

    is_square = width == height
    if not is_square:
        warnings.append(f"Image is not square ({width}x{height}); icons will be stretched to a square.")

    is_min_size = min(width, height) >= MIN_SOURCE_DIMENSION
    if not is_min_size:
        warnings.append(
            f"Image is {width}x{height}; at least {MIN_SOURCE_DIMENSION}x{MIN_SOURCE_DIMENSION} "
            "is recommended to avoid upscaling."
        )

    try:
        has_alpha = detect_alpha(image, sample_size=sample_size)
    except (OSError, ValueError) as exc:
        logger.warning("[VALIDATOR] Alpha sampling failed, reporting opaque: %s", exc)
        has_alpha = False
    if has_alpha:
        warnings.append("Image contains transparency; App Store icons must be fully opaque.")

    logger.debug("[VALIDATOR] %dx%d square=%s min_size=%s alpha=%s", width, height, is_square, is_min_size, has_alpha)
    return ImageValidation(
        width=width,
        height=height,
        is_square=is_square,
        is_min_size=is_min_size,
        has_alpha=has_alpha,
        warnings=warnings,
    )
