"""Composite an image onto an opaque background colour."""

from __future__ import annotations

from logging import getLogger
from typing import Optional

from PIL import Image, ImageColor

from ..errors import EncodeFailureError, InvalidBackgroundColorError
from ..imaging.codec import ImageCodec, PillowImageCodec

logger = getLogger("iconkit_core.icons.flatten")

DEFAULT_BACKGROUND = "#FFFFFF"


def parse_color(color: str) -> tuple[int, int, int]:
    try:
        rgb = ImageColor.getrgb(str(color).strip())
    except (ValueError, AttributeError) as exc:
        raise InvalidBackgroundColorError(f"Cannot parse background color: {color!r}") from exc
    return rgb[0], rgb[1], rgb[2]


def flatten_alpha(image: Image.Image, color: str = DEFAULT_BACKGROUND) -> Image.Image:
    """Return a new opaque RGB image; ``image`` itself is left untouched."""
    r, g, b = parse_color(color)
    try:
        background = Image.new("RGBA", image.size, (r, g, b, 255))
        overlay = image.convert("RGBA")
        background.alpha_composite(overlay)
        flattened = background.convert("RGB")
    except (OSError, ValueError) as exc:
        raise EncodeFailureError(f"Alpha composite failed: {exc}") from exc
    logger.debug("[FLATTEN] Flattened %dx%d image onto %s", image.width, image.height, color)
    return flattened


def flatten_image_bytes(data: bytes, color: str = DEFAULT_BACKGROUND, *, codec: Optional[ImageCodec] = None) -> bytes:
    codec = codec or PillowImageCodec.from_config()
    parse_color(color)
    source = codec.decode(data)
    try:
        flattened = flatten_alpha(source, color)
    finally:
        source.close()
    try:
        return codec.encode(flattened)
    finally:
        flattened.close()
