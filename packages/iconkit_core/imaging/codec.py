"""Raster decode/resize/encode capability with a Pillow backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from io import BytesIO
from logging import getLogger
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from ..config import IconPipelineConfig, get_pipeline_config
from ..errors import EncodeFailureError, UnreadableImageError

logger = getLogger("iconkit_core.imaging.codec")

RESAMPLE_BY_NAME: dict[str, Image.Resampling] = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "hamming": Image.Resampling.HAMMING,
    "box": Image.Resampling.BOX,
}


def has_alpha_band(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "La", "RGBa", "PA") or "transparency" in image.info


class ImageCodec(ABC):
    @abstractmethod
    def decode(self, data: bytes) -> Image.Image:
        raise NotImplementedError

    @abstractmethod
    def resize(self, image: Image.Image, dimension: int) -> Image.Image:
        raise NotImplementedError

    @abstractmethod
    def encode(self, image: Image.Image) -> bytes:
        raise NotImplementedError

    def render(self, image: Image.Image, dimension: int) -> bytes:
        """Resize to a square of ``dimension`` pixels and encode it."""
        resized = self.resize(image, dimension)
        try:
            return self.encode(resized)
        finally:
            if resized is not image:
                resized.close()


class PillowImageCodec(ImageCodec):
    def __init__(self, *, resample: str = "lanczos", optimize: bool = False) -> None:
        if resample not in RESAMPLE_BY_NAME:
            raise ValueError(f"Unsupported resample filter: {resample}")
        self.resample_name = resample
        self.resample = RESAMPLE_BY_NAME[resample]
        self.optimize = optimize

    @classmethod
    def from_config(cls, config: Optional[IconPipelineConfig] = None) -> "PillowImageCodec":
        cfg = config or get_pipeline_config()
        return cls(resample=cfg.resample, optimize=cfg.png_optimize)

    def decode(self, data: bytes) -> Image.Image:
        if not data:
            raise UnreadableImageError("Image data is empty")
        try:
            with Image.open(BytesIO(data)) as opened:
                opened.load()
                image = ImageOps.exif_transpose(opened)
                if image is opened:
                    image = opened.copy()
        except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as exc:
            raise UnreadableImageError(f"Could not decode image: {exc}") from exc

        if image.mode not in ("RGB", "RGBA"):
            target = "RGBA" if has_alpha_band(image) else "RGB"
            converted = image.convert(target)
            image.close()
            image = converted
        logger.debug("[CODEC] Decoded %dx%d %s image", image.width, image.height, image.mode)
        return image

    def resize(self, image: Image.Image, dimension: int) -> Image.Image:
        if dimension <= 0:
            raise EncodeFailureError(f"Invalid target dimension: {dimension}")
        try:
            return image.resize((dimension, dimension), resample=self.resample)
        except (OSError, ValueError) as exc:
            raise EncodeFailureError(f"Resize to {dimension}px failed: {exc}") from exc

    def encode(self, image: Image.Image) -> bytes:
        buf = BytesIO()
        try:
            image.save(buf, format="PNG", optimize=self.optimize)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeFailureError(f"PNG encode failed: {exc}") from exc
        return buf.getvalue()
