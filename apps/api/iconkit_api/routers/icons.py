"""Icon validation, preview and generation endpoints."""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Optional

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel, Field

from packages.iconkit_core.config import get_pipeline_config
from packages.iconkit_core.icons.bundle import GenerationResult, generate_batch, generate_icon_bundle
from packages.iconkit_core.icons.catalog import APPEARANCES, PLATFORM_LABELS, platform_catalog
from packages.iconkit_core.icons.flatten import DEFAULT_BACKGROUND, flatten_image_bytes
from packages.iconkit_core.icons.orchestrator import GenerateOptions
from packages.iconkit_core.icons.summary import build_asset_summary
from packages.iconkit_core.icons.validator import validate_image
from packages.iconkit_core.imaging.codec import PillowImageCodec

from ..middleware.rate_limit import SlidingWindowLimiter

logger = logging.getLogger("iconkit_api.icons")

router = APIRouter(prefix="/api/v1/icons", tags=["icons"])

_generate_limiter = SlidingWindowLimiter(
    max_requests=get_pipeline_config().generate_rate_limit,
    window_seconds=3600,
)


class ImagePayload(BaseModel):
    image_base64: str = Field(min_length=1, description="Base64 image bytes, optionally as a data URL")


class FlattenRequest(ImagePayload):
    background_color: str = Field(default=DEFAULT_BACKGROUND, max_length=64)


class SummaryRequest(BaseModel):
    platforms: dict[str, bool] = Field(default_factory=dict)
    single_size: bool = False
    appearances: list[str] = Field(default_factory=list)
    variant_name: Optional[str] = Field(default=None, max_length=64)


class VariantPayload(ImagePayload):
    name: str = Field(min_length=1, max_length=64)


class GenerateRequest(ImagePayload):
    platforms: dict[str, bool] = Field(default_factory=dict)
    single_size: bool = False
    appearances: dict[str, str] = Field(default_factory=dict, description="Appearance name -> base64 image")
    variant_name: Optional[str] = Field(default=None, max_length=64)
    variants: list[VariantPayload] = Field(default_factory=list, max_length=16)


class BatchImagePayload(ImagePayload):
    filename: str = Field(min_length=1, max_length=255)


class BatchGenerateRequest(BaseModel):
    images: list[BatchImagePayload] = Field(min_length=1, max_length=50)
    platforms: dict[str, bool] = Field(default_factory=dict)
    single_size: bool = False


def _decode_base64_image(raw: str, *, field_name: str = "image_base64") -> bytes:
    value = raw.strip()
    if value.startswith("data:"):
        _, _, value = value.partition(",")
    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"{field_name} is not valid base64") from exc
    if not data:
        raise HTTPException(status_code=400, detail=f"{field_name} is empty")

    limit = get_pipeline_config().max_image_bytes
    if len(data) > limit:
        raise HTTPException(status_code=413, detail=f"{field_name} exceeds {limit} bytes")
    return data


def _enforce_generate_limit(request: Request) -> None:
    client_ip = request.client.host if request.client else "unknown"
    if not _generate_limiter.check(client_ip):
        retry_after = _generate_limiter.retry_after(client_ip)
        logger.warning("[API] Generate rate limit hit for %s", client_ip)
        raise HTTPException(
            status_code=429,
            detail="Too many generation requests. Try again later.",
            headers={"Retry-After": str(retry_after)},
        )


def _zip_response(result: GenerationResult, filename: str) -> Response:
    return Response(
        content=result.archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "X-Icon-Count": str(result.file_count),
        },
    )


@router.get("/platforms")
def list_platforms() -> dict[str, Any]:
    return {
        "platforms": platform_catalog(),
        "appearances": list(APPEARANCES),
        "labels": dict(PLATFORM_LABELS),
    }


@router.post("/validate")
def validate_icon_endpoint(req: ImagePayload) -> dict[str, Any]:
    data = _decode_base64_image(req.image_base64)
    codec = PillowImageCodec.from_config()
    image = codec.decode(data)
    try:
        validation = validate_image(image, sample_size=get_pipeline_config().alpha_sample_size)
    finally:
        image.close()
    logger.info("[API] Validated %dx%d image, %d warning(s)", validation.width, validation.height, len(validation.warnings))
    return {"ok": not validation.warnings, **validation.as_dict()}


@router.post("/flatten")
def flatten_icon_endpoint(req: FlattenRequest) -> dict[str, Any]:
    data = _decode_base64_image(req.image_base64)
    codec = PillowImageCodec.from_config()
    flattened = flatten_image_bytes(data, req.background_color, codec=codec)
    image = codec.decode(flattened)
    try:
        width, height = image.size
    finally:
        image.close()
    return {
        "image_base64": base64.b64encode(flattened).decode("ascii"),
        "width": width,
        "height": height,
        "background_color": req.background_color,
    }


@router.post("/summary")
def summary_endpoint(req: SummaryRequest) -> dict[str, Any]:
    try:
        entries = build_asset_summary(
            req.platforms,
            single_size=req.single_size,
            appearances=req.appearances,
            variant_name=req.variant_name,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"count": len(entries), "entries": [entry.as_dict() for entry in entries]}


@router.post("/generate")
def generate_endpoint(req: GenerateRequest, request: Request) -> Response:
    _enforce_generate_limit(request)

    source = _decode_base64_image(req.image_base64)
    appearances = {
        name: _decode_base64_image(value, field_name=f"appearances.{name}")
        for name, value in req.appearances.items()
        if value
    }
    variants = [
        (variant.name, _decode_base64_image(variant.image_base64, field_name=f"variants.{variant.name}"))
        for variant in req.variants
    ]
    options = GenerateOptions(
        single_size=req.single_size,
        appearances=appearances or None,
        variant_name=req.variant_name,
    )

    logger.info(
        "[API] Generate requested: platforms=%s single_size=%s appearances=%s variants=%d",
        sorted(k for k, v in req.platforms.items() if v),
        req.single_size,
        sorted(appearances),
        len(variants),
    )
    try:
        result = generate_icon_bundle(
            source,
            req.platforms,
            options,
            variants=variants,
            on_progress=lambda p: logger.debug("[API] Generate progress %d%%", p),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    folder = result.icon_sets[0].folder_name
    return _zip_response(result, f"{folder}.zip")


@router.post("/generate-batch")
def generate_batch_endpoint(req: BatchGenerateRequest, request: Request) -> Response:
    _enforce_generate_limit(request)

    images = [
        (item.filename, _decode_base64_image(item.image_base64, field_name=f"images.{item.filename}"))
        for item in req.images
    ]
    logger.info("[API] Batch generate requested: %d image(s), single_size=%s", len(images), req.single_size)
    try:
        result = generate_batch(
            images,
            req.platforms,
            single_size=req.single_size,
            on_progress=lambda p: logger.debug("[API] Batch progress %d%%", p),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _zip_response(result, "AppIcons-Batch.zip")


def reset_rate_limiter_for_tests() -> None:
    _generate_limiter.reset()
