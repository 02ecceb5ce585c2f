"""End-to-end generation: icon sets, alternate icons and batches into one archive."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
import re
from pathlib import PurePath
from typing import Mapping, Optional, Sequence

from ..config import IconPipelineConfig, get_pipeline_config
from ..imaging.codec import ImageCodec, PillowImageCodec
from .archive import WriterFactory, build_archive
from .orchestrator import GenerateOptions, IconSetResult, generate_icon_set, plan_for_options
from .plan import AssetSummaryEntry, validate_variant_name
from .progress import ProgressCallback, ProgressTracker, batch_percent

logger = getLogger("iconkit_core.icons.bundle")

BATCH_FOLDER_SUFFIX = "-AppIcon"
_UNSAFE_STEM_RE = re.compile(r"[^A-Za-z0-9 _.-]+")


@dataclass(frozen=True)
class GenerationResult:
    archive: bytes
    icon_sets: tuple[IconSetResult, ...]

    @property
    def summary(self) -> list[AssetSummaryEntry]:
        return [entry for icon_set in self.icon_sets for entry in icon_set.summary]

    @property
    def file_count(self) -> int:
        return sum(icon_set.file_count for icon_set in self.icon_sets)


def _normalize_variants(
    variants: Mapping[str, bytes] | Sequence[tuple[str, bytes]] | None,
    primary_name: Optional[str],
) -> list[tuple[str, bytes]]:
    items = list(variants.items()) if isinstance(variants, Mapping) else list(variants or ())
    seen = {(primary_name or "AppIcon").lower()}
    out: list[tuple[str, bytes]] = []
    for raw_name, data in items:
        name = validate_variant_name(raw_name)
        if name is None:
            raise ValueError("Alternate icon variants need a name")
        if name.lower() in seen:
            raise ValueError(f"Duplicate icon set name: {name}")
        seen.add(name.lower())
        out.append((name, data))
    return out


def generate_app_icons(
    source: bytes,
    platforms: Optional[Mapping[str, bool]],
    options: Optional[GenerateOptions] = None,
    *,
    on_progress: Optional[ProgressCallback] = None,
    codec: Optional[ImageCodec] = None,
    config: Optional[IconPipelineConfig] = None,
    writer_factory: Optional[WriterFactory] = None,
) -> GenerationResult:
    return generate_icon_bundle(
        source,
        platforms,
        options,
        on_progress=on_progress,
        codec=codec,
        config=config,
        writer_factory=writer_factory,
    )


def generate_icon_bundle(
    source: bytes,
    platforms: Optional[Mapping[str, bool]],
    options: Optional[GenerateOptions] = None,
    *,
    variants: Mapping[str, bytes] | Sequence[tuple[str, bytes]] | None = None,
    on_progress: Optional[ProgressCallback] = None,
    codec: Optional[ImageCodec] = None,
    config: Optional[IconPipelineConfig] = None,
    writer_factory: Optional[WriterFactory] = None,
) -> GenerationResult:
    """Primary icon set plus named alternate sets, with one progress stream.

    Alternate sets reuse the primary's options and appearance images; only
    the folder name differs.
    """
    options = options or GenerateOptions()
    cfg = config or get_pipeline_config()
    codec = codec or PillowImageCodec.from_config(cfg)

    primary_name = validate_variant_name(options.variant_name)
    jobs: list[tuple[bytes, GenerateOptions]] = [(source, options)]
    for name, data in _normalize_variants(variants, primary_name):
        jobs.append((data, replace(options, variant_name=name)))

    total = sum(plan_for_options(platforms, job_options).total for _, job_options in jobs)
    tracker = ProgressTracker(total, on_progress)
    logger.info("[BUNDLE] Generating %d icon set(s), %d image(s) planned", len(jobs), total)

    results = [
        generate_icon_set(data, platforms, job_options, codec=codec, config=cfg, tracker=tracker)
        for data, job_options in jobs
    ]
    archive = build_archive(results, writer_factory=writer_factory)
    tracker.finish()
    return GenerationResult(archive=archive, icon_sets=tuple(results))


def batch_folder_name(filename: str, taken: set[str]) -> str:
    stem = _UNSAFE_STEM_RE.sub("-", PurePath(filename.replace("\\", "/")).stem).strip(" .-") or "icon"
    base = f"{stem}{BATCH_FOLDER_SUFFIX}"
    candidate = base
    counter = 2
    while candidate.lower() in taken:
        candidate = f"{base}-{counter}"
        counter += 1
    taken.add(candidate.lower())
    return candidate


def generate_batch(
    images: Sequence[tuple[str, bytes]],
    platforms: Optional[Mapping[str, bool]],
    *,
    single_size: bool = False,
    on_progress: Optional[ProgressCallback] = None,
    codec: Optional[ImageCodec] = None,
    config: Optional[IconPipelineConfig] = None,
    writer_factory: Optional[WriterFactory] = None,
) -> GenerationResult:
    """One icon set per master image, each under ``{stem}-AppIcon/``."""
    if not images:
        raise ValueError("Batch generation needs at least one image")

    cfg = config or get_pipeline_config()
    codec = codec or PillowImageCodec.from_config(cfg)
    overall = ProgressTracker(len(images), on_progress)
    options = GenerateOptions(single_size=single_size)
    taken: set[str] = set()
    count = len(images)

    logger.info("[BUNDLE] Batch generating %d image(s), single_size=%s", count, single_size)
    prefixed: list[tuple[str, IconSetResult]] = []
    for index, (filename, data) in enumerate(images):
        folder = batch_folder_name(filename, taken)
        result = generate_icon_set(
            data,
            platforms,
            options,
            on_progress=lambda p, i=index: overall.report(batch_percent(i, count, p)),
            codec=codec,
            config=cfg,
        )
        prefixed.append((f"{folder}/", result))

    archive = build_archive(prefixed, writer_factory=writer_factory)
    overall.finish()
    return GenerationResult(archive=archive, icon_sets=tuple(result for _, result in prefixed))
