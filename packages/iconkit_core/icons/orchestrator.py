"""Drive the main and appearance images through the codec for one icon set."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from time import perf_counter
from typing import Any, Iterator, Mapping, Optional

from PIL import Image

from ..config import IconPipelineConfig, get_pipeline_config
from ..errors import EncodeFailureError, IconPipelineError
from ..imaging.codec import ImageCodec, PillowImageCodec
from .manifest import MANIFEST_FILENAME, build_manifest, manifest_bytes
from .plan import AssetSummaryEntry, IconSetPlan, PlannedOutput, plan_icon_set
from .progress import ProgressCallback, ProgressTracker

logger = getLogger("iconkit_core.icons.orchestrator")


@dataclass(frozen=True)
class GenerateOptions:
    single_size: bool = False
    appearances: Optional[Mapping[str, bytes]] = None
    variant_name: Optional[str] = None

    def appearance_sources(self) -> dict[str, bytes]:
        """Appearances that are actually backed by image data."""
        return {str(name).strip().lower(): data for name, data in (self.appearances or {}).items() if data}


@dataclass(frozen=True)
class GeneratedFile:
    filename: str
    data: bytes
    entry: AssetSummaryEntry


@dataclass
class IconSetResult:
    folder_name: str
    web_folder_name: str
    files: list[GeneratedFile] = field(default_factory=list)
    web_files: list[GeneratedFile] = field(default_factory=list)
    manifest: dict[str, Any] = field(default_factory=dict)

    @property
    def summary(self) -> list[AssetSummaryEntry]:
        return [f.entry for f in self.files] + [f.entry for f in self.web_files]

    @property
    def file_count(self) -> int:
        return len(self.files) + len(self.web_files)

    def archive_entries(self, prefix: str = "") -> Iterator[tuple[str, bytes]]:
        for generated in self.files:
            yield f"{prefix}{self.folder_name}/{generated.filename}", generated.data
        yield f"{prefix}{self.folder_name}/{MANIFEST_FILENAME}", manifest_bytes(self.manifest)
        for generated in self.web_files:
            yield f"{prefix}{self.web_folder_name}/{generated.filename}", generated.data


def plan_for_options(platforms: Optional[Mapping[str, bool]], options: GenerateOptions) -> IconSetPlan:
    return plan_icon_set(
        platforms,
        single_size=options.single_size,
        appearances=options.appearance_sources().keys(),
        variant_name=options.variant_name,
    )


def _last_use(plan: IconSetPlan) -> dict[Optional[str], int]:
    last: dict[Optional[str], int] = {}
    for index, output in enumerate(plan.outputs):
        last[output.appearance] = index
    return last


def _decode_sources(
    codec: ImageCodec,
    source: bytes,
    appearance_data: Mapping[str, bytes],
    plan: IconSetPlan,
) -> dict[Optional[str], Image.Image]:
    decoded: dict[Optional[str], Image.Image] = {}
    try:
        decoded[None] = codec.decode(source)
        for look in plan.appearances:
            decoded[look] = codec.decode(appearance_data[look])
    except IconPipelineError:
        for image in decoded.values():
            image.close()
        raise
    return decoded


def _render(codec: ImageCodec, image: Image.Image, output: PlannedOutput) -> GeneratedFile:
    dimension = output.dimension
    data = codec.render(image, dimension)
    if not data:
        raise EncodeFailureError(f"Encoder returned no data for {output.filename}")
    return GeneratedFile(filename=output.filename, data=data, entry=output.summary_entry())


def generate_icon_set(
    source: bytes,
    platforms: Optional[Mapping[str, bool]],
    options: Optional[GenerateOptions] = None,
    *,
    on_progress: Optional[ProgressCallback] = None,
    codec: Optional[ImageCodec] = None,
    config: Optional[IconPipelineConfig] = None,
    tracker: Optional[ProgressTracker] = None,
) -> IconSetResult:
    """Produce every image of one icon set, in plan order, one at a time.

    Outputs run native-main, then native per appearance, then web. Any decode,
    resize or encode failure aborts the whole set. When ``tracker`` is given the
    caller owns it (and its final 100); otherwise a private tracker reports to
    ``on_progress``.
    """
    options = options or GenerateOptions()
    cfg = config or get_pipeline_config()
    codec = codec or PillowImageCodec.from_config(cfg)
    plan = plan_for_options(platforms, options)

    owns_tracker = tracker is None
    if tracker is None:
        tracker = ProgressTracker(plan.total, on_progress)

    logger.info(
        "[ORCHESTRATOR] Generating '%s': mode=%s outputs=%d appearances=%s",
        plan.folder_name,
        "single-size" if plan.single_size else "multi-size",
        plan.total,
        list(plan.appearances),
    )
    started = perf_counter()

    result = IconSetResult(folder_name=plan.folder_name, web_folder_name=plan.web_folder_name)
    sources = _decode_sources(codec, source, options.appearance_sources(), plan)
    last_use = _last_use(plan)
    try:
        for index, output in enumerate(plan.outputs):
            image = sources[output.appearance]
            generated = _render(codec, image, output)
            if output.is_web:
                result.web_files.append(generated)
            else:
                result.files.append(generated)
            value = tracker.advance()
            logger.debug("[ORCHESTRATOR] %s (%dpx) done, progress=%d", output.filename, output.dimension, value)

            if last_use.get(output.appearance) == index:
                sources.pop(output.appearance).close()
    except IconPipelineError as exc:
        logger.error("[ORCHESTRATOR] Aborting '%s' after %d image(s): %s", plan.folder_name, result.file_count, exc)
        raise
    finally:
        for image in sources.values():
            image.close()

    result.manifest = build_manifest(plan.native, author=cfg.manifest_author)
    if owns_tracker:
        tracker.finish()

    logger.info(
        "[ORCHESTRATOR] Finished '%s': %d icon(s), %d web image(s) in %.2fs",
        plan.folder_name,
        len(result.files),
        len(result.web_files),
        perf_counter() - started,
    )
    return result
