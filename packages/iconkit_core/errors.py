"""Error kinds raised by the icon generation pipeline."""

from __future__ import annotations


class IconPipelineError(RuntimeError):
    error_code = "icon_pipeline_error"

    def __init__(self, message: str, *, error_code: str | None = None) -> None:
        super().__init__(message)
        if error_code:
            self.error_code = error_code


class UnreadableImageError(IconPipelineError):
    error_code = "unreadable_image"


class EncodeFailureError(IconPipelineError):
    error_code = "encode_failure"


class InvalidBackgroundColorError(IconPipelineError):
    error_code = "invalid_background_color"


class ArchiveAssemblyError(IconPipelineError):
    error_code = "archive_assembly_failure"
