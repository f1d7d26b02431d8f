"""Data models and schemas for Onyx Forge."""

from .schemas import (
    InlineImage,
    LogoImage,
    GenerationRequest,
    BannerRequest,
    GeneratedImage,
    ProgressState,
    ErrorReport,
    GenerationResult,
)
from .enums import (
    AspectRatio,
    Quality,
    StylePreset,
    ErrorCategory,
    GenerationPhase,
)

__all__ = [
    "InlineImage",
    "LogoImage",
    "GenerationRequest",
    "BannerRequest",
    "GeneratedImage",
    "ProgressState",
    "ErrorReport",
    "GenerationResult",
    "AspectRatio",
    "Quality",
    "StylePreset",
    "ErrorCategory",
    "GenerationPhase",
]
