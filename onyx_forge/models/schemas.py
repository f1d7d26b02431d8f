"""Pydantic schemas for data validation."""

import uuid
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from .enums import AspectRatio, ErrorCategory, GenerationPhase, Quality, StylePreset
from ..utils.errors import ImageProcessingError
from ..utils.images import parse_data_url, to_data_url


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_description(value: str) -> str:
    """Reject empty or whitespace-only product descriptions."""
    if not value.strip():
        raise ValueError("DESCRIPTION CANNOT BE EMPTY")
    return value


class InlineImage(BaseModel):
    """Image bytes with their MIME type."""
    mime_type: str
    data: bytes

    class Config:
        frozen = True

    def to_data_url(self) -> str:
        return to_data_url(self.data, self.mime_type)


class LogoImage(InlineImage):
    """Brand logo uploaded alongside a generation request."""

    @classmethod
    def from_data_url(cls, value: str) -> "LogoImage":
        """Build a logo from a data URL or bare base64 string."""
        mime_type, data = parse_data_url(value)
        return cls(mime_type=mime_type, data=data)


class GenerationRequest(BaseModel):
    """Everything the user submitted for one generation cycle."""
    description: str
    product_url: str = ""
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    quality: Quality = Quality.STANDARD
    style: StylePreset = StylePreset.NONE
    transparent_background: bool = False
    variation_count: int = Field(default=1, ge=1, le=3)
    enhance_prompt: bool = False
    logo: Optional[LogoImage] = None

    class Config:
        frozen = True

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        return require_description(value)

    @field_validator("product_url")
    @classmethod
    def _valid_product_url(cls, value: str) -> str:
        if not value:
            return value

        if " " in value:
            raise ValueError("URL CANNOT CONTAIN SPACES")

        if not value.lower().startswith(("http://", "https://")):
            raise ValueError("URL MUST START WITH HTTP:// OR HTTPS://")

        try:
            parsed = urlparse(value)
            host = parsed.hostname
        except ValueError:
            host = None

        if not host:
            raise ValueError("INVALID URL FORMAT")

        return value

    @field_validator("logo", mode="before")
    @classmethod
    def _decode_logo(cls, value):
        if isinstance(value, str):
            if not value:
                return None
            try:
                return LogoImage.from_data_url(value)
            except ImageProcessingError as e:
                raise ValueError(str(e))
        return value


class BannerRequest(BaseModel):
    """Provider-agnostic payload for a single image generation call."""
    text: str
    attachment: Optional[InlineImage] = None
    aspect_ratio: AspectRatio

    class Config:
        frozen = True


class GeneratedImage(BaseModel):
    """One banner in the result feed."""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    url: str
    aspect_ratio: AspectRatio
    prompt: str
    created_at: datetime = Field(default_factory=_utcnow)

    class Config:
        frozen = True


class ProgressState(BaseModel):
    """Snapshot of the simulated progress bar."""
    fraction: float = Field(default=0.0, ge=0.0, le=100.0)
    label: str
    phase: GenerationPhase = GenerationPhase.IDLE


class ErrorReport(BaseModel):
    """Actionable description of a failed generation cycle."""
    category: ErrorCategory
    title: str
    steps: List[str]


class GenerationResult(BaseModel):
    """Outcome of one generation cycle."""
    images: List[GeneratedImage] = Field(default_factory=list)
    error: Optional[ErrorReport] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None
