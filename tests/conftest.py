"""Pytest configuration and shared fixtures."""

import base64
from io import BytesIO
from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest
from PIL import Image

from onyx_forge.core import (
    BannerOrchestrator,
    ImageGenerator,
    ProgressSimulator,
    PromptEnhancer,
    VariationPlanner,
)
from onyx_forge.models import InlineImage


def make_png(color: str = "red", size: Tuple[int, int] = (4, 4)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


def image_parts(image_bytes: bytes, mime_type: str = "image/png") -> List[Dict[str, Any]]:
    """Content parts as the image model returns them: a caption plus the image."""
    return [
        {"text": "Here is your banner."},
        {"inlineData": {"mimeType": mime_type, "data": base64.b64encode(image_bytes).decode()}},
    ]


ImageHandler = Callable[[str, str, Optional[InlineImage]], Tuple[List[Dict[str, Any]], Optional[str]]]


class FakeGeminiClient:
    """In-memory stand-in for GeminiClient recording every call."""

    def __init__(self):
        self.text_response: Any = "An enhanced prompt"
        self.json_response: Any = "[]"
        self.image_handler: Optional[ImageHandler] = None
        self.default_image = make_png()

        self.text_calls: List[str] = []
        self.json_calls: List[Tuple[str, Dict[str, Any]]] = []
        self.image_calls: List[Dict[str, Any]] = []

    async def generate_text(self, prompt: str) -> str:
        self.text_calls.append(prompt)
        if isinstance(self.text_response, Exception):
            raise self.text_response
        return self.text_response

    async def generate_json(self, prompt: str, schema: Dict[str, Any]) -> str:
        self.json_calls.append((prompt, schema))
        if isinstance(self.json_response, Exception):
            raise self.json_response
        return self.json_response

    async def generate_image(self, text: str, aspect_ratio: str, attachment=None):
        self.image_calls.append({"text": text, "aspect_ratio": aspect_ratio, "attachment": attachment})
        if self.image_handler is not None:
            return self.image_handler(text, aspect_ratio, attachment)
        return image_parts(self.default_image), "STOP"


@pytest.fixture
def fake_client():
    """Fake provider client."""
    return FakeGeminiClient()


@pytest.fixture
def png_bytes():
    """A small valid PNG image."""
    return make_png("blue")


@pytest.fixture
def fast_progress():
    """Progress simulator with millisecond timings."""
    return ProgressSimulator(
        single_duration=0.05,
        multi_duration=0.1,
        tick_interval=0.01,
        grace_delay=0.01,
    )


@pytest.fixture
def orchestrator(fake_client, fast_progress):
    """Orchestrator wired to the fake client."""
    return BannerOrchestrator(
        enhancer=PromptEnhancer(fake_client),
        planner=VariationPlanner(fake_client),
        generator=ImageGenerator(fake_client),
        progress=fast_progress,
    )


# Sample test data
@pytest.fixture
def sample_description():
    """Sample product description for testing."""
    return "Futuristic noise-canceling headphones with neon lighting accents"


@pytest.fixture
def sample_url():
    """Sample product URL for testing."""
    return "https://example.com/headphones"
