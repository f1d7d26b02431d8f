"""Tests for single image execution and variant fan-out."""

import asyncio
import base64

import pytest

from onyx_forge.core.image_generator import ImageGenerator
from onyx_forge.core.prompt_builder import build_banner_request
from onyx_forge.models import (
    AspectRatio,
    GenerationRequest,
    LogoImage,
    Quality,
    StylePreset,
)
from onyx_forge.utils.errors import NoImageDataError, ProviderError
from tests.conftest import image_parts, make_png


def banner_request(**overrides):
    params = dict(
        prompt="A rugged hiking boot",
        product_url="",
        aspect_ratio=AspectRatio.SQUARE,
        quality=Quality.HIGH,
        style=StylePreset.NONE,
        transparent_background=False,
    )
    params.update(overrides)
    return build_banner_request(**params)


class TestExecute:
    """Single generation call."""

    @pytest.mark.asyncio
    async def test_returns_first_inline_image(self, fake_client):
        first, second = make_png("green"), make_png("black")
        fake_client.image_handler = lambda text, ratio, att: (
            image_parts(first, "image/jpeg") + image_parts(second), "STOP"
        )
        generator = ImageGenerator(fake_client)

        image = await generator.execute(banner_request())

        assert image.mime_type == "image/jpeg"
        assert image.data == first
        assert image.to_data_url() == "data:image/jpeg;base64," + base64.b64encode(first).decode()

    @pytest.mark.asyncio
    async def test_mime_type_defaults_to_png(self, fake_client, png_bytes):
        encoded = base64.b64encode(png_bytes).decode()
        fake_client.image_handler = lambda text, ratio, att: ([{"inlineData": {"data": encoded}}], None)
        generator = ImageGenerator(fake_client)

        image = await generator.execute(banner_request())

        assert image.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_passes_text_ratio_and_attachment(self, fake_client, png_bytes):
        generator = ImageGenerator(fake_client)
        logo = LogoImage(mime_type="image/png", data=png_bytes)

        await generator.execute(banner_request(logo=logo, aspect_ratio=AspectRatio.CLASSIC))

        call = fake_client.image_calls[0]
        assert call["aspect_ratio"] == "4:3"
        assert call["attachment"].data == png_bytes
        assert "A rugged hiking boot" in call["text"]

    @pytest.mark.asyncio
    async def test_text_only_response_raises_no_image_data(self, fake_client):
        fake_client.image_handler = lambda text, ratio, att: ([{"text": "I cannot draw that"}], "STOP")
        generator = ImageGenerator(fake_client)

        with pytest.raises(NoImageDataError) as exc_info:
            await generator.execute(banner_request())

        assert "no image data found" in str(exc_info.value).lower()
        assert exc_info.value.finish_reason == "STOP"

    @pytest.mark.asyncio
    async def test_empty_response_raises_no_image_data(self, fake_client):
        fake_client.image_handler = lambda text, ratio, att: ([], None)
        generator = ImageGenerator(fake_client)

        with pytest.raises(NoImageDataError):
            await generator.execute(banner_request())

    @pytest.mark.asyncio
    async def test_provider_error_propagates_unmodified(self, fake_client):
        error = ProviderError("gemini", "boom", 500, "INTERNAL")

        def handler(text, ratio, att):
            raise error

        fake_client.image_handler = handler
        generator = ImageGenerator(fake_client)

        with pytest.raises(ProviderError) as exc_info:
            await generator.execute(banner_request())

        assert exc_info.value is error


class TestGenerateAll:
    """Concurrent fan-out over prompt variants."""

    @pytest.mark.asyncio
    async def test_one_image_per_variant_in_order(self, fake_client):
        request = GenerationRequest(description="boots", aspect_ratio="3:4", variation_count=3)
        variants = ["macro boots", "lifestyle boots", "abstract boots"]
        generator = ImageGenerator(fake_client)

        images = await generator.generate_all(variants, request)

        assert [img.prompt for img in images] == variants
        assert len({img.id for img in images}) == 3
        assert all(img.aspect_ratio == AspectRatio.CLASSIC_PORTRAIT for img in images)
        assert all(img.url.startswith("data:image/png;base64,") for img in images)

    @pytest.mark.asyncio
    async def test_calls_run_concurrently(self, fake_client):
        """All requests are in flight before any of them completes."""
        in_flight = 0
        peak = 0
        release = asyncio.Event()
        png = make_png()

        async def slow_generate(text, aspect_ratio, attachment=None):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            if in_flight == 3:
                release.set()
            await release.wait()
            in_flight -= 1
            return image_parts(png), "STOP"

        fake_client.generate_image = slow_generate
        generator = ImageGenerator(fake_client)
        request = GenerationRequest(description="x", variation_count=3)

        images = await asyncio.wait_for(generator.generate_all(["a", "b", "c"], request), timeout=2)

        assert peak == 3
        assert len(images) == 3

    @pytest.mark.asyncio
    async def test_single_failure_fails_batch(self, fake_client):
        """No partial results when one variant fails."""
        png = make_png()

        def handler(text, ratio, att):
            if "lifestyle" in text:
                raise ProviderError("gemini", "overloaded", 503, "UNAVAILABLE")
            return image_parts(png), "STOP"

        fake_client.image_handler = handler
        generator = ImageGenerator(fake_client)
        request = GenerationRequest(description="x", variation_count=3)

        with pytest.raises(ProviderError):
            await generator.generate_all(["macro", "lifestyle", "abstract"], request)

        # every call was still issued and awaited
        assert len(fake_client.image_calls) == 3

    @pytest.mark.asyncio
    async def test_first_failure_in_variant_order_is_raised(self, fake_client):
        def handler(text, ratio, att):
            if "first" in text:
                return [], "STOP"
            raise ProviderError("gemini", "later failure", 500)

        fake_client.image_handler = handler
        generator = ImageGenerator(fake_client)
        request = GenerationRequest(description="x", variation_count=2)

        with pytest.raises(NoImageDataError):
            await generator.generate_all(["first", "second"], request)

    @pytest.mark.asyncio
    async def test_each_variant_gets_its_own_request(self, fake_client, png_bytes):
        request = GenerationRequest(
            description="x",
            variation_count=2,
            style="Luxe",
            logo=LogoImage(mime_type="image/png", data=png_bytes),
        )
        generator = ImageGenerator(fake_client)

        await generator.generate_all(["gold watch macro", "gold watch on wrist"], request)

        texts = [call["text"] for call in fake_client.image_calls]
        assert any('"gold watch macro"' in t for t in texts)
        assert any('"gold watch on wrist"' in t for t in texts)
        assert all("Aesthetic: Luxury" in t for t in texts)
        assert all(call["attachment"].data == png_bytes for call in fake_client.image_calls)
