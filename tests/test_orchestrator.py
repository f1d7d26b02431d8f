"""Integration tests for the generation cycle."""

import asyncio
import json

import pytest

from onyx_forge.models import ErrorCategory, GenerationPhase, GenerationRequest
from onyx_forge.utils.errors import GenerationInProgressError, ProviderError
from tests.conftest import image_parts, make_png

VARIANTS = [
    "Macro shot of knife edge",
    "Chef slicing peppers in a warm kitchen",
    "Abstract steel blade on black",
]


def request(**overrides):
    params = dict(description="Damascus steel chef knife", aspect_ratio="16:9")
    params.update(overrides)
    return GenerationRequest(**params)


@pytest.mark.asyncio
async def test_three_variants_end_to_end(orchestrator, fake_client):
    """Three successful calls add three images, each paired with its variant."""
    fake_client.json_response = json.dumps(VARIANTS)

    result = await orchestrator.generate(request(variation_count=3))

    assert result.succeeded
    assert result.error is None
    assert [img.prompt for img in result.images] == VARIANTS
    assert len(orchestrator.feed) == 3
    assert len({img.id for img in orchestrator.feed}) == 3


@pytest.mark.asyncio
async def test_feed_is_newest_first(orchestrator, fake_client):
    first = await orchestrator.generate(request(description="first product"))
    fake_client.json_response = json.dumps(["b1", "b2"])
    second = await orchestrator.generate(request(description="second product", variation_count=2))

    feed = orchestrator.feed
    assert [img.id for img in feed] == [img.id for img in second.images + first.images]
    assert feed[-1].prompt == "first product"


@pytest.mark.asyncio
async def test_single_variant_skips_planner(orchestrator, fake_client):
    result = await orchestrator.generate(request(variation_count=1))

    assert fake_client.json_calls == []
    assert [img.prompt for img in result.images] == ["Damascus steel chef knife"]


@pytest.mark.asyncio
async def test_partial_failure_leaves_feed_untouched(orchestrator, fake_client):
    """One failing variant discards the whole batch."""
    await orchestrator.generate(request())
    feed_before = orchestrator.feed

    png = make_png()

    def handler(text, ratio, att):
        if "warm kitchen" in text:
            raise ProviderError("gemini", "Resource has been exhausted", 429, "RESOURCE_EXHAUSTED")
        return image_parts(png), "STOP"

    fake_client.image_handler = handler
    fake_client.json_response = json.dumps(VARIANTS)

    result = await orchestrator.generate(request(variation_count=3))

    assert not result.succeeded
    assert result.images == []
    assert result.error.category == ErrorCategory.RATE_LIMIT
    assert orchestrator.feed == feed_before
    assert orchestrator.error_report == result.error


@pytest.mark.asyncio
async def test_no_output_is_classified(orchestrator, fake_client):
    fake_client.image_handler = lambda text, ratio, att: ([{"text": "no"}], "STOP")

    result = await orchestrator.generate(request())

    assert result.error.title == "GENERATION PRODUCED NO OUTPUT"


@pytest.mark.asyncio
async def test_error_report_cleared_by_next_cycle(orchestrator, fake_client):
    fake_client.image_handler = lambda text, ratio, att: ([], None)
    await orchestrator.generate(request())
    assert orchestrator.error_report is not None

    fake_client.image_handler = None
    await orchestrator.generate(request())

    assert orchestrator.error_report is None


@pytest.mark.asyncio
async def test_enhancement_feeds_planner(orchestrator, fake_client):
    fake_client.text_response = "Enhanced knife prompt"
    fake_client.json_response = json.dumps(["v1", "v2"])

    await orchestrator.generate(request(variation_count=2, enhance_prompt=True))

    assert len(fake_client.text_calls) == 1
    assert "Enhanced knife prompt" in fake_client.json_calls[0][0]


@pytest.mark.asyncio
async def test_enhancement_off_by_default(orchestrator, fake_client):
    await orchestrator.generate(request())
    assert fake_client.text_calls == []


@pytest.mark.asyncio
async def test_progress_on_success(orchestrator, fake_client):
    """Non-decreasing, capped at 95 until completion, 100 at the end, then reset."""
    history = []
    orchestrator.progress.subscribe(history.append)
    fake_client.json_response = json.dumps(VARIANTS)

    await orchestrator.generate(request(variation_count=3))

    fractions = [s.fraction for s in history]
    completed_at = fractions.index(100.0)

    assert fractions[0] == 0.0
    assert fractions[:completed_at] == sorted(fractions[:completed_at])
    assert max(fractions[:completed_at]) <= 95.0
    assert history[-1].fraction == 0.0
    assert history[-1].phase == GenerationPhase.IDLE
    assert orchestrator.progress_state.fraction == 0.0

    phases = [s.phase for s in history]
    assert phases.index(GenerationPhase.PLANNING) < phases.index(GenerationPhase.RENDERING)


@pytest.mark.asyncio
async def test_progress_on_failure(orchestrator, fake_client):
    history = []
    orchestrator.progress.subscribe(history.append)
    fake_client.image_handler = lambda text, ratio, att: ([], None)

    await orchestrator.generate(request())

    assert 100.0 not in [s.fraction for s in history]
    assert history[-1].fraction == 0.0
    assert not orchestrator.is_generating


@pytest.mark.asyncio
async def test_concurrent_cycle_rejected(orchestrator, fake_client):
    release = asyncio.Event()
    started = asyncio.Event()
    png = make_png()

    async def blocked_generate(text, aspect_ratio, attachment=None):
        started.set()
        await release.wait()
        return image_parts(png), "STOP"

    fake_client.generate_image = blocked_generate

    first = asyncio.create_task(orchestrator.generate(request()))
    await started.wait()

    assert orchestrator.is_generating
    with pytest.raises(GenerationInProgressError):
        await orchestrator.generate(request())

    release.set()
    result = await first

    assert result.succeeded
    assert len(orchestrator.feed) == 1
    assert not orchestrator.is_generating


@pytest.mark.asyncio
async def test_standalone_enhance(orchestrator, fake_client):
    fake_client.text_response = "Richer"
    assert await orchestrator.enhance("plain") == "Richer"


@pytest.mark.asyncio
async def test_get_image(orchestrator):
    result = await orchestrator.generate(request())
    image = result.images[0]

    assert orchestrator.get_image(image.id) == image
    assert orchestrator.get_image("missing") is None
