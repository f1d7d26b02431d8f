"""Tests for prompt enhancement."""

import pytest

from onyx_forge.core.prompt_enhancer import PromptEnhancer
from onyx_forge.utils.errors import NetworkError


@pytest.mark.asyncio
async def test_returns_enhanced_prompt(fake_client, sample_description):
    fake_client.text_response = "  Glossy headphones under magenta rim light  "
    enhancer = PromptEnhancer(fake_client)

    result = await enhancer.enhance(sample_description)

    assert result == "Glossy headphones under magenta rim light"
    assert len(fake_client.text_calls) == 1
    assert sample_description in fake_client.text_calls[0]
    assert "under 60 words" in fake_client.text_calls[0]


@pytest.mark.asyncio
async def test_failure_keeps_original(fake_client, sample_description):
    """Provider failures never escape the enhancer."""
    fake_client.text_response = NetworkError("gemini", "connection reset")
    enhancer = PromptEnhancer(fake_client)

    assert await enhancer.enhance(sample_description) == sample_description


@pytest.mark.asyncio
@pytest.mark.parametrize("empty", ["", "   \n"])
async def test_empty_output_keeps_original(fake_client, sample_description, empty):
    fake_client.text_response = empty
    enhancer = PromptEnhancer(fake_client)

    assert await enhancer.enhance(sample_description) == sample_description
