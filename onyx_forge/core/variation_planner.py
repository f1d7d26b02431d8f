"""A/B variation planning for a single base prompt."""

import json
from typing import List

from ..providers.gemini import GeminiClient, STRING_ARRAY_SCHEMA
from ..utils.logger import get_logger

logger = get_logger(__name__)


def build_variation_brief(base_prompt: str, count: int) -> str:
    """Creative brief asking for ``count`` distinct prompt variations."""
    return f"""You are a creative director generating A/B testing variations for an ad campaign.

Base Concept: "{base_prompt}"

Generate {count} distinct prompt variations based on this concept.
- Variation 1: Focus purely on Product Details (Macro/Close-up).
- Variation 2: Focus on Lifestyle/Context/Atmosphere.
- Variation 3 (if requested): Focus on Bold Minimalism or Abstract Composition.

Keep each prompt under 50 words. Return ONLY a valid JSON array of strings."""


def normalize_variations(raw: str, base_prompt: str, count: int) -> List[str]:
    """
    Decode a planner response into exactly ``count`` prompts.

    Anything unusable degrades to repeating ``base_prompt``; short lists are
    padded at the end, long lists keep their first ``count`` entries.
    """
    fallback = [base_prompt] * count

    if not raw or not raw.strip():
        return fallback

    try:
        decoded = json.loads(raw)
    except ValueError:
        logger.warning(
            "Variation response is not valid JSON",
            extra={"raw_content": raw[:500]}
        )
        return fallback

    if not isinstance(decoded, list):
        logger.warning(
            "Variation response is not a JSON array",
            extra={"type": type(decoded).__name__}
        )
        return fallback

    variations = [item.strip() for item in decoded if isinstance(item, str) and item.strip()]
    if not variations:
        return fallback

    if len(variations) < count:
        logger.info(
            f"Planner returned {len(variations)}/{count} variations, padding with base prompt"
        )
        variations.extend([base_prompt] * (count - len(variations)))

    return variations[:count]


class VariationPlanner:
    """Expands one base prompt into thematically distinct variants."""

    def __init__(self, gemini_client: GeminiClient):
        self.client = gemini_client

    async def plan(self, base_prompt: str, count: int) -> List[str]:
        """
        Plan ``count`` prompt variants.

        A single variant is the base prompt itself and costs no provider
        call. The planner never raises.
        """
        if count <= 1:
            return [base_prompt]

        try:
            raw = await self.client.generate_json(
                build_variation_brief(base_prompt, count),
                STRING_ARRAY_SCHEMA,
            )
        except Exception as e:
            logger.warning(
                f"Variation planning failed, repeating base prompt: {e}",
                extra={"error": str(e), "count": count}
            )
            return [base_prompt] * count

        variations = normalize_variations(raw, base_prompt, count)

        logger.info(
            f"Planned {count} variations",
            extra={"count": count, "variations": [v[:100] for v in variations]}
        )

        return variations
