"""Prompt enhancement: rewrites a terse product description."""

from ..providers.gemini import GeminiClient
from ..utils.logger import get_logger

logger = get_logger(__name__)

ENHANCEMENT_INSTRUCTION = (
    "You are an expert prompt engineer for AI image generation. Rewrite the following "
    "product description into a highly detailed, vivid, and effective prompt for an image "
    "generator. Focus on lighting, texture, composition, and mood. Keep it under 60 words. "
    "Do not add conversational text, just return the prompt."
)


class PromptEnhancer:
    """Turns a short description into a richer image prompt."""

    def __init__(self, gemini_client: GeminiClient):
        """
        Initialize prompt enhancer.

        Args:
            gemini_client: Gemini API client
        """
        self.client = gemini_client

    async def enhance(self, description: str) -> str:
        """
        Enhance a product description.

        Never raises: any failure, including an empty answer, yields the
        original description.

        Args:
            description: User's product description

        Returns:
            Enhanced prompt, or the original description on failure
        """
        prompt = f'{ENHANCEMENT_INSTRUCTION}\n\nInput: "{description}"'

        try:
            enhanced = (await self.client.generate_text(prompt)).strip()
        except Exception as e:
            logger.warning(
                f"Prompt enhancement failed, keeping original: {e}",
                extra={"error": str(e), "error_type": type(e).__name__}
            )
            return description

        if not enhanced:
            logger.warning("Prompt enhancement returned no text, keeping original")
            return description

        logger.info(
            "Prompt enhanced",
            extra={
                "original_prompt": description[:200],
                "enhanced_prompt": enhanced[:500],
            }
        )

        return enhanced
