"""Image generation: single requests and concurrent variant fan-out."""

import asyncio
from typing import List

from .prompt_builder import build_for_variant
from ..models.schemas import BannerRequest, GeneratedImage, GenerationRequest, InlineImage
from ..providers.gemini import GeminiClient
from ..utils.errors import NoImageDataError
from ..utils.images import DEFAULT_MIME_TYPE, base64_to_bytes
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ImageGenerator:
    """Generates banner images, one provider call per prompt variant."""

    def __init__(self, gemini_client: GeminiClient):
        """
        Initialize image generator.

        Args:
            gemini_client: Gemini API client
        """
        self.client = gemini_client

    async def execute(self, request: BannerRequest) -> InlineImage:
        """
        Issue one image generation call.

        Args:
            request: Fully built banner request

        Returns:
            The first inline image part of the response

        Raises:
            NoImageDataError: If the response carries no image part
            ProviderError: Provider or network failures, unmodified
        """
        parts, finish_reason = await self.client.generate_image(
            text=request.text,
            aspect_ratio=request.aspect_ratio.value,
            attachment=request.attachment,
        )

        for part in parts:
            if not isinstance(part, dict):
                continue

            inline = part.get("inlineData") or part.get("inline_data")
            if inline and inline.get("data"):
                mime_type = inline.get("mimeType") or inline.get("mime_type") or DEFAULT_MIME_TYPE
                return InlineImage(mime_type=mime_type, data=base64_to_bytes(inline["data"]))

        logger.error(
            "No image part in generation response",
            extra={"parts": len(parts), "finish_reason": finish_reason}
        )
        raise NoImageDataError(finish_reason)

    async def generate_all(
        self,
        variants: List[str],
        request: GenerationRequest,
    ) -> List[GeneratedImage]:
        """
        Generate one image per variant concurrently.

        All calls are awaited before anything is returned. If any of them
        failed the whole batch fails with the first failure (in variant
        order) and no image is returned.

        Args:
            variants: Prompt variants, one image each
            request: The submitted request supplying the shared settings

        Returns:
            GeneratedImage list in the same order as ``variants``
        """
        logger.info(
            f"Starting parallel generation for {len(variants)} variants",
            extra={
                "variants": len(variants),
                "aspect_ratio": request.aspect_ratio.value,
                "quality": request.quality.value,
                "style": request.style.value,
            }
        )

        tasks = [
            self.execute(build_for_variant(variant, request))
            for variant in variants
        ]

        results = await asyncio.gather(*tasks, return_exceptions=True)

        failures = [
            (i, result) for i, result in enumerate(results)
            if isinstance(result, BaseException)
        ]

        if failures:
            for i, error in failures:
                logger.error(
                    f"Generation failed for variant {i + 1}",
                    extra={"variant": i + 1, "error": str(error), "error_type": type(error).__name__}
                )

            logger.error(
                f"Batch failed: {len(failures)}/{len(variants)} generations failed",
                extra={"failed": len(failures), "total": len(variants)}
            )
            raise failures[0][1]

        images = [
            GeneratedImage(
                url=image.to_data_url(),
                aspect_ratio=request.aspect_ratio,
                prompt=variant,
            )
            for variant, image in zip(variants, results)
        ]

        logger.info(
            f"Parallel generation complete: {len(images)} images",
            extra={
                "image_ids": [img.id for img in images],
                "image_size_kb": [round(len(r.data) / 1024, 1) for r in results],
            }
        )

        return images
