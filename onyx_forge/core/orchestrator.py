"""Main orchestrator coordinating one banner generation cycle."""

import time
from typing import List, Optional

from .error_classifier import classify
from .image_generator import ImageGenerator
from .progress import ProgressSimulator
from .prompt_enhancer import PromptEnhancer
from .variation_planner import VariationPlanner
from ..models.enums import GenerationPhase
from ..models.schemas import (
    ErrorReport,
    GeneratedImage,
    GenerationRequest,
    GenerationResult,
    ProgressState,
)
from ..utils.errors import GenerationInProgressError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class BannerOrchestrator:
    """Runs generation cycles and owns the result feed and error report."""

    def __init__(
        self,
        enhancer: PromptEnhancer,
        planner: VariationPlanner,
        generator: ImageGenerator,
        progress: ProgressSimulator,
    ):
        """
        Initialize orchestrator.

        Args:
            enhancer: PromptEnhancer instance
            planner: VariationPlanner instance
            generator: ImageGenerator instance
            progress: ProgressSimulator driving the progress signal
        """
        self.enhancer = enhancer
        self.planner = planner
        self.generator = generator
        self.progress = progress

        self._feed: List[GeneratedImage] = []
        self._error_report: Optional[ErrorReport] = None
        self._active = False

    @property
    def feed(self) -> List[GeneratedImage]:
        """Generated images, newest first."""
        return list(self._feed)

    @property
    def error_report(self) -> Optional[ErrorReport]:
        """Report of the last failed cycle, cleared when a new cycle starts."""
        return self._error_report

    @property
    def progress_state(self) -> ProgressState:
        return self.progress.state

    @property
    def is_generating(self) -> bool:
        return self._active

    def get_image(self, image_id: str) -> Optional[GeneratedImage]:
        return next((img for img in self._feed if img.id == image_id), None)

    async def enhance(self, description: str) -> str:
        """Standalone prompt enhancement (never fails)."""
        return await self.enhancer.enhance(description)

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """
        Run one generation cycle.

        Any failure inside the cycle is classified into an ErrorReport and
        returned rather than raised; the feed only changes on success.

        Args:
            request: Submitted generation request

        Returns:
            GenerationResult with the new images or the error report

        Raises:
            GenerationInProgressError: If another cycle is still running
        """
        if self._active:
            raise GenerationInProgressError("A generation cycle is already in progress")

        self._active = True
        self._error_report = None
        start_time = time.time()

        logger.info(
            "Generation cycle started",
            extra={
                "variation_count": request.variation_count,
                "aspect_ratio": request.aspect_ratio.value,
                "quality": request.quality.value,
                "style": request.style.value,
                "transparent_background": request.transparent_background,
                "has_logo": request.logo is not None,
                "has_url": bool(request.product_url),
            }
        )

        try:
            async with self.progress.running(request.variation_count):
                prompt = request.description

                if request.enhance_prompt:
                    self.progress.set_phase(GenerationPhase.ENHANCING)
                    prompt = await self.enhancer.enhance(prompt)

                variants = [prompt]
                if request.variation_count > 1:
                    self.progress.set_phase(GenerationPhase.PLANNING)
                    variants = await self.planner.plan(prompt, request.variation_count)

                self.progress.set_phase(GenerationPhase.RENDERING)
                images = await self.generator.generate_all(variants, request)

                self._feed[:0] = images
                await self.progress.complete()

            logger.info(
                f"Generation cycle succeeded with {len(images)} images",
                extra={
                    "images": len(images),
                    "feed_size": len(self._feed),
                    "processing_time_seconds": round(time.time() - start_time, 2),
                }
            )

            return GenerationResult(images=images)

        except Exception as e:
            report = classify(e)
            self._error_report = report

            logger.error(
                f"Generation cycle failed: {report.title}",
                extra={
                    "category": report.category.value,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "processing_time_seconds": round(time.time() - start_time, 2),
                }
            )

            return GenerationResult(error=report)

        finally:
            self.progress.reset()
            self._active = False
