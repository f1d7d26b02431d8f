"""Core business logic components."""

from .prompt_enhancer import PromptEnhancer
from .variation_planner import VariationPlanner
from .prompt_builder import build_banner_request
from .image_generator import ImageGenerator
from .progress import ProgressSimulator
from .error_classifier import classify
from .orchestrator import BannerOrchestrator

__all__ = [
    "PromptEnhancer",
    "VariationPlanner",
    "build_banner_request",
    "ImageGenerator",
    "ProgressSimulator",
    "classify",
    "BannerOrchestrator",
]
