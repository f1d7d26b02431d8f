"""Generation endpoints: options, enhancement, cycles, progress and feed."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, field_validator

from ..core.orchestrator import BannerOrchestrator
from ..models.catalog import option_tables
from ..models.schemas import (
    ErrorReport,
    GeneratedImage,
    GenerationRequest,
    GenerationResult,
    ProgressState,
    require_description,
)
from ..utils.errors import GenerationInProgressError
from ..utils.images import extension_for, parse_data_url
from ..utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


class EnhanceRequest(BaseModel):
    """Body of POST /enhance."""
    description: str

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        return require_description(value)


class EnhanceResponse(BaseModel):
    original: str
    enhanced: str


def get_orchestrator(request: Request) -> BannerOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail="Service is not initialized")
    return orchestrator


@router.get("/options")
async def list_options():
    """Aspect ratios, quality tiers, style presets and sample prompts."""
    return option_tables()


@router.post("/enhance", response_model=EnhanceResponse)
async def enhance_prompt(
    body: EnhanceRequest,
    orchestrator: BannerOrchestrator = Depends(get_orchestrator),
):
    enhanced = await orchestrator.enhance(body.description)
    return EnhanceResponse(original=body.description, enhanced=enhanced)


@router.post("/generate", response_model=GenerationResult)
async def generate_banners(
    body: GenerationRequest,
    orchestrator: BannerOrchestrator = Depends(get_orchestrator),
):
    """
    Run one generation cycle.

    Classified failures are returned in ``error`` with status 200; only a
    concurrent cycle (409) and invalid input (422) are HTTP errors.
    """
    try:
        return await orchestrator.generate(body)
    except GenerationInProgressError as e:
        logger.warning("Rejected generation request: cycle already running")
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/progress", response_model=ProgressState)
async def get_progress(orchestrator: BannerOrchestrator = Depends(get_orchestrator)):
    return orchestrator.progress_state


@router.get("/feed", response_model=List[GeneratedImage])
async def get_feed(orchestrator: BannerOrchestrator = Depends(get_orchestrator)):
    """Result feed, newest first."""
    return orchestrator.feed


@router.get("/error", response_model=Optional[ErrorReport])
async def get_error(orchestrator: BannerOrchestrator = Depends(get_orchestrator)):
    return orchestrator.error_report


@router.get("/feed/{image_id}/download")
async def download_image(
    image_id: str,
    orchestrator: BannerOrchestrator = Depends(get_orchestrator),
):
    """Export one generated banner as an image file."""
    image = orchestrator.get_image(image_id)
    if image is None:
        raise HTTPException(status_code=404, detail=f"Image {image_id} not found")

    mime_type, data = parse_data_url(image.url)
    filename = f"onyx-forge-{image.id}.{extension_for(mime_type)}"

    return Response(
        content=data,
        media_type=mime_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
