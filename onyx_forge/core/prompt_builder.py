"""Composite prompt assembly for a single banner request.

Everything here is a pure function of its inputs: no provider calls and no
shared state, so every variant of a cycle gets its own independent request
built from the same user settings.
"""

from typing import Optional

from ..models.enums import AspectRatio, Quality, StylePreset
from ..models.schemas import BannerRequest, GenerationRequest, InlineImage

QUALITY_CLAUSES = {
    Quality.STANDARD: (
        "The image should be photorealistic, with perfect lighting and composition "
        "suitable for a digital marketing campaign."
    ),
    Quality.HIGH: (
        "The image should be highly detailed with sharp focus, professional color "
        "grading, and studio lighting."
    ),
    Quality.ULTRA: (
        "The image should be an ultra-realistic 8k masterpiece, with intricate textures, "
        "cinematic lighting, hyper-realistic composition, and zero artifacts."
    ),
}

STYLE_CLAUSES = {
    StylePreset.NONE: "",
    StylePreset.CYBERPUNK: (
        "Aesthetic: Cyberpunk, neon lights, high contrast, futuristic, dark atmosphere "
        "with vibrant accents."
    ),
    StylePreset.MINIMALIST: (
        "Aesthetic: Minimalist, clean lines, plenty of negative space, soft lighting, "
        "pastel or monochrome palette."
    ),
    StylePreset.LUXE: (
        "Aesthetic: Luxury, elegant, gold and marble textures, sophisticated lighting, "
        "high-end editorial look."
    ),
    StylePreset.RETRO: (
        "Aesthetic: Retro 80s/90s, grain, vintage color processing, synthwave vibe, "
        "nostalgic."
    ),
    StylePreset.INDUSTRIAL: (
        "Aesthetic: Industrial, raw concrete, steel, dramatic shadows, brutalist "
        "architecture, cold lighting."
    ),
}

TRANSPARENT_CLAUSE = (
    "The image must be generated with a transparent background, isolating the subject "
    "completely."
)

LOGO_CLAUSE = (
    "Incorporate the provided brand logo into the design naturally and professionally. "
    "Ensure the logo is visible but does not overpower the main product."
)


def build_prompt_text(
    prompt: str,
    product_url: str = "",
    quality: Quality = Quality.STANDARD,
    style: StylePreset = StylePreset.NONE,
    transparent_background: bool = False,
    has_logo: bool = False,
) -> str:
    """Assemble the text block sent to the image model."""
    sentences = [
        "Generate a professional advertising banner image for the following product "
        f'description: "{prompt}".',
        QUALITY_CLAUSES[Quality(quality)],
    ]

    style_clause = STYLE_CLAUSES[StylePreset(style)]
    if style_clause:
        sentences.append(style_clause)

    if transparent_background:
        sentences.append(TRANSPARENT_CLAUSE)

    text = " ".join(sentences)

    if product_url:
        text += f"\n\nThe product is associated with this URL: {product_url}."

    if has_logo:
        text += f"\n\n{LOGO_CLAUSE}"

    return text


def build_banner_request(
    prompt: str,
    product_url: str,
    aspect_ratio: AspectRatio,
    quality: Quality,
    style: StylePreset,
    transparent_background: bool,
    logo: Optional[InlineImage] = None,
) -> BannerRequest:
    """
    Combine one prompt variant with the user's settings.

    Returns:
        BannerRequest with the text block, the logo as attachment (if any)
        and the aspect-ratio directive
    """
    attachment = None
    if logo is not None:
        attachment = InlineImage(mime_type=logo.mime_type, data=logo.data)

    text = build_prompt_text(
        prompt,
        product_url=product_url,
        quality=quality,
        style=style,
        transparent_background=transparent_background,
        has_logo=attachment is not None,
    )

    return BannerRequest(
        text=text,
        attachment=attachment,
        aspect_ratio=AspectRatio(aspect_ratio),
    )


def build_for_variant(variant: str, request: GenerationRequest) -> BannerRequest:
    """Build the request for one variant of a submitted GenerationRequest."""
    return build_banner_request(
        variant,
        product_url=request.product_url,
        aspect_ratio=request.aspect_ratio,
        quality=request.quality,
        style=request.style,
        transparent_background=request.transparent_background,
        logo=request.logo,
    )
