"""Static option tables and sample prompts offered to clients."""

from typing import Dict, List

from .enums import AspectRatio, Quality, StylePreset

ASPECT_RATIO_OPTIONS: List[Dict[str, str]] = [
    {"value": AspectRatio.SQUARE.value, "label": "Square (1:1)"},
    {"value": AspectRatio.LANDSCAPE.value, "label": "Landscape (16:9)"},
    {"value": AspectRatio.PORTRAIT.value, "label": "Portrait (9:16)"},
    {"value": AspectRatio.CLASSIC.value, "label": "Classic TV (4:3)"},
    {"value": AspectRatio.CLASSIC_PORTRAIT.value, "label": "Classic Portrait (3:4)"},
]

QUALITY_OPTIONS: List[Dict[str, str]] = [
    {"value": quality.value, "label": quality.value} for quality in Quality
]

STYLE_OPTIONS: List[Dict[str, str]] = [
    {"value": StylePreset.NONE.value, "label": "Raw"},
    {"value": StylePreset.CYBERPUNK.value, "label": "Cyberpunk"},
    {"value": StylePreset.MINIMALIST.value, "label": "Minimal"},
    {"value": StylePreset.LUXE.value, "label": "Luxe"},
    {"value": StylePreset.RETRO.value, "label": "Retro"},
    {"value": StylePreset.INDUSTRIAL.value, "label": "Industrial"},
]

SAMPLE_PROMPTS: List[Dict[str, str]] = [
    {
        "description": "A sleek, carbon-fiber racing bicycle on a mountain pass at sunset",
        "url": "https://example.com/bike",
    },
    {
        "description": "Organic artisan coffee beans spilling out of a burlap sack, rustic vibe",
        "url": "https://example.com/coffee",
    },
    {
        "description": "Futuristic noise-canceling headphones with neon lighting accents",
        "url": "https://example.com/headphones",
    },
    {
        "description": (
            "A luxurious anti-aging serum bottle with gold accents on a marble vanity, "
            "soft floral background"
        ),
        "url": "https://example.com/skincare",
    },
    {
        "description": (
            "A rugged, waterproof hiking boot splashing through a muddy trail, dynamic action shot"
        ),
        "url": "https://example.com/boots",
    },
    {
        "description": (
            "A smart home thermostat with a glass interface, mounted on a modern textured wall, "
            "warm ambient lighting"
        ),
        "url": "https://example.com/thermostat",
    },
    {
        "description": (
            "A vintage leather camera bag sitting on a rustic wooden table, map and compass "
            "nearby, travel aesthetic"
        ),
        "url": "https://example.com/camerabag",
    },
    {
        "description": (
            "High-performance RGB mechanical gaming keyboard glowing in a dark room, "
            "cyberpunk atmosphere"
        ),
        "url": "https://example.com/keyboard",
    },
    {
        "description": (
            "A minimalist mid-century modern velvet armchair in mustard yellow, placed in a "
            "sunlit corner with plants"
        ),
        "url": "https://example.com/armchair",
    },
    {
        "description": (
            "Professional grade Japanese Damascus steel chef knife slicing through a fresh bell "
            "pepper, high shutter speed, dramatic lighting"
        ),
        "url": "https://example.com/knife",
    },
    {
        "description": (
            "Hand-forged copper cookware set hanging in a sun-drenched Tuscan kitchen, steam "
            "rising from a pot"
        ),
        "url": "https://example.com/cookware",
    },
]


def option_tables() -> Dict[str, List[Dict[str, str]]]:
    """All selectable options, keyed by request field."""
    return {
        "aspect_ratio": ASPECT_RATIO_OPTIONS,
        "quality": QUALITY_OPTIONS,
        "style": STYLE_OPTIONS,
        "samples": SAMPLE_PROMPTS,
    }
