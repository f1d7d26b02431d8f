"""Enumerations for Onyx Forge."""

from enum import Enum


class AspectRatio(str, Enum):
    """Output banner aspect ratio."""
    SQUARE = "1:1"
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    CLASSIC = "4:3"
    CLASSIC_PORTRAIT = "3:4"


class Quality(str, Enum):
    """Rendering quality tier."""
    STANDARD = "Standard"
    HIGH = "High"
    ULTRA = "Ultra"


class StylePreset(str, Enum):
    """Aesthetic preset applied on top of the product prompt."""
    NONE = "None"
    CYBERPUNK = "Cyberpunk"
    MINIMALIST = "Minimalist"
    LUXE = "Luxe"
    RETRO = "Retro"
    INDUSTRIAL = "Industrial"


class ErrorCategory(str, Enum):
    """Diagnostic category of a failed generation cycle."""
    CONTENT_SAFETY = "content_safety"
    RATE_LIMIT = "rate_limit"
    PERMISSION_DENIED = "permission_denied"
    SERVICE_UNAVAILABLE = "service_unavailable"
    INVALID_REQUEST = "invalid_request"
    NO_OUTPUT = "no_output"
    NETWORK_ERROR = "network_error"
    UNEXPECTED = "unexpected"


class GenerationPhase(str, Enum):
    """Logical phase of a generation cycle, shown as the progress label."""
    IDLE = "idle"
    INITIALIZING = "initializing"
    ENHANCING = "enhancing"
    PLANNING = "planning"
    RENDERING = "rendering"
