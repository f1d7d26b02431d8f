"""Custom exception classes for the banner generation service."""

from typing import Optional


class OnyxForgeError(Exception):
    """Base exception for all service errors."""
    pass


class ConfigurationError(OnyxForgeError):
    """Configuration or initialization errors."""
    pass


class APIError(OnyxForgeError):
    """Base class for API-related errors."""
    pass


class ProviderError(APIError):
    """Generic provider API error with status code."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: Optional[int] = None,
        status: Optional[str] = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.status = status

        prefix = ""
        if status_code is not None:
            prefix = f"{status_code} "
        if status:
            prefix += f"{status}: "

        super().__init__(f"{provider} error: {prefix}{message}")


class AuthenticationError(ProviderError):
    """API key rejected by the provider."""

    def __init__(self, provider: str, message: str = "Permission denied", status_code: int = 403):
        super().__init__(provider, message, status_code, "PERMISSION_DENIED")


class RateLimitError(ProviderError):
    """API rate limit exceeded."""

    def __init__(self, provider: str, message: str = "Quota exceeded", retry_after: Optional[int] = None):
        self.retry_after = retry_after
        if retry_after:
            message += f", retry after {retry_after}s"
        super().__init__(provider, message, 429, "RESOURCE_EXHAUSTED")


class NetworkError(ProviderError):
    """The provider could not be reached."""

    def __init__(self, provider: str, message: str):
        super().__init__(provider, f"network request failed: {message}")


class GenerationError(OnyxForgeError):
    """Errors during image generation."""
    pass


class NoImageDataError(GenerationError):
    """The provider answered but returned no image part."""

    MESSAGE = "No image data found in response"

    def __init__(self, finish_reason: Optional[str] = None):
        self.finish_reason = finish_reason
        message = self.MESSAGE
        if finish_reason:
            message += f" (finish reason: {finish_reason})"
        super().__init__(message)


class GenerationInProgressError(OnyxForgeError):
    """A generation cycle is already running."""
    pass


class ImageProcessingError(OnyxForgeError):
    """Error processing image data."""
    pass
