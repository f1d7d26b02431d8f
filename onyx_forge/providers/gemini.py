"""Google Gemini REST client for text, structured and image generation."""

from typing import Any, Dict, List, Optional, Tuple

import httpx

from ..models.schemas import InlineImage
from ..utils.errors import (
    AuthenticationError,
    NetworkError,
    ProviderError,
    RateLimitError,
)
from ..utils.images import bytes_to_base64
from ..utils.logger import get_logger

logger = get_logger(__name__)

PROVIDER = "gemini"

# Schema for a plain JSON array of strings
STRING_ARRAY_SCHEMA = {
    "type": "ARRAY",
    "items": {"type": "STRING"},
}


class GeminiClient:
    """
    Client for the Gemini ``generateContent`` API.

    Owns one ``httpx.AsyncClient`` carrying the API key header; use it as an
    async context manager or call ``initialize()`` and ``close()`` around use.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        text_model: str = "gemini-2.5-flash",
        image_model: str = "gemini-2.5-flash-image",
        timeout: Optional[float] = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key
            base_url: API root, up to and including the version segment
            text_model: Model used for text and structured completions
            image_model: Model used for image generation
            timeout: Timeout for text calls (image calls never time out)
            transport: Optional httpx transport
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None
        self.text_model = text_model
        self.image_model = image_model

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def initialize(self):
        """Open the HTTP client (no-op if already open)."""
        if self.client is not None:
            return

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            headers={
                "x-goog-api-key": self.api_key,
                "Content-Type": "application/json",
            },
            transport=self.transport,
        )
        logger.info(
            "Gemini client initialized",
            extra={
                "text_model": self.text_model,
                "image_model": self.image_model,
                "timeout": self.timeout,
            }
        )

    async def close(self):
        if self.client is None:
            return

        await self.client.aclose()
        self.client = None
        logger.info("Gemini client closed")

    def _require_client(self) -> httpx.AsyncClient:
        if self.client is None:
            raise RuntimeError("GeminiClient not initialized; call initialize() first")
        return self.client

    async def generate_text(self, prompt: str) -> str:
        """
        Plain text completion.

        Returns:
            Concatenated text of the first candidate (may be empty)
        """
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }

        data = await self._generate_content(self.text_model, payload)
        return self._extract_text(data)

    async def generate_json(self, prompt: str, schema: Dict[str, Any]) -> str:
        """
        Structured completion constrained to a response schema.

        Returns:
            Raw JSON text as produced by the model (not decoded)
        """
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": schema,
            },
        }

        data = await self._generate_content(self.text_model, payload)
        return self._extract_text(data)

    async def generate_image(
        self,
        text: str,
        aspect_ratio: str,
        attachment: Optional[InlineImage] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[str]]:
        """
        Multimodal image generation.

        Args:
            text: Full prompt text
            aspect_ratio: Aspect ratio directive, e.g. "16:9"
            attachment: Optional secondary image input (brand logo)

        Returns:
            Tuple of (content parts of the first candidate, finish reason)
        """
        parts: List[Dict[str, Any]] = [{"text": text}]

        if attachment is not None:
            parts.append({
                "inlineData": {
                    "mimeType": attachment.mime_type,
                    "data": bytes_to_base64(attachment.data),
                }
            })

        payload = {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "responseModalities": ["IMAGE", "TEXT"],
                "imageConfig": {"aspectRatio": aspect_ratio},
            },
        }

        # No client-side timeout: rely on the provider's own limits
        data = await self._generate_content(self.image_model, payload, timeout=None)

        candidate = self._first_candidate(data)
        content_parts = (candidate.get("content") or {}).get("parts") or []
        finish_reason = candidate.get("finishReason") or (
            (data.get("promptFeedback") or {}).get("blockReason")
        )

        logger.info(
            "Image generation response received",
            extra={
                "model": self.image_model,
                "parts": len(content_parts),
                "finish_reason": finish_reason,
                "has_attachment": attachment is not None,
            }
        )

        return content_parts, finish_reason

    async def _generate_content(
        self,
        model: str,
        payload: Dict[str, Any],
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> Dict[str, Any]:
        """POST a generateContent request and return the decoded body."""
        client = self._require_client()
        url = f"{self.base_url}/models/{model}:generateContent"

        try:
            response = await client.post(url, json=payload, timeout=timeout)
        except httpx.RequestError as e:
            logger.error(
                f"Gemini request failed: {type(e).__name__}: {e}",
                extra={"model": model, "error": str(e)}
            )
            raise NetworkError(PROVIDER, str(e) or type(e).__name__)

        self._handle_response_errors(response)

        try:
            return response.json()
        except ValueError:
            raise ProviderError(PROVIDER, "Response body is not valid JSON", response.status_code)

    @staticmethod
    def _first_candidate(data: Dict[str, Any]) -> Dict[str, Any]:
        candidates = data.get("candidates") or []
        return candidates[0] if candidates else {}

    def _extract_text(self, data: Dict[str, Any]) -> str:
        """Join the non-thought text parts of the first candidate."""
        candidate = self._first_candidate(data)
        parts = (candidate.get("content") or {}).get("parts") or []

        return "".join(
            part.get("text", "")
            for part in parts
            if isinstance(part, dict) and not part.get("thought")
        )

    def _handle_response_errors(self, response: httpx.Response):
        """Raise a ProviderError subclass for any non-2xx response."""
        if response.status_code < 400:
            return

        status = None
        try:
            error_data = response.json().get("error", {})
            message = error_data.get("message") or response.text
            status = error_data.get("status")
        except (ValueError, AttributeError):
            message = response.text

        logger.error(
            f"Gemini API error: {response.status_code}",
            extra={
                "status_code": response.status_code,
                "status": status,
                "error": message[:500],
            }
        )

        if response.status_code in (401, 403):
            raise AuthenticationError(PROVIDER, message, response.status_code)
        elif response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                PROVIDER,
                message,
                int(retry_after) if retry_after and retry_after.isdigit() else None,
            )

        raise ProviderError(PROVIDER, message, response.status_code, status)
