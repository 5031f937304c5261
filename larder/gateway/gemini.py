"""Gemini API gateway backend."""

from __future__ import annotations

from ..errors import MissingCredentialError
from . import AIGateway


class GeminiGateway(AIGateway):
    """Send gateway requests to Google Gemini with JSON output enforced."""

    def __init__(self, api_key: str = "", model: str = "gemini-2.5-flash") -> None:
        if not api_key:
            raise MissingCredentialError(
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=api_key)
        self._model_name = model
        self._model = genai.GenerativeModel(
            model,
            generation_config={"response_mime_type": "application/json"},
        )

    async def _generate(
        self, prompt: str, image: tuple[bytes, str] | None = None
    ) -> str:
        parts: list = []
        if image is not None:
            data, media_type = image
            parts.append({"mime_type": media_type, "data": data})
        parts.append(prompt)

        response = await self._model.generate_content_async(parts)
        return response.text
