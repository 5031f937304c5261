"""Claude API gateway backend."""

from __future__ import annotations

import base64

from ..errors import MissingCredentialError
from . import AIGateway


class ClaudeGateway(AIGateway):
    """Send gateway requests to Anthropic's Claude."""

    def __init__(
        self, api_key: str = "", model: str = "claude-sonnet-4-5-20250929"
    ) -> None:
        if not api_key:
            raise MissingCredentialError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        self._model = model
        self._client = anthropic.AsyncAnthropic(api_key=api_key)

    async def _generate(
        self, prompt: str, image: tuple[bytes, str] | None = None
    ) -> str:
        content: list[dict] = []
        if image is not None:
            data, media_type = image
            content.append(
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": media_type,
                        "data": base64.standard_b64encode(data).decode(),
                    },
                }
            )
        content.append({"type": "text", "text": prompt})

        response = await self._client.messages.create(
            model=self._model,
            max_tokens=4096,
            messages=[{"role": "user", "content": content}],
        )
        return response.content[0].text
