"""Exception hierarchy for the larder package."""

from __future__ import annotations


class LarderError(Exception):
    """Base class for all larder errors."""


class ValidationError(LarderError, ValueError):
    """User input is missing a required field."""


class MissingCredentialError(LarderError):
    """No API key is configured for the selected AI gateway."""


class GatewayError(LarderError):
    """A request to the AI gateway failed.

    Subclasses carry the user-facing message for each operation.
    """

    default_message = "The AI request failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class SuggestionError(GatewayError):
    default_message = (
        "Failed to get recipe suggestions from AI. "
        "Please check your API key and try again."
    )


class ReceiptParseError(GatewayError):
    default_message = (
        "Failed to parse receipt with AI. "
        "The image might be unclear or the format is not supported."
    )


class CategorizationError(GatewayError):
    default_message = "Failed to categorize items with AI."
