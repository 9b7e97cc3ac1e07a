"""
Error types raised by the event design pipeline.

User-facing errors carry a fixed, reassuring message. The underlying exception
is chained with ``raise ... from exc`` so it shows up in logs, never in responses.
"""

NO_IMAGES_MESSAGE = "No venue images to transform. Please upload at least one photo of your venue and try again."
BLUEPRINT_FAILED_MESSAGE = "We couldn't analyze your venue right now. Please try again in a moment."
MISSING_PROMPT_MESSAGE = "Please describe your event vision."


class GenerationError(Exception):
    """A pipeline stage failed in a way the user has to act on."""

    default_message = "Generation failed. Please try again."

    def __init__(self, user_message: str = None):
        self.user_message = user_message or self.default_message
        super().__init__(self.user_message)

    def __str__(self) -> str:
        return self.user_message


class NoImagesError(GenerationError):
    """There is nothing to render with."""

    default_message = NO_IMAGES_MESSAGE


class BlueprintGenerationError(GenerationError):
    """The text/vision analysis call failed."""

    default_message = BLUEPRINT_FAILED_MESSAGE


class MissingPromptError(GenerationError):
    default_message = MISSING_PROMPT_MESSAGE


class MediaCodecError(ValueError):
    """Raised when a file is not an image or a video."""


class AIServiceNotConfiguredError(RuntimeError):
    """Raised when an AI call is attempted without an API key."""
