"""
Exceptions raised by the studio requesters.
"""

from __future__ import annotations
from typing import Optional


class StudioError(Exception):
    """Base class for every failure surfaced in the status line."""


class EmptyPromptError(StudioError):
    """The user submitted a blank prompt."""


class ConfigurationError(StudioError):
    """A required API key or setting is missing."""


class ResponseShapeError(StudioError):
    """A response parsed fine but lacks the fields we index into."""


class BlueprintParseError(StudioError):
    """The text model returned something that is not valid JSON."""


class HTTPStudioError(StudioError):
    """An endpoint answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BlueprintError(HTTPStudioError):
    """Text generation endpoint failed."""


class ImageGenerationError(HTTPStudioError):
    """Image generation endpoint failed."""


class RenderError(HTTPStudioError):
    """Render endpoint failed."""
