"""Transcript providers."""

from .base import TranscriptProvider
from .youtube import YouTubeProvider

__all__ = ["TranscriptProvider", "YouTubeProvider"]
