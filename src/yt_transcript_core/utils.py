"""Utility functions."""

import re

from yt_transcript_core.models import TranscriptSnippet

_VIDEO_ID = re.compile(r"^[a-zA-Z0-9_-]{11}$")
# watch?v=, /v/, youtu.be/, /embed/ and /shorts/ links
_ID_IN_URL = re.compile(r"(?:[?&]v=|/v/|youtu\.be/|/embed/|/shorts/)([a-zA-Z0-9_-]{11})")


def is_valid_video_id(video_id: str) -> bool:
    return bool(_VIDEO_ID.match(video_id))


def extract_video_id(url_or_id: str) -> str | None:
    """Return the video id of a YouTube link, or ``url_or_id`` if it is one."""
    if is_valid_video_id(url_or_id):
        return url_or_id
    match = _ID_IN_URL.search(url_or_id)
    return match.group(1) if match else None


def format_timestamp(seconds: float) -> str:
    minutes, secs = divmod(int(seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def snippets_to_markdown(snippets: list[TranscriptSnippet]) -> str:
    """Format snippets as markdown with timestamps."""
    return "\n".join(f"**[{format_timestamp(s.start)}]** {s.text}" for s in snippets)
