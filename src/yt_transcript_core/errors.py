"""Error taxonomy shared by the parsers and the fetch layer."""

import json
from enum import Enum

from pydantic import BaseModel, ConfigDict

_BLOCKED_CAUSE = (
    "YouTube is blocking requests from your IP. This usually is due to one of the "
    "following reasons:\n"
    "- You have done too many requests and your IP has been blocked by YouTube\n"
    "- You are doing requests from an IP belonging to a cloud provider (like AWS, "
    "Google Cloud Platform, Azure, etc.). Unfortunately, most IPs from cloud "
    "providers are blocked by YouTube."
)


class ErrorKind(str, Enum):
    TRANSCRIPTS_DISABLED = "TRANSCRIPTS_DISABLED"
    NO_TRANSCRIPT_FOUND = "NO_TRANSCRIPT_FOUND"
    VIDEO_UNAVAILABLE = "VIDEO_UNAVAILABLE"
    VIDEO_UNPLAYABLE = "VIDEO_UNPLAYABLE"
    IP_BLOCKED = "IP_BLOCKED"
    REQUEST_BLOCKED = "REQUEST_BLOCKED"
    TRANSLATION_UNAVAILABLE = "TRANSLATION_UNAVAILABLE"
    TRANSLATION_LANGUAGE_UNAVAILABLE = "TRANSLATION_LANGUAGE_UNAVAILABLE"
    FAILED_TO_CREATE_CONSENT_COOKIE = "FAILED_TO_CREATE_CONSENT_COOKIE"
    YOUTUBE_REQUEST_FAILED = "YOUTUBE_REQUEST_FAILED"
    INVALID_VIDEO_ID = "INVALID_VIDEO_ID"
    AGE_RESTRICTED = "AGE_RESTRICTED"
    YOUTUBE_DATA_UNPARSABLE = "YOUTUBE_DATA_UNPARSABLE"
    TRANSCRIPT_PARSE_FAILED = "TRANSCRIPT_PARSE_FAILED"


class ErrorDetails(BaseModel):
    """Optional diagnostic payload attached to a retrieval failure."""

    model_config = ConfigDict(frozen=True)

    requested_language_codes: tuple[str, ...] = ()
    available_transcripts: str | None = None
    reason: str | None = None
    sub_reasons: tuple[str, ...] = ()
    details: str | None = None


class YouTubeTranscriptError(Exception):
    """Base class for every failure raised by this package."""

    kind: ErrorKind


class CouldNotRetrieveTranscript(YouTubeTranscriptError):
    """A transcript (or the data needed to find one) could not be retrieved."""

    def __init__(
        self,
        video_id: str,
        kind: ErrorKind,
        details: ErrorDetails | None = None,
    ):
        self._video_id = video_id
        self.kind = kind
        self._details = details or ErrorDetails()
        super().__init__(self._build_message())

    @property
    def video_id(self) -> str:
        return self._video_id

    @property
    def details(self) -> ErrorDetails:
        return self._details

    def _cause(self) -> str:
        d = self._details
        kind = self.kind
        if kind == ErrorKind.TRANSCRIPTS_DISABLED:
            return "Subtitles are disabled for this video"
        if kind == ErrorKind.NO_TRANSCRIPT_FOUND:
            cause = (
                "No transcripts were found for any of the requested language "
                f"codes: {json.dumps(list(d.requested_language_codes))}"
            )
            if d.available_transcripts:
                cause += f"\n\n{d.available_transcripts}"
            return cause
        if kind == ErrorKind.VIDEO_UNAVAILABLE:
            return "The video is no longer available"
        if kind == ErrorKind.VIDEO_UNPLAYABLE:
            cause = (
                "The video is unplayable for the following reason: "
                f"{d.reason or 'No reason specified!'}"
            )
            if d.sub_reasons:
                cause += "\n\nAdditional Details:\n"
                cause += "".join(f" - {sub}\n" for sub in d.sub_reasons)
            return cause
        if kind == ErrorKind.IP_BLOCKED:
            return f"{_BLOCKED_CAUSE}\n\nIp blocked."
        if kind == ErrorKind.REQUEST_BLOCKED:
            return f"{_BLOCKED_CAUSE}\n\nRequest blocked."
        if kind == ErrorKind.TRANSLATION_UNAVAILABLE:
            return (
                "The requested transcript cannot be translated: "
                f"{d.details or 'Unknown reason'}"
            )
        if kind == ErrorKind.TRANSLATION_LANGUAGE_UNAVAILABLE:
            return (
                "The requested translation language is not available: "
                f"{d.details or 'Unknown reason'}"
            )
        if kind == ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE:
            return "Failed to create a consent cookie required by YouTube"
        if kind == ErrorKind.YOUTUBE_REQUEST_FAILED:
            return f"The request to YouTube failed: {d.details or 'Unknown error'}"
        if kind == ErrorKind.INVALID_VIDEO_ID:
            return "The provided video ID is invalid"
        if kind == ErrorKind.AGE_RESTRICTED:
            return "The video is age-restricted and requires authentication"
        if kind == ErrorKind.YOUTUBE_DATA_UNPARSABLE:
            return "The YouTube data structure could not be parsed"
        return "Unknown error"

    def _build_message(self) -> str:
        return (
            f"Could not retrieve a transcript for the video {self._video_id}! "
            f"{self._cause()}"
        )

    @classmethod
    def transcripts_disabled(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.TRANSCRIPTS_DISABLED)

    @classmethod
    def no_transcript_found(
        cls,
        video_id: str,
        requested_language_codes: list[str],
        available_transcripts: str | None = None,
    ) -> "CouldNotRetrieveTranscript":
        return cls(
            video_id,
            ErrorKind.NO_TRANSCRIPT_FOUND,
            ErrorDetails(
                requested_language_codes=tuple(requested_language_codes),
                available_transcripts=available_transcripts,
            ),
        )

    @classmethod
    def video_unavailable(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.VIDEO_UNAVAILABLE)

    @classmethod
    def video_unplayable(
        cls,
        video_id: str,
        reason: str | None = None,
        sub_reasons: list[str] | None = None,
    ) -> "CouldNotRetrieveTranscript":
        return cls(
            video_id,
            ErrorKind.VIDEO_UNPLAYABLE,
            ErrorDetails(reason=reason, sub_reasons=tuple(sub_reasons or ())),
        )

    @classmethod
    def ip_blocked(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.IP_BLOCKED)

    @classmethod
    def request_blocked(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.REQUEST_BLOCKED)

    @classmethod
    def translation_unavailable(
        cls, video_id: str, details: str
    ) -> "CouldNotRetrieveTranscript":
        return cls(
            video_id, ErrorKind.TRANSLATION_UNAVAILABLE, ErrorDetails(details=details)
        )

    @classmethod
    def translation_language_unavailable(
        cls, video_id: str, details: str
    ) -> "CouldNotRetrieveTranscript":
        return cls(
            video_id,
            ErrorKind.TRANSLATION_LANGUAGE_UNAVAILABLE,
            ErrorDetails(details=details),
        )

    @classmethod
    def failed_to_create_consent_cookie(
        cls, video_id: str
    ) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE)

    @classmethod
    def youtube_request_failed(
        cls, video_id: str, details: str
    ) -> "CouldNotRetrieveTranscript":
        return cls(
            video_id, ErrorKind.YOUTUBE_REQUEST_FAILED, ErrorDetails(details=details)
        )

    @classmethod
    def invalid_video_id(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.INVALID_VIDEO_ID)

    @classmethod
    def age_restricted(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.AGE_RESTRICTED)

    @classmethod
    def youtube_data_unparsable(cls, video_id: str) -> "CouldNotRetrieveTranscript":
        return cls(video_id, ErrorKind.YOUTUBE_DATA_UNPARSABLE)


class TranscriptParseError(YouTubeTranscriptError):
    """The caption XML document could not be decoded."""

    kind = ErrorKind.TRANSCRIPT_PARSE_FAILED

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Failed to parse transcript XML: {cause}")
