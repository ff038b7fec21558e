"""Data models for transcripts and parsed page data."""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, JsonValue, field_validator
from pydantic.alias_generators import to_camel

# Result of the embedded-object extractor: null, bool, number, string,
# list or str-keyed dict, recursively.
StructuredValue = JsonValue

DEFAULT_LINK_FORMAT = "{text} ({url})"


class TranscriptSnippet(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    start: float
    duration: float


class RenderConfig(BaseModel):
    """How caption markup is turned into snippet text."""

    model_config = ConfigDict(frozen=True)

    preserve_formatting: bool = False
    link_format: str = DEFAULT_LINK_FORMAT

    @field_validator("link_format")
    @classmethod
    def _check_placeholders(cls, value: str) -> str:
        if "{text}" not in value or "{url}" not in value:
            raise ValueError("Link format must contain {text} and {url} placeholders")
        return value

    def render_link(self, text: str, url: str) -> str:
        # str.replace rather than str.format: anchor text may contain braces
        return self.link_format.replace("{text}", text, 1).replace("{url}", url, 1)


class TranslationLanguage(BaseModel):
    model_config = ConfigDict(frozen=True)

    language: str
    language_code: str


class VideoThumbnail(BaseModel):
    url: str
    width: int = 0
    height: int = 0


class VideoDetails(BaseModel):
    video_id: str
    title: str = ""
    length_seconds: int = 0
    keywords: list[str] = []
    channel_id: str = ""
    short_description: str = ""
    view_count: str = "0"
    author: str = ""
    thumbnails: list[VideoThumbnail] = []
    is_live_content: bool = False


# -- Microformat and streaming data --
#
# These mirror player response sections closely, so they validate straight
# from the camelCase payload.


class _PlayerModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MicroformatEmbed(_PlayerModel):
    height: int | None = None
    iframe_url: str | None = None
    width: int | None = None


class MicroformatData(_PlayerModel):
    """Extended metadata from ``microformat.playerMicroformatRenderer``."""

    available_countries: list[str] | None = None
    category: str | None = None
    description: str | None = None
    embed: MicroformatEmbed | None = None
    external_channel_id: str | None = None
    external_video_id: str | None = None
    has_ypc_metadata: bool | None = None
    is_family_safe: bool | None = None
    is_shorts_eligible: bool | None = None
    is_unlisted: bool | None = None
    length_seconds: str | None = None
    like_count: str | None = None
    owner_channel_name: str | None = None
    owner_profile_url: str | None = None
    publish_date: str | None = None
    thumbnails: list[VideoThumbnail] = []
    title: str | None = None
    upload_date: str | None = None
    view_count: str | None = None


class ByteRange(_PlayerModel):
    start: str
    end: str


class ColorInfo(_PlayerModel):
    primaries: str | None = None
    transfer_characteristics: str | None = None
    matrix_coefficients: str | None = None


class StreamingFormat(_PlayerModel):
    itag: int
    url: str | None = None
    mime_type: str = ""
    bitrate: int = 0
    width: int | None = None
    height: int | None = None
    init_range: ByteRange | None = None
    index_range: ByteRange | None = None
    last_modified: str | None = None
    content_length: str | None = None
    quality: str = ""
    fps: int | None = None
    quality_label: str | None = None
    projection_type: str = ""
    average_bitrate: int | None = None
    audio_quality: str | None = None
    approx_duration_ms: str = ""
    audio_sample_rate: str | None = None
    audio_channels: int | None = None
    quality_ordinal: str | None = None
    high_replication: bool | None = None
    color_info: ColorInfo | None = None
    loudness_db: float | None = None
    is_drc: bool | None = None
    xtags: str | None = None


class StreamingData(_PlayerModel):
    expires_in_seconds: str = "0"
    formats: list[StreamingFormat] = []
    adaptive_formats: list[StreamingFormat] = []
    server_abr_streaming_url: str | None = None


class FetchedTranscript(BaseModel):
    """Snippets decoded from one caption track."""

    video_id: str
    language: str
    language_code: str
    is_generated: bool = False
    snippets: list[TranscriptSnippet] = []

    def __iter__(self) -> Iterator[TranscriptSnippet]:  # type: ignore[override]
        return iter(self.snippets)

    def __len__(self) -> int:
        return len(self.snippets)

    def text(self) -> str:
        return " ".join(s.text for s in self.snippets)

    def duration(self) -> float:
        """End time of the last snippet, in seconds."""
        if not self.snippets:
            return 0.0
        last = self.snippets[-1]
        return last.start + last.duration

    def to_raw_data(self) -> list[dict]:
        return [s.model_dump() for s in self.snippets]
