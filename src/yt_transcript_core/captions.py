"""Locate caption tracks inside a parsed player response."""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, ValidationError

from yt_transcript_core.errors import CouldNotRetrieveTranscript
from yt_transcript_core.models import (
    MicroformatData,
    StreamingData,
    StructuredValue,
    TranslationLanguage,
    VideoDetails,
    VideoThumbnail,
)

# -- Field accessors --
#
# The player response is untrusted. Missing keys fall back to a default;
# a key holding the wrong type means the page layout changed and is
# reported as unparsable data.


def _field(container: StructuredValue, key: str, expected: type, video_id: str):
    if not isinstance(container, dict):
        raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)
    value = container.get(key)
    if value is None:
        return None
    if not isinstance(value, expected) or (expected is not bool and isinstance(value, bool)):
        raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)
    return value


def get_mapping(container: StructuredValue, key: str, video_id: str) -> dict | None:
    return _field(container, key, dict, video_id)


def get_list(container: StructuredValue, key: str, video_id: str) -> list:
    return _field(container, key, list, video_id) or []


def get_str(container: StructuredValue, key: str, video_id: str, default: str = "") -> str:
    value = _field(container, key, str, video_id)
    return default if value is None else value


def get_bool(container: StructuredValue, key: str, video_id: str, default: bool = False) -> bool:
    if not isinstance(container, dict):
        raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)
    value = container.get(key)
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1")
    if isinstance(value, (int, float)):
        return value != 0
    raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)


def simple_text(container: StructuredValue, key: str, video_id: str) -> str:
    """Read a ``{"simpleText": ...}`` or ``{"runs": [{"text": ...}]}`` label."""
    label = get_mapping(container, key, video_id)
    if label is None:
        return ""
    if "simpleText" in label:
        return get_str(label, "simpleText", video_id)
    return "".join(get_str(run, "text", video_id) for run in get_list(label, "runs", video_id))


# -- Player response --


def check_playability(player_response: StructuredValue, video_id: str) -> None:
    """Raise if the player response says the video cannot be played."""
    status_data = get_mapping(player_response, "playabilityStatus", video_id)
    if status_data is None:
        return
    status = get_str(status_data, "status", video_id, default="OK")

    if status == "OK":
        return
    if status in ("LOGIN_REQUIRED", "CONTENT_CHECK_REQUIRED"):
        raise CouldNotRetrieveTranscript.age_restricted(video_id)
    if status == "UNPLAYABLE":
        reason = get_str(status_data, "reason", video_id) or "Video is unplayable"
        sub_reasons = []
        error_screen = get_mapping(status_data, "errorScreen", video_id) or {}
        renderer = get_mapping(error_screen, "playerErrorMessageRenderer", video_id) or {}
        for key in ("reason", "subreason"):
            text = simple_text(renderer, key, video_id)
            if text:
                sub_reasons.append(text)
        raise CouldNotRetrieveTranscript.video_unplayable(video_id, reason, sub_reasons)
    raise CouldNotRetrieveTranscript.video_unavailable(video_id)


def extract_captions_data(player_response: StructuredValue, video_id: str) -> dict:
    """Return the caption tracklist renderer of a player response."""
    captions = get_mapping(player_response, "captions", video_id)
    if captions is None:
        raise CouldNotRetrieveTranscript.transcripts_disabled(video_id)
    renderer = get_mapping(captions, "playerCaptionsTracklistRenderer", video_id)
    if renderer is None:
        raise CouldNotRetrieveTranscript.transcripts_disabled(video_id)
    return renderer


def extract_video_details(player_response: StructuredValue, video_id: str) -> VideoDetails:
    details = get_mapping(player_response, "videoDetails", video_id)
    if details is None:
        raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)

    try:
        length_seconds = int(get_str(details, "lengthSeconds", video_id, default="0"))
    except ValueError:
        length_seconds = 0

    thumbnail = get_mapping(details, "thumbnail", video_id) or {}
    thumbnails = [
        VideoThumbnail(
            url=get_str(t, "url", video_id),
            width=_field(t, "width", int, video_id) or 0,
            height=_field(t, "height", int, video_id) or 0,
        )
        for t in get_list(thumbnail, "thumbnails", video_id)
    ]

    return VideoDetails(
        video_id=get_str(details, "videoId", video_id) or video_id,
        title=get_str(details, "title", video_id),
        length_seconds=length_seconds,
        keywords=[k for k in get_list(details, "keywords", video_id) if isinstance(k, str)],
        channel_id=get_str(details, "channelId", video_id),
        short_description=get_str(details, "shortDescription", video_id),
        view_count=get_str(details, "viewCount", video_id, default="0"),
        author=get_str(details, "author", video_id),
        thumbnails=thumbnails,
        is_live_content=get_bool(details, "isLiveContent", video_id),
    )


def _validate(model: type[BaseModel], data: dict, video_id: str):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id) from e


def extract_microformat(player_response: StructuredValue, video_id: str) -> MicroformatData:
    """Microformat is optional; a page without it yields empty data."""
    microformat = get_mapping(player_response, "microformat", video_id) or {}
    renderer = get_mapping(microformat, "playerMicroformatRenderer", video_id)
    if renderer is None:
        return MicroformatData()
    thumbnail = get_mapping(renderer, "thumbnail", video_id) or {}
    data = {
        **renderer,
        "title": simple_text(renderer, "title", video_id) or None,
        "description": simple_text(renderer, "description", video_id) or None,
        "thumbnails": get_list(thumbnail, "thumbnails", video_id),
    }
    return _validate(MicroformatData, data, video_id)


def extract_streaming_data(player_response: StructuredValue, video_id: str) -> StreamingData:
    streaming_data = get_mapping(player_response, "streamingData", video_id)
    if streaming_data is None:
        raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)
    return _validate(StreamingData, streaming_data, video_id)


# -- Tracks --


class CaptionTrack(BaseModel):
    video_id: str
    url: str
    language: str
    language_code: str
    is_generated: bool = False
    is_translatable: bool = False
    translation_languages: list[TranslationLanguage] = []

    @classmethod
    def from_data(
        cls,
        video_id: str,
        data: StructuredValue,
        translation_languages: list[TranslationLanguage],
    ) -> "CaptionTrack":
        url = get_str(data, "baseUrl", video_id)
        if not url:
            raise CouldNotRetrieveTranscript.youtube_data_unparsable(video_id)
        is_translatable = get_bool(data, "isTranslatable", video_id)
        return cls(
            video_id=video_id,
            url=url.replace("&fmt=srv3", ""),
            language=simple_text(data, "name", video_id),
            language_code=get_str(data, "languageCode", video_id),
            is_generated=(
                get_str(data, "kind", video_id) == "asr"
                or get_str(data, "vssId", video_id).startswith("a.")
            ),
            is_translatable=is_translatable,
            translation_languages=translation_languages if is_translatable else [],
        )

    def translate(self, language_code: str) -> "CaptionTrack":
        """Return the machine-translated variant of this track."""
        if not self.is_translatable:
            raise CouldNotRetrieveTranscript.translation_unavailable(
                self.video_id,
                f"{self.language_code} transcript is not translatable",
            )
        for lang in self.translation_languages:
            if lang.language_code == language_code:
                return CaptionTrack(
                    video_id=self.video_id,
                    url=f"{self.url}&tlang={language_code}",
                    language=lang.language,
                    language_code=language_code,
                    is_generated=True,
                )
        raise CouldNotRetrieveTranscript.translation_language_unavailable(
            self.video_id, f"{language_code} is not an available translation language"
        )

    def __str__(self) -> str:
        suffix = "[TRANSLATABLE]" if self.is_translatable else ""
        return f'{self.language_code} ("{self.language}"){suffix}'


class TranscriptList:
    """The caption tracks available for one video."""

    def __init__(
        self,
        video_id: str,
        manually_created: dict[str, CaptionTrack],
        generated: dict[str, CaptionTrack],
        translation_languages: list[TranslationLanguage],
    ):
        self.video_id = video_id
        self._manually_created = manually_created
        self._generated = generated
        self.translation_languages = translation_languages

    @classmethod
    def build(cls, video_id: str, captions_data: StructuredValue) -> "TranscriptList":
        translation_languages = [
            TranslationLanguage(
                language=simple_text(lang, "languageName", video_id),
                language_code=get_str(lang, "languageCode", video_id),
            )
            for lang in get_list(captions_data, "translationLanguages", video_id)
        ]

        manually_created: dict[str, CaptionTrack] = {}
        generated: dict[str, CaptionTrack] = {}
        for data in get_list(captions_data, "captionTracks", video_id):
            track = CaptionTrack.from_data(video_id, data, translation_languages)
            pool = generated if track.is_generated else manually_created
            pool.setdefault(track.language_code, track)

        return cls(video_id, manually_created, generated, translation_languages)

    def __iter__(self) -> Iterator[CaptionTrack]:
        yield from self._manually_created.values()
        yield from self._generated.values()

    def find_transcript(self, language_codes: list[str]) -> CaptionTrack:
        """First match by code priority, manual tracks before generated ones."""
        return self._find(language_codes, [self._manually_created, self._generated])

    def find_manually_created_transcript(self, language_codes: list[str]) -> CaptionTrack:
        return self._find(language_codes, [self._manually_created])

    def find_generated_transcript(self, language_codes: list[str]) -> CaptionTrack:
        return self._find(language_codes, [self._generated])

    def _find(
        self, language_codes: list[str], pools: list[dict[str, CaptionTrack]]
    ) -> CaptionTrack:
        for code in language_codes:
            for pool in pools:
                if code in pool:
                    return pool[code]
        raise CouldNotRetrieveTranscript.no_transcript_found(
            self.video_id, language_codes, str(self)
        )

    def __str__(self) -> str:
        def listing(items) -> str:
            lines = [f" - {item}" for item in items]
            return "\n".join(lines) if lines else "None"

        translations = (
            f'{lang.language_code} ("{lang.language}")' for lang in self.translation_languages
        )
        return (
            f"For this video ({self.video_id}) transcripts are available in the "
            "following languages:\n\n"
            f"(MANUALLY CREATED)\n{listing(self._manually_created.values())}\n\n"
            f"(GENERATED)\n{listing(self._generated.values())}\n\n"
            f"(TRANSLATION LANGUAGES)\n{listing(translations)}"
        )


class VideoInfos(BaseModel):
    """Everything one watch page yields about a video."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    video_details: VideoDetails
    microformat: MicroformatData
    streaming_data: StreamingData
    transcript_list: TranscriptList


def extract_video_infos(player_response: StructuredValue, video_id: str) -> VideoInfos:
    return VideoInfos(
        video_details=extract_video_details(player_response, video_id),
        microformat=extract_microformat(player_response, video_id),
        streaming_data=extract_streaming_data(player_response, video_id),
        transcript_list=TranscriptList.build(
            video_id, extract_captions_data(player_response, video_id)
        ),
    )
