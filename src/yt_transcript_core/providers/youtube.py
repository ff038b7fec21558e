"""Provider that scrapes the watch page and decodes the caption XML itself."""

import logging

import httpx

from yt_transcript_core.cache import TranscriptCache
from yt_transcript_core.captions import (
    CaptionTrack,
    TranscriptList,
    VideoInfos,
    check_playability,
    extract_captions_data,
    extract_microformat,
    extract_streaming_data,
    extract_video_details,
    extract_video_infos,
)
from yt_transcript_core.config import Settings
from yt_transcript_core.errors import CouldNotRetrieveTranscript
from yt_transcript_core.js_var_parser import extract_variable
from yt_transcript_core.models import (
    FetchedTranscript,
    MicroformatData,
    StreamingData,
    StructuredValue,
    VideoDetails,
)
from yt_transcript_core.transcript_parser import TranscriptParser
from yt_transcript_core.utils import extract_video_id
from .base import TranscriptProvider

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


class YouTubeProvider(TranscriptProvider):
    def __init__(
        self,
        settings: Settings | None = None,
        cache: TranscriptCache | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self._settings = settings or Settings()
        if cache is None and self._settings.cache_max_size > 0:
            cache = TranscriptCache(
                max_size=self._settings.cache_max_size,
                ttl=self._settings.cache_ttl_seconds,
            )
        self._cache = cache
        self._client = client or httpx.AsyncClient(
            headers={
                "User-Agent": self._settings.user_agent,
                "Accept-Language": self._settings.accept_language,
            },
            timeout=self._settings.request_timeout,
            follow_redirects=True,
        )

    async def _get(self, url: str, video_id: str) -> str:
        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning(f"Request for {video_id} failed: {e}")
            raise CouldNotRetrieveTranscript.youtube_request_failed(
                video_id, f"Network error: {e}"
            ) from e

        if resp.status_code in (403, 429):
            logger.warning(f"Blocked by YouTube ({resp.status_code}) for {video_id}")
            raise CouldNotRetrieveTranscript.ip_blocked(video_id)
        if 400 <= resp.status_code < 500:
            raise CouldNotRetrieveTranscript.request_blocked(video_id)
        if resp.status_code != 200:
            raise CouldNotRetrieveTranscript.youtube_request_failed(
                video_id, f"YouTube returned status code: {resp.status_code}"
            )
        return resp.text

    def _resolve(self, url_or_id: str) -> str:
        video_id = extract_video_id(url_or_id)
        if video_id is None:
            raise CouldNotRetrieveTranscript.invalid_video_id(url_or_id)
        return video_id

    async def fetch_video_page(self, video_id: str) -> str:
        video_id = self._resolve(video_id)
        return await self._get(WATCH_URL.format(video_id=video_id), video_id)

    async def _player_response(self, video_id: str) -> StructuredValue:
        html = await self.fetch_video_page(video_id)
        player_response = extract_variable(
            html, self._settings.player_response_var, video_id
        )
        check_playability(player_response, video_id)
        return player_response

    async def list_transcripts(self, video_id: str) -> TranscriptList:
        video_id = self._resolve(video_id)
        player_response = await self._player_response(video_id)
        captions_data = extract_captions_data(player_response, video_id)
        transcripts = TranscriptList.build(video_id, captions_data)
        logger.debug(f"{video_id}: {len(list(transcripts))} caption tracks")
        return transcripts

    async def fetch_video_details(self, video_id: str) -> VideoDetails:
        video_id = self._resolve(video_id)
        player_response = await self._player_response(video_id)
        return extract_video_details(player_response, video_id)

    async def fetch_microformat(self, video_id: str) -> MicroformatData:
        video_id = self._resolve(video_id)
        player_response = await self._player_response(video_id)
        return extract_microformat(player_response, video_id)

    async def fetch_streaming_data(self, video_id: str) -> StreamingData:
        video_id = self._resolve(video_id)
        player_response = await self._player_response(video_id)
        return extract_streaming_data(player_response, video_id)

    async def fetch_video_infos(self, video_id: str) -> VideoInfos:
        """Details, microformat, streaming data and caption tracks from one page load."""
        video_id = self._resolve(video_id)
        player_response = await self._player_response(video_id)
        return extract_video_infos(player_response, video_id)

    async def fetch_track(
        self, track: CaptionTrack, preserve_formatting: bool | None = None
    ) -> FetchedTranscript:
        xml_text = await self._get(track.url, track.video_id)
        parser = TranscriptParser(self._settings.render_config(preserve_formatting))
        return FetchedTranscript(
            video_id=track.video_id,
            language=track.language,
            language_code=track.language_code,
            is_generated=track.is_generated,
            snippets=parser.parse(xml_text),
        )

    async def fetch_transcript(
        self,
        video_id: str,
        languages: list[str] | None = None,
        preserve_formatting: bool | None = None,
    ) -> FetchedTranscript:
        """Fetch the first available transcript in ``languages`` priority order.

        ``preserve_formatting`` defaults to the configured setting.
        """
        video_id = self._resolve(video_id)
        languages = languages or ["en"]
        if preserve_formatting is None:
            preserve_formatting = self._settings.preserve_formatting
        if self._cache is not None:
            cached = self._cache.get(video_id, languages, preserve_formatting)
            if cached is not None:
                return cached

        transcripts = await self.list_transcripts(video_id)
        track = transcripts.find_transcript(languages)
        logger.info(f"Fetching {track.language_code} transcript for {video_id}")
        result = await self.fetch_track(track, preserve_formatting)

        if self._cache is not None:
            self._cache.set(video_id, languages, result, preserve_formatting)
        return result

    async def get_transcript(
        self, video_id: str, language: str = "en"
    ) -> FetchedTranscript:
        languages = [language] if language == "en" else [language, "en"]
        return await self.fetch_transcript(video_id, languages)

    async def close(self) -> None:
        await self._client.aclose()
