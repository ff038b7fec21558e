"""In-memory TTL cache for fetched transcripts."""

from cachetools import TTLCache

from yt_transcript_core.models import FetchedTranscript


class TranscriptCache:
    def __init__(self, max_size: int = 100, ttl: int = 3600):
        self._cache: TTLCache = TTLCache(maxsize=max_size, ttl=ttl)
        self._hits = 0
        self._misses = 0

    def _key(self, video_id: str, languages: list[str], preserve_formatting: bool) -> str:
        return f"{video_id}:{','.join(languages)}:{int(preserve_formatting)}"

    def get(
        self, video_id: str, languages: list[str], preserve_formatting: bool = False
    ) -> FetchedTranscript | None:
        data = self._cache.get(self._key(video_id, languages, preserve_formatting))
        if data is None:
            self._misses += 1
            return None
        self._hits += 1
        return FetchedTranscript(**data)

    def set(
        self,
        video_id: str,
        languages: list[str],
        transcript: FetchedTranscript,
        preserve_formatting: bool = False,
    ) -> None:
        key = self._key(video_id, languages, preserve_formatting)
        self._cache[key] = transcript.model_dump()

    def stats(self) -> dict:
        lookups = self._hits + self._misses
        return {
            "size": len(self._cache),
            "max_size": self._cache.maxsize,
            "ttl": self._cache.ttl,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(100 * self._hits / lookups, 1) if lookups else 0.0,
        }
