"""Configuration via environment variables."""

from pydantic_settings import BaseSettings

from yt_transcript_core.models import DEFAULT_LINK_FORMAT, RenderConfig

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = {"env_prefix": "YT_TRANSCRIPT_"}

    preserve_formatting: bool = False
    link_format: str = DEFAULT_LINK_FORMAT
    request_timeout: float = 30.0
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "en-US"
    player_response_var: str = "ytInitialPlayerResponse"
    cache_max_size: int = 100
    cache_ttl_seconds: int = 3600

    def render_config(self, preserve_formatting: bool | None = None) -> RenderConfig:
        if preserve_formatting is None:
            preserve_formatting = self.preserve_formatting
        return RenderConfig(
            preserve_formatting=preserve_formatting,
            link_format=self.link_format,
        )
