"""Tests for transcript models."""

import pytest
from pydantic import ValidationError

from yt_transcript_core.models import FetchedTranscript, RenderConfig, TranscriptSnippet


class TestRenderConfig:
    def test_defaults(self):
        config = RenderConfig()
        assert config.preserve_formatting is False
        assert config.render_link("t", "https://x.test") == "t (https://x.test)"

    def test_custom_format(self):
        config = RenderConfig(link_format="[{text}]({url})")
        assert config.render_link("t", "https://x.test") == "[t](https://x.test)"

    def test_braces_in_link_text(self):
        config = RenderConfig(link_format="{text} -> {url}")
        assert config.render_link("{a}", "u") == "{a} -> u"

    def test_validated_at_construction(self):
        with pytest.raises(ValidationError, match="Link format must contain"):
            RenderConfig(link_format="{text}")

    def test_frozen(self):
        config = RenderConfig()
        with pytest.raises(ValidationError):
            config.preserve_formatting = True


class TestFetchedTranscript:
    def test_text(self, sample_result):
        assert sample_result.text() == (
            "Hello world this is a test of the transcript extraction system goodbye world"
        )

    def test_duration(self, sample_result):
        assert sample_result.duration() == 12.0

    def test_empty(self):
        transcript = FetchedTranscript(video_id="x", language="English", language_code="en")
        assert transcript.text() == ""
        assert transcript.duration() == 0.0
        assert transcript.to_raw_data() == []
        assert len(transcript) == 0

    def test_to_raw_data(self, sample_result):
        raw = sample_result.to_raw_data()
        assert len(raw) == 5
        assert raw[0] == {"text": "Hello world", "start": 0.0, "duration": 2.5}

    def test_iteration(self, sample_result, sample_snippets):
        assert list(sample_result) == sample_snippets
        assert len(sample_result) == 5

    def test_round_trip(self, sample_result):
        assert FetchedTranscript(**sample_result.model_dump()) == sample_result


class TestTranscriptSnippet:
    def test_frozen(self):
        snippet = TranscriptSnippet(text="a", start=0.0, duration=1.0)
        with pytest.raises(ValidationError):
            snippet.text = "b"
