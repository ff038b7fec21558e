"""Shared test fixtures."""

import json

import pytest

from yt_transcript_core.models import FetchedTranscript, TranscriptSnippet

VIDEO_ID = "dQw4w9WgXcQ"
CAPTION_URL = f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=en"


@pytest.fixture
def sample_snippets():
    return [
        TranscriptSnippet(text="Hello world", start=0.0, duration=2.5),
        TranscriptSnippet(text="this is a test", start=2.5, duration=3.0),
        TranscriptSnippet(text="of the transcript", start=5.5, duration=2.0),
        TranscriptSnippet(text="extraction system", start=7.5, duration=2.5),
        TranscriptSnippet(text="goodbye world", start=10.0, duration=2.0),
    ]


@pytest.fixture
def sample_result(sample_snippets):
    return FetchedTranscript(
        video_id=VIDEO_ID,
        language="English",
        language_code="en",
        is_generated=False,
        snippets=sample_snippets,
    )


@pytest.fixture
def captions_data():
    return {
        "captionTracks": [
            {
                "baseUrl": CAPTION_URL + "&fmt=srv3",
                "name": {"simpleText": "English"},
                "vssId": ".en",
                "languageCode": "en",
                "isTranslatable": True,
            },
            {
                "baseUrl": CAPTION_URL + "&kind=asr",
                "name": {"runs": [{"text": "English (auto-generated)"}]},
                "vssId": "a.en",
                "languageCode": "en",
                "kind": "asr",
                "isTranslatable": True,
            },
            {
                "baseUrl": f"https://www.youtube.com/api/timedtext?v={VIDEO_ID}&lang=fr",
                "name": {"simpleText": "French"},
                "vssId": ".fr",
                "languageCode": "fr",
                "isTranslatable": False,
            },
        ],
        "translationLanguages": [
            {"languageCode": "de", "languageName": {"simpleText": "German"}},
            {"languageCode": "es", "languageName": {"simpleText": "Spanish"}},
        ],
    }


@pytest.fixture
def player_response(captions_data):
    return {
        "playabilityStatus": {"status": "OK"},
        "videoDetails": {
            "videoId": VIDEO_ID,
            "title": "Test Video",
            "lengthSeconds": "212",
            "keywords": ["music", "test"],
            "channelId": "UC123",
            "shortDescription": "A description",
            "viewCount": "1000",
            "author": "Someone",
            "thumbnail": {
                "thumbnails": [
                    {"url": "https://i.ytimg.com/vi/x/default.jpg", "width": 120, "height": 90}
                ]
            },
            "isLiveContent": False,
        },
        "captions": {"playerCaptionsTracklistRenderer": captions_data},
        "microformat": {
            "playerMicroformatRenderer": {
                "title": {"simpleText": "Test Video"},
                "description": {"simpleText": "A description"},
                "thumbnail": {
                    "thumbnails": [
                        {"url": "https://i.ytimg.com/vi/x/maxresdefault.jpg", "width": 1280, "height": 720}
                    ]
                },
                "embed": {"iframeUrl": f"https://www.youtube.com/embed/{VIDEO_ID}", "width": 480, "height": 270},
                "lengthSeconds": "212",
                "ownerChannelName": "Someone",
                "externalChannelId": "UC123",
                "isFamilySafe": True,
                "availableCountries": ["DE", "US"],
                "isUnlisted": False,
                "viewCount": "1000",
                "category": "Music",
                "publishDate": "2009-10-24T23:57:33-07:00",
                "uploadDate": "2009-10-24T23:57:33-07:00",
            }
        },
        "streamingData": {
            "expiresInSeconds": "21540",
            "formats": [
                {
                    "itag": 18,
                    "mimeType": 'video/mp4; codecs="avc1.42001E, mp4a.40.2"',
                    "bitrate": 503574,
                    "width": 640,
                    "height": 360,
                    "quality": "medium",
                    "fps": 25,
                    "qualityLabel": "360p",
                    "projectionType": "RECTANGULAR",
                    "audioQuality": "AUDIO_QUALITY_LOW",
                    "approxDurationMs": "212091",
                }
            ],
            "adaptiveFormats": [
                {
                    "itag": 140,
                    "mimeType": 'audio/mp4; codecs="mp4a.40.2"',
                    "bitrate": 130694,
                    "initRange": {"start": "0", "end": "722"},
                    "indexRange": {"start": "723", "end": "1010"},
                    "quality": "tiny",
                    "projectionType": "RECTANGULAR",
                    "approxDurationMs": "212091",
                    "audioSampleRate": "44100",
                    "audioChannels": 2,
                    "loudnessDb": -7.4,
                }
            ],
        },
    }


@pytest.fixture
def watch_page(player_response):
    return (
        "<html><head><script>var ytcfg = {};</script></head><body>"
        f"<script>var ytInitialPlayerResponse = {json.dumps(player_response)};"
        "var meta = document.createElement('meta');</script>"
        "</body></html>"
    )


@pytest.fixture
def caption_xml():
    return (
        '<?xml version="1.0" encoding="utf-8" ?><transcript>'
        '<text start="0.0" dur="1.5">Hey there</text>'
        '<text start="1.5" dur="2.0">it&amp;#39;s going</text>'
        "</transcript>"
    )
