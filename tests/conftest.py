"""Pytest configuration and fixtures."""

import json

import pytest
from pathlib import Path
import tempfile
import shutil
from unittest.mock import Mock

import requests


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_video_id():
    """Sample YouTube video ID for testing."""
    return "dQw4w9WgXcQ"


@pytest.fixture
def caption_tracks():
    """Raw captionTracks entries as they appear in the player response."""
    return [
        {
            "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en&kind=asr",
            "languageCode": "en",
            "kind": "asr",
        },
        {
            "baseUrl": "https://www.youtube.com/api/timedtext?v=dQw4w9WgXcQ&lang=en",
            "languageCode": "en",
        },
    ]


@pytest.fixture
def watch_page_html(caption_tracks):
    """Watch page markup with a playable video and two caption tracks."""
    player_response = {
        "playabilityStatus": {"status": "OK"},
        "captions": {
            "playerCaptionsTracklistRenderer": {
                "captionTracks": caption_tracks,
                "audioTracks": [{"captionTrackIndices": [0, 1]}],
            }
        },
    }
    return (
        "<html><head><script>var ytInitialPlayerResponse = "
        + json.dumps(player_response, separators=(",", ":"))
        + ";</script></head><body></body></html>"
    )


@pytest.fixture
def timed_text_xml():
    """Timed-text XML payload with entities and an empty cue."""
    return (
        '<?xml version="1.0" encoding="utf-8" ?><transcript>'
        '<text start="0.5" dur="2.1">Hello everyone</text>'
        '<text start="2.6" dur="3.0">Tom &amp; Jerry&#39;s\nshow</text>'
        '<text start="5.9" dur="1.0">   </text>'
        '<text start="7.25" dur="4.0">&quot;Quoted&quot; &lt;b&gt;</text>'
        "</transcript>"
    )


def make_response(status_code=200, text="", json_data=None):
    """Build a mock ``requests.Response``."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    if json_data is not None:
        response.json.return_value = json_data
    else:
        response.json.side_effect = ValueError("No JSON")
    return response


@pytest.fixture
def response_factory():
    """Factory for mock HTTP responses."""
    return make_response
