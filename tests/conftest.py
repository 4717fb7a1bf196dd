"""Shared fixtures for the vidkit test suite."""

import json
from unittest.mock import MagicMock

import pytest

from vidkit.media.probe import FormatInfo, StreamInfo, VideoInfo
from vidkit.utils import constants, logger
from vidkit.utils.config import Config


def make_response(payload=None, status_code: int = 200, reason: str = "OK") -> MagicMock:
    """A stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload
    return response


def make_session(*responses) -> MagicMock:
    """A session whose request() returns the given responses in order."""
    session = MagicMock()
    session.request.side_effect = list(responses)
    return session


FFPROBE_OUTPUT = json.dumps(
    {
        "streams": [
            {
                "codec_type": "video",
                "codec_name": "h264",
                "width": 1920,
                "height": 1080,
                "r_frame_rate": "24000/1001",
                "bit_rate": "4500000",
            },
            {
                "codec_type": "audio",
                "codec_name": "aac",
                "sample_rate": "48000",
                "channels": 2,
                "channel_layout": "stereo",
            },
        ],
        "format": {
            "filename": "movie.mkv",
            "format_name": "matroska,webm",
            "duration": "5400.000000",
            "size": "1048576",
            "bit_rate": "5000000",
        },
    }
)


@pytest.fixture
def video_info() -> VideoInfo:
    """Probe result for a 1080p H.264 file."""
    return VideoInfo(
        format=FormatInfo(filename="movie.mkv", format_name="matroska,webm", duration="5400.0"),
        streams=[StreamInfo(codec_type="video", codec_name="h264", width=1920, height=1080)],
    )


@pytest.fixture
def no_env_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    """Hide API keys that may be set in the environment or a .env file."""
    monkeypatch.setattr(constants, "TMDB_API_KEY", None)
    monkeypatch.setattr(constants, "OMDB_API_KEY", None)
    monkeypatch.setattr(constants, "TVDB_API_KEY", None)


@pytest.fixture
def config() -> Config:
    """A configuration that needs no network keys checked."""
    return Config(tmdb_api_key="tmdb-key", batch_mode=True)


@pytest.fixture(autouse=True)
def reset_log_level():
    """Keep log level changes from leaking between tests."""
    level = logger.get_log_level()
    yield
    logger.set_log_level(level)
