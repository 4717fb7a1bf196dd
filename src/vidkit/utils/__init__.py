"""
Shared constants, configuration, structured logging and path helpers.

The constants module carries the parsing vocabularies and regexes, template
defaults, provider endpoints and status codes; config loads and validates the
user's JSON configuration; logger provides the structured, thread-safe log()
used across the package.
"""

from .constants import (
    CONTENT_TYPE_MOVIE,
    CONTENT_TYPE_TV,
    EPISODE_QUALITY_TERMS,
    FALLBACK_VIDEO_EXTENSIONS,
    SEASON_EPISODE_REGEX,
    SEASON_WORD_EPISODE_REGEX,
    SEASON_X_EPISODE_REGEX,
    STATUS_FAIL,
    STATUS_NO_MATCH,
    STATUS_OK,
    STATUS_PREVIEW,
    STATUS_SKIP,
    TITLE_NOISE_TOKENS,
    UNKNOWN_GENRE,
    UNKNOWN_TECH_VALUE,
    VIDEO_EXTENSIONS,
    YEAR_REGEX,
)
from .logger import LogLevel

__all__ = [
    "VIDEO_EXTENSIONS",
    "FALLBACK_VIDEO_EXTENSIONS",
    "UNKNOWN_GENRE",
    "UNKNOWN_TECH_VALUE",
    "TITLE_NOISE_TOKENS",
    "EPISODE_QUALITY_TERMS",
    "YEAR_REGEX",
    "SEASON_EPISODE_REGEX",
    "SEASON_X_EPISODE_REGEX",
    "SEASON_WORD_EPISODE_REGEX",
    "CONTENT_TYPE_MOVIE",
    "CONTENT_TYPE_TV",
    "STATUS_OK",
    "STATUS_SKIP",
    "STATUS_PREVIEW",
    "STATUS_FAIL",
    "STATUS_NO_MATCH",
    "LogLevel",
]
