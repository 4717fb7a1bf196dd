"""
Constants and default settings for filename parsing, naming and lookups.

This module collects the values shared by the parser, the template renderer,
the metadata providers and the rename pipeline: the quality vocabularies used
when cleaning titles, the season/episode and year regular expressions, the
default filename and directory templates, provider endpoints and the status
codes reported for every processed file.
"""

import os
import re

from dotenv import load_dotenv

load_dotenv()

# Content type constants
CONTENT_TYPE_MOVIE = "movie"
CONTENT_TYPE_TV = "tv"

# Run settings
REQUEST_TIMEOUT = 10

# Config file location
CONFIG_ENV_VAR = "VIDKIT_CONFIG"
DEFAULT_CONFIG_PATH = os.path.join(os.path.expanduser("~"), ".config", "vidkit", "config.json")

# Accepted video file extensions
VIDEO_EXTENSIONS = [
    ".mp4", ".mkv", ".avi", ".mov", ".wmv", ".m4v", ".mpg", ".mpeg",
    ".webm", ".flv", ".ts", ".m2ts", ".mts", ".mxf",
]
# Used by is_video_file() when no allow-list is configured
FALLBACK_VIDEO_EXTENSIONS = {
    ".mp4", ".mkv", ".avi", ".mov", ".wmv", ".flv", ".webm", ".m4v", ".mpg", ".mpeg", ".3gp",
}

# Noise removed from every title, in this order
TITLE_NOISE_TOKENS = [
    "1080p", "720p", "480p", "360p",
    "h264", "x264",
    "HDRip", "BRRip", "BluRay", "WEB-DL", "HDTV",
]
TITLE_PUNCTUATION = "[]()._"

# Terms stripped from the text trailing a season/episode marker
EPISODE_QUALITY_TERMS = [
    "1080p", "720p", "480p", "HEVC", "h264", "x264",
    "HDRip", "BRRip", "BluRay", "WEB-DL", "HDTV",
]

# Regex patterns for filename parsing
YEAR_REGEX = re.compile(r"\((\d{4})\)|\[(\d{4})\]")
_SEP = r"[\s._-]"
SEASON_EPISODE_REGEX = re.compile(
    rf"(.*?){_SEP}*s(\d{{1,2}}){_SEP}*e(\d{{1,2}})(?:{_SEP}*(.*))?", re.IGNORECASE
)
SEASON_X_EPISODE_REGEX = re.compile(
    rf"(.*?){_SEP}*(\d{{1,2}})x(\d{{1,2}})(?:{_SEP}*(.*))?", re.IGNORECASE
)
SEASON_WORD_EPISODE_REGEX = re.compile(
    rf"(.*?){_SEP}*(?:season|s){_SEP}*(\d{{1,2}}){_SEP}*(?:episode|ep|e){_SEP}*(\d{{1,2}})(?:{_SEP}*(.*))?",
    re.IGNORECASE,
)

# Characters that cannot appear in a path component
UNSAFE_FILENAME_CHARS = '/\\:*?"<>|'
UNSAFE_REPLACEMENT = "-"

# Default templates
DEFAULT_SEPARATOR = " "
DEFAULT_LANGUAGE = "en"
DEFAULT_MOVIE_FORMAT = "{title} ({year}) [{resolution} {codec}]"
DEFAULT_TV_FORMAT = "{title} S{season:02d}E{episode:02d} {episode_title} [{resolution} {codec}]"
DEFAULT_MOVIE_DIRECTORY = "{genre}/{title} ({year})"
DEFAULT_TV_DIRECTORY = "{genre}/{title}/Season {season}"
UNKNOWN_GENRE = "Unknown"
UNKNOWN_TECH_VALUE = "unknown"

# API keys (may also come from the config file)
TMDB_API_KEY = os.getenv("TMDB_API_KEY")
OMDB_API_KEY = os.getenv("OMDB_API_KEY")
TVDB_API_KEY = os.getenv("TVDB_API_KEY")

# Provider endpoints
TMDB_BASE_URL = "https://api.themoviedb.org/3"
OMDB_BASE_URL = "http://www.omdbapi.com/"
TVMAZE_BASE_URL = "https://api.tvmaze.com"
TVDB_BASE_URL = "https://api.thetvdb.com"
TVDB_TOKEN_TTL_HOURS = 23

# Processing status codes
STATUS_OK = "OK"
STATUS_SKIP = "SKIP"
STATUS_PREVIEW = "PREVIEW"
STATUS_FAIL = "FAIL"
STATUS_NO_MATCH = "NO MATCH"
