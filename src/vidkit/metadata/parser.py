"""
Filename parsing: classify a video filename as TV episode or movie and
extract the fields used to search a metadata provider.

Classification is TV first: a name that matches any season/episode pattern
is an episode, and only names that do not are tried as movies. The season
patterns are tried in a fixed order and the first that matches wins, because
a looser pattern can match names meant for a stricter one.

Years are only recognised in parentheses or square brackets ("(2008)",
"[2008]"). Bare digit runs such as "The.Matrix.1999" are never treated as a
year; too many titles contain numbers.

None of these functions raise. Absent values are reported as 0 / "".
"""

import re
from dataclasses import dataclass

from vidkit.metadata.cleaner import clean_title, strip_quality_terms
from vidkit.metadata.models import MovieQuery, TVQuery
from vidkit.utils import (
    LogLevel,
    SEASON_EPISODE_REGEX,
    SEASON_WORD_EPISODE_REGEX,
    SEASON_X_EPISODE_REGEX,
    YEAR_REGEX,
)
from vidkit.utils import logger
from vidkit.utils.file_util import base_name

# Priority order matters: SxxEyy, then NxMM, then "Season N Episode M".
TV_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("sxxeyy", SEASON_EPISODE_REGEX),
    ("nxmm", SEASON_X_EPISODE_REGEX),
    ("season_episode_words", SEASON_WORD_EPISODE_REGEX),
]


@dataclass(frozen=True)
class TVPatternMatch:
    """Raw pieces of a season/episode match, before any cleaning."""

    show: str
    season: int
    episode: int
    trailing: str
    pattern: str


def extract_year(text: str) -> tuple[int, str]:
    """
    Find a delimited year and remove every delimited year from the text.

    The first match gives the year; all matches are replaced by a space.
    Returns (0, text) unchanged when there is no delimited year.

    Examples:
      "Big Buck Bunny (2008) (2009)" -> (2008, "Big Buck Bunny    ")
      "Show.2020.S01E01" -> (0, "Show.2020.S01E01")
    """
    m = YEAR_REGEX.search(text)
    if not m:
        return 0, text
    year = int(m.group(1) or m.group(2))
    return year, YEAR_REGEX.sub(" ", text)


def match_tv_pattern(name: str) -> TVPatternMatch | None:
    """Try the season/episode patterns in order; None when none matches."""
    for label, rx in TV_PATTERNS:
        m = rx.search(name)
        if m:
            return TVPatternMatch(
                show=m.group(1),
                season=int(m.group(2)),
                episode=int(m.group(3)),
                trailing=m.group(4) or "",
                pattern=label,
            )
    return None


def clean_episode_title(trailing: str) -> str:
    """
    Turn the text after a season/episode marker into an episode title hint.

    Quality terms are stripped first, so a hint that was only quality tags
    becomes "" rather than leaking "1080p" or "HEVC" into an episode title.
    """
    stripped = strip_quality_terms(trailing)
    if not stripped.strip():
        return ""
    return clean_title(stripped)


def extract_tv_show_info(filename: str) -> TVQuery:
    """
    Extract TV episode search fields from a filename.

    Examples:
      "Breaking.Bad.S01E05.Gray.Matter.mp4" -> TVQuery("Breaking Bad", 0, 1, 5, "Gray Matter")
      "Breaking Bad (2008) 1x05.mkv" -> TVQuery("Breaking Bad", 2008, 1, 5, "")
      "Big Buck Bunny (2008).mp4" -> TVQuery("Big Buck Bunny 2008")  (not an episode)
    """
    base = base_name(filename)
    m = match_tv_pattern(base)
    if m is None:
        return TVQuery(title=clean_title(base))

    year, show = extract_year(m.show)
    query = TVQuery(
        title=clean_title(show),
        year=year,
        season=m.season,
        episode=m.episode,
        episode_title=clean_episode_title(m.trailing),
    )
    logger.log(
        "parse.tv",
        LogLevel.TRACE,
        file=base,
        pattern=m.pattern,
        title=query.title,
        year=query.year,
        episode=query.format_episode_id(),
        episode_title=query.episode_title,
    )
    return query


def extract_movie_info(filename: str) -> MovieQuery:
    """
    Extract movie search fields from a filename.

    Returns MovieQuery("", 0) for names that look like TV episodes. Without
    a delimited year the base name is returned verbatim and uncleaned, so
    "The.Matrix.1999.mp4" gives MovieQuery("The.Matrix.1999", 0).

    Examples:
      "Big Buck Bunny (2008) [1080p x264].mp4" -> MovieQuery("Big Buck Bunny", 2008)
      "Breaking Bad S01E01.mp4" -> MovieQuery("", 0)
    """
    if extract_tv_show_info(filename).is_episode:
        return MovieQuery(title="", year=0)

    base = base_name(filename)
    year, remainder = extract_year(base)
    if not year:
        return MovieQuery(title=base, year=0)

    query = MovieQuery(title=clean_title(remainder), year=year)
    logger.log("parse.movie", LogLevel.TRACE, file=base, title=query.title, year=query.year)
    return query
