"""
Filename parsing and the query/record types exchanged with metadata providers.

Package organization:
- cleaner: Title cleanup (quality tags, scene punctuation, whitespace).
- parser: Delimited-year extraction, ordered season/episode pattern matching
  and the TV/movie extractors built on them.
- models: Immutable MovieQuery/TVQuery search records and the
  MovieRecord/TVEpisodeRecord results returned by providers.

Example:
    from vidkit import metadata
    metadata.extract_tv_show_info("Breaking.Bad.S01E05.Gray.Matter.mp4")
    # TVQuery(title='Breaking Bad', year=0, season=1, episode=5, episode_title='Gray Matter')
"""
from .cleaner import clean_title, strip_quality_terms
from .models import MovieQuery, MovieRecord, TVEpisodeRecord, TVQuery
from .parser import (
    TVPatternMatch,
    clean_episode_title,
    extract_movie_info,
    extract_tv_show_info,
    extract_year,
    match_tv_pattern,
)

__all__ = [
    # Cleaning
    "clean_title",
    "strip_quality_terms",
    # Parsing
    "extract_year",
    "match_tv_pattern",
    "clean_episode_title",
    "extract_movie_info",
    "extract_tv_show_info",
    "TVPatternMatch",
    # Records
    "MovieQuery",
    "TVQuery",
    "MovieRecord",
    "TVEpisodeRecord",
]
