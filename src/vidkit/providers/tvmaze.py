"""TVMaze integration for TV show metadata lookup (no API key needed)."""
import re
from html import unescape
from typing import Optional

import requests

from vidkit.exceptions import NotFoundError, ProviderAPIError, UnsupportedLookupError
from vidkit.metadata.models import MovieQuery, MovieRecord, TVEpisodeRecord, TVQuery
from vidkit.providers.base import HTTPProvider, logger, year_from_date
from vidkit.utils.constants import TVMAZE_BASE_URL

_TAG_RE = re.compile(r"</?(?:p|b|i|br|em|strong)\s*/?>", re.IGNORECASE)


def clean_html_tags(html: Optional[str]) -> str:
    """Strip the simple markup TVMaze uses in summaries and decode entities."""
    if not html:
        return ""
    text = _TAG_RE.sub("", html).replace("&nbsp;", " ")
    return unescape(text).strip()


class TvMazeProvider(HTTPProvider):
    """TV show lookups against the public TVMaze API."""

    name = "tvmaze"

    def __init__(self, session: Optional[requests.Session] = None, base_url: str = TVMAZE_BASE_URL):
        super().__init__(base_url, session=session)

    def _search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        raise UnsupportedLookupError("TvMaze does not support movie lookups")

    def _search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        """
        Search shows by name, take the first result and fetch it with its
        seasons embedded. For an episode query the episode is fetched too;
        if that fails the show-level record is returned.
        """
        try:
            results = self._get_json("search/shows", {"q": query.title})
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to search TV show: {e}") from e

        if not results:
            raise NotFoundError(f"no TV shows found matching '{query.title}'")

        show_id = results[0]["show"]["id"]
        try:
            show = self._get_json(f"shows/{show_id}", {"embed": "seasons"})
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to get show details: {e}") from e

        fields = dict(
            title=show.get("name") or "",
            year=year_from_date(show.get("premiered")),
            overview=clean_html_tags(show.get("summary")),
            season=query.season,
            episode=query.episode,
            season_count=len((show.get("_embedded") or {}).get("seasons") or []),
            network=(show.get("network") or {}).get("name") or "",
            status=show.get("status") or "",
            genres=tuple(show.get("genres") or ()),
        )

        if query.is_episode:
            try:
                ep = self._get_json(
                    f"shows/{show_id}/episodebynumber",
                    {"season": query.season, "number": query.episode},
                )
                fields["season"] = ep.get("season") or query.season
                fields["episode"] = ep.get("number") or query.episode
                fields["episode_title"] = ep.get("name") or ""
                fields["air_date"] = ep.get("airdate") or ""
            except ProviderAPIError as e:
                logger.debug(f"TvMaze episode {query.format_episode_id()} not found for show {show_id}: {e}")

        return TVEpisodeRecord(**fields)
