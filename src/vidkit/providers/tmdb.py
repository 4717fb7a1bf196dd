"""TMDb (The Movie Database) integration for movie and TV metadata lookup."""
import threading
from typing import Any, Dict, Optional

import requests

from vidkit.exceptions import NotFoundError, ProviderAPIError
from vidkit.metadata.models import MovieQuery, MovieRecord, TVEpisodeRecord, TVQuery
from vidkit.providers.base import HTTPProvider, logger, year_from_date
from vidkit.utils.constants import TMDB_BASE_URL


class TMDbProvider(HTTPProvider):
    """
    Client for The Movie Database API.

    Searches take the first result and then fetch its details. Results are
    kept in a thread-safe in-memory cache keyed on the query, so repeated
    lookups for episodes of the same show only hit the API once per episode.
    """

    name = "tmdb"

    def __init__(self, api_key: str, session: Optional[requests.Session] = None, base_url: str = TMDB_BASE_URL):
        super().__init__(base_url, session=session)
        self.api_key = api_key
        self._cache: Dict[str, Any] = {}
        self._cache_lock = threading.Lock()

    def _call(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._get_json(endpoint, {"api_key": self.api_key, **(params or {})})

    def _cached(self, key: str):
        with self._cache_lock:
            return self._cache.get(key)

    def _store(self, key: str, value):
        with self._cache_lock:
            self._cache[key] = value
        return value

    def _search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        """
        Search for a movie, retrying without the year when the year-filtered
        search finds nothing.
        """
        cache_key = f"movie:{query.title}:{query.year}:{language}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        options = {"language": language, "query": query.title, "include_adult": "false"}
        if query.year > 0:
            options["year"] = str(query.year)

        try:
            results = self._call("search/movie", options).get("results") or []
            if not results and query.year > 0:
                del options["year"]
                results = self._call("search/movie", options).get("results") or []
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to search movie: {e}") from e

        if not results:
            raise NotFoundError(f"no movies found matching '{query.title}'")

        movie_id = results[0].get("id")
        logger.info(f"TMDb matched movie '{results[0].get('title')}' (id {movie_id})")
        try:
            details = self._call(f"movie/{movie_id}", {"language": language})
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to get movie details: {e}") from e

        record = MovieRecord(
            title=details.get("title") or "",
            year=year_from_date(details.get("release_date")),
            overview=details.get("overview") or "",
            genres=tuple(g.get("name", "") for g in details.get("genres") or []),
        )
        return self._store(cache_key, record)

    def _search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        """
        Search for a TV series, then fetch series details and, for an
        episode query, the episode's name and air date. A failed episode
        lookup still returns the series-level record.
        """
        cache_key = f"tv:{query.title}:{query.year}:{query.season}:{query.episode}:{language}"
        cached = self._cached(cache_key)
        if cached is not None:
            return cached

        options = {"language": language, "query": query.title, "include_adult": "false"}
        if query.year > 0:
            options["first_air_date_year"] = str(query.year)

        try:
            results = self._call("search/tv", options).get("results") or []
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to search TV show: {e}") from e

        if not results:
            raise NotFoundError(f"no TV shows found matching '{query.title}'")

        tmdb_id = results[0].get("id")
        try:
            details = self._call(f"tv/{tmdb_id}", {"language": language})
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to get TV show details: {e}") from e

        fields = dict(
            title=details.get("name") or "",
            year=year_from_date(details.get("first_air_date")),
            overview=details.get("overview") or "",
            season=query.season,
            episode=query.episode,
            season_count=details.get("number_of_seasons") or 0,
            network=((details.get("networks") or [{}])[0]).get("name", ""),
            status=details.get("status") or "",
            genres=tuple(g.get("name", "") for g in details.get("genres") or []),
        )

        if query.is_episode:
            try:
                ep = self._call(f"tv/{tmdb_id}/season/{query.season}/episode/{query.episode}", {"language": language})
                fields["episode_title"] = ep.get("name") or ""
                fields["air_date"] = ep.get("air_date") or ""
            except ProviderAPIError as e:
                logger.debug(f"Episode {query.format_episode_id()} not found for show ID {tmdb_id}: {e}")

        return self._store(cache_key, TVEpisodeRecord(**fields))
