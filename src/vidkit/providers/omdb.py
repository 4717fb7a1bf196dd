"""OMDb (Open Movie Database) integration for movie metadata lookup."""
from typing import Any, Dict, Optional

import requests

from vidkit.exceptions import NotFoundError, ProviderAPIError, ProviderError, UnsupportedLookupError
from vidkit.metadata.models import MovieQuery, MovieRecord, TVEpisodeRecord, TVQuery
from vidkit.providers.base import HTTPProvider, logger
from vidkit.utils.constants import OMDB_BASE_URL


def parse_omdb_year(value: str) -> int:
    """
    First year of an OMDb "Year" field.

    OMDb returns ranges for series ("2008–2013", with an en dash) and
    sometimes with a plain hyphen; only the first year is kept.
    """
    first = value.split("–")[0].split("-")[0].strip()
    return int(first) if first.isdigit() else 0


class OMDbProvider(HTTPProvider):
    """Movie lookups against the OMDb API (search by title, then details by IMDb ID)."""

    name = "omdb"

    def __init__(self, api_key: str, session: Optional[requests.Session] = None, base_url: str = OMDB_BASE_URL):
        if not api_key:
            raise ProviderError("OMDb API key is required")
        super().__init__(base_url, session=session)
        self.api_key = api_key

    def _call(self, params: Dict[str, Any]) -> Dict[str, Any]:
        return self._get_json("", {"apikey": self.api_key, **params})

    def _search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        """Search OMDb; when a search with a year fails, retry without it."""
        params = {"s": query.title, "type": "movie"}
        if query.year > 0:
            params["y"] = str(query.year)

        try:
            found = self._call(params)
            if found.get("Response") != "True" and query.year > 0:
                del params["y"]
                found = self._call(params)
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to search movie: {e}") from e

        results = found.get("Search") or []
        if found.get("Response") != "True" or not results:
            raise NotFoundError(f"no movies found matching '{query.title}'")

        imdb_id = results[0].get("imdbID")
        logger.info(f"OMDb matched movie '{results[0].get('Title')}' ({imdb_id})")
        try:
            movie = self._call({"i": imdb_id, "plot": "full"})
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to get movie details: {e}") from e

        if movie.get("Response") != "True":
            raise ProviderAPIError(f"failed to get movie details: {movie.get('Error', 'unknown error')}")

        genres = tuple(g.strip() for g in (movie.get("Genre") or "").split(",") if g.strip() and g.strip() != "N/A")
        return MovieRecord(
            title=movie.get("Title") or "",
            year=parse_omdb_year(movie.get("Year") or ""),
            overview=movie.get("Plot") or "",
            genres=genres,
        )

    def _search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        raise UnsupportedLookupError(
            "TV show search is not supported by OMDb. Use the TVMaze or TVDb provider instead"
        )
