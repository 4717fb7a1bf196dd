"""TheTVDB integration for TV show metadata lookup."""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

import requests

from vidkit.exceptions import NotFoundError, ProviderAPIError, ProviderError, UnsupportedLookupError
from vidkit.metadata.models import MovieQuery, MovieRecord, TVEpisodeRecord, TVQuery
from vidkit.providers.base import HTTPProvider, logger, year_from_date
from vidkit.utils.constants import TVDB_BASE_URL, TVDB_TOKEN_TTL_HOURS


class TVDbProvider(HTTPProvider):
    """
    TV show lookups against TheTVDB.

    Requests are authenticated with a bearer token obtained from /login.
    Tokens are valid for 24 hours; one is reused for 23 hours and refreshed
    once when the API answers 401.
    """

    name = "tvdb"

    def __init__(self, api_key: str, session: Optional[requests.Session] = None, base_url: str = TVDB_BASE_URL):
        if not api_key:
            raise ProviderError("TVDb API key is required")
        super().__init__(base_url, session=session)
        self.api_key = api_key
        self.api_token = ""
        self.token_expiry = datetime.min

    def _login(self) -> None:
        if self.api_token and datetime.now() < self.token_expiry:
            return
        data = self._decode(self._request("POST", "login", json_body={"apikey": self.api_key}))
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise ProviderAPIError("TVDb login returned no token")
        self.api_token = token
        self.token_expiry = datetime.now() + timedelta(hours=TVDB_TOKEN_TTL_HOURS)

    def _authed_get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        self._login()
        response = self._request("GET", endpoint, params=params, headers=self._auth_header())
        if response.status_code == 401:
            logger.debug("TVDb token rejected, logging in again")
            self.api_token = ""
            self._login()
            response = self._request("GET", endpoint, params=params, headers=self._auth_header())
        return self._decode(response)

    def _auth_header(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.api_token}"}

    def _search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        raise UnsupportedLookupError("movie search is not supported by TVDb. Use the TMDb or OMDb provider instead")

    def _search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        """
        Search series by name (and year when known), then fetch series
        details, the aired-season summary and, for an episode query, the
        episode. Episode lookup failures return the series-level record.
        """
        params: Dict[str, Any] = {"name": query.title}
        if query.year > 0:
            params["year"] = query.year

        try:
            found = self._authed_get("search/series", params).get("data") or []
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to search TV show: {e}") from e

        if not found:
            raise NotFoundError(f"no TV shows found matching '{query.title}'")

        series_id = found[0].get("id")
        try:
            series = self._authed_get(f"series/{series_id}").get("data") or {}
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to get series details: {e}") from e
        try:
            summary = self._authed_get(f"series/{series_id}/episodes/summary").get("data") or {}
        except ProviderAPIError as e:
            raise ProviderAPIError(f"failed to get seasons information: {e}") from e
        if isinstance(summary, list):
            summary = summary[0] if summary else {}

        fields = dict(
            title=series.get("seriesName") or "",
            year=year_from_date(series.get("firstAired")),
            overview=series.get("overview") or "",
            season=query.season,
            episode=query.episode,
            season_count=len(summary.get("airedSeasons") or []),
            network=series.get("network") or "",
            status=series.get("status") or "",
            genres=tuple(series.get("genre") or ()),
        )

        if query.is_episode:
            try:
                data = self._authed_get(
                    f"series/{series_id}/episodes/query",
                    {"airedSeason": query.season, "airedEpisode": query.episode},
                ).get("data")
                ep = (data[0] if data else {}) if isinstance(data, list) else (data or {})
                fields["episode_title"] = ep.get("episodeName") or ""
                fields["air_date"] = ep.get("firstAired") or ""
            except ProviderAPIError as e:
                logger.debug(f"TVDb episode {query.format_episode_id()} not found for series {series_id}: {e}")

        return TVEpisodeRecord(**fields)
