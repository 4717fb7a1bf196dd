"""
Metadata provider interface and the shared HTTP plumbing.

Every provider answers the same two questions, `search_movie` and
`search_tv_show`, and raises a ProviderError subclass when it cannot:
NotFoundError when the search has no results, ProviderAPIError for transport,
HTTP status or JSON failures, UnsupportedLookupError for a media type the
service does not cover.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests

from vidkit.exceptions import ProviderAPIError
from vidkit.metadata.models import MovieQuery, MovieRecord, TVEpisodeRecord, TVQuery
from vidkit.utils.constants import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


def year_from_date(date: Optional[str]) -> int:
    """Year of a "YYYY-MM-DD" (or "YYYY...") string, 0 when missing or malformed."""
    if not date or len(date) < 4 or not date[:4].isdigit():
        return 0
    return int(date[:4])


class MetadataProvider(ABC):
    """Movie/TV metadata lookup."""

    name = "provider"

    @abstractmethod
    def search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        """Find the best movie match for a query."""

    @abstractmethod
    def search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        """Find the best show match for a query, with episode details when available."""

    def close(self) -> None:
        """Release any resources held by the provider."""


# Raised while reading fields out of a payload that has an unexpected shape.
PAYLOAD_ERRORS = (KeyError, IndexError, TypeError, AttributeError)


class HTTPProvider(MetadataProvider):
    """
    Base for providers backed by a JSON HTTP API.

    Subclasses implement `_search_movie` and `_search_tv_show`; the public
    methods turn a malformed response into ProviderAPIError so a bad payload
    fails one lookup instead of escaping as a KeyError or TypeError.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None, timeout: int = REQUEST_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    @abstractmethod
    def _search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        ...

    @abstractmethod
    def _search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        ...

    def search_movie(self, query: MovieQuery, language: str) -> MovieRecord:
        try:
            return self._search_movie(query, language)
        except PAYLOAD_ERRORS as e:
            raise ProviderAPIError(f"{self.name}: unexpected movie response: {e!r}") from e

    def search_tv_show(self, query: TVQuery, language: str) -> TVEpisodeRecord:
        try:
            return self._search_tv_show(query, language)
        except PAYLOAD_ERRORS as e:
            raise ProviderAPIError(f"{self.name}: unexpected TV show response: {e!r}") from e

    def close(self) -> None:
        self.session.close()

    def _url(self, endpoint: str) -> str:
        if not endpoint:
            return self.base_url + "/"
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request(
            self,
            method: str,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            json_body: Optional[Dict[str, Any]] = None,
            headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        url = self._url(endpoint)
        logger.debug(f"{self.name}: {method} {url}")
        try:
            return self.session.request(
                method, url, params=params, json=json_body, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise ProviderAPIError(f"Request failed: {e}") from e

    @staticmethod
    def _decode(response: requests.Response) -> Any:
        if response.status_code != 200:
            raise ProviderAPIError(f"HTTP {response.status_code} {response.reason or ''}".strip())
        try:
            return response.json()
        except ValueError as e:
            raise ProviderAPIError(f"Invalid JSON response: {e}") from e

    def _get_json(
            self,
            endpoint: str,
            params: Optional[Dict[str, Any]] = None,
            headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET an endpoint and decode its JSON body, raising ProviderAPIError on failure."""
        return self._decode(self._request("GET", endpoint, params=params, headers=headers))
