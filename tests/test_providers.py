"""Tests for the metadata provider clients."""

from datetime import datetime, timedelta

import pytest
import requests

from conftest import make_response, make_session
from vidkit.exceptions import (
    NotFoundError,
    ProviderAPIError,
    ProviderError,
    UnsupportedLookupError,
)
from vidkit.metadata.models import MovieQuery, MovieRecord, TVQuery
from vidkit.providers import (
    OMDbProvider,
    TMDbProvider,
    TVDbProvider,
    TvMazeProvider,
    year_from_date,
)
from vidkit.providers.omdb import parse_omdb_year
from vidkit.providers.tvmaze import clean_html_tags

MATRIX_SEARCH = {"results": [{"id": 603, "title": "The Matrix"}]}
MATRIX_DETAILS = {
    "title": "The Matrix",
    "release_date": "1999-03-30",
    "overview": "A hacker learns the truth.",
    "genres": [{"name": "Action"}, {"name": "Science Fiction"}],
}


def _params(session, index: int) -> dict:
    return session.request.call_args_list[index].kwargs["params"]


def _url(session, index: int) -> str:
    return session.request.call_args_list[index].args[1]


class TestYearHelpers:
    """Tests for date/year parsing helpers."""

    @pytest.mark.parametrize(
        ("date", "expected"),
        [("1999-03-30", 1999), ("2008", 2008), ("", 0), (None, 0), ("n/a", 0)],
    )
    def test_year_from_date(self, date, expected: int) -> None:
        """Test years taken from ISO dates."""
        assert year_from_date(date) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("1999", 1999), ("2008–2013", 2008), ("2008-2013", 2008), ("N/A", 0), ("", 0)],
    )
    def test_parse_omdb_year(self, value: str, expected: int) -> None:
        """Test OMDb year ranges."""
        assert parse_omdb_year(value) == expected


class TestTMDbProvider:
    """Tests for TMDbProvider."""

    def test_search_movie(self) -> None:
        """Test search then details."""
        session = make_session(make_response(MATRIX_SEARCH), make_response(MATRIX_DETAILS))
        provider = TMDbProvider("key", session=session)

        record = provider.search_movie(MovieQuery("The Matrix", 1999), "en")

        assert record == MovieRecord(
            title="The Matrix",
            year=1999,
            overview="A hacker learns the truth.",
            genres=("Action", "Science Fiction"),
        )
        assert _url(session, 0) == "https://api.themoviedb.org/3/search/movie"
        assert _params(session, 0)["year"] == "1999"
        assert _params(session, 0)["api_key"] == "key"
        assert _url(session, 1) == "https://api.themoviedb.org/3/movie/603"

    def test_search_movie_retries_without_year(self) -> None:
        """Test that an empty year-filtered search is retried without the year."""
        session = make_session(
            make_response({"results": []}),
            make_response(MATRIX_SEARCH),
            make_response(MATRIX_DETAILS),
        )
        provider = TMDbProvider("key", session=session)

        record = provider.search_movie(MovieQuery("The Matrix", 2001), "en")

        assert record.year == 1999
        assert session.request.call_count == 3
        assert "year" not in _params(session, 1)

    def test_search_movie_not_found(self) -> None:
        """Test that no results raise NotFoundError."""
        session = make_session(make_response({"results": []}))
        provider = TMDbProvider("key", session=session)

        with pytest.raises(NotFoundError, match="no movies found matching 'Nothing'"):
            provider.search_movie(MovieQuery("Nothing"), "en")

    def test_search_movie_http_error(self) -> None:
        """Test that HTTP errors become ProviderAPIError."""
        session = make_session(make_response({}, status_code=401, reason="Unauthorized"))
        provider = TMDbProvider("bad", session=session)

        with pytest.raises(ProviderAPIError, match="failed to search movie: HTTP 401"):
            provider.search_movie(MovieQuery("The Matrix"), "en")

    def test_search_movie_connection_error(self) -> None:
        """Test that transport errors become ProviderAPIError."""
        session = make_session(requests.exceptions.ConnectionError("offline"))
        provider = TMDbProvider("key", session=session)

        with pytest.raises(ProviderAPIError, match="offline"):
            provider.search_movie(MovieQuery("The Matrix"), "en")

    def test_search_movie_details_error(self) -> None:
        """Test that a failed detail fetch is reported."""
        session = make_session(make_response(MATRIX_SEARCH), make_response(None, status_code=500, reason="Error"))
        provider = TMDbProvider("key", session=session)

        with pytest.raises(ProviderAPIError, match="failed to get movie details"):
            provider.search_movie(MovieQuery("The Matrix"), "en")

    def test_search_movie_is_cached(self) -> None:
        """Test that a repeated lookup is answered from the cache."""
        session = make_session(make_response(MATRIX_SEARCH), make_response(MATRIX_DETAILS))
        provider = TMDbProvider("key", session=session)

        first = provider.search_movie(MovieQuery("The Matrix", 1999), "en")
        second = provider.search_movie(MovieQuery("The Matrix", 1999), "en")

        assert first is second
        assert session.request.call_count == 2

    def test_malformed_search_result(self) -> None:
        """Test that a result entry that is not an object becomes a ProviderAPIError."""
        provider = TMDbProvider("key", session=make_session(make_response({"results": ["The Matrix"]})))
        with pytest.raises(ProviderAPIError, match="unexpected movie response"):
            provider.search_movie(MovieQuery("The Matrix"), "en")

    def test_search_tv_show_with_episode(self) -> None:
        """Test show search, details and episode lookup."""
        session = make_session(
            make_response({"results": [{"id": 1396, "name": "Breaking Bad"}]}),
            make_response(
                {
                    "name": "Breaking Bad",
                    "first_air_date": "2008-01-20",
                    "number_of_seasons": 5,
                    "networks": [{"name": "AMC"}],
                    "status": "Ended",
                    "genres": [{"name": "Drama"}],
                }
            ),
            make_response({"name": "Gray Matter", "air_date": "2008-02-24"}),
        )
        provider = TMDbProvider("key", session=session)

        record = provider.search_tv_show(TVQuery("Breaking Bad", season=1, episode=5), "en")

        assert (record.title, record.year, record.season_count, record.network) == ("Breaking Bad", 2008, 5, "AMC")
        assert (record.season, record.episode, record.episode_title) == (1, 5, "Gray Matter")
        assert record.air_date == "2008-02-24"
        assert _url(session, 2) == "https://api.themoviedb.org/3/tv/1396/season/1/episode/5"

    def test_search_tv_show_episode_failure_keeps_show(self) -> None:
        """Test that a failed episode lookup still returns the show."""
        session = make_session(
            make_response({"results": [{"id": 1396}]}),
            make_response({"name": "Breaking Bad", "first_air_date": "2008-01-20"}),
            make_response(None, status_code=404, reason="Not Found"),
        )
        provider = TMDbProvider("key", session=session)

        record = provider.search_tv_show(TVQuery("Breaking Bad", season=9, episode=9), "en")

        assert record.title == "Breaking Bad"
        assert (record.season, record.episode, record.episode_title) == (9, 9, "")


class TestOMDbProvider:
    """Tests for OMDbProvider."""

    DETAILS = {
        "Response": "True",
        "Title": "The Matrix",
        "Year": "1999",
        "Plot": "A hacker learns the truth.",
        "Genre": "Action, Sci-Fi",
    }

    def test_requires_api_key(self) -> None:
        """Test that an empty key is rejected."""
        with pytest.raises(ProviderError, match="API key is required"):
            OMDbProvider("")

    def test_search_movie(self) -> None:
        """Test search by title then details by IMDb ID."""
        session = make_session(
            make_response({"Response": "True", "Search": [{"Title": "The Matrix", "imdbID": "tt0133093"}]}),
            make_response(self.DETAILS),
        )
        provider = OMDbProvider("key", session=session)

        record = provider.search_movie(MovieQuery("The Matrix", 1999), "en")

        assert record == MovieRecord("The Matrix", 1999, "A hacker learns the truth.", ("Action", "Sci-Fi"))
        assert _url(session, 0) == "http://www.omdbapi.com/"
        assert _params(session, 0) == {"apikey": "key", "s": "The Matrix", "type": "movie", "y": "1999"}
        assert _params(session, 1) == {"apikey": "key", "i": "tt0133093", "plot": "full"}

    def test_retries_without_year(self) -> None:
        """Test the retry without the year filter."""
        session = make_session(
            make_response({"Response": "False", "Error": "Movie not found!"}),
            make_response({"Response": "True", "Search": [{"imdbID": "tt0133093"}]}),
            make_response(self.DETAILS),
        )
        provider = OMDbProvider("key", session=session)

        assert provider.search_movie(MovieQuery("The Matrix", 2005), "en").title == "The Matrix"
        assert "y" not in _params(session, 1)

    def test_not_found(self) -> None:
        """Test that an unsuccessful search raises NotFoundError."""
        session = make_session(make_response({"Response": "False", "Error": "Movie not found!"}))
        provider = OMDbProvider("key", session=session)

        with pytest.raises(NotFoundError):
            provider.search_movie(MovieQuery("Nothing"), "en")

    def test_tv_is_unsupported(self) -> None:
        """Test that TV lookups are refused."""
        provider = OMDbProvider("key", session=make_session())
        with pytest.raises(UnsupportedLookupError):
            provider.search_tv_show(TVQuery("Show", season=1, episode=1), "en")


class TestTvMazeProvider:
    """Tests for TvMazeProvider."""

    SHOW = {
        "name": "Breaking Bad",
        "premiered": "2008-01-20",
        "summary": "<p><b>Breaking Bad</b> follows a chemistry teacher &amp; his partner.</p>",
        "_embedded": {"seasons": [{"number": n} for n in range(1, 6)]},
        "network": {"name": "AMC"},
        "status": "Ended",
        "genres": ["Drama", "Crime"],
    }

    def test_clean_html_tags(self) -> None:
        """Test summary markup removal."""
        assert clean_html_tags("<p>A&nbsp;<i>b</i> &amp; c<br/></p>") == "A b & c"
        assert clean_html_tags(None) == ""

    def test_search_tv_show_with_episode(self) -> None:
        """Test show search, details and episode lookup."""
        session = make_session(
            make_response([{"score": 1.0, "show": {"id": 169}}]),
            make_response(self.SHOW),
            make_response({"season": 1, "number": 5, "name": "Gray Matter", "airdate": "2008-02-24"}),
        )
        provider = TvMazeProvider(session=session)

        record = provider.search_tv_show(TVQuery("Breaking Bad", season=1, episode=5), "en")

        assert record.title == "Breaking Bad"
        assert record.year == 2008
        assert record.overview == "Breaking Bad follows a chemistry teacher & his partner."
        assert record.season_count == 5
        assert record.network == "AMC"
        assert record.genres == ("Drama", "Crime")
        assert (record.season, record.episode, record.episode_title) == (1, 5, "Gray Matter")
        assert _url(session, 0) == "https://api.tvmaze.com/search/shows"
        assert _params(session, 1) == {"embed": "seasons"}
        assert _params(session, 2) == {"season": 1, "number": 5}

    def test_episode_failure_keeps_show(self) -> None:
        """Test the show-level fallback."""
        session = make_session(
            make_response([{"show": {"id": 169}}]),
            make_response(self.SHOW),
            make_response(None, status_code=404, reason="Not Found"),
        )
        provider = TvMazeProvider(session=session)

        record = provider.search_tv_show(TVQuery("Breaking Bad", season=7, episode=1), "en")

        assert record.title == "Breaking Bad"
        assert (record.season, record.episode, record.episode_title) == (7, 1, "")

    def test_not_found(self) -> None:
        """Test that an empty search raises NotFoundError."""
        provider = TvMazeProvider(session=make_session(make_response([])))
        with pytest.raises(NotFoundError, match="no TV shows found"):
            provider.search_tv_show(TVQuery("Nothing", season=1, episode=1), "en")

    def test_movie_is_unsupported(self) -> None:
        """Test that movie lookups are refused."""
        with pytest.raises(UnsupportedLookupError, match="TvMaze does not support movie lookups"):
            TvMazeProvider(session=make_session()).search_movie(MovieQuery("X"), "en")

    def test_malformed_search_result(self) -> None:
        """Test that a search result without a show becomes a ProviderAPIError."""
        provider = TvMazeProvider(session=make_session(make_response([{"score": 1}])))
        with pytest.raises(ProviderAPIError, match="tvmaze: unexpected TV show response: KeyError"):
            provider.search_tv_show(TVQuery("Breaking Bad", season=1, episode=1), "en")


class TestTVDbProvider:
    """Tests for TVDbProvider."""

    def _lookup_responses(self):
        return [
            make_response({"token": "tok"}),
            make_response({"data": [{"id": 81189, "seriesName": "Breaking Bad"}]}),
            make_response(
                {
                    "data": {
                        "seriesName": "Breaking Bad",
                        "firstAired": "2008-01-20",
                        "network": "AMC",
                        "status": "Ended",
                        "genre": ["Drama"],
                    }
                }
            ),
            make_response({"data": {"airedSeasons": ["1", "2", "3", "4", "5", "0"]}}),
            make_response({"data": [{"episodeName": "Gray Matter", "firstAired": "2008-02-24"}]}),
        ]

    def test_requires_api_key(self) -> None:
        """Test that an empty key is rejected."""
        with pytest.raises(ProviderError, match="API key is required"):
            TVDbProvider("")

    def test_search_tv_show(self) -> None:
        """Test login, search, details, summary and episode lookup."""
        session = make_session(*self._lookup_responses())
        provider = TVDbProvider("key", session=session)

        record = provider.search_tv_show(TVQuery("Breaking Bad", year=2008, season=1, episode=5), "en")

        assert record.title == "Breaking Bad"
        assert record.year == 2008
        assert record.season_count == 6
        assert record.network == "AMC"
        assert (record.season, record.episode, record.episode_title) == (1, 5, "Gray Matter")
        login = session.request.call_args_list[0]
        assert login.args == ("POST", "https://api.thetvdb.com/login")
        assert login.kwargs["json"] == {"apikey": "key"}
        search = session.request.call_args_list[1]
        assert search.kwargs["headers"] == {"Authorization": "Bearer tok"}
        assert search.kwargs["params"] == {"name": "Breaking Bad", "year": 2008}
        assert _params(session, 4) == {"airedSeason": 1, "airedEpisode": 5}

    def test_token_is_reused(self) -> None:
        """Test that a valid token skips the login."""
        session = make_session(make_response({"data": []}))
        provider = TVDbProvider("key", session=session)
        provider.api_token = "cached"
        provider.token_expiry = datetime.now() + timedelta(hours=1)

        with pytest.raises(NotFoundError):
            provider.search_tv_show(TVQuery("Nothing", season=1, episode=1), "en")
        assert session.request.call_count == 1

    def test_relogin_on_401(self) -> None:
        """Test that a rejected token triggers one new login."""
        session = make_session(
            make_response(None, status_code=401, reason="Unauthorized"),
            make_response({"token": "fresh"}),
            make_response({"data": []}),
        )
        provider = TVDbProvider("key", session=session)
        provider.api_token = "stale"
        provider.token_expiry = datetime.now() + timedelta(hours=1)

        with pytest.raises(NotFoundError):
            provider.search_tv_show(TVQuery("Nothing", season=1, episode=1), "en")
        assert provider.api_token == "fresh"
        assert session.request.call_args_list[2].kwargs["headers"] == {"Authorization": "Bearer fresh"}

    def test_login_without_token(self) -> None:
        """Test that a login response without token is an API error."""
        provider = TVDbProvider("key", session=make_session(make_response({})))
        with pytest.raises(ProviderAPIError, match="failed to search TV show"):
            provider.search_tv_show(TVQuery("Show", season=1, episode=1), "en")

    def test_movie_is_unsupported(self) -> None:
        """Test that movie lookups are refused."""
        with pytest.raises(UnsupportedLookupError):
            TVDbProvider("key", session=make_session()).search_movie(MovieQuery("X"), "en")
