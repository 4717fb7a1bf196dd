"""
Metadata provider clients.

All providers implement MetadataProvider (`search_movie`, `search_tv_show`):
- TMDbProvider: movies and TV series (API key).
- OMDbProvider: movies (API key).
- TvMazeProvider: TV shows (no key).
- TVDbProvider: TV shows (API key, bearer token login).

`get_provider(config, is_tv)` returns the one selected in the configuration;
`ProviderCache` wraps it so a batch reuses one provider per content type.
"""
from .base import HTTPProvider, MetadataProvider, year_from_date
from .factory import ProviderCache, create_movie_provider, create_tv_show_provider, get_provider
from .omdb import OMDbProvider
from .tmdb import TMDbProvider
from .tvdb import TVDbProvider
from .tvmaze import TvMazeProvider

__all__ = [
    "MetadataProvider",
    "HTTPProvider",
    "TMDbProvider",
    "OMDbProvider",
    "TvMazeProvider",
    "TVDbProvider",
    "create_movie_provider",
    "create_tv_show_provider",
    "get_provider",
    "ProviderCache",
    "year_from_date",
]
