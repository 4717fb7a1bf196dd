"""Pick the configured metadata provider for movies or TV shows."""
from typing import Callable, Dict

from vidkit.exceptions import ConfigError
from vidkit.providers.base import MetadataProvider
from vidkit.providers.omdb import OMDbProvider
from vidkit.providers.tmdb import TMDbProvider
from vidkit.providers.tvdb import TVDbProvider
from vidkit.providers.tvmaze import TvMazeProvider
from vidkit.utils.config import Config, ProviderType


def create_movie_provider(cfg: Config) -> MetadataProvider:
    """TMDb or OMDb, per `cfg.movie_provider`."""
    if cfg.movie_provider == ProviderType.TMDB:
        return TMDbProvider(cfg.tmdb_api_key)
    if cfg.movie_provider == ProviderType.OMDB:
        return OMDbProvider(cfg.omdb_api_key)
    raise ConfigError(f"unsupported movie provider: {cfg.movie_provider}")


def create_tv_show_provider(cfg: Config) -> MetadataProvider:
    """TVMaze, TVDb or TMDb, per `cfg.tv_provider`."""
    if cfg.tv_provider == ProviderType.TVMAZE:
        return TvMazeProvider()
    if cfg.tv_provider == ProviderType.TVDB:
        return TVDbProvider(cfg.tvdb_api_key)
    if cfg.tv_provider == ProviderType.TMDB:
        return TMDbProvider(cfg.tmdb_api_key)
    raise ConfigError(f"unsupported TV show provider: {cfg.tv_provider}")


def get_provider(cfg: Config, is_tv: bool) -> MetadataProvider:
    """Provider for the type of content."""
    if is_tv:
        return create_tv_show_provider(cfg)
    return create_movie_provider(cfg)


class ProviderCache:
    """
    Provider factory that builds the movie and TV providers once and hands
    the same instances out for every file of a batch, so their HTTP session,
    response cache and login token carry over between files.

    Use it as a context manager, or call `close()`, to close the providers.
    """

    def __init__(self, factory: Callable[[Config, bool], MetadataProvider] = get_provider):
        self._factory = factory
        self._providers: Dict[bool, MetadataProvider] = {}

    def __call__(self, cfg: Config, is_tv: bool) -> MetadataProvider:
        if is_tv not in self._providers:
            self._providers[is_tv] = self._factory(cfg, is_tv)
        return self._providers[is_tv]

    def close(self) -> None:
        providers, self._providers = list(self._providers.values()), {}
        for provider in providers:
            provider.close()

    def __enter__(self) -> "ProviderCache":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
