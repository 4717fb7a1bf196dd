"""
User configuration: provider selection, API keys, templates and run modes.

The configuration lives in a JSON file (``~/.config/vidkit/config.json`` by
default, or the path in ``$VIDKIT_CONFIG``). A missing file is created with
the defaults on first load. API keys that are empty in the file are taken
from ``TMDB_API_KEY``, ``OMDB_API_KEY`` and ``TVDB_API_KEY`` (a ``.env`` file
is honoured, see ``constants``).
"""
import json
import os
from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from pathlib import Path

from vidkit.exceptions import ConfigError
from vidkit.utils import constants


class ProviderType(str, Enum):
    """Supported metadata providers."""
    TMDB = "tmdb"  # movies
    OMDB = "omdb"  # movies
    TVMAZE = "tvmaze"  # TV shows
    TVDB = "tvdb"  # TV shows


MOVIE_PROVIDERS = (ProviderType.TMDB, ProviderType.OMDB)
TV_PROVIDERS = (ProviderType.TVMAZE, ProviderType.TVDB, ProviderType.TMDB)


@dataclass
class Config:
    """Application settings, serialized to/from the JSON config file."""

    tmdb_api_key: str = ""
    omdb_api_key: str = ""
    tvdb_api_key: str = ""
    batch_mode: bool = False
    recursive: bool = False
    lowercase: bool = False
    scene_style: bool = False
    separator: str = constants.DEFAULT_SEPARATOR
    file_extensions: list[str] = field(default_factory=lambda: list(constants.VIDEO_EXTENSIONS))
    language: str = constants.DEFAULT_LANGUAGE
    no_overwrite: bool = True
    no_metadata: bool = False
    preview_mode: bool = False
    enable_metadata: bool = True
    movie_provider: ProviderType = ProviderType.TMDB
    tv_provider: ProviderType = ProviderType.TVMAZE
    movie_format: str = constants.DEFAULT_MOVIE_FORMAT
    tv_format: str = constants.DEFAULT_TV_FORMAT
    movie_directory: str = constants.DEFAULT_MOVIE_DIRECTORY
    tv_directory: str = constants.DEFAULT_TV_DIRECTORY
    organize_files: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build a Config from decoded JSON, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        try:
            for key in ("movie_provider", "tv_provider"):
                if key in values:
                    values[key] = ProviderType(values[key])
        except ValueError as e:
            raise ConfigError(f"Unknown provider in config: {e}") from e
        return cls(**values)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["movie_provider"] = self.movie_provider.value
        data["tv_provider"] = self.tv_provider.value
        return data


def config_path() -> Path:
    """Location of the config file ($VIDKIT_CONFIG overrides the default)."""
    return Path(os.getenv(constants.CONFIG_ENV_VAR) or constants.DEFAULT_CONFIG_PATH)


def apply_env_keys(cfg: Config) -> Config:
    """Fill empty API keys from the environment."""
    if not cfg.tmdb_api_key and constants.TMDB_API_KEY:
        cfg.tmdb_api_key = constants.TMDB_API_KEY
    if not cfg.omdb_api_key and constants.OMDB_API_KEY:
        cfg.omdb_api_key = constants.OMDB_API_KEY
    if not cfg.tvdb_api_key and constants.TVDB_API_KEY:
        cfg.tvdb_api_key = constants.TVDB_API_KEY
    return cfg


def load_config(path: Path | None = None) -> Config:
    """
    Load the configuration file, creating it with defaults when absent.

    Raises:
        ConfigError: the file cannot be read, is not valid JSON or names an
            unknown provider.
    """
    path = path or config_path()
    if not path.exists():
        cfg = Config()
        save_config(cfg, path)
        return apply_env_keys(cfg)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return apply_env_keys(Config.from_dict(data))


def save_config(cfg: Config, path: Path | None = None) -> None:
    """Write the configuration as indented JSON, creating parent directories."""
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(cfg.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error writing config file {path}: {e}") from e


def validate_config(cfg: Config) -> None:
    """
    Check the configuration and apply derived defaults in place.

    - Empty movie/TV formats fall back to the defaults.
    - The providers must serve the media type they are selected for.
    - When metadata lookup is enabled, the selected providers must have an
      API key (TVMaze needs none).
    - Scene style turns the default " " separator into ".".
    """
    if not cfg.movie_format:
        cfg.movie_format = constants.DEFAULT_MOVIE_FORMAT
    if not cfg.tv_format:
        cfg.tv_format = constants.DEFAULT_TV_FORMAT

    if cfg.movie_provider not in MOVIE_PROVIDERS:
        raise ConfigError(f"{cfg.movie_provider.value} cannot be used as a movie provider")
    if cfg.tv_provider not in TV_PROVIDERS:
        raise ConfigError(f"{cfg.tv_provider.value} cannot be used as a TV show provider")

    if not cfg.no_metadata and cfg.enable_metadata:
        uses_tmdb = ProviderType.TMDB in (cfg.movie_provider, cfg.tv_provider)
        if uses_tmdb and not cfg.tmdb_api_key:
            raise ConfigError("TMDb API key is required for metadata lookup (set tmdb_api_key in config.json)")
        if cfg.movie_provider == ProviderType.OMDB and not cfg.omdb_api_key:
            raise ConfigError("OMDb API key is required for metadata lookup (set omdb_api_key in config.json)")
        if cfg.tv_provider == ProviderType.TVDB and not cfg.tvdb_api_key:
            raise ConfigError("TVDb API key is required for metadata lookup (set tvdb_api_key in config.json)")

    if cfg.scene_style and cfg.separator == " ":
        cfg.separator = "."
