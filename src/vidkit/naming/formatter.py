"""
Build target paths for movies and TV episodes from metadata records.

The record and the probed technical info are flattened into a field map for
the template engine. Every placeholder that applies to the media type gets a
value: an absent genre renders as "Unknown" and an absent network as "". Movie
maps carry no season, episode or network, so those tokens stay verbatim in a
movie template.

The target path is:
    <original directory>/<rendered directory>/<rendered filename><extension>
where the directory part is only used when `organize_files` is on and a
directory template is configured. For movies it additionally requires a
non-empty title.
"""
from pathlib import Path

from vidkit.media.probe import MediaTechInfo
from vidkit.metadata.models import MovieRecord, TVEpisodeRecord
from vidkit.naming.template import render_directory_template, render_template
from vidkit.utils import UNKNOWN_GENRE
from vidkit.utils.config import Config


def _first_genre(genres) -> str:
    return genres[0] if genres else UNKNOWN_GENRE


def build_movie_fields(record: MovieRecord, tech: MediaTechInfo) -> dict[str, object]:
    """Field map for movie templates."""
    return {
        "title": record.title,
        "year": record.year,
        "resolution": tech.resolution,
        "codec": tech.codec,
        "genre": _first_genre(record.genres),
    }


def build_tv_fields(record: TVEpisodeRecord, tech: MediaTechInfo) -> dict[str, object]:
    """Field map for TV episode templates."""
    return {
        "title": record.title,
        "year": record.year,
        "resolution": tech.resolution,
        "codec": tech.codec,
        "season": record.season,
        "episode": record.episode,
        "episode_title": record.episode_title,
        "network": record.network,
        "genre": _first_genre(record.genres),
    }


def _build_path(
        original: Path,
        fields: dict[str, object],
        file_template: str,
        dir_template: str,
        organize: bool,
        cfg: Config,
) -> Path:
    filename = render_template(
        file_template, fields, separator=cfg.separator, lowercase=cfg.lowercase, sanitize=True
    )
    base_dir = original.parent
    if organize and dir_template:
        directory = render_directory_template(
            dir_template, fields, separator=cfg.separator, lowercase=cfg.lowercase
        )
        return base_dir / directory / f"{filename}{original.suffix}"
    return base_dir / f"{filename}{original.suffix}"


def generate_movie_path(original: Path, tech: MediaTechInfo, record: MovieRecord, cfg: Config) -> Path:
    """
    Target path for a movie.

    Example (default formats, organize_files on):
      /in/big.buck.bunny.mkv + MovieRecord("Big Buck Bunny", 2008, genres=("Animation",))
      -> /in/Animation/Big Buck Bunny (2008)/Big Buck Bunny (2008) [1080p h264].mkv
    """
    fields = build_movie_fields(record, tech)
    organize = cfg.organize_files and bool(record.title)
    return _build_path(original, fields, cfg.movie_format, cfg.movie_directory, organize, cfg)


def generate_tv_path(original: Path, tech: MediaTechInfo, record: TVEpisodeRecord, cfg: Config) -> Path:
    """
    Target path for a TV episode.

    Example (default formats, organize_files on):
      /in/bb.s01e05.mkv + TVEpisodeRecord("Breaking Bad", season=1, episode=5,
                                           episode_title="Gray Matter", genres=("Drama",))
      -> /in/Drama/Breaking Bad/Season 1/Breaking Bad S01E05 Gray Matter [1080p h264].mkv
    """
    fields = build_tv_fields(record, tech)
    return _build_path(original, fields, cfg.tv_format, cfg.tv_directory, cfg.organize_files, cfg)
