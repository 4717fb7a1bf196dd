"""
Per-file pipeline: probe, classify, look up metadata, render the target path
and rename.

Functions:
- classify_filename: TV episode first, then movie, else unrecognized.
- process_file: Full pipeline for one file, returning a RenameResult.

Everything that can go wrong for a single file (ffprobe failure, provider
errors, "no results", filesystem errors) ends up in the returned result with
a status code and a log line; nothing is raised to the caller, so a batch
keeps going past a bad file.
"""

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from vidkit.exceptions import ConfigError, ProbeError, ProviderError
from vidkit.media.probe import (
    VideoInfo,
    ffprobe_video_info,
    format_bit_rate,
    format_file_size,
    format_frame_rate,
    tech_info,
)
from vidkit.metadata.models import MovieQuery, TVQuery
from vidkit.metadata.parser import extract_movie_info, extract_tv_show_info
from vidkit.naming.formatter import generate_movie_path, generate_tv_path
from vidkit.providers.base import MetadataProvider
from vidkit.providers.factory import get_provider
from vidkit.utils import (
    CONTENT_TYPE_MOVIE,
    CONTENT_TYPE_TV,
    LogLevel,
    STATUS_FAIL,
    STATUS_NO_MATCH,
    STATUS_OK,
    STATUS_PREVIEW,
    STATUS_SKIP,
)
from vidkit.utils import logger
from vidkit.utils.config import Config

ProviderFactory = Callable[[Config, bool], MetadataProvider]
Prober = Callable[[Path], VideoInfo]
Confirm = Callable[[Path, Path], bool]


@dataclass
class RenameResult:
    """Outcome of processing one file."""

    source: Path
    status: str
    media_type: Optional[str] = None
    target: Optional[Path] = None
    message: str = ""

    @property
    def renamed(self) -> bool:
        return self.status == STATUS_OK


def classify_filename(filename: str) -> tuple[Optional[str], Union[TVQuery, MovieQuery, None]]:
    """
    Classify a filename as exactly one of TV episode, movie or unrecognized.

    Returns (CONTENT_TYPE_TV, TVQuery), (CONTENT_TYPE_MOVIE, MovieQuery) or
    (None, None).
    """
    tv = extract_tv_show_info(filename)
    if tv.is_episode:
        return CONTENT_TYPE_TV, tv
    movie = extract_movie_info(filename)
    if movie.is_movie:
        return CONTENT_TYPE_MOVIE, movie
    return None, None


def _log_probe(path: Path, info: VideoInfo) -> None:
    tech = tech_info(info)
    stream = info.video_stream
    logger.log(
        "probe.info",
        LogLevel.DEBUG,
        file=path.name,
        container=info.format.format_name,
        duration=info.format.duration,
        resolution=tech.resolution,
        codec=tech.codec,
        frame_rate=format_frame_rate(stream.frame_rate) if stream else "N/A",
        bit_rate=format_bit_rate(info.format.bit_rate),
        size=format_file_size(info.format.size),
        streams=len(info.streams),
    )


def process_file(
        path: Path,
        cfg: Config,
        provider_factory: ProviderFactory = get_provider,
        probe: Prober = ffprobe_video_info,
        confirm: Optional[Confirm] = None,
) -> RenameResult:
    """
    Run the whole pipeline for one file.

    Parameters:
    - path: Video file to process.
    - cfg: Validated configuration.
    - provider_factory: Returns the metadata provider for (cfg, is_tv).
    - probe: Returns the VideoInfo of a file (ffprobe by default).
    - confirm: Asked before renaming unless `cfg.batch_mode` is set; None
      renames without asking.

    Returns:
    - RenameResult with one of the status codes OK, SKIP, PREVIEW, NO MATCH, FAIL.
    """
    path = Path(path)
    try:
        info = probe(path)
    except ProbeError as e:
        logger.log("probe.error", LogLevel.ERROR, file=str(path), error=str(e))
        return RenameResult(path, STATUS_FAIL, message=f"error analyzing video: {e}")
    _log_probe(path, info)

    if cfg.no_metadata:
        return RenameResult(path, STATUS_SKIP, message="metadata lookup disabled")

    media_type, query = classify_filename(path.name)
    if media_type is None:
        logger.log("parse.unrecognized", LogLevel.WARN, file=path.name)
        return RenameResult(path, STATUS_SKIP, message="filename not recognized as movie or TV episode")

    is_tv = media_type == CONTENT_TYPE_TV
    log_fields = {"file": path.name, "type": media_type, "search_term": query.title, "year": query.year}
    if is_tv:
        log_fields["episode"] = query.format_episode_id()
    logger.log("lookup.start", LogLevel.INFO, **log_fields)

    try:
        provider = provider_factory(cfg, is_tv)
        if is_tv:
            record = provider.search_tv_show(query, cfg.language)
        else:
            record = provider.search_movie(query, cfg.language)
    except ConfigError as e:
        logger.log("lookup.config_error", LogLevel.ERROR, file=path.name, error=str(e))
        return RenameResult(path, STATUS_FAIL, media_type, message=str(e))
    except ProviderError as e:
        logger.log("lookup.no_match", LogLevel.WARN, file=path.name, search_term=query.title, error=str(e))
        return RenameResult(path, STATUS_NO_MATCH, media_type, message=str(e))

    logger.log("lookup.match", LogLevel.INFO, file=path.name, title=record.title, year=record.year)

    tech = tech_info(info)
    if is_tv:
        target = generate_tv_path(path, tech, record, cfg)
    else:
        target = generate_movie_path(path, tech, record, cfg)
    logger.log("rename.propose", LogLevel.INFO, file=str(path), target=str(target))

    if cfg.preview_mode:
        return RenameResult(path, STATUS_PREVIEW, media_type, target, "preview mode, file not renamed")

    if target == path:
        return RenameResult(path, STATUS_SKIP, media_type, target, "already named correctly")

    if cfg.no_overwrite and target.exists():
        logger.log("rename.exists", LogLevel.WARN, file=path.name, target=str(target))
        return RenameResult(path, STATUS_SKIP, media_type, target, "target file already exists")

    if not cfg.batch_mode and confirm is not None and not confirm(path, target):
        return RenameResult(path, STATUS_SKIP, media_type, target, "rename declined")

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(path), str(target))
    except OSError as e:
        logger.log("rename.error", LogLevel.ERROR, file=str(path), target=str(target), error=str(e))
        return RenameResult(path, STATUS_FAIL, media_type, target, f"error renaming file: {e}")

    logger.log("rename.apply", LogLevel.INFO, file=str(path), target=str(target))
    return RenameResult(path, STATUS_OK, media_type, target)
