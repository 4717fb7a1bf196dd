# python
"""Batch processing of files and directories.

Paths given on the command line are expanded into video files (a directory
is walked, recursively on request, and filtered through the configured
extension allow-list) and each file goes through `core.process_file` under a
tqdm progress bar. A failing file is recorded in its result and the batch
moves on.
"""
from pathlib import Path
from typing import Iterable, Iterator, List

from tqdm import tqdm

from vidkit.media.probe import is_video_file
from vidkit.providers.factory import ProviderCache, get_provider
from vidkit.rename import core
from vidkit.rename.core import ProviderFactory, RenameResult
from vidkit.utils import LogLevel, STATUS_FAIL
from vidkit.utils import logger
from vidkit.utils.config import Config


def iter_video_files(root: Path, extensions: Iterable[str], recursive: bool = False) -> Iterator[Path]:
    """Yield video files under `root` in sorted order; subdirectories only when `recursive`."""
    entries = root.rglob("*") if recursive else root.iterdir()
    for p in sorted(entries):
        if p.is_file() and is_video_file(p, extensions):
            yield p


def collect_files(paths: Iterable[Path], cfg: Config) -> tuple[List[Path], List[RenameResult]]:
    """
    Expand the given paths into files to process.

    Returns (files, failures): a path that does not exist or a single file
    with an extension outside the allow-list becomes a FAIL result.
    """
    files: List[Path] = []
    failures: List[RenameResult] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            files.extend(iter_video_files(path, cfg.file_extensions, cfg.recursive))
        elif path.is_file():
            if is_video_file(path, cfg.file_extensions):
                files.append(path)
            else:
                failures.append(RenameResult(path, STATUS_FAIL, message=f"unsupported file type: {path}"))
        else:
            failures.append(RenameResult(path, STATUS_FAIL, message=f"error accessing path: {path}"))

    for failure in failures:
        logger.log("batch.skip_path", LogLevel.WARN, path=str(failure.source), reason=failure.message)
    return files, failures


def process_paths(
        paths: Iterable[Path],
        cfg: Config,
        provider_factory: ProviderFactory = get_provider,
        **kwargs,
) -> List[RenameResult]:
    """
    Process every video file found under `paths`.

    The movie and TV providers are built at most once per call, shared by
    all files and closed when the batch ends. Other keyword arguments are
    passed to `core.process_file` (probe, confirm).
    """
    files, results = collect_files(paths, cfg)
    if not files:
        logger.log("batch.empty", LogLevel.WARN, paths=len(results))
        return results

    with ProviderCache(provider_factory) as providers:
        for file in tqdm(files, desc="Processing files", disable=len(files) < 2):
            results.append(core.process_file(file, cfg, provider_factory=providers, **kwargs))

    counts: dict[str, int] = {}
    for r in results:
        counts[r.status] = counts.get(r.status, 0) + 1
    logger.log("batch.done", LogLevel.INFO, files=len(results), **{k.lower().replace(" ", "_"): v for k, v in counts.items()})
    return results
