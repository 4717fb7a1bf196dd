"""
File renaming pipeline.

- core: Classification and the per-file probe -> lookup -> render -> rename
  pipeline (`process_file`, returning a RenameResult).
- batch: Expanding files/directories and processing them with progress
  reporting (`process_paths`).

Behavior notes:
- Results carry a status: OK (renamed), PREVIEW (target computed only),
  SKIP (nothing to do, declined, or target exists), NO MATCH (provider had no
  answer or failed), FAIL (probe, configuration or filesystem error).
"""
from .core import RenameResult, classify_filename, process_file
from .batch import collect_files, iter_video_files, process_paths

__all__ = [
    "RenameResult",
    "classify_filename",
    "process_file",
    "collect_files",
    "iter_video_files",
    "process_paths",
]
