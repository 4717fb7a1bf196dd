"""
A media file renaming toolkit driven by online metadata.

vidkit looks at a video's filename to decide whether it is a TV episode or a
movie, extracts a search title, year and episode numbers, probes the file
with ffprobe for its resolution and codec, asks a metadata provider (TMDb,
OMDb, TVMaze or TVDb) for the canonical title, and renames the file from a
user template.

The package is organized into several categories:
- Filename parsing and title cleaning (metadata).
- Video probing and resolution naming (media).
- Template rendering and target path generation (naming).
- Metadata provider clients (providers).
- The per-file pipeline and batch processing (rename).
- Configuration, logging and shared constants (utils).
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
