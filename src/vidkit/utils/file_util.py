"""
Path helpers shared by the parser, the renderer and the batch walker.
"""
import os
from pathlib import Path

from vidkit.utils.constants import UNSAFE_FILENAME_CHARS, UNSAFE_REPLACEMENT

_UNSAFE_TABLE = str.maketrans({c: UNSAFE_REPLACEMENT for c in UNSAFE_FILENAME_CHARS})


def base_name(filename: str) -> str:
    """
    Return the file name without directory and without its last extension.

    Both "/" and "\\" count as directory separators so Windows-style names are
    handled on any platform.
    Examples:
      "/media/Big Buck Bunny (2008).mp4" -> "Big Buck Bunny (2008)"
      "The.Matrix.1999.mp4" -> "The.Matrix.1999"
    """
    name = filename.replace("\\", "/").rsplit("/", 1)[-1]
    return os.path.splitext(name)[0]


def sanitize_filename(name: str) -> str:
    """
    Replace characters that are invalid in a path component with "-".
    Uses str.translate() for a single pass.
    """
    return name.translate(_UNSAFE_TABLE)


def file_extension(path: Path | str) -> str:
    """Lower-cased extension including the dot ("" when there is none)."""
    return Path(path).suffix.lower()
