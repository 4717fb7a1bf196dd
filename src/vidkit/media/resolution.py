"""
Standard resolution names ("1080p", "4K", ...) for raw video dimensions.
"""
from typing import NamedTuple


class Resolution(NamedTuple):
    name: str
    width: int
    height: int


# Highest first; the closest-match lookup relies on this order.
STANDARD_RESOLUTIONS = [
    Resolution("8K", 7680, 4320),
    Resolution("4K", 3840, 2160),
    Resolution("1440p", 2560, 1440),
    Resolution("1080p", 1920, 1080),
    Resolution("2K", 2048, 1080),
    Resolution("720p", 1280, 720),
    Resolution("480p", 640, 480),
    Resolution("360p", 640, 360),
]


def _exact_match(width: int, height: int) -> str | None:
    for res in STANDARD_RESOLUTIONS:
        if width == res.width and height == res.height:
            return res.name
    return None


def get_standard_resolution(width: int, height: int) -> str:
    """
    Name a resolution, preferring an exact standard match.

    Without an exact match 8K/4K are recognised by width above 1440 lines;
    anything else is named after its height.
    Examples:
      (1920, 1080) -> "1080p"
      (3996, 2160) -> "4K"
      (1920, 800) -> "800p"
      (0, 0) -> "0p"
    """
    if height == 0:
        return "0p"

    name = _exact_match(width, height)
    if name:
        return name

    if height > 1440:
        if width >= 7000:
            return "8K"
        if width >= 3800:
            return "4K"

    return f"{height}p"


def get_closest_standard_resolution(width: int, height: int) -> str:
    """Like get_standard_resolution, but always returns one of the standard names."""
    if height == 0:
        return "0p"

    name = _exact_match(width, height)
    if name:
        return name

    for res in STANDARD_RESOLUTIONS:
        if height >= res.height:
            return res.name

    return STANDARD_RESOLUTIONS[-1].name
