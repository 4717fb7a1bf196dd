"""Technical video information: ffprobe probing and resolution naming.

- probe: VideoInfo from ffprobe, MediaTechInfo for templates, formatting
  helpers and the extension allow-list check.
- resolution: Standard resolution names for raw dimensions.
"""

from .probe import (
    FormatInfo,
    MediaTechInfo,
    StreamInfo,
    VideoInfo,
    ffprobe_video_info,
    format_bit_rate,
    format_file_size,
    format_frame_rate,
    is_video_file,
    parse_ffprobe_output,
    tech_info,
)
from .resolution import get_closest_standard_resolution, get_standard_resolution

__all__ = [
    "VideoInfo",
    "FormatInfo",
    "StreamInfo",
    "MediaTechInfo",
    "ffprobe_video_info",
    "parse_ffprobe_output",
    "tech_info",
    "is_video_file",
    "format_bit_rate",
    "format_file_size",
    "format_frame_rate",
    "get_standard_resolution",
    "get_closest_standard_resolution",
]
