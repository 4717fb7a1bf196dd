"""
Functions to gather technical video information with ffprobe.

ffprobe's JSON output is reduced to a VideoInfo (container format plus the
list of streams). The renderer only needs the first video stream's standard
resolution name and codec, which tech_info() extracts as a MediaTechInfo.
The remaining helpers format bit rates, sizes and frame rates for the
per-file report printed by the CLI.
"""
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, List

from vidkit.exceptions import ProbeError
from vidkit.media.resolution import get_standard_resolution
from vidkit.utils import FALLBACK_VIDEO_EXTENSIONS, UNKNOWN_TECH_VALUE
from vidkit.utils import logger, system_util, LogLevel
from vidkit.utils.file_util import file_extension


@dataclass
class StreamInfo:
    codec_type: str
    codec_name: str
    width: int = 0
    height: int = 0
    bit_rate: str = ""
    frame_rate: str = ""
    sample_rate: str = ""
    channels: int = 0
    channel_layout: str = ""


@dataclass
class FormatInfo:
    filename: str = ""
    format_name: str = ""
    duration: str = ""
    size: str = ""
    bit_rate: str = ""


@dataclass
class VideoInfo:
    format: FormatInfo
    streams: List[StreamInfo] = field(default_factory=list)

    @property
    def video_stream(self) -> Optional[StreamInfo]:
        """First video stream, if any."""
        for stream in self.streams:
            if stream.codec_type == "video":
                return stream
        return None


@dataclass(frozen=True)
class MediaTechInfo:
    """Technical fields available to filename templates."""
    resolution: str = UNKNOWN_TECH_VALUE
    codec: str = UNKNOWN_TECH_VALUE


def parse_ffprobe_output(output: str) -> VideoInfo:
    """Decode ffprobe's JSON into a VideoInfo; raise ProbeError on bad output."""
    try:
        data = json.loads(output)
    except ValueError as e:
        raise ProbeError(f"failed to parse ffprobe output: {e}") from e

    fmt = data.get("format") or {}
    streams = [
        StreamInfo(
            codec_type=s.get("codec_type", ""),
            codec_name=s.get("codec_name", ""),
            width=s.get("width") or 0,
            height=s.get("height") or 0,
            bit_rate=s.get("bit_rate", ""),
            frame_rate=s.get("r_frame_rate", ""),
            sample_rate=s.get("sample_rate", ""),
            channels=s.get("channels") or 0,
            channel_layout=s.get("channel_layout", ""),
        )
        for s in data.get("streams") or []
    ]
    return VideoInfo(
        format=FormatInfo(
            filename=fmt.get("filename", ""),
            format_name=fmt.get("format_name", ""),
            duration=fmt.get("duration", ""),
            size=fmt.get("size", ""),
            bit_rate=fmt.get("bit_rate", ""),
        ),
        streams=streams,
    )


def ffprobe_video_info(path: Path) -> VideoInfo:
    """Probe a video file for container and stream information."""
    cmd = [
        "ffprobe",
        "-v", "quiet",
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        str(path),
    ]
    code, out, err = system_util.run_cmd(cmd)
    if code != 0:
        logger.log("probe.fail", LogLevel.DEBUG, file=str(path), code=code, stderr=err.strip())
        raise ProbeError(f"ffprobe failed with exit code {code}: {err.strip()}")
    return parse_ffprobe_output(out)


def tech_info(info: VideoInfo) -> MediaTechInfo:
    """Resolution name and codec of the first video stream ("unknown" without one)."""
    stream = info.video_stream
    if stream is None:
        return MediaTechInfo()
    return MediaTechInfo(
        resolution=get_standard_resolution(stream.width, stream.height),
        codec=stream.codec_name or UNKNOWN_TECH_VALUE,
    )


def is_video_file(path: Path | str, extensions: Iterable[str] | None = None) -> bool:
    """
    Check the file extension against an allow-list.

    Allow-list entries may be given with or without the leading dot. Without
    a list, a built-in set of common video extensions is used.
    """
    ext = file_extension(path)
    if extensions:
        allowed = {e.lower() if e.startswith(".") else f".{e.lower()}" for e in extensions}
        return ext in allowed
    return ext in FALLBACK_VIDEO_EXTENSIONS


def format_bit_rate(bit_rate: str) -> str:
    """"1500000" -> "1500.00 Kbps"; "" -> "N/A"; non-numeric values get " bps"."""
    if not bit_rate:
        return "N/A"
    try:
        rate = float(bit_rate)
    except ValueError:
        return f"{bit_rate} bps"
    return f"{rate / 1000:.2f} Kbps"


def format_file_size(size_str: str) -> str:
    """Bytes as a human-readable size: "1048576" -> "1.00 MB"."""
    if not size_str:
        return "N/A"
    try:
        size = float(size_str)
    except ValueError:
        return f"{size_str} bytes"

    unit = 1024.0
    if size < unit:
        return f"{size:.0f} B"
    div, exp = unit, 0
    n = size / unit
    while n >= unit and exp < 2:
        div *= unit
        exp += 1
        n /= unit
    return f"{size / div:.2f} {'KMG'[exp]}B"


def format_frame_rate(frame_rate: str) -> str:
    """"24000/1001" -> "23.98 fps"; anything that is not a fraction is returned as is."""
    if not frame_rate:
        return "N/A"
    parts = frame_rate.split("/")
    if len(parts) != 2:
        return frame_rate
    try:
        num, den = float(parts[0]), float(parts[1])
    except ValueError:
        return frame_rate
    if den == 0:
        return frame_rate
    return f"{num / den:.2f} fps"
