"""
ffmpeg argument builders and the two per-clip operations: embedding a
subtitle sidecar and probing the clip duration.

Both operations touch only the clip itself, its sidecar and its ``.tmp``
sibling, so they can run for different clips at the same time.
"""
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from coursemux.errors import DurationProbeError
from coursemux.media import MediaTool, log_excerpt
from coursemux.utils import SUBTITLE_EXTENSION, TEMP_EXTENSION, LogLevel
from coursemux.utils import file_util, logger, time_util


@dataclass(frozen=True)
class ClipRecord:
    path: Path
    duration: timedelta

    @property
    def duration_ms(self) -> int:
        return time_util.to_milliseconds(self.duration)


def find_subtitle(clip: Path) -> Optional[Path]:
    """Return the clip's subtitle sidecar, if any.

    ``01-intro.srt`` is looked up first, then ``01-intro.mp4.srt``.
    """
    for candidate in (clip.with_suffix(SUBTITLE_EXTENSION), clip.with_name(clip.name + SUBTITLE_EXTENSION)):
        if candidate.is_file():
            return candidate
    return None


def temp_output_path(clip: Path) -> Path:
    return clip.with_name(clip.name + TEMP_EXTENSION)


def build_subtitle_mux_args(clip: Path, subtitle: Path, output: Path) -> List[str]:
    """Copy audio/video as-is and convert the subtitle track to mov_text."""
    return [
        "-i", str(clip),
        "-i", str(subtitle),
        "-c:a", "copy",
        "-c:v", "copy",
        "-c:s", "mov_text",
        "-f", "mp4",
        str(output),
    ]


def build_probe_args(clip: Path) -> List[str]:
    """Stream-copy into the null muxer so ffmpeg reads the whole file."""
    return [
        "-i", str(clip),
        "-c", "copy",
        "-f", "null",
        "-",
    ]


def mux_subtitles(clip: Path, tool: MediaTool) -> bool:
    """
    Embed the clip's subtitle sidecar into the clip.

    On success the clip is replaced by the muxed file and the sidecar is
    deleted. On failure the clip and sidecar stay untouched.

    Returns:
        True when subtitles were embedded, False when there was no sidecar
        or muxing failed.
    """
    subtitle = find_subtitle(clip)
    if subtitle is None:
        return False

    temp_video = temp_output_path(clip)
    file_util.delete_file(temp_video)

    success, log = tool.run(build_subtitle_mux_args(clip, subtitle, temp_video), purpose="subtitles")
    if not success:
        file_util.delete_file(temp_video)
        logger.log("clip.subtitles_failed", LogLevel.ERROR,
                   file=clip.name,
                   subtitle=subtitle.name,
                   error=log_excerpt(log))
        return False

    try:
        file_util.replace_file(temp_video, clip)
    except OSError:
        file_util.delete_file(temp_video)
        raise
    file_util.delete_file(subtitle)
    logger.log("clip.subtitles_embedded", LogLevel.DEBUG, file=clip.name, subtitle=subtitle.name)
    return True


def probe_duration(clip: Path, tool: MediaTool) -> timedelta:
    """
    Read the clip duration from ffmpeg's log.

    Raises:
        DurationProbeError: ffmpeg failed, printed no parseable duration, or
            the duration is shorter than one millisecond (such a clip
            cannot get a chapter of its own).
    """
    success, log = tool.run(build_probe_args(clip), purpose="probe")
    duration = time_util.find_duration(log) if success else None
    if duration is None:
        raise DurationProbeError(clip, log)
    if time_util.to_milliseconds(duration) < 1:
        raise DurationProbeError(clip, log, reason=f"duration {duration} is shorter than 1 ms")
    return duration
