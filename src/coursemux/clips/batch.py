"""
Clip discovery and the per-clip preprocessing unit of work.

``preprocess_clip`` is what the course pipeline submits to its worker pool:
it embeds subtitles when a sidecar exists and then probes the final file.
"""
from pathlib import Path

from coursemux.media import MediaTool
from coursemux.utils import CLIP_EXTENSION, LogLevel, logger

from . import core


def preprocess_clip(clip: Path, tool: MediaTool, course_dir: Path | None = None) -> core.ClipRecord:
    """Mux subtitles (non-fatal) and probe the duration (fatal on failure)."""
    name = clip.relative_to(course_dir) if course_dir else clip.name
    logger.log("clip.start", LogLevel.INFO, file=str(name))

    subtitled = core.mux_subtitles(clip, tool)
    duration = core.probe_duration(clip, tool)

    logger.log("clip.done", LogLevel.DEBUG, file=str(name), duration=duration, subtitles=subtitled)
    return core.ClipRecord(clip, duration)


def iter_clip_files(root: Path) -> list[Path]:
    """Find all clips recursively, sorted by path."""
    return sorted(
        (p for p in root.rglob(f"*{CLIP_EXTENSION}") if p.is_file()),
        key=str,
    )
