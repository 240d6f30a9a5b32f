"""Per-clip preprocessing for course processing.

This package provides two levels of functionality:
- core: ffmpeg argument builders, subtitle muxing and duration probing
- batch: the unit of work run in parallel for each clip, and clip discovery
"""

from .core import (
    ClipRecord,
    build_probe_args,
    build_subtitle_mux_args,
    find_subtitle,
    mux_subtitles,
    probe_duration,
)
from .batch import (
    iter_clip_files,
    preprocess_clip,
)

__all__ = [
    "ClipRecord",
    "find_subtitle",
    "build_subtitle_mux_args",
    "build_probe_args",
    "mux_subtitles",
    "probe_duration",
    "preprocess_clip",
    "iter_clip_files",
]
