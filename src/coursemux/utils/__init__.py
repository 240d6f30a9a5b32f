"""
A module providing constants, utility functions, and logging mechanisms
for course processing tasks.

This module includes the course layout and ffmpeg constants, helpers for
command execution and filesystem operations, duration parsing, and a
thread-safe structured logger.
"""

from .constants import (
    CLIP_EXTENSION,
    COURSE_INFO_FILE,
    FFMPEG_BINARY,
    MIN_FFMPEG_VERSION,
    MODULE_INFO_FILE,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    SUBTITLE_EXTENSION,
    TEMP_EXTENSION,
    TOOL_TIMEOUT,
    WORKERS,
)
from .logger import LogLevel

__all__ = [
    "CLIP_EXTENSION",
    "SUBTITLE_EXTENSION",
    "TEMP_EXTENSION",
    "COURSE_INFO_FILE",
    "MODULE_INFO_FILE",
    "FFMPEG_BINARY",
    "MIN_FFMPEG_VERSION",
    "TOOL_TIMEOUT",
    "WORKERS",
    "STATUS_OK",
    "STATUS_FAIL",
    "STATUS_SKIP",
    "LogLevel",
]
