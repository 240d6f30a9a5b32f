"""
Constants and configuration settings for course processing.

This module contains the file naming conventions of a downloaded course, the
ffmpeg requirements, worker pool sizing and the status strings used in run
summaries. Values that depend on the machine can be overridden through
environment variables, optionally loaded from a local ``.env`` file.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int | None) -> int | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(name: str, default: float | None) -> float | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return float(value)


# Course layout
CLIP_EXTENSION = ".mp4"
SUBTITLE_EXTENSION = ".srt"
TEMP_EXTENSION = ".tmp"
COURSE_INFO_FILE = "course-info.json"
MODULE_INFO_FILE = "module-info.json"

# External tool
FFMPEG_BINARY = os.getenv("COURSEMUX_FFMPEG", "ffmpeg")
MIN_FFMPEG_VERSION = (4, 2)
TOOL_TIMEOUT = _env_float("COURSEMUX_TOOL_TIMEOUT", None)  # seconds per invocation, None = no limit

# Run settings
WORKERS = _env_int("COURSEMUX_WORKERS", None) or os.cpu_count() or 1

# Logging
LOG_DIR = os.getenv("COURSEMUX_LOG_DIR")
LOG_FILE = os.getenv("COURSEMUX_LOG_FILE")

# Processing status codes
STATUS_OK = "OK"
STATUS_FAIL = "FAIL"
STATUS_SKIP = "SKIP"
