"""Exception hierarchy for course processing."""

from __future__ import annotations

from pathlib import Path


class CoursemuxError(Exception):
    """Base error for the coursemux package."""


class ToolUnavailableError(CoursemuxError):
    """Raised when ffmpeg is missing or older than the supported minimum."""


class ToolInvocationError(CoursemuxError):
    """Raised when an ffmpeg invocation fails and the caller cannot recover."""

    def __init__(self, message: str, log: str = ""):
        super().__init__(message)
        self.log = log


class DurationProbeError(ToolInvocationError):
    """Raised when a clip's duration cannot be read from the probe output."""

    def __init__(self, clip: Path, log: str = "", reason: str | None = None):
        message = f"Unable to retrieve video duration for '{clip}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, log)
        self.clip = clip


class MetadataReadError(CoursemuxError):
    """Raised when a course-info or module-info record is missing or malformed."""


class CourseProcessingError(CoursemuxError):
    """Raised when a course run has to be aborted."""

    def __init__(self, course_dir: Path, message: str):
        super().__init__(f"{course_dir}: {message}")
        self.course_dir = course_dir
