"""Detection of the installed ffmpeg version."""
import re
from typing import Optional, Tuple

from coursemux.errors import ToolUnavailableError
from coursemux.utils import MIN_FFMPEG_VERSION, LogLevel, logger

from .tool import MediaTool

VERSION_REGEX = re.compile(r"^ffmpeg version (?P<version>[\d.]+) ", re.MULTILINE)


def parse_version(log: str) -> Optional[Tuple[int, ...]]:
    """Extract the version tuple from an ``ffmpeg -version`` banner."""
    match = VERSION_REGEX.search(log)
    if not match:
        return None
    parts = [p for p in match.group("version").split(".") if p]
    if not parts:
        return None
    return tuple(int(p) for p in parts)


def format_version(version: Tuple[int, ...]) -> str:
    return ".".join(str(p) for p in version)


def check_tool_version(tool: MediaTool, minimum: Tuple[int, ...] = MIN_FFMPEG_VERSION) -> Tuple[int, ...]:
    """
    Verify that ``tool`` runs and reports at least ``minimum``.

    Returns:
        The detected version tuple.

    Raises:
        ToolUnavailableError: the tool did not run, printed no recognizable
            banner, or is too old.
    """
    logger.log("tool.version_check", LogLevel.INFO, binary=tool.binary, minimum=format_version(minimum))

    success, log = tool.run(["-version"], purpose="version")
    version = parse_version(log) if success else None
    if version is None:
        raise ToolUnavailableError(f"FFmpeg not found (binary '{tool.binary}')")

    if version < tuple(minimum):
        raise ToolUnavailableError(
            f"Unsupported FFmpeg version {format_version(version)} found. "
            f"{format_version(minimum)} or higher required"
        )

    logger.log("tool.version_ok", LogLevel.INFO, version=format_version(version))
    return version
