"""External media tool access.

- tool: ``MediaTool``, the subprocess wrapper around ffmpeg
- version: banner parsing and minimum version enforcement
"""

from .tool import MediaTool, log_excerpt
from .version import check_tool_version, parse_version

__all__ = [
    "MediaTool",
    "log_excerpt",
    "check_tool_version",
    "parse_version",
]
