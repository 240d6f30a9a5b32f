"""
Invocation of the external ffmpeg binary.

``MediaTool`` is the only place that spawns ffmpeg. Arguments are always
passed as a discrete argument vector, never through a shell, so paths with
spaces or quotes reach ffmpeg unchanged. A non-zero exit is a normal outcome
reported through the returned success flag; callers decide whether it is
fatal.
"""
import subprocess
from typing import Optional, Sequence, Tuple

import coursemux as coursemux_module
from coursemux.utils import FFMPEG_BINARY, TOOL_TIMEOUT, LogLevel
from coursemux.utils import logger, system_util


def log_excerpt(log: str, limit: int = 200) -> str:
    """Tail of a tool log for error entries; the whole log in debug mode."""
    text = log.strip()
    return text if coursemux_module.DEBUG else text[-limit:]


class MediaTool:
    """Runs ffmpeg and returns ``(success, combined_log)``."""

    def __init__(self, binary: str = FFMPEG_BINARY, timeout: Optional[float] = TOOL_TIMEOUT):
        self.binary = binary
        self.timeout = timeout

    def run(self, arguments: Sequence[str], purpose: str = "ffmpeg") -> Tuple[bool, str]:
        """
        Run the tool with ``arguments`` and block until it exits.

        Args:
            arguments: Tool arguments, one token per element
            purpose: Short label used in log entries (e.g. 'probe', 'concat')

        Returns:
            Tuple of (success, log) where success means exit code 0 and log
            holds stdout and stderr interleaved in arrival order.
        """
        cmd = [self.binary, *[str(arg) for arg in arguments]]
        logger.log("tool.run", LogLevel.DEBUG, purpose=purpose, cmd=" ".join(cmd))

        try:
            code, output = system_util.run_cmd(cmd, timeout=self.timeout)
        except FileNotFoundError as e:
            logger.log("tool.missing", LogLevel.ERROR, purpose=purpose, binary=self.binary, error=str(e))
            return False, f"{self.binary}: {e}\n"
        except subprocess.TimeoutExpired as e:
            logger.log("tool.timeout", LogLevel.ERROR, purpose=purpose, timeout=self.timeout)
            partial = e.output or ""
            if isinstance(partial, bytes):
                partial = partial.decode("utf-8", errors="replace")
            return False, f"{partial}\n{self.binary} killed after {self.timeout}s timeout\n"

        logger.log("tool.exit", LogLevel.TRACE, purpose=purpose, exit_code=code)
        return code == 0, output
