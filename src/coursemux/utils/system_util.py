"""
Utility functions for running external commands and verifying binary availability.

Functions:
    - run_cmd: Executes a command given as an argument vector and returns its
      exit code together with stdout and stderr merged in arrival order.
    - which_or_die: Checks for the presence of a binary on the PATH and
      terminates the process if it is unavailable.
"""
import shutil
import subprocess
import sys
from typing import List, Optional, Tuple

from coursemux.utils.logger import safe_print


def run_cmd(cmd: List[str], timeout: Optional[float] = None) -> Tuple[int, str]:
    """Run a command and return (code, combined_output).

    stderr is redirected into the stdout pipe, so both streams are drained
    by a single reader and cannot fill up independently.

    Raises:
        FileNotFoundError: the executable does not exist.
        subprocess.TimeoutExpired: the command outlived ``timeout``; the
            child is killed and the partial output is attached to the
            exception's ``output``.
    """
    with subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        encoding="utf-8",
        errors="replace",
    ) as process:
        try:
            output, _ = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            process.kill()
            output, _ = process.communicate()
            raise subprocess.TimeoutExpired(cmd, timeout, output=output)
        return process.returncode, output or ""


def which_or_die(binary: str) -> str:
    """Return the resolved path of ``binary``, exit with code 2 if it is not on PATH."""
    resolved = shutil.which(binary)
    if resolved is None:
        safe_print(f"ERROR: '{binary}' not found on PATH. Install ffmpeg first (e.g. apt install ffmpeg).",
                   file=sys.stderr)
        sys.exit(2)
    return resolved
