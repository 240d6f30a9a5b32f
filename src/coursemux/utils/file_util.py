"""
Filesystem helpers shared by clip preprocessing and module merging.

Temporary files created here live in the system temp directory and must be
released by the caller (typically in a ``finally`` block) through
``delete_file``.
"""
import os
import shutil
import stat
import sys
import tempfile
from pathlib import Path
from typing import Iterable


def delete_file(path: Path) -> bool:
    """Delete ``path`` if it exists. Returns True when a file was removed."""
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False


def replace_file(src: Path, dst: Path) -> None:
    """Atomically move ``src`` over ``dst`` (same filesystem)."""
    os.replace(src, dst)


def write_temp_text(text: str, suffix: str = ".txt") -> Path:
    """Write ``text`` to a new temp file and return its path."""
    fd, name = tempfile.mkstemp(prefix="coursemux-", suffix=suffix)
    with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
        handle.write(text)
    return Path(name)


def write_temp_lines(lines: Iterable[str], suffix: str = ".txt") -> Path:
    """Write ``lines`` to a new temp file, one per line."""
    return write_temp_text("".join(f"{line}\n" for line in lines), suffix=suffix)


def _clear_readonly_and_retry(func, path, _exc):
    # Downloaded course files may carry a read-only bit.
    os.chmod(path, stat.S_IWRITE | stat.S_IREAD | stat.S_IEXEC)
    func(path)


def delete_directory(path: Path) -> None:
    """Recursively delete ``path``, clearing read-only bits on the way.

    Errors that persist after the retry propagate to the caller.
    """
    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_clear_readonly_and_retry)
    else:
        shutil.rmtree(path, onerror=_clear_readonly_and_retry)
