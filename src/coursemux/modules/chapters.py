"""
Chapter metadata in ffmpeg's ``;FFMETADATA1`` format.

Each clip of a module becomes one chapter. Offsets are integer milliseconds:
every clip duration is truncated to whole milliseconds before it is added to
the running offset, so a chapter ends one millisecond before the next one
starts.
"""
from dataclasses import dataclass
from typing import List, Sequence

from coursemux.clips import ClipRecord

TIMEBASE = "1/1000"

_ESCAPED = ("\\", "=", ";", "#", "\n")


@dataclass(frozen=True)
class ChapterEntry:
    start_ms: int
    end_ms: int
    title: str


def escape_value(value: str) -> str:
    """Escape characters that have a meaning in ffmetadata files."""
    for char in _ESCAPED:
        value = value.replace(char, "\\" + char)
    return value


def build_chapters(clips: Sequence[ClipRecord]) -> List[ChapterEntry]:
    """One chapter per clip, in the given order, starting at 0."""
    chapters = []
    offset = 0
    for clip in clips:
        duration_ms = clip.duration_ms
        chapters.append(ChapterEntry(offset, offset + duration_ms - 1, clip.path.stem))
        offset += duration_ms
    return chapters


def build_metadata(module_title: str, course_title: str, authors_fullnames: str,
                   clips: Sequence[ClipRecord]) -> str:
    """Render the metadata document attached to a merged module video."""
    lines = [
        ";FFMETADATA1",
        f"title={escape_value(course_title)} - {escape_value(module_title)}",
        f"artist={escape_value(authors_fullnames.strip())}",
    ]

    for chapter in build_chapters(clips):
        lines += [
            "[CHAPTER]",
            f"TIMEBASE={TIMEBASE}",
            f"START={chapter.start_ms}",
            f"END={chapter.end_ms}",
            f"title={escape_value(chapter.title)}",
            "",
        ]

    lines += [
        "[STREAM]",
        f"title={escape_value(module_title)}",
    ]
    return "\n".join(lines) + "\n"
