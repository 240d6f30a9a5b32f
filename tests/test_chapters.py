from datetime import timedelta
from pathlib import Path

from coursemux.clips import ClipRecord
from coursemux.modules import build_chapters, build_metadata
from coursemux.modules.chapters import escape_value


def _clip(name, **duration):
    return ClipRecord(Path("/course/01-intro") / f"{name}.mp4", timedelta(**duration))


def test_two_ten_second_clips():
    chapters = build_chapters([_clip("01-welcome", seconds=10), _clip("02-setup", seconds=10)])
    assert [(c.start_ms, c.end_ms, c.title) for c in chapters] == [
        (0, 9999, "01-welcome"),
        (10000, 19999, "02-setup"),
    ]


def test_offsets_contiguous_and_increasing():
    clips = [
        _clip("a", seconds=3, microseconds=333_900),
        _clip("b", milliseconds=1),
        _clip("c", minutes=12, seconds=1, milliseconds=70),
        _clip("d", seconds=59, microseconds=999_999),
    ]
    chapters = build_chapters(clips)

    assert chapters[0].start_ms == 0
    for current, following in zip(chapters, chapters[1:]):
        assert following.start_ms > current.start_ms
        assert current.end_ms == following.start_ms - 1

    total_ms = sum((c.duration for c in clips), timedelta()) // timedelta(milliseconds=1)
    assert abs(chapters[-1].end_ms - (total_ms - 1)) <= len(clips)


def test_durations_are_truncated_not_rounded():
    chapters = build_chapters([_clip("a", microseconds=1_999_900), _clip("b", seconds=1)])
    assert chapters[0].end_ms == 1998
    assert chapters[1].start_ms == 1999


def test_no_clips_no_chapters():
    assert build_chapters([]) == []


def test_metadata_document_layout():
    document = build_metadata(
        "Getting Started",
        "Python Fundamentals",
        "  Jane Doe  ",
        [_clip("01-welcome", seconds=10), _clip("02-setup", seconds=10)],
    )
    assert document == (
        ";FFMETADATA1\n"
        "title=Python Fundamentals - Getting Started\n"
        "artist=Jane Doe\n"
        "[CHAPTER]\n"
        "TIMEBASE=1/1000\n"
        "START=0\n"
        "END=9999\n"
        "title=01-welcome\n"
        "\n"
        "[CHAPTER]\n"
        "TIMEBASE=1/1000\n"
        "START=10000\n"
        "END=19999\n"
        "title=02-setup\n"
        "\n"
        "[STREAM]\n"
        "title=Getting Started\n"
    )


def test_escape_value():
    assert escape_value("C# = fun; really\\") == "C\\# \\= fun\\; really\\\\"
    assert escape_value("plain title") == "plain title"
