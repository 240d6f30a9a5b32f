"""Shared test fixtures: a scripted ffmpeg stand-in and course trees on disk."""

import json
import threading
from pathlib import Path

import pytest


class FakeMediaTool:
    """Answers MediaTool.run calls the way ffmpeg would for each purpose."""

    def __init__(self):
        self.binary = "ffmpeg"
        self.calls = []
        self.durations = {}
        self.no_duration = set()
        self.failing_subtitles = set()
        self.failing_merges = set()
        self.probed = {}
        self.merges = []
        self.version_banner = "ffmpeg version 6.1.1 Copyright (c) 2000-2023 the FFmpeg developers\n"
        self._lock = threading.Lock()

    def run(self, arguments, purpose="ffmpeg"):
        args = [str(a) for a in arguments]
        with self._lock:
            self.calls.append((purpose, args))

        if purpose == "version":
            return True, self.version_banner

        if purpose == "subtitles":
            clip, output = Path(args[1]), Path(args[-1])
            if clip.name in self.failing_subtitles:
                return False, "Error while opening subtitle stream\n"
            output.write_bytes(clip.read_bytes() + b"+subs")
            return True, ""

        if purpose == "probe":
            clip = Path(args[1])
            with self._lock:
                self.probed[clip.name] = clip.read_bytes()
            if clip.name in self.no_duration:
                return True, f"Input #0, mov,mp4,m4a from '{clip}':\n"
            duration = self.durations.get(clip.name, "00:00:10.00")
            return True, (
                f"Input #0, mov,mp4,m4a from '{clip}':\n"
                f"  Duration: {duration}, start: 0.000000, bitrate: 512 kb/s\n"
            )

        if purpose == "concat":
            inputs = [args[i + 1] for i, a in enumerate(args) if a == "-i"]
            output = Path(args[-1])
            self.merges.append({
                "list_path": Path(inputs[0]),
                "metadata_path": Path(inputs[1]),
                "list": Path(inputs[0]).read_text(encoding="utf-8"),
                "metadata": Path(inputs[1]).read_text(encoding="utf-8"),
                "output": output,
            })
            if output.name in self.failing_merges:
                output.write_bytes(b"partial")
                return False, "Conversion failed!\n"
            output.write_bytes(b"merged")
            return True, ""

        raise AssertionError(f"unexpected purpose {purpose}")

    def calls_for(self, purpose):
        return [args for p, args in self.calls if p == purpose]


@pytest.fixture
def fake_tool():
    return FakeMediaTool()


@pytest.fixture
def make_course(tmp_path):
    """Create a course tree: make_course({"01-intro": ["01-welcome", "02-setup"]}, subtitles={"01-welcome"})."""

    def _make(modules, subtitles=(), name="Course", title="Python Fundamentals",
              authors="  Jane Doe, John Roe  "):
        course_dir = tmp_path / name
        course_dir.mkdir()
        (course_dir / "course-info.json").write_text(
            json.dumps([{"authorsFullnames": authors, "title": title}]), encoding="utf-8"
        )
        for module_name, clips in modules.items():
            module_dir = course_dir / module_name
            module_dir.mkdir()
            (module_dir / "module-info.json").write_text(
                json.dumps({"title": f"Module {module_name}"}), encoding="utf-8"
            )
            for clip in clips:
                (module_dir / f"{clip}.mp4").write_bytes(f"clip:{clip}".encode())
                if clip in subtitles:
                    (module_dir / f"{clip}.srt").write_text("1\n00:00:00,000 --> 00:00:01,000\nHi\n")
        return course_dir

    return _make
