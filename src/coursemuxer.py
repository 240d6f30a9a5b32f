"""
Course muxer: turn downloaded video courses into one video per module.

For every course directory given on the command line:
- embed subtitle sidecars into their clips and probe clip durations (parallel)
- concatenate each module's clips into ``<module>.mp4`` with one chapter per clip
- remove the merged module directory
"""

import argparse
import atexit
import signal
import sys
from datetime import datetime
from pathlib import Path

import coursemux as coursemux_module
from coursemux.errors import CourseProcessingError, ToolUnavailableError
from coursemux.media import MediaTool, check_tool_version
from coursemux.pipeline import CourseProcessor
from coursemux.utils import LogLevel, logger, system_util
from coursemux.utils.constants import (
    FFMPEG_BINARY,
    LOG_DIR,
    LOG_FILE,
    STATUS_FAIL,
    STATUS_OK,
    STATUS_SKIP,
    TOOL_TIMEOUT,
    WORKERS,
)

# Processor of the current run, stopped by the signal handler
_processor: CourseProcessor | None = None


def _signal_handler(signum, frame):
    """Ask the running pipeline to stop after the item in progress."""
    try:
        sig_name = signal.Signals(signum).name
    except ValueError:
        sig_name = str(signum)

    logger.safe_print(f"\n{sig_name} received. Finishing the current step before stopping...")
    if _processor:
        _processor.request_stop()


class _TeeStream:
    def __init__(self, *streams):
        self._streams = streams

    def write(self, data):
        for stream in self._streams:
            stream.write(data)
        return len(data)

    def flush(self):
        for stream in self._streams:
            stream.flush()

    def isatty(self):
        return any(getattr(stream, "isatty", lambda: False)() for stream in self._streams)


def _resolve_log_path(args) -> Path | None:
    if args.log_file:
        return Path(args.log_file).expanduser().resolve()
    if args.log_dir:
        log_dir = Path(args.log_dir).expanduser()
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        return (log_dir / f"coursemux-{timestamp}.log").resolve()
    return None


def _tee_output(log_path: Path) -> None:
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_file_handle = open(log_path, "a", encoding="utf-8", buffering=1)
    sys.stdout = _TeeStream(sys.stdout, log_file_handle)
    sys.stderr = _TeeStream(sys.stderr, log_file_handle)
    atexit.register(log_file_handle.close)
    logger.safe_print(f"Logging to: {log_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Merge the clips of each course module into a single video with chapters, "
                    "embedding subtitle sidecars on the way. Requires ffmpeg.",
        epilog="Example: coursemux ~/Courses/python-fundamentals",
    )
    parser.add_argument("courses", nargs="+", help="Course directories (one subdirectory per module)")
    parser.add_argument("--workers", type=int, default=WORKERS,
                        help=f"Clips preprocessed in parallel (default: {WORKERS} or $COURSEMUX_WORKERS)")
    parser.add_argument("--ffmpeg", default=FFMPEG_BINARY,
                        help="ffmpeg binary to run (default: ffmpeg or $COURSEMUX_FFMPEG)")
    parser.add_argument("--timeout", type=float, default=TOOL_TIMEOUT,
                        help="Kill an ffmpeg call after this many seconds (default: no limit)")
    parser.add_argument("--keep-sources", action="store_true",
                        help="Keep module directories after a successful merge")
    parser.add_argument("--skip-version-check", action="store_true",
                        help="Do not check the ffmpeg version before processing")
    parser.add_argument("--log-dir", default=LOG_DIR,
                        help="Also write output to a timestamped file in this directory ($COURSEMUX_LOG_DIR)")
    parser.add_argument("--log-file", default=LOG_FILE,
                        help="Also write output to this file; overrides --log-dir ($COURSEMUX_LOG_FILE)")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {coursemux_module.__version__}")
    return parser


def main(argv=None) -> int:
    global _processor

    args = build_parser().parse_args(argv)

    log_path = _resolve_log_path(args)
    if log_path:
        _tee_output(log_path)

    coursemux_module.DEBUG = args.debug
    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    if Path(args.ffmpeg).parent == Path("."):
        system_util.which_or_die(args.ffmpeg)

    tool = MediaTool(args.ffmpeg, timeout=args.timeout)
    if not args.skip_version_check:
        try:
            check_tool_version(tool)
        except ToolUnavailableError as e:
            logger.log("startup.error", LogLevel.ERROR, msg=str(e))
            return 2

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    _processor = CourseProcessor(tool, workers=args.workers, keep_sources=args.keep_sources)

    failed_courses = 0
    for course in args.courses:
        course_dir = Path(course).expanduser()
        if not course_dir.is_dir():
            logger.log("course.error", LogLevel.ERROR, msg="Course directory does not exist", course=str(course_dir))
            failed_courses += 1
            continue

        if _processor.stop_requested:
            break

        try:
            result = _processor.process_course(course_dir)
        except CourseProcessingError as e:
            logger.log("course.aborted", LogLevel.ERROR, course=course_dir.name, error=str(e))
            failed_courses += 1
            continue

        logger.safe_print(f"\nSummary for {course_dir.name}:")
        for module in result.modules:
            target = module.output_path.name if module.output_path else "-"
            logger.safe_print(f"  {module.status:<16} {module.module_dir.name} -> {target}")
        logger.safe_print(
            f"  OK: {result.count(STATUS_OK)}  FAIL: {result.count(STATUS_FAIL)}  SKIP: {result.count(STATUS_SKIP)}"
        )
        if result.count(STATUS_FAIL):
            failed_courses += 1

    return 1 if failed_courses or _processor.stop_requested else 0


if __name__ == "__main__":
    sys.exit(main())
