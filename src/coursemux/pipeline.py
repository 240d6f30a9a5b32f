"""
The two-phase course pipeline.

Phase 1 preprocesses every clip of the course in a bounded thread pool
(subtitle mux + duration probe). Phase 2 starts only after all clips are
done and merges the modules one at a time, in directory name order.

A clip whose duration cannot be probed aborts the whole course, because the
chapter offsets of its module can no longer be computed. A module that fails
to merge is reported and left on disk, and the run moves on to the next
module.
"""
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from tqdm import tqdm

from coursemux.clips import ClipRecord, iter_clip_files, preprocess_clip
from coursemux.errors import CourseProcessingError, DurationProbeError
from coursemux.media import MediaTool
from coursemux.modules import (
    CourseMetadataSource,
    JsonCourseMetadataSource,
    MergeResult,
    merge_module,
    remove_module_sources,
)
from coursemux.utils import STATUS_FAIL, STATUS_OK, STATUS_SKIP, WORKERS, LogLevel
from coursemux.utils import logger, time_util


@dataclass
class CourseResult:
    course_dir: Path
    clips: Dict[Path, ClipRecord] = field(default_factory=dict)
    modules: List[MergeResult] = field(default_factory=list)

    def count(self, status: str) -> int:
        return sum(1 for r in self.modules if r.status.startswith(status))


def iter_module_dirs(course_dir: Path) -> List[Path]:
    """Immediate subdirectories of the course, sorted by name."""
    return sorted((p for p in course_dir.iterdir() if p.is_dir()), key=lambda p: p.name)


def select_module_clips(module_dir: Path, records: Dict[Path, ClipRecord]) -> List[ClipRecord]:
    """Clips stored under ``module_dir`` in playback (path) order.

    The prefix match ignores case and includes the trailing separator, so
    module ``01`` does not pick up clips of module ``010``.
    """
    prefix = os.path.join(str(module_dir), "").lower()
    selected = [r for p, r in records.items() if str(p).lower().startswith(prefix)]
    return sorted(selected, key=lambda r: str(r.path))


class CourseProcessor:
    """Runs the course pipeline with a shared tool and metadata source."""

    def __init__(
        self,
        tool: Optional[MediaTool] = None,
        metadata_source: Optional[CourseMetadataSource] = None,
        workers: int = WORKERS,
        keep_sources: bool = False,
    ):
        self.tool = tool or MediaTool()
        self.metadata_source = metadata_source or JsonCourseMetadataSource()
        self.workers = max(1, workers)
        self.keep_sources = keep_sources
        self._stop = threading.Event()

    def request_stop(self) -> None:
        """Stop after the clip or module currently in progress."""
        self._stop.set()

    @property
    def stop_requested(self) -> bool:
        return self._stop.is_set()

    def process_course(self, course_dir: Path) -> CourseResult:
        """
        Preprocess all clips of ``course_dir``, then merge each module.

        Raises:
            CourseProcessingError: a clip could not be preprocessed or a stop
                was requested during preprocessing. No module has been merged
                at that point.
        """
        course_dir = Path(course_dir).resolve()
        result = CourseResult(course_dir)

        clips = iter_clip_files(course_dir)
        logger.log("course.start", LogLevel.INFO, course=course_dir.name, clips=len(clips), workers=self.workers)

        result.clips = self._preprocess_clips(course_dir, clips)

        for module_dir in iter_module_dirs(course_dir):
            if self.stop_requested:
                logger.log("course.stopped", LogLevel.WARN, course=course_dir.name, next_module=module_dir.name)
                break
            result.modules.append(self._merge_module(module_dir, result.clips))

        logger.log("course.done", LogLevel.INFO,
                   course=course_dir.name,
                   merged=result.count(STATUS_OK),
                   failed=result.count(STATUS_FAIL),
                   skipped=result.count(STATUS_SKIP))
        return result

    def _preprocess_clips(self, course_dir: Path, clips: List[Path]) -> Dict[Path, ClipRecord]:
        """Phase 1. Results are collected by this thread only, as futures complete."""
        records: Dict[Path, ClipRecord] = {}
        if not clips:
            return records

        start_time = time.time()
        executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="clip")
        try:
            futures = {executor.submit(preprocess_clip, clip, self.tool, course_dir): clip for clip in clips}
            with tqdm(total=len(futures), desc="Preprocessing clips", unit="clip") as progress:
                for fut in as_completed(futures):
                    clip = futures[fut]
                    try:
                        records[clip] = fut.result()
                    except (DurationProbeError, OSError) as e:
                        logger.log("clip.failed", LogLevel.ERROR,
                                   file=str(clip.relative_to(course_dir)),
                                   error=str(e))
                        raise CourseProcessingError(course_dir, str(e)) from e
                    progress.update(1)

                    if self.stop_requested:
                        raise CourseProcessingError(course_dir, "stopped during clip preprocessing")

                    elapsed_seconds = time.time() - start_time
                    logger.log("course.progress", LogLevel.DEBUG,
                               completed=len(records),
                               total=len(clips),
                               eta=time_util.get_eta_total(len(records), len(clips), elapsed_seconds))
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        finally:
            executor.shutdown(wait=True)

        return records

    def _merge_module(self, module_dir: Path, records: Dict[Path, ClipRecord]) -> MergeResult:
        """Phase 2 for a single module."""
        clips = select_module_clips(module_dir, records)
        logger.log("module.merge", LogLevel.INFO, module=module_dir.name, clips=len(clips))

        try:
            result = merge_module(module_dir, clips, self.tool, self.metadata_source)
        except OSError as e:
            logger.log("module.failed", LogLevel.ERROR, module=module_dir.name, error=str(e))
            return MergeResult(module_dir, None, f"{STATUS_FAIL} (filesystem)", error=str(e))

        if result.success and not self.keep_sources:
            remove_module_sources(result)
        return result
