"""
Concatenation of a module's clips into one video with chapters.

The merge is a stream copy through ffmpeg's concat demuxer: the temp concat
list fixes the playback order, and the temp metadata document is attached as
a second input whose tags and chapters are the only metadata mapped onto the
output.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from coursemux.clips import ClipRecord
from coursemux.errors import MetadataReadError
from coursemux.media import MediaTool, log_excerpt
from coursemux.utils import CLIP_EXTENSION, STATUS_FAIL, STATUS_OK, STATUS_SKIP, LogLevel
from coursemux.utils import file_util, logger

from .chapters import build_metadata
from .metadata import CourseMetadataSource


@dataclass
class MergeResult:
    module_dir: Path
    output_path: Optional[Path]
    status: str
    source_removed: bool = False
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == STATUS_OK


def output_path_for(module_dir: Path) -> Path:
    return module_dir.with_name(module_dir.name + CLIP_EXTENSION)


def concat_line(path: Path) -> str:
    """A concat demuxer ``file`` directive with single quotes escaped."""
    quoted = str(path).replace("'", "'\\''")
    return f"file '{quoted}'"


def build_concat_args(concat_list: Path, metadata_file: Path, output: Path) -> List[str]:
    return [
        "-f", "concat",
        "-safe", "0",
        "-i", str(concat_list),
        "-i", str(metadata_file),
        "-map_metadata", "1",
        "-c:v", "copy",
        "-c:a", "copy",
        "-c:s", "copy",
        "-f", "mp4",
        str(output),
    ]


def merge_module(module_dir: Path, clips: Sequence[ClipRecord], tool: MediaTool,
                 metadata_source: CourseMetadataSource) -> MergeResult:
    """
    Merge ``clips`` (already in playback order) into ``<module_dir>.mp4``.

    Args:
        module_dir: Module directory; the output is written next to it
        clips: The module's clips, sorted by path
        tool: ffmpeg runner
        metadata_source: Provider of course/module titles and authors

    Returns:
        MergeResult with status OK, FAIL (ffmpeg or metadata error) or SKIP
        (no clips). Source clips are never touched here.

    Raises:
        OSError: writing or deleting the output or temp files failed. Temp
            files are still removed.
    """
    if not clips:
        logger.log("module.skip", LogLevel.WARN, module=module_dir.name, reason="no clips")
        return MergeResult(module_dir, None, f"{STATUS_SKIP} (no clips)")

    try:
        course = metadata_source.read_course_info(module_dir.parent)
        module = metadata_source.read_module_info(module_dir)
    except MetadataReadError as e:
        logger.log("module.metadata_failed", LogLevel.ERROR, module=module_dir.name, error=str(e))
        return MergeResult(module_dir, None, f"{STATUS_FAIL} (metadata)", error=str(e))

    output = output_path_for(module_dir)
    file_util.delete_file(output)

    concat_list = None
    metadata_file = None
    try:
        concat_list = file_util.write_temp_lines((concat_line(c.path) for c in clips), suffix=".txt")
        metadata_file = file_util.write_temp_text(
            build_metadata(module.title, course.title, course.authors_fullnames, clips),
            suffix=".ffmeta",
        )
        success, log = tool.run(build_concat_args(concat_list, metadata_file, output), purpose="concat")
    finally:
        for temp in (concat_list, metadata_file):
            if temp is not None:
                file_util.delete_file(temp)

    if not success:
        file_util.delete_file(output)
        logger.log("module.merge_failed", LogLevel.ERROR,
                   module=module_dir.name,
                   error=log_excerpt(log))
        return MergeResult(module_dir, None, f"{STATUS_FAIL} (ffmpeg)", error=log)

    logger.log("module.merged", LogLevel.INFO, module=module_dir.name, output=output.name, clips=len(clips))
    return MergeResult(module_dir, output, STATUS_OK)


def remove_module_sources(result: MergeResult) -> bool:
    """Delete the module directory after a successful merge.

    Failures are logged and recorded on ``result``; there is no rollback.
    """
    try:
        file_util.delete_directory(result.module_dir)
    except OSError as e:
        result.error = f"could not remove sources: {e}"
        logger.log("module.cleanup_failed", LogLevel.ERROR, module=result.module_dir.name, error=str(e))
        return False
    result.source_removed = True
    return True
