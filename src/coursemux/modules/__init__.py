"""Per-module assembly for course processing.

- metadata: course/module info records and their JSON reader
- chapters: chapter offsets and the ffmetadata document
- merge: concatenation of a module's clips and source removal
"""

from .chapters import ChapterEntry, build_chapters, build_metadata
from .metadata import CourseInfo, CourseMetadataSource, JsonCourseMetadataSource, ModuleInfo
from .merge import MergeResult, merge_module, remove_module_sources

__all__ = [
    "ChapterEntry",
    "build_chapters",
    "build_metadata",
    "CourseInfo",
    "ModuleInfo",
    "CourseMetadataSource",
    "JsonCourseMetadataSource",
    "MergeResult",
    "merge_module",
    "remove_module_sources",
]
