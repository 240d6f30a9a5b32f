"""
Course and module info records.

A downloaded course stores ``course-info.json`` in the course directory (a
JSON array whose first element describes the course) and ``module-info.json``
in each module directory. Field names are matched case-insensitively, so both
``authorsFullnames`` and ``AuthorsFullnames`` are accepted.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from coursemux.errors import MetadataReadError
from coursemux.utils import COURSE_INFO_FILE, MODULE_INFO_FILE


@dataclass(frozen=True)
class CourseInfo:
    authors_fullnames: str
    title: str


@dataclass(frozen=True)
class ModuleInfo:
    title: str


class CourseMetadataSource(Protocol):
    def read_course_info(self, course_dir: Path) -> CourseInfo: ...

    def read_module_info(self, module_dir: Path) -> ModuleInfo: ...


def _load_json(path: Path) -> Any:
    try:
        with path.open(encoding="utf-8-sig") as handle:
            return json.load(handle)
    except FileNotFoundError as e:
        raise MetadataReadError(f"Missing metadata record: {path}") from e
    except (OSError, ValueError) as e:
        # ValueError covers JSONDecodeError and UnicodeDecodeError.
        raise MetadataReadError(f"Unreadable metadata record {path}: {e}") from e


def _get_field(record: Any, field: str, path: Path) -> str:
    if not isinstance(record, dict):
        raise MetadataReadError(f"Expected an object in {path}")
    for key, value in record.items():
        if key.lower() == field.lower():
            if value is None:
                return ""
            if not isinstance(value, str):
                raise MetadataReadError(f"Field '{field}' in {path} is not a string")
            return value
    raise MetadataReadError(f"Field '{field}' missing from {path}")


class JsonCourseMetadataSource:
    """Reads course/module info from the JSON files of a downloaded course."""

    def __init__(self, course_info_file: str = COURSE_INFO_FILE, module_info_file: str = MODULE_INFO_FILE):
        self.course_info_file = course_info_file
        self.module_info_file = module_info_file

    def read_course_info(self, course_dir: Path) -> CourseInfo:
        path = course_dir / self.course_info_file
        data = _load_json(path)
        # Older downloads store a single object instead of a one-element array.
        if isinstance(data, list):
            if not data:
                raise MetadataReadError(f"Empty course record list in {path}")
            data = data[0]
        return CourseInfo(
            authors_fullnames=_get_field(data, "authorsFullnames", path),
            title=_get_field(data, "title", path),
        )

    def read_module_info(self, module_dir: Path) -> ModuleInfo:
        path = module_dir / self.module_info_file
        data = _load_json(path)
        return ModuleInfo(title=_get_field(data, "title", path))
