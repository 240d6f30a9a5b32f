import json

import pytest

from coursemux.errors import MetadataReadError
from coursemux.modules import CourseInfo, JsonCourseMetadataSource, ModuleInfo


@pytest.fixture
def source():
    return JsonCourseMetadataSource()


def test_reads_course_and_module_info(make_course, source):
    course_dir = make_course({"01-intro": ["01-welcome"]})
    assert source.read_course_info(course_dir) == CourseInfo("  Jane Doe, John Roe  ", "Python Fundamentals")
    assert source.read_module_info(course_dir / "01-intro") == ModuleInfo("Module 01-intro")


def test_field_names_are_case_insensitive(tmp_path, source):
    (tmp_path / "course-info.json").write_text(json.dumps([{"AuthorsFullnames": "A. Author", "Title": "T"}]))
    (tmp_path / "module-info.json").write_text(json.dumps({"Title": "M", "Id": "x"}))
    assert source.read_course_info(tmp_path) == CourseInfo("A. Author", "T")
    assert source.read_module_info(tmp_path) == ModuleInfo("M")


def test_single_object_course_record(tmp_path, source):
    (tmp_path / "course-info.json").write_text(json.dumps({"authorsFullnames": "A", "title": "T"}))
    assert source.read_course_info(tmp_path).title == "T"


def test_utf8_bom_is_accepted(tmp_path, source):
    (tmp_path / "module-info.json").write_bytes(b"\xef\xbb\xbf" + json.dumps({"title": "Déjà vu"}).encode())
    assert source.read_module_info(tmp_path).title == "Déjà vu"


@pytest.mark.parametrize("content, message", [
    (None, "Missing"),
    ("{not json", "Unreadable"),
    ("[]", "Empty"),
    (json.dumps([{"title": "T"}]), "authorsFullnames"),
    (json.dumps([["nested"]]), "Expected an object"),
    (json.dumps([{"authorsFullnames": 3, "title": "T"}]), "not a string"),
])
def test_bad_course_records(tmp_path, source, content, message):
    if content is not None:
        (tmp_path / "course-info.json").write_text(content)
    with pytest.raises(MetadataReadError, match=message):
        source.read_course_info(tmp_path)


def test_missing_module_record(tmp_path, source):
    with pytest.raises(MetadataReadError, match="module-info.json"):
        source.read_module_info(tmp_path)


def test_record_that_is_not_utf8(tmp_path, source):
    (tmp_path / "module-info.json").write_bytes(b'{"title": "\xff\xfe bad"}')
    with pytest.raises(MetadataReadError, match="Unreadable"):
        source.read_module_info(tmp_path)
