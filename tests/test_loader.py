"""Tests for curriculum loading and validation."""

import json

import pytest

from course_planner.exceptions import CurriculumNotFoundError, InvalidCurriculumError
from course_planner.loader import load_curriculum, parse_curriculum
from course_planner.processing.matcher import flatten_curriculum


@pytest.fixture
def curriculum_data():
    return {
        "courseTitle": "Wireshark na Prática",
        "sections": [
            {
                "sectionTitle": "Introdução",
                "lessons": [
                    {"lessonTitle": "Boas-vindas", "duration": "02:15"},
                    {"lessonTitle": "Instalação", "duration": "1:02:03"},
                ],
            },
            {"sectionTitle": "Sem aulas", "lessons": []},
        ],
    }


class TestParseCurriculum:
    def test_positions_are_recorded(self, curriculum_data):
        curriculum = parse_curriculum(curriculum_data)
        assert curriculum.course_title == "Wireshark na Prática"
        assert curriculum.lesson_count == 2
        first, second = curriculum.sections
        assert (first.index, second.index) == (0, 1)
        assert [(l.title, l.section_index, l.index_in_section) for l in first.lessons] == [
            ("Boas-vindas", 0, 0),
            ("Instalação", 0, 1),
        ]
        assert second.lessons == ()

    def test_missing_optional_fields(self):
        curriculum = parse_curriculum({"sections": [{"lessons": [{"lessonTitle": "Only"}]}]})
        assert curriculum.course_title == ""
        assert curriculum.sections[0].title == ""
        assert curriculum.sections[0].lessons[0].duration == ""

    @pytest.mark.parametrize("data", [None, {}, [], ""])
    def test_empty_data(self, data):
        with pytest.raises(InvalidCurriculumError):
            parse_curriculum(data)

    def test_not_an_object(self):
        with pytest.raises(InvalidCurriculumError, match="expected a JSON object"):
            parse_curriculum(["sections"])

    def test_sections_required(self):
        with pytest.raises(InvalidCurriculumError, match="sections"):
            parse_curriculum({"courseTitle": "No sections"})

    def test_empty_sections_rejected(self):
        with pytest.raises(InvalidCurriculumError):
            parse_curriculum({"courseTitle": "Empty", "sections": []})

    def test_lesson_title_required(self):
        with pytest.raises(InvalidCurriculumError, match="lessonTitle"):
            parse_curriculum({"sections": [{"lessons": [{"duration": "1:00"}]}]})

    def test_source_in_message(self):
        with pytest.raises(InvalidCurriculumError) as exc_info:
            parse_curriculum({"sections": []}, source="course.json")
        assert exc_info.value.path == "course.json"
        assert "course.json" in str(exc_info.value)


class TestLoadCurriculum:
    def test_load_file(self, tmp_path, curriculum_data):
        path = tmp_path / "course.json"
        path.write_text(json.dumps(curriculum_data, ensure_ascii=False), encoding="utf-8")
        curriculum = load_curriculum(path)
        assert curriculum.sections[0].lessons[1].duration == "1:02:03"

    def test_missing_file(self, tmp_path):
        with pytest.raises(CurriculumNotFoundError):
            load_curriculum(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InvalidCurriculumError, match="not valid JSON"):
            load_curriculum(path)

    def test_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"courseTitle": "\xff\xfe", "sections": []}')
        with pytest.raises(InvalidCurriculumError, match="UTF-8"):
            load_curriculum(path)


class TestNonStringDurations:
    @pytest.mark.parametrize("duration", [90, 1.5, ["1:00"], {"m": 1}])
    def test_non_string_duration_becomes_empty(self, duration):
        curriculum = parse_curriculum({"sections": [{"lessons": [
            {"lessonTitle": "Ok", "duration": "1:00"},
            {"lessonTitle": "Numeric", "duration": duration},
        ]}]})
        lessons = curriculum.sections[0].lessons
        assert lessons[0].duration == "1:00"
        assert lessons[1].duration == ""

    def test_non_string_duration_targets_zero_seconds(self):
        curriculum = parse_curriculum({"sections": [{"lessons": [
            {"lessonTitle": "Numeric", "duration": 90},
        ]}]})
        assert [t.duration_seconds for t in flatten_curriculum(curriculum)] == [0]
