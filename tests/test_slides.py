"""Tests for slide requirements, validation and slot allocation."""

import pytest

from course_planner.exceptions import MissingSlidesError, SlideDirectoryNotFoundError
from course_planner.processing.slides import (
    SlideInventory,
    SlideRequirements,
    SlideValidator,
    SlotAllocator,
    expected_slide_name,
)


class TestSlideRequirements:
    def test_counts_for_one_section_two_lessons(self):
        req = SlideRequirements(sections_with_match=1, matched_lessons=2)
        assert req.sequential_slides_needed == 5
        assert req.needs_reserved
        assert req.required_slots() == [1, 2, 3, 4, 5, 6, 7]
        assert req.total == 7

    def test_counts_across_sections(self):
        req = SlideRequirements(sections_with_match=3, matched_lessons=4)
        assert req.sequential_slides_needed == 3 + 4 * 2
        assert req.required_slots()[-1] == 2 + 11

    def test_nothing_matched_needs_nothing(self):
        req = SlideRequirements(sections_with_match=0, matched_lessons=0)
        assert req.sequential_slides_needed == 0
        assert not req.needs_reserved
        assert req.required_slots() == []


class TestSlotAllocator:
    def test_starts_at_three_and_increments(self):
        allocator = SlotAllocator()
        assert [allocator.next_slot() for _ in range(4)] == [3, 4, 5, 6]
        assert allocator.cursor == 7


class TestSlideValidator:
    def test_skips_validation_when_nothing_required(self, tmp_path):
        validator = SlideValidator(tmp_path / "does-not-exist")
        inventory = validator.validate(SlideRequirements(0, 0))
        assert inventory.files == {}

    def test_missing_directory_is_fatal_when_slides_required(self, tmp_path):
        validator = SlideValidator(tmp_path / "does-not-exist")
        with pytest.raises(SlideDirectoryNotFoundError) as exc_info:
            validator.validate(SlideRequirements(1, 1))
        assert exc_info.value.required == 5

    def test_file_instead_of_directory(self, tmp_path):
        not_a_dir = tmp_path / "slides"
        not_a_dir.write_text("oops")
        with pytest.raises(SlideDirectoryNotFoundError):
            SlideValidator(not_a_dir).validate(SlideRequirements(1, 1))

    def test_resolves_all_slots(self, tmp_path, make_slides):
        make_slides(tmp_path, range(1, 8))
        inventory = SlideValidator(tmp_path).validate(SlideRequirements(1, 2))
        assert inventory.files == {n: f"Slide{n}.tif" for n in range(1, 8)}

    def test_name_variants(self, tmp_path):
        for name in ["slide 1.TIF", "SLIDE2.tiff", "Slide  3.Tif", "Slide4.tif", "Slide5.TIFF"]:
            (tmp_path / name).write_bytes(b"")
        inventory = SlideValidator(tmp_path).validate(SlideRequirements(1, 1))
        assert inventory.files == {
            1: "slide 1.TIF",
            2: "SLIDE2.tiff",
            3: "Slide  3.Tif",
            4: "Slide4.tif",
            5: "Slide5.TIFF",
        }

    def test_wrong_extension_or_number_does_not_count(self, tmp_path, make_slides):
        make_slides(tmp_path, [1, 2, 4, 5])
        (tmp_path / "Slide3.png").write_bytes(b"")
        (tmp_path / "Slide03.tif").write_bytes(b"")
        (tmp_path / "Slide13.tif").write_bytes(b"")
        with pytest.raises(MissingSlidesError) as exc_info:
            SlideValidator(tmp_path).validate(SlideRequirements(1, 1))
        assert exc_info.value.missing == [expected_slide_name(3)]

    def test_reports_every_missing_slot(self, tmp_path, make_slides):
        make_slides(tmp_path, range(1, 7))
        with pytest.raises(MissingSlidesError) as exc_info:
            SlideValidator(tmp_path).validate(SlideRequirements(1, 2))
        error = exc_info.value
        assert error.missing == ["Slide7.tiff (or .tif)"]
        assert "Slide7.tiff (or .tif)" in str(error)

    def test_missing_list_is_truncated_for_display(self, tmp_path):
        tmp_path.mkdir(exist_ok=True)
        with pytest.raises(MissingSlidesError) as exc_info:
            # 2 reserved + 1 section intro + 2*5 lesson slides = 13 slots, none on disk
            SlideValidator(tmp_path).validate(SlideRequirements(1, 5))
        error = exc_info.value
        assert len(error.missing) == 13
        assert len(error.displayed) == 11
        assert error.displayed[:10] == [expected_slide_name(n) for n in range(1, 11)]
        assert error.displayed[-1] == "... and 3 more"

    def test_first_sorted_file_wins_for_duplicate_slot(self, tmp_path, make_slides):
        make_slides(tmp_path, range(1, 6))
        (tmp_path / "Slide3.tiff").write_bytes(b"")
        inventory = SlideValidator(tmp_path).validate(SlideRequirements(1, 1))
        assert inventory.files[3] == "Slide3.tif"


class TestSlideInventory:
    def test_resolve_found_and_missing(self):
        inventory = SlideInventory(files={3: "Slide3.TIF"})
        found = inventory.resolve(3)
        assert (found.slot, found.file_name, found.found) == (3, "Slide3.TIF", True)
        missing = inventory.resolve(9)
        assert (missing.file_name, missing.found) == ("Slide9.tiff", False)
