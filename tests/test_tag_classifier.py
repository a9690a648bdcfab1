"""Unit tests for tag classification."""

import pytest

from app.checkin.services.tag_classifier import TagClassifier


class TestClassify:
    def test_tags_lowercased_and_empties_dropped(self):
        result = TagClassifier.classify(["Fasting", "", "  ", "ALCOHOL"], {})

        assert result.tags == frozenset({"fasting", "alcohol"})
        assert result.clean_day is False

    @pytest.mark.parametrize("tags", [
        ["fasting", "clean_day"],
        ["clean_day", "fasting"],
        ["CLEAN_DAY", "intense_exercise", "new_supplement"],
        ["clean_day"],
    ])
    def test_clean_day_empties_tag_set(self, tags):
        result = TagClassifier.classify(tags, {})

        assert result.tags == frozenset()
        assert result.clean_day is True
        assert result.intense_exercise is False
        assert result.new_supplement is False

    def test_signal_flags_from_membership(self):
        result = TagClassifier.classify(["Intense_Exercise", "new_supplement"], None)

        assert result.intense_exercise is True
        assert result.new_supplement is True

    @pytest.mark.parametrize("raw", [None, "fasting", {"fasting": True}, 3])
    def test_non_list_tags_are_empty(self, raw):
        result = TagClassifier.classify(raw, None)

        assert result.tags == frozenset()

    def test_supplement_intake_drops_falsy_values(self):
        result = TagClassifier.classify([], {"magnesium": True, "zinc": False, "d3": 0, "omega": 1})

        assert result.supplement_intake == {"magnesium": True, "omega": 1}

    @pytest.mark.parametrize("intake", [None, {}, {"zinc": False}, ["magnesium"]])
    def test_supplement_intake_empty_is_none(self, intake):
        assert TagClassifier.classify([], intake).supplement_intake is None
