"""Tests for the patient list keyword filter."""

import pytest

from patient_records.services.filtering import filter_patients


@pytest.fixture
def patients(patient_factory):
    return [
        patient_factory(1, "Budi", "3171000000000001"),
        patient_factory(2, "Sari", "3273000000000002"),
        patient_factory(3, "Ibu Ratna", "3578000000000003"),
    ]


class TestFilterPatients:
    """Tests for filter_patients."""

    def test_name_match_is_case_insensitive(self, patients):
        """Test that 'bu' matches Budi and Ibu Ratna but not Sari."""
        result = filter_patients(patients[:2], "bu")
        assert [p.name for p in result] == ["Budi"]

        result = filter_patients(patients, "BU")
        assert [p.name for p in result] == ["Budi", "Ibu Ratna"]

    def test_nik_substring_match(self, patients):
        """Test that a NIK fragment selects the matching patient."""
        result = filter_patients(patients, "3273")
        assert [p.id for p in result] == [2]

    def test_empty_keyword_returns_everything(self, patients):
        """Test that an empty keyword returns the full list in order."""
        result = filter_patients(patients, "")
        assert result == patients

    def test_no_match(self, patients):
        """Test that an unmatched keyword yields an empty list."""
        assert filter_patients(patients, "zzz") == []

    def test_source_list_is_not_modified(self, patients):
        """Test that filtering never mutates its input."""
        original = list(patients)
        filter_patients(patients, "sari")
        filter_patients(patients, "")
        assert patients == original

    def test_result_is_a_new_list(self, patients):
        """Test that the empty-keyword result can be changed without touching the source."""
        result = filter_patients(patients, "")
        result.clear()
        assert len(patients) == 3

    @pytest.mark.parametrize("keyword", ["", "bu", "BU", "0000", "3578", "x", "a"])
    def test_filtering_is_idempotent(self, patients, keyword):
        """Test that filtering a filtered list by the same keyword changes nothing."""
        once = filter_patients(patients, keyword)
        assert filter_patients(once, keyword) == once
