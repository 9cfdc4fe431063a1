"""Keyword filter over the in-memory patient list."""

from collections.abc import Sequence

from patient_records.models.patient import Patient


def filter_patients(patients: Sequence[Patient], keyword: str) -> list[Patient]:
    """Return the patients whose name or NIK contains the keyword.

    Names match case-insensitively, NIKs as a plain substring. Source order is
    kept and the input is never modified; an empty keyword returns every patient.
    """
    if not keyword:
        return list(patients)

    needle = keyword.lower()
    return [patient for patient in patients if needle in patient.name.lower() or keyword in patient.nik]
