"""Client-side validation of patient form drafts."""

import re
from datetime import date

from patient_records.models.patient import BLOOD_GROUP_OPTIONS, SEX_OPTIONS, PatientDraft

NIK_PATTERN = re.compile(r"^[0-9]+$")
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

REQUIRED_MESSAGES: dict[str, str] = {
    "name": "Name is required",
    "nik": "NIK is required",
    "date_of_birth": "Date of birth is required",
    "sex": "Sex is required",
    "address": "Address is required",
    "phone": "Phone number is required",
    "blood_group": "Blood group is required",
}


def validate_draft(draft: PatientDraft) -> dict[str, str]:
    """Check a draft against the form rules.

    Args:
        draft: Form values to check

    Returns:
        Mapping of field name to error message; empty when the draft is valid
    """
    errors: dict[str, str] = {}

    for field_name, message in REQUIRED_MESSAGES.items():
        if not getattr(draft, field_name).strip():
            errors[field_name] = message

    if "nik" not in errors and not NIK_PATTERN.match(draft.nik):
        errors["nik"] = "NIK may only contain digits"

    if "date_of_birth" not in errors and not _is_iso_date(draft.date_of_birth):
        errors["date_of_birth"] = "Date of birth must be a valid date (YYYY-MM-DD)"

    if "sex" not in errors and draft.sex not in SEX_OPTIONS:
        errors["sex"] = f"Sex must be one of: {', '.join(SEX_OPTIONS)}"

    if "blood_group" not in errors and draft.blood_group not in BLOOD_GROUP_OPTIONS:
        errors["blood_group"] = f"Blood group must be one of: {', '.join(BLOOD_GROUP_OPTIONS)}"

    if draft.email and not EMAIL_PATTERN.match(draft.email):
        errors["email"] = "Invalid email format"

    return errors


def _is_iso_date(value: str) -> bool:
    if not DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
