"""Display helpers for patient data."""

from datetime import datetime

# id-ID long month names
MONTH_NAMES = (
    "Januari",
    "Februari",
    "Maret",
    "April",
    "Mei",
    "Juni",
    "Juli",
    "Agustus",
    "September",
    "Oktober",
    "November",
    "Desember",
)


def format_date(value: str | datetime) -> str:
    """Render a date as "5 Januari 1990".

    Accepts ISO dates, ISO datetimes (including a trailing "Z") or datetime
    objects. Text that does not parse is returned unchanged.
    """
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value

    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"


def format_timestamp(value: datetime) -> str:
    """Render a timestamp as "5 Januari 1990 14:03"."""
    return f"{format_date(value)} {value:%H:%M}"
