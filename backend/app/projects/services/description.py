from __future__ import annotations

import calendar
from datetime import date
from typing import assert_never

from app.projects.domain.schemas import (
    ExternalReferenceInput,
    PersonalProjectInput,
    ProjectInput,
)

EXTERNAL_REFERENCE_TAG = "External Reference"


def _date_line(month: date | None, year: int | None) -> str | None:
    if month is not None:
        line = f"Date: {calendar.month_name[month.month]}"
        if year is not None:
            line += f" {year}"
        return line
    if year is not None:
        return f"Year: {year}"
    return None


def build_description(payload: ProjectInput) -> str:
    """
    Render validated fields into the stored description text.

    Line order is fixed: tag (external only), Field, Date/Year, Duration,
    people, links. Missing fields drop their line entirely. External links
    are never inlined for references; they become their own records.
    """
    match payload:
        case PersonalProjectInput():
            header = None
            people = ("Co-authors", payload.co_authors)
            inline_links = payload.external_links
        case ExternalReferenceInput():
            header = EXTERNAL_REFERENCE_TAG
            people = ("Authors", payload.authors)
            inline_links = None
        case _:
            assert_never(payload)

    lines: list[str] = []
    if header:
        lines.append(header)
    if payload.field:
        lines.append(f"Field: {payload.field}")

    date_line = _date_line(payload.month, payload.year)
    if date_line:
        lines.append(date_line)

    if payload.duration:
        lines.append(f"Duration: {payload.duration}")

    label, names = people
    if names:
        lines.append(f"{label}: {names}")

    if inline_links:
        lines.append(f"External Links: {inline_links}")

    return "".join(f"{line}\n" for line in lines).rstrip()
