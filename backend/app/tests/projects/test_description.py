from __future__ import annotations

from datetime import date

from app.projects.domain.schemas import ExternalReferenceInput, PersonalProjectInput
from app.projects.services.description import build_description


def test_external_reference_description_layout() -> None:
    payload = ExternalReferenceInput(
        name="Grotesk",
        field="Typography",
        month=date(2023, 3, 1),
        year=2023,
        duration="2 weeks",
        authors="A, B",
        external_links="https://a.com, https://b.com",
    )

    assert build_description(payload) == (
        "External Reference\nField: Typography\nDate: March 2023\nDuration: 2 weeks\nAuthors: A, B"
    )


def test_description_is_deterministic() -> None:
    payload = PersonalProjectInput(name="Poster", field="Print", year=2022, co_authors="C")
    assert build_description(payload) == build_description(payload)


def test_year_only_line() -> None:
    payload = PersonalProjectInput(name="Poster", field="Print", year=2022)
    assert build_description(payload) == "Field: Print\nYear: 2022"


def test_month_without_year() -> None:
    payload = PersonalProjectInput(name="Poster", field="Print", month=date(2024, 11, 5))
    assert build_description(payload) == "Field: Print\nDate: November"


def test_no_date_line_when_both_missing() -> None:
    payload = PersonalProjectInput(name="Poster", field="Print", duration="3 months")
    assert build_description(payload) == "Field: Print\nDuration: 3 months"


def test_personal_inlines_co_authors_and_links() -> None:
    payload = PersonalProjectInput(
        name="Poster",
        field="Print",
        co_authors="Ana, Bo",
        external_links="https://a.com, https://b.com",
    )

    assert build_description(payload) == (
        "Field: Print\nCo-authors: Ana, Bo\nExternal Links: https://a.com, https://b.com"
    )


def test_external_never_inlines_links() -> None:
    payload = ExternalReferenceInput(
        name="Grotesk", field="Typography", external_links="https://a.com"
    )
    description = build_description(payload)

    assert description == "External Reference\nField: Typography"
    assert "https://a.com" not in description
