from __future__ import annotations

from datetime import date, datetime
from typing import Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from app.projects.domain.models import Variant

YEAR_MIN = 1900
YEAR_MAX = 2100


class ProjectInputError(ValueError):
    """Raw form values rejected; ``field_errors`` maps form field -> message."""

    def __init__(self, field_errors: dict[str, str]):
        super().__init__(", ".join(f"{k}: {v}" for k, v in field_errors.items()))
        self.field_errors = field_errors


def _blank_to_unset(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


class _ProjectFields(BaseModel):
    # form keys arrive camelCased from the UI (coAuthors, externalLinks)
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
        frozen=True,
    )

    name: str = Field(min_length=1)
    month: date | None = None
    year: int | None = Field(default=None, ge=YEAR_MIN, le=YEAR_MAX)
    duration: str | None = None
    field: str = Field(min_length=1)

    @field_validator("year", "duration", mode="before")
    @classmethod
    def _optional_blank(cls, value: Any) -> Any:
        return _blank_to_unset(value)

    @field_validator("month", mode="before")
    @classmethod
    def _month_from_picker(cls, value: Any) -> Any:
        value = _blank_to_unset(value)
        if isinstance(value, datetime):
            return value.date()
        # timestamps keep the wall-clock date of their own offset; a "Z" value
        # is read as UTC, so pickers should send YYYY-MM-DD or a local offset
        if isinstance(value, str) and "T" in value:
            try:
                return datetime.fromisoformat(value).date()
            except ValueError:
                return value
        return value


class PersonalProjectInput(_ProjectFields):
    variant: Literal["personal"] = "personal"

    co_authors: str | None = None
    external_links: str | None = None

    @field_validator("co_authors", "external_links", mode="before")
    @classmethod
    def _optional_blank_text(cls, value: Any) -> Any:
        return _blank_to_unset(value)


class ExternalReferenceInput(_ProjectFields):
    variant: Literal["external"] = "external"

    authors: str | None = None
    external_links: str = Field(min_length=1)

    @field_validator("authors", mode="before")
    @classmethod
    def _optional_blank_text(cls, value: Any) -> Any:
        return _blank_to_unset(value)


ProjectInput = Union[PersonalProjectInput, ExternalReferenceInput]

_SCHEMAS: dict[Variant, type[PersonalProjectInput] | type[ExternalReferenceInput]] = {
    Variant.PERSONAL: PersonalProjectInput,
    Variant.EXTERNAL: ExternalReferenceInput,
}

_REQUIRED_MESSAGES: dict[str, dict[Variant, str]] = {
    "name": {
        Variant.PERSONAL: "Project name is required",
        Variant.EXTERNAL: "Reference name is required",
    },
    "field": {
        Variant.PERSONAL: "Field is required",
        Variant.EXTERNAL: "Field is required",
    },
    "externalLinks": {
        Variant.EXTERNAL: "At least one external link is required",
    },
}
_REQUIRED_ERROR_TYPES = frozenset({"missing", "string_too_short"})


def _message_for(variant: Variant, field_name: str, error: Mapping[str, Any]) -> str:
    kind = error.get("type", "")
    required = _REQUIRED_MESSAGES.get(field_name, {}).get(variant)
    if required and (kind in _REQUIRED_ERROR_TYPES or error.get("input") is None):
        return required
    if field_name == "year":
        if kind in ("greater_than_equal", "less_than_equal"):
            return f"Year must be between {YEAR_MIN} and {YEAR_MAX}"
        return "Year must be a whole number"
    if field_name == "month":
        return "Month must be a valid date"
    return str(error.get("msg", "Invalid value"))


def _collect_field_errors(variant: Variant, exc: ValidationError) -> dict[str, str]:
    field_errors: dict[str, str] = {}
    for error in exc.errors():
        loc = error.get("loc") or ("__root__",)
        field_name = str(loc[0])
        # first problem per field is enough for a form message
        field_errors.setdefault(field_name, _message_for(variant, field_name, error))
    return field_errors


def validate_project_input(
    variant: Variant | str, raw: Mapping[str, Any]
) -> ProjectInput:
    """Validate raw form values for one variant; no partial results."""
    try:
        tag = Variant(variant)
    except ValueError as exc:
        raise ProjectInputError({"variant": "Unknown project variant"}) from exc

    data = dict(raw)
    data["variant"] = tag.value
    try:
        return _SCHEMAS[tag].model_validate(data)
    except ValidationError as exc:
        raise ProjectInputError(_collect_field_errors(tag, exc)) from exc
