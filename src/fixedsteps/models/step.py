"""Fixed step and field definition models.

Wire format (JSON, camelCase)::

    {
        "_id": "66f0…",
        "stepType": "first",
        "stepTitle": "Contact details",
        "stepDescription": "",
        "stepOrder": 1,
        "fields": [
            {"label": "Name", "name": "name", "type": "text",
             "placeholder": "", "required": true, "options": []}
        ]
    }
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator, model_validator

from fixedsteps.models._base import StepsBaseModel


class StepType(StrEnum):
    FIRST = "first"
    FINAL = "final"


class FieldType(StrEnum):
    TEXT = "text"
    EMAIL = "email"
    NUMBER = "number"
    TEXT_AREA = "textArea"
    SELECT = "select"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    DATE = "date"
    FILE = "file"


OPTION_FIELD_TYPES: frozenset[FieldType] = frozenset(
    {FieldType.SELECT, FieldType.DROPDOWN, FieldType.CHECKBOX, FieldType.RADIO}
)
"""Field types whose control renders a list of choices."""

PLACEHOLDERLESS_FIELD_TYPES: frozenset[FieldType] = frozenset({FieldType.CHECKBOX, FieldType.RADIO})


def normalize_option(value: Any) -> str:
    """Flatten an option to its plain text value.

    Accepts a plain string or a ``{"value": ...}`` wrapper.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        inner = value.get("value")
        return "" if inner is None else str(inner)
    if value is None:
        return ""
    return str(value)


def takes_options(field_type: FieldType | str) -> bool:
    return FieldType(field_type) in OPTION_FIELD_TYPES


class FieldSpec(StepsBaseModel):
    """One input control within a step."""

    label: str = ""
    name: str = ""
    type: FieldType = FieldType.TEXT
    placeholder: str | None = None
    required: bool = False
    options: list[str] = Field(default_factory=list)
    """Choices, only for select/dropdown/checkbox/radio."""

    @field_validator("label", "name", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("options", mode="before")
    @classmethod
    def _flatten_options(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return [normalize_option(item) for item in value]
        return value

    @model_validator(mode="after")
    def _drop_options_for_plain_types(self) -> FieldSpec:
        if self.options and self.type not in OPTION_FIELD_TYPES:
            object.__setattr__(self, "options", [])
        return self

    @property
    def has_options(self) -> bool:
        return self.type in OPTION_FIELD_TYPES

    def with_type(self, field_type: FieldType | str) -> FieldSpec:
        """Return a copy with *field_type*, clearing options when it takes none."""
        new_type = FieldType(field_type)
        options = list(self.options) if new_type in OPTION_FIELD_TYPES else []
        return self.model_copy(update={"type": new_type, "options": options})


class StepDraft(StepsBaseModel):
    """A client-authored step payload.

    ``id`` is set only when the draft was opened from a persisted step.
    """

    id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    step_type: StepType = Field(
        default=StepType.FIRST,
        validation_alias=AliasChoices("stepType", "step_type"),
        serialization_alias="stepType",
    )
    title: str = Field(
        default="",
        validation_alias=AliasChoices("stepTitle", "title"),
        serialization_alias="stepTitle",
    )
    description: str = Field(
        default="",
        validation_alias=AliasChoices("stepDescription", "description"),
        serialization_alias="stepDescription",
    )
    order: int | None = Field(
        default=None,
        validation_alias=AliasChoices("stepOrder", "order"),
        serialization_alias="stepOrder",
    )
    fields: list[FieldSpec] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class Step(StepDraft):
    """A step persisted by the forms service (always has an ``id``)."""

    id: str = Field(
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )

    @field_validator("id", mode="before")
    @classmethod
    def _require_id(cls, value: Any) -> str:
        if value is None or str(value).strip() == "":
            raise ValueError("persisted step must carry an id")
        return str(value)
