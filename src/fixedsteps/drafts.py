"""Draft authoring and submission payloads.

Helpers here never touch the network. The editing functions take a
:class:`StepDraft` and return a new one, leaving the input untouched.
:func:`build_payload` is the last stop before a draft is sent: it
validates presence of the required text and normalizes field options.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from fixedsteps.exceptions import StepsValidationError
from fixedsteps.models.step import (
    OPTION_FIELD_TYPES,
    PLACEHOLDERLESS_FIELD_TYPES,
    FieldSpec,
    FieldType,
    Step,
    StepDraft,
    StepType,
    normalize_option,
)

DraftLike = StepDraft | Mapping[str, Any]


def coerce_draft(draft: DraftLike) -> StepDraft:
    """Accept a :class:`StepDraft` or a camelCase/snake_case mapping.

    Raises
    ------
    StepsValidationError
        If the mapping cannot be read as a draft (e.g. an unknown field type).
    """
    if isinstance(draft, StepDraft):
        return draft
    try:
        return StepDraft.model_validate(dict(draft))
    except ValidationError as exc:
        raise StepsValidationError(f"invalid draft: {exc}") from exc


def blank_field() -> FieldSpec:
    return FieldSpec(label="", name="", type=FieldType.TEXT, placeholder="", required=False, options=[])


def new_draft(step_type: StepType | str = StepType.FIRST, *, existing_count: int = 0) -> StepDraft:
    """Start a new draft with one blank field, ordered after *existing_count* steps."""
    return StepDraft(
        step_type=StepType(step_type),
        title="",
        description="",
        order=existing_count + 1,
        fields=[blank_field()],
    )


def draft_from_step(step: Step) -> StepDraft:
    """Open a persisted step for editing."""
    return StepDraft(
        id=step.id,
        step_type=step.step_type,
        title=step.title,
        description=step.description,
        order=step.order,
        fields=list(step.fields),
    )


def _with_fields(draft: StepDraft, fields: list[FieldSpec]) -> StepDraft:
    return draft.model_copy(update={"fields": fields})


def add_field(draft: StepDraft, field: FieldSpec | None = None) -> StepDraft:
    return _with_fields(draft, [*draft.fields, field or blank_field()])


def remove_field(draft: StepDraft, index: int) -> StepDraft:
    fields = list(draft.fields)
    del fields[index]
    return _with_fields(draft, fields)


def update_field(draft: StepDraft, index: int, **changes: Any) -> StepDraft:
    """Change attributes of the field at *index*.

    Switching ``type`` to one without choices clears its options.
    """
    fields = list(draft.fields)
    current = fields[index]
    values = current.model_dump(exclude={"raw"})
    values.update(changes)
    fields[index] = FieldSpec.model_validate(values)
    return _with_fields(draft, fields)


def toggle_required(draft: StepDraft, index: int) -> StepDraft:
    return update_field(draft, index, required=not draft.fields[index].required)


def add_option(draft: StepDraft, field_index: int, value: str = "") -> StepDraft:
    field = draft.fields[field_index]
    return update_field(draft, field_index, options=[*field.options, value])


def update_option(draft: StepDraft, field_index: int, option_index: int, value: Any) -> StepDraft:
    options = list(draft.fields[field_index].options)
    options[option_index] = normalize_option(value)
    return update_field(draft, field_index, options=options)


def remove_option(draft: StepDraft, field_index: int, option_index: int) -> StepDraft:
    options = list(draft.fields[field_index].options)
    del options[option_index]
    return update_field(draft, field_index, options=options)


def validate_draft(draft: StepDraft) -> None:
    """Reject drafts the service must never see.

    Raises
    ------
    StepsValidationError
        ``"title required"`` for a blank title, or
        ``"field missing label/name"`` if any field lacks either.
    """
    if not draft.title.strip():
        raise StepsValidationError("title required")
    for field in draft.fields:
        if not field.label.strip() or not field.name.strip():
            raise StepsValidationError("field missing label/name")


def field_payload(field: FieldSpec) -> dict[str, Any]:
    field_type = FieldType(field.type)
    options = [normalize_option(opt) for opt in field.options] if field_type in OPTION_FIELD_TYPES else []
    placeholder = "" if field_type in PLACEHOLDERLESS_FIELD_TYPES else (field.placeholder or "")
    return {
        "label": field.label,
        "name": field.name,
        "type": field_type.value,
        "required": bool(field.required),
        "placeholder": placeholder,
        "options": options,
    }


def build_payload(draft: DraftLike, *, existing_count: int, for_update: bool = False) -> dict[str, Any]:
    """Validate *draft* and build the JSON body for create or update.

    New steps without an explicit order are placed after the
    *existing_count* steps already loaded. Updates keep the draft's order.
    """
    draft = coerce_draft(draft)
    validate_draft(draft)

    payload: dict[str, Any] = {
        "stepType": StepType(draft.step_type).value,
        "stepTitle": draft.title,
        "stepDescription": draft.description,
        "fields": [field_payload(field) for field in draft.fields],
    }
    if for_update:
        if draft.order is not None:
            payload["stepOrder"] = draft.order
    else:
        payload["stepOrder"] = draft.order if draft.order is not None else existing_count + 1
    return payload
