from __future__ import annotations

import pytest

from fixedsteps.drafts import (
    add_field,
    add_option,
    blank_field,
    build_payload,
    coerce_draft,
    draft_from_step,
    new_draft,
    remove_field,
    remove_option,
    toggle_required,
    update_field,
    update_option,
    validate_draft,
)
from fixedsteps.exceptions import StepsValidationError
from fixedsteps.models.step import FieldSpec, FieldType, Step, StepDraft, StepType


def _named(draft: StepDraft) -> StepDraft:
    return update_field(draft.model_copy(update={"title": "Intro"}), 0, label="Name", name="name")


class TestEditing:
    def test_new_draft_has_one_blank_field_and_next_order(self) -> None:
        draft = new_draft(StepType.FINAL, existing_count=2)

        assert draft.step_type == StepType.FINAL
        assert draft.order == 3
        assert draft.fields == [blank_field()]
        assert draft.id is None

    def test_editing_returns_new_draft(self) -> None:
        draft = new_draft()

        edited = add_field(draft)

        assert len(draft.fields) == 1
        assert len(edited.fields) == 2

    def test_remove_field(self) -> None:
        draft = add_field(new_draft(), FieldSpec(label="Email", name="email", type=FieldType.EMAIL))

        draft = remove_field(draft, 0)

        assert [f.name for f in draft.fields] == ["email"]

    def test_toggle_required(self) -> None:
        draft = toggle_required(new_draft(), 0)
        assert draft.fields[0].required is True
        assert toggle_required(draft, 0).fields[0].required is False

    def test_option_lifecycle(self) -> None:
        draft = update_field(new_draft(), 0, type="radio")
        draft = add_option(draft, 0)
        draft = add_option(draft, 0, "No")
        draft = update_option(draft, 0, 0, {"value": "Yes"})

        assert draft.fields[0].options == ["Yes", "No"]

        draft = remove_option(draft, 0, 1)
        assert draft.fields[0].options == ["Yes"]

    def test_switching_to_plain_type_clears_options(self) -> None:
        draft = update_field(new_draft(), 0, type="select", options=["a", "b"])
        assert draft.fields[0].options == ["a", "b"]

        draft = update_field(draft, 0, type="number")

        assert draft.fields[0].type == FieldType.NUMBER
        assert draft.fields[0].options == []

    def test_out_of_range_index_raises(self) -> None:
        with pytest.raises(IndexError):
            remove_field(new_draft(), 5)

    def test_draft_from_step_keeps_identity_and_order(self) -> None:
        step = Step.model_validate({"_id": "s1", "stepType": "final", "stepTitle": "Bye", "stepOrder": 4})

        draft = draft_from_step(step)

        assert draft.id == "s1"
        assert draft.is_persisted
        assert draft.order == 4
        assert draft.step_type == StepType.FINAL

    def test_coerce_draft_passes_models_through(self) -> None:
        draft = new_draft()
        assert coerce_draft(draft) is draft
        assert coerce_draft({"stepTitle": "x"}).title == "x"

    def test_coerce_draft_reads_null_label_and_name_as_empty(self) -> None:
        draft = coerce_draft({"stepTitle": "Intro", "fields": [{"label": None, "name": None, "type": "text"}]})
        assert (draft.fields[0].label, draft.fields[0].name) == ("", "")
        with pytest.raises(StepsValidationError, match="field missing label/name"):
            validate_draft(draft)

    @pytest.mark.parametrize(
        "raw",
        [
            {"stepTitle": "Intro", "fields": [{"label": "A", "name": "a", "type": "slider"}]},
            {"stepTitle": "Intro", "stepType": "middle"},
            {"stepTitle": "Intro", "fields": "not a list"},
        ],
    )
    def test_coerce_draft_maps_unreadable_input_to_validation_error(self, raw: dict) -> None:
        with pytest.raises(StepsValidationError, match="invalid draft"):
            coerce_draft(raw)


class TestValidation:
    def test_blank_title(self) -> None:
        with pytest.raises(StepsValidationError, match="title required"):
            validate_draft(StepDraft(title="   "))

    @pytest.mark.parametrize(("label", "name"), [("", "name"), ("Name", ""), (" ", " ")])
    def test_field_needs_label_and_name(self, label: str, name: str) -> None:
        draft = StepDraft(title="Intro", fields=[FieldSpec(label=label, name=name)])
        with pytest.raises(StepsValidationError, match="field missing label/name"):
            validate_draft(draft)

    def test_no_fields_is_allowed(self) -> None:
        validate_draft(StepDraft(title="Intro"))


class TestPayload:
    def test_create_payload_shape(self) -> None:
        payload = build_payload(
            {
                "stepTitle": "Intro",
                "stepType": "first",
                "fields": [{"label": "Name", "name": "name", "type": "text"}],
            },
            existing_count=0,
        )

        assert payload == {
            "stepType": "first",
            "stepTitle": "Intro",
            "stepDescription": "",
            "stepOrder": 1,
            "fields": [
                {
                    "label": "Name",
                    "name": "name",
                    "type": "text",
                    "required": False,
                    "placeholder": "",
                    "options": [],
                }
            ],
        }

    def test_create_order_defaults_after_existing(self) -> None:
        payload = build_payload(StepDraft(title="Intro"), existing_count=4)
        assert payload["stepOrder"] == 5

    def test_explicit_order_is_kept_on_create(self) -> None:
        payload = build_payload(StepDraft(title="Intro", order=2), existing_count=4)
        assert payload["stepOrder"] == 2

    def test_update_preserves_order_or_omits_it(self) -> None:
        assert build_payload(StepDraft(title="A", order=9), existing_count=1, for_update=True)["stepOrder"] == 9
        assert "stepOrder" not in build_payload(StepDraft(title="A"), existing_count=1, for_update=True)

    def test_options_flattened_and_placeholder_dropped_for_choice_controls(self) -> None:
        field = FieldSpec.model_validate(
            {"label": "Agree", "name": "agree", "type": "checkbox", "placeholder": "ignored", "options": [{"value": "yes"}]}
        )

        (submitted,) = build_payload(StepDraft(title="Consent", fields=[field]), existing_count=0)["fields"]

        assert submitted["options"] == ["yes"]
        assert submitted["placeholder"] == ""

    def test_invalid_draft_never_builds(self) -> None:
        with pytest.raises(StepsValidationError):
            build_payload({"stepTitle": "", "fields": []}, existing_count=0)

    def test_named_new_draft_is_submittable(self) -> None:
        payload = build_payload(_named(new_draft(existing_count=1)), existing_count=1)
        assert payload["stepOrder"] == 2
        assert payload["fields"][0]["name"] == "name"
