from __future__ import annotations

import io
import json
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from fixedsteps.cli import build_parser, main, run_command
from fixedsteps.exceptions import StepsValidationError
from fixedsteps.state.store import StepStore

if TYPE_CHECKING:
    from conftest import FakeStepsService


@pytest.mark.asyncio
async def test_list_prints_one_line_per_step(store: StepStore, service: FakeStepsService) -> None:
    service.seed("Welcome")
    service.seed("Thanks", step_type="final")
    out = io.StringIO()

    code = await run_command(build_parser().parse_args(["list"]), store, out=out)

    assert code == 0
    lines = out.getvalue().splitlines()
    assert lines == ["step-1\tfirst\t1\tWelcome", "step-2\tfinal\t2\tThanks"]


@pytest.mark.asyncio
async def test_show_prints_wire_json(store: StepStore, service: FakeStepsService) -> None:
    seeded = service.seed("Welcome")
    out = io.StringIO()

    code = await run_command(build_parser().parse_args(["show", seeded["_id"]]), store, out=out)

    assert code == 0
    assert json.loads(out.getvalue())["stepTitle"] == "Welcome"


@pytest.mark.asyncio
async def test_create_from_file_orders_after_existing(
    tmp_path: Path, store: StepStore, service: FakeStepsService
) -> None:
    service.seed("Welcome")
    draft_file = tmp_path / "draft.json"
    draft_file.write_text(
        json.dumps({"stepTitle": "Consent", "stepType": "final", "fields": [{"label": "OK", "name": "ok"}]}),
        encoding="utf-8",
    )
    out = io.StringIO()

    code = await run_command(build_parser().parse_args(["create", str(draft_file)]), store, out=out)

    assert code == 0
    assert json.loads(out.getvalue())["stepOrder"] == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "draft",
    [
        {"stepTitle": ""},
        {"stepTitle": "Intro", "fields": [{"label": None, "name": "name", "type": "text"}]},
        {"stepTitle": "Intro", "fields": [{"label": "Name", "name": "name", "type": "slider"}]},
    ],
)
async def test_create_invalid_draft_raises_validation(
    tmp_path: Path, store: StepStore, service: FakeStepsService, draft: dict
) -> None:
    draft_file = tmp_path / "draft.json"
    draft_file.write_text(json.dumps(draft), encoding="utf-8")

    with pytest.raises(StepsValidationError):
        await run_command(build_parser().parse_args(["create", str(draft_file)]), store, out=io.StringIO())

    assert [call[0] for call in service.calls] == ["GET"]


@pytest.mark.asyncio
async def test_delete_declined_sends_nothing(store: StepStore, service: FakeStepsService) -> None:
    seeded = service.seed("Welcome")
    prompts: list[str] = []

    def _decline(prompt: str) -> bool:
        prompts.append(prompt)
        return False

    code = await run_command(
        build_parser().parse_args(["delete", seeded["_id"]]), store, confirm=_decline, out=io.StringIO()
    )

    assert code == 1
    assert prompts == [f"Delete step {seeded['_id']}?"]
    assert service.calls == []


@pytest.mark.asyncio
async def test_delete_failure_reports_store_error(
    store: StepStore, service: FakeStepsService, capsys: pytest.CaptureFixture[str]
) -> None:
    seeded = service.seed("Welcome")
    service.fail("DELETE", "Not allowed", status=403)

    code = await run_command(build_parser().parse_args(["delete", "--yes", seeded["_id"]]), store, out=io.StringIO())

    assert code == 1
    assert "error: Not allowed" in capsys.readouterr().err


def test_main_without_base_url_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STEPS_BASE_URL", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        main(["list"])

    assert exc_info.value.code == 2
