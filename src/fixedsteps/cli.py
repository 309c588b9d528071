"""Command-line front end for managing fixed steps.

Reads connection settings from ``STEPS_*`` environment variables (see
:meth:`fixedsteps.config.StepsConfig.from_env`); ``--base-url`` and
``--token`` override them.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, TextIO

from fixedsteps.client import StepsClient
from fixedsteps.config import StepsConfig
from fixedsteps.exceptions import StepsConfigError, StepsValidationError
from fixedsteps.models.step import Step
from fixedsteps.state.store import StepStore


def _confirm(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _step_json(step: Step) -> dict[str, Any]:
    return step.model_dump(mode="json", by_alias=True)


def _load_draft(path: str) -> dict[str, Any]:
    text = sys.stdin.read() if path == "-" else Path(path).read_text(encoding="utf-8")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise StepsValidationError("draft file must contain a JSON object")
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fixedsteps", description="Manage the fixed first/final form steps.")
    parser.add_argument("--base-url", default=None, help="Forms service root URL (default: $STEPS_BASE_URL)")
    parser.add_argument("--token", default=None, help="Bearer token (default: $STEPS_AUTH_TOKEN)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List all steps")

    show = sub.add_parser("show", help="Show one step as JSON")
    show.add_argument("step_id")

    create = sub.add_parser("create", help="Create a step from a JSON draft ('-' for stdin)")
    create.add_argument("draft")

    update = sub.add_parser("update", help="Update a step from a JSON draft ('-' for stdin)")
    update.add_argument("step_id")
    update.add_argument("draft")

    delete = sub.add_parser("delete", help="Delete a step")
    delete.add_argument("step_id")
    delete.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    return parser


async def run_command(
    args: argparse.Namespace,
    store: StepStore,
    *,
    confirm: Callable[[str], bool] = _confirm,
    out: TextIO = sys.stdout,
) -> int:
    """Execute one parsed command against *store*; returns the exit code."""
    command = args.command

    if command == "list":
        result = await store.list()
        if result.ok:
            for step in store.items:
                print(f"{step.id}\t{step.step_type}\t{step.order}\t{step.title}", file=out)
    elif command == "show":
        result = await store.get_by_id(args.step_id)
        if result.ok and store.selected is not None:
            print(json.dumps(_step_json(store.selected), indent=2), file=out)
    elif command in {"create", "update"}:
        # New steps are ordered after the ones currently on the server.
        listed = await store.list()
        if not listed.ok:
            print(f"error: {store.error}", file=sys.stderr)
            return 1
        draft = _load_draft(args.draft)
        if command == "create":
            result = await store.create(draft)
        else:
            result = await store.update(args.step_id, draft)
        if result.ok:
            print(json.dumps(_step_json(result.payload), indent=2), file=out)
    elif command == "delete":
        if not args.yes and not confirm(f"Delete step {args.step_id}?"):
            print("aborted", file=out)
            return 1
        result = await store.delete(args.step_id)
        if result.ok:
            print(f"deleted {args.step_id}", file=out)
    else:  # pragma: no cover - argparse rejects unknown commands
        raise ValueError(f"unknown command {command!r}")

    if not result.ok:
        print(f"error: {store.error}", file=sys.stderr)
        return 1
    return 0


async def _main_async(args: argparse.Namespace, config: StepsConfig) -> int:
    async with StepsClient(config) as client:
        return await run_command(args, client.create_store())


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = StepsConfig.from_env(
            base_url=args.base_url,
            auth_token=args.token,
            api_trace_enabled=True if args.verbose else None,
        )
    except StepsConfigError as exc:
        parser.error(str(exc))

    try:
        return asyncio.run(_main_async(args, config))
    except StepsValidationError as exc:
        print(f"invalid draft: {exc}", file=sys.stderr)
        return 2
    except (OSError, json.JSONDecodeError) as exc:
        print(f"cannot read draft: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
