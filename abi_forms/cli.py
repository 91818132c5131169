"""Command line interface for abi-forms.

Usage:
  abi-forms linearize "function swap((address tokenIn, uint24 fee) p, uint256 x)"
  abi-forms validate uint8 255
  abi-forms preview "function transfer(address to, uint256 amount)" \\
      -p to=0x0000000000000000000000000000000000000000 -p amount=100
  abi-forms calldata "transfer(address to, uint256 amount)" \\
      "0x0000000000000000000000000000000000000000, 100"
"""

from __future__ import annotations

import json
import sys
from typing import Any

import click
from loguru import logger

from abi_forms.core.calldata import build_calldata
from abi_forms.core.config import get_log_level, load_config
from abi_forms.core.errors import (
    EncodingError,
    FieldValidationError,
    SignatureParseError,
)
from abi_forms.core.form import load_signature, update_fields
from abi_forms.core.linearize import display_signature, linearize
from abi_forms.core.signature.function_signature import parse_signature
from abi_forms.core.validation import check_field

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    values: dict[str, str] = {}
    for raw in assignments:
        name, sep, value = raw.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(
                f"Expected name=value, got {raw!r}", param_hint="--param"
            )
        values[name.strip()] = value
    return values


@click.group(
    name="abi-forms", help="Build and validate calls from function signatures."
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Defaults to logging.level from the config file, else INFO.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a JSON config file.",
)
def cli(log_level: str | None, config_path: str | None) -> None:
    if config_path:
        load_config(config_path, require_exists=True)
    logger.remove()
    logger.add(sys.stderr, level=str(log_level or get_log_level()).upper())


@cli.command(name="linearize", help="Show the renderable parameter rows.")
@click.argument("signature")
def linearize_cmd(signature: str) -> None:
    try:
        descriptor = parse_signature(signature)
    except SignatureParseError as exc:
        _echo_json({"ok": False, "error": str(exc)})
        sys.exit(1)

    _echo_json(
        {
            "ok": True,
            "result": {
                "name": descriptor.name,
                "functionSignature": display_signature(descriptor),
                "selectorSignature": descriptor.selector_signature,
                "stateMutability": descriptor.state_mutability,
                "parameters": [p.to_dict() for p in linearize(descriptor)],
            },
        }
    )


@cli.command(name="validate", help="Validate VALUE against a Solidity TYPE.")
@click.argument("type_str", metavar="TYPE")
@click.argument("value", default="")
def validate_cmd(type_str: str, value: str) -> None:
    try:
        check_field(value, type_str)
    except FieldValidationError as exc:
        _echo_json({"valid": False, "error": exc.reason})
        sys.exit(1)
    _echo_json({"valid": True, "error": None})


@cli.command(name="preview", help="Fill a form and show preview and calldata.")
@click.argument("signature")
@click.option(
    "--param",
    "-p",
    "params",
    multiple=True,
    help="Field value as name=value (repeatable).",
)
@click.option(
    "--values-json",
    default=None,
    help="JSON object of field values; arrays and tuples may be nested JSON.",
)
def preview_cmd(
    signature: str, params: tuple[str, ...], values_json: str | None
) -> None:
    state = load_signature(signature)
    if not state.parsed:
        _echo_json({"ok": False, "error": state.error})
        sys.exit(1)

    changes: dict[str, Any] = {}
    if values_json:
        try:
            loaded = json.loads(values_json)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--values-json") from exc
        if not isinstance(loaded, dict):
            raise click.BadParameter(
                "must be a JSON object", param_hint="--values-json"
            )
        changes.update(loaded)
    changes.update(_parse_assignments(params))

    if changes:
        try:
            state = update_fields(state, changes)
        except KeyError as exc:
            raise click.BadParameter(str(exc.args[0]), param_hint="--param") from exc

    _echo_json({"ok": True, "result": state.to_dict()})


@cli.command(
    name="calldata", help="Encode a call from a signature and value preview."
)
@click.argument("signature")
@click.argument("value_preview", default="")
def calldata_cmd(signature: str, value_preview: str) -> None:
    try:
        data = build_calldata(signature, value_preview)
    except EncodingError as exc:
        _echo_json({"ok": False, "error": str(exc)})
        sys.exit(1)
    _echo_json({"ok": True, "result": {"calldata": data}})


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
