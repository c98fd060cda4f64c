"""CLI adapter for ``lib_json_vault`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the vault operations as a command line interface backed by a JSON file,
so operators can inspect and edit a vault without writing Python.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling, settings, and the
  vault file slot.
* ``insert`` / ``update`` / ``delete`` / ``find`` / ``clear`` / ``list`` /
  ``show`` – one command per operation, each printing its result records as
  JSON.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer: it resolves settings (:mod:`lib_json_vault.adapters.env`),
builds a :class:`JsonFileSlot`, and calls :mod:`lib_json_vault.core`.
``lib_cli_exit_tools`` turns raised :class:`VaultError` instances into a
printed message and a non-zero exit code.
"""

from __future__ import annotations

import json
import sys
import uuid
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from . import core
from .adapters.env.default import load_settings
from .adapters.payload.structured import loader_for
from .adapters.slots.json_file import JsonFileSlot
from .domain.values import ensure_json_value
from .observability import trace_scope

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

MERGE_MODE_CHOICES: Final[tuple[str, ...]] = ("replace", "merge")
OUTPUT_FORMAT_CHOICES: Final[tuple[str, ...]] = ("keys", "full", "vault")


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_json_vault")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Shared JSON document vault with dotted-path keys",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_json_vault",
    message="lib_json_vault version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--vault",
    "vault_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Vault file (defaults to LIB_JSON_VAULT_PATH or ./vault.json)",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Indentation for the vault file and printed output (defaults to LIB_JSON_VAULT_INDENT or 2)",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, vault_path: Optional[Path], indent: Optional[int]) -> None:
    """Root command configuring traceback handling and the vault slot.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and binds a fresh trace
        identifier until the invocation's context closes.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    overrides: dict[str, Any] = {}
    if vault_path is not None:
        overrides["path"] = str(vault_path)
    if indent is not None:
        overrides["indent"] = indent
    settings = load_settings().with_overrides(overrides)
    ctx.obj["settings"] = settings
    ctx.obj["slot"] = JsonFileSlot(settings.path, indent=settings.indent)
    ctx.with_resource(trace_scope(uuid.uuid4().hex))


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_json_vault")
    except metadata.PackageNotFoundError:
        click.echo("lib_json_vault (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_json_vault')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("insert", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option("--data", default=None, help="JSON value to store")
@click.option(
    "--data-file",
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    default=None,
    help="JSON, TOML, or YAML file holding the value to store",
)
@click.option(
    "--merge-mode",
    type=click.Choice(MERGE_MODE_CHOICES, case_sensitive=False),
    default="replace",
    show_default=True,
    help="replace fails on existing keys; merge deep-merges objects",
)
@click.pass_context
def cli_insert(ctx: click.Context, key: str, data: Optional[str], data_file: Optional[Path], merge_mode: str) -> None:
    """Insert a value at KEY (dots address nested objects)."""

    params = core.InsertParams(key=key, data=_read_payload(data, data_file), merge_mode=merge_mode.lower())
    _echo(ctx, core.insert_json(ctx.obj["slot"], [{}], params))


@cli.command("update", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option("--data", default=None, help="JSON value to write")
@click.option(
    "--data-file",
    type=click.Path(path_type=Path, exists=True, dir_okay=False, readable=True),
    default=None,
    help="JSON, TOML, or YAML file holding the value to write",
)
@click.option(
    "--merge-mode",
    type=click.Choice(MERGE_MODE_CHOICES, case_sensitive=False),
    default="merge",
    show_default=True,
    help="merge deep-merges objects; replace overwrites",
)
@click.option(
    "--create/--no-create",
    default=True,
    show_default=True,
    help="Create KEY when it does not exist yet",
)
@click.pass_context
def cli_update(
    ctx: click.Context,
    key: str,
    data: Optional[str],
    data_file: Optional[Path],
    merge_mode: str,
    create: bool,
) -> None:
    """Update the value at KEY."""

    params = core.UpdateParams(
        key=key,
        data=_read_payload(data, data_file),
        merge_mode=merge_mode.lower(),
        create_if_not_exists=create,
    )
    _echo(ctx, core.update_json(ctx.obj["slot"], [{}], params))


@cli.command("delete", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option(
    "--error-if-missing/--no-error-if-missing",
    default=False,
    show_default=True,
    help="Fail when KEY does not exist",
)
@click.pass_context
def cli_delete(ctx: click.Context, key: str, error_if_missing: bool) -> None:
    """Delete KEY and print the value it held."""

    params = core.DeleteParams(key=key, error_if_not_exists=error_if_missing)
    _echo(ctx, core.delete_json(ctx.obj["slot"], [{}], params))


@cli.command("find", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option(
    "--error-if-missing/--no-error-if-missing",
    default=False,
    show_default=True,
    help="Fail when KEY does not exist",
)
@click.pass_context
def cli_find(ctx: click.Context, key: str, error_if_missing: bool) -> None:
    """Print the value stored at KEY."""

    params = core.FindParams(key=key, error_if_not_exists=error_if_missing)
    _echo(ctx, core.find_key(ctx.obj["slot"], [{}], params))


@cli.command("clear", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--key", default=None, help="Remove only this key instead of the whole vault")
@click.pass_context
def cli_clear(ctx: click.Context, key: Optional[str]) -> None:
    """Empty the vault, or remove a single key with --key."""

    params = core.ClearParams(clear_mode="all") if key is None else core.ClearParams(clear_mode="key", key=key)
    _echo(ctx, core.clear_json(ctx.obj["slot"], [{}], params))


@cli.command("list", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(OUTPUT_FORMAT_CHOICES, case_sensitive=False),
    default="full",
    show_default=True,
    help="keys, top-level key/value items, or the whole vault",
)
@click.option(
    "--nested/--no-nested",
    default=True,
    show_default=True,
    help="Include nested dotted keys",
)
@click.pass_context
def cli_list(ctx: click.Context, output_format: str, nested: bool) -> None:
    """List vault keys and values."""

    params = core.ListParams(output_format=output_format.lower(), include_nested=nested)
    _echo(ctx, core.list_json(ctx.obj["slot"], [], params))


@cli.command("show", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--clear/--no-clear", default=False, help="Clear the vault before showing it")
@click.pass_context
def cli_show(ctx: click.Context, clear: bool) -> None:
    """Print the whole vault (initialising an empty one if needed)."""

    _echo(ctx, core.vault_action(ctx.obj["slot"], "clear" if clear else "init"))


def _read_payload(data: Optional[str], data_file: Optional[Path]) -> Optional[str]:
    """Return the payload as JSON text from --data or --data-file (exactly one is required)."""

    if (data is None) == (data_file is None):
        raise click.UsageError("Provide exactly one of --data or --data-file")
    if data is not None:
        return data
    value = loader_for(data_file).load(str(data_file))
    ensure_json_value(value)
    return json.dumps(value, ensure_ascii=False)


def _echo(ctx: click.Context, payload: Any) -> None:
    """Print *payload* as JSON using the configured indentation."""

    click.echo(json.dumps(payload, indent=ctx.obj["settings"].indent, ensure_ascii=False))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_json_vault",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
