"""CLI adapter for ``lib_tag_merge`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let developers check tag expressions and try them against structured documents
without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_parse_tag` – parses a tag and prints its structure as JSON.
* :func:`cli_resolve` – resolves a tag against a JSON/TOML/YAML document.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It calls :func:`lib_tag_merge.core.resolve`
and :func:`lib_tag_merge.domain.tag.parse_tag` and never reaches into adapters.
``lib_cli_exit_tools`` centralises the exit code strategy so tag errors surface
with a non-zero status and an optional traceback.
"""

from __future__ import annotations

import json
import sys
import tomllib
from importlib import metadata
from pathlib import Path
from typing import Any, Callable, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click
import yaml

from .core import resolve
from .domain.resolution import Resolved
from .domain.tag import parse_tag

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_DOCUMENT_PARSERS: Final[dict[str, Callable[[bytes], Any]]] = {
    ".json": lambda payload: json.loads(payload.decode("utf-8")),
    ".toml": lambda payload: tomllib.loads(payload.decode("utf-8")),
    ".yaml": lambda payload: yaml.safe_load(payload),
    ".yml": lambda payload: yaml.safe_load(payload),
}


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_tag_merge")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Declarative tag-driven field merge engine",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_tag_merge",
    message="lib_tag_merge version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_tag_merge")
    except metadata.PackageNotFoundError:
        click.echo("lib_tag_merge (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_tag_merge')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("parse-tag", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("tag")
@click.option("--strict/--no-strict", default=False, help="Reject unknown options")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_parse_tag(tag: str, strict: bool, indent: Optional[int]) -> None:
    """Parse TAG and print its alternatives, options and canonical form.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["parse-tag", "EV.URL | FV.Service.URL, hydrate"])
    >>> json.loads(result.output)["canonical"]
    'EV.URL|FV.Service.URL,hydrate'
    """

    expression = parse_tag(tag, strict=strict)
    payload = {
        "alternatives": [list(alternative.segments) for alternative in expression.alternatives],
        "options": list(expression.options),
        "unknown_options": list(expression.unknown_options),
        "canonical": expression.render(),
    }
    click.echo(json.dumps(payload, indent=indent))


@cli.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--source",
    "source",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    required=True,
    help="JSON, TOML or YAML document to resolve against",
)
@click.argument("tag")
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
def cli_resolve(source: Path, tag: str, indent: Optional[int]) -> None:
    """Resolve TAG against the document at --source and print the value as JSON.

    Prints ``null`` when no alternative produced a value.
    """

    document = _load_document(source)
    outcome = resolve(document, tag)
    value = outcome.value if isinstance(outcome, Resolved) else None
    click.echo(json.dumps(value, indent=indent, default=str))


def _load_document(path: Path) -> Any:
    """Parse *path* with the parser registered for its suffix."""

    parser = _DOCUMENT_PARSERS.get(path.suffix.lower())
    if parser is None:
        raise click.BadParameter(
            f"Unsupported document type {path.suffix or '<none>'}; use one of: {', '.join(sorted(_DOCUMENT_PARSERS))}.",
            param_hint="--source",
        )
    payload = path.read_bytes()
    try:
        return parser(payload)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        raise click.BadParameter(f"Cannot parse {path}: {exc}", param_hint="--source") from exc


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_tag_merge",
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
