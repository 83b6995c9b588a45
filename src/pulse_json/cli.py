"""
Command-line interface for pulse-json.
Formats and validates JSON text with the same engine ``stringify``/``parse`` use.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from pulse_json.errors import JSONError, JSONSyntaxError
from pulse_json.parse import parse
from pulse_json.stringify import stringify
from pulse_json.values import Undefined

cli = typer.Typer(
	name="pulse-json",
	help="Format and validate JSON with ECMAScript JSON.stringify/JSON.parse semantics",
	no_args_is_help=True,
)

err_console = Console(stderr=True)


def _read_source(source: str) -> str:
	name = "<stdin>" if source == "-" else source
	try:
		if source == "-":
			return sys.stdin.read()
		return Path(source).read_text(encoding="utf-8")
	except OSError as exc:
		err_console.print(f"❌ Cannot read {escape(name)}: {exc.strerror or exc}")
		raise typer.Exit(1) from None
	except UnicodeDecodeError as exc:
		err_console.print(
			f"❌ Cannot read {escape(name)}: not valid UTF-8 ({exc.reason} at byte {exc.start})"
		)
		raise typer.Exit(1) from None


def _space_arg(indent: str) -> int | str:
	try:
		return int(indent)
	except ValueError:
		return indent


def _report(exc: JSONError, source: str) -> None:
	where = ""
	if isinstance(exc, JSONSyntaxError) and exc.position is not None:
		where = f" at position {exc.position}"
	err_console.print(
		f"❌ [red]{exc.js_name}[/red] in {escape(source)}{where}: {escape(exc.message)}"
	)


@cli.command("format")
def format_(
	source: str = typer.Argument("-", help="File to read, or '-' for stdin"),
	indent: str = typer.Option(
		"2",
		"--indent",
		"-i",
		help="Spaces per level (0-10), or a literal indent string",
	),
	keys: list[str] | None = typer.Option(
		None,
		"--key",
		"-k",
		help="Only keep these object keys (repeatable, order preserved)",
	),
):
	"""Parse the input and print it re-serialized."""
	text = _read_source(source)
	try:
		value = parse(text)
		output = stringify(value, list(keys) if keys else None, _space_arg(indent))
	except JSONError as exc:
		_report(exc, source)
		raise typer.Exit(1) from None
	if isinstance(output, Undefined):
		raise typer.Exit(0)
	typer.echo(output)


@cli.command("check")
def check(
	source: str = typer.Argument("-", help="File to read, or '-' for stdin"),
):
	"""Validate that the input is well-formed JSON."""
	text = _read_source(source)
	try:
		parse(text)
	except JSONError as exc:
		_report(exc, source)
		raise typer.Exit(1) from None
	typer.echo(f"✅ {source} is valid JSON")


def main() -> None:
	cli()


if __name__ == "__main__":
	main()
