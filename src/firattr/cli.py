"""
firattr CLI.

Commands:
- firattr translate EXPR: Translate a binding expression
- firattr parse-key KEY: Parse an x-fir-* attribute key
- firattr compile KEY=VALUE...: Compile one element's attributes
- firattr events KEY...: Show event templates of canonical keys
- firattr handlers: List action handlers by precedence
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from firattr._version import get_version
from firattr.core.actions import default_registry
from firattr.core.config import ErrorPolicy, FirattrConfig, load_config
from firattr.core.element import compile_element
from firattr.core.errors import FirattrError, GrammarError
from firattr.core.event_keys import class_name, collect_event_templates, event_ns_list, strip_key_prefix
from firattr.core.expression_lang import parse_action_key, translate_render_expression

console = Console()

app = typer.Typer(
    help="firattr - compile fir template attributes into canonical @fir: bindings",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"firattr {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version",
    ),
    log_level: str = typer.Option(
        os.getenv("FIRATTR_LOG_LEVEL", "WARNING"),
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """firattr CLI main callback for global options."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _split_pairs(pairs: list[str], what: str) -> list[tuple[str, str]]:
    result = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            typer.echo(f"Error: {what} must look like NAME=VALUE, got {pair!r}", err=True)
            raise typer.Exit(code=1)
        result.append((key, value))
    return result


def _load(config_path: Path | None) -> FirattrConfig:
    try:
        return load_config(config_path or Path.cwd())
    except FirattrError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("translate")
def translate_command(
    expression: str = typer.Argument(..., help="Binding expression, e.g. 'create->todo'"),
    action: list[str] = typer.Option([], "--action", "-a", help="Action map entry NAME=VALUE"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to firattr.toml"),
) -> None:
    """Translate a binding expression into canonical attributes."""
    cfg = _load(config)
    actions_map = cfg.actions_with(dict(_split_pairs(action, "--action")))
    try:
        typer.echo(translate_render_expression(expression, actions_map))
    except FirattrError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


@app.command("parse-key")
def parse_key_command(
    key: str = typer.Argument(..., help="Attribute key, e.g. 'x-fir-toggleClass:[a,b]'"),
) -> None:
    """Parse an x-fir-* attribute key into action name and parameters."""
    try:
        name, params = parse_action_key(key)
    except GrammarError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"action: {name}")
    typer.echo(f"params: {', '.join(params) if params else '(none)'}")


@app.command("compile")
def compile_command(
    attributes: list[str] = typer.Argument(..., help="Element attributes as KEY=VALUE"),
    action: list[str] = typer.Option([], "--action", "-a", help="Action map entry NAME=VALUE"),
    skip_errors: bool = typer.Option(False, "--skip-errors", help="Log and keep bad attributes"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to firattr.toml"),
) -> None:
    """Compile one element's attributes."""
    cfg = _load(config)
    on_error = ErrorPolicy.SKIP if skip_errors else cfg.compile.on_error
    try:
        compiled = compile_element(
            _split_pairs(attributes, "attribute"),
            actions_map=cfg.actions_with(dict(_split_pairs(action, "--action"))),
            on_error=on_error,
        )
    except FirattrError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    for key, value in compiled:
        typer.echo(f'{key}="{value}"')


@app.command("events")
def events_command(
    keys: list[str] = typer.Argument(..., help="Canonical keys, e.g. '@fir:create:ok::todo'"),
    fir_key: str | None = typer.Option(None, "--fir-key", help="fir-key used in class names"),
) -> None:
    """Show which templates each event renders, with the element class names."""
    evt = collect_event_templates([(key, "") for key in keys])
    table = Table(box=box.SIMPLE)
    table.add_column("Event", style="cyan")
    table.add_column("Templates")
    table.add_column("Class", style="bright_black")
    for event_id in sorted(evt):
        table.add_row(event_id, ", ".join(sorted(evt[event_id])), class_name(event_id, fir_key))
    console.print(table)

    for key in keys:
        try:
            expanded = event_ns_list(strip_key_prefix(key))
        except GrammarError:
            continue  # already reported by collect_event_templates
        if len(expanded) > 1:
            console.print(escape(f"{key} expands to: {', '.join(expanded)}"))


@app.command("handlers")
def handlers_command() -> None:
    """List the built-in action handlers, highest priority first."""
    table = Table(title="Action handlers", box=box.SIMPLE)
    table.add_column("Precedence", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Coexists")
    for handler in default_registry().by_precedence():
        table.add_row(str(handler.precedence), f"x-fir-{handler.name}", "yes" if handler.coexists else "no")
    console.print(table)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])
