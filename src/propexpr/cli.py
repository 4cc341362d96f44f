"""
propexpr command line interface.

Commands:
- eval: Evaluate an expression against the manifest's symbols
- tokens: Show how an expression tokenizes
- symbols: List the symbols a manifest defines
"""

from __future__ import annotations

import json
import logging
import platform
import re

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from propexpr._version import get_version
from propexpr.core.errors import ManifestError
from propexpr.core.expression_lang.evaluator import evaluate_detailed
from propexpr.core.expression_lang.tokenizer import ExpressionTokenError, TokenKind, tokenize
from propexpr.core.ir.values import as_display_string, kind_of, to_python
from propexpr.core.manifest import ExpressionManifest, load_manifest, resolve_manifest_path

app = typer.Typer(help="Evaluate property expressions", no_args_is_help=True)
console = Console()

_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"propexpr version {get_version()}")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log evaluation details"),
) -> None:
    """propexpr CLI main callback for global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(manifest: str | None) -> ExpressionManifest:
    path = resolve_manifest_path(manifest)
    if path is None:
        return ExpressionManifest()
    try:
        return load_manifest(path)
    except ManifestError as e:
        typer.echo(f"ERROR: {e.message}", err=True)
        raise typer.Exit(code=1)


@app.command("eval")
def eval_command(
    expression: str = typer.Argument(..., help="Expression to evaluate, e.g. '3 + FOO * 2'"),
    manifest: str | None = typer.Option(
        None, "--manifest", "-m", help="Path to propexpr.toml (default: $PROPEXPR_MANIFEST)"
    ),
    assignments: list[str] | None = typer.Option(
        None, "--set", "-s", help="NAME=EXPR, evaluated in order before the expression"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print kind, value and error as JSON"),
) -> None:
    """
    Evaluate an expression.

    Prints the result's display text. Exits with code 1 when the
    expression (or a --set expression) does not parse.
    """
    loaded = _load(manifest)
    context = loaded.symbol_context()
    resolver = loaded.callee_resolver()

    for assignment in assignments or []:
        name, sep, source = assignment.partition("=")
        name = name.strip()
        if not sep or not _NAME_RE.fullmatch(name):
            typer.echo(f"ERROR: --set expects NAME=EXPR, got {assignment!r}", err=True)
            raise typer.Exit(code=1)
        assigned = evaluate_detailed(source, context, resolver=resolver)
        if not assigned.ok:
            typer.echo(f"ERROR: --set {name}: {assigned.error}", err=True)
            raise typer.Exit(code=1)
        context.write(name, assigned.value)

    result = evaluate_detailed(expression, context, resolver=resolver)

    if as_json:
        payload = {
            "kind": str(kind_of(result.value)),
            "value": to_python(result.value),
            "display": as_display_string(result.value),
            "error": result.error,
        }
        typer.echo(json.dumps(payload))
    elif result.error:
        typer.echo(f"ERROR: {result.error}", err=True)
    else:
        typer.echo(as_display_string(result.value))

    if not result.ok:
        raise typer.Exit(code=1)


@app.command("tokens")
def tokens_command(
    expression: str = typer.Argument(..., help="Expression to tokenize"),
) -> None:
    """Show the token stream for an expression."""
    try:
        tokens = tokenize(expression)
    except ExpressionTokenError as e:
        typer.echo(f"ERROR: {e}", err=True)
        raise typer.Exit(code=1)

    table = Table(title="Tokens")
    table.add_column("Pos", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Text")
    for tok in tokens:
        if tok.kind == TokenKind.EOF:
            continue
        table.add_row(str(tok.pos), tok.kind.name, Text(tok.value))
    console.print(table)


@app.command("symbols")
def symbols_command(
    manifest: str | None = typer.Option(
        None, "--manifest", "-m", help="Path to propexpr.toml (default: $PROPEXPR_MANIFEST)"
    ),
) -> None:
    """List the symbols defined by a manifest."""
    context = _load(manifest).symbol_context()
    names = sorted(context.names())
    if not names:
        typer.echo("No symbols defined.")
        return

    table = Table(title="Symbols")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Value")
    for name in names:
        value = context.read(name)
        table.add_row(name, str(kind_of(value)), Text(as_display_string(value)))
    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
