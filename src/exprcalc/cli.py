"""
exprcalc CLI.

Usage:
    exprcalc eval "555/5 + 1 - 100"        # Print 12
    echo "(2 + 3) * 4" | exprcalc eval      # Read the expression from stdin
    exprcalc tokens "1 AND 2 /= 3"          # Show the token sequence
    exprcalc tree "10 - 3 - 2" --json       # Show the parsed tree
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from exprcalc._version import get_version
from exprcalc.core.calculator import CalcResult
from exprcalc.core.config import CalcConfig, load_config
from exprcalc.core.errors import CalcError, ConfigError, with_context
from exprcalc.core.expression_lang import evaluate, parse_expr, to_json, tokenize
from exprcalc.core.ir.expressions import Expr, IntLiteral, Parenthesized, render_infix

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="exprcalc",
    help="Evaluate integer arithmetic, comparison, and logical expressions",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"exprcalc version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to a TOML config file (default: ./exprcalc.toml if present)",
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Reject characters that are not part of any token",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """exprcalc CLI main callback for global options."""
    try:
        config = load_config(config_path)
        overrides = {}
        if strict is not None:
            overrides["strict"] = strict
        if log_level is not None:
            overrides["log_level"] = log_level
        if overrides:
            config = CalcConfig.model_validate({**config.model_dump(), **overrides})
    except (ConfigError, ValueError) as e:
        # ValueError covers pydantic validation of command-line overrides
        typer.echo(f"config error: {e}", err=True)
        raise typer.Exit(code=2)

    # Log to stderr so stdout carries only the result line
    logging.basicConfig(
        level=config.log_level_value,
        stream=sys.stderr,
        format="[%(asctime)s] %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("exprcalc").setLevel(config.log_level_value)
    logger.debug("Using configuration: %s", config)

    ctx.obj = config


def _read_source(expression: str | None) -> str:
    """Return the expression argument, or standard input for None / "-"."""
    if expression is None or expression == "-":
        return sys.stdin.read().strip()
    return expression


@app.command("eval")
def eval_command(
    ctx: typer.Context,
    expression: Optional[str] = typer.Argument(
        None, help="Expression to evaluate ('-' or omitted: read stdin)"
    ),
) -> None:
    """Evaluate an expression and print the integer result."""
    config: CalcConfig = ctx.obj
    source = _read_source(expression)

    try:
        expr = parse_expr(source, strict=config.strict)
        if config.echo_tree:
            typer.echo(str(expr), err=True)
        result = CalcResult.success(evaluate(expr))
    except CalcError as e:
        result = CalcResult.failure(e)

    if not result.ok:
        typer.echo(result.render(), err=True)
        raise typer.Exit(code=1)
    typer.echo(result.render())


@app.command("tokens")
def tokens_command(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression to tokenize"),
) -> None:
    """Show the token sequence of an expression."""
    config: CalcConfig = ctx.obj
    try:
        tokens = tokenize(expression, strict=config.strict)
    except CalcError as e:
        _exit_with_error(e, expression)

    table = Table(title="Tokens", show_header=True, header_style="bold")
    table.add_column("Pos", justify="right")
    table.add_column("Kind", style="cyan")
    table.add_column("Value", style="green")
    for tok in tokens:
        table.add_row(str(tok.pos), str(tok.kind), tok.value)

    Console().print(table)


@app.command("tree")
def tree_command(
    ctx: typer.Context,
    expression: str = typer.Argument(help="Expression to parse"),
    as_json: bool = typer.Option(False, "--json", "-j", help="Print the tree as JSON"),
) -> None:
    """Show the parsed expression tree."""
    config: CalcConfig = ctx.obj
    try:
        expr = parse_expr(expression, strict=config.strict)
        if as_json:
            typer.echo(to_json(expr, indent=2))
            return
    except CalcError as e:
        _exit_with_error(e, expression)

    Console().print(_build_tree(expr))


def _exit_with_error(error: CalcError, source: str) -> NoReturn:
    """Print the error line, then the source with a caret when the error has a position."""
    with_context(error, source)
    typer.echo(CalcResult.failure(error).render(), err=True)
    if error.context is not None:
        typer.echo(error.context.format(), err=True)
    raise typer.Exit(code=1)


# Subtrees below this depth are shown as one shortened infix line
MAX_TREE_DEPTH = 12
MAX_LABEL_LENGTH = 24


def _build_tree(expr: Expr) -> Tree:
    """Build a rich tree for expr, children in left-to-right order."""
    root = Tree(f"[bold]{render_infix(expr)}[/bold]")
    stack: list[tuple[Tree, Expr, int]] = [(root, expr, 0)]

    while stack:
        parent, node, depth = stack.pop()

        if isinstance(node, IntLiteral):
            parent.add(f"[green]{node.value}[/green]")
        elif depth >= MAX_TREE_DEPTH:
            parent.add(f"[dim]{_shorten(render_infix(node))}[/dim]")
        elif isinstance(node, Parenthesized):
            stack.append((parent.add("[dim]( )[/dim]"), node.inner, depth + 1))
        else:
            branch = parent.add(f"[cyan]{node.kind}[/cyan] [bold]{node.op}[/bold]")
            stack.append((branch, node.right, depth + 1))
            stack.append((branch, node.left, depth + 1))

    return root


def _shorten(text: str) -> str:
    if len(text) <= MAX_LABEL_LENGTH:
        return text
    return text[: MAX_LABEL_LENGTH - 3] + "..."


def main(argv: list[str] | None = None) -> None:
    """Run the CLI."""
    app(args=argv, prog_name="exprcalc")
