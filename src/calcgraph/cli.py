"""Command-line interface for calcgraph."""

from __future__ import annotations

import json
from pathlib import Path

import click

from calcgraph import __version__


@click.group()
@click.version_option(version=__version__, prog_name="calcgraph")
def main() -> None:
    """calcgraph -- parse and evaluate small arithmetic formulas."""


# ---------------------------------------------------------------------------
# eval
# ---------------------------------------------------------------------------


@main.command("eval")
@click.argument("formula")
@click.option("--set", "assignments", multiple=True, help="Variable value as name=value.")
@click.option("--project", "directory", default=None, type=click.Path(exists=True, file_okay=False), help="Project directory (calcgraph.yaml, logs/).")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--tree/--no-tree", "show_tree", default=True, help="Print the parenthesized tree.")
def eval_cmd(formula: str, assignments: tuple[str, ...], directory: str | None, as_json: bool, show_tree: bool) -> None:
    """Evaluate FORMULA.

    Variables may be written bare (x) or in brackets ([net income]).
    """
    from calcgraph.calculator import Calculator
    from calcgraph.config import parse_assignments
    from calcgraph.formulas import ENGINE_ERRORS

    try:
        values = parse_assignments(assignments)
        calc = Calculator.from_project(Path(directory)) if directory else Calculator()
    except ValueError as e:
        raise click.ClickException(str(e))

    try:
        result = calc.evaluate(formula, values)
    except ENGINE_ERRORS as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps({
            "formula": result.formula,
            "expression": result.expression,
            "value": result.display,
            "rendered": result.rendered,
        }, indent=2))
        return

    click.echo(f"{result.expression} = {result.display}")
    if show_tree:
        click.echo(result.rendered)


# ---------------------------------------------------------------------------
# tokens
# ---------------------------------------------------------------------------


@main.command()
@click.argument("formula")
def tokens(formula: str) -> None:
    """Print the token stream of FORMULA."""
    from calcgraph.formulas import tokenize

    for tok in tokenize(formula):
        click.echo(f"{tok.start_pos:>4}  {tok.type:<9} {tok}")


# ---------------------------------------------------------------------------
# functions
# ---------------------------------------------------------------------------


@main.command()
def functions() -> None:
    """List the built-in functions."""
    from calcgraph.functions import function_names, get_function

    for name in function_names():
        spec = get_function(name)
        click.echo(f"{name}  ({spec.arity} argument(s))")


# ---------------------------------------------------------------------------
# logs
# ---------------------------------------------------------------------------


@main.command()
@click.option("--project", "directory", default=".", type=click.Path(exists=True, file_okay=False), help="Project directory.")
@click.option("--level", default=None, type=click.Choice(["info", "warning", "error"]), help="Only this level.")
@click.option("--limit", default=20, show_default=True, help="Maximum number of events.")
def logs(directory: str, level: str | None, limit: int) -> None:
    """Show recent evaluation events, newest first."""
    from calcgraph.logging.sink import EventSink

    sink = EventSink(Path(directory))
    events = sink.read(level=level, limit=limit)
    if not events:
        click.echo("No events.")
        return
    for evt in events:
        code = f" [{evt['error_code']}]" if evt.get("error_code") else ""
        click.echo(f"{evt.get('ts', '')}  {evt.get('level', ''):<7} {evt.get('event_type', '')}{code}  {evt.get('message', '')}")
