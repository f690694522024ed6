"""CLI interface for shopaction using Typer framework."""

import json as jsonlib
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shopaction import __description__, __version__
from shopaction.config import LogLevel, OutputFormat, ShopActionConfig, load_config
from shopaction.diagnostics import create_failure_collector
from shopaction.models import ActionBatch, ChatResponse
from shopaction.parser import DocumentSyntaxError, node_kind, parse_document
from shopaction.validation import Outcome, validate_actions, validate_response

logger = logging.getLogger(__name__)

STDIN_MARKER = "-"

app = typer.Typer(
    name="shopaction",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


@dataclass
class Payload:
    """One unit of input: raw content or a chat response."""
    source: str
    content: str | None = None
    response: ChatResponse | None = None

    def validate(self) -> Outcome[ActionBatch]:
        if self.response is not None:
            return validate_response(self.response)
        return validate_actions(self.content)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"shopaction version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """shopaction - Validate model responses as shopping action batches."""


def _configure_logging(level: LogLevel) -> None:
    logging.basicConfig(
        level=level.to_logging_level(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        force=True,
    )


def _read_text(path: str) -> str:
    if path == STDIN_MARKER:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _source_label(path: str) -> str:
    return "<stdin>" if path == STDIN_MARKER else path


def _load_payloads(paths: list[str], jsonl: bool) -> tuple[list[Payload], list[tuple[str, str]]]:
    """Read payloads from files or stdin.

    Returns:
        (payloads, input_errors) where input_errors are (source, message) pairs
        for unreadable input
    """
    payloads: list[Payload] = []
    input_errors: list[tuple[str, str]] = []

    for path in paths:
        label = _source_label(path)
        try:
            text = _read_text(path)
        except OSError as e:
            input_errors.append((label, str(e)))
            continue

        if not jsonl:
            payloads.append(Payload(source=label, content=text))
            continue

        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                response = ChatResponse.model_validate_json(line)
            except ValidationError as e:
                input_errors.append((f"{label}:{line_no}", f"not a chat response ({e.error_count()} errors)"))
                continue
            payloads.append(Payload(source=f"{label}:{line_no}", response=response))

    logger.debug(f"Loaded {len(payloads)} payloads from {len(paths)} inputs")
    return payloads, input_errors


def _print_table(results: list[tuple[Payload, Outcome[ActionBatch]]]) -> None:
    table = Table()
    table.add_column("Source", style="cyan")
    table.add_column("Status", style="white")
    table.add_column("Actions", style="white", justify="right")
    table.add_column("Detail", style="white")

    for payload, outcome in results:
        if outcome.is_ok:
            batch = outcome.value
            table.add_row(escape(payload.source), "[green]OK[/green]", str(len(batch)), escape(", ".join(batch.names)))
        else:
            table.add_row(escape(payload.source), "[red]FAIL[/red]", "-", escape(outcome.message))

    console.print(table)


@app.command()
def validate(
    paths: Annotated[
        list[str],
        typer.Argument(help="Payload files to validate, or '-' for stdin")
    ],
    format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format: table, json (default: from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .shopaction.json)")
    ] = None,
    jsonl: Annotated[
        bool,
        typer.Option("--jsonl", help="Treat input as JSON lines of chat responses")
    ] = False,
    errors_dir: Annotated[
        Optional[Path],
        typer.Option("--errors-dir", help="Directory for failure summaries")
    ] = None,
    no_flush: Annotated[
        bool,
        typer.Option("--no-flush", help="Do not write failure summaries")
    ] = False,
) -> None:
    """Validate payloads as shopping action batches."""
    try:
        settings: ShopActionConfig = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _configure_logging(settings.logging.level)

    output_format = format or settings.output.format
    use_jsonl = jsonl or settings.input.jsonl

    payloads, input_errors = _load_payloads(paths, use_jsonl)
    if output_format == OutputFormat.TABLE:
        for source, message in input_errors:
            console.print(f"[red]Error:[/red] {escape(source)}: {escape(message)}")

    collector = create_failure_collector(
        errors_dir or Path(settings.output.errors_dir),
        command="validate"
    )

    results: list[tuple[Payload, Outcome[ActionBatch]]] = []
    for payload in payloads:
        outcome = payload.validate()
        if outcome.is_ok:
            collector.record_success(payload.source)
        else:
            collector.collect_failure(payload.source, outcome.failure)
        results.append((payload, outcome))

    if output_format == OutputFormat.JSON:
        document = [{"source": payload.source, **outcome.to_dict()} for payload, outcome in results]
        document.extend({"source": source, "ok": False, "error": message} for source, message in input_errors)
        console.print_json(jsonlib.dumps(document))
    else:
        _print_table(results)
        failed = len(collector.failures)
        status_color = "green" if failed == 0 and not input_errors else "red"
        console.print(
            f"[{status_color}]{len(results) - failed} of {len(results)} payloads valid[/{status_color}]"
        )

    if collector.has_failures() and settings.output.flush_errors and not no_flush:
        summary_file = collector.flush_to_filesystem()
        if output_format == OutputFormat.TABLE:
            console.print(f"[dim]Failure summary: {summary_file}[/dim]")

    exit_code = 1 if collector.has_failures() or input_errors else 0
    raise typer.Exit(exit_code)


@app.command()
def parse(
    path: Annotated[
        str,
        typer.Argument(help="Payload file to parse, or '-' for stdin")
    ],
) -> None:
    """Show the generic tree shape of a payload."""
    try:
        text = _read_text(path)
    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    try:
        root = parse_document(text)
    except DocumentSyntaxError as e:
        console.print(f"[red]Syntax error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"root: {node_kind(root).value}")
    if isinstance(root, dict):
        for key, value in root.items():
            console.print(f"  {key}: {node_kind(value).value}", markup=False)
        actions = root.get("actions")
        if isinstance(actions, list):
            for index, element in enumerate(actions):
                console.print(f"  actions[{index}]: {node_kind(element).value}", markup=False)


if __name__ == "__main__":
    app()
