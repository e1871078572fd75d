from __future__ import annotations

import json
import logging

import typer
from rich.console import Console
from rich.table import Table

from timew_report.engine import read_report
from timew_report.errors import DecodeError, InputReadError, MalformedInputError, ReportError
from timew_report.models import TimewarriorReport
from timew_report.utils import format_timestamp, resolve_timezone

app = typer.Typer(
    help="Parse a Timewarrior extension report from stdin and dump it.",
    add_completion=False,
)

EXIT_CODES = {
    InputReadError.kind: 1,
    DecodeError.kind: 4,
    MalformedInputError.kind: 3,
}


def _report_to_dict(report: TimewarriorReport) -> dict:
    return {
        "config": dict(report.config),
        "sessions": [
            {
                "id": session.id,
                "start": session.start.isoformat(),
                "end": session.end.isoformat() if session.end else None,
                "tags": list(session.tags),
                "annotation": session.annotation,
            }
            for session in report.sessions
        ],
    }


def _print_tables(console: Console, report: TimewarriorReport) -> None:
    config_table = Table(title="Configuration")
    config_table.add_column("Key", style="cyan")
    config_table.add_column("Value")
    for key in sorted(report.config):
        config_table.add_row(key, report.config[key])
    console.print(config_table)

    sessions_table = Table(title=f"Sessions ({len(report.sessions)})")
    sessions_table.add_column("ID", justify="right")
    sessions_table.add_column("Start")
    sessions_table.add_column("End")
    sessions_table.add_column("Tags")
    sessions_table.add_column("Annotation")
    for session in report.sessions:
        sessions_table.add_row(
            str(session.id),
            format_timestamp(session.start),
            format_timestamp(session.end),
            ", ".join(session.tags),
            session.annotation or "",
        )
    console.print(sessions_table)


@app.command()
def dump(
    tz: str | None = typer.Option(
        None,
        "--tz",
        envvar="TIMEW_REPORT_TZ",
        help="IANA zone to convert timestamps into (default: local zone).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Read a report from stdin and print its config and sessions."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        zone = resolve_timezone(tz)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--tz") from exc
    try:
        report = read_report(tz=zone)
    except ReportError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(EXIT_CODES.get(exc.kind, 1)) from exc

    if as_json:
        typer.echo(json.dumps(_report_to_dict(report), indent=2, sort_keys=True, ensure_ascii=False))
        return
    _print_tables(Console(), report)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
