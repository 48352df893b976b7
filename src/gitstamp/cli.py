"""CLI app definition: generate, show, compare and clean version artifacts."""

from typing import Annotated, Optional

import typer
from rich.table import Table

from gitstamp.config import DEFAULT_FILES, DEFAULT_PATH, DEFAULT_TIME_ZONE, parse_custom_fields, validate_options
from gitstamp.emitter import clear_version_files
from gitstamp.errors import ConfigError
from gitstamp.generator import generate_version
from gitstamp.reader import compare_versions, load_version_info, version_summary
from gitstamp.utils import check_command, configure_logging, console, log
from gitstamp.version import get_version


def _version_callback(value: bool):
    if value:
        console.print(get_version())
        raise typer.Exit()


app = typer.Typer(
    help="Write git version metadata (branch, tag, commit, build time) into build artifacts.",
    no_args_is_help=True,
)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit.", callback=_version_callback, is_eager=True),
    ] = False,
) -> None:
    """Stamp build output with git version metadata."""


def _split_formats(files: list[str]) -> list[str]:
    """Accept both '--files json --files ts' and '--files json,ts'."""
    formats = []
    for entry in files:
        formats.extend(f.strip() for f in entry.split(",") if f.strip())
    return formats


# ============================================
# Commands
# ============================================


@app.command()
def generate(
    path: Annotated[str, typer.Option(help="Output directory for version files", envvar="GITSTAMP_PATH")] = DEFAULT_PATH,
    rule: Annotated[str, typer.Option(help="Regex removed once from the branch name to derive the version")] = r".+-",
    files: Annotated[Optional[list[str]], typer.Option(help="Formats to write: json, js, txt, ts (repeatable or comma-separated)")] = None,
    author: Annotated[bool, typer.Option(help="Include the last commit author")] = True,
    commit_date: Annotated[bool, typer.Option(help="Include the last commit date")] = True,
    time_zone: Annotated[str, typer.Option(help="Time zone for the formatted build time", envvar="GITSTAMP_TIME_ZONE")] = DEFAULT_TIME_ZONE,
    field: Annotated[Optional[list[str]], typer.Option(help="Extra field as key=value (repeatable)")] = None,
    silent: Annotated[bool, typer.Option(help="Suppress all output except errors on exit")] = False,
    log_level: Annotated[str, typer.Option(help="error, warn, info or debug", envvar="GITSTAMP_LOG_LEVEL")] = "info",
) -> None:
    """Query git and write version.<ext> files into the output directory."""
    try:
        options = validate_options(
            path=path,
            rule=rule,
            files=_split_formats(files) if files else list(DEFAULT_FILES),
            include_author=author,
            include_commit_date=commit_date,
            time_zone=time_zone,
            custom_fields=parse_custom_fields(field or []),
            silent=silent,
            log_level=log_level,
        )
    except ConfigError as exc:
        console.print(f"Configuration error: {exc}", style="bold red", markup=False)
        raise typer.Exit(2)

    configure_logging(options.log_level, options.silent)
    if not check_command("git"):
        log("warn", "git was not found on PATH; version fields will be 'unknown'", style="yellow")

    record = generate_version(options=options)
    if not silent:
        console.print(version_summary(record.to_dict()), style="bold cyan", markup=False)


@app.command()
def show(
    path: Annotated[str, typer.Argument(help="version.json file or the directory containing it")] = DEFAULT_PATH,
) -> None:
    """Print the contents of a generated version.json."""
    try:
        info = load_version_info(path)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"Cannot read version info: {exc}", style="bold red", markup=False)
        raise typer.Exit(1)

    table = Table(title=version_summary(info))
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command()
def compare(
    version1: Annotated[str, typer.Argument(help="First version, e.g. v1.2.0")],
    version2: Annotated[str, typer.Argument(help="Second version, e.g. 1.10")],
) -> None:
    """Print -1, 0 or 1 as VERSION1 is older, equal to or newer than VERSION2."""
    console.print(str(compare_versions(version1, version2)))


@app.command()
def clean(
    path: Annotated[str, typer.Option(help="Output directory for version files", envvar="GITSTAMP_PATH")] = DEFAULT_PATH,
) -> None:
    """Remove generated version.<ext> files from the output directory."""
    removed = clear_version_files(path)
    for file_path in removed:
        console.print(f"Removed {file_path}", markup=False)
    if not removed:
        console.print("No version files to remove.", style="dim")
