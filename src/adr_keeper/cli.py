"""
adr-keeper Command Line Interface

Main entry point for the adr-keeper CLI.
"""

import json
import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from adr_keeper.config import load_config, StoreConfig
from adr_keeper.exceptions import ADRError, get_error_code
from adr_keeper.logging_config import setup_logging, ENV_VARS
from adr_keeper.ui import RecordUI
from adr_keeper.validators import STATUS_CHOICES, validate_number, validate_title, require_valid

console = Console()


def _load_config_or_exit(store_dir: Optional[str]) -> StoreConfig:
    try:
        return load_config(store_dir=store_dir)
    except ADRError as e:
        RecordUI(console).print_exception(e)
        sys.exit(get_error_code(e))


dir_option = click.option(
    "--dir", "store_dir", type=click.Path(file_okay=False),
    help="Record directory (default: docs/adr, or ADR_KEEPER_DIR)"
)


@click.group()
@click.version_option(package_name="adr-keeper")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
def main(verbose: bool):
    """adr-keeper: create, update and index Architecture Decision Records"""
    setup_logging(level=logging.DEBUG if verbose else None)


@main.command()
@click.option("--number", "-n", help="Sequential ADR number (e.g., 001)")
@click.option("--status", "-s", help="Decision status (e.g., Accepted, Proposed, Rejected)")
@click.option("--title", "-t", help="Descriptive ADR title (required for new ADRs)")
@click.option("--no-input", is_flag=True, help="Never prompt; fail when a value is missing")
@dir_option
def record(number: str, status: str, title: str, no_input: bool, store_dir: str):
    """Create a new ADR or update an existing one.

    When NUMBER matches no existing ADR a new file is created from the
    template, so a title is required. Otherwise the status of the existing
    ADR is updated; passing a different title also renames the file.

    Examples:
        adr-keeper record -n 1 -s Proposed -t "Use PostgreSQL"
        adr-keeper record -n 1 -s Accepted
        adr-keeper record                     # Prompt for everything
    """
    from adr_keeper.store import LifecycleController, RecordStore
    from adr_keeper.store.record import parse_record

    ui = RecordUI(console)
    config = _load_config_or_exit(store_dir)
    store = RecordStore(config)

    if no_input and (not number or not status):
        console.print("[red]Required flags:[/red]")
        console.print("  --number: Sequential ADR number (e.g., 001)")
        console.print("  --status: Decision status (e.g., Accepted, Proposed, Rejected)")
        console.print()
        console.print("Optional flag:")
        console.print("  --title: Descriptive ADR title (required for new ADRs)")
        sys.exit(2)

    # Prompt mode only when a required flag is missing
    interactive = not (number and status)

    try:
        if not number:
            number = ui.prompt_text(
                "ADR number",
                default=store.next_sequence_number(),
                required=True,
                validator=validate_number,
            )
        number = store.format_number(require_valid("number", number, "001"))

        existing = store.find_by_number(number)
        if not status:
            current_status = ""
            if existing:
                current_status = parse_record(store.read_record(existing)).status
            status = ui.prompt_choice(
                "Status:", STATUS_CHOICES, default=current_status or "Proposed", allow_custom=True
            )
        status = require_valid("status", status)

        if not title and interactive:
            if existing is None:
                title = ui.prompt_text("Title", required=True, validator=validate_title)
            else:
                current_title = parse_record(store.read_record(existing)).title
                title = ui.prompt_text("Title", default=current_title, validator=validate_title)
        if title:
            title = require_valid("title", title)

        outcome = LifecycleController(config).apply(number, status, title)
    except ADRError as e:
        ui.print_exception(e)
        sys.exit(get_error_code(e))

    path = escape(str(outcome.path))
    if outcome.action == "created":
        ui.print_success(f"New ADR created successfully: {path}")
    elif outcome.action == "renamed":
        ui.print_success(
            f"ADR updated and renamed: {escape(str(outcome.previous_path))} → {path}"
        )
    else:
        ui.print_success(f"ADR updated successfully: {path}")

    if not outcome.created and not outcome.status_changed:
        ui.print_info(f"Status already '{escape(outcome.status)}', left unchanged")

    if outcome.cleanup_error:
        ui.print_warning(
            f"Could not remove old file {escape(str(outcome.previous_path))}: "
            f"{escape(outcome.cleanup_error)}"
        )

    if outcome.index_error is not None:
        ui.print_exception(outcome.index_error, prefix="Error updating index")
        sys.exit(get_error_code(outcome.index_error))


@main.command()
@dir_option
def reindex(store_dir: str):
    """Regenerate the README.md index from the record files."""
    from adr_keeper.store import LifecycleController

    ui = RecordUI(console)
    config = _load_config_or_exit(store_dir)

    try:
        count = LifecycleController(config).reindex()
    except ADRError as e:
        ui.print_exception(e)
        sys.exit(get_error_code(e))

    ui.print_success(f"Index rebuilt with {count} ADR(s): {escape(str(config.index_path))}")


@main.command("list")
@dir_option
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def list_records(store_dir: str, json_output: bool):
    """List ADRs with their current status."""
    from adr_keeper.store import RecordStore
    from adr_keeper.store.record import parse_record

    ui = RecordUI(console)
    config = _load_config_or_exit(store_dir)
    store = RecordStore(config)

    try:
        filenames = store.list_record_files()
    except ADRError as e:
        if not json_output:
            ui.print_exception(e)
        else:
            click.echo(json.dumps({"error": e.message}))
        sys.exit(get_error_code(e))

    rows = []
    for filename in filenames:
        row = {
            "number": store.number_of(filename) or "",
            "title": store.display_title(filename),
            "status": "",
            "file": filename,
        }
        try:
            doc = parse_record(store.read_record(filename))
        except ADRError as e:
            row["status"] = "unreadable"
            row["error"] = e.message
        else:
            row["title"] = doc.title or row["title"]
            row["status"] = doc.status
        rows.append(row)

    if json_output:
        click.echo(json.dumps(rows, indent=2))
        return

    if not rows:
        ui.print_info(f"No ADRs in {escape(str(config.store_dir))}")
        return
    ui.show_records_table([{k: escape(v) for k, v in row.items()} for row in rows])


@main.command("next")
@dir_option
def next_number(store_dir: str):
    """Print the next free ADR number."""
    from adr_keeper.store import RecordStore

    config = _load_config_or_exit(store_dir)
    click.echo(RecordStore(config).next_sequence_number())


@main.group()
def config():
    """Configuration commands."""
    pass


@config.command()
@dir_option
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def show(store_dir: str, json_output: bool):
    """Show the resolved configuration."""
    cfg = _load_config_or_exit(store_dir)

    if json_output:
        click.echo(json.dumps(cfg.to_dict(), indent=2))
        return

    RecordUI(console).show_summary_table("adr-keeper Configuration", cfg.to_dict())
    console.print()
    console.print("[bold]Environment variables:[/bold]")
    for name, info in ENV_VARS.items():
        console.print(f"  [cyan]{name}[/cyan] - {info['description']} (default: {info['default']})")


@main.command("help")
@click.argument("topic", required=False)
def help_topic(topic: str):
    """Show detailed help for a topic.

    Topics: template, statuses, store

    Examples:
        adr-keeper help              # List all topics
        adr-keeper help template     # Template placeholders
    """
    from rich.panel import Panel
    from adr_keeper.help_topics import get_help_content, list_topics, get_topic_names

    if not topic:
        console.print("[bold blue]adr-keeper Help Topics[/bold blue]")
        console.print()
        for topic_name, description in list_topics():
            console.print(f"  [cyan]{topic_name}[/cyan] - {description}")
        console.print()
        console.print("[dim]Run 'adr-keeper help <topic>' for details[/dim]")
        return

    content = get_help_content(topic)
    if content:
        console.print(Panel(content, border_style="blue", title=f"Help: {topic}"))
    else:
        console.print(f"[red]Unknown topic: {escape(topic)}[/red]")
        console.print(f"[dim]Available topics: {', '.join(get_topic_names())}[/dim]")
        sys.exit(1)


if __name__ == "__main__":
    main()
