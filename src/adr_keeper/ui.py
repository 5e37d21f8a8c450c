"""
adr-keeper UI Components

Console output and interactive prompts using the rich library.
"""

from typing import Optional, List, Callable, Dict

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from adr_keeper.exceptions import ADRError


class RecordUI:
    """UI components for the adr-keeper CLI."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def print_success(self, message: str):
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str):
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str):
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str):
        """Print an info message."""
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def print_exception(self, error: ADRError, prefix: str = "Error"):
        """Print an adr-keeper error with its details and remediation."""
        self.console.print(f"[red]{prefix}:[/red] {escape(error.message)}")
        if error.details:
            self.console.print(f"[dim]Details: {escape(error.details)}[/dim]")
        if error.remediation:
            self.console.print(f"[yellow]To fix:[/yellow] {escape(error.remediation)}")

    def prompt_text(
        self,
        prompt: str,
        default: str = "",
        required: bool = False,
        validator: Optional[Callable[[str], tuple]] = None
    ) -> str:
        """Prompt for text input.

        ``validator`` returns ``(is_valid, message)`` like the functions in
        adr_keeper.validators.
        """
        while True:
            value = Prompt.ask(prompt, default=default if default else None, console=self.console)
            value = (value or "").strip()

            if required and not value:
                self.print_error("This field is required")
                continue

            if validator and value:
                valid, message = validator(value)
                if not valid:
                    self.print_error(message)
                    continue

            return value

    def prompt_choice(
        self,
        prompt: str,
        choices: List[str],
        default: Optional[str] = None,
        allow_custom: bool = False
    ) -> str:
        """Prompt for a choice from a list.

        Accepts the choice number or its name. With ``allow_custom`` any
        other non-empty text is returned as typed.
        """
        self.console.print(f"\n{prompt}")
        for i, choice in enumerate(choices, 1):
            marker = "[bold green]→[/bold green]" if choice == default else " "
            self.console.print(f"  {marker} [{i}] {choice}")

        while True:
            selection = Prompt.ask(
                "Enter number or name",
                default=str(choices.index(default) + 1) if default in choices else None,
                console=self.console
            )
            selection = (selection or "").strip()

            try:
                idx = int(selection) - 1
                if 0 <= idx < len(choices):
                    return choices[idx]
            except ValueError:
                pass

            for choice in choices:
                if choice.lower() == selection.lower():
                    return choice

            if allow_custom and selection:
                return selection

            self.print_error(f"Invalid selection. Choose 1-{len(choices)}")

    def show_records_table(self, rows: List[Dict[str, str]], title: str = "Architecture Decision Records"):
        """Show records as a table of number, title, status and file."""
        table = Table(title=title, border_style="blue")
        table.add_column("#", style="cyan", no_wrap=True)
        table.add_column("Title")
        table.add_column("Status", style="magenta")
        table.add_column("File", style="dim")

        for row in rows:
            table.add_row(
                row.get("number", ""),
                row.get("title", ""),
                row.get("status") or "[dim]not set[/dim]",
                row.get("file", ""),
            )

        self.console.print(table)

    def show_summary_table(self, title: str, data: Dict[str, str]):
        """Show a two-column settings table."""
        table = Table(title=title, border_style="blue")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in data.items():
            table.add_row(key, str(value) if value not in (None, "") else "[dim]not set[/dim]")

        self.console.print(table)
