"""Rich-based output formatting for the CLI."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from cocoro import CompositeState, Device, StatusCode


class OutputFormatter:
    """Console output for CLI commands."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def print_error(
        self,
        message: str,
        title: str = "Error",
        details: list[str] | None = None,
    ) -> None:
        """Print an error message.

        Args:
            message: Main error message
            title: Panel title
            details: Optional list of detail lines
        """
        body = Text(message, style="bold red")
        for line in details or []:
            body.append(f"\n  • {line}", style="red")
        self.console.print(Panel(body, title=title, border_style="red"))

    def print_success(self, message: str) -> None:
        self.console.print(f"[bold green]✓[/bold green] {message}")

    def print_info(self, message: str) -> None:
        self.console.print(f"[bold blue]ℹ[/bold blue] {message}")

    def print_json(self, data: Any) -> None:
        text = json.dumps(data, indent=2, default=str)
        self.console.print(Syntax(text, "json", theme="ansi_dark"))

    def print_device_list(self, devices: list[Device]) -> None:
        """Print the devices found in the account."""
        table = Table(title="Devices")
        table.add_column("Name", style="cyan")
        table.add_column("Device ID")
        table.add_column("Type")
        table.add_column("Maker / Model")
        table.add_column("Power")
        for device in devices:
            status = device.get_property_status(StatusCode.POWER)
            if status is None:
                power = "[dim]unknown[/dim]"
            elif device.is_powered_on():
                power = "[green]on[/green]"
            else:
                power = "[red]off[/red]"
            table.add_row(
                device.name,
                str(device.device_id),
                device.kind.value,
                " / ".join(p for p in (device.maker, device.model) if p),
                power,
            )
        self.console.print(table)

    def print_property_table(self, device: Device) -> None:
        """Print each property with its current value."""
        table = Table(title=f"{device.name} ({device.kind.value})")
        table.add_column("Code", style="cyan")
        table.add_column("Name")
        table.add_column("Kind")
        table.add_column("Get/Set")
        table.add_column("Value", overflow="fold")
        for prop in device.properties:
            status = device.get_property_status(prop.status_code)
            value = status.code if status is not None else "[dim]-[/dim]"
            access = ("r" if prop.gettable else "-") + (
                "w" if prop.settable else "-"
            )
            table.add_row(
                prop.status_code,
                prop.status_name,
                prop.kind.name.lower(),
                access,
                value,
            )
        self.console.print(table)

    def print_state(self, state: CompositeState) -> None:
        """Print the fields of a decoded composite state."""
        table = Table(title=f"State {state.status_code}")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        for name, value in state.as_dict().items():
            table.add_row(name, str(value))
        self.console.print(table)
        self.console.print(f"[dim]{state.encode()}[/dim]")


_formatter: OutputFormatter | None = None


def get_formatter() -> OutputFormatter:
    """Return the shared formatter, creating it on first use."""
    global _formatter
    if _formatter is None:
        _formatter = OutputFormatter()
    return _formatter
