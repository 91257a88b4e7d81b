"""Console output for the CLI.

Wraps rich so every command prints status messages the same way.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel


class Console:
    """CLI output manager wrapping rich."""

    def __init__(self, *, force_terminal: bool | None = None) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (pass-through to rich)."""
        self._console.print(*args, **kwargs)

    def fields(self, values: dict[str, Any], *, title: str | None = None) -> None:
        """Print label/value pairs in a panel."""
        content = "\n".join(f"[cyan]{label}:[/cyan] {value}" for label, value in values.items())
        self._console.print(Panel(content, title=title, border_style="blue"))


_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
