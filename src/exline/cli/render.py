"""CLI renderer for exline."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exline.core.executor import ChainResult
from exline.core.registry import CommandRegistry


class Renderer:
    """CLI renderer using Rich for terminal output."""

    def __init__(self, console: Console | None = None) -> None:
        self.console: Console = console or Console()

    def info(self, message: str) -> None:
        """Render an info message."""
        self.console.print(escape(message))

    def error(self, message: str) -> None:
        """Render an error message."""
        self.console.print(f"[bold red]Error:[/bold red] {escape(message)}")

    def chain_result(self, result: ChainResult) -> None:
        """Render every outcome of a line; the failing one as an error."""
        for outcome in result.outcomes:
            if not outcome.ok:
                self.error(outcome.output)
            elif outcome.output.strip():
                self.info(outcome.output.rstrip())

    def commands(self, registry: CommandRegistry) -> None:
        """Render the command table in declaration order."""
        table = Table("name", "code", "arguments", box=None)
        for descriptor in registry:
            table.add_row(descriptor.name, descriptor.code.name, descriptor.flags.describe())
        self.console.print(table)


def create_cli_renderer() -> Renderer:
    """Create and return a Renderer instance."""
    return Renderer()
