"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.pretty import pprint
from rich.table import Table

from relmap.core.types import EntityRelationship, InvalidationPlan
from relmap.exceptions import RelmapError

console = Console()


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_table(
        self,
        title: str,
        data: list[dict[str, Any]],
        columns: list[str],
    ) -> None:
        """Print data as Rich table or JSON array.

        Args:
            title: Table title
            data: List of row dictionaries
            columns: Column names to display
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for col in columns:
                table.add_column(col)
            for row in data:
                table.add_row(*[str(row.get(col, "")) for col in columns])
            console.print(table)

    def print_relationships(self, title: str, relationships: list[EntityRelationship]) -> None:
        """Print relationship declarations.

        JSON mode emits the wire (camelCase) form of each declaration.
        """
        if self.json_mode:
            print(json.dumps([rel.to_wire() for rel in relationships], indent=2))
            return

        if not relationships:
            console.print(f"{title}: none declared", style="dim")
            return

        table = Table(title=title, show_header=True, header_style="bold magenta")
        table.add_column("Source")
        table.add_column("Target")
        table.add_column("Type")
        table.add_column("Fields")
        table.add_column("Description")
        for rel in relationships:
            table.add_row(
                rel.source_entity,
                rel.target_entity,
                str(rel.type),
                f"{rel.source_field} → {rel.target_field}",
                rel.description,
            )
        console.print(table)

    def print_plan(self, plan: InvalidationPlan) -> None:
        """Print the query keys and insights to refresh."""
        if self.json_mode:
            print(json.dumps(plan.to_wire(), indent=2))
            return

        if plan.is_empty:
            console.print("Nothing to refresh", style="dim")
            return

        if plan.event:
            console.print(f"\n[bold]Event:[/bold] {plan.event}")
        if plan.query_keys:
            console.print(f"\n[bold]Query keys ({len(plan.query_keys)}):[/bold]")
            for key in plan.query_keys:
                console.print(f"  {key}")
        if plan.insight_keys:
            console.print(f"\n[bold]Insights ({len(plan.insight_keys)}):[/bold]")
            for key in plan.insight_keys:
                console.print(f"  {key}")

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message.

        Args:
            message: Success message
            details: Optional details to display
        """
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            print(json.dumps(output, default=str, indent=2))
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_warning(self, message: str) -> None:
        """Print a warning (terminal mode only; JSON mode stays machine-readable)."""
        if not self.json_mode:
            console.print(f"! {message}", style="yellow")

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, RelmapError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            if isinstance(error, RelmapError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic data (dict, list, etc.).

        Args:
            data: Data to print
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            pprint(data, console=console, expand_all=True)
