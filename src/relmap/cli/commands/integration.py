"""Cross-module integration commands."""

from typing import Annotated

import typer

from relmap.cli.context import CLIContext
from relmap.cli.output import OutputFormatter
from relmap.cli.parsing import parse_assignments, parse_entity_id
from relmap.integration.modules import CROSS_MODULE_EVENTS, plan_cross_module_event

# Create integration subcommand group
app = typer.Typer(help="Read and update entities across business modules")

StrictOption = Annotated[
    bool,
    typer.Option("--strict", help="Fail on the first module error instead of skipping it"),
]


@app.command("data")
def integration_data(
    ctx: typer.Context,
    entity_type: Annotated[str, typer.Argument(help="Entity type (e.g. client)")],
    entity_id: Annotated[str, typer.Argument(help="Entity ID")],
    strict: StrictOption = False,
) -> None:
    """Show an entity's data from every module that holds it."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        service = cli_ctx.get_integration(strict=strict)
        data = service.get_integrated_entity_data(entity_type, parse_entity_id(entity_id))
        formatter.print_data(data)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("update")
def integration_update(
    ctx: typer.Context,
    entity_type: Annotated[str, typer.Argument(help="Entity type (e.g. client)")],
    entity_id: Annotated[str, typer.Argument(help="Entity ID")],
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", "-s", help="Field to update: key=value. Can be repeated."),
    ] = None,
    strict: StrictOption = False,
) -> None:
    """Update an entity in every module and show what must be refreshed.

    Examples:

        relmap integration update client 3 --set name='"Acme Ltd"' --set active=true
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        updates = parse_assignments(assignments)
        if not updates:
            raise ValueError("No updates given. Use --set key=value")

        service = cli_ctx.get_integration(strict=strict)
        plan = service.update_across_modules(entity_type, parse_entity_id(entity_id), updates)
        formatter.print_plan(plan)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("event")
def integration_event(
    ctx: typer.Context,
    event: Annotated[str, typer.Argument(help="Event name (e.g. invoice.created)")],
) -> None:
    """Show what must be refreshed when a business event occurs."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    if event not in CROSS_MODULE_EVENTS:
        formatter.print_warning(
            f"Unknown event '{event}'. Known events: {', '.join(CROSS_MODULE_EVENTS)}"
        )
    formatter.print_plan(plan_cross_module_event(event))
