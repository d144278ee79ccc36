"""Related-record commands (API-backed)."""

from typing import Annotated

import typer

from relmap.cli.context import CLIContext
from relmap.cli.output import OutputFormatter
from relmap.cli.parsing import parse_assignments, parse_entity_id

# Create related subcommand group
app = typer.Typer(help="Fetch and update records through declared relationships")

StrictOption = Annotated[
    bool,
    typer.Option("--strict", help="Fail on API errors instead of degrading"),
]


@app.command("get")
def related_get(
    ctx: typer.Context,
    entity_type: Annotated[str, typer.Argument(help="Entity type (e.g. client)")],
    entity_id: Annotated[str, typer.Argument(help="Entity ID")],
    related_type: Annotated[str, typer.Argument(help="Related entity type (e.g. invoice)")],
    strict: StrictOption = False,
) -> None:
    """Fetch records related to one entity.

    Examples:

        relmap related get client 1 invoice

        relmap --json related get invoice 5 client
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        navigator = cli_ctx.get_navigator(strict=strict)
        records = navigator.get_related_entities(
            entity_type, parse_entity_id(entity_id), related_type
        )
        formatter.print_data(records)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()


@app.command("update")
def related_update(
    ctx: typer.Context,
    entity_type: Annotated[str, typer.Argument(help="Entity type that changed")],
    entity_id: Annotated[str, typer.Argument(help="Entity ID")],
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", "-s", help="Changed field: key=value. Can be repeated."),
    ] = None,
    strict: StrictOption = False,
) -> None:
    """Propagate changed fields to dependent entities.

    Without --strict, failed calls are logged to stderr and the command still
    succeeds.

    Examples:

        relmap related update invoice 5 --set clientId=2
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        updates = parse_assignments(assignments)
        if not updates:
            raise ValueError("No updates given. Use --set key=value")

        navigator = cli_ctx.get_navigator(strict=strict)
        affected = navigator.relationships_affected_by(entity_type, updates)
        navigator.update_related_entities(entity_type, parse_entity_id(entity_id), updates)

        formatter.print_success(
            f"Sent {entity_type} {entity_id} changes through {len(affected)} relationship(s)",
            {"targets": [rel.target_entity for rel in affected]},
        )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
    finally:
        cli_ctx.close()
