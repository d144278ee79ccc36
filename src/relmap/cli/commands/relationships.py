"""Relationship declaration commands (no API access)."""

from typing import Annotated

import typer

from relmap.cli.context import CLIContext
from relmap.cli.output import OutputFormatter
from relmap.schema.context import get_relationship_context

# Create relationships subcommand group
app = typer.Typer(help="Inspect declared entity relationships")


@app.command("list")
def relationships_list(
    ctx: typer.Context,
    entity: Annotated[
        str | None,
        typer.Option("--entity", "-e", help="Only declarations involving this entity type"),
    ] = None,
) -> None:
    """List relationship declarations.

    Examples:

        relmap relationships list

        relmap relationships list --entity client
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        registry = cli_ctx.get_registry()
        if entity:
            relationships = registry.for_entity(entity)
            title = f"Relationships of {entity} ({len(relationships)})"
        else:
            relationships = list(registry)
            title = f"Relationships ({len(relationships)} total)"
        formatter.print_relationships(title, relationships)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


@app.command("entities")
def relationships_entities(ctx: typer.Context) -> None:
    """List entity types named in any declaration."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        registry = cli_ctx.get_registry()
        names = registry.entity_types()

        if cli_ctx.json_output:
            formatter.print_data(names)
        else:
            table_data = [
                {
                    "Entity": name,
                    "Declarations": len(registry.for_entity(name)),
                    "Related": ", ".join(registry.related_types(name)),
                }
                for name in names
            ]
            formatter.print_table(
                f"Entity types ({len(names)} total)",
                table_data,
                ["Entity", "Declarations", "Related"],
            )
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


@app.command("check")
def relationships_check(
    ctx: typer.Context,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 when any issue is found"),
    ] = False,
) -> None:
    """Report declarations without an inverse and duplicated directions."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        registry = cli_ctx.get_registry()
        missing = registry.missing_inverses()
        duplicates = registry.duplicate_declarations()
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)

    if cli_ctx.json_output:
        formatter.print_data(
            {
                "declarations": len(registry),
                "missing_inverses": [m.to_wire() for m in missing],
                "duplicates": [d.to_wire() for d in duplicates],
            }
        )
    else:
        if missing:
            formatter.print_table(
                f"Declarations without inverse ({len(missing)})",
                [
                    {
                        "Declared": str(m.relationship),
                        "Expected inverse": str(m.expected_inverse),
                    }
                    for m in missing
                ],
                ["Declared", "Expected inverse"],
            )
        if duplicates:
            for dup in duplicates:
                formatter.print_warning(
                    f"{dup.source_entity} -> {dup.target_entity} declared {dup.count} times; "
                    "only the first is used for lookups"
                )
        if not missing and not duplicates:
            formatter.print_success(f"All {len(registry)} declarations are consistent")

    if strict and (missing or duplicates):
        raise typer.Exit(code=1)


@app.command("context")
def relationships_context(
    ctx: typer.Context,
    entities: Annotated[
        list[str] | None,
        typer.Option("--entity", "-e", help="Restrict to these entity types. Can be repeated."),
    ] = None,
    no_guidelines: Annotated[
        bool,
        typer.Option("--no-guidelines", help="Omit traversal guidelines"),
    ] = False,
) -> None:
    """Print the relationship graph as LLM prompt context (always JSON)."""
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(json_mode=True)

    try:
        context = get_relationship_context(
            cli_ctx.get_registry(),
            entities=entities or None,
            include_guidelines=not no_guidelines,
        )
        formatter.print_data(context)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
