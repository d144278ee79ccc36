"""relmap CLI - Main entry point."""

import logging
import sys
from typing import Annotated

import typer

import relmap
from relmap.cli.context import CLIContext
from relmap.core.config import ApiSettings

# Create main Typer app
app = typer.Typer(
    name="relmap",
    help="relmap CLI - Navigate business entity relationships",
    no_args_is_help=True,
)

# Store CLI context globally (will be set in callback)
state: dict[str, CLIContext] = {}


@app.callback()
def main_callback(
    ctx: typer.Context,
    api_url: Annotated[
        str | None,
        typer.Option(
            "--api-url",
            "-u",
            envvar="RELMAP_API_URL",
            help="Root URL of the platform API",
        ),
    ] = None,
    token: Annotated[
        str | None,
        typer.Option(
            "--token",
            envvar="RELMAP_API_TOKEN",
            help="Bearer token for the platform API",
        ),
    ] = None,
    relationships_file: Annotated[
        str | None,
        typer.Option(
            "--relationships-file",
            "-r",
            envvar="RELMAP_RELATIONSHIPS_FILE",
            help="JSON file replacing the built-in relationship declarations",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log requests and diagnostics to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    settings = ApiSettings.from_env(
        base_url=api_url,
        token=token,
        relationships_file=relationships_file,
    )
    cli_ctx = CLIContext(settings=settings, json_output=json_output)

    # Store in Typer context for command access
    ctx.obj = cli_ctx
    state["cli_ctx"] = cli_ctx


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"relmap v{relmap.__version__}")


# Register command groups
from relmap.cli.commands import integration, related, relationships  # noqa: E402

app.add_typer(relationships.app, name="relationships")
app.add_typer(related.app, name="related")
app.add_typer(integration.app, name="integration")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
