"""Command-line interface for connectorgen.

Commands:
- generate: Build a connector from a connector template and a Swagger document
- inspect: List the operations of a Swagger document in traversal order
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.errors import ConnectorGenError
from .core.loaders import load_connector, load_connector_template
from .core.logging import setup_logging
from .core.serialization import to_json
from .swagger import generate as generate_connector
from .swagger import parse
from .version import __version__

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="connectorgen",
    help=f"connectorgen {__version__} - Swagger 2.0 connector generator",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


@app.command()
def generate(
    specification: Path = typer.Argument(..., help="Swagger 2.0 document (JSON or YAML)"),
    template: Path = typer.Option(
        ..., "--template", "-t", help="Connector template file (YAML or JSON)"
    ),
    connector: Optional[Path] = typer.Option(
        None, "--connector", "-c", help="Connector input file (id, name, configured properties)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file path (default: stdout)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
):
    """Generate a connector with one action per operation.

    Example:
        $ connectorgen generate petstore.yaml --template swagger-template.yaml \\
            --connector petstore-connector.yaml --output petstore.json
    """
    setup_logging(verbose)

    try:
        connector_template = load_connector_template(template)
        connector_input = load_connector(connector, specification_path=specification)
        result = generate_connector(connector_template, connector_input)
        content = to_json(result)
    except ConnectorGenError as e:
        console.print(f"[red]✗ Error: {escape(str(e))}[/red]")
        if verbose:
            console.print_exception()
        raise typer.Exit(code=1) from e

    if output is None:
        typer.echo(content)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content, encoding="utf-8")

    table = Table(title=f"Connector {result.id}")
    table.add_column("Action", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Input", style="green")
    table.add_column("Output", style="green")

    for action in result.actions:
        table.add_row(
            action.id,
            action.name,
            action.definition.input_data_shape.kind.value,
            action.definition.output_data_shape.kind.value,
        )

    console.print(table)
    console.print(f"[bold green]✓[/bold green] Connector saved to: {output}")


@app.command()
def inspect(
    specification: Path = typer.Argument(..., help="Swagger 2.0 document (JSON or YAML)"),
):
    """List operations in the order actions would be generated.

    Operations without an operationId show `-`.
    """
    try:
        document = parse(specification.read_text(encoding="utf-8"))
    except OSError as e:
        console.print(f"[red]✗ Error: cannot read {specification}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    except ConnectorGenError as e:
        console.print(f"[red]✗ Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title=document.title or str(specification))
    table.add_column("Path", style="cyan")
    table.add_column("Method", style="magenta")
    table.add_column("Operation ID", style="white")
    table.add_column("Summary", style="dim")

    for path, method, operation in document.operations():
        table.add_row(path, method.upper(), operation.operation_id or "-", operation.summary or "")

    console.print(table)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
