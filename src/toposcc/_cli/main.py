import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from toposcc._graph import IndexGraph, KeyedGraph, Sorted
from toposcc._io import GraphDocument, export_result_to_toml, load_graph_document

from .config import ConfigError, ToposccConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Toposcc CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> ToposccConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=2) from e


def _load_document(path: Path | None, config: ToposccConfig) -> GraphDocument:
    """Load the graph document from `path`, falling back to the configured input."""
    if path is None:
        path = config.input
    if path is None:
        err_console.print(f"[red]✗ No input given and no {escape('[tool.toposcc].input')} configured[/red]")
        raise typer.Exit(code=2)

    err_console.print(f"[cyan]Loading graph from:[/cyan] {path}")
    try:
        return load_graph_document(path)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]✗ Could not load graph document:[/red] {escape(str(e))}")
        raise typer.Exit(code=2) from e


def _graph_of(graph: IndexGraph | KeyedGraph[Any]) -> IndexGraph:
    return graph.graph if isinstance(graph, KeyedGraph) else graph


@app.command()
def sort(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to a graph document (.toml or .json)"),
    ] = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file"),
    ] = None,
    transpose: Annotated[
        bool,
        typer.Option("--transpose", help="Reverse every edge before sorting"),
    ] = False,
) -> None:
    """Print a topological order, or the cycles that prevent one."""
    config = _load_config()
    document = _load_document(path, config)

    graph = document.build()
    if transpose or config.transpose:
        logger.debug("Transposing graph")
        graph.transpose()

    result = graph.toposort_or_scc()

    if isinstance(result, Sorted):
        for vertex in result.order:
            out_console.print(str(vertex), markup=False, highlight=False)
        err_console.print(f"[green]✓ Sorted {len(result.order)} vertices[/green]")
    else:
        table = Table(show_header=True, header_style="bold cyan", box=None)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Size", justify="right", style="yellow")
        table.add_column("Vertices")

        for number, component in enumerate(result.components, start=1):
            vertices = ", ".join(escape(str(vertex)) for vertex in component)
            table.add_row(str(number), str(len(component)), vertices)

        out_console.print(Panel(table, title="[bold]Strongly Connected Components[/bold]", border_style="red"))
        err_console.print(f"[red]✗ Graph contains {len(result.components)} cycle(s)[/red]")

    output = output or config.output
    if output is not None:
        err_console.print(f"[cyan]Exporting result to:[/cyan] {output}")
        try:
            export_result_to_toml(result, output)
        except OSError as e:
            err_console.print(f"[red]✗ Could not write result:[/red] {escape(str(e))}")
            raise typer.Exit(code=2) from e

    raise typer.Exit(code=0 if result.is_acyclic else 1)


@app.command()
def check(
    path: Annotated[
        Path | None,
        typer.Argument(help="Path to a graph document (.toml or .json)"),
    ] = None,
) -> None:
    """Validate a graph document and summarize its structure without sorting."""
    config = _load_config()
    document = _load_document(path, config)
    graph = _graph_of(document.build())

    sources = sum(1 for vertex in graph if vertex.in_degree == 0)
    sinks = sum(1 for vertex in graph if vertex.out_degree == 0)
    self_loops = sum(1 for source, target in graph.edges() if source == target)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Property", style="bold")
    table.add_column("Count", justify="right", style="yellow")
    table.add_row("Vertices", str(len(graph)))
    table.add_row("Edges", str(graph.edge_count))
    table.add_row("Sources", str(sources))
    table.add_row("Sinks", str(sinks))
    table.add_row("Self-loops", str(self_loops))

    form = "keyed" if document.is_keyed else "index"
    out_console.print(Panel(table, title=f"[bold]Graph ({form} form)[/bold]", border_style="cyan"))
    err_console.print("[green]✓ Graph document is valid[/green]")


def main() -> None:
    app()
