"""fluxgraph CLI interface.

Usage:
    fluxgraph --source <dir> --output <file>

Options:
- --source: Root directory to scan for manifests (required)
- --output: Destination file for the Mermaid diagram (required)
- --config: Path to configuration file
- --split-mode: Override collector.split_mode (naive, documents)
- --verbose / --quiet / --ci: Logging mode
- --version: Show version and exit

Exit codes:
    0: Diagram written
    1: Missing arguments, bad configuration, unreadable tree or unwritable output
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from fluxgraph import __version__
from fluxgraph.collector import CollectionError, KustomizationCollector
from fluxgraph.config import SPLIT_MODES, load_config
from fluxgraph.diagrams import MermaidClassDiagramGenerator
from fluxgraph.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="fluxgraph",
    help="Render Flux Kustomization dependencies as a Mermaid class diagram",
    add_completion=False,
)

_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"fluxgraph {__version__}")
        raise typer.Exit()


@app.command()
def main(
    ctx: typer.Context,
    source: Annotated[
        Path | None,
        typer.Option(
            "--source",
            "-s",
            help="Source directory to search for YAML files",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output file path for the Mermaid diagram",
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to configuration file",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    split_mode: Annotated[
        str | None,
        typer.Option(
            "--split-mode",
            help="Document splitting: naive (split on every '---') or documents",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress info messages (warnings and errors only)",
        ),
    ] = False,
    ci: Annotated[
        bool,
        typer.Option(
            "--ci",
            help="Enable CI mode with JSON log output",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Generate a Mermaid class diagram of Flux Kustomization dependencies.

    Walks SOURCE for *.yaml manifests, keeps kustomize.toolkit.fluxcd.io
    resources and writes one class per Kustomization plus one edge per
    dependsOn entry to OUTPUT.
    """
    if source is None or output is None:
        typer.echo("Source directory and output file path are required.")
        typer.echo(ctx.get_usage())
        raise typer.Exit(1)

    configure_from_cli(verbose=verbose, quiet=quiet, ci=ci)

    try:
        settings = load_config(config_path=config)
        if settings.config_path:
            _logger.debug(f"Loaded config from: {settings.config_path}")
        if split_mode is not None:
            if split_mode not in SPLIT_MODES:
                raise ValueError(f"Invalid split mode: {split_mode}. Valid: {SPLIT_MODES}")
            settings.collector.split_mode = split_mode
    except FileNotFoundError as e:
        _logger.error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        _logger.error(f"Failed to load config: {e}")
        raise typer.Exit(1)

    _logger.info(f"Scanning manifests: {source}")

    try:
        kustomizations = KustomizationCollector(settings.collector).collect(source)
    except CollectionError as e:
        _logger.error(f"Error processing YAML files: {e}")
        raise typer.Exit(1)

    generator = MermaidClassDiagramGenerator(sort_nodes=settings.diagram.sort_nodes)
    diagram = generator.generate(kustomizations)
    _logger.structured(
        logging.DEBUG,
        "Rendered class diagram",
        nodes=diagram.node_count,
        edges=diagram.edge_count,
    )

    try:
        output.write_text(diagram.mermaid, encoding="utf-8")
    except OSError as e:
        _logger.error(f"Error writing output file: {e}")
        raise typer.Exit(1)

    typer.echo("Mermaid class diagram generated successfully.")


if __name__ == "__main__":
    app()
