"""Command-line interface for the patch diagram renderer."""

import logging
import sys
import click
import yaml
from pathlib import Path
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import __version__

# SVG may be written to stdout, so messages go to stderr
console = Console(stderr=True)


def setup_logging(verbose: bool = False):
    """Route library log records through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
        force=True,
    )


def load_config(path: str) -> dict:
    """
    Load a patch configuration from a YAML or JSON file.

    Exits with status 1 if the file cannot be parsed.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except yaml.YAMLError as e:
        console.print(f"[red]Could not parse {path}:[/red] {e}")
        sys.exit(1)


def _parse_options(ctx, param, values):
    """Turn repeated KEY=VALUE options into a dict, values parsed as YAML scalars."""
    options = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}")
        options[key.strip()] = yaml.safe_load(raw)
    return options


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug log messages")
def cli(verbose):
    """Patch diagram renderer.

    Render modular-synthesizer patches described in YAML as SVG diagrams.
    """
    setup_logging(verbose)


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="Output SVG file path (default: stdout)"
)
@click.option(
    "--option", "options",
    multiple=True,
    metavar="KEY=VALUE",
    callback=_parse_options,
    help="Render option override, e.g. moduleWidth=140 (repeatable)"
)
def render(config_file, output, options):
    """Render a patch configuration to SVG."""
    from ..drawing import render_patch
    from ..parsers import ValidationError

    config = load_config(config_file)

    try:
        svg = render_patch(config, options)
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        sys.exit(1)

    if output is None:
        click.echo(svg)
        return

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(svg, encoding="utf-8")
    console.print(f"[green]✓ Saved diagram:[/green] {output_path}")


@cli.command()
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def validate(config_file):
    """Validate a patch configuration and summarize it."""
    from ..drawing import layout_patch
    from ..parsers import normalize, ValidationError

    config = load_config(config_file)

    try:
        canonical = normalize(config)
    except ValidationError as e:
        console.print(f"[red]✗ Invalid configuration:[/red] {e}")
        sys.exit(1)

    layout = layout_patch(canonical)

    table = Table(title=canonical.title or "Modules")
    table.add_column("Module", style="cyan")
    table.add_column("Type")
    table.add_column("Inputs")
    table.add_column("Outputs")
    table.add_column("Knobs", justify="right")

    for module in canonical.modules:
        table.add_row(
            module.name,
            module.type,
            ", ".join(module.inputs),
            ", ".join(module.outputs),
            str(len(module.knobs)),
        )

    console.print(table)

    connected = len(layout.curves)
    console.print(
        f"[green]✓ {canonical.module_count} modules, {connected} connections[/green]"
    )

    if layout.dropped_connections:
        console.print("\n[yellow]Connections to unknown ports:[/yellow]")
        for conn in layout.dropped_connections:
            console.print(f"  {conn.source} -> {conn.target}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
