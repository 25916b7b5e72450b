"""
ClassMorph CLI - Main entry point.

Converts ``$.Class`` definitions in ESTree JSON into ES class trees.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from classmorph.config.loader import (
    ConfigurationError,
    create_options_from_args,
    generate_default_config,
    load_config_from_yaml,
)
from classmorph.config.models import ClassMorphConfig, ConversionOptions
from classmorph.generator.errors import ConversionError
from classmorph.generator.program import ConversionResult, convert_class_call
from classmorph.locator import convert_program
from classmorph.serialization import dumps_tree, load_tree, save_tree, strip_locations

app = typer.Typer(
    name="classmorph",
    help="Convert factory-style $.Class definitions into ES class syntax trees",
    no_args_is_help=True,
)

# Generated JSON may go to stdout, so everything human-facing goes to stderr
console = Console(stderr=True)


# =============================================================================
# Helper Functions
# =============================================================================


def validate_path(path: str, must_exist: bool = True) -> Path:
    """Validate and return a Path object."""
    p = Path(path)
    if must_exist and not p.exists():
        raise typer.BadParameter(f"Path does not exist: {path}")
    return p


def configure_logging(verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(name)s: %(message)s")


def display_options(cfg: ClassMorphConfig, options: ConversionOptions) -> None:
    """Show the effective conversion options."""
    extends = options.extended_namespace if options.extended else "-"
    info_text = f"""
[bold cyan]Target:[/bold cyan] {cfg.describe_target()}
[bold cyan]Constructor key:[/bold cyan] {options.constructor_name}
[bold cyan]Extends:[/bold cyan] {extends or "(missing)"}
[bold cyan]Callee:[/bold cyan] {cfg.callee}
    """
    console.print(Panel(info_text.strip(), title="ClassMorph", border_style="bold cyan"))


def display_results(results: list[ConversionResult]) -> None:
    """Summary table of converted classes."""
    table = Table(title="Converted Classes")
    table.add_column("Namespace", style="cyan")
    table.add_column("Class", style="green")
    table.add_column("Statements", justify="right")
    table.add_column("Warnings", style="yellow")

    for result in results:
        table.add_row(
            result.namespace,
            result.class_name,
            str(len(result.statements)),
            "; ".join(result.warnings) or "-",
        )

    console.print(table)


# =============================================================================
# Commands
# =============================================================================


@app.command()
def convert(
    source: str = typer.Argument(..., help="ESTree JSON: a Program, or the argument list of one call"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to configuration YAML file"),
    target: Optional[str] = typer.Option(None, "--target", "-t", help="Target dialect (es2015/es2017)"),
    constructor_name: Optional[str] = typer.Option(
        None, "--constructor-name", help="Member key that becomes the constructor"
    ),
    extends: Optional[str] = typer.Option(None, "--extends", "-e", help="Dotted superclass namespace"),
    callee: Optional[str] = typer.Option(None, "--callee", help="Dotted callee to look for (default: $.Class)"),
    keep_locations: bool = typer.Option(False, "--keep-locations", help="Keep start/end/range/loc keys"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
):
    """
    Convert class-definition calls into ES class trees.

    Reads parser output (acorn/esprima JSON) and writes a Program tree for a
    renderer such as astring.
    """
    configure_logging(verbose)

    try:
        source_path = validate_path(source)

        if config:
            console.print(f"[cyan]Loading configuration from {config}...[/cyan]")
            cfg = load_config_from_yaml(validate_path(config))
        else:
            cfg = ClassMorphConfig()

        if callee:
            cfg.callee = callee

        options = create_options_from_args(
            target=target,
            constructor_name=constructor_name,
            extended_namespace=extends,
            base=cfg.conversion,
        )
        cfg.conversion = options

        if verbose:
            display_options(cfg, options)

        tree = load_tree(source_path)

        if isinstance(tree, list):
            result = convert_class_call(tree, options)
            generated, results = result.program, [result]
        else:
            generated, results = convert_program(tree, options, cfg.callee)

        if cfg.output.strip_locations and not keep_locations:
            generated = strip_locations(generated)

        if output:
            output_path = save_tree(generated, Path(output), indent=cfg.output.indent)
            console.print(f"[green]✓[/green] Wrote {output_path}")
        else:
            sys.stdout.write(dumps_tree(generated, indent=cfg.output.indent).decode() + "\n")

        display_results(results)

    except ConfigurationError as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {e}")
        raise typer.Exit(1)
    except ConversionError as e:
        console.print(f"[bold red]Conversion Error:[/bold red] {e}")
        raise typer.Exit(1)
    except typer.BadParameter:
        raise
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)


@app.command()
def init(
    output: str = typer.Option("./classmorph.yaml", "--output", "-o", help="Output path for config file"),
):
    """
    Generate a default configuration file.

    Creates a classmorph.yaml with defaults that you can customize.
    """
    output_path = Path(output)

    if output_path.exists():
        if not typer.confirm(f"{output} already exists. Overwrite?"):
            console.print("[yellow]Cancelled.[/yellow]")
            raise typer.Abort()

    generate_default_config(output_path)
    console.print(f"[green]✓[/green] Generated configuration file: {output}")


# =============================================================================
# Entry Point
# =============================================================================


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
