"""noble CLI — expand and inspect annotated Rust declarations."""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from noble import __version__
from noble.errors import NobleError
from noble.log import LOG_FORMATS, configure_logging

console = Console()
err_console = Console(stderr=True)

SHAPE_ROWS = [
    ("routine", "fn", "Body wrapped in an unsafe block"),
    ("data_record", "struct", "Adds `unsafe fn new_unsafe(..)` constructor"),
    ("tagged_union", "enum", "Adds `unsafe fn new_<variant>_unsafe(..)` per variant"),
    ("capability_contract", "trait", "Trait and every method marked unsafe; default bodies wrapped"),
    ("contract_implementation", "impl", "Method bodies wrapped; `impl Trait for T` becomes unsafe impl"),
    ("other", "anything else", "Passed through unchanged"),
]


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    default="WARNING",
    envvar="NOBLE_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Log level for diagnostics on stderr",
)
@click.option(
    "--log-format",
    default="console",
    envvar="NOBLE_LOG_FORMAT",
    type=click.Choice(LOG_FORMATS),
    help="Log renderer",
)
def main(log_level: str, log_format: str):
    """noble — wrap Rust declarations in unsafe.

    Reads one declaration (fn, struct, enum, trait or impl), marks its
    bodies unsafe and synthesizes unchecked constructors for structs
    and enums. Other declarations are passed through unchanged.
    """
    configure_logging(log_level, log_format)


def _read_source(source) -> str:
    with source:
        return source.read()


# ── Expand ───────────────────────────────────────────────────────────


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8"), default="-", help="Where to write the expansion")
@click.option("--args", "attr_args", default=None, help="Annotation arguments (accepted and ignored)")
def expand(source, output, attr_args: str | None):
    """Expand one declaration read from SOURCE (default: stdin)."""
    from noble.expander import expand as expand_source

    try:
        result = expand_source(_read_source(source), args=attr_args)
    except NobleError as e:
        err_console.print(f"[red]error:[/] {escape(str(e))}")
        raise SystemExit(1)

    output.write(result)
    if not result.endswith("\n"):
        output.write("\n")


# ── Inspect ──────────────────────────────────────────────────────────


@main.command()
@click.argument("source", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]))
def inspect(source, fmt: str):
    """Show how SOURCE is classified, without transforming it."""
    from noble.ir.rust_parser import parse_declaration

    try:
        node = parse_declaration(_read_source(source))
    except NobleError as e:
        err_console.print(f"[red]error:[/] {escape(str(e))}")
        raise SystemExit(1)

    if fmt == "yaml":
        import yaml

        click.echo(yaml.safe_dump(node.to_dict(), sort_keys=False), nl=False)
    else:
        click.echo(json.dumps(node.to_dict(), indent=2))


# ── Shapes ───────────────────────────────────────────────────────────


@main.command()
def shapes():
    """List the declaration shapes noble recognizes."""
    table = Table(title="Declaration shapes")
    table.add_column("Shape", style="cyan", no_wrap=True)
    table.add_column("Rust item")
    table.add_column("Transform")

    for shape, item, action in SHAPE_ROWS:
        table.add_row(shape, item, action)

    console.print(table)


if __name__ == "__main__":
    main()
