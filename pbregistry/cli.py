"""Command-line interface for inspecting protobuf registries."""

from __future__ import annotations

import importlib
import json
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from pbregistry.registry import DescriptorKind, DescriptorSetError, DynamicRegistry, default_registry
from pbregistry.script import EnumType, ProtoPackage
from pbregistry.summary import EnumSummary, MessageSummary, summarize_enum, summarize_message


def _load(descriptor_set: str) -> DynamicRegistry:
    try:
        return DynamicRegistry.from_file(descriptor_set)
    except DescriptorSetError as err:
        print(f"Invalid descriptor set {descriptor_set}: {err}", file=sys.stderr)
        sys.exit(1)
    except OSError as err:
        print(f"Cannot read descriptor set {descriptor_set}: {err}", file=sys.stderr)
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log registry lookups")
def cli(verbose: bool) -> None:
    """Protobuf message type registry tools."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s", handlers=[RichHandler()])


@cli.command()
@click.option("--descriptor-set", "-d", required=True, help="Serialized FileDescriptorSet")
@click.option(
    "--kind",
    "-k",
    type=click.Choice([kind.value for kind in DescriptorKind]),
    default=None,
    help="Only list names of this kind",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(descriptor_set: str, kind: str | None, output_json: bool) -> None:
    """List the names declared in a descriptor set."""
    registry = _load(descriptor_set)
    names = list(registry.names(DescriptorKind(kind) if kind else None))

    if output_json:
        data: dict[str, list[str]] = {}
        for name, name_kind in names:
            data.setdefault(name_kind.value, []).append(name)
        print(json.dumps(data, indent=2))
        return

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Name", style="white")
    table.add_column("Kind", style="dim")
    for name, name_kind in names:
        table.add_row(name, name_kind.value)
    Console().print(table)


@cli.command()
@click.option("--descriptor-set", "-d", default=None, help="Serialized FileDescriptorSet")
@click.option(
    "--import",
    "-i",
    "modules",
    multiple=True,
    help="Generated module to import before resolving (default registry only)",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.argument("name")
def resolve(descriptor_set: str | None, modules: tuple[str, ...], output_json: bool, name: str) -> None:
    """Resolve a fully-qualified enum or message name."""
    package, _, attr = name.rpartition(".")
    if not package:
        print(f"{name} is not a fully-qualified name", file=sys.stderr)
        sys.exit(1)

    if descriptor_set:
        registry = _load(descriptor_set)
    else:
        for module in modules:
            try:
                importlib.import_module(module)
            except ImportError as err:
                print(f"Cannot import {module}: {err}", file=sys.stderr)
                sys.exit(1)
        registry = default_registry()

    try:
        value = getattr(ProtoPackage(package, registry), attr)
    except AttributeError as err:
        print(str(err), file=sys.stderr)
        sys.exit(1)

    if isinstance(value, EnumType):
        summary: EnumSummary | MessageSummary = summarize_enum(value.name, value.values)
    else:
        summary = summarize_message(value.resolved)

    if output_json:
        print(summary.to_json(indent=2))
    elif isinstance(summary, EnumSummary):
        _output_enum(summary)
    else:
        _output_message(summary)


def _output_enum(summary: EnumSummary) -> None:
    console = Console()
    console.print(f"[bold cyan]enum {summary.name}[/bold cyan]")

    table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
    table.add_column("Name", style="white")
    table.add_column("Value", style="yellow", justify="right")
    for member, number in summary.values.items():
        table.add_row(member, str(number))
    console.print(table)


def _output_message(summary: MessageSummary) -> None:
    console = Console()
    console.print(f"[bold cyan]message {summary.name}[/bold cyan]")

    file_table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
    file_table.add_column("Label", style="dim")
    file_table.add_column("Value", style="white")
    file_table.add_row("File", summary.file)
    file_table.add_row("Package", summary.package or "(none)")
    console.print(file_table)
    console.print()

    field_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    field_table.add_column("#", style="green", justify="right")
    field_table.add_column("Name", style="white")
    field_table.add_column("Type", style="yellow")
    field_table.add_column("Label", style="dim")
    for field in summary.fields:
        field_table.add_row(str(field.number), field.name, field.type_name or field.type, field.label)
    console.print(field_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
