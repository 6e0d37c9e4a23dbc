"""Xaos CLI — inspect library variants and object chains."""

import logging

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from xaos import __version__
from xaos.core.library import LIBRARIES

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log graph mutations")
def main(verbose: bool):
    """Xaos — prototype-based objects with mixins.

    Lists the built-in library variants, checks variant definition files,
    and prints the prototype chain of a demo object.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ── Variants ─────────────────────────────────────────────────────────


@main.command()
def variants():
    """List the built-in library variants."""
    from xaos.core.variants import BOOLEAN_FIELDS, BUILTIN_VARIANTS

    table = Table(title=f"Variants ({len(BUILTIN_VARIANTS)})")
    table.add_column("Name", style="cyan")
    table.add_column("Include policy")
    for field_name in BOOLEAN_FIELDS:
        table.add_column(field_name.replace("_", " "), justify="center")

    for variant in BUILTIN_VARIANTS.values():
        flags = ["[green]Y[/]" if getattr(variant, f) else "[red]N[/]" for f in BOOLEAN_FIELDS]
        table.add_row(variant.name, variant.include_policy.value, *flags)

    console.print(table)


# ── Check ────────────────────────────────────────────────────────────


@main.command()
@click.argument("variant_path")
def check(variant_path: str):
    """Validate a YAML variant definition."""
    import yaml

    from xaos.core.variants import validate_variant

    console.print(f"\n[bold blue]Xaos[/] — Checking: {variant_path}\n")

    try:
        with open(variant_path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        console.print(f"  [red]Failed to parse:[/] {escape(str(e))}")
        raise SystemExit(1)

    issues = validate_variant(data)
    if issues:
        console.print("[red]Variant definition INVALID:[/]")
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        raise SystemExit(1)

    console.print(f"  [green]v[/] Variant '{data['variant']['name']}' is valid")


# ── Inspect ──────────────────────────────────────────────────────────


@main.command()
@click.option("--variant", "variant_name", default="xaos", type=click.Choice(sorted(LIBRARIES)))
def inspect(variant_name: str):
    """Build an Enumerable demo object and print its prototype chain."""
    from xaos.graph.handle import node_of
    from xaos.mixins.enumerable import Enumerable

    obj = LIBRARIES[variant_name].clone()
    obj.include(Enumerable)
    obj[1] = "a"
    obj[2] = "b"
    obj[3] = "c"

    table = Table(title=f"Prototype chain ({variant_name})")
    table.add_column("Node", style="dim", justify="right")
    table.add_column("Kind")
    table.add_column("Label", style="cyan")
    table.add_column("Members")

    for node in node_of(obj).chain():
        if node.anonymous:
            kind = f"layer of #{node.owner_id}"
        elif node.is_root:
            kind = "root"
        else:
            kind = "object"
        table.add_row(
            f"#{node.id}",
            kind,
            node.label,
            ", ".join(str(k) for k in node.members)[:60],
        )

    console.print(table)
    console.print(f"  map:    {obj.map(lambda k, v: v.upper())}")
    console.print(f"  select: {obj.select(lambda e: e[1] != 'b')}")
    console.print(f"  first:  {obj.first()}")
    console.print(f"  last:   {obj.last()}")


if __name__ == "__main__":
    main()
