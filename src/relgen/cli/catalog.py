"""relgen catalog command - show capability modules and their verdicts."""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from relgen.catalog import CapabilityModule, inventory
from relgen.render.rbi import render_def, render_sig
from relgen.signatures import MethodSignature, SignatureClassifier, Skip


def _module_option(_ctx: click.Context, _param: click.Parameter, value: str | None):
    if value is None:
        return None
    try:
        return CapabilityModule.parse(value)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e


@click.command()
@click.option(
    "--module",
    "module",
    default=None,
    callback=_module_option,
    help="Only this module (e.g. finder_methods or ActiveRecord::FinderMethods)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def catalog_command(module: CapabilityModule | None, as_json: bool) -> None:
    """List catalogued methods with the rule that decides each one.

    Signatures are shown as templates, before per-model type binding.
    """
    classifier = SignatureClassifier()
    modules = [module] if module else inventory.modules()

    rows = []
    for mod in modules:
        for name in inventory.get(mod).methods:
            decision = classifier.decide(name, mod)
            verdict = decision.verdict
            rows.append(
                {
                    "module": mod.value,
                    "method": name,
                    "rule": decision.rule.label,
                    "skipped": isinstance(verdict, Skip),
                    "declaration": _describe(verdict),
                }
            )

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    table = Table(title=f"Catalog {inventory.version}")
    table.add_column("Module", no_wrap=True)
    table.add_column("Method", no_wrap=True, style="cyan")
    table.add_column("Rule")
    table.add_column("Declaration")
    for row in rows:
        style = "dim" if row["skipped"] else None
        table.add_row(
            row["module"],
            escape(row["method"]),
            row["rule"],
            escape(row["declaration"]),
            style=style,
        )
    Console().print(table)


def _describe(verdict: MethodSignature | Skip) -> str:
    if isinstance(verdict, Skip):
        return f"skip ({verdict.reason})"
    return f"{render_sig(verdict)} {render_def(verdict)}"
