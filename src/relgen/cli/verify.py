"""relgen verify command - check classification coverage of the catalog."""

import json

import click

from relgen.catalog import inventory
from relgen.core.errors import RelgenError
from relgen.core.formatting import pluralize
from relgen.core.progress import status
from relgen.signatures import SignatureClassifier


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def verify_command(as_json: bool) -> None:
    """Check that every catalogued method has exactly one classification.

    Exits non-zero when a method reaches no rule or more than one rule.
    """
    report = SignatureClassifier().verify(inventory)

    if as_json:
        click.echo(
            json.dumps(
                {
                    "version": inventory.version,
                    "methods": len(report.decisions) + len(report.gaps),
                    "gaps": [{"module": m, "name": n} for m, n in report.gaps],
                    "ambiguities": [
                        {"module": m, "name": n, "rules": labels}
                        for m, n, labels in report.ambiguities
                    ],
                },
                indent=2,
            )
        )
    else:
        status(
            f"Catalog {inventory.version}: {pluralize(inventory.total_methods(), 'method')} "
            f"in {pluralize(len(inventory.modules()), 'module')}"
        )

    try:
        report.raise_for_problems()
    except RelgenError as e:
        raise click.ClickException(str(e)) from e

    if not as_json:
        status("Every method has exactly one classification", style="success")
