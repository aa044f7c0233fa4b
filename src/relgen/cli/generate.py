"""relgen generate command - write RBI files for a model manifest."""

from pathlib import Path

import click

from relgen.config import load_config
from relgen.config.constants import WORKERS_MAX
from relgen.core.errors import RelgenError
from relgen.core.formatting import pluralize
from relgen.core.logging import clear_run_id, configure_logging, get_logger, set_run_id
from relgen.core.progress import status, task
from relgen.entities import EntityGraph, load_manifest
from relgen.generation import GeneratedFile, GenerationOps

log = get_logger(__name__)


def write_files(files: list[GeneratedFile], out_dir: Path) -> list[Path]:
    """Write rendered files below ``out_dir``, creating directories as needed."""
    written = []
    for generated in files:
        target = out_dir / generated.path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        written.append(target)
    return written


@click.command()
@click.argument("manifest", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--out",
    "out_dir",
    required=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write .rbi files into",
)
@click.option(
    "--workers",
    type=click.IntRange(1, WORKERS_MAX),
    default=None,
    help="Parallel assembly workers (default: from config)",
)
@click.option(
    "--association-methods",
    type=click.Choice(["per_class", "common"]),
    default=None,
    help="Where association-only methods are declared (default: from config)",
)
@click.option(
    "--entity",
    "only",
    multiple=True,
    help="Generate only this entity (repeatable)",
)
@click.pass_context
def generate_command(
    ctx: click.Context,
    manifest: Path,
    out_dir: Path,
    workers: int | None,
    association_methods: str | None,
    only: tuple[str, ...],
) -> None:
    """Generate relation declarations for every concrete model in MANIFEST.

    Writes one file per model to OUT, named after the model
    (Blog::Post -> blog/post.rbi). Settings are read from relgen.yaml in the
    manifest's directory.
    """
    set_run_id()
    try:
        _generate(ctx, manifest, out_dir, workers, association_methods, only)
    finally:
        clear_run_id()


def _generate(
    ctx: click.Context,
    manifest: Path,
    out_dir: Path,
    workers: int | None,
    association_methods: str | None,
    only: tuple[str, ...],
) -> None:
    try:
        config = load_config(manifest.parent.resolve())
    except RelgenError as e:
        raise click.ClickException(str(e)) from e

    if not (ctx.obj or {}).get("verbose"):
        configure_logging(config=config.logging)

    overrides: dict[str, object] = {}
    if workers is not None:
        overrides["workers"] = workers
    if association_methods is not None:
        overrides["association_methods"] = association_methods
    if overrides:
        config = config.model_copy(
            update={"generation": config.generation.model_copy(update=overrides)}
        )

    try:
        graph = EntityGraph.from_manifest(load_manifest(manifest))
        status(f"Loaded {pluralize(len(graph), 'model')} from {manifest}")
        for name in sorted(set(only)):
            if name in graph and graph.resolve(name).abstract:
                status(f"Skipping abstract model {name}", style="warning")
        files = GenerationOps.from_config(config).generate(graph, only or None)
    except RelgenError as e:
        raise click.ClickException(str(e)) from e

    with task(f"Writing {pluralize(len(files), 'file')} to {out_dir}"):
        written = write_files(files, out_dir)
    log.info("declarations_written", count=len(written), out_dir=str(out_dir))
