"""prblame CLI - attribute a change's lines to their previous authors."""

from pathlib import Path
from typing import Any

import click

from prblame import __version__
from prblame.attribution import attribute_change, format_json, format_text
from prblame.config.loader import load_config
from prblame.core.errors import PrBlameError
from prblame.core.logging import configure_logging, level_for_verbosity
from prblame.core.progress import pluralize, status
from prblame.git import GitError, GitOps


def _overrides(
    *,
    verbose: int,
    context: int | None,
    max_file_size: int | None,
    stop_at: str | None,
    max_concurrency: int | None,
    no_progress: bool,
    as_json: bool,
) -> dict[str, Any]:
    """Turn the options the user actually passed into load_config kwargs."""
    attribution: dict[str, Any] = {}
    if context is not None:
        attribution["context_lines"] = context
    if max_file_size is not None:
        attribution["max_file_size"] = max_file_size
    if stop_at is not None:
        attribution["stop_at"] = stop_at
    if max_concurrency is not None:
        attribution["max_concurrency"] = max_concurrency

    output: dict[str, Any] = {}
    if no_progress:
        output["progress"] = False
    if as_json:
        output["format"] = "json"

    overrides: dict[str, Any] = {}
    if attribution:
        overrides["attribution"] = attribution
    if output:
        overrides["output"] = output
    if verbose > 0:
        overrides["logging"] = {"level": level_for_verbosity(verbose)}
    return overrides


@click.command()
@click.version_option(version=__version__, prog_name="prblame")
@click.argument("base")
@click.argument("compare")
@click.option(
    "--repo",
    "repo",
    default=".",
    show_default=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Path inside the repository; parents are searched for it.",
)
@click.option(
    "--context",
    type=click.IntRange(min=0),
    default=None,
    help="How many lines around each modification to count. [default: 1]",
)
@click.option(
    "--max-file-size",
    type=click.IntRange(min=0),
    default=None,
    help="Ignore files larger than this (in bytes) to make things faster.",
)
@click.option(
    "--stop-at",
    "--first-commit",
    "stop_at",
    default=None,
    metavar="REV",
    help="Don't look further back than this revision when blaming files.",
)
@click.option(
    "-j",
    "--max-concurrency",
    type=click.IntRange(min=0),
    default=None,
    help="Number of blame workers; 0 uses one per CPU.",
)
@click.option("-v", "--verbose", count=True, help="-v for info logging, -vv for debug")
@click.option("--no-progress", is_flag=True, help="Never show a progress bar")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML config file used instead of the repository's .prblame.yaml.",
)
def cli(
    base: str,
    compare: str,
    repo: Path,
    context: int | None,
    max_file_size: int | None,
    stop_at: str | None,
    max_concurrency: int | None,
    verbose: int,
    no_progress: bool,
    as_json: bool,
    config_path: Path | None,
) -> None:
    """Rank the authors whose lines COMPARE changes relative to BASE.

    Every old-side line of the change, plus --context unchanged lines around
    each edit, is blamed as of the merge base and counted for its author.
    Output is one '<lines><TAB><name> <email>' line per author, most lines
    first.
    """
    configure_logging(level=level_for_verbosity(verbose))

    try:
        repo_root = GitOps.discover(repo).path
        config = load_config(
            repo_root,
            config_path=config_path,
            **_overrides(
                verbose=verbose,
                context=context,
                max_file_size=max_file_size,
                stop_at=stop_at,
                max_concurrency=max_concurrency,
                no_progress=no_progress,
                as_json=as_json,
            ),
        )
        configure_logging(config=config.logging)

        run = attribute_change(
            base,
            compare,
            repo=repo_root,
            config=config.attribution,
            show_progress=config.output.progress and verbose == 0,
        )
    except (GitError, PrBlameError) as e:
        raise click.ClickException(str(e)) from e

    if run.failed:
        status(
            f"{pluralize(len(run.failed), 'file')} could not be blamed; see -v output",
            style="warning",
        )

    if config.output.format == "json":
        click.echo(format_json(run.entries))
    else:
        for line in format_text(run.entries):
            click.echo(line)


if __name__ == "__main__":
    cli()
