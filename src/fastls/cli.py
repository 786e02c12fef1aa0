"""CLI entrypoint for fastls."""

from __future__ import annotations

from collections.abc import Callable
from datetime import timedelta
from pathlib import Path
from typing import Any

import click

from fastls.config.store import SettingsStore
from fastls.errors import ErrorReporter
from fastls.fs.pool import MAX_WORKERS, WorkerPool
from fastls.fs.reader import DirectoryReader
from fastls.options import FLAG_TABLE, ListingOptions
from fastls.render.renderer import SectionRenderer
from fastls.runtime_logging import LOG_LEVELS, configure_runtime_logging
from fastls.traversal import TraversalDriver
from fastls.version import __version__


def _flag_options(func: Callable[..., Any]) -> Callable[..., Any]:
    for flag, name, help_text in reversed(FLAG_TABLE):
        func = click.option(flag, name, is_flag=True, help=help_text)(func)
    return func


@click.command(context_settings={"help_option_names": ["--help"]})
@_flag_options
@click.option(
    "-I",
    "--ignore",
    "ignore_patterns",
    multiple=True,
    metavar="PATTERN",
    help="Do not list entries matching the gitwildmatch PATTERN.",
)
@click.option(
    "--settings",
    "settings_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Settings file to use instead of the user config location.",
)
@click.option("--workers", type=click.IntRange(1, MAX_WORKERS), help="Number of probe workers.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), help="Runtime log level.")
@click.option("--log-file", type=click.Path(dir_okay=False, path_type=Path), help="Runtime log file (JSONL).")
@click.version_option(__version__, "--version", prog_name="fastls")
@click.argument("files", nargs=-1)
@click.pass_context
def main(
    ctx: click.Context,
    files: tuple[str, ...],
    ignore_patterns: tuple[str, ...],
    settings_file: Path | None,
    workers: int | None,
    log_level: str | None,
    log_file: Path | None,
    **flag_values: bool,
) -> None:
    """List directory contents.

    Directory entries are probed in parallel; output follows the traditional
    ls ordering and formats.
    """
    logger = configure_runtime_logging(level=log_level, log_file=log_file)
    settings = SettingsStore(settings_file).load()
    options = ListingOptions(ignore_patterns=ignore_patterns, **flag_values)

    reporter = ErrorReporter(sink=lambda line: click.echo(line, err=True))
    renderer = SectionRenderer(
        options,
        click.echo,
        column_padding=settings.display.column_padding,
        recent_window=timedelta(days=settings.display.recent_window_days),
    )

    max_workers = settings.pool.effective_workers(workers)
    logger.info("cli.run", roots=list(files), workers=max_workers, batch_size=settings.reader.batch_size)
    with WorkerPool(max_workers, queue_factor=settings.pool.queue_factor) as pool:
        reader = DirectoryReader(pool, batch_size=settings.reader.batch_size)
        driver = TraversalDriver(options, reader, reporter)
        renderer.render_all(driver.run(files))

    logger.info("cli.finished", failures=len(reporter.failures))
    if reporter.had_errors:
        ctx.exit(1)


if __name__ == "__main__":
    main()
