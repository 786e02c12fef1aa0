"""Batched, pool-backed directory reading."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass, field
from itertools import islice

from fastls.errors import ListingError, error_from_exception, error_from_os
from fastls.fs.entry import EntryRecord
from fastls.fs.pool import WorkerPool
from fastls.fs.probe import FollowLinks, probe
from fastls.runtime_logging import get_runtime_logger

DEFAULT_BATCH_SIZE = 1000


@dataclass(slots=True)
class DirectoryListing:
    """Every child of one directory, in enumeration order.

    ``failures`` holds the children whose probe failed; they are not in
    ``entries``.
    """

    path: str
    entries: list[EntryRecord] = field(default_factory=list)
    failures: list[ListingError] = field(default_factory=list)


def _probe_child(child: tuple[str, str]) -> EntryRecord:
    path, name = child
    return probe(path, FollowLinks.NEVER, name=name)


class DirectoryReader:
    def __init__(self, pool: WorkerPool, *, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.pool = pool
        self.batch_size = batch_size
        self._logger = get_runtime_logger()

    def read(self, directory: str) -> DirectoryListing:
        """Probe every child of ``directory``.

        Names are pulled from the directory in batches of ``batch_size``; each
        batch is fanned out to the pool and fully collected before the next
        batch is read. Raises a :class:`~fastls.errors.ListingError` when the
        directory cannot be opened or read.
        """
        started = time.monotonic()
        listing = DirectoryListing(path=directory)
        batches = 0
        try:
            with os.scandir(directory) as it:
                while True:
                    batch = [entry.name for entry in islice(it, self.batch_size)]
                    if not batch:
                        break
                    batches += 1
                    self._collect_batch(directory, batch, listing)
        except OSError as exc:
            raise error_from_os(exc, directory) from exc

        self._logger.debug(
            "reader.complete",
            path=directory,
            entries=len(listing.entries),
            failures=len(listing.failures),
            batches=batches,
            elapsed_ms=round((time.monotonic() - started) * 1000, 2),
        )
        return listing

    def _collect_batch(self, directory: str, names: list[str], listing: DirectoryListing) -> None:
        paths = [os.path.join(directory, name) for name in names]
        outcomes = self.pool.run_all(_probe_child, zip(paths, names))
        # Outcomes come back in submission order, so they pair with paths by position.
        for path, outcome in zip(paths, outcomes):
            if outcome.ok:
                listing.entries.append(outcome.value)
            else:
                listing.failures.append(error_from_exception(outcome.error, path))
        self._logger.debug("reader.batch", path=directory, size=len(names))
