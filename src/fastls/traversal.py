"""Top-level driver: classify root arguments and walk directories."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from enum import Enum

from fastls.errors import ErrorReporter, ListingError
from fastls.fs.entry import DirectorySection, EntryRecord
from fastls.fs.probe import probe
from fastls.fs.reader import DirectoryReader
from fastls.options import ListingOptions
from fastls.policy.filtering import FilterPolicy
from fastls.policy.sorting import SortPolicy
from fastls.runtime_logging import get_runtime_logger


class TraversalState(Enum):
    INIT = "init"
    CLASSIFY_ROOTS = "classify_roots"
    EMIT_NON_DIRECTORIES = "emit_non_directories"
    EMIT_DIRECTORY = "emit_directory"
    RECURSE_CHILDREN = "recurse_children"
    DONE = "done"


class TraversalDriver:
    """Produces the ordered sections for a set of root arguments.

    Non-directory roots come first as one unlabelled section. Directory roots
    follow in sorted order, and with ``recursive`` each one is walked depth
    first through an explicit stack of pending directories.
    """

    def __init__(
        self,
        options: ListingOptions,
        reader: DirectoryReader,
        reporter: ErrorReporter,
    ) -> None:
        self.options = options
        self.reader = reader
        self.reporter = reporter
        self.filter = FilterPolicy(options)
        self.sorter = SortPolicy(options)
        self.state = TraversalState.INIT
        self._logger = get_runtime_logger()

    def run(self, roots: Sequence[str]) -> Iterator[DirectorySection]:
        self.state = TraversalState.INIT
        roots = list(roots) or ["."]

        self.state = TraversalState.CLASSIFY_ROOTS
        files, directories = self._classify(roots)

        self.state = TraversalState.EMIT_NON_DIRECTORIES
        if files:
            yield DirectorySection(label="", entries=self.sorter.order(files), show_header=False)

        show_headers = len(roots) > 1 or self.options.recursive
        pending: list[tuple[str, bool]] = [
            (entry.path, show_headers) for entry in reversed(self.sorter.order(directories))
        ]
        while pending:
            label, show_header = pending.pop()
            self.state = TraversalState.EMIT_DIRECTORY
            section = self._read_section(label, show_header)
            if section is None:
                continue
            self._logger.debug("traversal.section", label=label, entries=len(section.entries))
            yield section

            if self.options.recursive:
                self.state = TraversalState.RECURSE_CHILDREN
                children = [entry for entry in section.entries if self.filter.descend_into(entry)]
                pending.extend((child.path, True) for child in reversed(children))

        self.state = TraversalState.DONE

    def _classify(self, roots: list[str]) -> tuple[list[EntryRecord], list[EntryRecord]]:
        files: list[EntryRecord] = []
        directories: list[EntryRecord] = []
        follow = self.options.follow_links
        for root in roots:
            try:
                entry = probe(root, follow)
            except ListingError as exc:
                self.reporter.report(exc, stage="probe")
                continue
            if entry.is_dir and not self.options.directory:
                directories.append(entry)
            else:
                files.append(entry)
        return files, directories

    def _read_section(self, label: str, show_header: bool) -> DirectorySection | None:
        try:
            listing = self.reader.read(label)
        except ListingError as exc:
            self.reporter.report(exc, stage="reader")
            return None
        for failure in listing.failures:
            self.reporter.report(failure, stage="probe")
        entries = self.sorter.order(self.filter.apply(listing.entries))
        return DirectorySection(label=label, entries=entries, show_header=show_header)
