"""Ordering of complete entry sets."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from fastls.fs.entry import EntryRecord
from fastls.options import ListingOptions


class SortCriterion(Enum):
    UNSORTED = "unsorted"
    SIZE = "size"
    TIME = "time"
    NAME = "name"


class TimeSource(Enum):
    MODIFICATION = "mtime"
    ACCESS = "atime"
    CHANGE = "ctime"

    def of(self, entry: EntryRecord) -> int:
        if self is TimeSource.ACCESS:
            return entry.atime_ns
        if self is TimeSource.CHANGE:
            return entry.ctime_ns
        return entry.mtime_ns


def resolve_criterion(options: ListingOptions) -> SortCriterion:
    """Pick the single criterion: unsorted, then size, then time, then name."""
    if options.no_sort:
        return SortCriterion.UNSORTED
    if options.size_sort:
        return SortCriterion.SIZE
    if options.time_sort:
        return SortCriterion.TIME
    return SortCriterion.NAME


def resolve_time_source(options: ListingOptions) -> TimeSource:
    if options.access_time:
        return TimeSource.ACCESS
    if options.change_time:
        return TimeSource.CHANGE
    return TimeSource.MODIFICATION


def _sort_key(criterion: SortCriterion, time_source: TimeSource) -> tuple[Callable[[EntryRecord], Any], bool]:
    # (key, descending) for each comparing criterion.
    if criterion is SortCriterion.SIZE:
        return (lambda entry: entry.size), True
    if criterion is SortCriterion.TIME:
        return time_source.of, True
    return (lambda entry: entry.name.lower()), False


def order(
    entries: Sequence[EntryRecord],
    criterion: SortCriterion = SortCriterion.NAME,
    reverse: bool = False,
    time_source: TimeSource = TimeSource.MODIFICATION,
) -> list[EntryRecord]:
    """Return ``entries`` ordered by ``criterion``.

    Equal keys keep their input order, with or without ``reverse``.
    ``UNSORTED`` returns the input order untouched and ignores ``reverse``.
    """
    if criterion is SortCriterion.UNSORTED:
        return list(entries)
    key, descending = _sort_key(criterion, time_source)
    return sorted(entries, key=key, reverse=descending != reverse)


class SortPolicy:
    def __init__(self, options: ListingOptions) -> None:
        self.criterion = resolve_criterion(options)
        self.time_source = resolve_time_source(options)
        self.reverse = options.reverse

    def order(self, entries: Sequence[EntryRecord]) -> list[EntryRecord]:
        return order(entries, self.criterion, self.reverse, self.time_source)
