"""Memoized user and group name lookups."""

from __future__ import annotations

import grp
import pwd
import threading
from collections.abc import Callable


def lookup_user(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def lookup_group(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


class NameCache:
    """Get-or-compute cache for id-to-name lookups.

    Each id is resolved at most once: concurrent callers asking for the same
    id wait on that id's lock while the first one computes it. Different ids
    never block each other.
    """

    def __init__(self, lookup: Callable[[int], str]) -> None:
        self._lookup = lookup
        self._names: dict[int, str] = {}
        self._key_locks: dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def get(self, key: int) -> str:
        name = self._names.get(key)
        if name is not None:
            return name
        with self._guard:
            lock = self._key_locks.setdefault(key, threading.Lock())
        with lock:
            name = self._names.get(key)
            if name is None:
                name = self._lookup(key)
                self._names[key] = name
            return name

    def __len__(self) -> int:
        return len(self._names)


def user_cache() -> NameCache:
    return NameCache(lookup_user)


def group_cache() -> NameCache:
    return NameCache(lookup_group)
