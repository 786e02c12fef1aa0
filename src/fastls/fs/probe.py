"""Single-path metadata probe.

``probe`` issues the stat-like queries for one path and folds them into an
:class:`~fastls.fs.entry.EntryRecord`. It has no side effects and is safe to
call concurrently on disjoint paths.
"""

from __future__ import annotations

import os
from enum import Enum

from fastls.errors import error_from_os
from fastls.fs.entry import EntryKind, EntryRecord
from fastls.runtime_logging import get_runtime_logger


class FollowLinks(Enum):
    NEVER = "never"
    ALWAYS = "always"


def split_device(rdev: int) -> tuple[int, int]:
    """Split a raw device id into ``(major, minor)`` using the high/low byte layout."""
    return rdev >> 8, rdev & 0xFF


def entry_name(path: str) -> str:
    """Final path component of ``path``; the root separator when only separators remain."""
    trimmed = path.rstrip(os.sep)
    if os.altsep:
        trimmed = trimmed.rstrip(os.altsep)
    return os.path.basename(trimmed) or os.sep


def _resolve_link(path: str) -> str | None:
    try:
        target = os.readlink(path)
    except OSError as exc:
        get_runtime_logger().debug("probe.link_unresolved", path=path, reason=str(exc))
        return None
    if not os.path.exists(path):
        get_runtime_logger().debug("probe.link_dangling", path=path, target=target)
        return None
    return target


def probe(
    path: str,
    follow: FollowLinks = FollowLinks.NEVER,
    *,
    name: str | None = None,
) -> EntryRecord:
    """Return the entry record for ``path``.

    Raises a :class:`~fastls.errors.ListingError` subclass when the path
    itself cannot be queried. An unreadable or dangling symlink target is not
    an error; the record simply has no ``symlink_target``.
    """
    try:
        if follow is FollowLinks.ALWAYS:
            st = os.stat(path)
        else:
            st = os.lstat(path)
    except OSError as exc:
        raise error_from_os(exc, path) from exc

    kind = EntryKind.from_mode(st.st_mode)
    major = minor = 0
    if kind.is_device:
        major, minor = split_device(st.st_rdev)

    symlink_target = None
    if kind is EntryKind.SYMLINK:
        symlink_target = _resolve_link(path)

    return EntryRecord(
        name=name or entry_name(path),
        path=path,
        kind=kind,
        mode=st.st_mode,
        size=st.st_size,
        mtime_ns=st.st_mtime_ns,
        atime_ns=st.st_atime_ns,
        ctime_ns=st.st_ctime_ns,
        inode=st.st_ino,
        blocks=getattr(st, "st_blocks", 0),
        links=st.st_nlink,
        uid=st.st_uid,
        gid=st.st_gid,
        major=major,
        minor=minor,
        symlink_target=symlink_target,
        flags=getattr(st, "st_flags", 0),
    )
