from __future__ import annotations

import stat
import threading
import time
import unittest
from datetime import datetime

from fastls.fs.entry import DirectorySection, EntryKind, EntryRecord
from fastls.options import ListingOptions
from fastls.render.formatting import (
    block_count,
    classify_char,
    format_flags,
    format_mode,
    format_size,
    format_time,
    quote_name,
)
from fastls.render.names import NameCache
from fastls.render.renderer import SectionRenderer

NOW = datetime(2024, 6, 15, 12, 0, 0)
RECENT_NS = int(datetime(2024, 6, 1, 9, 5, 0).timestamp() * 1_000_000_000)
OLD_NS = int(datetime(2022, 3, 7, 9, 5, 0).timestamp() * 1_000_000_000)


def entry(name: str, kind: EntryKind = EntryKind.REGULAR, perm: int = 0o644, **fields: object) -> EntryRecord:
    fmt = {
        EntryKind.REGULAR: stat.S_IFREG,
        EntryKind.DIRECTORY: stat.S_IFDIR,
        EntryKind.SYMLINK: stat.S_IFLNK,
        EntryKind.CHAR_DEVICE: stat.S_IFCHR,
        EntryKind.BLOCK_DEVICE: stat.S_IFBLK,
        EntryKind.FIFO: stat.S_IFIFO,
        EntryKind.SOCKET: stat.S_IFSOCK,
    }[kind]
    values: dict[str, object] = {"mtime_ns": RECENT_NS, "links": 1, "uid": 1000, "gid": 1000}
    values.update(fields)
    return EntryRecord(name=name, path=f"dir/{name}", kind=kind, mode=fmt | perm, **values)  # type: ignore[arg-type]


class FormattingTests(unittest.TestCase):
    def test_mode_strings(self) -> None:
        self.assertEqual(format_mode(entry("f", perm=0o644)), "-rw-r--r--")
        self.assertEqual(format_mode(entry("d", EntryKind.DIRECTORY, perm=0o755)), "drwxr-xr-x")
        self.assertEqual(format_mode(entry("l", EntryKind.SYMLINK, perm=0o777)), "lrwxrwxrwx")
        self.assertEqual(format_mode(entry("s", perm=stat.S_ISUID | 0o755)), "-rwsr-xr-x")
        self.assertEqual(format_mode(entry("S", perm=stat.S_ISUID | 0o644)), "-rwSr--r--")
        self.assertEqual(format_mode(entry("g", perm=stat.S_ISGID | 0o775)), "-rwxrwsr-x")
        self.assertEqual(format_mode(entry("t", EntryKind.DIRECTORY, perm=stat.S_ISVTX | 0o777)), "drwxrwxrwt")
        self.assertEqual(format_mode(entry("T", EntryKind.DIRECTORY, perm=stat.S_ISVTX | 0o776)), "drwxrwxrwT")
        self.assertEqual(format_mode(entry("c", EntryKind.CHAR_DEVICE, perm=0o666)), "crw-rw-rw-")
        self.assertEqual(format_mode(entry("p", EntryKind.FIFO, perm=0o600)), "prw-------")

    def test_sizes(self) -> None:
        self.assertEqual(format_size(1536), "1536")
        self.assertEqual(format_size(1023, human=True), "1023")
        self.assertEqual(format_size(1536, human=True), "1.5K")
        self.assertEqual(format_size(1024 * 1024, human=True), "1.0M")
        self.assertEqual(format_size(5 * 1024**3, human=True), "5.0G")

    def test_times(self) -> None:
        self.assertEqual(format_time(RECENT_NS, now=NOW), "Jun  1 09:05")
        self.assertEqual(format_time(OLD_NS, now=NOW), "Mar  7  2022")
        self.assertEqual(format_time(OLD_NS, full=True), "Mar  7 09:05:00 2022")

    def test_flags_and_blocks(self) -> None:
        self.assertEqual(format_flags(0), "-")
        self.assertEqual(format_flags(0x00020000 | 0x00000004), "nodump,uchg")
        self.assertEqual(block_count(8), 8)
        self.assertEqual(block_count(8, kilobytes=True), 4)

    def test_classify_and_quote(self) -> None:
        self.assertEqual(classify_char(entry("d", EntryKind.DIRECTORY)), "/")
        self.assertEqual(classify_char(entry("l", EntryKind.SYMLINK)), "@")
        self.assertEqual(classify_char(entry("x", perm=0o755)), "*")
        self.assertEqual(classify_char(entry("p", EntryKind.FIFO)), "|")
        self.assertEqual(classify_char(entry("s", EntryKind.SOCKET)), "=")
        self.assertEqual(classify_char(entry("px", EntryKind.FIFO, perm=0o755)), "|")
        self.assertEqual(classify_char(entry("sx", EntryKind.SOCKET, perm=0o755)), "=")
        self.assertEqual(classify_char(entry("f")), "")
        self.assertEqual(quote_name("a\tbé"), "a?b?")


class NameCacheTests(unittest.TestCase):
    def test_each_key_is_looked_up_once(self) -> None:
        calls: list[int] = []
        calls_lock = threading.Lock()

        def slow_lookup(key: int) -> str:
            with calls_lock:
                calls.append(key)
            time.sleep(0.01)
            return f"user{key}"

        cache = NameCache(slow_lookup)
        results: list[str] = []

        def worker(key: int) -> None:
            results.append(cache.get(key))

        threads = [threading.Thread(target=worker, args=(index % 2,)) for index in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(sorted(calls), [0, 1])
        self.assertEqual(sorted(set(results)), ["user0", "user1"])
        self.assertEqual(len(cache), 2)


class SectionRendererTests(unittest.TestCase):
    def _render(self, sections: list[DirectorySection], options: ListingOptions, width: int = 80) -> list[str]:
        lines: list[str] = []
        renderer = SectionRenderer(
            options,
            lines.append,
            users=NameCache(lambda uid: "alice"),
            groups=NameCache(lambda gid: "staff"),
            width=width,
            now=NOW,
        )
        renderer.render_all(sections)
        return lines

    def test_simple_with_headers_and_blank_lines(self) -> None:
        sections = [
            DirectorySection(label="", entries=[entry("loose")]),
            DirectorySection(label="root", entries=[entry("a"), entry("b")], show_header=True),
            DirectorySection(label="root/a", entries=[], show_header=True),
        ]
        self.assertEqual(
            self._render(sections, ListingOptions()),
            ["dir/loose", "", "root:", "a", "b", "", "root/a:"],
        )

    def test_first_header_has_no_leading_blank_line(self) -> None:
        sections = [DirectorySection(label="root", entries=[entry("a")], show_header=True)]
        self.assertEqual(self._render(sections, ListingOptions()), ["root:", "a"])

    def test_long_format(self) -> None:
        link = entry("link", EntryKind.SYMLINK, perm=0o777, size=4, symlink_target="target")
        plain = entry("notes.txt", size=1536, blocks=8, links=2)
        device = entry("tty", EntryKind.CHAR_DEVICE, perm=0o620, major=4, minor=1)
        section = DirectorySection(label="root", entries=[plain, link, device])

        lines = self._render([section], ListingOptions(long_format=True))

        self.assertEqual(lines[0], "total 8")
        self.assertEqual(lines[1], "-rw-r--r--   2 alice    staff        1536 Jun  1 09:05 notes.txt")
        self.assertEqual(lines[2], "lrwxrwxrwx   1 alice    staff           4 Jun  1 09:05 link -> target")
        self.assertEqual(lines[3], "crw--w----   1 alice    staff      4,   1 Jun  1 09:05 tty")

    def test_long_format_variants(self) -> None:
        plain = entry("f", size=2048, inode=42, blocks=4, uid=501, gid=20)
        section = DirectorySection(label="", entries=[plain])

        numeric = self._render([section], ListingOptions(numeric=True))
        self.assertEqual(numeric, ["-rw-r--r--   1 501      20           2048 Jun  1 09:05 dir/f"])

        grouped = self._render([section], ListingOptions(group_format=True, human=True, inode=True))
        self.assertEqual(grouped, ["      42 -rw-r--r--   1 staff        2.0K Jun  1 09:05 dir/f"])

    def test_stream_and_decorations(self) -> None:
        section = DirectorySection(
            label="root",
            entries=[entry("d", EntryKind.DIRECTORY), entry("run", perm=0o755), entry("f")],
        )
        self.assertEqual(self._render([section], ListingOptions(stream=True, classify=True)), ["d/, run*, f"])
        self.assertEqual(self._render([section], ListingOptions(slash=True)), ["d/", "run", "f"])

    def test_columns_fill_down_and_across(self) -> None:
        names = ["a", "b", "c", "d", "e"]
        section = DirectorySection(label="root", entries=[entry(name) for name in names])

        down = self._render([section], ListingOptions(columns=True), width=9)
        self.assertEqual(down, ["a  c  e", "b  d"])

        across = self._render([section], ListingOptions(across=True), width=9)
        self.assertEqual(across, ["a  b  c", "d  e"])

    def test_inode_and_blocks_prefix(self) -> None:
        section = DirectorySection(label="root", entries=[entry("f", inode=7, blocks=16)])
        lines = self._render([section], ListingOptions(inode=True, blocks=True, kilobytes=True))
        self.assertEqual(lines, ["       7      8 f"])


if __name__ == "__main__":
    unittest.main()
