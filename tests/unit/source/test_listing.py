"""Tests for listing ordering, path helpers and source identities."""

from __future__ import annotations

import unittest

from repoview.errors import InvalidSourceIdentity
from repoview.source.listing import build_listing, format_size, join_path, normalize_path, split_path
from repoview.source.types import DirectoryEntry, EntryKind, SourceIdentity, extension_for_name


def _file(name: str, size: int = 1) -> DirectoryEntry:
    return DirectoryEntry.file(name, size, f"https://example.invalid/{name}")


class BuildListingTests(unittest.TestCase):
    def test_directories_come_first_and_keep_source_order(self) -> None:
        listing = build_listing(
            [
                _file("z.py"),
                DirectoryEntry.directory("tests"),
                _file("a.py"),
                DirectoryEntry.directory("docs"),
            ]
        )

        self.assertEqual(listing.names(), ["tests", "docs", "z.py", "a.py"])
        kinds = [entry.kind for entry in listing]
        self.assertEqual(kinds, [EntryKind.DIRECTORY, EntryKind.DIRECTORY, EntryKind.FILE, EntryKind.FILE])

    def test_duplicate_names_keep_first_occurrence(self) -> None:
        with self.assertLogs("repoview.source.listing", level="WARNING"):
            listing = build_listing([_file("x", 1), DirectoryEntry.directory("x"), _file("y", 2)])

        self.assertEqual(listing.names(), ["x", "y"])
        self.assertEqual(listing.find("x").byte_size, 1)

    def test_empty_input_gives_empty_listing(self) -> None:
        listing = build_listing([])
        self.assertEqual(len(listing), 0)
        self.assertIsNone(listing.find("anything"))


class DirectoryEntryTests(unittest.TestCase):
    def test_extension_is_lowercase_suffix_after_last_dot(self) -> None:
        self.assertEqual(extension_for_name("README.MD"), "md")
        self.assertEqual(extension_for_name("archive.tar.gz"), "gz")
        self.assertEqual(extension_for_name(".gitignore"), "gitignore")
        self.assertEqual(extension_for_name("Makefile"), "")
        self.assertEqual(extension_for_name("notes."), "")
        self.assertEqual(_file("main.RS").extension, "rs")

    def test_rejects_empty_name_and_negative_size(self) -> None:
        with self.assertRaises(ValueError):
            DirectoryEntry.directory("")
        with self.assertRaises(ValueError):
            DirectoryEntry.file("a.txt", -1, None)

    def test_directory_entries_have_no_content_reference(self) -> None:
        entry = DirectoryEntry.directory("src")
        self.assertTrue(entry.is_dir)
        self.assertIsNone(entry.content_ref)
        self.assertEqual(entry.byte_size, 0)


class PathHelperTests(unittest.TestCase):
    def test_normalize_path_accepts_segment_sequences(self) -> None:
        self.assertEqual(normalize_path(["a", "b"]), ("a", "b"))
        self.assertEqual(normalize_path(()), ())

    def test_normalize_path_rejects_plain_strings(self) -> None:
        with self.assertRaises(TypeError):
            normalize_path("a/b")

    def test_normalize_path_rejects_bad_segments(self) -> None:
        for bad in (("",), ("a/b",), ("..",), (".",), ("a", 3)):
            with self.subTest(path=bad):
                with self.assertRaises(ValueError):
                    normalize_path(bad)

    def test_split_and_join_round_trip_ignoring_extra_slashes(self) -> None:
        self.assertEqual(split_path("/src//lib/"), ("src", "lib"))
        self.assertEqual(split_path(""), ())
        self.assertEqual(join_path(("src", "lib")), "src/lib")

    def test_format_size_uses_1024_scale(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(12), "12 B")
        self.assertEqual(format_size(2048), "2 KB")
        self.assertEqual(format_size(5 * 1024 * 1024), "5 MB")


class SourceIdentityTests(unittest.TestCase):
    def test_parse_owner_and_repository(self) -> None:
        identity = SourceIdentity.parse(" denoland/deno ")
        self.assertEqual(identity, SourceIdentity("denoland", "deno"))
        self.assertEqual(str(identity), "denoland/deno")

    def test_parse_ignores_surrounding_slashes(self) -> None:
        self.assertEqual(SourceIdentity.parse("/octo/hello-world/"), SourceIdentity("octo", "hello-world"))

    def test_parse_rejects_malformed_text(self) -> None:
        for bad in ("deno", "a/b/c", "a b/c", "/", "", "owner/", "./..", "octo/.", "../repo"):
            with self.subTest(text=bad):
                with self.assertRaises(InvalidSourceIdentity):
                    SourceIdentity.parse(bad)


if __name__ == "__main__":
    unittest.main()
