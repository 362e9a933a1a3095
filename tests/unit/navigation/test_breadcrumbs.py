from __future__ import annotations

import unittest

from repoview.navigation.breadcrumbs import ROOT_LABEL, breadcrumb_target, breadcrumbs_for


class BreadcrumbTests(unittest.TestCase):
    def test_target_is_inclusive_prefix(self) -> None:
        path = ("src", "lib", "util")

        self.assertEqual(breadcrumb_target(path, 0), ("src",))
        self.assertEqual(breadcrumb_target(path, 1), ("src", "lib"))
        self.assertEqual(breadcrumb_target(path, 2), path)

    def test_repeated_segment_names_resolve_by_position(self) -> None:
        path = ("a", "b", "a")

        self.assertEqual(breadcrumb_target(path, 0), ("a",))
        self.assertEqual(breadcrumb_target(path, 2), ("a", "b", "a"))

    def test_out_of_range_or_non_integer_index_is_rejected(self) -> None:
        with self.assertRaises(IndexError):
            breadcrumb_target(("a",), 1)
        with self.assertRaises(IndexError):
            breadcrumb_target(("a",), -1)
        with self.assertRaises(TypeError):
            breadcrumb_target(("a",), "0")
        with self.assertRaises(TypeError):
            breadcrumb_target(("a",), True)

    def test_breadcrumbs_start_at_root(self) -> None:
        crumbs = breadcrumbs_for(("a", "b", "a"))

        self.assertEqual([c.label for c in crumbs], [ROOT_LABEL, "a", "b", "a"])
        self.assertEqual([c.index for c in crumbs], [-1, 0, 1, 2])
        self.assertEqual(crumbs[0].target, ())
        self.assertEqual(crumbs[1].target, ("a",))
        self.assertEqual(crumbs[3].target, ("a", "b", "a"))


if __name__ == "__main__":
    unittest.main()
