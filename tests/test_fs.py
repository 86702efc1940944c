"""Tests for repository root discovery."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from fakes import has_git_ancestor

from git_stash_catalog.fs import find_repository_root, normalize_start


class FindRepositoryRootTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).absolute()
        self.repo = self.root / "project"
        (self.repo / ".git").mkdir(parents=True)
        self.nested = self.repo / "src" / "pkg"
        self.nested.mkdir(parents=True)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_repository_directory_itself(self) -> None:
        self.assertEqual(find_repository_root(self.repo), self.repo)

    def test_nested_directory(self) -> None:
        self.assertEqual(find_repository_root(self.nested), self.repo)

    def test_file_is_normalized_to_its_directory(self) -> None:
        source = self.nested / "module.py"
        source.write_text("x = 1\n")

        self.assertEqual(normalize_start(source), self.nested)
        self.assertEqual(find_repository_root(source), self.repo)

    def test_missing_path_inside_repository(self) -> None:
        self.assertEqual(find_repository_root(self.nested / "gone" / "file.txt"), self.repo)

    def test_nearest_repository_wins(self) -> None:
        inner = self.nested / "vendor"
        (inner / ".git").mkdir(parents=True)

        self.assertEqual(find_repository_root(inner / "lib"), inner)

    def test_parent_segments_are_collapsed_before_walking(self) -> None:
        inner = self.nested / "inner"
        (inner / ".git").mkdir(parents=True)

        self.assertEqual(normalize_start(inner / ".."), self.nested)
        self.assertEqual(find_repository_root(inner / ".."), self.repo)

    def test_git_file_does_not_count(self) -> None:
        worktree = self.nested / "linked"
        worktree.mkdir()
        (worktree / ".git").write_text("gitdir: /elsewhere\n")

        self.assertEqual(find_repository_root(worktree), self.repo)

    def test_returns_none_without_repository(self) -> None:
        outside = self.root / "plain" / "dir"
        outside.mkdir(parents=True)
        if has_git_ancestor(self.root):
            self.skipTest("temporary directory lives inside a git repository")

        self.assertIsNone(find_repository_root(outside))


if __name__ == "__main__":
    unittest.main()
