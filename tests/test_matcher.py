"""Tests for pattern expansion and file matching."""

import os
import tempfile
from pathlib import Path

from discovery.matcher import FileMatcher, expand_braces


class TestExpandBraces:
    """Tests for brace expansion."""

    def test_no_braces(self):
        """Test a plain pattern."""
        assert expand_braces("src/*.php") == ["src/*.php"]

    def test_simple_group(self):
        """Test alternatives keep their written order."""
        assert expand_braces("{b,a,c}/x.php") == ["b/x.php", "a/x.php", "c/x.php"]

    def test_multiple_groups(self):
        """Test two groups in one pattern."""
        assert expand_braces("{a,b}/{x,y}") == ["a/x", "a/y", "b/x", "b/y"]

    def test_nested_groups(self):
        """Test nested groups."""
        assert expand_braces("{a,b{1,2}}.php") == ["a.php", "b1.php", "b2.php"]

    def test_single_alternative(self):
        """Test a group with a single entry."""
        assert expand_braces("{only}") == ["only"]

    def test_empty_group(self):
        """Test an empty group."""
        assert expand_braces("{}") == [""]

    def test_unbalanced_is_literal(self):
        """Test a group without closing brace."""
        assert expand_braces("src/{a,b") == ["src/{a,b"]


class TestFileMatcher:
    """Tests for FileMatcher.expand()."""

    def _make_tree(self, root: Path):
        for relative in ("b/Two.php", "a/One.php", "a/Three.php", "c/skip.txt"):
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()

    def test_order_follows_alternatives(self):
        """Test that results are grouped per alternative and sorted inside."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self._make_tree(root)

            matches = list(FileMatcher().expand(f"{tmpdir}/{{b,a}}/*.php"))

            assert [Path(m).relative_to(root).as_posix() for m in matches] == [
                "b/Two.php", "a/One.php", "a/Three.php",
            ]

    def test_missing_alternatives_are_skipped(self):
        """Test alternatives that match nothing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self._make_tree(root)

            matches = list(FileMatcher().expand(f"{tmpdir}/{{missing,a}}/One.php"))

            assert matches == [os.path.join(tmpdir, "a", "One.php")]

    def test_literal_paths(self):
        """Test a brace list of literal paths, one of them missing."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self._make_tree(root)
            first = str(root / "b" / "Two.php")
            missing = str(root / "nope.php")
            last = str(root / "a" / "One.php")

            matches = list(FileMatcher().expand("{" + ",".join([first, missing, last]) + "}"))

            assert matches == [first, last]

    def test_recursive_glob(self):
        """Test that ** descends into subdirectories."""
        with tempfile.TemporaryDirectory() as tmpdir:
            root = Path(tmpdir)
            self._make_tree(root)

            matches = list(FileMatcher().expand(f"{tmpdir}/**/*.php"))

            assert len(matches) == 3

    def test_empty_pattern(self):
        """Test that an empty pattern matches nothing."""
        assert list(FileMatcher().expand("")) == []

    def test_no_match(self):
        """Test a pattern matching no file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            assert list(FileMatcher().expand(f"{tmpdir}/*.php")) == []
