"""Tests for manifest keys, canonical paths, and lexical normalization."""

import os
from pathlib import Path

import pytest

from wls.domain.paths import CanonicalPath, ManifestKey, normalize_lexically, physical_path


class TestManifestKey:
    def test_parse_segments(self) -> None:
        key = ManifestKey.parse("//areas/clients/admin-web")
        assert key.segments == ("areas", "clients", "admin-web")
        assert len(key) == 3

    def test_str_round_trips_text(self) -> None:
        assert str(ManifestKey.parse("//areas/platform/billing")) == "//areas/platform/billing"

    def test_bare_marker_is_root_key(self) -> None:
        key = ManifestKey.parse("//")
        assert key.segments == ()

    @pytest.mark.parametrize("raw", ["areas/clients", "/areas", ""])
    def test_missing_marker_rejected(self, raw: str) -> None:
        with pytest.raises(ValueError, match="must start with"):
            ManifestKey.parse(raw)

    @pytest.mark.parametrize("raw", ["//a//b", "//a/", "//a/../b", "//./a"])
    def test_bad_segments_rejected(self, raw: str) -> None:
        with pytest.raises(ValueError, match="Invalid path segment"):
            ManifestKey.parse(raw)

    def test_hashable_and_equal_by_segments(self) -> None:
        assert ManifestKey.parse("//a/b") == ManifestKey(("a", "b"))
        assert len({ManifestKey.parse("//a/b"), ManifestKey(("a", "b"))}) == 1

    def test_starts_with(self) -> None:
        key = ManifestKey.parse("//areas/clients/admin-web")
        assert key.starts_with(CanonicalPath())
        assert key.starts_with(CanonicalPath(("areas", "clients")))
        assert key.starts_with(CanonicalPath(("areas", "clients", "admin-web")))
        assert not key.starts_with(CanonicalPath(("areas", "platform")))
        assert not key.starts_with(CanonicalPath(("areas", "clients", "admin-web", "x")))

    def test_starts_with_is_segment_wise(self) -> None:
        """``//areas/client`` is not a prefix of ``//areas/clients``."""
        key = ManifestKey.parse("//areas/clients")
        assert not key.starts_with(CanonicalPath(("areas", "client")))


class TestCanonicalPath:
    def test_root_is_empty(self) -> None:
        root = CanonicalPath()
        assert len(root) == 0
        assert str(root) == "//"

    def test_child(self) -> None:
        assert CanonicalPath(("areas",)).child("clients") == CanonicalPath(("areas", "clients"))

    def test_from_relative(self) -> None:
        assert CanonicalPath.from_relative(Path("areas/clients")).segments == ("areas", "clients")
        assert CanonicalPath.from_relative(Path(".")) == CanonicalPath()

    def test_rejects_dot_segments(self) -> None:
        with pytest.raises(ValueError):
            CanonicalPath(("areas", ".."))


class TestNormalizeLexically:
    def test_collapses_dots_and_separators(self) -> None:
        assert normalize_lexically(Path("/a//b/./c/")) == Path("/a/b/c")

    def test_resolves_parent_segments_without_disk(self) -> None:
        assert normalize_lexically(Path("/a/b/../c")) == Path("/a/c")

    def test_nonexistent_path_is_fine(self, tmp_path: Path) -> None:
        target = tmp_path / "missing" / ".." / "also-missing"
        assert normalize_lexically(target) == tmp_path / "also-missing"


class TestPhysicalPath:
    def test_missing_tail_kept(self, tmp_path: Path) -> None:
        assert physical_path(tmp_path / "a" / ".." / "b") == tmp_path / "b"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_resolves_links(self, tmp_path: Path) -> None:
        (tmp_path / "real" / "sub").mkdir(parents=True)
        (tmp_path / "link").symlink_to(tmp_path / "real", target_is_directory=True)
        assert physical_path(tmp_path / "link" / "sub") == tmp_path / "real" / "sub"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_parent_segment_applied_before_links(self, tmp_path: Path) -> None:
        (tmp_path / "deep" / "real").mkdir(parents=True)
        (tmp_path / "link").symlink_to(tmp_path / "deep" / "real", target_is_directory=True)
        assert physical_path(tmp_path / "link" / "..") == tmp_path
