"""Unit tests for the project tree."""

import pytest

from droidplace.core.exceptions import PlacementError, ProbeError
from droidplace.storage import LocalProjectTree, ProjectTree


class TestPathHelpers:
    """Tests for the static path helpers."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("app/src/main", "app/src/main"),
            ("/app//src/./main/", "app/src/main"),
            ("app\\src\\main", "app/src/main"),
            ("../../etc/passwd", "etc/passwd"),
            ("C:\\Users\\dev", "C/Users/dev"),
            ("", ""),
        ],
    )
    def test_normalize_relative_path(self, raw, expected):
        """Test normalization of caller-supplied paths."""
        assert ProjectTree.normalize_relative_path(raw) == expected

    def test_join_skips_empty_parts(self):
        """Test joining with empty fragments."""
        assert ProjectTree.join("app/src/main/", "", "kotlin", "/com/acme") == "app/src/main/kotlin/com/acme"
        assert ProjectTree.join("", "") == ""


class TestLocalProjectTreeProbes:
    """Tests for read-only probes."""

    def test_exists_and_is_dir(self, tree, write_file):
        """Test existence checks for files and directories."""
        write_file("app/build.gradle.kts", "plugins {}")
        assert tree.exists("app/build.gradle.kts")
        assert tree.is_dir("app")
        assert not tree.is_dir("app/build.gradle.kts")
        assert not tree.exists("app/build.gradle")

    def test_read_text(self, tree, write_file):
        """Test reading a file."""
        write_file("settings.gradle.kts", 'rootProject.name = "acme"')
        assert tree.read_text("settings.gradle.kts") == 'rootProject.name = "acme"'

    def test_read_missing_file_raises(self, tree):
        """Test that a missing file raises ProbeError."""
        with pytest.raises(ProbeError) as exc_info:
            tree.read_text("missing.txt")
        assert exc_info.value.relative_path == "missing.txt"

    def test_iter_files_order_and_suffix(self, tree, write_file):
        """Test deterministic traversal with a suffix filter."""
        write_file("src/b/Two.kt")
        write_file("src/a/One.kt")
        write_file("src/Zero.java")
        write_file("src/a/notes.md")

        assert list(tree.iter_files("src", (".kt", ".java"))) == [
            "src/Zero.java",
            "src/a/One.kt",
            "src/b/Two.kt",
        ]

    def test_iter_files_missing_directory(self, tree):
        """Test that a missing directory yields nothing."""
        assert list(tree.iter_files("nowhere")) == []

    def test_paths_stay_inside_root(self, tree, project_root):
        """Test that traversal segments cannot leave the project."""
        assert tree.get_local_path("../../outside.txt") == project_root.resolve() / "outside.txt"


@pytest.mark.asyncio
class TestLocalProjectTreeWrites:
    """Tests for the mutating operations."""

    async def test_ensure_directory(self, tree, project_root):
        """Test creating nested directories, twice."""
        await tree.ensure_directory("app/src/main/res/layout")
        await tree.ensure_directory("app/src/main/res/layout")
        assert (project_root / "app/src/main/res/layout").is_dir()

    async def test_ensure_directory_failure(self, tree, write_file):
        """Test that a file in the way raises PlacementError."""
        write_file("app", "file")
        with pytest.raises(PlacementError) as exc_info:
            await tree.ensure_directory("app/src")
        assert exc_info.value.operation == "mkdir"

    async def test_create_file(self, tree, project_root):
        """Test creating a file with exact content."""
        await tree.create_file("Notes.txt", "line one\r\nline two")
        assert (project_root / "Notes.txt").read_bytes() == b"line one\r\nline two"

    async def test_create_file_refuses_existing(self, tree, write_file, project_root):
        """Test that an existing file is neither replaced nor modified."""
        write_file("Notes.txt", "original")
        with pytest.raises(FileExistsError):
            await tree.create_file("Notes.txt", "replacement")

        assert (project_root / "Notes.txt").read_text(encoding="utf-8") == "original"
        assert [p.name for p in project_root.iterdir()] == ["Notes.txt"]

    async def test_create_file_missing_parent(self, tree):
        """Test that a missing parent directory raises PlacementError."""
        with pytest.raises(PlacementError):
            await tree.create_file("missing/Notes.txt", "x")

    async def test_create_file_unencodable_content(self, tree, project_root):
        """Test that an encoding failure raises PlacementError and leaves nothing behind."""
        with pytest.raises(PlacementError) as exc_info:
            await tree.create_file("Notes.txt", "bad \udc80")

        assert exc_info.value.operation == "write"
        assert list(project_root.iterdir()) == []
