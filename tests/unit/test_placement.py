"""Unit tests for the placement guard."""

import asyncio

import pytest

from droidplace.core.types import PlacementStatus
from droidplace.models import FileMetadata, PlacementDecision
from droidplace.services.placement import PlacementGuard


def _decision(directory="app/src/main/kotlin/com/acme", name="Foo.kt", conflicts=False):
    return PlacementDecision(file_name=name, directory_path=directory, conflicts_existing=conflicts)


@pytest.fixture
def guard(tree):
    return PlacementGuard(tree)


class TestStripLanguageMarker:
    """Tests for language marker stripping."""

    @pytest.mark.parametrize("marker", ["kotlin", "XML", "  java  ", "gradle", "json"])
    def test_marker_line_removed(self, guard, marker):
        """Test that a bare marker line is dropped."""
        assert guard.strip_language_marker(f"{marker}\nclass Foo\n") == "class Foo\n"

    def test_rest_kept_byte_for_byte(self, guard):
        """Test that leading blank lines and CRLF after the marker survive."""
        assert guard.strip_language_marker("kotlin\n\n  class Foo\r\n") == "\n  class Foo\r\n"

    def test_non_marker_first_line_kept(self, guard):
        """Test that real code on the first line is untouched."""
        content = "package com.acme\n\nclass Foo"
        assert guard.strip_language_marker(content) == content

    def test_marker_only_content(self, guard):
        """Test content that is nothing but a marker."""
        assert guard.strip_language_marker("kotlin") == ""


class TestPlacementGuard:
    """Tests for PlacementGuard.place and save."""

    @pytest.mark.asyncio
    async def test_writes_new_file(self, guard, project_root):
        """Test writing into a directory that does not exist yet."""
        outcome = await guard.place(_decision(), "class Foo\n")

        assert outcome.status is PlacementStatus.WRITTEN
        assert outcome.success
        assert outcome.path == "app/src/main/kotlin/com/acme/Foo.kt"
        assert (project_root / outcome.path).read_text(encoding="utf-8") == "class Foo\n"

    @pytest.mark.asyncio
    async def test_strips_marker_on_write(self, guard, project_root):
        """Test that the written file lacks the marker line."""
        outcome = await guard.place(_decision(), "kotlin\nclass Foo\n")
        assert (project_root / outcome.path).read_bytes() == b"class Foo\n"

    @pytest.mark.asyncio
    async def test_never_overwrites(self, guard, project_root):
        """Test that a second placement leaves the first content intact."""
        first = await guard.place(_decision(), "class Foo // first\n")
        second = await guard.place(_decision(), "class Foo // second\n")

        assert first.status is PlacementStatus.WRITTEN
        assert second.status is PlacementStatus.SKIPPED_EXISTING
        assert "already exists" in second.reason
        assert (project_root / first.path).read_text(encoding="utf-8") == "class Foo // first\n"

    @pytest.mark.asyncio
    async def test_flagged_conflict_not_written(self, guard, project_root):
        """Test that a decision flagged as conflicting is never written."""
        outcome = await guard.place(_decision(conflicts=True), "class Foo")

        assert outcome.status is PlacementStatus.SKIPPED_EXISTING
        assert not (project_root / "app").exists()

    @pytest.mark.asyncio
    async def test_directory_failure(self, guard, write_file, project_root):
        """Test that an uncreatable directory ends in failure."""
        write_file("app/src/main/kotlin", "not a directory")
        outcome = await guard.place(_decision(), "class Foo")

        assert outcome.status is PlacementStatus.FAILED
        assert not outcome.success
        assert outcome.reason
        assert (project_root / "app/src/main/kotlin").is_file()

    @pytest.mark.asyncio
    async def test_concurrent_placements_write_once(self, guard, project_root):
        """Test that racing placements of one target produce a single write."""
        contents = [f"class Foo // {i}\n" for i in range(5)]
        outcomes = await asyncio.gather(*(guard.place(_decision(), c) for c in contents))

        statuses = [o.status for o in outcomes]
        assert statuses.count(PlacementStatus.WRITTEN) == 1
        assert statuses.count(PlacementStatus.SKIPPED_EXISTING) == 4
        written = (project_root / "app/src/main/kotlin/com/acme/Foo.kt").read_text(encoding="utf-8")
        assert written in contents

    @pytest.mark.asyncio
    async def test_no_temporary_files_left(self, guard, project_root):
        """Test that only the target remains in its directory."""
        await guard.place(_decision(), "class Foo")
        assert [p.name for p in (project_root / "app/src/main/kotlin/com/acme").iterdir()] == ["Foo.kt"]

    @pytest.mark.asyncio
    async def test_save_metadata(self, guard, project_root):
        """Test placing a metadata record."""
        metadata = FileMetadata(
            relative_path="app/src/main/res/values",
            file_name="strings.xml",
            content="xml\n<resources/>",
        )
        outcome = await guard.save(metadata)

        assert outcome.status is PlacementStatus.WRITTEN
        assert (project_root / "app/src/main/res/values/strings.xml").read_text(encoding="utf-8") == "<resources/>"

    @pytest.mark.asyncio
    async def test_save_rejects_escaping_path(self, guard, temp_dir):
        """Test that a record pointing outside the project fails."""
        metadata = FileMetadata(relative_path="../outside", file_name="Evil.kt", content="x")
        outcome = await guard.save(metadata)

        assert outcome.status is PlacementStatus.FAILED
        assert outcome.path is None
        assert not (temp_dir / "outside").exists()

    @pytest.mark.asyncio
    async def test_unencodable_content_fails(self, guard, project_root):
        """Test that content the encoding cannot represent is reported, not raised."""
        outcome = await guard.place(_decision(), "class Foo // \udc80\n")

        assert outcome.status is PlacementStatus.FAILED
        assert "encoded" in outcome.reason
        assert list((project_root / "app/src/main/kotlin/com/acme").iterdir()) == []

    @pytest.mark.asyncio
    async def test_locks_released_after_placement(self, guard):
        """Test that per-path locks do not accumulate."""
        await asyncio.gather(
            guard.place(_decision(name="A.kt"), "class A"),
            guard.place(_decision(name="A.kt"), "class A2"),
            guard.place(_decision(name="B.kt"), "class B"),
        )
        await guard.place(_decision(name="C.kt", conflicts=True), "class C")
        await guard.place(_decision(name="A.kt"), "class A3")

        assert guard._locks == {}
