"""
Unit Tests for Collision Resolution

Tests numbered name generation and the probing sequence.

Author: photoutils Project
License: MIT
"""

import os
import pytest

from photoutils.sync_engine.deduplicator import ContentComparator
from photoutils.sync_engine.resolver import (
    CollisionResolver,
    ResolutionAction,
    numbered_name
)


@pytest.fixture
def resolver():
    return CollisionResolver(ContentComparator())


class TestNumberedName:
    """Test suite for disambiguation tags."""

    def test_tag_before_extension(self):
        """Test that the tag is inserted before the extension."""
        assert numbered_name("/photos/photo.jpg", 1) == "/photos/photo(1).jpg"
        assert numbered_name("/photos/photo.jpg", 12) == "/photos/photo(12).jpg"

    def test_only_last_extension(self):
        """Test that only the last suffix counts as extension."""
        assert numbered_name("backup.tar.gz", 2) == "backup.tar(2).gz"

    def test_no_extension(self):
        """Test names without an extension."""
        assert numbered_name("README", 1) == "README(1)"
        assert numbered_name(".bashrc", 1) == ".bashrc(1)"

    def test_dot_in_directory_name(self):
        """Test that dots in parent directories are ignored."""
        assert numbered_name("/my.photos/IMG", 3) == os.path.join("/my.photos", "IMG(3)")


class TestCollisionResolver:
    """Test suite for the resolution loop."""

    def test_free_target(self, resolver, tmp_path):
        """Test that a free target is used as-is."""
        source = tmp_path / "src.jpg"
        source.write_text("photo")
        target = tmp_path / "photo.jpg"

        resolution = resolver.resolve(str(source), str(target))

        assert resolution.action == ResolutionAction.PLACE
        assert resolution.path == str(target)
        assert resolution.attempts == 0

    def test_duplicate_target(self, resolver, tmp_path):
        """Test that an identical existing target is reported as duplicate."""
        source = tmp_path / "src.jpg"
        source.write_text("photo")
        target = tmp_path / "photo.jpg"
        target.write_text("photo")

        resolution = resolver.resolve(str(source), str(target))

        assert resolution.is_duplicate
        assert resolution.path == str(target)

    def test_rename_sequence(self, resolver, tmp_path):
        """Test photo(1).jpg then photo(2).jpg in increasing order."""
        source = tmp_path / "src.jpg"
        source.write_text("new photo")
        (tmp_path / "photo.jpg").write_text("other 0")

        first = resolver.resolve(str(source), str(tmp_path / "photo.jpg"))
        assert first.action == ResolutionAction.PLACE
        assert first.path == str(tmp_path / "photo(1).jpg")

        (tmp_path / "photo(1).jpg").write_text("other 1")

        second = resolver.resolve(str(source), str(tmp_path / "photo.jpg"))
        assert second.action == ResolutionAction.PLACE
        assert second.path == str(tmp_path / "photo(2).jpg")
        assert second.attempts == 2

    def test_numbered_duplicate_is_found(self, resolver, tmp_path):
        """Test that a numbered name holding the same content stops the search."""
        source = tmp_path / "src.jpg"
        source.write_text("the photo")
        (tmp_path / "photo.jpg").write_text("something else")
        (tmp_path / "photo(1).jpg").write_text("another thing")
        (tmp_path / "photo(2).jpg").write_text("the photo")

        resolution = resolver.resolve(str(source), str(tmp_path / "photo.jpg"))

        assert resolution.action == ResolutionAction.DUPLICATE
        assert resolution.path == str(tmp_path / "photo(2).jpg")

    def test_directory_at_target_is_a_collision(self, resolver, tmp_path):
        """Test that a directory with the target name is renamed around."""
        source = tmp_path / "src.jpg"
        source.write_text("photo")
        (tmp_path / "photo.jpg").mkdir()

        resolution = resolver.resolve(str(source), str(tmp_path / "photo.jpg"))

        assert resolution.action == ResolutionAction.PLACE
        assert resolution.path == str(tmp_path / "photo(1).jpg")

    def test_long_collision_chain(self, resolver, tmp_path):
        """Test that many prior collisions are walked without a cap."""
        source = tmp_path / "src.txt"
        source.write_text("unique")
        (tmp_path / "name.txt").write_text("x")
        for i in range(1, 300):
            (tmp_path / f"name({i}).txt").write_text(f"x{i}")

        resolution = resolver.resolve(str(source), str(tmp_path / "name.txt"))

        assert resolution.path == str(tmp_path / "name(300).txt")
        assert resolution.action == ResolutionAction.PLACE


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
