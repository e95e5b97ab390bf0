"""
Unit Tests for Command Line Front Ends

Tests pcopy and pclassify argument handling, exit codes and progress output.

Author: photoutils Project
License: MIT
"""

import logging
import os
import pytest
from datetime import datetime

from photoutils.cli import pclassify, pcopy
from photoutils.utils.logger import ROOT_LOGGER_NAME


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    """Point the config at a missing file and drop handlers bound to captured streams."""
    for name in ("PHOTOUTILS_LOG_LEVEL", "PHOTOUTILS_LOG_FILE", "PHOTOUTILS_FULL_HASH",
                 "PHOTOUTILS_COPY_WORKERS", "PHOTOUTILS_MOVE_WORKERS", "PHOTOUTILS_CLASSIFY_MODE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PHOTOUTILS_CONFIG", str(tmp_path / "no-config.yaml"))
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def dirs(tmp_path):
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    return source, target


class TestPcopy:
    """Test suite for pcopy."""

    def test_copy_single_file(self, dirs, capsys):
        """Test copying one file into a directory."""
        source, target = dirs
        (source / "a.txt").write_text("a")

        assert pcopy.main([str(source / "a.txt"), str(target)]) == 0

        assert (target / "a.txt").read_text() == "a"
        out = capsys.readouterr().out
        assert out == f"{source / 'a.txt'} +++++> {target / 'a.txt'}\n"

    def test_move_tree_recursive(self, dirs, capsys):
        """Test -m -r on a small tree."""
        source, target = dirs
        (source / "sub").mkdir()
        (source / "a.txt").write_text("a")
        (source / "sub" / "b.txt").write_text("b")

        assert pcopy.main(["-m", "-r", str(source), str(target)]) == 0

        assert (target / "sub" / "b.txt").read_text() == "b"
        assert os.listdir(source) == []
        out = capsys.readouterr().out
        assert f"{source / 'a.txt'} -----> {target / 'a.txt'}" in out
        assert f"{source / 'sub'} xxxxxx removed" in out

    def test_second_run_skips_duplicates(self, dirs, capsys):
        """Test that re-running a copy only reports skips."""
        source, target = dirs
        (source / "a.txt").write_text("a")

        assert pcopy.main(["-f", str(source), str(target)]) == 0
        capsys.readouterr()
        assert pcopy.main(["-f", str(source), str(target)]) == 0

        assert capsys.readouterr().out == f"{source / 'a.txt'} ====== {target / 'a.txt'}, skipped\n"
        assert os.listdir(target) == ["a.txt"]

    def test_missing_source(self, dirs, capsys):
        """Test that a missing source is a usage error."""
        source, target = dirs

        assert pcopy.main([str(source / "missing"), str(target)]) == 1

        err = capsys.readouterr().err
        assert err.startswith("usage: pcopy")
        assert "pcopy: error:" in err
        assert "No such file or directory" in err

    def test_identical_directories(self, dirs, capsys):
        """Test that copying a directory onto itself fails."""
        source, _ = dirs

        assert pcopy.main([str(source), str(source)]) == 1
        assert "identical (not copied)" in capsys.readouterr().err

    def test_directory_onto_file(self, dirs, capsys):
        """Test that a tree cannot be copied onto a file."""
        source, target = dirs
        (target / "file").write_text("x")

        assert pcopy.main([str(source), str(target / "file")]) == 1
        assert "a directory expected" in capsys.readouterr().err

    def test_missing_arguments(self, capsys):
        """Test that argparse rejects a missing target."""
        with pytest.raises(SystemExit) as exc_info:
            pcopy.main(["only-source"])

        assert exc_info.value.code == 2

    def test_invalid_config_file(self, dirs, tmp_path, capsys):
        """Test that a broken config file is reported."""
        source, target = dirs
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("engine: [unclosed\n")

        assert pcopy.main(["--config", str(config_path), str(source), str(target)]) == 1
        assert "Failed to parse YAML" in capsys.readouterr().err

    def test_config_file_enables_recursion_and_move(self, dirs, tmp_path):
        """Test that engine settings from the config file are not reset by absent flags."""
        source, target = dirs
        (source / "sub").mkdir()
        (source / "sub" / "b.txt").write_text("b")
        config_path = tmp_path / "config.yaml"
        config_path.write_text("engine:\n  recursive: true\n  move_mode: true\n")

        assert pcopy.main(["--config", str(config_path), str(source), str(target)]) == 0

        assert (target / "sub" / "b.txt").read_text() == "b"
        assert os.listdir(source) == []

    def test_file_failures_still_exit_zero(self, dirs, capsys):
        """Test that per-file errors are reported without failing the run."""
        source, target = dirs
        (source / "blocked").mkdir()
        (source / "blocked" / "b.txt").write_text("b")
        (target / "blocked").write_text("in the way")

        assert pcopy.main(["-r", str(source), str(target)]) == 0
        assert "photoutils: error:" in capsys.readouterr().out


class TestPclassify:
    """Test suite for pclassify."""

    def test_move_by_month_in_place(self, tmp_path, capsys):
        """Test the default run: move, by month, into the source."""
        photos = tmp_path / "photos"
        photos.mkdir()
        photo = photos / "a.jpg"
        photo.write_text("a")
        stamp = datetime(2020, 5, 10, 12, 0, 0).timestamp()
        os.utime(photo, (stamp, stamp))

        assert pclassify.main([str(photos)]) == 0

        assert (photos / "2020-05" / "a.jpg").read_text() == "a"
        assert not photo.exists()
        assert "----->" in capsys.readouterr().out

    def test_copy_by_date(self, dirs, capsys):
        """Test -c -d into a separate target."""
        source, target = dirs
        photo = source / "a.jpg"
        photo.write_text("a")
        stamp = datetime(2021, 1, 2, 12, 0, 0).timestamp()
        os.utime(photo, (stamp, stamp))

        assert pclassify.main(["-c", "-d", str(source), str(target)]) == 0

        assert (target / "2021-01-02" / "a.jpg").read_text() == "a"
        assert photo.exists()

    def test_modes_are_exclusive(self, dirs, capsys):
        """Test that only one classify mode may be given."""
        source, _ = dirs

        with pytest.raises(SystemExit) as exc_info:
            pclassify.main(["-m", "-y", str(source)])

        assert exc_info.value.code == 2

    def test_missing_source(self, tmp_path, capsys):
        """Test that a missing source directory is a usage error."""
        assert pclassify.main([str(tmp_path / "missing")]) == 1
        assert "No such directory" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
