"""
Tests for file, stream and archive helpers.
"""

import io
import os
import time
import zipfile
from datetime import datetime, timedelta

import pytest

from codemagi.types import FileOperationError
from codemagi.util import files
from codemagi.util.archive import Zipper


class TestReadWrite:
    """Test whole-file reading and writing."""

    def test_write_then_read(self, tmp_path):
        path = tmp_path / "a.txt"
        files.write_file(path, "line1\nline2")
        assert files.read_text(path) == "line1\nline2"
        assert files.read_lines(path) == ["line1", "line2"]
        assert files.read_bytes(path) == b"line1\nline2"
        assert files.read_chars(path)[:4] == ["l", "i", "n", "e"]

    def test_append(self, tmp_path):
        path = tmp_path / "a.txt"
        files.write_file(path, "one")
        files.write_file(path, b"two", overwrite=False)
        assert files.read_text(path) == "onetwo"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileOperationError) as exc_info:
            files.read_text(tmp_path / "missing.txt")
        assert exc_info.value.to_dict()["error"] == "file_error"

    def test_read_url_text(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text("<html/>", encoding="utf-8")
        assert files.read_url_text(path.as_uri()) == "<html/>"


class TestFileInfo:
    """Test sizes and names."""

    def test_get_file_size(self, tmp_path):
        path = tmp_path / "f.bin"
        path.write_bytes(b"12345")
        assert files.get_file_size(path) == 5
        assert files.get_file_size(tmp_path) == 0
        assert files.get_file_size(tmp_path / "none") == -1

    @pytest.mark.parametrize("size,expected", [
        (500, "500 bytes"), (2048, "2 KB"), (5 * 1024 ** 2, "5 MB"), (1024, "1024 bytes"),
    ])
    def test_file_size_string(self, size, expected):
        assert files.file_size_string(size) == expected

    def test_names(self):
        assert files.extension("archive.tar.gz") == "gz"
        assert files.extension("README") == ""
        assert files.file_name("/tmp/dir/file.txt") == "file.txt"


class TestCopyAndMove:
    """Test copying, moving and discovery."""

    def test_copy_file_into_directory(self, tmp_path):
        source = tmp_path / "src.txt"
        source.write_text("x")
        target_dir = tmp_path / "out"
        target_dir.mkdir()
        result = files.copy_file(source, target_dir)
        assert result == target_dir / "src.txt"
        assert result.read_text() == "x"

    def test_copy_tree(self, tmp_path):
        source = tmp_path / "tree"
        (source / "sub").mkdir(parents=True)
        (source / "sub" / "leaf.txt").write_text("leaf")
        target = tmp_path / "copy"
        files.copy_tree(source, target)
        assert (target / "sub" / "leaf.txt").read_text() == "leaf"

    def test_copy_tree_into_file_raises(self, tmp_path):
        source = tmp_path / "tree"
        source.mkdir()
        target = tmp_path / "file.txt"
        target.write_text("x")
        with pytest.raises(FileOperationError):
            files.copy_tree(source, target)

    def test_move_file(self, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("x")
        destination = tmp_path / "b.txt"
        files.move_file(source, destination)
        assert not source.exists()
        assert destination.read_text() == "x"

    def test_move_missing(self, tmp_path):
        with pytest.raises(FileOperationError):
            files.move_file(tmp_path / "none", tmp_path / "other")

    def test_find_newer_files(self, tmp_path):
        old = tmp_path / "old.txt"
        new = tmp_path / "new.txt"
        old.write_text("o")
        new.write_text("n")
        (tmp_path / "subdir").mkdir()
        past = time.time() - 3600
        os.utime(old, (past, past))

        cutoff = datetime.now() - timedelta(minutes=5)
        assert files.find_newer_files(tmp_path, cutoff) == [new]
        assert files.find_files(tmp_path) == [new, old]

    def test_find_newer_files_missing(self, tmp_path):
        with pytest.raises(FileOperationError):
            files.find_newer_files(tmp_path / "none", datetime.now())


class TestStreams:
    """Test stream copy and comparison."""

    def test_copy_stream(self):
        destination = io.BytesIO()
        count = files.copy_stream(io.BytesIO(b"x" * 10000), destination, buffer_size=1000)
        assert count == 10000
        assert destination.getvalue() == b"x" * 10000

    def test_streams_equal(self):
        assert files.streams_equal(io.BytesIO(b"abc"), io.BytesIO(b"abc"))
        assert not files.streams_equal(io.BytesIO(b"abc"), io.BytesIO(b"abcd"))
        assert not files.streams_equal(io.BytesIO(b"abc"), io.BytesIO(b"abd"))

    def test_streams_equal_ignoring_whitespace(self):
        first = io.BytesIO(b"a b\n c")
        second = io.BytesIO(b"abc")
        assert files.streams_equal(first, second, ignore_whitespace=True)

    def test_streams_left_open(self):
        first, second = io.BytesIO(b"a"), io.BytesIO(b"a")
        files.streams_equal(first, second)
        assert not first.closed and not second.closed


class TestZipper:
    """Test the in-memory zip builder."""

    def test_entries_round_trip(self):
        with Zipper() as zipper:
            zipper.add_text("hello.txt", "hello world")
            zipper.add_bytes("data.bin", b"\x00\x01")
            zipper.add_stream("stream.txt", io.BytesIO(b"streamed"))
            assert zipper.size() == 3
        archive = zipfile.ZipFile(io.BytesIO(zipper.getvalue()))
        assert archive.read("hello.txt") == b"hello world"
        assert archive.read("stream.txt") == b"streamed"
        assert all(i.compress_type == zipfile.ZIP_DEFLATED for i in archive.infolist())

    def test_add_path_directory(self, tmp_path):
        (tmp_path / "docs" / "sub").mkdir(parents=True)
        (tmp_path / "docs" / "a.txt").write_text("a")
        (tmp_path / "docs" / "sub" / "b.txt").write_text("b")
        zipper = Zipper()
        zipper.add_path(tmp_path / "docs")
        names = zipfile.ZipFile(io.BytesIO(zipper.getvalue())).namelist()
        assert sorted(names) == ["docs/a.txt", "docs/sub/b.txt"]

    def test_add_missing_path(self, tmp_path):
        with pytest.raises(FileOperationError):
            Zipper().add_path(tmp_path / "none")

    def test_write_to_and_closed(self):
        zipper = Zipper()
        zipper.add_text("a.txt", "a")
        out = io.BytesIO()
        written = zipper.write_to(out)
        assert written == len(out.getvalue()) > 0
        assert zipper.closed
        with pytest.raises(ValueError):
            zipper.add_text("b.txt", "b")
