# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Whole-file reading and writing, copying, and file discovery helpers.

File system failures raise FileOperationError carrying the path and the
underlying OSError.
"""

import itertools
import logging
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import BinaryIO, Iterator, List, Union
from urllib.request import urlopen

from ..types.errors import FileOperationError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

SIZE_UNITS = ["bytes", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB", "BB"]

DEFAULT_BUFFER_SIZE = 4096

_WHITESPACE = frozenset(b" \t\n\r\x0b\x0c\x1c\x1d\x1e\x1f")


def get_file_size(path: PathLike) -> int:
    """Size in bytes; 0 for a directory, -1 when the path does not exist."""
    p = Path(path)
    if not p.exists():
        return -1
    if p.is_dir():
        return 0
    return p.stat().st_size


def file_size_string(size: int) -> str:
    """Human-readable size using whole 1024 steps, e.g. "3 MB"; "Huge" past BB."""
    if size is None:
        return "-1"
    steps = 0
    while size > 1024:
        size //= 1024
        steps += 1
    if steps >= len(SIZE_UNITS):
        return "Huge"
    return f"{size} {SIZE_UNITS[steps]}"


def read_text(path: PathLike, encoding: str = 'utf-8') -> str:
    try:
        with open(path, 'r', encoding=encoding) as f:
            return f.read()
    except OSError as e:
        raise FileOperationError(f"Cannot read {path}", path=path, cause=e) from e


def read_url_text(url: str, encoding: str = 'utf-8', timeout_seconds: int = 60) -> str:
    """Fetch a URL and decode the body."""
    try:
        with urlopen(url, timeout=timeout_seconds) as resp:
            return resp.read().decode(encoding)
    except OSError as e:
        logger.error("Failed to read URL %s: %s", url, e)
        raise FileOperationError(f"Cannot read {url}", path=url, cause=e) from e


def read_bytes(path: PathLike) -> bytes:
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise FileOperationError(f"Cannot read {path}", path=path, cause=e) from e


def read_chars(path: PathLike, encoding: str = 'utf-8') -> List[str]:
    return list(read_text(path, encoding))


def read_lines(path: PathLike, encoding: str = 'utf-8') -> List[str]:
    """Lines without their line terminators."""
    return read_text(path, encoding).splitlines()


def write_file(path: PathLike, data: Union[str, bytes], overwrite: bool = True,
               encoding: str = 'utf-8') -> None:
    """Write ``data``, replacing the file or appending when ``overwrite`` is false."""
    if isinstance(data, str):
        data = data.encode(encoding)
    mode = 'wb' if overwrite else 'ab'
    try:
        with open(path, mode) as f:
            f.write(data)
    except OSError as e:
        raise FileOperationError(f"Cannot write {path}", path=path, cause=e) from e


def extension(filename: str) -> str:
    """Text after the last ".", or "" when there is none."""
    name = os.path.basename(filename)
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1]


def file_name(path: str) -> str:
    """Final path component."""
    return os.path.basename(path)


def move_file(source: PathLike, destination: PathLike) -> Path:
    if not os.path.exists(source):
        raise FileOperationError("Source file does not exist or is not readable", path=source)
    try:
        return Path(shutil.move(os.fspath(source), os.fspath(destination)))
    except OSError as e:
        raise FileOperationError(f"Cannot move {source}", path=source, cause=e) from e


def copy_file(source: PathLike, target: PathLike) -> Path:
    """
    Copy one file. A directory target receives the file under its own name;
    a directory source just creates the target directory.
    """
    source, target = Path(source), Path(target)
    try:
        if source.is_dir():
            logger.debug("copy_file: making dir %s", target)
            target.mkdir(parents=True, exist_ok=True)
            return target

        dest = target / source.name if target.is_dir() else target
        logger.debug("copy_file: from %s to %s", source, dest)
        shutil.copyfile(source, dest)
        return dest
    except OSError as e:
        raise FileOperationError(f"Cannot copy {source}", path=source, cause=e) from e


def copy_tree(source: PathLike, target: PathLike) -> Path:
    """Copy a directory's contents into ``target`` recursively, or a single file."""
    source, target = Path(source), Path(target)
    logger.debug("copy_tree: from %s to %s", source, target)

    if not source.is_dir():
        return copy_file(source, target)
    if target.is_file():
        raise FileOperationError("Can't copy directory into file", path=target)
    try:
        shutil.copytree(source, target, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise FileOperationError(f"Cannot copy {source}", path=source, cause=e) from e
    return target


def find_newer_files(directory: PathLike, oldest: datetime) -> List[Path]:
    """
    Files directly inside ``directory`` modified after ``oldest``, sorted by
    name. A file path is checked on its own. Subdirectories are skipped.
    """
    directory = Path(directory)
    if not directory.exists():
        raise FileOperationError(f"No such file or directory: {directory}", path=directory)

    def is_newer(p: Path) -> bool:
        modified = datetime.fromtimestamp(p.stat().st_mtime, tz=oldest.tzinfo)
        return modified > oldest

    if not directory.is_dir():
        return [directory] if is_newer(directory) else []

    output = sorted(p for p in directory.iterdir() if not p.is_dir() and is_newer(p))
    logger.debug("%d newer files in %s", len(output), directory)
    return output


def find_files(directory: PathLike) -> List[Path]:
    """Every file directly inside ``directory``."""
    return find_newer_files(directory, datetime.fromtimestamp(0))


def copy_stream(source: BinaryIO, destination: BinaryIO,
                buffer_size: int = DEFAULT_BUFFER_SIZE) -> int:
    """Copy until end of stream; returns the number of bytes copied."""
    total = 0
    while True:
        chunk = source.read(buffer_size)
        if not chunk:
            return total
        destination.write(chunk)
        total += len(chunk)


def _stream_bytes(stream: BinaryIO, ignore_whitespace: bool) -> Iterator[int]:
    while True:
        chunk = stream.read(DEFAULT_BUFFER_SIZE)
        if not chunk:
            return
        for b in chunk:
            if ignore_whitespace and b in _WHITESPACE:
                continue
            yield b


def streams_equal(first: BinaryIO, second: BinaryIO, ignore_whitespace: bool = False) -> bool:
    """
    Compare two binary streams byte by byte, optionally skipping ASCII
    whitespace. The streams are read to the first difference and left open.
    """
    if first is second:
        return True
    if first is None or second is None:
        return first is None and second is None

    end = object()
    for a, b in itertools.zip_longest(_stream_bytes(first, ignore_whitespace),
                                      _stream_bytes(second, ignore_whitespace),
                                      fillvalue=end):
        if a != b:
            return False
    return True
