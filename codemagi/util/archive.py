# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
In-memory zip archive builder.
"""

import io
import logging
import os
import time
import zipfile
from pathlib import Path
from typing import BinaryIO, Optional, Tuple, Union

from ..types.errors import FileOperationError

logger = logging.getLogger(__name__)

DateTimeTuple = Tuple[int, int, int, int, int, int]


class Zipper:
    """
    Builds a DEFLATE zip archive in memory at the best compression level.

    Entries are added with the ``add_*`` methods. The archive bytes are
    available from ``getvalue()`` or ``write_to()`` once the archive is
    closed; both close it first if needed.
    """

    def __init__(self, compresslevel: int = 9):
        self._buffer = io.BytesIO()
        self._zip = zipfile.ZipFile(self._buffer, mode="w",
                                    compression=zipfile.ZIP_DEFLATED,
                                    compresslevel=compresslevel)
        self._compresslevel = compresslevel
        self._closed = False
        self._count = 0

    def __enter__(self) -> "Zipper":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self):
        if self._closed:
            raise ValueError("Archive is closed")

    def add_bytes(self, name: str, data: bytes, date_time: Optional[DateTimeTuple] = None) -> None:
        """Add one entry holding ``data``; ``date_time`` defaults to now."""
        self._check_open()
        if date_time is None:
            date_time = time.localtime()[:6]
        info = zipfile.ZipInfo(name, date_time=date_time)
        info.compress_type = zipfile.ZIP_DEFLATED
        self._zip.writestr(info, data, compresslevel=self._compresslevel)
        self._count += 1
        logger.debug("Added %s (%d bytes)", name, len(data))

    def add_text(self, name: str, text: str, encoding: str = "utf-8",
                 date_time: Optional[DateTimeTuple] = None) -> None:
        self.add_bytes(name, text.encode(encoding), date_time)

    def add_stream(self, name: str, stream: BinaryIO,
                   date_time: Optional[DateTimeTuple] = None) -> None:
        """Add the remaining contents of a binary stream. The stream is left open."""
        self.add_bytes(name, stream.read(), date_time)

    def add_path(self, path: Union[str, os.PathLike], arcname: Optional[str] = None) -> None:
        """
        Add a file, or a directory and everything under it. Directory
        entries are stored with their names relative to ``arcname``
        (the directory's own name by default).
        """
        self._check_open()
        path = Path(path)
        if not path.exists():
            raise FileOperationError(f"No such file or directory: {path}", path=path)

        arcname = arcname if arcname is not None else path.name
        try:
            if path.is_dir():
                for child in sorted(path.rglob("*")):
                    if child.is_file():
                        relative = child.relative_to(path).as_posix()
                        self._zip.write(child, f"{arcname}/{relative}")
                        self._count += 1
            else:
                self._zip.write(path, arcname)
                self._count += 1
        except OSError as e:
            raise FileOperationError(f"Cannot add {path} to archive", path=path, cause=e) from e

    def size(self) -> int:
        """Number of entries added so far."""
        return self._count

    def close(self) -> None:
        if not self._closed:
            self._zip.close()
            self._closed = True

    def getvalue(self) -> bytes:
        """The finished archive bytes. Closes the archive."""
        self.close()
        return self._buffer.getvalue()

    def write_to(self, stream: BinaryIO) -> int:
        """Write the finished archive to ``stream``; returns the byte count."""
        data = self.getvalue()
        stream.write(data)
        return len(data)
