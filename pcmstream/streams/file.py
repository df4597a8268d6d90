import io
import logging
import os
from contextlib import contextmanager
from typing import BinaryIO

from pcmstream.interfaces.stream import ABCByteStream
from pcmstream.core.exceptions import IoError

logger = logging.getLogger(__name__)

@contextmanager
def _translate_errors(operation: str):
    try:
        yield
    except OSError as e:
        logger.error(f"Stream {operation} failed: {e}")
        raise IoError(f"Stream {operation} failed: {e}") from e

class FileStream(ABCByteStream):
    """
    ABCByteStream over any binary file object (open(..., "rb"), sockets' makefile(), BytesIO).
    The file object stays owned by the caller and is never closed here.
    """

    def __init__(self, fileobj: BinaryIO):
        self.fileobj = fileobj

    def read(self, buffer, max_bytes: int) -> int:
        self._check_open("read")
        target = memoryview(buffer)[:max_bytes]
        with _translate_errors("read"):
            count = self.fileobj.readinto(target)
        # Non-blocking raw streams return None when nothing is available
        return count or 0

    def write(self, data) -> None:
        self._check_open("write")
        view = memoryview(data).cast("B")
        with _translate_errors("write"):
            while view:
                written = self.fileobj.write(view)
                if written is None:
                    written = 0
                if written == 0:
                    raise OSError("short write: stream accepted no bytes")
                view = view[written:]

    def seek(self, offset: int) -> None:
        self._check_open("seek")
        with _translate_errors("seek"):
            self.fileobj.seek(offset, os.SEEK_SET)

    def size(self) -> int:
        self._check_open("size")
        with _translate_errors("size"):
            current = self.fileobj.tell()
            end = self.fileobj.seek(0, os.SEEK_END)
            self.fileobj.seek(current, os.SEEK_SET)
        return end

    def position(self) -> int:
        self._check_open("position")
        with _translate_errors("position"):
            return self.fileobj.tell()

    def _check_open(self, operation: str):
        if self.fileobj.closed:
            raise IoError(f"Stream {operation} failed: file object is closed")

class MemoryStream(FileStream):
    """In-memory byte stream backed by io.BytesIO."""

    def __init__(self, initial: bytes = b""):
        super().__init__(io.BytesIO(initial))

    def getvalue(self) -> bytes:
        return self.fileobj.getvalue()
