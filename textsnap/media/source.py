"""Photo byte sources and the bounded byte read."""

from __future__ import annotations

import asyncio
import io
import os
from typing import BinaryIO, Optional

from textsnap.errors import AcquisitionFailed, ReadTimeout


class PhotoSource:
    """A photo handed over by the camera or the picker."""

    name: str = "photo"

    def open_read(self) -> BinaryIO:
        raise NotImplementedError


class PhotoFile(PhotoSource):
    def __init__(self, path: str) -> None:
        self.path = path
        self.name = os.path.basename(path)

    def open_read(self) -> BinaryIO:
        return open(self.path, "rb")

    def __repr__(self) -> str:
        return f"PhotoFile({self.path!r})"


class MemoryPhoto(PhotoSource):
    def __init__(self, data: bytes, name: str = "capture.png") -> None:
        self.data = bytes(data)
        self.name = name

    def open_read(self) -> BinaryIO:
        return io.BytesIO(self.data)

    def __repr__(self) -> str:
        return f"MemoryPhoto({self.name!r}, {len(self.data)} bytes)"


def _read_all(source: PhotoSource) -> bytes:
    with source.open_read() as stream:
        return stream.read()


async def read_image_bytes(source: PhotoSource, timeout: Optional[float] = None) -> bytes:
    """Read the whole photo into memory in a worker thread.

    Doxygen:
    - @param source: Photo to read.
    - @param timeout: Upper bound in seconds; None waits indefinitely.
    - @return: Encoded image bytes.
    - @throws ReadTimeout: The read did not complete within ``timeout``.
    - @throws AcquisitionFailed: The source could not be opened or read, or is empty.
    """
    try:
        if timeout is None:
            data = await asyncio.to_thread(_read_all, source)
        else:
            data = await asyncio.wait_for(asyncio.to_thread(_read_all, source), timeout)
    except asyncio.TimeoutError as e:
        raise ReadTimeout(f"Reading {source.name} exceeded {timeout:g}s") from e
    except OSError as e:
        raise AcquisitionFailed(f"Could not read {source.name}: {e}") from e
    except Exception as e:
        raise AcquisitionFailed(f"Reading {source.name} failed: {e}") from e
    if not data:
        raise AcquisitionFailed(f"{source.name} is empty")
    return data
