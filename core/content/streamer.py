# core/content/streamer.py
import logging
import os
import re
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional, Tuple

import anyio
import anyio.to_thread
from anyio import AsyncFile
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.errors import NotFoundError, RangeNotSatisfiableError
from .locator import ContentHandle

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

_RANGE_PATTERN = re.compile(r'^\s*bytes\s*=\s*(\d+)\s*-\s*(\d*)\s*$', re.IGNORECASE)


@dataclass(frozen=True)
class ByteRange:
    start: int
    end: int  # inclusive

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    def content_range(self, file_size: int) -> str:
        return f"bytes {self.start}-{self.end}/{file_size}"


def parse_range_header(header: Optional[str], file_size: int) -> Optional[ByteRange]:
    """Parse a single ``bytes=<start>-<end>`` range against a file size.

    A missing end means "to the last byte"; an end past the last byte is
    clamped. Suffix ranges, multiple ranges, non-numeric bounds, start > end
    and start >= file_size are all rejected rather than served in full.

    Args:
        header: Raw Range header value, or None
        file_size: Size of the file in bytes

    Returns:
        The requested ByteRange, or None when no Range header was sent

    Raises:
        RangeNotSatisfiableError: the header is malformed or out of bounds
    """
    if header is None or not header.strip():
        return None

    match = _RANGE_PATTERN.match(header)
    if not match:
        raise RangeNotSatisfiableError(file_size, f"Malformed range header: {header}")

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) else file_size - 1

    if start > end:
        raise RangeNotSatisfiableError(file_size, "Range start is after range end")
    if start >= file_size:
        raise RangeNotSatisfiableError(file_size, "Range start is beyond the end of the file")

    return ByteRange(start=start, end=min(end, file_size - 1))


async def open_content(handle: ContentHandle) -> Tuple[AsyncFile, int]:
    """Open a located file and read its current size from the open descriptor.

    The file may have been removed or replaced since it was located, so the
    size reported by locate() is not trusted for response headers.

    Raises:
        NotFoundError: the file can no longer be opened
    """
    try:
        content_file = await anyio.open_file(handle.path, 'rb')
    except OSError as e:
        logger.warning(f"{handle.path} disappeared before streaming: {e}")
        raise NotFoundError("File not found") from e

    try:
        file_stat = await anyio.to_thread.run_sync(os.fstat, content_file.wrapped.fileno())
    except OSError as e:
        await content_file.aclose()
        raise NotFoundError("File not found") from e
    return content_file, file_stat.st_size


async def iter_file(content_file: AsyncFile, start: int, length: int, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield ``length`` bytes of an open file starting at ``start``.

    The file is closed when iteration ends or is cancelled (client
    disconnect).
    """
    try:
        await content_file.seek(start)
        remaining = length
        while remaining > 0:
            chunk = await content_file.read(min(chunk_size, remaining))
            if not chunk:
                logger.warning(f"{content_file.name} shrank while streaming; {remaining} bytes short")
                break
            remaining -= len(chunk)
            yield chunk
    finally:
        await content_file.aclose()


async def stream_content(
    handle: ContentHandle,
    range_header: Optional[str] = None,
    *,
    allow_ranges: bool = False,
    disposition: Optional[str] = 'inline',
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> StreamingResponse:
    """Build the response serving a located file.

    The file is opened and the range validated before the response object
    exists, so a vanished file or a bad range produces an error response
    instead of success headers over an empty or half-written body.

    Args:
        handle: The located file
        range_header: Raw Range header, only honoured when allow_ranges is set
        allow_ranges: Whether this endpoint supports partial content
        disposition: Content-Disposition value, or None to omit it
        chunk_size: Read size per chunk

    Returns:
        A 200 or 206 StreamingResponse with caching disabled
    """
    headers: Dict[str, str] = {'Cache-Control': 'no-store'}
    if disposition:
        headers['Content-Disposition'] = disposition
    if allow_ranges:
        headers['Accept-Ranges'] = 'bytes'

    content_file, file_size = await open_content(handle)
    try:
        byte_range = parse_range_header(range_header, file_size) if allow_ranges else None
    except RangeNotSatisfiableError:
        await content_file.aclose()
        raise

    # Also closes the file when the body is never iterated
    close_file = BackgroundTask(content_file.aclose)

    if byte_range is None:
        headers['Content-Length'] = str(file_size)
        return StreamingResponse(
            iter_file(content_file, 0, file_size, chunk_size),
            status_code=200,
            media_type=handle.media_type,
            headers=headers,
            background=close_file,
        )

    headers['Content-Range'] = byte_range.content_range(file_size)
    headers['Content-Length'] = str(byte_range.length)
    return StreamingResponse(
        iter_file(content_file, byte_range.start, byte_range.length, chunk_size),
        status_code=206,
        media_type=handle.media_type,
        headers=headers,
        background=close_file,
    )
