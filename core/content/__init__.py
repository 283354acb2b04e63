# core/content/__init__.py
from .mime import get_mime_type
from .locator import ContentHandle, ContentLocator
from .streamer import ByteRange, parse_range_header, open_content, iter_file, stream_content

__all__ = [
    'get_mime_type',
    'ContentHandle',
    'ContentLocator',
    'ByteRange',
    'parse_range_header',
    'open_content',
    'iter_file',
    'stream_content',
]
