# core/content/mime.py
from pathlib import PurePath

DEFAULT_MIME_TYPE = 'application/octet-stream'

MIME_TYPES = {
    '.pdf': 'application/pdf',
    '.epub': 'application/epub+zip',
    '.mp3': 'audio/mpeg',
    '.mpeg': 'audio/mpeg',
    '.wav': 'audio/wav',
    '.aac': 'audio/aac',
    '.m4a': 'audio/mp4',
    '.mp4': 'audio/mp4',  # audiobooks usually ship in an mp4 container
    '.m4v': 'video/mp4',
    '.ogg': 'audio/ogg',
    '.flac': 'audio/flac',
    '.txt': 'text/plain',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.html': 'text/html',
}


def get_mime_type(file_reference: str | None) -> str:
    if not file_reference:
        return DEFAULT_MIME_TYPE
    return MIME_TYPES.get(PurePath(file_reference).suffix.lower(), DEFAULT_MIME_TYPE)
