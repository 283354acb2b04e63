# core/content/locator.py
import logging
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import anyio

from core.errors import NotFoundError, SecurityViolationError
from .mime import get_mime_type

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentHandle:
    """A readable file inside the content root."""
    path: Path
    size: int
    media_type: str


class ContentLocator:
    """Maps product file references onto files under a single content root.

    References are resolved (symlinks included) before the containment check,
    so neither ``..`` segments, absolute paths nor links can reach outside
    the root.
    """

    def __init__(self, content_root: str | Path):
        self.content_root = Path(content_root)

    async def resolve(self, file_reference: Optional[str]) -> Path:
        """Canonical absolute path for a reference, or SecurityViolationError."""
        if not file_reference:
            raise NotFoundError("File not found")

        root = Path(str(await anyio.Path(self.content_root).resolve()))
        try:
            candidate = Path(str(await (anyio.Path(root) / file_reference).resolve()))
        except (OSError, ValueError) as e:
            logger.warning(f"Unresolvable file reference {file_reference!r}: {e}")
            raise NotFoundError("File not found") from e

        if not candidate.is_relative_to(root):
            logger.error(f"Blocked file reference outside content root: {file_reference!r} -> {candidate}")
            raise SecurityViolationError()
        return candidate

    async def locate(self, file_reference: Optional[str]) -> ContentHandle:
        """Resolve a reference to an existing regular file.

        Raises:
            SecurityViolationError: the reference escapes the content root
            NotFoundError: nothing readable exists at the resolved path
        """
        path = await self.resolve(file_reference)
        try:
            file_stat = await anyio.Path(path).stat()
        except OSError as e:
            raise NotFoundError("File not found") from e

        if not stat.S_ISREG(file_stat.st_mode):
            raise NotFoundError("File not found")

        return ContentHandle(
            path=path,
            size=file_stat.st_size,
            media_type=get_mime_type(file_reference),
        )
