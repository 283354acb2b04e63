# core/utils/titles.py
import re

_PARENTHETICAL = re.compile(r'\(.*\)')
_TRADEMARKS = re.compile(r'[™®]')
_WHITESPACE = re.compile(r'\s+')


def normalize_title(title: str | None) -> str:
    """Normalize a title for fuzzy comparison.

    Drops parenthetical suffixes ("Origin Code (Hindi Edition)"), trademark
    glyphs and repeated whitespace, then casefolds.
    """
    if not title:
        return ''
    text = _PARENTHETICAL.sub('', title)
    text = _TRADEMARKS.sub('', text)
    text = _WHITESPACE.sub(' ', text)
    return text.strip().casefold()
