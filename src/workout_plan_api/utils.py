"""Utility functions."""
import re
from typing import List, Optional

_LIST_SEPARATOR = re.compile(r"[,/]")


def to_int(s: Optional[str]) -> Optional[int]:
    """Convert string to int, returning None if conversion fails."""
    try:
        return int(s) if s is not None else None
    except (TypeError, ValueError):
        return None


def split_list(text: str) -> List[str]:
    """Split 'Chest, Back / Shoulders' into trimmed pieces."""
    return [piece.strip() for piece in _LIST_SEPARATOR.split(text)]


def label(name: str) -> str:
    """
    Regex source for a case-insensitive field label such as 'Sets:'.

    Matches the label as a whole word, tolerates markdown bold around it
    ('**Sets:**') and an optional trailing colon, then any spaces or tabs
    on the same line.
    """
    return rf"\b(?:{name})\b\**:?\**[ \t]*"


def name_hash(name: str) -> int:
    """Sum of the UTF-16 code units of a name."""
    data = name.encode("utf-16-le")
    return sum(int.from_bytes(data[i:i + 2], "little") for i in range(0, len(data), 2))
