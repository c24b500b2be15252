import re
from typing import Optional

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# Ids are SQLite INTEGERs, i.e. signed 64-bit
MIN_ID = -2**63
MAX_ID = 2**63 - 1


class BookIdValidator:
    """Parses book ids taken from URL path segments."""

    @staticmethod
    def parse_id(raw: Optional[str]) -> int:
        # int() alone would also take " 7 " and "1_000"
        if raw is None or not _ID_PATTERN.fullmatch(raw):
            raise ValueError(f"Invalid ID: {raw!r}")
        value = int(raw)
        if not MIN_ID <= value <= MAX_ID:
            raise ValueError(f"ID out of range: {raw!r}")
        return value


class TextValidator:
    """Basic text checks for book fields."""

    @staticmethod
    def _is_non_blank(text: Optional[str]) -> bool:
        return text is not None and bool(text.strip())

    @staticmethod
    def validate_name(name: Optional[str]) -> bool:
        return TextValidator._is_non_blank(name)

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        return TextValidator._is_non_blank(author)
