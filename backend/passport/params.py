from typing import Optional

from passport.exceptions import BadRequestError


def parse_id(value: Optional[str], name: str) -> int:
    """Parse a positive integer id from a query string value."""
    text = value.strip() if value is not None else ""
    # str.isdigit() also accepts digits int() cannot parse, e.g. "²"
    if not (text.isascii() and text.isdigit()) or int(text) < 1:
        raise BadRequestError(f"Valid {name} required")
    return int(text)


def parse_optional_int(value: Optional[str], name: str) -> Optional[int]:
    if value is None or value == "":
        return None
    return parse_id(value, name)
