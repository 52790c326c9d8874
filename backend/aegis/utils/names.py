import re

_WHITESPACE = re.compile(r"\s+")


def filter_name(name: str) -> str:
    """Normalize a display name into the lowercase, space-free form used for lookups."""
    return _WHITESPACE.sub("", name).lower()
