"""Filename and string helpers."""


def replace_ext(filename: str, ext: str) -> str:
    """Replace the extension of ``filename``, or add one if none is present.

    An empty ``ext`` strips the extension.
    """
    dot = filename.rfind(".")
    stem = filename[:dot] if dot != -1 else filename
    return f"{stem}.{ext}" if ext else stem


def begins_with(s1: str, s2: str) -> bool:
    """Case-insensitively test whether ``s1`` starts with ``s2``."""
    return s1.lower().startswith(s2.lower())


def ends_with(s1: str, s2: str) -> bool:
    """Case-insensitively test whether ``s1`` ends with ``s2``."""
    return s1.lower().endswith(s2.lower())