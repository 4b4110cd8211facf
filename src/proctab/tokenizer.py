"""Positional field tokenizer for /proc text files.

Every parser in proctab walks its buffer with these helpers. They are plain
functions: the caller owns the buffer and the position, and each call returns
the new position instead of moving a shared cursor.
"""

from typing import Optional, Tuple

from .exceptions import FieldNotFound

# Maximum number of characters copied out of a single field.
INTEGER_LEN = 10
BIGINT_LEN = 20
FLOAT_LEN = 20
COMM_LEN = 1024
FULLCOMM_LEN = 1024


def _bounded(value: str, limit: Optional[int]) -> str:
    if limit is not None and len(value) > limit:
        return value[:limit]
    return value


def next_field(
    buffer: str,
    pos: int,
    delim: str = " ",
    limit: Optional[int] = None,
    name: str = "field",
) -> Tuple[str, int]:
    """
    Read the field starting at ``pos`` up to the next ``delim``.

    Args:
        buffer: Text being parsed
        pos: Index where the field starts
        delim: Character terminating the field
        limit: Maximum length of the returned copy (longer fields are truncated)
        name: Field name used in the error message

    Returns:
        Tuple of (field text, index just past the delimiter)

    Raises:
        FieldNotFound: If ``delim`` does not occur before the end of ``buffer``
    """
    end = buffer.find(delim, pos)
    if end == -1:
        raise FieldNotFound(name)
    return _bounded(buffer[pos:end], limit), end + 1


def next_tail_field(
    buffer: str,
    pos: int,
    limit: Optional[int] = None,
    name: str = "field",
) -> Tuple[str, int]:
    """
    Read a field that may or may not be the last one on its line.

    The number of trailing fields in several /proc files depends on the
    kernel version, so the delimiter is chosen by probing: a space if one
    is left before the end of the line, otherwise the line end itself
    (a newline, or the end of the buffer).

    Raises:
        FieldNotFound: If nothing is left on the line
    """
    line_end = buffer.find("\n", pos)
    if line_end == -1:
        line_end = len(buffer)

    if buffer.find(" ", pos, line_end) != -1:
        return next_field(buffer, pos, " ", limit, name)

    if pos >= line_end:
        raise FieldNotFound(name)
    return _bounded(buffer[pos:line_end], limit), line_end + 1


def skip_token(buffer: str, pos: int) -> int:
    """Advance past the next whitespace-delimited token without copying it."""
    length = len(buffer)
    while pos < length and buffer[pos].isspace():
        pos += 1
    while pos < length and not buffer[pos].isspace():
        pos += 1
    # Eat the separating spaces so the next positional read starts on a token
    while pos < length and buffer[pos] == " ":
        pos += 1
    return pos


def has_more_fields(buffer: str, pos: int) -> bool:
    """Check whether the line being read still has a field at ``pos``."""
    if pos >= len(buffer):
        return False
    if pos > 0 and buffer[pos - 1] == "\n":
        return False
    return not buffer[pos].isspace()
