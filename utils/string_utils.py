"""String utility functions for textops.

This module provides pure helpers for abbreviating, extracting initials,
swapping case and word wrapping text. None of them keep state between
calls, so they are safe to use from any thread.
"""

import logging
import os
import re
import unicodedata
from typing import Iterable, Optional, Set


logger = logging.getLogger(__name__)

INDEX_NOT_FOUND = -1
EMPTY = ''
NON_BREAKING_SPACES = frozenset('\u00a0\u2007\u202f\u0085')


class InvalidArgumentError(ValueError):
    """Exception raised when a function receives inconsistent bounds."""
    pass


def abbreviate(
    text: Optional[str],
    lower: int,
    upper: int,
    suffix: Optional[str] = None,
) -> Optional[str]:
    """Abbreviate a string at the first space after a lower limit.

    The text is cut at the first space found at or after ``lower``, but
    never past ``upper``. The suffix is appended whenever a space was
    found, or when the cut actually dropped characters.

    Args:
        text: The string to abbreviate.
        lower: Position from which to look for a space.
        upper: Maximum number of characters kept, or -1 for no limit.
        suffix: String appended to the abbreviated text.

    Returns:
        The abbreviated string, or ``text`` itself if it is None or empty.

    Raises:
        InvalidArgumentError: If ``upper`` is below -1, or below ``lower``
            while not -1.
    """
    if upper < -1:
        raise InvalidArgumentError("upper value cannot be less than -1")
    if upper < lower and upper != -1:
        raise InvalidArgumentError("upper value is less than lower value")
    if _is_empty(text):
        return text

    length = len(text)
    if lower > length:
        lower = length
    if upper == -1 or upper > length:
        upper = length

    index = _index_of(text, ' ', lower)
    if index == INDEX_NOT_FOUND:
        result = text[:upper]
        if upper != length:
            result += _default_string(suffix)
        return result

    return text[:min(index, upper)] + _default_string(suffix)


def initials(
    text: Optional[str],
    delimiters: Optional[Iterable[str]] = None,
) -> Optional[str]:
    """Extract the first character of every word.

    Args:
        text: The string to take initials from.
        delimiters: Characters separating words. Whitespace is used when
            None; an explicit set replaces whitespace entirely.

    Returns:
        The initials, ``text`` itself if it is None or empty, or an empty
        string if ``delimiters`` is given but empty.
    """
    if _is_empty(text):
        return text

    if delimiters is None:
        is_delimiter = _is_whitespace
    else:
        delimiter_set = _generate_delimiter_set(delimiters)
        if not delimiter_set:
            return EMPTY
        is_delimiter = delimiter_set.__contains__

    result = []
    last_was_gap = True
    for char in text:
        if is_delimiter(char):
            last_was_gap = True
        elif last_was_gap:
            result.append(char)
            last_was_gap = False

    return EMPTY.join(result)


def swap_case(text: Optional[str]) -> Optional[str]:
    """Swap the case of every letter, title-casing the start of each word.

    Upper and title case letters become lower case. Lower case letters
    become title case right after whitespace (or at the start) and upper
    case elsewhere.

    Args:
        text: The string to transform.

    Returns:
        The case-swapped string, or ``text`` itself if it is None or empty.
    """
    if _is_empty(text):
        return text

    result = []
    whitespace = True
    for char in text:
        if char.isupper() or char.istitle():
            result.append(_to_lower(char))
            whitespace = False
        elif char.islower():
            if whitespace:
                result.append(_to_title(char))
                whitespace = False
            else:
                result.append(_to_upper(char))
        else:
            whitespace = _is_whitespace(char)
            result.append(char)

    return EMPTY.join(result)


def wrap(
    text: Optional[str],
    wrap_length: int,
    newline: Optional[str] = None,
    wrap_long_words: bool = False,
    wrap_on: Optional[str] = None,
) -> Optional[str]:
    """Wrap text so that lines do not exceed a given width.

    Each line is broken at the last match of ``wrap_on`` that fits in the
    line; the matched character itself is dropped. A word longer than the
    width is split when ``wrap_long_words`` is True, otherwise it is left
    whole and the line runs on to the next break point.

    Args:
        text: The text to wrap.
        wrap_length: Maximum line width, at least 1.
        newline: Line separator to insert. Defaults to ``os.linesep``.
        wrap_long_words: Whether to split words longer than ``wrap_length``.
        wrap_on: Regular expression matching break points. Defaults to a
            single space when None or blank.

    Returns:
        The wrapped text, or None if ``text`` is None.
    """
    if text is None:
        return None
    if newline is None:
        newline = os.linesep
    if wrap_length < 1:
        wrap_length = 1
    if _is_blank(wrap_on):
        wrap_on = ' '

    logger.debug(
        f"Wrapping {len(text)} chars at width {wrap_length} on {wrap_on!r}"
    )

    pattern = re.compile(wrap_on)
    input_length = len(text)
    offset = 0
    wrapped = []
    # Width of the last match consumed at a window start; -1 when unset.
    matcher_size = -1

    while offset < input_length:
        space_to_wrap_at = -1
        window = text[offset:min(offset + wrap_length + 1, input_length)]
        matches = pattern.finditer(window)
        match = next(matches, None)
        if match is not None:
            if match.start() == 0:
                matcher_size = match.end()
                if matcher_size != 0:
                    offset += match.end()
                    continue
                offset += 1
            space_to_wrap_at = match.start() + offset

        if input_length - offset <= wrap_length:
            break

        for match in matches:
            space_to_wrap_at = match.start() + offset

        if space_to_wrap_at >= offset:
            wrapped.append(text[offset:space_to_wrap_at])
            wrapped.append(newline)
            offset = space_to_wrap_at + 1

        elif wrap_long_words:
            if matcher_size == 0:
                offset -= 1
            wrapped.append(text[offset:offset + wrap_length])
            wrapped.append(newline)
            offset += wrap_length
            matcher_size = -1

        else:
            match = pattern.search(text[offset + wrap_length:])
            if match is not None:
                matcher_size = match.end() - match.start()
                space_to_wrap_at = match.start() + offset + wrap_length

            if matcher_size == 0 and offset != 0:
                offset -= 1

            if space_to_wrap_at >= 0:
                wrapped.append(text[offset:space_to_wrap_at])
                wrapped.append(newline)
                offset = space_to_wrap_at + 1
            else:
                wrapped.append(text[offset:])
                offset = input_length
                matcher_size = -1

    if matcher_size == 0 and offset < input_length:
        offset -= 1

    wrapped.append(text[offset:])
    return EMPTY.join(wrapped)


def _to_lower(char: str) -> str:
    """Lower-case one character without changing the character count.

    A mapping that adds combining marks ('İ' -> 'i̇') keeps its base letter.
    """
    mapped = char.lower()
    if len(mapped) > 1 and all(unicodedata.combining(mark) for mark in mapped[1:]):
        return mapped[0]
    return mapped if len(mapped) == 1 else char


def _to_upper(char: str) -> str:
    """Upper-case one character, using its title case when upper expands."""
    mapped = char.upper()
    if len(mapped) > 1:
        mapped = char.title()
    return mapped if len(mapped) == 1 else char


def _to_title(char: str) -> str:
    mapped = char.title()
    return mapped if len(mapped) == 1 else char


def _is_whitespace(char: str) -> bool:
    """Whitespace test that leaves out the no-break spaces and NEL."""
    return char.isspace() and char not in NON_BREAKING_SPACES


def _generate_delimiter_set(delimiters: Iterable[str]) -> Set[str]:
    """Build the set of delimiter characters.

    Args:
        delimiters: A string of delimiter characters, or an iterable of
            such strings.

    Returns:
        Every individual character found in ``delimiters``.
    """
    return {char for delimiter in delimiters for char in delimiter}


def _is_empty(text: Optional[str]) -> bool:
    return text is None or len(text) == 0


def _is_blank(text: Optional[str]) -> bool:
    return _is_empty(text) or all(_is_whitespace(char) for char in text)


def _default_string(text: Optional[str]) -> str:
    return EMPTY if text is None else text


def _index_of(text: Optional[str], search: Optional[str], start: int) -> int:
    """Find ``search`` in ``text`` from ``start``, or INDEX_NOT_FOUND.

    A negative ``start`` searches from the beginning instead of counting
    from the end.
    """
    if text is None or search is None:
        return INDEX_NOT_FOUND
    return text.find(search, max(start, 0))
