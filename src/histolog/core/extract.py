"""Value extraction from single lines of text.

A pattern designates one capture group as "the value": a group with a
preferred name (``time`` or ``select``) when the pattern defines one,
otherwise the first capture group. Group 0, the whole match, is never used.
Lines that do not match yield None rather than raising.
"""

import re
from decimal import Decimal, InvalidOperation

TIME_GROUP = "time"
SELECT_GROUP = "select"

# Plain fixed-point text only: no exponents, grouping or surrounding space.
_DECIMAL_TEXT = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_decimal(text: str) -> Decimal | None:
    """Parse fixed-point decimal text exactly.

    Args:
        text: Candidate text such as "0001.02".

    Returns:
        The exact Decimal value, or None if text is not a plain decimal.
    """
    if not _DECIMAL_TEXT.fullmatch(text):
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def capture_count(pattern: re.Pattern[str]) -> int:
    """Number of capture groups in pattern, excluding the whole match."""
    return pattern.groups


def passes_filter(line: str, filter_pattern: re.Pattern[str] | None) -> bool:
    """Return True if there is no filter or the filter matches the line."""
    return filter_pattern is None or filter_pattern.search(line) is not None


def designated_group(match: re.Match[str], name: str) -> str | None:
    """Return the text of the value group of a match.

    The named group wins when it exists and took part in the match;
    otherwise group 1 is used. Patterns without capture groups have no value.
    """
    value = None
    if name in match.re.groupindex:
        value = match.group(name)
    if value is None and match.re.groups >= 1:
        value = match.group(1)
    return value


def select_from(line: str, selector: re.Pattern[str]) -> str | None:
    """Extract the ``select`` (or first) capture group from line."""
    match = selector.search(line)
    if match is None:
        return None
    return designated_group(match, SELECT_GROUP)


def time_from(line: str, time_pattern: re.Pattern[str]) -> Decimal | None:
    """Extract the ``time`` (or first) capture group from line as a Decimal.

    Returns None when the pattern does not match or the captured text is not
    a plain decimal number.
    """
    match = time_pattern.search(line)
    if match is None:
        return None
    text = designated_group(match, TIME_GROUP)
    if text is None:
        return None
    return parse_decimal(text)


class ValueExtractor:
    """Applies an optional filter and a value pattern to lines.

    The pattern and filter are compiled once by the caller and never
    modified, so one extractor can be shared across a whole scan.

    Args:
        pattern: Pattern holding the value capture group.
        group_name: Preferred group name, ``time`` or ``select``.
        filter_pattern: Optional pattern a line must match first.
    """

    def __init__(
        self,
        pattern: re.Pattern[str],
        group_name: str = TIME_GROUP,
        filter_pattern: re.Pattern[str] | None = None,
    ) -> None:
        self.pattern = pattern
        self.group_name = group_name
        self.filter_pattern = filter_pattern

    def passes(self, line: str) -> bool:
        """Return True if line gets past the filter."""
        return passes_filter(line, self.filter_pattern)

    def extract(self, line: str) -> str | None:
        """Return the captured text for line, or None."""
        if not self.passes(line):
            return None
        match = self.pattern.search(line)
        if match is None:
            return None
        return designated_group(match, self.group_name)

    def extract_decimal(self, line: str) -> Decimal | None:
        """Return the captured text for line parsed as a Decimal, or None."""
        text = self.extract(line)
        if text is None:
            return None
        return parse_decimal(text)
