"""Elapsed-time extraction from enter/exit events and adjacent timestamps.

Two matchers close intervals over a single pass of the input:

- ``StackMatcher`` keeps one LIFO stack of start times for the whole input.
- ``KeyedMatcher`` keeps one LIFO stack per key, the tuple of capture groups
  of the enter/exit patterns, so concurrently open intervals such as
  ``openat() = 3`` ... ``close(3)`` are paired correctly.

An exit always closes the most recently opened interval for its key.
Exits with nothing open are logged and dropped. Intervals still open at
end of input produce no duration.
"""

import logging
import re
from collections.abc import Iterable
from decimal import Decimal

from histolog.core.errors import ScopedMatchCountError
from histolog.core.extract import TIME_GROUP, ValueExtractor, capture_count
from histolog.core.ports import IntervalMatcherPort

logger = logging.getLogger(__name__)

Key = tuple[str | None, ...]


class OpenIntervalRegistry:
    """Start times of intervals that have been entered but not exited.

    Maps each key to a stack of start times. Stacks are created lazily on
    the first enter for a key.
    """

    def __init__(self) -> None:
        self._open: dict[Key, list[Decimal]] = {}

    def open(self, key: Key, start: Decimal) -> None:
        """Record the start of an interval for key."""
        self._open.setdefault(key, []).append(start)

    def close(self, key: Key) -> Decimal | None:
        """Remove and return the most recent start for key, or None."""
        starts = self._open.get(key)
        if not starts:
            return None
        return starts.pop()

    def pending(self, key: Key | None = None) -> int:
        """Number of open intervals, for one key or in total."""
        if key is not None:
            return len(self._open.get(key, ()))
        return sum(len(starts) for starts in self._open.values())

    def clear(self) -> int:
        """Discard every open interval and return how many there were."""
        discarded = self.pending()
        self._open.clear()
        return discarded


class StackMatcher:
    """Pairs enter and exit events on one global timeline.

    A line whose time cannot be extracted is ignored. Otherwise an
    enter match pushes the time; failing that, an exit match pops the most
    recent start and emits ``exit_time - start_time``.

    Args:
        time_pattern: Pattern capturing the timestamp of a line.
        enter_pattern: Pattern marking the start of an interval.
        exit_pattern: Pattern marking the end of an interval.
        filter_pattern: Optional pattern a line must match to be considered.
    """

    def __init__(
        self,
        time_pattern: re.Pattern[str],
        enter_pattern: re.Pattern[str],
        exit_pattern: re.Pattern[str],
        filter_pattern: re.Pattern[str] | None = None,
    ) -> None:
        self._times = ValueExtractor(time_pattern, TIME_GROUP, filter_pattern)
        self._enter = enter_pattern
        self._exit = exit_pattern
        self._starts: list[Decimal] = []
        self.durations: list[Decimal] = []
        self.unmatched = 0

    def feed(self, line: str) -> Decimal | None:
        """Open or close an interval for line and return any duration closed."""
        now = self._times.extract_decimal(line)
        if now is None:
            return None
        if self._enter.search(line):
            self._starts.append(now)
            return None
        if self._exit.search(line):
            if not self._starts:
                self.unmatched += 1
                logger.warning("not matched")
                return None
            duration = now - self._starts.pop()
            self.durations.append(duration)
            return duration
        return None

    def finish(self) -> list[Decimal]:
        """Drop intervals still open and return every duration, in exit order."""
        if self._starts:
            logger.debug("discarding %d unclosed intervals", len(self._starts))
            self._starts.clear()
        return self.durations


class KeyedMatcher:
    """Pairs enter and exit events that share the same captured key.

    The key of a match is the tuple of its capture groups. Both patterns
    are tested against every line with a time, so a single line may both
    open and close an interval.

    When the enter and exit patterns have identical source text, every
    match is treated as an enter and the exit test is skipped for that
    line. Such a configuration only ever accumulates open intervals.

    Patterns without capture groups share the empty key. Like
    StackMatcher, a line matching the enter pattern is then never tested
    against the exit pattern.

    Args:
        time_pattern: Pattern capturing the timestamp of a line.
        enter_pattern: Pattern marking the start of an interval.
        exit_pattern: Pattern marking the end of an interval. Must have the
            same number of capture groups as enter_pattern.
        filter_pattern: Optional pattern a line must match to be considered.

    Raises:
        ScopedMatchCountError: If the capture group counts differ.
    """

    def __init__(
        self,
        time_pattern: re.Pattern[str],
        enter_pattern: re.Pattern[str],
        exit_pattern: re.Pattern[str],
        filter_pattern: re.Pattern[str] | None = None,
    ) -> None:
        if capture_count(enter_pattern) != capture_count(exit_pattern):
            raise ScopedMatchCountError(enter_pattern.pattern, exit_pattern.pattern)
        self._times = ValueExtractor(time_pattern, TIME_GROUP, filter_pattern)
        self._enter = enter_pattern
        self._exit = exit_pattern
        self.symmetric = enter_pattern.pattern == exit_pattern.pattern
        self._enter_only = self.symmetric or capture_count(enter_pattern) == 0
        self.registry = OpenIntervalRegistry()
        self.durations: list[Decimal] = []
        self.unmatched = 0

    @staticmethod
    def _key(pattern: re.Pattern[str], line: str) -> Key | None:
        match = pattern.search(line)
        if match is None:
            return None
        return match.groups()

    def feed(self, line: str) -> Decimal | None:
        """Open or close an interval for line and return any duration closed."""
        now = self._times.extract_decimal(line)
        if now is None:
            return None

        enter_key = self._key(self._enter, line)
        if enter_key is not None:
            self.registry.open(enter_key, now)
            if self._enter_only:
                return None

        exit_key = self._key(self._exit, line)
        if exit_key is None:
            return None
        start = self.registry.close(exit_key)
        if start is None:
            self.unmatched += 1
            logger.warning("not matched %s", exit_key)
            return None
        duration = now - start
        self.durations.append(duration)
        return duration

    def finish(self) -> list[Decimal]:
        """Drop intervals still open and return every duration, in exit order."""
        discarded = self.registry.clear()
        if discarded:
            logger.debug("discarding %d unclosed intervals", discarded)
        return self.durations


def collect(matcher: IntervalMatcherPort, lines: Iterable[str]) -> list[Decimal]:
    """Feed every line to matcher and return its durations."""
    for line in lines:
        matcher.feed(line)
    return matcher.finish()


def scoped_durations(
    lines: Iterable[str],
    time_pattern: re.Pattern[str],
    enter_pattern: re.Pattern[str],
    exit_pattern: re.Pattern[str],
    filter_pattern: re.Pattern[str] | None = None,
) -> list[Decimal]:
    """Durations between correlated enter and exit lines.

    Patterns without capture groups use the global ``StackMatcher``;
    patterns with capture groups correlate by key with ``KeyedMatcher``.

    Args:
        lines: Input lines, read once.
        time_pattern: Pattern capturing the timestamp of a line.
        enter_pattern: Pattern marking the start of an interval.
        exit_pattern: Pattern marking the end of an interval.
        filter_pattern: Optional pattern a line must match to be considered.

    Returns:
        Durations in the order their exit lines appear.

    Raises:
        ScopedMatchCountError: If the patterns' capture group counts differ.
            Raised before any line is read.
    """
    if capture_count(enter_pattern) != capture_count(exit_pattern):
        raise ScopedMatchCountError(enter_pattern.pattern, exit_pattern.pattern)

    patterns = (time_pattern, enter_pattern, exit_pattern, filter_pattern)
    matcher: IntervalMatcherPort
    if capture_count(enter_pattern) == 0:
        matcher = StackMatcher(*patterns)
    else:
        matcher = KeyedMatcher(*patterns)
    return collect(matcher, lines)


def time_diffs(
    lines: Iterable[str],
    time_pattern: re.Pattern[str],
    filter_pattern: re.Pattern[str] | None = None,
) -> list[Decimal]:
    """Differences between each timestamp and the one before it.

    Args:
        lines: Input lines, read once.
        time_pattern: Pattern capturing the timestamp of a line.
        filter_pattern: Optional pattern a line must match to be considered.

    Returns:
        One difference per timestamped line after the first, in input order.
        Differences are negative where timestamps go backwards.
    """
    extractor = ValueExtractor(time_pattern, TIME_GROUP, filter_pattern)
    diffs: list[Decimal] = []
    previous: Decimal | None = None
    for line in lines:
        now = extractor.extract_decimal(line)
        if now is None:
            continue
        if previous is not None:
            diffs.append(now - previous)
        previous = now
    return diffs
