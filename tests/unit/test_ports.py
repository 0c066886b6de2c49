"""Tests for port interfaces."""

import io
import re

import pytest

from histolog.adapters.input import LineReader
from histolog.core.intervals import KeyedMatcher, StackMatcher
from histolog.core.ports import IntervalMatcherPort, LineSourcePort


class TestLineSourcePort:
    """Tests for LineSourcePort protocol."""

    @pytest.mark.core
    def test_list_satisfies_protocol(self) -> None:
        """A plain list of strings is a line source."""
        assert isinstance(["a", "b"], LineSourcePort)

    @pytest.mark.core
    def test_line_reader_satisfies_protocol(self) -> None:
        """LineReader implements LineSourcePort."""
        assert isinstance(LineReader(stdin=io.StringIO("")), LineSourcePort)

    @pytest.mark.core
    def test_non_iterable_does_not_satisfy(self) -> None:
        """Objects without __iter__ are not line sources."""
        assert not isinstance(42, LineSourcePort)


class TestIntervalMatcherPort:
    """Tests for IntervalMatcherPort protocol."""

    @pytest.mark.core
    def test_stack_matcher_satisfies_protocol(self) -> None:
        """StackMatcher implements IntervalMatcherPort."""
        matcher = StackMatcher(
            re.compile(r"^(\d+\.\d+)"), re.compile("->"), re.compile("<-")
        )
        assert isinstance(matcher, IntervalMatcherPort)

    @pytest.mark.core
    def test_keyed_matcher_satisfies_protocol(self) -> None:
        """KeyedMatcher implements IntervalMatcherPort."""
        matcher = KeyedMatcher(
            re.compile(r"^(\d+\.\d+)"), re.compile("->(\\w+)"), re.compile("<-(\\w+)")
        )
        assert isinstance(matcher, IntervalMatcherPort)

    @pytest.mark.core
    def test_list_does_not_satisfy(self) -> None:
        """A list has no feed/finish."""
        assert not isinstance([], IntervalMatcherPort)
