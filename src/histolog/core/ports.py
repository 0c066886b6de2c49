"""Port interfaces between the core and its collaborators.

The core consumes lines through ``LineSourcePort`` and drives interval
matching through ``IntervalMatcherPort``; it does not depend on how lines
are read or which matcher variant is in use.
"""

from collections.abc import Iterator
from decimal import Decimal
from typing import Protocol, runtime_checkable


@runtime_checkable
class LineSourcePort(Protocol):
    """Port for a sequence of text lines.

    Lines are yielded in input order without their line terminators and
    are consumed once. Examples: LineReader, or a plain list of strings.
    """

    def __iter__(self) -> Iterator[str]:
        """Iterate over the lines."""
        ...


@runtime_checkable
class IntervalMatcherPort(Protocol):
    """Port for single-pass enter/exit interval matching.

    Examples: StackMatcher, KeyedMatcher.
    """

    def feed(self, line: str) -> Decimal | None:
        """Process one line.

        Args:
            line: The next input line.

        Returns:
            The duration closed by this line, or None.
        """
        ...

    def finish(self) -> list[Decimal]:
        """End the scan.

        Returns:
            All durations in the order their exit events were seen.
        """
        ...
