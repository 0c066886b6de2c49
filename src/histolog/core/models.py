"""Core domain models for bucketed distributions."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Bucket:
    """A contiguous numeric range and the number of values assigned to it.

    Attributes:
        low: Inclusive lower bound.
        high: Upper bound. Exclusive unless ``closed`` is set.
        count: Number of values assigned to the bucket.
        closed: True for the last bucket, whose upper bound is inclusive.
    """

    low: Decimal
    high: Decimal
    count: int = 0
    closed: bool = False

    @property
    def midpoint(self) -> Decimal:
        """Centre of the range."""
        return (self.low + self.high) / 2

    def contains(self, value: Decimal) -> bool:
        """Return True if value falls inside this bucket's range."""
        if value < self.low:
            return False
        if self.closed:
            return value <= self.high
        return value < self.high


@dataclass(frozen=True)
class BucketLayout:
    """Uniform partition of an observed value range.

    Attributes:
        minimum: Lower bound of the first bucket.
        maximum: Upper bound of the last bucket.
        delta: Width of each bucket (zero for a collapsed range).
        count: Number of buckets, always at least one.
    """

    minimum: Decimal
    maximum: Decimal
    delta: Decimal
    count: int

    def bounds(self, index: int) -> tuple[Decimal, Decimal]:
        """Return the (low, high) bounds of the bucket at index.

        The last bucket's upper bound is clamped to ``maximum``.
        """
        if not 0 <= index < self.count:
            raise IndexError(f"bucket index {index} out of range 0..{self.count - 1}")
        low = self.minimum + self.delta * index
        if index == self.count - 1:
            return low, self.maximum
        return low, self.minimum + self.delta * (index + 1)

