"""Uniform bucketing of decimal values.

The observed range ``[min, max]`` is split into equal-width buckets, either
a fixed number of them or buckets of a fixed width whose edges are aligned
to multiples of that width. Buckets are half-open ``[low, high)`` except the
last, which is closed so the maximum value always lands in a bucket.
Empty buckets are kept: they show gaps in the distribution.

Arithmetic runs with enough decimal precision for the inputs, so values
with more significant digits than the default context never collapse
bucket bounds onto each other.
"""

from collections.abc import Iterable, Sequence
from contextlib import AbstractContextManager
from decimal import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    getcontext,
    localcontext,
)

from histolog.core.config import BucketConfig
from histolog.core.errors import DuplicateLabelError
from histolog.core.models import Bucket, BucketLayout

# Extra fractional digits kept in labels of count-mode buckets.
_LABEL_EXTRA_PLACES = 2
# Digits kept beyond the span of the inputs and the bucket index.
_GUARD_DIGITS = 2


def _floor(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_FLOOR)


def _ceil(value: Decimal) -> Decimal:
    return value.to_integral_value(rounding=ROUND_CEILING)


def _places(value: Decimal) -> int:
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent < 0:
        return -exponent
    return 0


def _exponent(value: Decimal) -> int:
    exponent = value.as_tuple().exponent
    return exponent if isinstance(exponent, int) else 0


def _working_context(
    values: Iterable[Decimal], count: int = 1
) -> AbstractContextManager[Context]:
    """Decimal context wide enough to add, subtract and split values exactly.

    Precision covers every digit from the largest magnitude down to the
    finest exponent among values, plus the digits of count. It never drops
    below the current context's precision.
    """
    operands = list(values)
    context = getcontext().copy()
    if operands:
        top = max(value.adjusted() for value in operands)
        span = top - min(map(_exponent, operands)) + 1
        context.prec = max(context.prec, span + len(str(count)) + _GUARD_DIGITS)
    return localcontext(context)


def _layout_context(layout: BucketLayout) -> AbstractContextManager[Context]:
    values = (layout.minimum, layout.maximum, layout.delta)
    return _working_context(values, layout.count)


def format_decimal(value: Decimal) -> str:
    """Render a Decimal as plain fixed-point text, never in exponent form."""
    return format(value, "f")


class Buckets:
    """Partitions a list of decimal values into a bucket distribution.

    Args:
        config: Bucket count or width and labelling. Defaults to 80 buckets
            labelled by upper bound.
    """

    def __init__(self, config: BucketConfig | None = None) -> None:
        self.config = config or BucketConfig()

    def analyse(self, values: Sequence[Decimal]) -> BucketLayout:
        """Work out the bucket layout for values.

        Raises:
            ValueError: If values is empty.
        """
        if not values:
            raise ValueError("cannot bucket an empty list of values")
        minimum = min(values)
        maximum = max(values)

        delta = self.config.delta
        operands = [minimum, maximum] if delta is None else [minimum, maximum, delta]
        with _working_context(operands, self.config.count):
            if delta is not None:
                minimum = _floor(minimum / delta) * delta
                maximum = _ceil(maximum / delta) * delta
                count = int(_floor((maximum - minimum) / delta))
            else:
                count = self.config.count
                delta = (maximum - minimum) / count

            if count < 1 or maximum == minimum:
                return BucketLayout(minimum, maximum, maximum - minimum, 1)
        return BucketLayout(minimum, maximum, delta, count)

    @staticmethod
    def index_of(layout: BucketLayout, value: Decimal) -> int:
        """Index of the bucket value belongs to.

        The computed index is corrected against the bucket bounds so that
        decimal rounding of the width can never push a value past the last
        bucket or into a neighbour.
        """
        if layout.count == 1 or layout.delta == 0:
            return 0
        with _layout_context(layout):
            index = int(_floor((value - layout.minimum) / layout.delta))
            last = layout.count - 1
            index = min(max(index, 0), last)
            while index > 0 and value < layout.bounds(index)[0]:
                index -= 1
            while index < last and value >= layout.bounds(index)[1]:
                index += 1
        return index

    def generate(self, values: Sequence[Decimal]) -> list[Bucket]:
        """Count values into buckets.

        Returns:
            Every bucket in ascending order, including empty ones. The bucket
            counts sum to ``len(values)``.

        Raises:
            ValueError: If values is empty.
        """
        layout = self.analyse(values)
        counts = [0] * layout.count
        for value in values:
            counts[self.index_of(layout, value)] += 1

        last = layout.count - 1
        buckets = []
        with _layout_context(layout):
            for index, count in enumerate(counts):
                low, high = layout.bounds(index)
                buckets.append(Bucket(low, high, count, closed=index == last))
        return buckets

    def label(self, bucket: Bucket, places: int | None = None) -> str:
        """Label text for a bucket, its upper bound or midpoint.

        Args:
            bucket: The bucket to label.
            places: Round labels with more fractional digits than this.
        """
        operands = [bucket.low, bucket.high]
        if places is not None:
            operands.append(Decimal(1).scaleb(-places))
        with _working_context(operands):
            value = bucket.midpoint if self.config.label == "midpoint" else bucket.high
            if places is not None and _places(value) > places:
                value = value.quantize(
                    Decimal(1).scaleb(-places), rounding=ROUND_HALF_EVEN
                )
        return format_decimal(value)

    def counts(self, values: Sequence[Decimal]) -> dict[str, int]:
        """Bucket values and key the counts by label, in ascending order.

        Raises:
            ValueError: If values is empty.
            DuplicateLabelError: If two buckets would share a label.
        """
        buckets = self.generate(values)
        labels = [self.label(bucket) for bucket in buckets]
        if self.config.delta is None:
            places = max(_places(value) for value in values) + _LABEL_EXTRA_PLACES
            rounded = [self.label(bucket, places) for bucket in buckets]
            # Keep exact labels if rounding would merge neighbouring buckets.
            if len(set(rounded)) == len(rounded):
                labels = rounded

        counts: dict[str, int] = {}
        for label, bucket in zip(labels, buckets):
            if label in counts:
                raise DuplicateLabelError(label)
            counts[label] = bucket.count
        return counts
