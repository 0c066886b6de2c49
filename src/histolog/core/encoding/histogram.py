"""ASCII bar chart rendering of label/count rows.

Bar lengths are computed with integer arithmetic only so that output is
identical on every platform.
"""

from collections.abc import Iterable, Mapping

from histolog.core.config import RenderConfig
from histolog.core.errors import LabelsTooWideError, NoDataError


def scale_value(value: int, low: int, high: int, length: int) -> int:
    """Scale value from the range [low, high] onto [0, length].

    The value is clamped to the range first. Results are rounded to the
    nearest integer by adding half the divisor before dividing.

    Args:
        value: Value to scale.
        low: Value drawn with length 0.
        high: Value drawn with the full length.
        length: Number of characters available.

    Returns:
        Scaled length between 0 and length inclusive.
    """
    span = high - low
    if span <= 0:
        return 0
    value = min(max(value, low), high)
    return ((value - low) * length + span // 2) // span


Rows = Mapping[str, int] | Iterable[tuple[str, int]]


def _rows(data: Rows) -> list[tuple[str, int]]:
    if isinstance(data, Mapping):
        return list(data.items())
    return list(data)


def draw_histogram(
    data: Rows,
    config: RenderConfig | None = None,
) -> str:
    """Draw one bar per label.

    Each line is the right-justified label, optionally ``: count``, a space
    and the bar. When no count is negative the scale starts at zero: a count
    of 0 draws no bar, and any positive count draws at least one character.

    Args:
        data: Label to count mapping, or (label, count) pairs, in display order.
        config: Width, count column and bar character settings.

    Returns:
        The rendered lines joined by newlines, without a trailing newline.

    Raises:
        NoDataError: If data is empty.
        LabelsTooWideError: If the label and count columns fill the width.
    """
    config = config or RenderConfig()
    rows = _rows(data)
    if not rows:
        raise NoDataError()

    label_width = min(max(len(label) for label, _ in rows), config.width // 2)
    count_width = 0
    used = label_width + 1
    if config.show_counts:
        count_width = max(len(str(count)) for _, count in rows)
        used += count_width + 2
    bar_width = config.width - used
    if bar_width <= 0:
        raise LabelsTooWideError(label_width, config.width)

    counts = [count for _, count in rows]
    low, high = min(counts), max(counts)
    zero_based = low >= 0
    if zero_based:
        low = 0

    lines = []
    for label, count in rows:
        length = scale_value(count, low, high, bar_width)
        if zero_based and count > 0:
            length = max(length, 1)
        line = label[:label_width].rjust(label_width)
        if config.show_counts:
            line += f": {count:>{count_width}}"
        lines.append(f"{line} {config.bar_char * length}")
    return "\n".join(lines)
