"""Frequency counting of whole lines or of values selected from them."""

import logging
import re
from collections import Counter
from collections.abc import Iterable

from histolog.core.extract import SELECT_GROUP, ValueExtractor, passes_filter

logger = logging.getLogger(__name__)


def simple_counts(
    lines: Iterable[str],
    filter_pattern: re.Pattern[str] | None = None,
) -> dict[str, int]:
    """Count occurrences of each distinct line.

    Args:
        lines: Lines to count. Each line is its own label.
        filter_pattern: Optional pattern; lines it does not match are skipped.

    Returns:
        Mapping of label to count, ordered by label.
    """
    counts: Counter[str] = Counter()
    for line in lines:
        if passes_filter(line, filter_pattern):
            counts[line] += 1
    logger.debug("counted %d distinct labels", len(counts))
    return dict(sorted(counts.items()))


def select_counts(lines: Iterable[str], selector: re.Pattern[str]) -> dict[str, int]:
    """Count occurrences of the value selected from each line.

    Lines the selector does not match contribute nothing.

    Args:
        lines: Lines to scan.
        selector: Pattern whose ``select`` (or first) group is the label.

    Returns:
        Mapping of selected label to count, ordered by label.
    """
    extractor = ValueExtractor(selector, group_name=SELECT_GROUP)
    selected = (extractor.extract(line) for line in lines)
    return simple_counts(label for label in selected if label is not None)
