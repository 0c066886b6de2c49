"""NDJSON encoder for histogram rows."""

import json
from collections.abc import Iterable, Mapping


def encode_rows(data: Mapping[str, int] | Iterable[tuple[str, int]]) -> str:
    """Encode label/count rows to newline-delimited JSON.

    Args:
        data: Label to count mapping, or (label, count) pairs.

    Returns:
        NDJSON string with one ``{"label": ..., "count": ...}`` object per
        line. Empty string if there are no rows.
    """
    items = data.items() if isinstance(data, Mapping) else data
    lines = []
    for label, count in items:
        lines.append(json.dumps({"label": label, "count": count}))

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
