"""Render width detection."""

import os
import shutil
from collections.abc import Mapping

from histolog.core.config import DEFAULT_WIDTH
from histolog.core.errors import ConfigurationError


def resolve_width(
    explicit: int | None = None,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Pick the histogram width.

    Uses, in order: the explicit width, the ``COLUMNS`` environment
    variable, the size of the controlling terminal, and finally 80.

    Args:
        explicit: Width requested by the user, if any.
        environ: Environment to read ``COLUMNS`` from. Defaults to os.environ.

    Returns:
        Width in characters.

    Raises:
        ConfigurationError: If ``COLUMNS`` is set but not an integer.
    """
    if explicit is not None:
        return explicit
    env = os.environ if environ is None else environ
    columns = env.get("COLUMNS", "").strip()
    if columns:
        try:
            return int(columns)
        except ValueError:
            raise ConfigurationError(
                f"Failed to parse COLUMNS environment variable: {columns!r}"
            ) from None
    size = shutil.get_terminal_size(fallback=(DEFAULT_WIDTH, 24))
    return size.columns or DEFAULT_WIDTH
