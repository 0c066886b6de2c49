"""Exception types raised by histolog."""


class HistologError(Exception):
    """Base class for all histolog failures surfaced to callers."""


class ConfigurationError(HistologError):
    """A pattern or numeric setting cannot be used."""


class ScopedMatchCountError(ConfigurationError):
    """Enter and exit patterns capture a different number of groups."""

    def __init__(self, enter_pattern: str, exit_pattern: str) -> None:
        self.enter_pattern = enter_pattern
        self.exit_pattern = exit_pattern
        super().__init__(
            "Scoped in and out patterns must have the same number of capture "
            f"groups: {enter_pattern!r} vs {exit_pattern!r}"
        )


class NoDataError(HistologError):
    """Scanning the input produced nothing to plot."""

    def __init__(self, message: str = "No data") -> None:
        super().__init__(message)


class LabelsTooWideError(HistologError):
    """Labels leave no room for bars at the requested width."""

    def __init__(self, label_width: int, width: int) -> None:
        self.label_width = label_width
        self.width = width
        super().__init__(
            f"Labels too wide for terminal: {label_width} label columns "
            f"leave no room for bars in width {width}"
        )


class DuplicateLabelError(HistologError):
    """Two buckets ended up with the same label text."""

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(f"Two buckets share the label {label!r}")
