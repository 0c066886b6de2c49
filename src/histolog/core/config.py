"""Configuration values for bucketing and rendering.

Both objects are built once per invocation and are read-only afterwards.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from histolog.core.errors import ConfigurationError

DEFAULT_BUCKET_COUNT = 80
DEFAULT_WIDTH = 80
DEFAULT_TIME_PATTERN = r"^(\d+\.\d+)"

LabelMode = Literal["upper", "midpoint"]


@dataclass(frozen=True)
class BucketConfig:
    """How a list of decimal values is partitioned into buckets.

    Attributes:
        count: Number of buckets when no width is given.
        delta: Fixed bucket width. Takes precedence over ``count``.
        label: Label buckets by their upper bound or by their midpoint.
    """

    count: int = DEFAULT_BUCKET_COUNT
    delta: Decimal | None = None
    label: LabelMode = "upper"

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ConfigurationError(
                f"Bucket count must be at least 1, got {self.count}"
            )
        if self.delta is not None and self.delta <= 0:
            raise ConfigurationError(f"Bucket width must be positive, got {self.delta}")
        if self.label not in ("upper", "midpoint"):
            raise ConfigurationError(f"Unknown bucket label mode: {self.label!r}")


@dataclass(frozen=True)
class RenderConfig:
    """How a histogram is drawn.

    Attributes:
        width: Total width of each rendered line in characters.
        show_counts: Print the literal count beside each label.
        bar_char: Character the bars are drawn with.
    """

    width: int = DEFAULT_WIDTH
    show_counts: bool = False
    bar_char: str = "#"

    def __post_init__(self) -> None:
        if self.width < 1:
            raise ConfigurationError(f"Width must be at least 1, got {self.width}")
        if len(self.bar_char) != 1:
            raise ConfigurationError(
                f"Bar character must be a single character, got {self.bar_char!r}"
            )
