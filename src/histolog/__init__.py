"""histolog: histograms of values and durations extracted from log lines."""

from histolog.core.aggregate import select_counts, simple_counts
from histolog.core.buckets import Buckets
from histolog.core.config import BucketConfig, RenderConfig
from histolog.core.encoding.histogram import draw_histogram
from histolog.core.encoding.ndjson import encode_rows
from histolog.core.errors import (
    ConfigurationError,
    DuplicateLabelError,
    HistologError,
    LabelsTooWideError,
    NoDataError,
    ScopedMatchCountError,
)
from histolog.core.extract import ValueExtractor, parse_decimal, select_from, time_from
from histolog.core.intervals import (
    KeyedMatcher,
    OpenIntervalRegistry,
    StackMatcher,
    scoped_durations,
    time_diffs,
)
from histolog.core.models import Bucket, BucketLayout

__version__ = "0.1.0"

__all__ = [
    "Bucket",
    "BucketConfig",
    "BucketLayout",
    "Buckets",
    "ConfigurationError",
    "DuplicateLabelError",
    "HistologError",
    "KeyedMatcher",
    "LabelsTooWideError",
    "NoDataError",
    "OpenIntervalRegistry",
    "RenderConfig",
    "ScopedMatchCountError",
    "StackMatcher",
    "ValueExtractor",
    "draw_histogram",
    "encode_rows",
    "parse_decimal",
    "scoped_durations",
    "select_counts",
    "select_from",
    "simple_counts",
    "time_diffs",
    "time_from",
]
