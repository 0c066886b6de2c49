"""Encoders turning label/count rows into output text."""

from histolog.core.encoding.histogram import draw_histogram, scale_value
from histolog.core.encoding.ndjson import encode_rows

__all__ = ["draw_histogram", "encode_rows", "scale_value"]
