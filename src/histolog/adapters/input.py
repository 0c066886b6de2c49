"""Line source reading files and stdin one after another, like ``cat``."""

import logging
import sys
from collections.abc import Iterable, Iterator, Sequence
from typing import TextIO

logger = logging.getLogger(__name__)

STDIN = "-"


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


class LineReader:
    """Implementation of LineSourcePort over files and stdin.

    Inputs are read in order and their lines concatenated, with ``\\n`` and
    ``\\r\\n`` terminators removed. Files are decoded as UTF-8, replacing
    undecodable bytes.

    Args:
        paths: Files to read. ``-`` means stdin; no paths reads stdin only.
        stdin: Stream used for ``-``. Defaults to ``sys.stdin``.

    Raises:
        OSError: While iterating, if a file cannot be opened or read.
    """

    def __init__(
        self,
        paths: Sequence[str] | None = None,
        stdin: TextIO | None = None,
    ) -> None:
        self._paths = list(paths) if paths else [STDIN]
        self._stdin = stdin
        self.lines_read = 0

    def _lines(self, stream: Iterable[str]) -> Iterator[str]:
        for line in stream:
            self.lines_read += 1
            yield _strip_terminator(line)

    def __iter__(self) -> Iterator[str]:
        for path in self._paths:
            if path == STDIN:
                logger.debug("reading stdin")
                yield from self._lines(self._stdin or sys.stdin)
                continue
            logger.debug("reading %s", path)
            with open(path, encoding="utf-8", errors="replace", newline="") as handle:
                yield from self._lines(handle)
        logger.debug("read %d lines", self.lines_read)
