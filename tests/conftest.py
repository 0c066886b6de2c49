"""Shared test fixtures for all test modules."""

import re
from collections.abc import Iterator

import pytest

from histolog.adapters.logging import reset_logging


@pytest.fixture(autouse=True)
def _reset_histolog_logging() -> Iterator[None]:
    """Remove CLI log handlers so streams captured by one test never leak."""
    yield
    reset_logging()


@pytest.fixture
def default_time() -> re.Pattern[str]:
    """The default time pattern: a leading decimal number."""
    return re.compile(r"^(\d+\.\d+)")


@pytest.fixture
def strace_time() -> re.Pattern[str]:
    """Time pattern for strace -t style output, ignoring hours and minutes."""
    return re.compile(r"^\d+:\d+:(\d+\.\d+)")


@pytest.fixture
def seq_lines() -> list[str]:
    """The numbers 1 to 20, one per line, like ``seq 20``."""
    return [str(n) for n in range(1, 21)]


@pytest.fixture
def scoped_lines() -> list[str]:
    """Trace with a reset scope wrapping two nested recursions.

    The trailing exit has no matching enter and the last enter never
    closes.
    """
    return [
        "0001.0000: ->reset",
        "0002.5000: ->recurse",
        "0003.0000: ->recurse",
        "0004.2500: <-recurse",
        "0006.0000: <-recurse",
        "0010.0000: <-reset",
        "0011.0000: <-recurse",
        "0012.0000: ->reset",
    ]


@pytest.fixture
def strace_lines() -> list[str]:
    """strace output where file descriptor 3 is reused while 4 is open."""
    return [
        '10:00:01.000100 openat(AT_FDCWD, "/etc/ld.so.cache", O_RDONLY) = 3',
        '10:00:01.000200 openat(AT_FDCWD, "/lib/libc.so.6", O_RDONLY) = 4',
        "10:00:01.000350 close(3)",
        '10:00:01.000500 openat(AT_FDCWD, "/etc/passwd", O_RDONLY) = 3',
        "10:00:01.000900 close(4)",
        "10:00:01.001000 close(3)",
    ]
