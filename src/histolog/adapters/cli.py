"""Command line interface.

Each subcommand reads lines from the given files (or stdin), builds a
label/count table and prints it as an ASCII histogram or NDJSON::

    histolog simple access.log
    histolog select '" (\\d{3}) ' access.log
    histolog time-diff --time-delta 0.5 trace.txt
    histolog scoped -i 'openat\\(.*\\) = (\\d+)$' -o 'close\\((\\d+)\\)' strace.txt
"""

import re
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from decimal import Decimal
from enum import Enum
from typing import Annotated

import typer

from histolog.adapters.input import LineReader
from histolog.adapters.logging import configure_logging
from histolog.adapters.terminal import resolve_width
from histolog.core.aggregate import select_counts, simple_counts
from histolog.core.buckets import Buckets
from histolog.core.config import (
    DEFAULT_BUCKET_COUNT,
    DEFAULT_TIME_PATTERN,
    BucketConfig,
    RenderConfig,
)
from histolog.core.encoding.histogram import draw_histogram
from histolog.core.encoding.ndjson import encode_rows
from histolog.core.errors import HistologError, NoDataError
from histolog.core.extract import capture_count, parse_decimal
from histolog.core.intervals import scoped_durations, time_diffs


class OutputFormat(str, Enum):
    """Output encodings."""

    text = "text"
    ndjson = "ndjson"


class LabelMode(str, Enum):
    """Bucket labels."""

    upper = "upper"
    midpoint = "midpoint"


app = typer.Typer(
    name="histolog",
    help="Quick histograms of log files and similar line-oriented text.",
    add_completion=False,
    no_args_is_help=True,
)


# === Shared options ===

Inputs = Annotated[
    list[str] | None,
    typer.Argument(
        help="Input file(s). Use '-' for stdin; stdin is read if omitted.",
        show_default=False,
    ),
]
Width = Annotated[
    int | None,
    typer.Option("--width", help="Graph width in chars.", min=1, show_default=False),
]
ShowCounts = Annotated[
    bool,
    typer.Option("--show-counts", help="Include frequencies (counts)."),
]
Format = Annotated[
    OutputFormat,
    typer.Option("--format", help="Output an ASCII chart or NDJSON rows."),
]
Verbose = Annotated[
    int,
    typer.Option("--verbose", "-v", count=True, help="More diagnostics (repeatable)."),
]
Quiet = Annotated[
    bool,
    typer.Option("--quiet", "-q", help="Hide 'not matched' diagnostics."),
]
Match = Annotated[
    str | None,
    typer.Option(
        "--match",
        metavar="REGEXP",
        help="Only use lines matching this regex.",
        show_default=False,
    ),
]
TimeSelect = Annotated[
    str,
    typer.Option(
        "--time-select",
        metavar="REGEXP",
        help=(
            "Regex to extract decimal time values. Must include a capture group; "
            "the first is used unless one is named 'time'."
        ),
    ),
]
TimeDelta = Annotated[
    str | None,
    typer.Option(
        "--time-delta",
        metavar="DECIMAL",
        help="Divide the series into buckets of this width.",
        show_default=False,
    ),
]
BucketCount = Annotated[
    int,
    typer.Option("--buckets", min=1, help="Number of buckets without --time-delta."),
]
Label = Annotated[
    LabelMode,
    typer.Option("--label", help="Label buckets by upper bound or midpoint."),
]


def _compile(value: str, option: str, need_group: bool = False) -> re.Pattern[str]:
    """Compile a regex given on the command line.

    Raises:
        typer.BadParameter: If the regex is invalid, or has no capture
            group when one is needed.
    """
    try:
        pattern = re.compile(value)
    except re.error as exc:
        raise typer.BadParameter(str(exc), param_hint=option) from None
    if need_group and capture_count(pattern) < 1:
        raise typer.BadParameter("Need at least one regex match", param_hint=option)
    return pattern


def _compile_optional(value: str | None, option: str) -> re.Pattern[str] | None:
    if value is None:
        return None
    return _compile(value, option)


def _delta(value: str | None) -> Decimal | None:
    if value is None:
        return None
    delta = parse_decimal(value)
    if delta is None:
        raise typer.BadParameter(
            f"Failed to parse {value} as decimal", param_hint="--time-delta"
        )
    if delta <= 0:
        raise typer.BadParameter("Must be positive", param_hint="--time-delta")
    return delta


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn histolog and I/O failures into an error message and exit code."""
    try:
        yield
    except HistologError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from None
    except OSError as exc:
        typer.echo(f"Error opening {exc.filename}: {exc.strerror}", err=True)
        raise typer.Exit(2) from None


def _print_rows(
    rows: Mapping[str, int],
    width: int | None,
    show_counts: bool,
    output_format: OutputFormat,
) -> None:
    if not rows:
        raise NoDataError()
    if output_format is OutputFormat.ndjson:
        typer.echo(encode_rows(rows), nl=False)
        return
    config = RenderConfig(width=resolve_width(width), show_counts=show_counts)
    typer.echo(draw_histogram(rows, config))


def _print_distribution(
    values: Sequence[Decimal],
    buckets: BucketConfig,
    width: int | None,
    show_counts: bool,
    output_format: OutputFormat,
) -> None:
    if not values:
        raise NoDataError()
    _print_rows(Buckets(buckets).counts(values), width, show_counts, output_format)


# === Commands ===


@app.command()
def simple(
    inputs: Inputs = None,
    match: Match = None,
    width: Width = None,
    show_counts: ShowCounts = False,
    output_format: Format = OutputFormat.text,
    verbose: Verbose = 0,
    quiet: Quiet = False,
) -> None:
    """Simple histogram of frequencies."""
    configure_logging(verbose, quiet)
    filter_pattern = _compile_optional(match, "--match")
    with _reporting_errors():
        rows = simple_counts(LineReader(inputs), filter_pattern)
        _print_rows(rows, width, show_counts, output_format)


@app.command()
def select(
    selector: Annotated[
        str,
        typer.Argument(
            metavar="SELECTOR",
            help=(
                "Regex selecting the value to plot. Must include a capture group; "
                "the first is used unless one is named 'select'."
            ),
        ),
    ],
    inputs: Inputs = None,
    width: Width = None,
    show_counts: ShowCounts = False,
    output_format: Format = OutputFormat.text,
    verbose: Verbose = 0,
    quiet: Quiet = False,
) -> None:
    """Simple histogram of data selected (extracted) by regex.

    Lines the selector does not match are dropped from the histogram.
    """
    configure_logging(verbose, quiet)
    pattern = _compile(selector, "SELECTOR", need_group=True)
    with _reporting_errors():
        rows = select_counts(LineReader(inputs), pattern)
        _print_rows(rows, width, show_counts, output_format)


@app.command("time-diff")
def time_diff(
    inputs: Inputs = None,
    time_select: TimeSelect = DEFAULT_TIME_PATTERN,
    time_delta: TimeDelta = None,
    buckets: BucketCount = DEFAULT_BUCKET_COUNT,
    label: Label = LabelMode.upper,
    match: Match = None,
    width: Width = None,
    show_counts: ShowCounts = False,
    output_format: Format = OutputFormat.text,
    verbose: Verbose = 0,
    quiet: Quiet = False,
) -> None:
    """Distribution of differences between adjacent time stamps."""
    configure_logging(verbose, quiet)
    time_pattern = _compile(time_select, "--time-select", need_group=True)
    filter_pattern = _compile_optional(match, "--match")
    delta = _delta(time_delta)
    with _reporting_errors():
        config = BucketConfig(count=buckets, delta=delta, label=label.value)
        values = time_diffs(LineReader(inputs), time_pattern, filter_pattern)
        _print_distribution(values, config, width, show_counts, output_format)


@app.command()
def scoped(
    inputs: Inputs = None,
    scope_match: Annotated[
        str | None,
        typer.Option(
            "--scope-match",
            "-m",
            metavar="REGEXP",
            help="Regex matching both in and out entries.",
            show_default=False,
        ),
    ] = None,
    scope_in: Annotated[
        str | None,
        typer.Option(
            "--scope-in",
            "-i",
            metavar="REGEXP",
            help="Regex matching in entries, which determine start times.",
            show_default=False,
        ),
    ] = None,
    scope_out: Annotated[
        str | None,
        typer.Option(
            "--scope-out",
            "-o",
            metavar="REGEXP",
            help="Regex matching out entries, which determine end times.",
            show_default=False,
        ),
    ] = None,
    time_select: TimeSelect = DEFAULT_TIME_PATTERN,
    time_delta: TimeDelta = None,
    buckets: BucketCount = DEFAULT_BUCKET_COUNT,
    label: Label = LabelMode.upper,
    match: Match = None,
    width: Width = None,
    show_counts: ShowCounts = False,
    output_format: Format = OutputFormat.text,
    verbose: Verbose = 0,
    quiet: Quiet = False,
) -> None:
    """Distribution of durations between scoped "in" and "out" matches.

    Capture groups in the in and out regexes must correlate: for example
    'openat\\(.*\\) = (\\d+)$' pairs with 'close\\((\\d+)\\)'.
    """
    configure_logging(verbose, quiet)
    if scope_match is not None:
        if scope_in is not None or scope_out is not None:
            raise typer.BadParameter(
                "cannot be combined with --scope-in/--scope-out",
                param_hint="--scope-match",
            )
        scope_in = scope_out = scope_match
    elif scope_in is None or scope_out is None:
        raise typer.BadParameter(
            "give either --scope-match or both --scope-in and --scope-out",
            param_hint="--scope-in/--scope-out",
        )

    enter_pattern = _compile(scope_in, "--scope-in")
    exit_pattern = _compile(scope_out, "--scope-out")
    time_pattern = _compile(time_select, "--time-select", need_group=True)
    filter_pattern = _compile_optional(match, "--match")
    delta = _delta(time_delta)
    with _reporting_errors():
        config = BucketConfig(count=buckets, delta=delta, label=label.value)
        values = scoped_durations(
            LineReader(inputs),
            time_pattern,
            enter_pattern,
            exit_pattern,
            filter_pattern,
        )
        _print_distribution(values, config, width, show_counts, output_format)


def main() -> None:
    """Console script entry point."""
    app(prog_name="histolog")
