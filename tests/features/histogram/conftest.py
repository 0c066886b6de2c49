"""BDD step definitions for histogram features.

Steps drive the core directly on in-memory lines; the command line is
covered by tests/integration/test_cli.py.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal

import pytest
from pytest_bdd import given, parsers, then, when

from histolog.core.aggregate import select_counts, simple_counts
from histolog.core.buckets import Buckets
from histolog.core.config import DEFAULT_TIME_PATTERN, BucketConfig, RenderConfig
from histolog.core.encoding.histogram import draw_histogram
from histolog.core.intervals import scoped_durations, time_diffs


@dataclass
class HistogramScenarioContext:
    """State shared between the steps of one scenario."""

    lines: list[str] = field(default_factory=list)
    rows: dict[str, int] = field(default_factory=dict)
    drawn: list[str] = field(default_factory=list)
    time_pattern: re.Pattern[str] = field(
        default_factory=lambda: re.compile(DEFAULT_TIME_PATTERN)
    )


@pytest.fixture
def ctx() -> HistogramScenarioContext:
    """Fresh scenario context for each test."""
    return HistogramScenarioContext()


def _bucketed(values: list[Decimal], width: str) -> dict[str, int]:
    return Buckets(BucketConfig(delta=Decimal(width))).counts(values)


# === Given ===
@given(parsers.parse('the line "{line}"'))
def step_line(ctx: HistogramScenarioContext, line: str) -> None:
    ctx.lines.append(line)


# === When ===
@when("the lines are counted")
def step_count(ctx: HistogramScenarioContext) -> None:
    ctx.rows = simple_counts(ctx.lines)


@when(parsers.parse('values are selected with "{selector}"'))
def step_select(ctx: HistogramScenarioContext, selector: str) -> None:
    ctx.rows = select_counts(ctx.lines, re.compile(selector))


@when(parsers.parse("time differences are bucketed {width} wide"))
def step_time_diff(ctx: HistogramScenarioContext, width: str) -> None:
    ctx.rows = _bucketed(time_diffs(ctx.lines, ctx.time_pattern), width)


@when(
    parsers.parse(
        'scoped durations from "{enter}" to "{exit_}" are bucketed {width} wide'
    )
)
def step_scoped(
    ctx: HistogramScenarioContext, enter: str, exit_: str, width: str
) -> None:
    values = scoped_durations(
        ctx.lines, ctx.time_pattern, re.compile(enter), re.compile(exit_)
    )
    ctx.rows = _bucketed(values, width)


@when(parsers.parse("the histogram is drawn {width:d} characters wide with counts"))
def step_draw(ctx: HistogramScenarioContext, width: int) -> None:
    config = RenderConfig(width=width, show_counts=True)
    ctx.drawn = draw_histogram(ctx.rows, config).split("\n")


# === Then ===
@then(parsers.re(r"there (?:is|are) (?P<n>\d+) rows?"))
def step_row_total(ctx: HistogramScenarioContext, n: str) -> None:
    assert len(ctx.rows) == int(n)


@then(parsers.parse('the row "{label}" has count {count:d}'))
def step_row_count(ctx: HistogramScenarioContext, label: str, count: int) -> None:
    assert ctx.rows[label] == count


@then(parsers.parse("every drawn line is at most {width:d} characters wide"))
def step_line_width(ctx: HistogramScenarioContext, width: int) -> None:
    assert all(len(line) <= width for line in ctx.drawn)


@then(parsers.parse('the drawn line for "{label}" ends with "{suffix}"'))
def step_drawn_suffix(ctx: HistogramScenarioContext, label: str, suffix: str) -> None:
    line = next(line for line in ctx.drawn if line.strip().startswith(label))
    assert line.endswith(suffix)


@then(parsers.parse("{n:d} exit was not matched"))
def step_unmatched(
    ctx: HistogramScenarioContext, n: int, caplog: pytest.LogCaptureFixture
) -> None:
    unmatched = [r for r in caplog.records if r.getMessage() == "not matched"]
    assert len(unmatched) == n
