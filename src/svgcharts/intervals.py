from __future__ import annotations

from datetime import date
from operator import attrgetter
from typing import Any, Callable, Iterable

from .model import RateSample, RecessionPeriod


def collapse_flagged_runs(
    records: Iterable[Any],
    *,
    date_of: Callable[[Any], date] = attrgetter("date"),
    flag_of: Callable[[Any], bool] = attrgetter("is_recession"),
    half_open: bool = False,
) -> list[RecessionPeriod]:
    """Collapse chronological flagged records into one period per run of flags.

    By default a period ends on the date of the last flagged record of its run,
    so ``[F, T, T, F, T]`` over ``D1..D5`` gives ``(D2, D3), (D5, D5)``.

    With ``half_open`` a run closed by an unflagged record ends on that
    record's date: ``(D2, D4)``. A run reaching the end of the data is
    extended by the last sampling step (``(D5, D6)``), so every period covers
    ``[start, end)``.
    The rate chart uses this policy unless configured otherwise.
    """
    periods: list[RecessionPeriod] = []
    open_start: date | None = None
    last_flagged: date | None = None
    previous: date | None = None
    step = None
    for record in records:
        current = date_of(record)
        if previous is not None:
            step = current - previous
        if flag_of(record):
            if open_start is None:
                open_start = current
            last_flagged = current
        elif open_start is not None:
            end = current if half_open else last_flagged
            periods.append(RecessionPeriod(start_date=open_start, end_date=end))
            open_start = None
        previous = current
    if open_start is not None:
        end = last_flagged
        if half_open and step is not None:
            end = last_flagged + step
        periods.append(RecessionPeriod(start_date=open_start, end_date=end))
    return periods


def collapse_recession_periods(
    samples: Iterable[RateSample], half_open: bool = False
) -> list[RecessionPeriod]:
    return collapse_flagged_runs(samples, half_open=half_open)
