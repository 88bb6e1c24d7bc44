from __future__ import annotations

from datetime import date, timedelta
from operator import itemgetter

from svgcharts.intervals import collapse_flagged_runs, collapse_recession_periods
from svgcharts.model import RateSample, RecessionPeriod


def _samples(flags: list[bool], start: date = date(2020, 1, 1)) -> list[RateSample]:
    return [
        RateSample(date=start + timedelta(days=idx), rate=0.02, is_recession=flag)
        for idx, flag in enumerate(flags)
    ]


def _day(n: int) -> date:
    return date(2020, 1, n)


def test_runs_end_on_last_flagged_record() -> None:
    periods = collapse_flagged_runs(_samples([False, True, True, False, True]))
    assert periods == [
        RecessionPeriod(start_date=_day(2), end_date=_day(3)),
        RecessionPeriod(start_date=_day(5), end_date=_day(5)),
    ]


def test_all_false_yields_nothing() -> None:
    assert collapse_flagged_runs(_samples([False] * 6)) == []


def test_empty_input_yields_nothing() -> None:
    assert collapse_flagged_runs([]) == []


def test_all_true_yields_single_period_to_final_record() -> None:
    samples = _samples([True] * 4)
    assert collapse_flagged_runs(samples) == [
        RecessionPeriod(start_date=samples[0].date, end_date=samples[-1].date)
    ]


def test_period_count_matches_true_runs() -> None:
    flags = [True, False, True, True, False, False, True, False]
    assert len(collapse_flagged_runs(_samples(flags))) == 3


def test_half_open_ends_on_next_sample() -> None:
    periods = collapse_flagged_runs(_samples([False, True, True, False, True]), half_open=True)
    assert periods == [
        RecessionPeriod(start_date=_day(2), end_date=_day(4)),
        RecessionPeriod(start_date=_day(5), end_date=_day(6)),
    ]


def test_half_open_uses_last_sampling_step_at_end_of_data() -> None:
    samples = [
        RateSample(date=date(2009, 4, 1), rate=0.03, is_recession=False),
        RateSample(date=date(2009, 5, 1), rate=0.03, is_recession=True),
        RateSample(date=date(2009, 5, 31), rate=0.03, is_recession=True),
    ]
    periods = collapse_flagged_runs(samples, half_open=True)
    assert periods == [RecessionPeriod(start_date=date(2009, 5, 1), end_date=date(2009, 6, 30))]


def test_half_open_single_record_has_no_step() -> None:
    samples = _samples([True])
    assert collapse_flagged_runs(samples, half_open=True) == [
        RecessionPeriod(start_date=_day(1), end_date=_day(1))
    ]


def test_custom_accessors() -> None:
    records = [(_day(1), 0), (_day(2), 1), (_day(3), 0)]
    periods = collapse_flagged_runs(records, date_of=itemgetter(0), flag_of=itemgetter(1))
    assert periods == [RecessionPeriod(start_date=_day(2), end_date=_day(2))]


def test_recession_wrapper_matches_generic_collapse() -> None:
    samples = _samples([True, True, False, False, True, False])
    assert collapse_recession_periods(samples) == collapse_flagged_runs(samples)
    assert collapse_recession_periods(samples, half_open=True)[0].end_date == _day(3)
