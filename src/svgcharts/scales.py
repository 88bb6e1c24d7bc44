from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Any, Callable, Hashable, Iterable, Sequence

import numpy as np

E10 = math.sqrt(50)
E5 = math.sqrt(10)
E2 = math.sqrt(2)


def _check_pair(values: Sequence[float], name: str) -> tuple[float, float]:
    if len(values) != 2:
        raise ValueError(f"{name} must have exactly two values, got {len(values)}.")
    low, high = float(values[0]), float(values[1])
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValueError(f"{name} values must be finite: {list(values)!r}")
    return low, high


def tick_increment(start: float, stop: float, count: int) -> float:
    """Nice step (1, 2 or 5 times a power of ten); negative values mean 1/step."""
    step = (stop - start) / max(1, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= E10:
        factor = 10
    elif error >= E5:
        factor = 5
    elif error >= E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


def nice_ticks(start: float, stop: float, count: int = 10) -> list[float]:
    if count <= 0:
        return []
    if start == stop:
        return [start]
    reverse = stop < start
    if reverse:
        start, stop = stop, start
    increment = tick_increment(start, stop, count)
    if increment == 0 or not math.isfinite(increment):
        return []
    if increment > 0:
        first = math.ceil(start / increment)
        last = math.floor(stop / increment)
        ticks = [(first + idx) * increment for idx in range(int(last - first) + 1)]
    else:
        inverse = -increment
        first = math.ceil(start * inverse)
        last = math.floor(stop * inverse)
        ticks = [(first + idx) / inverse for idx in range(int(last - first) + 1)]
    if reverse:
        ticks.reverse()
    return ticks


class LinearScale:
    """Continuous numeric scale from a domain pair to a pixel range pair."""

    def __init__(self, domain: Sequence[float], range: Sequence[float]) -> None:
        self.domain = _check_pair(domain, "domain")
        self.range = _check_pair(range, "range")
        if self.domain[0] == self.domain[1]:
            raise ValueError(f"domain must not be degenerate: {list(domain)!r}")

    def __call__(self, value: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        return r0 + (float(value) - d0) / (d1 - d0) * (r1 - r0)

    def map_many(self, values: Iterable[float]) -> np.ndarray:
        d0, d1 = self.domain
        r0, r1 = self.range
        array = np.asarray(list(values), dtype=float)
        return r0 + (array - d0) / (d1 - d0) * (r1 - r0)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r0 == r1:
            return d0
        return d0 + (float(pixel) - r0) / (r1 - r0) * (d1 - d0)

    def ticks(self, count: int = 10) -> list[float]:
        return nice_ticks(self.domain[0], self.domain[1], count)

    def tick_format(self, count: int = 10) -> Callable[[float], str]:
        d0, d1 = self.domain
        increment = tick_increment(min(d0, d1), max(d0, d1), count)
        step = increment if increment > 0 else -1 / increment
        precision = max(0, -math.floor(math.log10(step)))
        return lambda value: f"{value:.{precision}f}"


def _date_number(value: date | datetime) -> float:
    if isinstance(value, datetime):
        midnight = datetime(value.year, value.month, value.day, tzinfo=value.tzinfo)
        return value.toordinal() + (value - midnight).total_seconds() / 86400.0
    return float(value.toordinal())


def _add_months(value: date, months: int) -> date:
    index = value.year * 12 + value.month - 1 + months
    return date(index // 12, index % 12 + 1, 1)


# (unit, step, approximate duration in days)
TIME_INTERVALS = (
    ("day", 1, 1),
    ("day", 2, 2),
    ("week", 1, 7),
    ("month", 1, 30),
    ("month", 3, 90),
    ("year", 1, 365),
)


class TimeScale:
    """Date-to-pixel scale; dates map through their proleptic ordinal."""

    def __init__(self, domain: Sequence[date], range: Sequence[float]) -> None:
        if len(domain) != 2:
            raise ValueError(f"domain must have exactly two dates, got {len(domain)}.")
        self.domain = (domain[0], domain[1])
        self._linear = LinearScale(
            [_date_number(domain[0]), _date_number(domain[1])], range
        )
        self.range = self._linear.range

    def __call__(self, value: date | datetime) -> float:
        return self._linear(_date_number(value))

    def map_many(self, values: Iterable[date]) -> np.ndarray:
        return self._linear.map_many(_date_number(value) for value in values)

    def invert(self, pixel: float) -> date:
        return date.fromordinal(int(math.floor(self._linear.invert(pixel))))

    def _interval(self, count: int) -> tuple[str, int]:
        start, stop = sorted(self.domain)
        span = _date_number(stop) - _date_number(start)
        target = span / max(1, count)
        if target > TIME_INTERVALS[-1][2]:
            years = max(1, int(round(tick_increment(0, span / 365.25, count))))
            return "year", years
        for idx, (unit, step, days) in enumerate(TIME_INTERVALS):
            if days >= target:
                if idx == 0:
                    return unit, step
                prev_unit, prev_step, prev_days = TIME_INTERVALS[idx - 1]
                if target / prev_days < days / target:
                    return prev_unit, prev_step
                return unit, step
        return "year", 1

    def ticks(self, count: int = 10) -> list[date]:
        start, stop = sorted(self.domain)
        if isinstance(start, datetime):
            start = start.date()
        if isinstance(stop, datetime):
            stop = stop.date()
        unit, step = self._interval(count)
        ticks: list[date] = []
        if unit == "year":
            year = start.year if start == date(start.year, 1, 1) else start.year + 1
            year += (-year) % step
            while date(year, 1, 1) <= stop:
                ticks.append(date(year, 1, 1))
                year += step
        elif unit == "month":
            current = start if start.day == 1 else _add_months(start, 1)
            while (current.month - 1) % step:
                current = _add_months(current, 1)
            while current <= stop:
                ticks.append(current)
                current = _add_months(current, step)
        elif unit == "week":
            current = start + timedelta(days=(6 - start.weekday()) % 7)
            while current <= stop:
                ticks.append(current)
                current += timedelta(days=7)
        else:
            current = start
            while current <= stop:
                if (current.day - 1) % step == 0:
                    ticks.append(current)
                current += timedelta(days=1)
        return ticks

    def tick_format(self, count: int = 10) -> Callable[[date], str]:
        unit, _ = self._interval(count)

        def fmt(value: date) -> str:
            if unit == "year" or (value.month == 1 and value.day == 1):
                return value.strftime("%Y")
            if unit == "month" or value.day == 1:
                return value.strftime("%b")
            return value.strftime("%b %d")

        return fmt


class BandScale:
    """Discrete keys mapped onto equal-width buckets of the pixel range."""

    def __init__(self, keys: Iterable[Hashable], range: Sequence[float]) -> None:
        self.domain = list(keys)
        if not self.domain:
            raise ValueError("band scale domain must not be empty.")
        if len(set(self.domain)) != len(self.domain):
            raise ValueError(f"band scale keys must be unique: {self.domain!r}")
        self.range = _check_pair(range, "range")
        self._index = {key: idx for idx, key in enumerate(self.domain)}

    @property
    def bandwidth(self) -> float:
        r0, r1 = self.range
        return abs(r1 - r0) / len(self.domain)

    def position(self, key: Hashable) -> float:
        idx = self._index[key]
        r0, r1 = self.range
        if r1 < r0:
            return r1 + (len(self.domain) - 1 - idx) * self.bandwidth
        return r0 + idx * self.bandwidth

    def __call__(self, key: Hashable) -> float:
        return self.position(key)

    def ticks(self, count: int = 10) -> list[Any]:
        return list(self.domain)

    def tick_format(self, count: int = 10) -> Callable[[Any], str]:
        return str


def with_headroom(
    low: float, high: float, below: float, above: float | None = None
) -> tuple[float, float]:
    """Widen a data-derived domain so rendered marks never touch the plot edge."""
    if above is None:
        above = below
    return low - below, high + above


def date_headroom(
    first: date, last: date, days_before: int, days_after: int
) -> tuple[date, date]:
    return first - timedelta(days=days_before), last + timedelta(days=days_after)
