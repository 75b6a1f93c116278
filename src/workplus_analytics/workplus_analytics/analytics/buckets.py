"""Reduction primitives shared by every dashboard.

All functions are pure: they never mutate their input and return fresh
lists, so calling them repeatedly on the same records gives equal results.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, Mapping, Optional, Sequence, TypeVar

from ..common.datetime_utils import last_n_days, last_n_months, month_key
from ..common.numbers import coerce_number
from ..core.constants import UNKNOWN_LABEL
from ..records.fields import label_or_unknown
from .model import DistributionSlice, TrendBucket

R = TypeVar("R")
T = TypeVar("T")


class BucketUnit(str, Enum):
    DAY = "day"
    MONTH = "month"


@dataclass(frozen=True)
class TimeWindow:
    """A fixed-width run of buckets ending at the anchor date."""

    unit: BucketUnit
    size: int
    label_format: str

    def resized(self, size: int) -> "TimeWindow":
        return replace(self, size=size)

    def slots(self, end: date) -> list[date]:
        if self.unit == BucketUnit.DAY:
            return last_n_days(end, self.size)
        return last_n_months(end, self.size)

    def key(self, day: date) -> str:
        return day.isoformat() if self.unit == BucketUnit.DAY else month_key(day)


LAST_7_DAYS = TimeWindow(BucketUnit.DAY, 7, "%m/%d")
LAST_30_DAYS = TimeWindow(BucketUnit.DAY, 30, "%d/%m")
LAST_6_MONTHS = TimeWindow(BucketUnit.MONTH, 6, "%b")
CALENDAR_YEAR = TimeWindow(BucketUnit.MONTH, 12, "%b")


def time_buckets(
    records: Iterable[R],
    *,
    date_of: Callable[[R], Optional[date]],
    window: TimeWindow,
    end: date,
    category_of: Optional[Callable[[R], Optional[str]]] = None,
    categories: Sequence[str] = (),
    sums: Optional[Mapping[str, Callable[[R], Optional[float]]]] = None,
    unknown: str = UNKNOWN_LABEL,
) -> list[TrendBucket]:
    """Partition records into ``window.size`` buckets ending at ``end``.

    Every bucket is emitted, oldest first, even when empty. Records without
    a usable date, or dated outside the window, are skipped. ``categories``
    are always present in ``by_category`` (as 0 when unseen).
    """
    sums = sums or {}
    slots = window.slots(end)
    counts: dict[str, int] = {window.key(s): 0 for s in slots}
    totals: dict[str, dict[str, float]] = {k: {name: 0.0 for name in sums} for k in counts}
    by_category: dict[str, dict[str, int]] = {k: {c: 0 for c in categories} for k in counts}

    for record in records:
        day = date_of(record)
        if day is None:
            continue
        key = window.key(day)
        if key not in counts:
            continue

        counts[key] += 1
        for name, value_of in sums.items():
            totals[key][name] += coerce_number(value_of(record))
        if category_of is not None:
            label = label_or_unknown(category_of(record), unknown)
            by_category[key][label] = by_category[key].get(label, 0) + 1

    return [
        TrendBucket(
            key=window.key(slot),
            label=slot.strftime(window.label_format),
            count=counts[window.key(slot)],
            sums=totals[window.key(slot)],
            by_category=by_category[window.key(slot)],
        )
        for slot in slots
    ]


def group_by(records: Iterable[R], key_of: Callable[[R], T]) -> dict[T, list[R]]:
    """Group records, keeping groups in first-encountered order."""
    groups: dict[T, list[R]] = {}
    for record in records:
        groups.setdefault(key_of(record), []).append(record)
    return groups


def distribution(
    records: Iterable[R],
    *,
    label_of: Callable[[R], Optional[str]],
    value_of: Optional[Callable[[R], Optional[float]]] = None,
    categories: Sequence[str] = (),
    top_k: Optional[int] = None,
    drop_zero: bool = True,
    unknown: str = UNKNOWN_LABEL,
) -> list[DistributionSlice]:
    """Count (and optionally sum) records per label for pie/bar charts.

    Slices are ordered by their metric (sum when ``value_of`` is given,
    otherwise count) descending; ties keep first-encountered order.
    ``categories`` never seen in ``records`` follow as zero slices when
    ``drop_zero`` is False. The list is then capped to ``top_k``.
    """
    counts: dict[str, int] = {}
    totals: dict[str, float] = {}
    for record in records:
        label = label_or_unknown(label_of(record), unknown)
        counts[label] = counts.get(label, 0) + 1
        if value_of is not None:
            totals[label] = totals.get(label, 0.0) + coerce_number(value_of(record))
    if not drop_zero:
        for category in categories:
            counts.setdefault(category, 0)

    slices = [DistributionSlice(label=label, count=count, total=totals.get(label, 0.0)) for label, count in counts.items()]

    def metric(s: DistributionSlice) -> float:
        return s.total if value_of is not None else s.count

    if drop_zero:
        slices = [s for s in slices if metric(s) > 0]
    return rank_top_n(slices, metric=metric, n=top_k)


def rank_top_n(items: Iterable[T], *, metric: Callable[[T], float], n: Optional[int]) -> list[T]:
    """Sort descending by ``metric`` (stable for ties) and keep at most ``n``."""
    ranked = sorted(items, key=metric, reverse=True)
    return ranked if n is None else ranked[: max(n, 0)]


def sum_of(records: Iterable[R], value_of: Callable[[R], Optional[float]]) -> float:
    return sum(coerce_number(value_of(r)) for r in records)


def latest_first(records: Iterable[R], *, stamp_of: Callable[[R], Optional[datetime]], n: Optional[int]) -> list[R]:
    """Most recent records first; undated records sort last."""
    return rank_top_n(records, metric=lambda r: stamp_of(r) or datetime.min, n=n)
