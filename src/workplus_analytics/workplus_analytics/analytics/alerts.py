from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from ..core.enums import AlertSeverity
from .model import Alert

Stats = Mapping[str, Any]


@dataclass(frozen=True)
class AlertRule:
    """Threshold rule over aggregated stats.

    ``template`` is a ``str.format`` string rendered with the stats mapping,
    e.g. ``"{late_today} workers arrived late today"``.
    """

    name: str
    predicate: Callable[[Stats], bool]
    severity: AlertSeverity
    template: str

    def render(self, stats: Stats) -> Alert:
        return Alert(severity=self.severity, message=self.template.format(**stats))


def evaluate_alerts(rules: Iterable[AlertRule], stats: Stats, *, limit: Optional[int] = None) -> list[Alert]:
    """Evaluate every rule in declaration order; all matching rules fire."""
    alerts = [rule.render(stats) for rule in rules if rule.predicate(stats)]
    return alerts if limit is None else alerts[:limit]
