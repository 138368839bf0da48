"""Merge per-clause matches into a single recurrence descriptor.

Matches are replayed in (clause order, recognizer priority) order against a
mutable ``WorkingDescriptor``; the frozen result is built once at the end.

Conflict rules:
  frequency      first wins, so the earliest clause decides and within a
                 clause frequency/interval run before the day recognizers;
                 with policy 'most_specific' a more specific category
                 (day of month > day of week > interval > frequency)
                 overrides instead
  interval       first wins
  day sets       union
  until          first wins
Every dropped value leaves a warning. Clause and match warnings accumulate
in replay order; repeats are kept.
"""
import logging
from typing import Iterable

from .constants import SPECIFICITY, WEEKDAY_ORDER
from .models import ClauseResult, PatternMatch, RecurrenceDescriptor, UnrecognizedResult
from .registry import DEFAULT_REGISTRY, HandlerRegistry

logger = logging.getLogger(__name__)


class WorkingDescriptor:
    def __init__(self, policy: str = 'first'):
        self.policy = policy
        self.frequency: str | None = None
        self.frequency_category: str | None = None
        self.interval: int | None = None
        self.weekdays: set[str] = set()
        self.month_days: set[int] = set()
        self.set_positions: set[int] = set()
        self.until = None
        self.confidence = 1.0
        self.matched_patterns: list[str] = []
        self.warnings: list[str] = []
        self.sources: dict[str, list[str]] = {}

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def _source(self, field: str, match: PatternMatch, replace: bool = False) -> None:
        name = match.handler or match.type
        if replace:
            self.sources[field] = [name]
            return
        names = self.sources.setdefault(field, [])
        if name not in names:
            names.append(name)

    def set_frequency(self, frequency: str, match: PatternMatch) -> None:
        if self.frequency is None:
            self.frequency = frequency
            self.frequency_category = match.type
            self._source('frequency', match)
            return
        if frequency == self.frequency:
            self._source('frequency', match)
            return
        rank = SPECIFICITY.get(match.type, 0)
        if self.policy != 'most_specific' or rank <= SPECIFICITY.get(self.frequency_category, 0):
            self.warn(f'Conflicting frequency {frequency} from "{match.source_text}" ignored; keeping {self.frequency}')
            return
        self.warn(f'Frequency {frequency} from "{match.source_text}" overrides {self.frequency}')
        self.frequency = frequency
        self.frequency_category = match.type
        self._source('frequency', match, replace=True)

    def set_interval(self, interval: int, match: PatternMatch) -> None:
        if self.interval is None:
            self.interval = interval
            self._source('interval', match)
        elif interval != self.interval:
            self.warn(f'Conflicting interval {interval} from "{match.source_text}" ignored; keeping {self.interval}')
        else:
            self._source('interval', match)

    def add_weekdays(self, codes: Iterable[str], match: PatternMatch) -> None:
        self.weekdays.update(codes)
        self._source('by_weekday', match)

    def add_month_days(self, days: Iterable[int], match: PatternMatch) -> None:
        self.month_days.update(days)
        self._source('by_month_day', match)

    def add_set_positions(self, positions: Iterable[int], match: PatternMatch) -> None:
        self.set_positions.update(positions)
        self._source('by_set_position', match)

    def set_until(self, until, match: PatternMatch) -> None:
        if self.until is None:
            self.until = until
            self._source('until', match)
        elif until != self.until:
            self.warn(f'Ambiguous end condition: "{match.source_text}" ignored; keeping {self.until.isoformat()}')

    def record(self, match: PatternMatch) -> None:
        self.confidence = min(self.confidence, match.confidence)
        name = match.handler or match.type
        if name not in self.matched_patterns:
            self.matched_patterns.append(name)
        for w in match.warnings:
            self.warn(w)

    def freeze(self) -> RecurrenceDescriptor:
        return RecurrenceDescriptor(
            frequency=self.frequency,
            interval=self.interval,
            by_weekday=tuple(sorted(self.weekdays, key=WEEKDAY_ORDER.index)) or None,
            by_month_day=tuple(sorted(self.month_days)) or None,
            by_set_position=tuple(sorted(self.set_positions)) or None,
            until=self.until,
            confidence=self.confidence,
            matched_patterns=tuple(self.matched_patterns),
            warnings=tuple(self.warnings),
            sources={k: tuple(v) for k, v in self.sources.items()},
        )


def combine(
    clause_results: Iterable[ClauseResult],
    registry: HandlerRegistry | None = None,
    policy: str = 'first',
    text: str = '',
) -> RecurrenceDescriptor | UnrecognizedResult:
    registry = registry or DEFAULT_REGISTRY
    working = WorkingDescriptor(policy)
    clause_results = sorted(clause_results, key=lambda r: r.clause_index)
    matched = False
    for result in clause_results:
        for w in result.warnings:
            working.warn(w)
        ordered = sorted(result.matches, key=lambda m: -registry.priority_of(m.handler))
        for match in ordered:
            handler = registry.get(match.handler)
            if handler is None:
                logger.warning('no pattern handler registered as %r; match dropped', match.handler)
                continue
            matched = True
            working.record(match)
            handler.processor(working, match)
    if not matched:
        return UnrecognizedResult(text=text, warnings=tuple(working.warnings))
    return working.freeze()
