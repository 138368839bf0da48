"""Value types passed between pipeline stages.

Everything a recognizer or the combiner hands back is a frozen dataclass so
results can be cached and shared. ``ParserConfig`` is a pydantic model
because it is built from user input and needs validation.
"""
from dataclasses import dataclass, field
from datetime import date
import json
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import config as _config
from .constants import CATEGORIES, DESCRIPTOR_FIELDS, FREQUENCIES, WEEKDAY_ORDER


@dataclass(frozen=True)
class RecurrenceDescriptor:
    frequency: str | None = None
    interval: int | None = None
    by_weekday: tuple[str, ...] | None = None
    by_month_day: tuple[int, ...] | None = None
    by_set_position: tuple[int, ...] | None = None
    until: date | None = None
    confidence: float = 1.0
    matched_patterns: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    sources: dict = field(default_factory=dict, compare=False, hash=False)

    recognized = True

    def __bool__(self) -> bool:
        return True

    def to_dict(self) -> dict:
        """Return the recurrence as a plain dict.

        Uses the same keys as the rrule export helpers: freq, interval,
        byweekday, bymonthday, bysetpos and until. Unset fields are omitted.
        """
        out: dict = {}
        if self.frequency:
            out['freq'] = self.frequency
        if self.interval is not None:
            out['interval'] = self.interval
        if self.by_weekday:
            out['byweekday'] = list(self.by_weekday)
        if self.by_month_day:
            out['bymonthday'] = list(self.by_month_day)
        if self.by_set_position:
            out['bysetpos'] = list(self.by_set_position)
        if self.until is not None:
            out['until'] = self.until
        return out


@dataclass(frozen=True)
class UnrecognizedResult:
    """Returned when no recognizer matched anything in the input."""
    text: str
    warnings: tuple[str, ...] = ()
    matched_patterns: tuple[str, ...] = ()
    confidence: float = 0.0

    recognized = False

    def __bool__(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {}


@dataclass(frozen=True)
class PatternMatch:
    type: str
    value: dict
    source_text: str
    confidence: float = 1.0
    warnings: tuple[str, ...] = ()
    handler: str = ''
    clause_index: int = -1


@dataclass(frozen=True)
class Clause:
    text: str
    index: int


@dataclass(frozen=True)
class ClauseResult:
    clause_index: int
    text: str
    matches: tuple[PatternMatch, ...] = ()
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    confidence: float

    def __bool__(self) -> bool:
        return self.valid


def _check_weekdays(values) -> tuple[str, ...]:
    out = []
    for v in values:
        code = str(v).upper()
        if code not in WEEKDAY_ORDER:
            raise ValueError(f'unknown weekday code {v!r}')
        if code not in out:
            out.append(code)
    return tuple(sorted(out, key=WEEKDAY_ORDER.index))


def _check_month_days(values) -> tuple[int, ...]:
    out = set()
    for v in values:
        n = int(v)
        if n == 0 or not -31 <= n <= 31:
            raise ValueError(f'month day out of range: {v!r}')
        out.add(n)
    return tuple(sorted(out))


class ParserConfig(BaseModel):
    """Validated options for a ``RecurrenceParser``."""
    model_config = ConfigDict(frozen=True, extra='forbid', validate_default=True)

    correct_misspellings: bool = Field(default_factory=lambda: _config.CORRECT_MISSPELLINGS)
    fuzzy_threshold: float = Field(default_factory=lambda: _config.FUZZY_THRESHOLD, gt=0, le=1)
    enabled_categories: tuple[str, ...] | None = None
    disabled_categories: tuple[str, ...] = ()
    defaults: dict[str, Any] = Field(default_factory=dict)
    custom_protected_phrases: tuple[str, ...] = ()
    conflict_policy: Literal['first', 'most_specific'] = Field(
        default_factory=lambda: _config.CONFLICT_POLICY)
    cache_size: int = Field(default_factory=lambda: _config.CACHE_SIZE, ge=0)

    @field_validator('enabled_categories', 'disabled_categories', mode='before')
    @classmethod
    def _categories(cls, v):
        if v is None:
            return v
        if isinstance(v, str):
            v = [v]
        out = []
        for c in v:
            c = str(c).strip().lower()
            if c not in CATEGORIES:
                raise ValueError(f'unknown pattern category {c!r}')
            out.append(c)
        return tuple(sorted(set(out)))

    @field_validator('custom_protected_phrases', mode='before')
    @classmethod
    def _phrases(cls, v):
        if isinstance(v, str):
            v = [v]
        out = []
        for p in v or ():
            p = ' '.join(str(p).lower().split())
            if not p:
                raise ValueError('protected phrases must not be empty')
            if '{{' in p or '}}' in p:
                raise ValueError(f'protected phrase {p!r} contains placeholder markers')
            out.append(p)
        return tuple(out)

    @field_validator('defaults', mode='before')
    @classmethod
    def _defaults(cls, v):
        if v is None:
            return {}
        if isinstance(v, RecurrenceDescriptor):
            v = {k: getattr(v, k) for k in DESCRIPTOR_FIELDS if getattr(v, k) is not None}
        if not isinstance(v, dict):
            raise ValueError('defaults must be a mapping')
        out: dict[str, Any] = {}
        for key, value in v.items():
            if key not in DESCRIPTOR_FIELDS:
                raise ValueError(f'unknown default field {key!r}')
            if value is None:
                continue
            if key == 'frequency':
                value = str(value).upper()
                if value not in FREQUENCIES:
                    raise ValueError(f'unknown frequency {value!r}')
            elif key == 'interval':
                value = int(value)
                if value < 1:
                    raise ValueError('interval must be a positive integer')
            elif key == 'by_weekday':
                value = _check_weekdays([value] if isinstance(value, str) else value)
            elif key in ('by_month_day', 'by_set_position'):
                value = _check_month_days([value] if isinstance(value, int) else value)
            elif key == 'until':
                if isinstance(value, str):
                    value = date.fromisoformat(value)
                elif not isinstance(value, date):
                    raise ValueError('until must be a date')
            out[key] = value
        return out

    def fingerprint(self) -> str:
        """Canonical string used as part of the result cache key."""
        return json.dumps(self.model_dump(mode='json'), sort_keys=True, default=str)
