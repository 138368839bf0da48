"""Public entry points: ``RecurrenceParser`` and module-level helpers.

    >>> parse_recurrence('every other monday').to_dict()
    {'freq': 'WEEKLY', 'interval': 2, 'byweekday': ['MO']}

``parse`` never raises for bad input text; only a bad configuration raises,
once, when the parser is constructed.
"""
from collections import OrderedDict
import dataclasses
from datetime import date, datetime
import logging
import threading
from typing import Callable

from pydantic import ValidationError

from .combiner import combine
from .dates import DateResolver
from .defaults import apply_defaults
from .errors import ConfigurationError
from .models import ParserConfig, UnrecognizedResult, ValidationResult
from .normalizer import normalize
from .processor import process
from .registry import DEFAULT_REGISTRY, HandlerRegistry
from .rrule import build_rrule
from .splitter import split_clauses
from .tagging import TaggingAdapter

logger = logging.getLogger(__name__)


def _coerce_config(config) -> ParserConfig:
    if config is None:
        try:
            return ParserConfig()
        except ValidationError as exc:
            raise ConfigurationError(f'invalid environment configuration: {exc}') from exc
    if isinstance(config, ParserConfig):
        return config
    if isinstance(config, dict):
        try:
            return ParserConfig(**config)
        except ValidationError as exc:
            raise ConfigurationError(f'invalid parser configuration: {exc}') from exc
    raise ConfigurationError(f'unsupported configuration type {type(config).__name__}')


def _anchor_date(anchor) -> date:
    if anchor is None:
        return date.today()
    if isinstance(anchor, datetime):
        return anchor.date()
    return anchor


class RecurrenceParser:
    """Natural-language recurrence parser with a bounded result cache.

    Collaborators can be swapped: ``registry`` (recognizers), ``tagger``
    (a ``TaggingAdapter`` or a spaCy ``Language`` that fills
    ``token._.rr_tags``), ``resolver`` (``(phrase, anchor) -> date``) and
    ``corrector`` (``word -> word``).
    """

    def __init__(
        self,
        config: ParserConfig | dict | None = None,
        *,
        registry: HandlerRegistry | None = None,
        tagger=None,
        resolver: Callable | None = None,
        corrector: Callable[[str], str] | None = None,
    ):
        self.config = _coerce_config(config)
        base = registry or DEFAULT_REGISTRY
        known = base.categories
        for cat in (self.config.enabled_categories or ()) + self.config.disabled_categories:
            if cat not in known:
                raise ConfigurationError(f'category {cat!r} has no registered pattern handler')
        self.registry = base.enabled(self.config.enabled_categories, self.config.disabled_categories)
        if tagger is None or isinstance(tagger, TaggingAdapter):
            self.adapter = tagger or TaggingAdapter()
        else:
            self.adapter = TaggingAdapter(tagger)
        self.resolver = resolver or DateResolver()
        self.corrector = corrector
        self._fingerprint = self.config.fingerprint()
        self._cache: OrderedDict = OrderedDict()
        self._lock = threading.Lock()

    def _cache_get(self, key):
        with self._lock:
            if key not in self._cache:
                return None
            self._cache.move_to_end(key)
            return self._cache[key]

    def _cache_put(self, key, value) -> None:
        size = self.config.cache_size
        if size <= 0:
            return
        with self._lock:
            self._cache[key] = value
            self._cache.move_to_end(key)
            while len(self._cache) > size:
                self._cache.popitem(last=False)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def parse(self, text, anchor: date | datetime | None = None):
        """Parse ``text`` into a RecurrenceDescriptor or UnrecognizedResult."""
        if not isinstance(text, str) or not text.strip():
            return UnrecognizedResult(text=text if isinstance(text, str) else '',
                                      warnings=('Empty input',))
        anchor_day = _anchor_date(anchor)
        corrections: list = []
        normalized = self._normalize(text, corrections)
        key = (normalized, tuple(corrections), anchor_day, self._fingerprint)
        cached = self._cache_get(key)
        if cached is not None:
            # inputs that normalize alike share an entry; echo this caller's text
            if isinstance(cached, UnrecognizedResult) and cached.text != text:
                return dataclasses.replace(cached, text=text)
            return cached
        try:
            result = self._run(text, normalized, corrections, anchor_day)
        except Exception:
            # recognizer and tagger failures are already isolated; this only
            # guards against a broken custom collaborator further down
            logger.exception('recurrence parsing failed for %r', text)
            return UnrecognizedResult(text=text, warnings=('Internal error while parsing',))
        self._cache_put(key, result)
        return result

    def _normalize(self, text: str, corrections: list | None = None) -> str:
        return normalize(
            text,
            correct_misspellings=self.config.correct_misspellings,
            corrector=self.corrector,
            threshold=self.config.fuzzy_threshold,
            corrections=corrections,
        )

    def _analyze(self, text: str, normalized: str, anchor_day: date):
        """Split, recognize and combine; no defaults or correction notes."""
        clauses = split_clauses(normalized, self.config.custom_protected_phrases)
        logger.debug('parsing %r as clauses %r', normalized, [c.text for c in clauses])
        results = process(clauses, self.registry, adapter=self.adapter,
                          anchor=anchor_day, resolver=self.resolver)
        return combine(results, self.registry, self.config.conflict_policy, text=text)

    def _run(self, text: str, normalized: str, corrections: list, anchor_day: date):
        combined = self._analyze(text, normalized, anchor_day)
        if isinstance(combined, UnrecognizedResult):
            return combined
        result = apply_defaults(combined, self.config.defaults)
        if corrections:
            notes = tuple(f'Corrected "{a}" to "{b}"' for a, b in corrections)
            result = dataclasses.replace(result, warnings=notes + result.warnings)
        return result

    def validate(self, text, anchor: date | datetime | None = None) -> ValidationResult:
        """Check whether ``text`` describes a recurrence.

        Stops after combining clauses: no defaults are filled and no rule
        is built. A configured default frequency still makes a frequency-less
        text valid.
        """
        if not isinstance(text, str) or not text.strip():
            return ValidationResult(valid=False, confidence=0.0)
        try:
            combined = self._analyze(text, self._normalize(text), _anchor_date(anchor))
        except Exception:
            logger.exception('recurrence validation failed for %r', text)
            return ValidationResult(valid=False, confidence=0.0)
        if not combined.recognized:
            return ValidationResult(valid=False, confidence=0.0)
        has_frequency = combined.frequency is not None or 'frequency' in self.config.defaults
        return ValidationResult(valid=has_frequency, confidence=combined.confidence)

    def to_rrule(self, text, dtstart: datetime, anchor: date | datetime | None = None):
        """Parse ``text`` and build a dateutil rrule starting at ``dtstart``.

        Returns None when no frequency could be determined.
        """
        result = self.parse(text, anchor if anchor is not None else dtstart)
        if not result.recognized or result.frequency is None:
            return None
        return build_rrule(result, dtstart)


_default_parser: RecurrenceParser | None = None
_default_lock = threading.Lock()


def get_default_parser() -> RecurrenceParser:
    global _default_parser
    with _default_lock:
        if _default_parser is None:
            _default_parser = RecurrenceParser()
        return _default_parser


def _parser_for(config) -> RecurrenceParser:
    return get_default_parser() if config is None else RecurrenceParser(config)


def parse_recurrence(text, anchor=None, config=None):
    return _parser_for(config).parse(text, anchor)


def validate_recurrence(text, anchor=None, config=None) -> ValidationResult:
    return _parser_for(config).validate(text, anchor)


def create_rrule(text, dtstart: datetime, config=None):
    return _parser_for(config).to_rrule(text, dtstart)
