"""Vocabulary tagging for recurrence clauses, backed by spaCy.

``build_pipeline()`` returns a blank English pipeline (no model download)
with a whitespace-and-punctuation tokenizer and a ``recurrence_tagger``
component. The component stores vocabulary tags on every token as
``token._.rr_tags``, e.g. ``('PluralWeekDay', 'WeekDay')`` for "mondays".

Recognizers query a tagged ``Doc`` (or a ``Span`` of it) with ordinary spaCy
``Matcher`` token patterns. ``tagged()`` builds the pattern entry for "a token
carrying any of these tags"::

    find(doc, [tagged('Every'), {'LOWER': 'other'}, tagged('TimeUnit', 'WeekDay')])
"""
import json
import logging
import re
import threading

import spacy
from spacy.language import Language
from spacy.matcher import Matcher
from spacy.tokenizer import Tokenizer
from spacy.tokens import Doc, Span, Token

from .constants import (
    CARDINAL_WORDS,
    DAY_ABBREVIATIONS,
    DAY_NAMES,
    FREQUENCY_WORDS,
    MONTH_ABBREVIATIONS,
    MONTH_NAMES,
    NAMED_INTERVALS,
    ORDINAL_WORD_MAP,
    PLURAL_DAY_NAMES,
    RANGE_WORDS,
    TIME_UNITS,
    UNTIL_WORDS,
    WEEKDAY_GROUPS,
)
from .errors import PatternError

logger = logging.getLogger(__name__)

TAG_ATTR = 'rr_tags'
if not Token.has_extension(TAG_ATTR):
    Token.set_extension(TAG_ATTR, default=())

_ORDINAL_DIGITS_RE = re.compile(r'^(\d+)(?:st|nd|rd|th)$')
_PREFIX_RE = re.compile(r'''^[\[\("',.;:!?]''')
_SUFFIX_RE = re.compile(r'''[\]\)"',.;:!?]$''')


def tagged(*tags: str) -> dict:
    """Pattern entry for a token carrying any of ``tags``."""
    return {'_': {TAG_ATTR: {'INTERSECTS': list(tags)}}}


def _words(*tables) -> dict:
    return {'LOWER': {'IN': sorted({w for table in tables for w in table})}}


TAG_PATTERNS = {
    'WeekDay': [[_words(DAY_NAMES, PLURAL_DAY_NAMES)]],
    'PluralWeekDay': [[_words(PLURAL_DAY_NAMES)]],
    'WeekDayAbbr': [[_words(DAY_ABBREVIATIONS)]],
    'DayGroup': [[_words(WEEKDAY_GROUPS)]],
    'Frequency': [[_words(FREQUENCY_WORDS)]],
    'IntervalWord': [[_words(NAMED_INTERVALS, ['other'])]],
    'UntilWord': [[_words(UNTIL_WORDS)]],
    'OrdinalNumber': [[_words(ORDINAL_WORD_MAP)], [{'LOWER': {'REGEX': _ORDINAL_DIGITS_RE.pattern}}]],
    'CardinalNumber': [[{'IS_DIGIT': True}], [_words(CARDINAL_WORDS)]],
    'Every': [[{'LOWER': 'every'}]],
    'TimeUnit': [[_words(TIME_UNITS)]],
    'Month': [[_words(MONTH_NAMES, MONTH_ABBREVIATIONS)]],
    'Punctuation': [[{'IS_PUNCT': True}]],
}

# "monday through friday" / "january to march" are ranges, not end dates
RANGE_PATTERNS = [
    [tagged('WeekDay', 'WeekDayAbbr'), _words(RANGE_WORDS), tagged('WeekDay', 'WeekDayAbbr')],
    [tagged('Month'), _words(RANGE_WORDS), tagged('Month')],
]


class RecurrenceTagger:
    """Pipeline component writing vocabulary tags to ``token._.rr_tags``."""

    def __init__(self, vocab):
        self.matcher = Matcher(vocab)
        for tag, patterns in TAG_PATTERNS.items():
            self.matcher.add(tag, patterns)
        self.ranges = Matcher(vocab)
        self.ranges.add('RangeWord', RANGE_PATTERNS)

    def __call__(self, doc: Doc) -> Doc:
        found = [set() for _ in doc]
        for match_id, start, end in self.matcher(doc):
            label = doc.vocab.strings[match_id]
            for i in range(start, end):
                found[i].add(label)
        for token, tags in zip(doc, found):
            token._.set(TAG_ATTR, tuple(sorted(tags)))
        for _, start, end in self.ranges(doc):
            word = doc[start + 1]
            tags = (set(word._.get(TAG_ATTR)) - {'UntilWord'}) | {'RangeWord'}
            word._.set(TAG_ATTR, tuple(sorted(tags)))
        return doc


@Language.factory('recurrence_tagger')
def create_recurrence_tagger(nlp: Language, name: str) -> RecurrenceTagger:
    return RecurrenceTagger(nlp.vocab)


def _tokenizer(nlp: Language) -> Tokenizer:
    # split on whitespace and peel off surrounding punctuation; no infixes,
    # so "thirty-first" and "bi-weekly" stay single tokens
    return Tokenizer(nlp.vocab, prefix_search=_PREFIX_RE.search, suffix_search=_SUFFIX_RE.search)


def build_pipeline() -> Language:
    nlp = spacy.blank('en')
    nlp.tokenizer = _tokenizer(nlp)
    nlp.add_pipe('recurrence_tagger')
    return nlp


_nlp: Language | None = None
_nlp_lock = threading.Lock()


def get_pipeline() -> Language:
    """Shared default pipeline, built on first use."""
    global _nlp
    with _nlp_lock:
        if _nlp is None:
            _nlp = build_pipeline()
            logger.debug('built recurrence tagging pipeline %s', _nlp.pipe_names)
        return _nlp


def tags_of(token: Token) -> tuple:
    return token._.get(TAG_ATTR)


def has_tag(token: Token, *tags: str) -> bool:
    own = token._.get(TAG_ATTR)
    return any(t in own for t in tags)


def term_number(token: Token) -> int | None:
    """Numeric value of an ordinal or cardinal token, else None.

    'last' maps to -1; '3rd', 'third', '3' and 'three' all map to 3.
    """
    n = token.lower_
    if has_tag(token, 'OrdinalNumber'):
        m = _ORDINAL_DIGITS_RE.match(n)
        if m:
            return int(m.group(1))
        return ORDINAL_WORD_MAP.get(n)
    if has_tag(token, 'CardinalNumber'):
        if n.isdigit():
            return int(n)
        return CARDINAL_WORDS.get(n)
    return None


_matchers: dict = {}
_matchers_lock = threading.Lock()


def compile_pattern(pattern: list, vocab=None) -> Matcher:
    """Return a cached ``Matcher`` for one token pattern. Raises PatternError."""
    if not pattern or not isinstance(pattern, list):
        raise PatternError('empty token pattern', repr(pattern))
    vocab = vocab if vocab is not None else get_pipeline().vocab
    try:
        key = (vocab, json.dumps(pattern, sort_keys=True))
    except TypeError as exc:
        raise PatternError(f'token pattern is not serializable: {exc}', repr(pattern)) from exc
    with _matchers_lock:
        matcher = _matchers.get(key)
        if matcher is None:
            matcher = Matcher(vocab)
            try:
                matcher.add('pattern', [pattern])
            except (ValueError, KeyError, TypeError) as exc:
                raise PatternError(f'invalid token pattern: {exc}', repr(pattern)) from exc
            _matchers[key] = matcher
    return matcher


def find(doclike, pattern: list) -> list[Span]:
    """Leftmost-longest, non-overlapping matches of ``pattern`` in ``doclike``."""
    matcher = compile_pattern(pattern, doclike.vocab)
    spans = sorted(matcher(doclike, as_spans=True), key=lambda s: (s.start, -len(s)))
    out: list[Span] = []
    taken = 0
    for span in spans:
        if len(span) == 0 or span.start < taken:
            continue
        out.append(span)
        taken = span.end
    return out


def head(doc: Doc, stop_tag: str = 'UntilWord') -> Span:
    """Tokens before the first ``stop_tag`` token (the whole doc if none).

    Recognizers other than the end-date one only read the head, so "until
    next year" never reads as YEARLY.
    """
    for token in doc:
        if has_tag(token, stop_tag):
            return doc[:token.i]
    return doc[:]


class TaggingAdapter:
    """Seam between recognizers and the spaCy pipeline.

    Any ``Language`` whose pipeline fills ``token._.rr_tags`` can stand in
    for the default one.
    """

    def __init__(self, nlp: Language | None = None):
        self.nlp = nlp if nlp is not None else get_pipeline()

    def tag(self, text: str) -> Doc:
        return self.nlp(text)

    def match(self, doclike, pattern: list) -> list[Span]:
        return find(doclike, pattern)
