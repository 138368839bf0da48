"""Canonicalize raw recurrence text before splitting and recognition.

normalize() lowercases, tidies whitespace and punctuation, rewrites synonym
phrases to their canonical form and optionally corrects misspelled day and
month names. It is pure and idempotent: normalizing already-normalized text
returns it unchanged.
"""
import logging
import re
from typing import Callable

from . import config
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
    TERM_SYNONYMS,
    TIME_UNITS,
    UNTIL_WORDS,
    WEEKDAY_GROUPS,
)
from .fuzzy import make_corrector

logger = logging.getLogger(__name__)

_WS_RE = re.compile(r'\s+')
_COMMA_RE = re.compile(r'\s*,\s*')
_TRAILING_RE = re.compile(r'[\s.!?,;]+$')
_TO_LAST_RE = re.compile(r'-to-last\b')

# one alternation, longest key first, so overlapping synonyms resolve to the
# longest phrase; a replacement can feed another synonym ("each fortnight" ->
# "every fortnight" -> "fortnightly"), so the pass repeats until stable
_SYNONYM_RE = re.compile(
    r'(?<![\w-])('
    + '|'.join(re.escape(k) for k in sorted(TERM_SYNONYMS, key=len, reverse=True))
    + r')(?![\w-])'
)

_MAX_SYNONYM_PASSES = 5

_WORD_RE = re.compile(r'(?<![\w-])[a-z]+(?![\w-])')

KNOWN_WORDS = frozenset(
    list(DAY_NAMES) + list(DAY_ABBREVIATIONS) + list(PLURAL_DAY_NAMES)
    + list(MONTH_NAMES) + list(MONTH_ABBREVIATIONS)
    + list(FREQUENCY_WORDS) + list(TIME_UNITS) + list(NAMED_INTERVALS)
    + list(WEEKDAY_GROUPS) + list(UNTIL_WORDS) + list(CARDINAL_WORDS)
    + list(ORDINAL_WORD_MAP)
    + ['every', 'other', 'and', 'the', 'of', 'on', 'to', 'day', 'end', 'next', 'this']
)

_default_correctors: dict[float, Callable[[str], str]] = {}


def _default_corrector(threshold: float) -> Callable[[str], str]:
    corrector = _default_correctors.get(threshold)
    if corrector is None:
        corrector = make_corrector(threshold)
        _default_correctors[threshold] = corrector
    return corrector


def clean_text(text: str) -> str:
    """Lowercase and tidy whitespace, commas and trailing punctuation."""
    t = text.lower()
    t = _TO_LAST_RE.sub(' to last', t)
    t = _WS_RE.sub(' ', t)
    t = _COMMA_RE.sub(', ', t)
    t = _TRAILING_RE.sub('', t)
    return t.strip()


def apply_synonyms(text: str) -> str:
    for _ in range(_MAX_SYNONYM_PASSES):
        rewritten = _SYNONYM_RE.sub(lambda m: TERM_SYNONYMS[m.group(1)], text)
        if rewritten == text:
            break
        text = rewritten
    else:
        logger.warning('synonym rewriting did not settle for %r', text)
    return text


def correct_words(
    text: str,
    corrector: Callable[[str], str],
    corrections: list | None = None,
) -> str:
    def _fix(m: re.Match) -> str:
        word = m.group(0)
        if len(word) < 3 or word in KNOWN_WORDS:
            return word
        try:
            fixed = corrector(word)
        except Exception:
            logger.exception('misspelling corrector failed for %r', word)
            return word
        if fixed and fixed != word:
            if corrections is not None:
                corrections.append((word, fixed))
            return fixed
        return word

    return _WORD_RE.sub(_fix, text)


def normalize(
    text: str,
    correct_misspellings: bool = True,
    corrector: Callable[[str], str] | None = None,
    threshold: float | None = None,
    corrections: list | None = None,
) -> str:
    """Return the canonical form of ``text``.

    When ``correct_misspellings`` is set, alphabetic words that are not part
    of the recurrence vocabulary are passed through ``corrector`` (by default
    a rapidfuzz matcher over day and month names). Each applied correction is
    appended to ``corrections`` as an ``(original, corrected)`` pair.
    """
    if not text:
        return ''
    t = apply_synonyms(clean_text(text))
    if correct_misspellings:
        if corrector is None:
            corrector = _default_corrector(threshold if threshold is not None else config.FUZZY_THRESHOLD)
        t = correct_words(t, corrector, corrections)
    return _WS_RE.sub(' ', t).strip()
