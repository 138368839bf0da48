"""Split compound recurrence text into independently recognizable clauses.

"every monday and the 15th of every month" describes two facts and is split
at the conjunction. Idioms such as "1st and 15th" or "monday through friday"
describe one fact even though they contain a conjunction. They are swapped
for placeholders before splitting and restored verbatim afterwards.
"""
from dataclasses import dataclass, field
import logging
import re
from typing import Iterable

from .constants import (
    DAY_ABBREVIATIONS,
    DAY_NAMES,
    MONTH_ABBREVIATIONS,
    MONTH_NAMES,
    ORDINAL_WORD_MAP,
    PROTECTED_PHRASES,
    UNTIL_WORDS,
)
from .models import Clause

logger = logging.getLogger(__name__)

PLACEHOLDER = '{{PROTECTED_%d}}'

_SEPARATOR_RE = re.compile(r'(\s*,\s*(?:and\s+)?|\s+and\s+)')
_EDGE_START_RE = re.compile(r'^(?:\s*(?:and\b|,))+\s*')
_EDGE_END_RE = re.compile(r'(?:\s*(?:\band|,))+\s*$')

_ORD = (
    r'(?:\d{1,2}(?:st|nd|rd|th)|'
    + '|'.join(re.escape(w) for w in sorted(ORDINAL_WORD_MAP, key=len, reverse=True))
    + ')'
)
_SEP = r'(?:\s*,\s*(?:and\s+)?|\s+and\s+)'
_ORDINAL_COMBO_RE = re.compile(rf'(?<![\w-]){_ORD}(?:{_SEP}(?:the\s+)?{_ORD})+(?![\w-])')

_DAY = '(?:' + '|'.join(sorted(list(DAY_NAMES) + list(DAY_ABBREVIATIONS), key=len, reverse=True)) + ')'
_DAY_RANGE_RE = re.compile(rf'\b{_DAY}\s+(?:through|thru|to)\s+{_DAY}\b')

_MONTH = '(?:' + '|'.join(sorted(list(MONTH_NAMES) + list(MONTH_ABBREVIATIONS), key=len, reverse=True)) + ')'
_MONTH_RANGE_RE = re.compile(rf'\b{_MONTH}\s+(?:through|thru|to)\s+{_MONTH}\b')

_WEEKEND_REF_RE = re.compile(r'\b(?:saturday and sunday|sunday and saturday)\b')

# "first monday and last friday of the month"
_POSITIONAL_LIST_RE = re.compile(
    rf'(?<![\w-]){_ORD}(?:{_SEP}{_ORD})*\s+{_DAY}s?'
    rf'(?:{_SEP}{_ORD}(?:{_SEP}{_ORD})*\s+{_DAY}s?)+'
    r'\s+of\s+(?:(?:the|every|each)\s+)?months?\b'
)

_UNTIL_TAIL_RE = re.compile(r'\b(?:' + '|'.join(UNTIL_WORDS) + r')\b.*$')


@dataclass
class SplitResult:
    clauses: list[str] = field(default_factory=list)
    separators: list[str] = field(default_factory=list)

    def rejoin(self) -> str:
        """Rebuild the text from clauses and the separators between them."""
        if not self.clauses:
            return ''
        parts = [self.clauses[0]]
        for sep, clause in zip(self.separators, self.clauses[1:]):
            parts.append(sep)
            parts.append(clause)
        return ''.join(parts)


def find_protected_phrases(text: str, extra: Iterable[str] = ()) -> list[str]:
    """Return the protected phrases present in ``text``, longest first."""
    found = set()
    for phrase in list(PROTECTED_PHRASES) + list(extra):
        if phrase and _phrase_re(phrase).search(text):
            found.add(phrase)
    for rx in (_POSITIONAL_LIST_RE, _ORDINAL_COMBO_RE, _DAY_RANGE_RE, _MONTH_RANGE_RE, _WEEKEND_REF_RE):
        for m in rx.finditer(text):
            found.add(m.group(0))
    return sorted(found, key=lambda p: (-len(p), p))


def _phrase_re(phrase: str) -> re.Pattern:
    return re.compile(r'(?<![\w-])' + re.escape(phrase) + r'(?![\w-])')


def protect(text: str, phrases: Iterable[str]) -> tuple[str, list[str]]:
    """Swap each phrase occurrence for a placeholder.

    Returns the rewritten text and the list of originals, where index ``n``
    is the text behind ``{{PROTECTED_n}}``. An end-date tail is protected
    last so commas inside a date never split.
    """
    originals: list[str] = []

    def _swap(m: re.Match) -> str:
        originals.append(m.group(0))
        return PLACEHOLDER % (len(originals) - 1)

    for phrase in phrases:
        text = _phrase_re(phrase).sub(_swap, text)
    text = _UNTIL_TAIL_RE.sub(_swap, text, count=1)
    return text, originals


def restore(text: str, originals: list[str]) -> str:
    # newest first: the until tail may itself contain earlier placeholders
    for n in range(len(originals) - 1, -1, -1):
        text = text.replace(PLACEHOLDER % n, originals[n])
    return text


def split_pattern(text: str, protected_phrases: Iterable[str] = ()) -> SplitResult:
    """Split ``text`` at conjunctions, keeping protected phrases whole."""
    result = SplitResult()
    if not text or not text.strip():
        return result
    phrases = find_protected_phrases(text, protected_phrases)
    guarded, originals = protect(text, phrases)
    pieces = _SEPARATOR_RE.split(guarded)
    # re.split with one capture group alternates segment, separator, segment...
    segments = pieces[0::2]
    separators = pieces[1::2]
    pending_sep = ''
    for i, seg in enumerate(segments):
        # trim before restoring; protected phrases may end in "and" or ","
        clause = _EDGE_END_RE.sub('', _EDGE_START_RE.sub('', seg))
        clause = restore(clause, originals).strip()
        if i > 0:
            pending_sep += restore(separators[i - 1], originals)
        if not clause:
            continue
        if result.clauses:
            result.separators.append(pending_sep)
        result.clauses.append(clause)
        pending_sep = ''
    logger.debug('split %r into %d clause(s)', text, len(result.clauses))
    return result


def split(text: str, protected_phrases: Iterable[str] = ()) -> list[str]:
    return split_pattern(text, protected_phrases).clauses


def split_clauses(text: str, protected_phrases: Iterable[str] = ()) -> list[Clause]:
    return [Clause(text=c, index=i) for i, c in enumerate(split(text, protected_phrases))]
