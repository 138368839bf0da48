"""Misspelling correction for day and month names, backed by rapidfuzz."""
import logging
from typing import Callable, Iterable, Sequence

from rapidfuzz import fuzz, process

from .constants import DAY_NAMES, MONTH_NAMES

logger = logging.getLogger(__name__)


def best_match(word: str, candidates: Sequence[str], threshold: float) -> str | None:
    """Return the candidate most similar to ``word`` if it clears ``threshold``.

    ``threshold`` is a 0..1 similarity; rapidfuzz scores are 0..100.
    """
    if not word or not candidates:
        return None
    hit = process.extractOne(word, candidates, scorer=fuzz.ratio, score_cutoff=threshold * 100)
    if hit is None:
        return None
    return hit[0]


def make_corrector(
    threshold: float,
    candidate_lists: Iterable[Sequence[str]] = (DAY_NAMES, MONTH_NAMES),
) -> Callable[[str], str]:
    """Build a ``correct(word) -> word`` callable.

    Candidate lists are tried in order and the first list with a match above
    the threshold wins, so day names take precedence over month names.
    Words without a close candidate are returned unchanged.
    """
    lists = [tuple(c) for c in candidate_lists]

    def correct(word: str) -> str:
        for candidates in lists:
            if word in candidates:
                return word
            hit = best_match(word, candidates, threshold)
            if hit is not None:
                logger.debug('corrected %r -> %r', word, hit)
                return hit
        return word

    return correct
