"""Frequency recognizer: "daily", "weekly", "every month", ...

Only looks at the part of the clause before an end-date keyword so that
"until next year" does not read as YEARLY.
"""
from ..constants import CATEGORY_FREQUENCY, FREQUENCY_WORDS, PATTERN_PRIORITY, TIME_UNITS
from ..tagging import find, head, tagged
from .base import create_pattern_handler, make_match

FREQUENCY_WORD = [tagged('Frequency')]
EVERY_UNIT = [tagged('Every'), {'LOWER': {'IN': ['day', 'week', 'month', 'year']}}]


def frequency_word_matcher(doc, ctx):
    spans = find(head(doc), FREQUENCY_WORD)
    if not spans:
        return None
    span = spans[0]
    return make_match(CATEGORY_FREQUENCY, {'frequency': FREQUENCY_WORDS[span[0].lower_]}, span)


def every_unit_matcher(doc, ctx):
    spans = find(head(doc), EVERY_UNIT)
    if not spans:
        return None
    span = spans[0]
    return make_match(CATEGORY_FREQUENCY, {'frequency': TIME_UNITS[span[1].lower_]}, span)


def apply_frequency(working, match):
    working.set_frequency(match.value['frequency'], match)


frequency_handler = create_pattern_handler(
    'frequency',
    [frequency_word_matcher, every_unit_matcher],
    apply_frequency,
    category=CATEGORY_FREQUENCY,
    priority=PATTERN_PRIORITY[CATEGORY_FREQUENCY],
    description='Bare frequency words and "every day/week/month/year".',
)
