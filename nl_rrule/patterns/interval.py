"""Interval recognizer: "biweekly", "every 3 weeks", "every other day"."""
from ..constants import CATEGORY_INTERVAL, NAMED_INTERVALS, PATTERN_PRIORITY, TIME_UNITS
from ..tagging import find, head, tagged, term_number
from .base import create_pattern_handler, make_match

_UNIT = tagged('TimeUnit', 'WeekDay', 'WeekDayAbbr', 'DayGroup')

NAMED_INTERVAL = [{'LOWER': {'IN': sorted(NAMED_INTERVALS)}}]
EVERY_N_UNITS = [tagged('Every'), tagged('CardinalNumber', 'OrdinalNumber'), _UNIT]
EVERY_OTHER_UNIT = [tagged('Every'), {'LOWER': 'other'}, _UNIT]


def _unit_frequency(token) -> str:
    # "every 2 mondays" / "every other weekend" repeat weekly
    return TIME_UNITS.get(token.lower_, 'WEEKLY')


def named_interval_matcher(doc, ctx):
    spans = find(head(doc), NAMED_INTERVAL)
    if not spans:
        return None
    span = spans[0]
    freq, interval = NAMED_INTERVALS[span[0].lower_]
    return make_match(CATEGORY_INTERVAL, {'frequency': freq, 'interval': interval}, span)


def numeric_interval_matcher(doc, ctx):
    tokens = head(doc)
    for span in find(tokens, EVERY_N_UNITS):
        # "every 2nd tuesday of the month" is a position, not an interval
        if span.end < len(tokens) and tokens[span.end].lower_ == 'of':
            continue
        n = term_number(span[1])
        if n is None or n <= 0:
            return None
        return make_match(CATEGORY_INTERVAL, {'frequency': _unit_frequency(span[2]), 'interval': n}, span)
    return None


def every_other_matcher(doc, ctx):
    spans = find(head(doc), EVERY_OTHER_UNIT)
    if not spans:
        return None
    span = spans[0]
    return make_match(CATEGORY_INTERVAL, {'frequency': _unit_frequency(span[2]), 'interval': 2}, span)


def apply_interval(working, match):
    working.set_frequency(match.value['frequency'], match)
    working.set_interval(match.value['interval'], match)


interval_handler = create_pattern_handler(
    'interval',
    [named_interval_matcher, numeric_interval_matcher, every_other_matcher],
    apply_interval,
    category=CATEGORY_INTERVAL,
    priority=PATTERN_PRIORITY[CATEGORY_INTERVAL],
    description='Named intervals, "every N <unit>" and "every other <unit>".',
)
