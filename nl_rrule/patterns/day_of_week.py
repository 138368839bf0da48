"""Day-of-week recognizer: "every monday", "tues and thurs", "weekdays".

Plural day names are read as recurring ("mondays" == "every monday").
A weekday that names a position ("first monday", "last friday of the month")
belongs to the day-of-month recognizer and is skipped here.
"""
import re

from ..constants import (
    CATEGORY_DAY_OF_WEEK,
    DAY_ABBREVIATIONS,
    DAY_NAMES,
    PATTERN_PRIORITY,
    PLURAL_DAY_NAMES,
    WEEKDAY_CODES,
    WEEKDAY_GROUPS,
    WEEKDAY_ORDER,
)
from ..tagging import has_tag, head
from .base import create_pattern_handler, make_match

_DAYS = '|'.join(DAY_NAMES)
_EVERY_PLURAL_RE = re.compile(rf'\b(every|each)\s+({_DAYS})s\b')
_BARE_PLURAL_RE = re.compile(rf'(?<!every )(?<!each )\b({_DAYS})s\b')


def normalize_day_names(text: str) -> str:
    """Rewrite plural day names as explicit recurrences.

    "mondays" -> "every monday"; "every mondays" -> "every monday".
    """
    text = _EVERY_PLURAL_RE.sub(r'\1 \2', text)
    return _BARE_PLURAL_RE.sub(r'every \1', text)


def weekday_code(token) -> str | None:
    n = token.lower_
    if n in WEEKDAY_CODES:
        return WEEKDAY_CODES[n]
    if n in PLURAL_DAY_NAMES:
        return WEEKDAY_CODES[PLURAL_DAY_NAMES[n]]
    return DAY_ABBREVIATIONS.get(n)


def expand_range(first: str, last: str) -> list[str]:
    """Inclusive weekday range, wrapping past Sunday ("fri to mon")."""
    i = WEEKDAY_ORDER.index(first)
    j = WEEKDAY_ORDER.index(last)
    if j < i:
        j += 7
    return [WEEKDAY_ORDER[k % 7] for k in range(i, j + 1)]


def sort_weekdays(codes) -> list[str]:
    return sorted(set(codes), key=WEEKDAY_ORDER.index)


def _is_positional(tokens, i: int) -> bool:
    # "first monday", "last friday of the month"; "every 2nd tuesday" is an interval
    if i == 0 or not has_tag(tokens[i - 1], 'OrdinalNumber'):
        return False
    return not (i >= 2 and has_tag(tokens[i - 2], 'Every'))


def weekday_matcher(doc, ctx):
    """Collect weekday names, abbreviations, plurals, ranges and groups.

    Everything in the clause head is unioned, so "weekends or mondays" gives
    SA, SU and MO. Weekdays with a position ("first monday") are left to the
    day-of-month recognizer.
    """
    tokens = head(doc)
    codes: list[str] = []
    only_abbr = True
    i = 0
    while i < len(tokens):
        t = tokens[i]
        if has_tag(t, 'DayGroup'):
            codes.extend(WEEKDAY_GROUPS[t.lower_])
            only_abbr = False
            i += 1
            continue
        code = weekday_code(t) if has_tag(t, 'WeekDay', 'WeekDayAbbr') else None
        if code is None or _is_positional(tokens, i):
            i += 1
            continue
        if has_tag(t, 'WeekDay'):
            only_abbr = False
        if (i + 2 < len(tokens) and has_tag(tokens[i + 1], 'RangeWord')
                and has_tag(tokens[i + 2], 'WeekDay', 'WeekDayAbbr')):
            end = weekday_code(tokens[i + 2])
            if has_tag(tokens[i + 2], 'WeekDay'):
                only_abbr = False
            codes.extend(expand_range(code, end))
            i += 3
            continue
        codes.append(code)
        i += 1
    if not codes:
        return None
    return make_match(
        CATEGORY_DAY_OF_WEEK,
        {'weekdays': sort_weekdays(codes)},
        normalize_day_names(tokens.text),
        confidence=0.9 if only_abbr else 1.0,
    )


def apply_day_of_week(working, match):
    working.add_weekdays(match.value['weekdays'], match)
    working.set_frequency('WEEKLY', match)


day_of_week_handler = create_pattern_handler(
    'day_of_week',
    [weekday_matcher],
    apply_day_of_week,
    category=CATEGORY_DAY_OF_WEEK,
    priority=PATTERN_PRIORITY[CATEGORY_DAY_OF_WEEK],
    description='Weekday names, abbreviations, ranges and weekday/weekend groups.',
)
