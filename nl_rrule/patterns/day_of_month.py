"""Day-of-month recognizer.

Handles:
  - "1st and 15th of every month", "on the 1st", "the 15th"
  - "first and last day of the month", "last day of month"
  - "second to last day of the month"
  - "first monday of the month", "last friday of every month",
    "first monday and last friday of the month"
  - "day 15 of the month"

Any out-of-range day rejects the whole match rather than keeping the valid
part of a list.
"""
import logging

from ..constants import CATEGORY_DAY_OF_MONTH, PATTERN_PRIORITY
from ..errors import InvalidDayError
from ..tagging import find, has_tag, head, tagged, term_number
from .base import create_pattern_handler, make_match
from .day_of_week import sort_weekdays, weekday_code

logger = logging.getLogger(__name__)

MONTH_SUFFIX = [
    {'LOWER': 'of'},
    {'LOWER': {'IN': ['the', 'every', 'each']}, 'OP': '?'},
    {'LOWER': {'IN': ['month', 'months']}},
]
NTH_TO_LAST_DAY = [
    tagged('OrdinalNumber'), {'LOWER': 'to'}, {'LOWER': 'last'}, {'LOWER': {'IN': ['day', 'days']}},
] + MONTH_SUFFIX
DAY_NUMBER = [{'LOWER': 'day'}, tagged('CardinalNumber')]

_LIST_JOINERS = ('and', ',', 'the')

SUPPORTED_POSITIONS = (1, -1)


def valid_month_day(n) -> bool:
    return n is not None and (1 <= n <= 31 or -31 <= n <= -1)


def check_month_day(n, pattern: str | None = None) -> int:
    if not valid_month_day(n):
        raise InvalidDayError(n, pattern)
    return n


def _month_suffix_end(tokens, at: int) -> int | None:
    """Index just past "of (the|every|each)? month(s)" starting at ``at``."""
    if at >= len(tokens) or tokens[at].lower_ != 'of':
        return None
    k = at + 1
    if k < len(tokens) and tokens[k].lower_ in ('the', 'every', 'each'):
        k += 1
    if k < len(tokens) and tokens[k].lower_ in ('month', 'months'):
        return k + 1
    return None


def _has_month_suffix(tokens, at: int) -> bool:
    return _month_suffix_end(tokens, at) is not None


def _positional_run(tokens, start: int):
    """Read "first and last monday", "first monday and last friday", ...

    Returns (end, pairs) where ``pairs`` holds (ordinal token, weekday token)
    and ``end`` is just past the last weekday, or None if there is no run.
    """
    pending = []
    pairs = []
    end = None
    k = start
    while k < len(tokens):
        t = tokens[k]
        if has_tag(t, 'OrdinalNumber'):
            pending.append(t)
        elif has_tag(t, 'WeekDay', 'WeekDayAbbr'):
            if not pending:
                break
            pairs.extend((o, t) for o in pending)
            pending = []
            end = k + 1
        elif t.lower_ not in _LIST_JOINERS:
            break
        k += 1
    if end is None:
        return None
    return end, pairs


def positional_weekday_matcher(doc, ctx):
    tokens = head(doc)
    pairs = []
    texts: list[str] = []
    confidence = 1.0
    warnings: list[str] = []
    i = 0
    while i < len(tokens):
        t = tokens[i]
        # "every 2nd tuesday" is an interval
        if not has_tag(t, 'OrdinalNumber') or (i > 0 and has_tag(tokens[i - 1], 'Every')):
            i += 1
            continue
        run = _positional_run(tokens, i)
        if run is None:
            i += 1
            continue
        end, found = run
        suffix_end = _month_suffix_end(tokens, end)
        text = tokens[i:suffix_end or end].text
        if suffix_end is None:
            confidence = min(confidence, 0.8)
            warnings.append(f'Assumed "{text}" refers to weekdays of the month')
        for ordinal, _ in found:
            if term_number(ordinal) not in SUPPORTED_POSITIONS:
                ctx.warn(f'Unsupported position "{ordinal.text}" in "{text}"; only first and last are recognized')
                return None
        pairs.extend((term_number(o), weekday_code(w)) for o, w in found)
        texts.append(text)
        i = suffix_end or end
    if not pairs:
        return None
    weekdays = sort_weekdays(w for _, w in pairs)
    positions = sorted({p for p, _ in pairs})
    if len(set(pairs)) < len(weekdays) * len(positions):
        # BYSETPOS picks from all listed weekdays together
        warnings.append(f'Positions in "{" ".join(texts)}" apply to every listed weekday')
    return make_match(
        CATEGORY_DAY_OF_MONTH,
        {'weekdays': weekdays, 'set_positions': positions},
        ' '.join(texts),
        confidence=confidence,
        warnings=warnings,
    )


def nth_to_last_matcher(doc, ctx):
    spans = find(head(doc), NTH_TO_LAST_DAY)
    if not spans:
        return None
    days = []
    for span in spans:
        n = term_number(span[0])
        if n is None or n < 1 or not valid_month_day(-n):
            return None
        days.append(-n)
    return make_match(CATEGORY_DAY_OF_MONTH, {'month_days': sorted(set(days))},
                      ' '.join(s.text for s in spans))


def _ordinal_runs(tokens):
    """Yield (start, end, ordinal_indexes) for runs like '1st, 10th and 20th'."""
    i = 0
    n = len(tokens)
    while i < n:
        if not has_tag(tokens[i], 'OrdinalNumber'):
            i += 1
            continue
        idxs = [i]
        k = i + 1
        while k < n:
            j = k
            while j < n and tokens[j].lower_ in _LIST_JOINERS:
                j += 1
            if j > k and j < n and has_tag(tokens[j], 'OrdinalNumber'):
                idxs.append(j)
                k = j + 1
            else:
                break
        yield i, idxs[-1] + 1, idxs
        i = idxs[-1] + 1


def ordinal_list_matcher(doc, ctx):
    tokens = head(doc)
    days: list[int] = []
    texts: list[str] = []
    confidence = 1.0
    warnings: list[str] = []
    for start, end, idxs in _ordinal_runs(tokens):
        # "every 3rd week" is an interval
        if start > 0 and has_tag(tokens[start - 1], 'Every'):
            continue
        after = end
        if after < len(tokens) and tokens[after].lower_ in ('day', 'days'):
            after += 1
        if after < len(tokens) and (
            has_tag(tokens[after], 'WeekDay', 'WeekDayAbbr', 'TimeUnit') or tokens[after].lower_ == 'to'
        ):
            continue
        values = [term_number(tokens[k]) for k in idxs]
        if _has_month_suffix(tokens, after):
            cue_confidence = 1.0
        elif start >= 2 and tokens[start - 2].lower_ == 'on' and tokens[start - 1].lower_ == 'the':
            cue_confidence = 1.0
        elif start >= 1 and tokens[start - 1].lower_ == 'on':
            cue_confidence = 1.0
        elif start >= 1 and tokens[start - 1].lower_ == 'the':
            cue_confidence = 0.9
        elif after == len(tokens) and all(t.lower_ in ('on', 'the') for t in tokens[:start]):
            cue_confidence = 0.8
            warnings.append(f'Assumed "{tokens.text}" refers to days of the month')
        else:
            continue
        if -1 in values and not _has_month_suffix(tokens, after):
            # bare "last" is too vague without "of the month"
            continue
        try:
            values = [check_month_day(v, tokens.text) for v in values]
        except InvalidDayError as exc:
            logger.debug('rejecting day-of-month list: %s', exc)
            return None
        days.extend(values)
        texts.append(tokens[start:after].text)
        confidence = min(confidence, cue_confidence)
    if not days:
        return None
    return make_match(CATEGORY_DAY_OF_MONTH, {'month_days': sorted(set(days))}, ' '.join(texts),
                      confidence=confidence, warnings=warnings)


def day_number_matcher(doc, ctx):
    spans = find(head(doc), DAY_NUMBER)
    if not spans:
        return None
    days = []
    for span in spans:
        n = term_number(span[1])
        if not valid_month_day(n) or n < 0:
            return None
        days.append(n)
    return make_match(CATEGORY_DAY_OF_MONTH, {'month_days': sorted(set(days))},
                      ' '.join(s.text for s in spans))


def apply_day_of_month(working, match):
    value = match.value
    if value.get('month_days'):
        working.add_month_days(value['month_days'], match)
    if value.get('weekdays'):
        working.add_weekdays(value['weekdays'], match)
        working.add_set_positions(value['set_positions'], match)
    working.set_frequency('MONTHLY', match)


day_of_month_handler = create_pattern_handler(
    'day_of_month',
    [positional_weekday_matcher, nth_to_last_matcher, ordinal_list_matcher, day_number_matcher],
    apply_day_of_month,
    category=CATEGORY_DAY_OF_MONTH,
    priority=PATTERN_PRIORITY[CATEGORY_DAY_OF_MONTH],
    description='Ordinal day lists, last/nth-to-last day and first/last weekday of the month.',
)
