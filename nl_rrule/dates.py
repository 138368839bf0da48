"""Resolve free-text end-date phrases ("december 31, 2022", "end of month").

The heavy lifting is done by dateparser; a few relative period phrases are
resolved here with dateutil because dateparser reads "next month" as "one
month from today" while a recurrence end wants the end of that month.
"""
from datetime import date, datetime, time
import logging
import re

import dateparser
from dateutil.relativedelta import SU, relativedelta

from . import config
from .constants import CARDINAL_WORDS
from .errors import DateResolutionError

logger = logging.getLogger(__name__)

# Bare number words parse as months ('eight' -> August) and bare numbers as
# days; neither is a usable end date on its own.
NUMBER_WORDS = set(CARDINAL_WORDS) | {'zero'}

_END_OF_RE = re.compile(r'^(?:the\s+)?end\s+of\s+(?:the\s+)?(this|next)?\s*(week|month|year)$')
_NEXT_PERIOD_RE = re.compile(r'^next\s+(week|month|year)$')
_LEADING_RE = re.compile(r'^(?:on|the)\s+')


def end_of_period(anchor: date, unit: str, ahead: int = 0) -> date:
    """Last day of the week/month/year containing ``anchor``, ``ahead`` periods on."""
    if unit == 'week':
        # weeks end on Sunday
        return anchor + relativedelta(weeks=ahead, weekday=SU)
    if unit == 'month':
        return anchor + relativedelta(months=ahead, day=31)
    return date(anchor.year + ahead, 12, 31)


class DateResolver:
    """Callable ``(phrase, anchor) -> date`` backed by dateparser."""

    def __init__(self, date_order: str | None = None, languages=('en',)):
        self.date_order = (date_order or config.DATE_ORDER).upper()
        self.languages = list(languages)

    def settings(self, anchor: date) -> dict:
        return {
            'RELATIVE_BASE': datetime.combine(anchor, time()),
            'PREFER_DATES_FROM': 'future',
            'PREFER_DAY_OF_MONTH': 'last',
            'DATE_ORDER': self.date_order,
        }

    def __call__(self, phrase: str, anchor: date) -> date:
        return self.resolve(phrase, anchor)

    def resolve(self, phrase: str, anchor: date) -> date:
        p = _LEADING_RE.sub('', ' '.join((phrase or '').lower().split())).strip(' ,.')
        if not p:
            raise DateResolutionError(phrase)
        if p in NUMBER_WORDS or re.fullmatch(r'\d{1,2}', p):
            raise DateResolutionError(phrase)
        m = _END_OF_RE.match(p)
        if m:
            return end_of_period(anchor, m.group(2), 1 if m.group(1) == 'next' else 0)
        m = _NEXT_PERIOD_RE.match(p)
        if m:
            return end_of_period(anchor, m.group(1), 1)
        try:
            dt = dateparser.parse(p, languages=self.languages, settings=self.settings(anchor))
        except Exception as exc:
            logger.exception('dateparser failed on %r', p)
            raise DateResolutionError(phrase) from exc
        if dt is None:
            raise DateResolutionError(phrase)
        return dt.date()
