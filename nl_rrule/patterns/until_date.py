"""End-condition recognizer: "until december 31, 2022", "ending next month"."""
from datetime import date, datetime
import re

from ..constants import CATEGORY_UNTIL_DATE, PATTERN_PRIORITY
from ..errors import DateResolutionError
from ..tagging import find, tagged
from .base import create_pattern_handler, make_match

_LEADING_ON_RE = re.compile(r'^on\s+')

UNTIL_TAIL = [tagged('UntilWord'), {'OP': '+'}]


def until_matcher(doc, ctx):
    spans = find(doc, UNTIL_TAIL)
    if not spans:
        return None
    span = spans[0]
    phrase = _LEADING_ON_RE.sub('', span[1:].text).strip()
    if not phrase:
        return None
    if ctx.resolver is None:
        ctx.warn(f'No date resolver available for end date "{phrase}"')
        return None
    try:
        resolved = ctx.resolver(phrase, ctx.anchor)
    except DateResolutionError:
        resolved = None
    if resolved is None:
        ctx.warn(f'Could not resolve end date "{phrase}"')
        return None
    if isinstance(resolved, datetime):
        resolved = resolved.date()
    warnings = []
    if isinstance(ctx.anchor, date) and resolved < ctx.anchor:
        warnings.append(f'End date {resolved.isoformat()} is before {ctx.anchor.isoformat()}')
    return make_match(CATEGORY_UNTIL_DATE, {'until': resolved}, span, warnings=warnings)


def apply_until(working, match):
    working.set_until(match.value['until'], match)


until_date_handler = create_pattern_handler(
    'until_date',
    [until_matcher],
    apply_until,
    category=CATEGORY_UNTIL_DATE,
    priority=PATTERN_PRIORITY[CATEGORY_UNTIL_DATE],
    description='End dates introduced by until/till/through/ending.',
)
