"""Export recurrence descriptors to dateutil rrules and RFC5545 RRULE strings."""
from datetime import date, datetime, time
import logging

from dateutil import rrule as _rrule

logger = logging.getLogger(__name__)

FREQ_MAP = {'DAILY': _rrule.DAILY, 'WEEKLY': _rrule.WEEKLY, 'MONTHLY': _rrule.MONTHLY, 'YEARLY': _rrule.YEARLY}
WEEKDAY_MAP = {'MO': _rrule.MO, 'TU': _rrule.TU, 'WE': _rrule.WE, 'TH': _rrule.TH,
               'FR': _rrule.FR, 'SA': _rrule.SA, 'SU': _rrule.SU}


def _until_datetime(until: date, tzinfo=None) -> datetime:
    # an end date includes the whole of that day
    if isinstance(until, datetime):
        return until
    return datetime.combine(until, time(23, 59, 59), tzinfo=tzinfo)


def descriptor_to_rrule_params(descriptor, tzinfo=None) -> dict:
    """Convert a descriptor into kwargs suitable for dateutil.rrule.

    Example: a WEEKLY descriptor with interval 2 on MO becomes
    ``{'freq': rrule.WEEKLY, 'interval': 2, 'byweekday': (rrule.MO,)}``.
    Returns an empty dict for an unrecognized result.
    """
    if not descriptor or not descriptor.recognized:
        return {}
    out: dict = {}
    if descriptor.frequency:
        out['freq'] = FREQ_MAP[descriptor.frequency]
    if descriptor.interval is not None:
        out['interval'] = int(descriptor.interval)
    if descriptor.by_month_day:
        out['bymonthday'] = tuple(descriptor.by_month_day)
    if descriptor.by_set_position:
        out['bysetpos'] = tuple(descriptor.by_set_position)
    if descriptor.by_weekday:
        out['byweekday'] = tuple(WEEKDAY_MAP[w] for w in descriptor.by_weekday)
    if descriptor.until is not None:
        out['until'] = _until_datetime(descriptor.until, tzinfo)
    return out


def descriptor_to_rrule_string(descriptor) -> str:
    """Export a descriptor to an RFC5545 RRULE value (no leading 'RRULE:')."""
    if not descriptor or not descriptor.recognized:
        return ''
    parts: list[str] = []
    if descriptor.frequency:
        parts.append(f'FREQ={descriptor.frequency}')
    if descriptor.interval is not None:
        parts.append(f'INTERVAL={int(descriptor.interval)}')
    if descriptor.by_month_day:
        parts.append('BYMONTHDAY=' + ','.join(str(d) for d in descriptor.by_month_day))
    if descriptor.by_set_position:
        parts.append('BYSETPOS=' + ','.join(str(p) for p in descriptor.by_set_position))
    if descriptor.by_weekday:
        parts.append('BYDAY=' + ','.join(descriptor.by_weekday))
    if descriptor.until is not None:
        parts.append('UNTIL=' + _until_datetime(descriptor.until).strftime('%Y%m%dT%H%M%S'))
    return ';'.join(parts)


def build_rrule(descriptor, dtstart: datetime):
    """Build a dateutil.rrule.rrule from a descriptor and a dtstart.

    ``until`` is taken as the end of that day in ``dtstart``'s timezone so
    tz-aware and naive starts both work.
    """
    params = descriptor_to_rrule_params(descriptor, tzinfo=dtstart.tzinfo)
    if 'freq' not in params:
        raise ValueError('descriptor has no frequency')
    return _rrule.rrule(dtstart=dtstart, **params)
