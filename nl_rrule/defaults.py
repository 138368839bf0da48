"""Fill fields the input left unset."""
import dataclasses

from .constants import DESCRIPTOR_FIELDS
from .models import RecurrenceDescriptor, UnrecognizedResult


def apply_defaults(descriptor, defaults: dict | None = None):
    """Return ``descriptor`` with configured defaults filled in.

    Only unset fields are filled and each one adds an "Assumed default"
    warning. ``interval`` falls back to 1. Values produced by recognizers
    are never overwritten. ``UnrecognizedResult`` is returned unchanged.
    """
    if isinstance(descriptor, UnrecognizedResult) or not isinstance(descriptor, RecurrenceDescriptor):
        return descriptor
    defaults = dict(defaults or {})
    defaults.setdefault('interval', 1)
    changes: dict = {}
    warnings = list(descriptor.warnings)
    sources = dict(descriptor.sources)
    for field in DESCRIPTOR_FIELDS:
        if field not in defaults or getattr(descriptor, field) is not None:
            continue
        value = defaults[field]
        if value is None:
            continue
        if isinstance(value, (list, set, frozenset)):
            value = tuple(sorted(value)) if field != 'by_weekday' else tuple(value)
        changes[field] = value
        sources[field] = ('defaults',)
        # interval 1 is what "every week" means; no need to flag it
        if not (field == 'interval' and value == 1):
            shown = ','.join(str(v) for v in value) if isinstance(value, tuple) else value
            warnings.append(f'Assumed default {field} {shown}')
    frequency = changes.get('frequency', descriptor.frequency)
    if frequency is None:
        warnings.append('No frequency recognized')
    return dataclasses.replace(descriptor, warnings=tuple(warnings), sources=sources, **changes)
