"""Turn phrases like "every other monday until december" into recurrence rules."""
from .errors import (
    ConfigurationError,
    DateResolutionError,
    InvalidDayError,
    PatternError,
    RecurrenceError,
)
from .models import (
    Clause,
    ClauseResult,
    ParserConfig,
    PatternMatch,
    RecurrenceDescriptor,
    UnrecognizedResult,
    ValidationResult,
)
from .pipeline import (
    RecurrenceParser,
    create_rrule,
    get_default_parser,
    parse_recurrence,
    validate_recurrence,
)
from .registry import DEFAULT_REGISTRY, HandlerRegistry
from .rrule import build_rrule, descriptor_to_rrule_params, descriptor_to_rrule_string

__all__ = [
    'Clause',
    'ClauseResult',
    'ConfigurationError',
    'DEFAULT_REGISTRY',
    'DateResolutionError',
    'HandlerRegistry',
    'InvalidDayError',
    'ParserConfig',
    'PatternError',
    'PatternMatch',
    'RecurrenceDescriptor',
    'RecurrenceError',
    'RecurrenceParser',
    'UnrecognizedResult',
    'ValidationResult',
    'build_rrule',
    'create_rrule',
    'descriptor_to_rrule_params',
    'descriptor_to_rrule_string',
    'get_default_parser',
    'parse_recurrence',
    'validate_recurrence',
]
