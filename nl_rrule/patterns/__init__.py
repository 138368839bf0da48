"""Built-in recognizers."""
from .base import HandlerDescriptor, MatchContext, create_pattern_handler
from .day_of_month import day_of_month_handler
from .day_of_week import day_of_week_handler, normalize_day_names
from .frequency import frequency_handler
from .interval import interval_handler
from .until_date import until_date_handler


def default_handlers() -> list[HandlerDescriptor]:
    return [
        interval_handler,
        frequency_handler,
        day_of_week_handler,
        day_of_month_handler,
        until_date_handler,
    ]


__all__ = [
    'HandlerDescriptor',
    'MatchContext',
    'create_pattern_handler',
    'default_handlers',
    'normalize_day_names',
]
