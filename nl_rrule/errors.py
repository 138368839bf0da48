"""Exception types raised by nl_rrule.

Parsing never raises for bad input text; problems there surface as warnings
on the result. Exceptions are reserved for misconfiguration and for
collaborators (date resolver, recognizers) signalling failure to the
orchestrating code, which converts them to warnings.
"""


class RecurrenceError(Exception):
    """Base class for all nl_rrule errors."""


class ConfigurationError(RecurrenceError):
    """Invalid parser configuration or recognizer definition."""


class PatternError(RecurrenceError):
    """A recognizer failed while inspecting a clause."""

    def __init__(self, message: str, pattern: str | None = None):
        super().__init__(message)
        self.pattern = pattern


class InvalidDayError(PatternError):
    """A day value fell outside the valid month-day or weekday range."""

    def __init__(self, value, pattern: str | None = None):
        super().__init__(f'invalid day value: {value!r}', pattern)
        self.value = value


class DateResolutionError(RecurrenceError):
    """A free-text end date could not be resolved to a calendar date."""

    def __init__(self, phrase: str):
        super().__init__(f'could not resolve date phrase: {phrase!r}')
        self.phrase = phrase
