"""Runtime defaults for the recurrence parser.

Values are read from environment variables so deployments can tune parsing
without code changes. Per-parser overrides go through ``ParserConfig``.
"""
import os


def _trueish(v: str | None) -> bool:
    if not v:
        return False
    return v.lower() in ('1', 'true', 'yes', 'on')


# Rewrite near-miss day and month names ("thrusday") before recognition.
# Set NL_RRULE_CORRECT_MISSPELLINGS=0 to leave input words untouched.
CORRECT_MISSPELLINGS = _trueish(os.getenv('NL_RRULE_CORRECT_MISSPELLINGS', '1'))

# Minimum similarity (0..1) for a misspelling correction to be applied.
try:
    FUZZY_THRESHOLD = float(os.getenv('NL_RRULE_FUZZY_THRESHOLD', '0.85'))
except Exception:
    FUZZY_THRESHOLD = 0.85

# Number of parse results kept in each parser's LRU cache. 0 disables caching.
try:
    CACHE_SIZE = int(os.getenv('NL_RRULE_CACHE_SIZE', '256'))
except Exception:
    CACHE_SIZE = 256

# 'first' keeps the earliest value when recognizers disagree on frequency;
# 'most_specific' lets day-of-month beat day-of-week beat interval/frequency.
CONFLICT_POLICY = os.getenv('NL_RRULE_CONFLICT_POLICY', 'first').lower()

# Date ordering preference for numeric end dates like 12/9/2025:
# 'MDY' (month-day-year) or 'DMY' (day-month-year). Accept lowercase variants.
DATE_ORDER = os.getenv('DATE_ORDER', 'MDY').upper()
