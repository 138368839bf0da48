"""Vocabularies and tables shared by the normalizer, splitter and recognizers."""

FREQUENCIES = ('DAILY', 'WEEKLY', 'MONTHLY', 'YEARLY')

# canonical Monday-first order; also the order of BYDAY values in output
WEEKDAY_ORDER = ('MO', 'TU', 'WE', 'TH', 'FR', 'SA', 'SU')

DAY_NAMES = ('monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday')

DAY_ABBREVIATIONS = {
    'mon': 'MO',
    'tue': 'TU', 'tues': 'TU',
    'wed': 'WE', 'weds': 'WE',
    'thu': 'TH', 'thur': 'TH', 'thurs': 'TH',
    'fri': 'FR',
    'sat': 'SA',
    'sun': 'SU',
}

WEEKDAY_CODES = dict(zip(DAY_NAMES, WEEKDAY_ORDER))

PLURAL_DAY_NAMES = {name + 's': name for name in DAY_NAMES}

WEEKDAY_GROUPS = {
    'weekday': ('MO', 'TU', 'WE', 'TH', 'FR'),
    'weekdays': ('MO', 'TU', 'WE', 'TH', 'FR'),
    'weekend': ('SA', 'SU'),
    'weekends': ('SA', 'SU'),
}

MONTH_NAMES = (
    'january', 'february', 'march', 'april', 'may', 'june', 'july',
    'august', 'september', 'october', 'november', 'december',
)

MONTH_ABBREVIATIONS = (
    'jan', 'feb', 'mar', 'apr', 'jun', 'jul', 'aug', 'sep', 'sept', 'oct', 'nov', 'dec',
)

FREQUENCY_WORDS = {
    'daily': 'DAILY',
    'weekly': 'WEEKLY',
    'monthly': 'MONTHLY',
    'yearly': 'YEARLY',
    'annually': 'YEARLY',
}

TIME_UNITS = {
    'day': 'DAILY', 'days': 'DAILY',
    'week': 'WEEKLY', 'weeks': 'WEEKLY',
    'month': 'MONTHLY', 'months': 'MONTHLY',
    'year': 'YEARLY', 'years': 'YEARLY',
}

# single-token interval words -> (frequency, interval)
NAMED_INTERVALS = {
    'biweekly': ('WEEKLY', 2),
    'fortnightly': ('WEEKLY', 2),
    'bimonthly': ('MONTHLY', 2),
    'quarterly': ('MONTHLY', 3),
    'semiannually': ('MONTHLY', 6),
}

UNTIL_WORDS = ('until', 'till', 'til', 'through', 'thru', 'ending', 'ends')

# words that join two weekdays into a range rather than starting an end date
RANGE_WORDS = ('through', 'thru', 'to')

CARDINAL_WORDS = {
    'one': 1, 'two': 2, 'three': 3, 'four': 4, 'five': 5, 'six': 6,
    'seven': 7, 'eight': 8, 'nine': 9, 'ten': 10, 'eleven': 11, 'twelve': 12,
}

ORDINAL_WORD_MAP = {
    'first': 1,
    'second': 2,
    'third': 3,
    'fourth': 4,
    'fifth': 5,
    'sixth': 6,
    'seventh': 7,
    'eighth': 8,
    'ninth': 9,
    'tenth': 10,
    'eleventh': 11,
    'twelfth': 12,
    'thirteenth': 13,
    'fourteenth': 14,
    'fifteenth': 15,
    'sixteenth': 16,
    'seventeenth': 17,
    'eighteenth': 18,
    'nineteenth': 19,
    'twentieth': 20,
    'twenty-first': 21,
    'twenty-second': 22,
    'twenty-third': 23,
    'twenty-fourth': 24,
    'twenty-fifth': 25,
    'twenty-sixth': 26,
    'twenty-seventh': 27,
    'twenty-eighth': 28,
    'twenty-ninth': 29,
    'thirtieth': 30,
    'thirty-first': 31,
    'last': -1,
}

# Phrase rewrites applied by the normalizer, longest key first. Every value
# is itself stable under the table so normalization is idempotent.
TERM_SYNONYMS = {
    # frequency
    'everyday': 'daily',
    'each day': 'daily',
    'once a day': 'daily',
    'once daily': 'daily',
    'once a week': 'weekly',
    'once weekly': 'weekly',
    'once a month': 'monthly',
    'once monthly': 'monthly',
    'once a year': 'yearly',
    'once yearly': 'yearly',
    'annual': 'yearly',
    'annually': 'yearly',
    # quantifiers
    'each': 'every',
    'all': 'every',
    'any': 'every',
    # weekday groups
    'work day': 'weekday',
    'work days': 'weekdays',
    'workday': 'weekday',
    'workdays': 'weekdays',
    'business day': 'weekday',
    'business days': 'weekdays',
    'week day': 'weekday',
    'week days': 'weekdays',
    'week end': 'weekend',
    'week ends': 'weekends',
    # intervals
    'alternate': 'other',
    'alternating': 'other',
    'bi-weekly': 'biweekly',
    'every fortnight': 'fortnightly',
    'bi-monthly': 'bimonthly',
    'semi-annual': 'semiannually',
    'semi-annually': 'semiannually',
    'semiannual': 'semiannually',
    'bi-annual': 'semiannually',
    'bi-annually': 'semiannually',
    'biannual': 'semiannually',
    'biannually': 'semiannually',
    'twice a year': 'semiannually',
    # positions
    'penultimate': 'second to last',
}

# Idioms that contain a conjunction but describe a single recurrence fact.
PROTECTED_PHRASES = (
    'first and last',
    'first and third',
    'second and fourth',
    'first and third and last',
    'second and fourth and last',
    '1st and last',
    '2nd and 4th',
    '1st and 3rd',
    '3rd and last',
    '1st and 15th',
    'first and 15th',
    '1st and third',
    '1st and last day',
    'first and 3rd',
    'monday through friday',
    'monday to friday',
    'monday thru friday',
    'saturday and sunday',
    'every other weekend',
    'january through march',
    'april to june',
    'july thru september',
    'every other day',
    'every other week',
    'first and last day of the month',
    'beginning and end of month',
)

CATEGORY_FREQUENCY = 'frequency'
CATEGORY_INTERVAL = 'interval'
CATEGORY_DAY_OF_WEEK = 'day_of_week'
CATEGORY_DAY_OF_MONTH = 'day_of_month'
CATEGORY_UNTIL_DATE = 'until_date'

CATEGORIES = (
    CATEGORY_INTERVAL,
    CATEGORY_FREQUENCY,
    CATEGORY_DAY_OF_WEEK,
    CATEGORY_DAY_OF_MONTH,
    CATEGORY_UNTIL_DATE,
)

PATTERN_PRIORITY = {
    CATEGORY_INTERVAL: 300,
    CATEGORY_FREQUENCY: 200,
    CATEGORY_DAY_OF_WEEK: 100,
    CATEGORY_DAY_OF_MONTH: 90,
    CATEGORY_UNTIL_DATE: 50,
}

# Used by the 'most_specific' conflict policy: higher wins a frequency clash.
SPECIFICITY = {
    CATEGORY_FREQUENCY: 1,
    CATEGORY_INTERVAL: 2,
    CATEGORY_DAY_OF_WEEK: 3,
    CATEGORY_DAY_OF_MONTH: 4,
}

CONFLICT_POLICIES = ('first', 'most_specific')

DESCRIPTOR_FIELDS = (
    'frequency', 'interval', 'by_weekday', 'by_month_day', 'by_set_position', 'until',
)
