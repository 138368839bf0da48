import pytest

from nl_rrule.patterns.day_of_week import day_of_week_handler, expand_range, normalize_day_names


@pytest.mark.parametrize('text,days', [
    ('every monday', ['MO']),
    ('on friday', ['FR']),
    ('Saturdays', ['SA']),
    ('monday and wednesday', ['MO', 'WE']),
    ('wednesday, monday', ['MO', 'WE']),
    ('weekdays', ['MO', 'TU', 'WE', 'TH', 'FR']),
    ('every weekday', ['MO', 'TU', 'WE', 'TH', 'FR']),
    ('weekends', ['SA', 'SU']),
    ('monday through friday', ['MO', 'TU', 'WE', 'TH', 'FR']),
    ('friday to monday', ['MO', 'FR', 'SA', 'SU']),
    ('every other monday', ['MO']),
    ('every 2 weeks on tuesday', ['TU']),
    ('weekends or mondays', ['MO', 'SA', 'SU']),
    ('weekdays and saturday', ['MO', 'TU', 'WE', 'TH', 'FR', 'SA']),
    ('every 2nd tuesday', ['TU']),
])
def test_weekdays_recognized(adapter, ctx, text, days):
    m = day_of_week_handler.recognize(adapter.tag(text.lower()), ctx)
    assert m is not None
    assert m.type == 'day_of_week'
    assert m.value == {'weekdays': days}
    assert m.confidence == 1.0


def test_abbreviations_have_lower_confidence(adapter, ctx):
    m = day_of_week_handler.recognize(adapter.tag('tues and thurs'), ctx)
    assert m.value == {'weekdays': ['TU', 'TH']}
    assert m.confidence == 0.9


def test_mixed_abbreviation_and_full_name(adapter, ctx):
    m = day_of_week_handler.recognize(adapter.tag('mon and friday'), ctx)
    assert m.value == {'weekdays': ['MO', 'FR']}
    assert m.confidence == 1.0


def test_plural_reads_as_every(adapter, ctx):
    plural = day_of_week_handler.recognize(adapter.tag('mondays'), ctx)
    explicit = day_of_week_handler.recognize(adapter.tag('every monday'), ctx)
    assert plural.value == explicit.value
    assert plural.source_text == 'every monday'


@pytest.mark.parametrize('text', [
    'first monday of the month',
    'last friday of every month',
    'first monday',
    'first and last sunday',
    'daily',
    'the 15th',
])
def test_weekdays_not_recognized(adapter, ctx, text):
    assert day_of_week_handler.recognize(adapter.tag(text), ctx) is None


def test_days_in_end_date_are_ignored(adapter, ctx):
    m = day_of_week_handler.recognize(adapter.tag('every monday until friday'), ctx)
    assert m.value == {'weekdays': ['MO']}


@pytest.mark.parametrize('raw,expected', [
    ('mondays', 'every monday'),
    ('every mondays', 'every monday'),
    ('each mondays', 'each monday'),
    ('every monday', 'every monday'),
    ('mondays and fridays', 'every monday and every friday'),
    ('weekdays', 'weekdays'),
])
def test_normalize_day_names(raw, expected):
    out = normalize_day_names(raw)
    assert out == expected
    assert 'every every' not in out


def test_expand_range_wraps_past_sunday():
    assert expand_range('FR', 'MO') == ['FR', 'SA', 'SU', 'MO']
    assert expand_range('MO', 'WE') == ['MO', 'TU', 'WE']
