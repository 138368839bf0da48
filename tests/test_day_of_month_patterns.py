import pytest

from nl_rrule.errors import InvalidDayError
from nl_rrule.patterns.day_of_month import check_month_day, day_of_month_handler


@pytest.mark.parametrize('text,days', [
    ('1st and 15th of every month', [1, 15]),
    ('the 15th of the month', [15]),
    ('on the 1st', [1]),
    ('every month on the 1st', [1]),
    ('2nd, 10th and 20th of the month', [2, 10, 20]),
    ('first and last day of the month', [-1, 1]),
    ('last day of month', [-1]),
    ('thirty-first of every month', [31]),
    ('second to last day of the month', [-2]),
    ('day 10 of the month', [10]),
])
def test_month_days_recognized(adapter, ctx, text, days):
    m = day_of_month_handler.recognize(adapter.tag(text), ctx)
    assert m is not None
    assert m.type == 'day_of_month'
    assert m.value == {'month_days': days}
    assert m.confidence == 1.0


def test_bare_the_ordinal_has_lower_confidence(adapter, ctx):
    m = day_of_month_handler.recognize(adapter.tag('the 15th'), ctx)
    assert m.value == {'month_days': [15]}
    assert m.confidence == 0.9


def test_lone_ordinal_is_assumed_month_day_with_warning(adapter, ctx):
    m = day_of_month_handler.recognize(adapter.tag('15th'), ctx)
    assert m.value == {'month_days': [15]}
    assert m.confidence == 0.8
    assert m.warnings


@pytest.mark.parametrize('text,days,positions', [
    ('first monday of the month', ['MO'], [1]),
    ('last friday of every month', ['FR'], [-1]),
    ('first and last sunday of the month', ['SU'], [-1, 1]),
])
def test_weekday_positions(adapter, ctx, text, days, positions):
    m = day_of_month_handler.recognize(adapter.tag(text), ctx)
    assert m.value['weekdays'] == days
    assert m.value['set_positions'] == positions


def test_weekday_position_list_keeps_every_pair(adapter, ctx):
    m = day_of_month_handler.recognize(adapter.tag('first monday and last friday of the month'), ctx)
    assert m.value == {'weekdays': ['MO', 'FR'], 'set_positions': [-1, 1]}
    assert m.source_text == 'first monday and last friday of the month'
    assert m.confidence == 1.0
    assert m.warnings == ('Positions in "first monday and last friday of the month" apply to every listed weekday',)


@pytest.mark.parametrize('text,days,positions', [
    ('first monday', ['MO'], [1]),
    ('the last friday', ['FR'], [-1]),
])
def test_weekday_position_without_month_is_assumed(adapter, ctx, text, days, positions):
    m = day_of_month_handler.recognize(adapter.tag(text), ctx)
    assert m.value == {'weekdays': days, 'set_positions': positions}
    assert m.confidence == 0.8
    assert m.warnings[0].startswith('Assumed')


def test_unsupported_position_is_rejected_with_warning(adapter, ctx):
    assert day_of_month_handler.recognize(adapter.tag('the 2nd sunday of every month'), ctx) is None
    assert any('Unsupported position' in w for w in ctx.warnings)


@pytest.mark.parametrize('text', [
    '32nd of the month',
    '1st and 32nd of every month',
    'day 40 of the month',
])
def test_out_of_range_days_fail_closed(adapter, ctx, text):
    assert day_of_month_handler.recognize(adapter.tag(text), ctx) is None


@pytest.mark.parametrize('text', [
    'every 2nd tuesday',
    'every 3rd week',
    'every monday',
    'the last',
    'daily',
    '2nd week of june',
])
def test_month_days_not_recognized(adapter, ctx, text):
    assert day_of_month_handler.recognize(adapter.tag(text), ctx) is None


def test_ordinals_in_end_date_are_ignored(adapter, ctx):
    assert day_of_month_handler.recognize(adapter.tag('every monday until the 15th'), ctx) is None


def test_check_month_day():
    assert check_month_day(31) == 31
    assert check_month_day(-1) == -1
    with pytest.raises(InvalidDayError):
        check_month_day(0)
    with pytest.raises(InvalidDayError):
        check_month_day(32)
