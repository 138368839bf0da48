from datetime import date

from nl_rrule.patterns.base import MatchContext
from nl_rrule.patterns.until_date import until_date_handler


def test_until_date_recognized(adapter, ctx, resolver):
    m = until_date_handler.recognize(adapter.tag('every monday until december 31, 2022'), ctx)
    assert m.type == 'until_date'
    assert m.value == {'until': date(2022, 12, 31)}
    assert m.source_text == 'until december 31, 2022'
    assert resolver.calls == [('december 31, 2022', date(2022, 1, 1))]


def test_leading_on_is_stripped(adapter, ctx):
    m = until_date_handler.recognize(adapter.tag('daily ending on june 1'), ctx)
    assert m.value == {'until': date(2022, 6, 1)}


def test_relative_phrase_uses_anchor(adapter, ctx):
    m = until_date_handler.recognize(adapter.tag('weekly until next month'), ctx)
    assert m.value == {'until': date(2022, 2, 28)}


def test_unresolvable_date_is_no_match_with_warning(adapter, ctx):
    assert until_date_handler.recognize(adapter.tag('daily until the cows come home'), ctx) is None
    assert ctx.warnings == ['Could not resolve end date "the cows come home"']


def test_past_end_date_warns(adapter, ctx):
    m = until_date_handler.recognize(adapter.tag('weekly until march 3, 2021'), ctx)
    assert m.value == {'until': date(2021, 3, 3)}
    assert m.warnings == ('End date 2021-03-03 is before 2022-01-01',)


def test_day_range_is_not_an_end_date(adapter, ctx, resolver):
    assert until_date_handler.recognize(adapter.tag('monday through friday'), ctx) is None
    assert resolver.calls == []


def test_missing_resolver_warns(adapter, anchor):
    ctx = MatchContext(anchor=anchor)
    assert until_date_handler.recognize(adapter.tag('until june 1'), ctx) is None
    assert ctx.warnings


def test_resolver_returning_none(adapter, anchor):
    ctx = MatchContext(anchor=anchor, resolver=lambda phrase, a: None)
    assert until_date_handler.recognize(adapter.tag('until june 1'), ctx) is None
    assert ctx.warnings == ['Could not resolve end date "june 1"']
