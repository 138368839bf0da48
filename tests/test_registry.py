import pytest

from nl_rrule.errors import ConfigurationError
from nl_rrule.patterns import create_pattern_handler, default_handlers
from nl_rrule.registry import DEFAULT_REGISTRY, HandlerRegistry


def _noop_matcher(doc, ctx):
    return None


def _noop_processor(working, match):
    pass


def make(name, category='frequency', priority=10):
    return create_pattern_handler(name, [_noop_matcher], _noop_processor,
                                  category=category, priority=priority)


def test_default_registry_priority_order():
    assert [h.name for h in DEFAULT_REGISTRY] == [
        'interval', 'frequency', 'day_of_week', 'day_of_month', 'until_date',
    ]
    assert [h.priority for h in DEFAULT_REGISTRY] == [300, 200, 100, 90, 50]


def test_equal_priorities_keep_registration_order():
    reg = HandlerRegistry([make('b'), make('a'), make('c', priority=20)])
    assert [h.name for h in reg] == ['c', 'b', 'a']


def test_duplicate_names_rejected():
    with pytest.raises(ConfigurationError):
        HandlerRegistry([make('x'), make('x')])


def test_non_handler_rejected():
    with pytest.raises(ConfigurationError):
        HandlerRegistry([object()])


def test_enabled_filters_by_category():
    only = DEFAULT_REGISTRY.enabled(enabled=('frequency', 'interval'))
    assert [h.name for h in only] == ['interval', 'frequency']
    without = DEFAULT_REGISTRY.enabled(disabled=('until_date',))
    assert 'until_date' not in without
    assert len(without) == 4
    # the default registry itself is untouched
    assert len(DEFAULT_REGISTRY) == 5


def test_lookup_helpers():
    assert DEFAULT_REGISTRY.get('interval').category == 'interval'
    assert DEFAULT_REGISTRY.get('nope') is None
    assert DEFAULT_REGISTRY.priority_of('day_of_month') == 90
    assert DEFAULT_REGISTRY.priority_of('nope') == 0
    assert DEFAULT_REGISTRY.categories == frozenset(
        {'interval', 'frequency', 'day_of_week', 'day_of_month', 'until_date'})


def test_describe():
    rows = DEFAULT_REGISTRY.describe()
    assert rows[0]['name'] == 'interval'
    assert all(row['description'] for row in rows)


def test_default_handlers_builds_fresh_list():
    a = default_handlers()
    a.pop()
    assert len(default_handlers()) == 5


@pytest.mark.parametrize('kwargs', [
    dict(name='', matchers=[_noop_matcher], processor=_noop_processor, category='frequency', priority=1),
    dict(name='x', matchers=[], processor=_noop_processor, category='frequency', priority=1),
    dict(name='x', matchers=['nope'], processor=_noop_processor, category='frequency', priority=1),
    dict(name='x', matchers=[_noop_matcher], processor=None, category='frequency', priority=1),
    dict(name='x', matchers=[_noop_matcher], processor=_noop_processor, category='color', priority=1),
    dict(name='x', matchers=[_noop_matcher], processor=_noop_processor, category='frequency', priority='high'),
])
def test_create_pattern_handler_validates(kwargs):
    with pytest.raises(ConfigurationError):
        create_pattern_handler(**kwargs)


def test_recognize_uses_first_matching_matcher(adapter, ctx):
    calls = []

    def first(doc, c):
        calls.append('first')
        return None

    def second(doc, c):
        calls.append('second')
        return 'hit'

    def third(doc, c):
        calls.append('third')
        return 'late'

    h = create_pattern_handler('t', [first, second, third], _noop_processor,
                               category='frequency', priority=1)
    assert h.recognize(adapter.tag('x'), ctx) == 'hit'
    assert calls == ['first', 'second']
