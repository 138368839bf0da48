import pytest

from nl_rrule.constants import PROTECTED_PHRASES
from nl_rrule.splitter import find_protected_phrases, split, split_clauses, split_pattern


def test_text_without_conjunction_is_single_clause():
    assert split('every other monday') == ['every other monday']


def test_split_on_and():
    assert split('every monday and every wednesday') == ['every monday', 'every wednesday']


def test_comma_and_counts_as_one_separator():
    assert split('monday, wednesday, and friday') == ['monday', 'wednesday', 'friday']


@pytest.mark.parametrize('phrase', PROTECTED_PHRASES)
def test_protected_phrase_is_never_split(phrase):
    assert split(phrase) == [phrase]


@pytest.mark.parametrize('text', [
    '1st and 15th of every month',
    '2nd, 10th and 20th of the month',
    'the first and the third of the month',
    'tuesday through thursday',
    'mon to fri',
    'february to april',
    'first monday and last friday of the month',
    'first and last monday, and 2nd friday of every month',
])
def test_dynamic_idioms_are_protected(text):
    assert split(text) == [text]


def test_until_tail_is_not_split_at_its_comma():
    assert split('every monday and wednesday until december 31, 2022') == [
        'every monday',
        'wednesday until december 31, 2022',
    ]


def test_custom_protected_phrase():
    assert split('rock and roll') == ['rock', 'roll']
    assert split('rock and roll', ['rock and roll']) == ['rock and roll']


@pytest.mark.parametrize('phrase', ['tea and', 'and tea', 'tea,', 'rock and'])
def test_custom_phrase_with_edge_conjunction_survives(phrase):
    assert split(phrase, [phrase]) == [phrase]
    assert split(f'daily and {phrase}', [phrase]) == ['daily', phrase]


def test_leading_and_trailing_conjunctions_are_dropped():
    assert split('and monday') == ['monday']
    assert split('monday and') == ['monday']
    assert split(', monday ,') == ['monday']


def test_empty_input():
    assert split('') == []
    assert split('   ') == []
    assert split('and and and') == []


@pytest.mark.parametrize('text', [
    'every monday and the 15th',
    'monday, wednesday, and friday',
    'daily and weekly and monthly',
    '1st and 15th of every month and every friday until june 1, 2030',
])
def test_rejoin_round_trip(text):
    assert split_pattern(text).rejoin() == text


def test_separators_line_up_with_clauses():
    res = split_pattern('monday, wednesday, and friday')
    assert res.clauses == ['monday', 'wednesday', 'friday']
    assert res.separators == [', ', ', and ']


def test_split_clauses_are_indexed():
    clauses = split_clauses('daily and weekly')
    assert [(c.index, c.text) for c in clauses] == [(0, 'daily'), (1, 'weekly')]


def test_find_protected_phrases_longest_first():
    found = find_protected_phrases('first and last day of the month')
    assert found[0] == 'first and last day of the month'
    assert all(len(a) >= len(b) for a, b in zip(found, found[1:]))


def test_splitting_is_deterministic():
    text = 'every monday and the 1st and 15th of every month'
    assert split(text) == split(text) == ['every monday', 'the 1st and 15th of every month']
