import pytest

from nl_rrule.fuzzy import best_match, make_corrector


@pytest.mark.parametrize('word,expected', [
    ('thrusday', 'thursday'),
    ('wendesday', 'wednesday'),
    ('tuesdya', 'tuesday'),
    ('februray', 'february'),
    ('septmber', 'september'),
])
def test_corrector_fixes_near_misses(word, expected):
    assert make_corrector(0.85)(word) == expected


@pytest.mark.parametrize('word', ['every', 'month', 'banana', 'monday'])
def test_corrector_leaves_other_words(word):
    assert make_corrector(0.85)(word) == word


def test_best_match_threshold():
    assert best_match('thrusday', ['thursday'], 0.85) == 'thursday'
    assert best_match('thrusday', ['thursday'], 0.99) is None
    assert best_match('', ['thursday'], 0.5) is None
    assert best_match('x', [], 0.5) is None


def test_candidate_lists_are_tried_in_order():
    correct = make_corrector(0.5, candidate_lists=(['march'], ['monday']))
    assert correct('marcy') == 'march'
