from datetime import date

import pytest

from nl_rrule.errors import DateResolutionError
from nl_rrule.patterns.base import MatchContext
from nl_rrule.tagging import TaggingAdapter


ANCHOR = date(2022, 1, 1)


class FakeResolver:
    """Deterministic stand-in for the dateparser-backed resolver."""

    def __init__(self, table=None):
        self.table = dict(table or {})
        self.calls = []

    def __call__(self, phrase, anchor):
        self.calls.append((phrase, anchor))
        if phrase in self.table:
            return self.table[phrase]
        raise DateResolutionError(phrase)


@pytest.fixture
def anchor():
    return ANCHOR


@pytest.fixture
def resolver():
    return FakeResolver({
        'december 31, 2022': date(2022, 12, 31),
        'june 1': date(2022, 6, 1),
        'march 3, 2021': date(2021, 3, 3),
        'next month': date(2022, 2, 28),
    })


@pytest.fixture
def adapter():
    return TaggingAdapter()


@pytest.fixture
def ctx(anchor, resolver):
    return MatchContext(anchor=anchor, resolver=resolver)
