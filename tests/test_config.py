import importlib
from datetime import date

import pytest

from nl_rrule import config
from nl_rrule.dates import DateResolver
from nl_rrule.errors import ConfigurationError
from nl_rrule.models import ParserConfig
from nl_rrule.pipeline import RecurrenceParser


@pytest.mark.parametrize('order,expected', [
    ('DMY', date(2025, 9, 12)),
    ('MDY', date(2025, 12, 9)),
])
def test_date_order_from_config_module(order, expected):
    old = config.DATE_ORDER
    try:
        config.DATE_ORDER = order
        assert DateResolver()('12/9/2025', date(2024, 1, 1)) == expected
    finally:
        config.DATE_ORDER = old


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv('NL_RRULE_CORRECT_MISSPELLINGS', 'no')
    monkeypatch.setenv('NL_RRULE_FUZZY_THRESHOLD', '0.9')
    monkeypatch.setenv('NL_RRULE_CACHE_SIZE', 'lots')
    monkeypatch.setenv('NL_RRULE_CONFLICT_POLICY', 'MOST_SPECIFIC')
    monkeypatch.setenv('DATE_ORDER', 'dmy')
    try:
        importlib.reload(config)
        assert config.CORRECT_MISSPELLINGS is False
        assert config.FUZZY_THRESHOLD == 0.9
        assert config.CACHE_SIZE == 256
        assert config.CONFLICT_POLICY == 'most_specific'
        assert config.DATE_ORDER == 'DMY'
        cfg = ParserConfig()
        assert cfg.correct_misspellings is False
        assert cfg.conflict_policy == 'most_specific'
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_bad_environment_policy_raises_on_construction(monkeypatch):
    monkeypatch.setenv('NL_RRULE_CONFLICT_POLICY', 'loudest')
    try:
        importlib.reload(config)
        with pytest.raises(ConfigurationError):
            RecurrenceParser()
    finally:
        monkeypatch.undo()
        importlib.reload(config)


def test_parser_config_normalizes_inputs():
    cfg = ParserConfig(
        enabled_categories=['Frequency', 'interval', 'frequency'],
        custom_protected_phrases=['  Every   Second  Tuesday '],
        defaults={'frequency': 'weekly', 'by_weekday': ['fr', 'MO'], 'until': '2022-12-31'},
    )
    assert cfg.enabled_categories == ('frequency', 'interval')
    assert cfg.custom_protected_phrases == ('every second tuesday',)
    assert cfg.defaults == {'frequency': 'WEEKLY', 'by_weekday': ('MO', 'FR'), 'until': date(2022, 12, 31)}


def test_fingerprint_tracks_settings():
    assert ParserConfig().fingerprint() == ParserConfig().fingerprint()
    assert ParserConfig().fingerprint() != ParserConfig(cache_size=1).fingerprint()
