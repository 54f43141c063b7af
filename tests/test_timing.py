"""Pacing and settings tests"""

import base64

import pytest

from easy_apply_autopilot import config
from easy_apply_autopilot.data.store import MemoryStore
from easy_apply_autopilot.utils.timing import Pacer


def test_default_tiers():
    pacer = Pacer(sleep=lambda s: None)
    assert pacer.duration_ms(config.VERY_SHORT) == 1000
    assert pacer.duration_ms(config.SHORT) == 5000
    assert pacer.duration_ms(config.MEDIUM) == 10000
    assert pacer.duration_ms(config.LONG) == 7000
    assert pacer.duration_ms(config.VERY_LONG) == 15000
    assert pacer.duration_ms() == 7000


def test_unspecified_tiers_fall_back_to_defaults():
    pacer = Pacer({config.SHORT: 200}, sleep=lambda s: None)
    assert pacer.duration_ms(config.SHORT) == 200
    assert pacer.duration_ms(config.MEDIUM) == 10000


def test_delay_suspends_for_the_tier_duration(sleeps, pacer):
    pacer.very_short()
    pacer.delay(config.VERY_LONG)
    assert sleeps == [1.0, 15.0]


def test_unknown_tier_rejected(pacer):
    with pytest.raises(ValueError):
        pacer.delay("glacial")


def test_load_settings_defaults_on_empty_store():
    settings = config.load_settings(MemoryStore())
    assert settings.delays_ms == config.DEFAULT_DELAYS_MS
    assert settings.daily_limit == config.DAILY_LIMIT
    assert settings.max_steps == config.MAX_STEPS
    assert not settings.is_premium
    assert settings.access_token is None


def test_load_settings_reads_store_and_ignores_garbage():
    store = MemoryStore({
        "shortDelay": "250",
        "mediumDelay": "not a number",
        "longDelay": -5,
        "dailyLimit": 3,
        "planType": "PRO",
        "apiToken": base64.b64encode(b"secret-token").decode(),
    })
    settings = config.load_settings(store)
    assert settings.delays_ms[config.SHORT] == 250
    assert settings.delays_ms[config.MEDIUM] == 10000
    assert settings.delays_ms[config.LONG] == 7000
    assert settings.daily_limit == 3
    assert settings.is_premium
    assert settings.api_token == "secret-token"


def test_undecodable_api_token_counts_as_missing():
    settings = config.load_settings(MemoryStore({"apiToken": "%%%not-base64%%%"}))
    assert settings.api_token is None


def test_speed_profile_scales_after_overrides():
    settings = config.load_settings(MemoryStore({"shortDelay": 1000}), speed="super_dev")
    assert settings.delays_ms[config.SHORT] == 250
    assert settings.delays_ms[config.VERY_LONG] == 3750


def test_keyword_overrides_win_over_store():
    settings = config.load_settings(MemoryStore({"dailyLimit": 3}), daily_limit=7, max_steps=None)
    assert settings.daily_limit == 7
    assert settings.max_steps == config.MAX_STEPS


def test_unknown_speed_profile_rejected():
    with pytest.raises(ValueError):
        config.scale_delays(config.DEFAULT_DELAYS_MS, "warp")


def test_non_positive_overrides_are_ignored():
    settings = config.load_settings(MemoryStore({"dailyLimit": 3}), daily_limit=0, max_steps=-1)
    assert settings.daily_limit == 3
    assert settings.max_steps == config.MAX_STEPS
