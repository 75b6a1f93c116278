from __future__ import annotations

import importlib
from dataclasses import fields
from datetime import date

import pytest

from config import get_settings_module
from src.workplus_analytics.workplus_analytics.analytics.model import AggregationConfig


@pytest.mark.parametrize(
    "env, module",
    [
        ("production", "config.production"),
        ("prod", "config.production"),
        ("testing", "config.testing"),
        ("development", "config.development"),
        ("staging", "config.development"),
    ],
)
def test_app_env_selects_settings_module(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


@pytest.mark.parametrize("module", ["config.development", "config.production"])
def test_analytics_settings_cover_every_knob(module):
    settings = importlib.import_module(module).ANALYTICS_SETTINGS
    knobs = {f.name for f in fields(AggregationConfig)} - {"today"}

    assert set(settings) == knobs
    assert AggregationConfig(today=date(2026, 3, 10), **settings) == AggregationConfig(today=date(2026, 3, 10))


def test_analytics_settings_read_environment(monkeypatch):
    monkeypatch.setenv("ANALYTICS_JOB_DISTRIBUTION_TOP_K", "3")
    monkeypatch.setenv("ANALYTICS_UNKNOWN_LABEL", "N/A")
    import config.development as development

    settings = importlib.reload(development).ANALYTICS_SETTINGS

    assert settings["job_distribution_top_k"] == 3
    assert settings["unknown_label"] == "N/A"
    monkeypatch.undo()
    importlib.reload(development)
