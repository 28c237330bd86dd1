"""Tests for environment parsing in config.py."""

from __future__ import annotations

import pytest

from config import _int_env


def test_int_env_default_when_unset(monkeypatch):
    monkeypatch.delenv("FOCUS_MINUTES", raising=False)
    assert _int_env("FOCUS_MINUTES", 25, minimum=1) == 25


def test_int_env_reads_value(monkeypatch):
    monkeypatch.setenv("FOCUS_MINUTES", " 50 ")
    assert _int_env("FOCUS_MINUTES", 25, minimum=1) == 50


@pytest.mark.parametrize("raw", ["0", "-5"])
def test_int_env_below_minimum_fails(monkeypatch, raw):
    monkeypatch.setenv("BREAK_MINUTES", raw)
    with pytest.raises(ValueError, match="BREAK_MINUTES must be at least 1"):
        _int_env("BREAK_MINUTES", 5, minimum=1)


def test_int_env_not_a_number(monkeypatch):
    monkeypatch.setenv("FOCUS_MINUTES", "twenty")
    with pytest.raises(ValueError, match="must be an integer"):
        _int_env("FOCUS_MINUTES", 25)
