import logging

import pytest

from atolyehub.config import get_env, load_config


def test_get_env_returns_value_when_set(monkeypatch):
    monkeypatch.setenv("ATOLYEHUB_TEST_KEY", "value")
    assert get_env("ATOLYEHUB_TEST_KEY", "fallback") == "value"


def test_get_env_returns_fallback_when_unset(monkeypatch):
    monkeypatch.delenv("ATOLYEHUB_TEST_KEY", raising=False)
    assert get_env("ATOLYEHUB_TEST_KEY", "fallback") == "fallback"


def test_get_env_empty_value_counts_as_set(monkeypatch):
    monkeypatch.setenv("ATOLYEHUB_TEST_KEY", "")
    assert get_env("ATOLYEHUB_TEST_KEY", "fallback") == ""


def test_load_config_without_file_warns(tmp_path, monkeypatch, caplog):
    monkeypatch.chdir(tmp_path)
    with caplog.at_level(logging.WARNING, logger="atolyehub.config"):
        assert load_config() is False
    assert ".env" in caplog.text


def test_load_config_reads_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ATOLYEHUB_FROM_FILE", raising=False)
    (tmp_path / ".env").write_text("ATOLYEHUB_FROM_FILE=loaded\n", encoding="utf-8")
    try:
        assert load_config() is True
        assert get_env("ATOLYEHUB_FROM_FILE", "missing") == "loaded"
    finally:
        monkeypatch.delenv("ATOLYEHUB_FROM_FILE", raising=False)


def test_load_config_does_not_override_existing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ATOLYEHUB_FROM_FILE", "process")
    (tmp_path / ".env").write_text("ATOLYEHUB_FROM_FILE=file\n", encoding="utf-8")
    assert load_config() is True
    assert get_env("ATOLYEHUB_FROM_FILE", "missing") == "process"


@pytest.mark.parametrize("fallback", ["a", "b c", ""])
def test_get_env_fallback_round_trip(monkeypatch, fallback):
    monkeypatch.delenv("ATOLYEHUB_TEST_KEY", raising=False)
    assert get_env("ATOLYEHUB_TEST_KEY", fallback) == fallback