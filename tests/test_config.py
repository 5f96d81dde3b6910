from __future__ import annotations

import logging

import pytest

from component_relay.common.config import DEFAULT_MODEL, Settings
from component_relay.common.logging_setup import setup_logging
from component_relay.serve.server import build_settings


def test_defaults_from_empty_env() -> None:
    settings = Settings.from_env({})
    assert settings.gemini_api_key == ""
    assert settings.gemini_model == DEFAULT_MODEL
    assert settings.port == 3001
    assert settings.host == "127.0.0.1"


def test_overrides_from_env() -> None:
    settings = Settings.from_env(
        {
            "GEMINI_API_KEY": "abc",
            "GEMINI_MODEL": "gemini-pro",
            "GEMINI_BASE_URL": "http://localhost:9000/",
            "GEMINI_TIMEOUT": "30",
            "PORT": "8080",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.gemini_api_key == "abc"
    assert settings.gemini_model == "gemini-pro"
    assert settings.gemini_base_url == "http://localhost:9000"
    assert settings.gemini_timeout == 30.0
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_bad_port_raises() -> None:
    with pytest.raises(ValueError):
        Settings.from_env({"PORT": "not-a-port"})


def test_cli_overrides_env(monkeypatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    settings = build_settings(["--port", "5000", "--log-level", "warning"])
    assert settings.port == 5000
    assert settings.log_level == "WARNING"
    assert settings.gemini_api_key == "from-env"


def test_dotenv_in_working_directory_is_loaded(monkeypatch, tmp_path) -> None:
    # setenv first so teardown removes whatever load_dotenv writes
    monkeypatch.setenv("GEMINI_API_KEY", "placeholder")
    monkeypatch.delenv("GEMINI_API_KEY")
    monkeypatch.setenv("GEMINI_MODEL", "placeholder")
    monkeypatch.delenv("GEMINI_MODEL")
    (tmp_path / ".env").write_text("GEMINI_API_KEY=from-dotenv\nGEMINI_MODEL=gemini-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    settings = build_settings([])
    assert settings.gemini_api_key == "from-dotenv"
    assert settings.gemini_model == "gemini-dotenv"


def test_environment_wins_over_dotenv(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    (tmp_path / ".env").write_text("GEMINI_API_KEY=from-dotenv\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert build_settings([]).gemini_api_key == "from-env"


def test_setup_logging_accepts_names() -> None:
    root = logging.getLogger()
    saved = (list(root.handlers), root.level)
    try:
        setup_logging("debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])


def test_setup_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level: LOUD"):
        setup_logging("loud")
