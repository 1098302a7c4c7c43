import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from usfm_converter.config.settings import Settings


def test_settings_defaults():
    s = Settings(openrouter_api_key=None)
    assert s.openrouter_base_url == "https://openrouter.ai/api/v1"
    assert s.default_model == "usfm-convert"
    assert s.output_filename == "converted.usfm"


def test_settings_reads_yaml_file(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        cfg = Path(d) / "config.yaml"
        cfg.write_text("max_retries: 5\napp_title: Study Notes\n", encoding="utf-8")
        monkeypatch.setenv("USFM_CONFIG_FILE", str(cfg))
        monkeypatch.delenv("MAX_RETRIES", raising=False)
        monkeypatch.delenv("APP_TITLE", raising=False)
        s = Settings()
        assert s.max_retries == 5
        assert s.app_title == "Study Notes"


def test_env_overrides_yaml(monkeypatch):
    with tempfile.TemporaryDirectory() as d:
        cfg = Path(d) / "config.yaml"
        cfg.write_text("max_retries: 5\n", encoding="utf-8")
        monkeypatch.setenv("USFM_CONFIG_FILE", str(cfg))
        monkeypatch.setenv("MAX_RETRIES", "1")
        assert Settings().max_retries == 1


def test_short_api_key_rejected():
    with pytest.raises(ValidationError):
        Settings(openrouter_api_key="short")


def test_blank_api_key_treated_as_missing():
    assert Settings(openrouter_api_key="   ").openrouter_api_key is None
