"""
Tests for formative_match/config.py.

What we test
------------
  - Default load (repo config/default.toml) validates with the shipped values.
  - Explicit TOML path is used; a sibling local.toml is deep-merged over it.
  - A missing explicit path raises FileNotFoundError.
  - FORMATIVE_MATCH_* environment variables override file values.
  - Validators reject bad URLs, timeouts, limits and log levels.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from formative_match.config import (
    ApiConfig,
    AppConfig,
    LoggingConfig,
    RecommendationsConfig,
    load_config,
)

_ENV_VARS = (
    "FORMATIVE_MATCH_API_BASE_URL",
    "FORMATIVE_MATCH_API_TOKEN",
    "FORMATIVE_MATCH_LOG_LEVEL",
    "FORMATIVE_MATCH_DEBUG",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_default_config(self):
        config = load_config()
        assert isinstance(config, AppConfig)
        assert config.recommendations.carousel_limit == 6
        assert config.recommendations.recent_limit == 3
        assert config.recommendations.deadline_limit == 5
        assert config.api.base_url.startswith("https://")

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text(
            '[api]\nbase_url = "http://localhost:8080/api/"\n'
            "[recommendations]\ncarousel_limit = 10\n",
            encoding="utf-8",
        )
        config = load_config(path)
        assert config.api.base_url == "http://localhost:8080/api"
        assert config.recommendations.carousel_limit == 10
        assert config.recommendations.recent_limit == 3

    def test_local_override_merged(self, tmp_path):
        base = tmp_path / "default.toml"
        base.write_text(
            "[recommendations]\ncarousel_limit = 4\nrecent_limit = 2\n", encoding="utf-8"
        )
        (tmp_path / "local.toml").write_text(
            "[recommendations]\nrecent_limit = 9\n", encoding="utf-8"
        )
        config = load_config(base)
        assert config.recommendations.carousel_limit == 4
        assert config.recommendations.recent_limit == 9

    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "c.toml"
        path.write_text('[logging]\nlevel = "INFO"\n', encoding="utf-8")
        monkeypatch.setenv("FORMATIVE_MATCH_API_BASE_URL", "https://staging.example/api")
        monkeypatch.setenv("FORMATIVE_MATCH_API_TOKEN", "secret")
        monkeypatch.setenv("FORMATIVE_MATCH_LOG_LEVEL", "debug")
        monkeypatch.setenv("FORMATIVE_MATCH_DEBUG", "true")
        config = load_config(path)
        assert config.api.base_url == "https://staging.example/api"
        assert config.api.token == "secret"
        assert config.logging.level == "DEBUG"
        assert config.debug is True

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("[recommendations]\ncarousel_limit = -1\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)


class TestValidators:
    def test_base_url_scheme(self):
        with pytest.raises(ValidationError):
            ApiConfig(base_url="ftp://example.com")

    @pytest.mark.parametrize("url", ["https://api.test:port/api", "https://", "http:///api"])
    def test_base_url_must_parse_with_host(self, url):
        with pytest.raises(ValidationError):
            ApiConfig(base_url=url)

    def test_base_url_trailing_slash_stripped(self):
        assert ApiConfig(base_url="http://localhost:8080/api/").base_url == "http://localhost:8080/api"

    def test_timeout_positive(self):
        with pytest.raises(ValidationError):
            ApiConfig(timeout_seconds=0)

    def test_limits_non_negative(self):
        assert RecommendationsConfig(carousel_limit=0).carousel_limit == 0
        with pytest.raises(ValidationError):
            RecommendationsConfig(deadline_limit=-2)

    def test_log_level(self):
        assert LoggingConfig(level="warning").level == "WARNING"
        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")

    def test_frozen(self):
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.debug = True
