import os
from pathlib import Path
from unittest.mock import patch

import pytest

from config.config import (
    DEFAULT_BASE_URL,
    NodeConfig,
    _expand_env_vars,
    get_config,
    load_config,
    load_yaml,
    reset_config,
    set_config,
)

SAMPLE_YAML = """
sendsafely:
  base_url: https://demo.sendsafely.com/
  api_key: ${TEST_SS_KEY:-yaml-key}
  api_secret: yaml-secret
  request_timeout_seconds: 10
retry:
  max_retries: 5
  base_delay: 0.5
  max_jitter: 0.1
logging:
  level: debug
  format: json
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_YAML)
    return path


@pytest.fixture(autouse=True)
def reset_singleton():
    reset_config()
    yield
    reset_config()


# =========================================================================
# load_yaml
# =========================================================================


class TestLoadYaml:
    def test_returns_empty_dict_for_nonexistent_file(self):
        assert load_yaml(Path("/nonexistent/path/config.yaml")) == {}

    def test_loads_yaml_file(self, tmp_path):
        config_file = tmp_path / "test.yaml"
        config_file.write_text("key: value\nnested:\n  a: 1\n")
        assert load_yaml(config_file) == {"key": "value", "nested": {"a": 1}}

    def test_returns_empty_dict_for_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert load_yaml(config_file) == {}


# =========================================================================
# _expand_env_vars
# =========================================================================


class TestExpandEnvVars:
    def test_expands_simple_variable(self):
        with patch.dict(os.environ, {"MY_VAR": "hello"}):
            assert _expand_env_vars("prefix-${MY_VAR}-suffix") == "prefix-hello-suffix"

    def test_default_when_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _expand_env_vars("${MISSING_VAR:-fallback}") == "fallback"
            assert _expand_env_vars("${MISSING:-}") == ""

    def test_keeps_literal_when_no_env_var(self):
        with patch.dict(os.environ, {}, clear=True):
            assert _expand_env_vars("${UNDEFINED_VAR}") == "${UNDEFINED_VAR}"

    def test_expands_nested_structures(self):
        with patch.dict(os.environ, {"VAL": "x"}):
            data = {"a": {"b": ["${VAL}", 5]}}
            assert _expand_env_vars(data) == {"a": {"b": ["x", 5]}}


# =========================================================================
# NodeConfig
# =========================================================================


class TestNodeConfig:
    def test_defaults(self):
        config = NodeConfig()
        assert config.base_url == DEFAULT_BASE_URL
        assert config.max_retries == 3
        assert config.base_delay == 1.0
        assert config.max_jitter == 0.2
        assert config.has_credentials is False
        config.validate()

    def test_type_coercion(self):
        config = NodeConfig(
            base_url="https://x.example.com/",
            max_retries="2",
            base_delay="0.25",
            request_timeout_seconds="15",
            log_level="warning",
            log_format="JSON",
        )
        assert config.base_url == "https://x.example.com"
        assert config.max_retries == 2
        assert config.base_delay == 0.25
        assert config.request_timeout_seconds == 15
        assert config.log_level == "WARNING"
        assert config.log_format == "json"

    @pytest.mark.parametrize(
        "kwargs,match",
        [
            ({"base_url": "ftp://files"}, "base_url"),
            ({"max_retries": -1}, "max_retries"),
            ({"base_delay": -1}, "base_delay"),
            ({"max_jitter": -0.1}, "max_jitter"),
            ({"request_timeout_seconds": 0}, "request_timeout_seconds"),
            ({"log_level": "LOUD"}, "log_level"),
            ({"log_format": "xml"}, "log_format"),
        ],
    )
    def test_validate_rejects(self, kwargs, match):
        with pytest.raises(ValueError, match=match):
            NodeConfig(**kwargs).validate()

    def test_retry_config(self):
        retry = NodeConfig(max_retries=1, base_delay=0.1, max_jitter=0).retry_config()
        assert retry.max_attempts == 2
        assert retry.get_delay(0) == pytest.approx(0.1)

    def test_masked_hides_secrets(self):
        config = NodeConfig(api_key="AKIA1234567890", api_secret="short")
        masked = config.masked()
        assert masked["api_key"] == "AKIA***"
        assert masked["api_secret"] == "***"
        assert NodeConfig().masked()["api_key"] == "<not set>"


# =========================================================================
# load_config
# =========================================================================


class TestLoadConfig:
    def test_loads_from_yaml(self, config_file):
        config = load_config(config_file)

        assert config.base_url == "https://demo.sendsafely.com"
        assert config.api_key == "yaml-key"
        assert config.api_secret == "yaml-secret"
        assert config.request_timeout_seconds == 10
        assert config.max_retries == 5
        assert config.base_delay == 0.5
        assert config.max_jitter == 0.1
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_yaml_env_expansion(self, config_file, monkeypatch):
        monkeypatch.setenv("TEST_SS_KEY", "expanded-key")
        assert load_config(config_file).api_key == "expanded-key"

    def test_environment_overrides_yaml(self, config_file, monkeypatch):
        monkeypatch.setenv("SENDSAFELY_BASE_URL", "https://env.example.com")
        monkeypatch.setenv("SENDSAFELY_API_KEY", "env-key")
        monkeypatch.setenv("SENDSAFELY_API_SECRET", "env-secret")
        monkeypatch.setenv("SENDSAFELY_MAX_RETRIES", "0")
        monkeypatch.setenv("SENDSAFELY_BASE_DELAY", "2")
        monkeypatch.setenv("SENDSAFELY_REQUEST_TIMEOUT_SECONDS", "45")
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        monkeypatch.setenv("LOG_FORMAT", "console")

        config = load_config(config_file)

        assert config.base_url == "https://env.example.com"
        assert config.api_key == "env-key"
        assert config.api_secret == "env-secret"
        assert config.max_retries == 0
        assert config.base_delay == 2.0
        assert config.request_timeout_seconds == 45
        assert config.log_level == "ERROR"
        assert config.log_format == "console"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")
        assert config.base_url == DEFAULT_BASE_URL
        assert config.has_credentials is False

    def test_overrides(self, config_file):
        assert load_config(config_file, overrides={"max_retries": 1}).max_retries == 1

    def test_invalid_values_raise(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("retry:\n  max_retries: -2\n")
        with pytest.raises(ValueError, match="max_retries"):
            load_config(path)


# =========================================================================
# Singleton
# =========================================================================


class TestSingleton:
    def test_set_and_get(self):
        config = NodeConfig(api_key="k", api_secret="s")
        set_config(config)
        assert get_config() is config

    def test_reset_forces_reload(self):
        set_config(NodeConfig(max_retries=9))
        reset_config()
        with patch("config.config.load_config", return_value=NodeConfig(max_retries=1)) as load:
            assert get_config().max_retries == 1
        load.assert_called_once_with()
