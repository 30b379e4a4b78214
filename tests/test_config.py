"""Tests for the config module."""

import pytest

from brolog.config import AppConfig, env_overrides, load_config, load_yaml
from brolog.errors import ConfigError

SAMPLE = """
application:
  bro_path: /var/log/bro/current
  out_path: /tmp/summary
  log_file: /tmp/brolog.log
  log_level: debug
  workers: 3
summarize_by:
  conn: "proto:conn_state"
  dns: qtype_name
bool_encoding:
  dns: numeric
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "brolog.yml"
    path.write_text(SAMPLE)
    return str(path)


class TestConfigDefaults:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.bro_path == "./logs"
        assert cfg.out_path == "./summary"
        assert cfg.log_file is None
        assert cfg.log_level == "info"
        assert cfg.workers == 1
        assert cfg.summarize_by == {}
        assert cfg.bool_encoding == {}

    def test_frozen(self):
        cfg = AppConfig()
        with pytest.raises(AttributeError):
            cfg.workers = 2


class TestLoadYaml:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_yaml(str(tmp_path / "nope.yml"))

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("application: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_yaml(str(path))

    def test_empty_document(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert load_yaml(str(path)) == {}

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_yaml(str(path))


class TestFromDict:
    def test_full_file(self, config_file):
        cfg = AppConfig.from_dict(load_yaml(config_file))
        assert cfg.bro_path == "/var/log/bro/current"
        assert cfg.out_path == "/tmp/summary"
        assert cfg.log_file == "/tmp/brolog.log"
        assert cfg.log_level == "debug"
        assert cfg.workers == 3
        assert cfg.summarize_by == {"conn": "proto:conn_state", "dns": "qtype_name"}
        assert cfg.bool_encoding == {"dns": "numeric"}

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigError, match="summarize_by"):
            AppConfig.from_dict({"summarize_by": ["conn"]})

    @pytest.mark.parametrize("workers", ["many", 0, -2])
    def test_bad_workers(self, workers):
        with pytest.raises(ConfigError, match="workers"):
            AppConfig.from_dict({"application": {"workers": workers}})

    def test_dotted_get(self, config_file):
        cfg = AppConfig.from_dict(load_yaml(config_file))
        assert cfg.get("application.bro_path") == "/var/log/bro/current"
        assert cfg.get("application.workers") == 3
        assert cfg.get("summarize_by.conn") == "proto:conn_state"
        assert cfg.get("summarize_by.http") is None
        assert cfg.get("bool_encoding.dns") == "numeric"
        assert cfg.get("nothing.here", "fallback") == "fallback"


class TestOverrides:
    def test_env_overrides(self):
        env = {"BRO_PATH": "/data/bro", "WORKERS": "2", "LOG_LEVEL": "", "HOME": "/root"}
        assert env_overrides(env) == {"bro_path": "/data/bro", "workers": "2"}

    def test_with_overrides_skips_none(self):
        cfg = AppConfig().with_overrides(bro_path="/x", out_path=None, workers="4")
        assert cfg.bro_path == "/x"
        assert cfg.out_path == "./summary"
        assert cfg.workers == 4

    def test_load_config_precedence(self, config_file):
        cfg = load_config(config_file, environ={"OUT_PATH": "/env/out"})
        assert cfg.bro_path == "/var/log/bro/current"
        assert cfg.out_path == "/env/out"

    def test_load_config_from_env_var(self, config_file):
        cfg = load_config(environ={"BROLOG_CONFIG": config_file})
        assert cfg.workers == 3

    def test_load_config_without_file(self):
        assert load_config(environ={}) == AppConfig()
