"""
Тесты загрузки конфигурации и pydantic-схемы.
"""

import pytest

from hardware_collector.config import Config, load_config
from hardware_collector.core.config_schema import AppConfig, validate_config
from hardware_collector.core.exceptions import ConfigError


@pytest.fixture
def write_config(tmp_path):
    def _write(text: str):
        path = tmp_path / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def in_empty_dir(tmp_path, monkeypatch):
    """Рабочая папка без config.yaml."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestValidateConfig:

    def test_defaults(self):
        config = validate_config({})
        assert isinstance(config, AppConfig)
        assert config.netbox.filter_tag == "eks-a"
        assert config.output.csv_filename == "hardware.csv"
        assert config.matching.range_policy == "last"

    def test_timeout_out_of_range(self):
        with pytest.raises(ConfigError) as exc:
            validate_config({"netbox": {"timeout": 0}}, config_file="config.yaml")
        assert exc.value.key == "netbox.timeout"
        assert exc.value.config_file == "config.yaml"

    def test_unknown_policy(self):
        with pytest.raises(ConfigError) as exc:
            validate_config({"matching": {"interface_policy": "random"}})
        assert exc.value.key == "matching.interface_policy"

    def test_url_with_spaces(self):
        with pytest.raises(ConfigError):
            validate_config({"netbox": {"url": "http://net box"}})

    def test_delimiter_single_char(self):
        with pytest.raises(ConfigError):
            validate_config({"output": {"csv_delimiter": ";;"}})


class TestConfig:

    def test_defaults_without_file(self, in_empty_dir):
        config = Config()
        config.reload()
        assert config.config_file is None
        assert config.netbox.filter_tag == "eks-a"
        assert config.output.csv_filename == "hardware.csv"
        assert config.debug is False

    def test_yaml_merged_over_defaults(self, write_config):
        path = write_config(
            "netbox:\n"
            "  url: https://netbox.local\n"
            "matching:\n"
            "  range_policy: strict\n"
        )
        config = Config()
        config.reload(path)
        assert config.netbox.url == "https://netbox.local"
        assert config.netbox.timeout == 30
        assert config.matching.range_policy == "strict"
        assert config.matching.interface_policy == "last"

    def test_env_overrides_yaml(self, write_config, monkeypatch):
        path = write_config("netbox:\n  url: https://netbox.local\n  token: from-yaml\n")
        monkeypatch.setenv("NETBOX_URL", "https://env.local")
        monkeypatch.setenv("NETBOX_TOKEN", "from-env")
        config = Config()
        config.reload(path)
        assert config.netbox.url == "https://env.local"
        assert config.netbox.token == "from-env"

    def test_search_path(self, in_empty_dir):
        (in_empty_dir / "config.yaml").write_text("debug: true\n", encoding="utf-8")
        config = Config()
        config.reload()
        assert config.config_file == "config.yaml"
        assert config.debug is True

    def test_explicit_file_missing(self, tmp_path):
        with pytest.raises(ConfigError):
            Config().reload(str(tmp_path / "missing.yaml"))

    def test_broken_yaml(self, write_config):
        path = write_config("netbox: [unclosed\n")
        with pytest.raises(ConfigError):
            Config().reload(path)

    def test_root_not_mapping(self, write_config):
        path = write_config("- a\n- b\n")
        with pytest.raises(ConfigError):
            Config().reload(path)

    def test_invalid_value(self, write_config):
        path = write_config("netbox:\n  timeout: 1000\n")
        with pytest.raises(ConfigError) as exc:
            Config().reload(path)
        assert exc.value.key == "netbox.timeout"

    def test_section_to_dict(self, in_empty_dir):
        config = load_config()
        matching = config.matching.to_dict()
        assert matching["interface_tag"] == "eks-a"
        assert config.matching.get("missing", "x") == "x"
