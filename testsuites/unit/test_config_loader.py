import os

import pytest
import yaml

from pagewatch.common.config_loader import ConfigLoader, default_config_path
from pagewatch.exceptions import ConfigurationError


def test_env_override_and_defaults(monkeypatch, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.dump({"webdriver": {"base_url": "http://example.com", "driver": "firefox"}}),
        encoding="utf-8",
    )

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("webdriver.base_url") == "http://example.com"
    assert loader.get("waits.element_timeout_ms", 5000) == 5000

    ConfigLoader.reset()
    monkeypatch.setenv("WEBDRIVER_BASE_URL", "http://env.example.com")
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("webdriver.base_url") == "http://env.example.com"


def test_reload_updates_values(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"waits": {"element_timeout_ms": 5}}), encoding="utf-8")

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get("waits.element_timeout_ms") == 5

    config_path.write_text(yaml.dump({"waits": {"element_timeout_ms": 15}}), encoding="utf-8")
    loader.reload()
    assert loader.get("waits.element_timeout_ms") == 15


def test_loader_is_a_singleton(tmp_path):
    ConfigLoader.reset()
    first = ConfigLoader(config_path=tmp_path / "missing.yaml")
    assert ConfigLoader() is first
    assert first.get("webdriver.driver", "chromium") == "chromium"


def test_env_values_follow_the_default_type(monkeypatch, tmp_path):
    ConfigLoader.reset()
    loader = ConfigLoader(config_path=tmp_path / "missing.yaml")
    monkeypatch.setenv("WEBDRIVER_HEADLESS", "false")
    monkeypatch.setenv("WAITS_ELEMENT_TIMEOUT_MS", "750")
    monkeypatch.setenv("RESOURCES_DIRS", os.pathsep.join(["one", "two"]))

    assert loader.get("webdriver.headless", True) is False
    assert loader.get("waits.element_timeout_ms", 5000) == 750
    assert loader.get("resources.dirs", ["resources"]) == ["one", "two"]


def test_non_numeric_env_value_for_a_number_is_rejected(monkeypatch, tmp_path):
    ConfigLoader.reset()
    loader = ConfigLoader(config_path=tmp_path / "missing.yaml")
    monkeypatch.setenv("WAITS_ELEMENT_TIMEOUT_MS", "soon")

    with pytest.raises(ConfigurationError):
        loader.get("waits.element_timeout_ms", 5000)


def test_invalid_yaml_raises_configuration_error(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("webdriver: [unclosed", encoding="utf-8")

    ConfigLoader.reset()
    with pytest.raises(ConfigurationError):
        ConfigLoader(config_path=config_path)


def test_get_section(tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"waits": {"polling_interval_ms": 100}}), encoding="utf-8")

    ConfigLoader.reset()
    loader = ConfigLoader(config_path=config_path)
    assert loader.get_section("waits") == {"polling_interval_ms": 100}
    assert loader.get_section("logging") == {}


def test_config_path_can_come_from_the_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PAGEWATCH_CONFIG", str(tmp_path / "custom.yaml"))
    assert default_config_path() == tmp_path / "custom.yaml"
