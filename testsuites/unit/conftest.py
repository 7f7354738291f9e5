import pytest

from pagewatch.common.config_loader import ConfigLoader


@pytest.fixture(autouse=True)
def _fresh_configuration(monkeypatch):
    """Each test sees the repository config file and no stray overrides."""
    for key in ("WEBDRIVER_BASE_URL", "WEBDRIVER_DRIVER", "WEBDRIVER_HEADLESS",
                "WAITS_ELEMENT_TIMEOUT_MS", "WAITS_POLLING_INTERVAL_MS", "RESOURCES_DIRS"):
        monkeypatch.delenv(key, raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()
