import pytest
import yaml

from pricefeed.core.config import Config, build_feed_settings, load_feed_settings
from pricefeed.core.errors import ConfigError

MINIMAL = {
    "feed": {"backend": "html"},
    "fetcher": {"timeout": 5, "referer": "https://www.tgju.org/"},
    "instruments": {
        "dollar": {
            "now_urls": ["https://a.test/dollar"],
            "history_urls": ["https://a.test/archive/dollar"],
            "api_urls": "https://api.test/dollar",
            "selectors": [".value"],
        }
    },
}


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    monkeypatch.delenv("PRICEFEED_BACKEND", raising=False)
    monkeypatch.delenv("PRICEFEED_TIMEOUT", raising=False)
    monkeypatch.delenv("PRICEFEED_SETTINGS", raising=False)
    Config.reset()
    yield
    Config.reset()


def test_bundled_settings_describe_three_instruments():
    settings = load_feed_settings()

    assert [i.key for i in settings.instruments] == ["dollar", "gold18", "coin"]
    dollar = settings.instrument("dollar")
    assert dollar.now_urls[0] == "https://www.tgju.org/profile/price_dollar_rl"
    assert dollar.history_urls[0] == "https://www.tgju.org/archive/price_dollar_rl"
    assert dollar.selectors[0].startswith(".price .value")
    assert settings.backend == "html"
    assert settings.history == "archive"
    assert settings.avg_rounding == "round"
    assert settings.timeout == 15.0


def test_backend_defaults_follow_backend():
    settings = build_feed_settings(MINIMAL, {"backend": "api"})
    assert settings.history == "synthetic"
    assert settings.avg_rounding == "floor"
    assert settings.instrument("dollar").api_urls == ("https://api.test/dollar",)


def test_environment_overrides(tmp_path, monkeypatch):
    path = tmp_path / "settings.yaml"
    path.write_text(yaml.safe_dump(MINIMAL), encoding="utf-8")
    monkeypatch.setenv("PRICEFEED_BACKEND", "API")
    monkeypatch.setenv("PRICEFEED_TIMEOUT", "3.5")

    settings = load_feed_settings(path)
    assert settings.backend == "api"
    assert settings.timeout == 3.5


def test_invalid_values_are_rejected():
    with pytest.raises(ConfigError):
        build_feed_settings(MINIMAL, {"backend": "ftp"})
    with pytest.raises(ConfigError):
        build_feed_settings({**MINIMAL, "feed": {"history": "guess"}})
    with pytest.raises(ConfigError):
        build_feed_settings({**MINIMAL, "instruments": {"dollar": {"api_urls": ["https://api.test"]}}})


def test_missing_settings_file(tmp_path):
    with pytest.raises(ConfigError):
        load_feed_settings(tmp_path / "missing.yaml")


def test_settings_file_is_read_once_per_path(tmp_path):
    first = tmp_path / "first.yaml"
    second = tmp_path / "second.yaml"
    first.write_text(yaml.safe_dump(MINIMAL), encoding="utf-8")
    second.write_text(yaml.safe_dump({**MINIMAL, "feed": {"backend": "api"}}), encoding="utf-8")

    loaded = Config.load(first)
    first.write_text(yaml.safe_dump({"feed": {"backend": "api"}}), encoding="utf-8")
    assert Config.load(first) is loaded
    assert Config.load(second)["feed"]["backend"] == "api"

    Config.reset()
    assert Config.load(first)["feed"] == {"backend": "api"}
