import json

from clickbridge.core.config import Settings
from clickbridge.schemas.SlugConfig import SlugConfig
from clickbridge.services.slug_config import (
    DEFAULT_SLUG_CONFIG,
    get_slug_config,
    load_slug_configs,
    load_slug_configs_from_settings,
)


def test_parse_valid_json():
    configs = load_slug_configs(json.dumps({
        "default": {"slug": "default", "baseText": "Hi"},
        "pune": {"slug": "pune", "baseText": "Hi from Pune", "phoneOverride": "919999999999"},
    }))
    assert configs["default"].base_text == "Hi"
    assert configs["pune"].base_text == "Hi from Pune"
    assert configs["pune"].phone_override == "919999999999"


def test_accepts_mapping():
    configs = load_slug_configs({"test": {"slug": "test", "baseText": "Test message"}})
    assert configs["test"].base_text == "Test message"


def test_accepts_snake_case_keys():
    configs = load_slug_configs({"test": {"slug": "test", "base_text": "Test", "default_utm_campaign": "c"}})
    assert configs["test"].default_utm_campaign == "c"


def test_default_when_nothing_provided():
    configs = load_slug_configs()
    assert configs == {"default": DEFAULT_SLUG_CONFIG}
    assert configs["default"].base_text == "Hi Tal"
    assert configs["default"].default_utm_campaign == "x-default"


def test_invalid_json_falls_back_to_default():
    assert load_slug_configs("not valid json") == {"default": DEFAULT_SLUG_CONFIG}


def test_non_object_json_falls_back_to_default():
    assert load_slug_configs("[1, 2, 3]") == {"default": DEFAULT_SLUG_CONFIG}


def test_missing_required_fields_falls_back_to_default():
    configs = load_slug_configs({
        "pune": {"slug": "pune", "baseText": "ok"},
        "broken": {"slug": "broken"},
    })
    assert configs == {"default": DEFAULT_SLUG_CONFIG}


def test_empty_base_text_falls_back_to_default():
    assert load_slug_configs({"x": {"slug": "x", "baseText": ""}}) == {"default": DEFAULT_SLUG_CONFIG}


def test_get_slug_config_exact_match():
    configs = {
        "default": SlugConfig(slug="default", base_text="Default message"),
        "pune": SlugConfig(slug="pune", base_text="Pune message"),
    }
    assert get_slug_config("pune", configs).base_text == "Pune message"


def test_get_slug_config_unknown_slug_uses_default_entry():
    configs = {"default": SlugConfig(slug="default", base_text="Default message")}
    config = get_slug_config("nonexistent", configs)
    assert config.slug == "default"
    assert config.base_text == "Default message"


def test_get_slug_config_without_default_entry():
    configs = {"pune": SlugConfig(slug="pune", base_text="Pune message")}
    assert get_slug_config("chennai", configs) == DEFAULT_SLUG_CONFIG


def test_load_from_settings_file(tmp_path):
    path = tmp_path / "slugs.json"
    path.write_text(json.dumps({"pune": {"slug": "pune", "baseText": "From file"}}), encoding="utf-8")
    settings = Settings(_env_file=None, SLUG_CONFIG_PATH=str(path), SLUG_CONFIG_JSON=None)

    configs = load_slug_configs_from_settings(settings)
    assert configs["pune"].base_text == "From file"


def test_load_from_missing_file_falls_back(tmp_path):
    settings = Settings(_env_file=None, SLUG_CONFIG_PATH=str(tmp_path / "missing.json"))
    assert load_slug_configs_from_settings(settings) == {"default": DEFAULT_SLUG_CONFIG}


def test_load_from_settings_json():
    settings = Settings(
        _env_file=None,
        SLUG_CONFIG_PATH=None,
        SLUG_CONFIG_JSON='{"pune": {"slug": "pune", "baseText": "From env"}}',
    )
    assert load_slug_configs_from_settings(settings)["pune"].base_text == "From env"
