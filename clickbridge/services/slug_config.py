"""Slug configuration: one destination profile per landing-page slug.

Configs are loaded once at startup. Malformed input never stops the app, it
falls back to the built-in default profile.
"""
import json
import logging
from typing import Dict, Mapping, Optional, Union

from pydantic import ValidationError

from clickbridge.core.config import Settings
from clickbridge.schemas.SlugConfig import SlugConfig

logger = logging.getLogger(__name__)

DEFAULT_SLUG = "default"

DEFAULT_SLUG_CONFIG = SlugConfig(
    slug=DEFAULT_SLUG,
    base_text="Hi Tal",
    default_utm_campaign="x-default",
)

SlugConfigMap = Dict[str, SlugConfig]


def default_slug_configs() -> SlugConfigMap:
    return {DEFAULT_SLUG: DEFAULT_SLUG_CONFIG}


def load_slug_configs(source: Optional[Union[str, Mapping]] = None) -> SlugConfigMap:
    """Parse slug configs from JSON text or an already decoded mapping."""
    if not source:
        return default_slug_configs()

    try:
        raw = json.loads(source) if isinstance(source, str) else source
        if not isinstance(raw, Mapping):
            raise ValueError("slug config must be a JSON object keyed by slug")
        configs = {}
        for key, value in raw.items():
            if isinstance(value, SlugConfig):
                configs[key] = value
            else:
                configs[key] = SlugConfig.model_validate(value)
    except (ValueError, TypeError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        logger.error(f"Failed to parse slug configs, using default profile: {e}")
        return default_slug_configs()

    logger.info(f"Loaded {len(configs)} slug config(s): {', '.join(configs)}")
    return configs


def load_slug_configs_from_settings(settings: Settings) -> SlugConfigMap:
    if settings.SLUG_CONFIG_PATH:
        try:
            with open(settings.SLUG_CONFIG_PATH, encoding="utf-8") as fh:
                return load_slug_configs(fh.read())
        except OSError as e:
            logger.error(f"Failed to read slug config file {settings.SLUG_CONFIG_PATH}: {e}")
            return default_slug_configs()
    return load_slug_configs(settings.SLUG_CONFIG_JSON)


def get_slug_config(slug: str, configs: Optional[SlugConfigMap] = None) -> SlugConfig:
    """Exact match, else the "default" entry, else the built-in default."""
    configs = configs if configs is not None else default_slug_configs()
    if slug in configs:
        return configs[slug]
    if DEFAULT_SLUG in configs:
        return configs[DEFAULT_SLUG]
    return DEFAULT_SLUG_CONFIG
