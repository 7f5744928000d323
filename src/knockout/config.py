"""
Engine configuration.

Settings live in a YAML file in the same spirit as the allocator's
constraints file; anything not given falls back to DEFAULT_CONFIG.
"""
import os
import yaml


DEFAULT_CONFIG = {
    'fpl_api_base': 'https://fantasy.premierleague.com/api',
    'request_timeout_seconds': 10,
    # League sizing probes: 100 -> 1000 -> 10000
    'probe_start_page': 100,
    'probe_multiplier': 10,
    'max_probe_page': 10000,
    # Tournament size tiers
    'standard_tier_max': 48,
    'large_tier_max': 1000,
}


def load_config(file_path=None):
    """
    Load configuration from a YAML file, merged over the defaults.

    A missing path or an empty file yields a copy of DEFAULT_CONFIG.
    """
    config = dict(DEFAULT_CONFIG)
    if not file_path or not os.path.exists(file_path):
        return config

    with open(file_path, mode='r', encoding='utf-8') as file:
        data = yaml.safe_load(file) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {file_path} must contain a mapping, got {type(data).__name__}")

    config.update(data)
    return config


def get_setting(config, key):
    """Read a setting, falling back to the default when config is None or lacks it."""
    if config is None:
        return DEFAULT_CONFIG[key]
    return config.get(key, DEFAULT_CONFIG[key])
