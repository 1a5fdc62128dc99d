# src/compat_scraper/config.py
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
import logging

from pydantic import ValidationError

from .exceptions import ConfigurationError
from .types import VendorProfile

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent

def deep_merge_dicts(base: Dict, update: Dict) -> Dict:
    """Recursively merge two dictionaries. Update values override base values."""
    merged = base.copy()
    for key, value in update.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = deep_merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged

def _read_yaml_dict(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing YAML configuration from {path}: {e}")
    except IOError as e:
        raise ConfigurationError(f"Error reading configuration file {path}: {e}")
    if not isinstance(data, dict): # Ensure it's a dictionary
        raise ConfigurationError(f"Configuration file {path} is not a valid YAML dictionary.")
    return data

def _resolve_path(value: str) -> str:
    path = Path(value)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return str(path)

def load_config(config_path: Optional[str] = None, env: Optional[str] = None) -> Dict[str, Any]:
    """
    Loads configuration from YAML files.
    It loads a default config, then merges an optional environment-specific config
    (e.g. config/production.yaml) found next to it.
    """
    if config_path:
        primary_config_file = Path(config_path)
        if not primary_config_file.is_absolute():
            primary_config_file = PROJECT_ROOT / primary_config_file
    else:
        primary_config_file = PROJECT_ROOT / "config/default.yaml"

    if not primary_config_file.exists():
        raise ConfigurationError(f"Primary configuration file not found: {primary_config_file}")

    config_data = _read_yaml_dict(primary_config_file)

    if env and env != "default":
        env_config_file = primary_config_file.parent / f"{env}.yaml"
        if env_config_file.exists() and env_config_file != primary_config_file:
            config_data = deep_merge_dicts(config_data, _read_yaml_dict(env_config_file))
            logger.info(f"Loaded and merged environment configuration from: {env_config_file}")
        else:
            logger.warning(f"Environment configuration file for '{env}' not found at {env_config_file}. Using primary config only.")

    # Ensure essential paths are absolute
    scraper_section = config_data.get('scraper') or {}
    if scraper_section.get('output_dir'):
        scraper_section['output_dir'] = _resolve_path(scraper_section['output_dir'])

    if 'logging' in config_data and config_data['logging'].get('file'):
        config_data['logging']['file'] = _resolve_path(config_data['logging']['file'])

    caching = config_data.get('advanced', {}).get('caching', {})
    if caching.get('cache_name'):
        caching['cache_name'] = _resolve_path(caching['cache_name'])

    debug_section = config_data.get('debug') or {}
    if debug_section.get('raw_html_dir'):
        debug_section['raw_html_dir'] = _resolve_path(debug_section['raw_html_dir'])

    logger.debug(f"Final configuration loaded: {config_data}")
    return config_data

def load_vendor_profiles(config: Dict[str, Any]) -> List[VendorProfile]:
    """
    Builds validated VendorProfile objects from the `vendors` section, in config order.
    The mapping key becomes the profile key unless one is given explicitly.
    """
    vendors_section = config.get("vendors")
    if not isinstance(vendors_section, dict) or not vendors_section:
        raise ConfigurationError("Configuration has no 'vendors' section.")

    scraper_section = config.get("scraper", {})
    profiles = []
    for key, raw_profile in vendors_section.items():
        if not isinstance(raw_profile, dict):
            raise ConfigurationError(f"Vendor profile '{key}' must be a mapping.")
        profile_data = {"key": key, **raw_profile}
        # Scraper-wide defaults, overridable per vendor
        profile_data.setdefault("timeout", scraper_section.get("request_timeout", 60))
        if scraper_section.get("user_agent"):
            profile_data.setdefault("user_agent", scraper_section["user_agent"])
        try:
            profiles.append(VendorProfile(**profile_data))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid vendor profile '{key}': {e}") from e

    logger.debug(f"Loaded vendor profiles: {[p.key for p in profiles]}")
    return profiles
