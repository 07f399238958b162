"""Configuration system for nftgen.

This module handles configuration loading, merging and overrides for the
generator: where the asset data lives, how outputs are numbered and encoded,
and the static fields of the metadata record. Supports JSON and YAML formats
with CLI-based overrides.

Usage:
    config, config_file = load_config(
        config_path='nftgen.yaml',
        overrides={'data_dir': 'assets'}
    )

Author:
    Jake Meador <jameador13@gmail.com>
"""

import contextlib
import copy
import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml

__author__ = 'Jake Meador <jameador13@gmail.com>'
__all__ = [
    'DEFAULT_CONFIG',
    'merge_dicts',
    'find_config_file',
    'load_config_file',
    'save_config_file',
    'load_config',
    'parse_override_arg',
    'apply_key_path',
    'parse_set_string',
]

logger = logging.getLogger('nftgen')

DEFAULT_CONFIG: dict[str, Any] = {
    'data_dir': 'data',
    'output': {
        'count_dir': 'output',
        'jpeg_quality': 95,
    },
    'metadata': {
        'name': 'NFT Collection Title #{id}',
        'image': '{IPFS_IMAGE_URL}',
        'description': 'Description',
    },
}


def merge_dicts(base: dict, override: dict) -> dict:
    """Recursively merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def find_config_file(custom_path: Optional[str] = None) -> Optional[Path]:
    """Find config file in order: custom, CWD nftgen.{json,yaml}, package nftgen.yaml."""
    if custom_path:
        path = Path(custom_path)
        if not path.exists():
            raise FileNotFoundError(f'Config file not found: {custom_path}')
        return path

    cwd = Path.cwd()
    if (json_config := cwd / 'nftgen.json').exists():
        return json_config

    if (yaml_config := cwd / 'nftgen.yaml').exists():
        return yaml_config

    script_dir = Path(__file__).parent
    if (package_config := script_dir / 'nftgen.yaml').exists():
        return package_config

    return None


def load_config_file(path: Path) -> dict:
    """Load config file (JSON or YAML)."""
    content = path.read_text(encoding='utf-8')

    if path.suffix in ['.json', '.JSON']:
        return json.loads(content)

    if path.suffix in ['.yaml', '.yml', '.YAML', '.YML']:
        return yaml.safe_load(content) or {}

    try:
        return yaml.safe_load(content) or {}
    except yaml.YAMLError:
        return json.loads(content)


def save_config_file(path: Path, config: dict) -> None:
    """Save config file (JSON or YAML)."""
    if path.suffix in ['.json', '.JSON']:
        content = json.dumps(config, indent=2)
    else:
        content = yaml.dump(config, default_flow_style=False, sort_keys=False)

    path.write_text(content, encoding='utf-8')


def load_config(
    config_path: Optional[str] = None,
    overrides: Optional[dict] = None,
    save_overrides: bool = False,
) -> tuple[dict, Optional[Path]]:
    """Load configuration with optional overrides.

    Overrides are written back to the config file when ``save_overrides`` is
    set and a file was found.

    Returns:
        The merged configuration and the file it was read from (None when
        only defaults were used).
    """
    default_config = copy.deepcopy(DEFAULT_CONFIG)

    config_file = find_config_file(config_path)

    if config_file:
        logger.info(f'Loading config: {config_file}')
        config = merge_dicts(default_config, load_config_file(config_file))
    else:
        logger.info('No config file found, using defaults')
        config = default_config

    if overrides:
        logger.debug(f'Applying overrides: {overrides}')
        config = merge_dicts(config, overrides)

        if save_overrides and config_file:
            logger.info(f'Saving overrides to: {config_file}')
            save_config_file(config_file, config)

    return config, config_file


def parse_override_arg(arg: str) -> tuple[str, Any]:
    """Parse config override argument (key.path=value)."""
    if '=' not in arg:
        raise ValueError(f'Invalid override format (expected key=value): {arg}')

    key_path, value = arg.split('=', 1)

    with contextlib.suppress(json.JSONDecodeError, ValueError):
        value = json.loads(value)

    return key_path, value


def apply_key_path(config: dict, key_path: str, value: Any) -> dict:
    """Apply value to nested key path."""
    keys = key_path.split('.')
    current = config

    for key in keys[:-1]:
        if key not in current or not isinstance(current[key], dict):
            current[key] = {}
        current = current[key]

    current[keys[-1]] = value
    return config


def parse_set_string(set_string: str) -> dict[str, Any]:
    """Parse space-separated key.path=value pairs into a nested override dict."""
    overrides: dict[str, Any] = {}

    for pair in set_string.split():
        if '=' not in pair:
            logger.warning(f'Ignoring malformed override: {pair}')
            continue

        key_path, value = parse_override_arg(pair)
        overrides = apply_key_path(overrides, key_path, value)

    return overrides
