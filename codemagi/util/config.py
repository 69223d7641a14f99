# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Configuration helpers for the codemagi utilities.

Settings come from ``CODEMAGI_*`` environment variables or from JSON/YAML
files. Values read from the environment are strings; the typed getters
convert them and fall back to the default when conversion fails.
"""

import json
import logging
import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Optional, List

import yaml

from ..types.errors import CodemagiError, ConfigurationError
from .booleans import parse_bool

logger = logging.getLogger(__name__)

ENV_PREFIX = "CODEMAGI_"

_DURATION_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)\s*(ms|s|m|h|d)?$')
_DURATION_UNITS = {
    'ms': 'milliseconds',
    's': 'seconds',
    'm': 'minutes',
    'h': 'hours',
    'd': 'days',
}

_FILE_FORMATS = {'.json': 'json', '.yaml': 'yaml', '.yml': 'yaml'}


def normalize_config_key(key: str) -> str:
    """``SMTP-Host`` and ``smtp_host`` name the same setting."""
    return key.strip().lower().replace('-', '_')


def load_config_from_env(prefix: str = ENV_PREFIX) -> Dict[str, str]:
    """Every ``prefix``-ed environment variable, keyed by its normalized suffix."""
    return {
        normalize_config_key(name[len(prefix):]): value
        for name, value in os.environ.items()
        if name.startswith(prefix) and len(name) > len(prefix)
    }


def _split_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(',') if item.strip()]
    return list(value or [])


_CASTS: Dict[type, Callable[[Any], Any]] = {
    bool: parse_bool,
    list: _split_list,
}


def get_config_value(key: str, default: Any = None,
                     cast_type: Optional[type] = None,
                     env_prefix: str = ENV_PREFIX) -> Any:
    """
    Read ``<env_prefix><KEY>`` from the environment.

    With ``cast_type`` the raw string is converted; a value that does not
    convert is logged and ``default`` is returned instead.
    """
    env_key = f"{env_prefix}{normalize_config_key(key).upper()}"
    raw = os.environ.get(env_key)
    if raw is None:
        return default
    if cast_type is None:
        return raw

    cast = _CASTS.get(cast_type, cast_type)
    try:
        return cast(raw)
    except (ValueError, TypeError, CodemagiError) as e:
        logger.warning("Ignoring invalid value for %s: %r (%s)", env_key, raw, e)
        return default


def get_bool_config(key: str, default: bool = False,
                    env_prefix: str = ENV_PREFIX) -> bool:
    return get_config_value(key, default, bool, env_prefix)


def get_int_config(key: str, default: int = 0,
                   env_prefix: str = ENV_PREFIX) -> int:
    return get_config_value(key, default, int, env_prefix)


def get_float_config(key: str, default: float = 0.0,
                     env_prefix: str = ENV_PREFIX) -> float:
    return get_config_value(key, default, float, env_prefix)


def get_list_config(key: str, default: Optional[List[str]] = None,
                    env_prefix: str = ENV_PREFIX) -> List[str]:
    """Comma-separated list; empty items are dropped."""
    return get_config_value(key, [] if default is None else default, list, env_prefix)


def parse_duration_string(duration_str: str) -> timedelta:
    """
    Parse ``250ms``, ``30s``, ``5m``, ``2h`` or ``1d``. A bare number is
    taken as seconds.
    """
    if not isinstance(duration_str, str):
        raise ConfigurationError("Duration must be a string", config_value=duration_str)

    match = _DURATION_PATTERN.match(duration_str.strip().lower())
    if not match:
        raise ConfigurationError(f"Invalid duration format: {duration_str}",
                                 config_value=duration_str)

    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit or 's']: float(amount)})


def get_duration_config(key: str, default: float = 0.0,
                        env_prefix: str = ENV_PREFIX) -> float:
    """A duration setting in seconds, e.g. ``CODEMAGI_SMTP_TIMEOUT=1m``."""
    return get_config_value(
        key, default,
        lambda raw: parse_duration_string(raw).total_seconds(),
        env_prefix,
    )


def merge_configs(*configs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge configuration mappings left to right. Nested mappings are merged
    key by key; any other value from a later mapping replaces the earlier one.
    """
    result: Dict[str, Any] = {}
    for config in configs:
        if not isinstance(config, dict):
            continue
        for key, value in config.items():
            current = result.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                result[key] = merge_configs(current, value)
            else:
                result[key] = value
    return result


def _type_name(expected: Any) -> str:
    if isinstance(expected, tuple):
        return " or ".join(t.__name__ for t in expected)
    return expected.__name__


def validate_config(config: Dict[str, Any],
                    schema: Dict[str, Dict[str, Any]]) -> List[str]:
    """
    Check ``config`` against ``schema`` and return the problems found.

    Each schema entry may set ``required``, ``type`` (a type or tuple of
    types), ``choices``, ``min`` and ``max``. A field with the wrong type is
    not checked further.
    """
    errors = []
    for name, rules in schema.items():
        if name not in config:
            if rules.get('required'):
                errors.append(f"Missing required field: {name}")
            continue

        value = config[name]
        expected = rules.get('type')
        if expected and not isinstance(value, expected):
            errors.append(f"Field {name} must be of type {_type_name(expected)}")
            continue

        choices = rules.get('choices')
        if choices and value not in choices:
            errors.append(f"Field {name} must be one of: {choices}")

        if isinstance(value, bool) or not isinstance(value, (int, float)):
            continue
        if rules.get('min') is not None and value < rules['min']:
            errors.append(f"Field {name} must be >= {rules['min']}")
        if rules.get('max') is not None and value > rules['max']:
            errors.append(f"Field {name} must be <= {rules['max']}")

    return errors


def _file_format(file_path: str, format_type: Optional[str] = None) -> str:
    suffix = f".{format_type.lower().lstrip('.')}" if format_type else Path(file_path).suffix.lower()
    try:
        return _FILE_FORMATS[suffix]
    except KeyError:
        raise ConfigurationError(f"Unsupported configuration file format: {suffix or file_path}",
                                 config_key=file_path) from None


def load_config_file(file_path: str) -> Dict[str, Any]:
    """Load a JSON or YAML configuration file; an empty file gives ``{}``."""
    path = Path(file_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {file_path}", config_key=file_path)

    fmt = _file_format(file_path)
    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f) if fmt == 'json' else yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot parse configuration file: {file_path}",
                                 config_key=file_path, cause=e) from e

    logger.debug("Loaded %s configuration from %s", fmt, file_path)
    return data or {}


def save_config_file(config: Dict[str, Any], file_path: str,
                     format_type: Optional[str] = None) -> None:
    """Write ``config`` as JSON or YAML, creating parent directories."""
    fmt = _file_format(file_path, format_type)
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open('w', encoding='utf-8') as f:
        if fmt == 'json':
            json.dump(config, f, indent=2, sort_keys=True)
            f.write('\n')
        else:
            yaml.safe_dump(config, f, default_flow_style=False, sort_keys=True)
