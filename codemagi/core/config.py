"""
Configuration module for the codemagi utilities.

Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
Licensed under the MIT License. See LICENSE for details.
"""

from dataclasses import dataclass, field, fields
import logging
import os

from ..types.errors import ConfigurationError
from ..util.config import (
    get_config_value, get_duration_config, get_int_config, load_config_file,
    normalize_config_key, validate_config,
)

DEFAULT_KEY_ALIAS = "importkey"
KEYSTORE_FILE_NAME = "keystore.ImportKey"

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def default_keystore_path() -> str:
    """Keystore location: CODEMAGI_KEYSTORE, else keystore.ImportKey in the home directory."""
    override = os.getenv("CODEMAGI_KEYSTORE")
    if override:
        return override
    return os.path.join(os.path.expanduser("~"), KEYSTORE_FILE_NAME)


@dataclass
class Config:
    """Settings shared by the mail, crypto and network helpers"""
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_timeout: float = 30.0
    keystore_path: str = field(default_factory=default_keystore_path)
    key_alias: str = DEFAULT_KEY_ALIAS
    resolve_tries: int = 3
    resolve_delay: float = 1.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from CODEMAGI_* environment variables"""
        defaults = cls()
        return cls(
            smtp_host=get_config_value("smtp_host", defaults.smtp_host),
            smtp_port=get_int_config("smtp_port", defaults.smtp_port),
            smtp_timeout=get_duration_config("smtp_timeout", defaults.smtp_timeout),
            keystore_path=defaults.keystore_path,
            key_alias=get_config_value("key_alias", defaults.key_alias),
            resolve_tries=get_int_config("resolve_tries", defaults.resolve_tries),
            resolve_delay=get_duration_config("resolve_delay", defaults.resolve_delay),
            log_level=get_config_value("log_level", defaults.log_level).upper(),
        )

    @classmethod
    def from_file(cls, path: str) -> "Config":
        """Create configuration from a JSON or YAML file; unknown keys are ignored"""
        data = load_config_file(path)
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file must hold a mapping: {path}")

        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            name = normalize_config_key(str(key))
            if name in known:
                values[name] = value
            else:
                logging.getLogger(__name__).debug("Ignoring unknown config key %s", key)

        config = cls(**values)
        config.log_level = str(config.log_level).upper()
        return config

    def validate(self) -> bool:
        """Validate the configuration"""
        schema = {
            'smtp_host': {'required': True, 'type': str},
            'smtp_port': {'type': int, 'min': 1, 'max': 65535},
            'smtp_timeout': {'type': (int, float), 'min': 0},
            'keystore_path': {'type': str},
            'key_alias': {'type': str},
            'resolve_tries': {'type': int, 'min': 1},
            'resolve_delay': {'type': (int, float), 'min': 0},
            'log_level': {'type': str, 'choices': LOG_LEVELS},
        }
        errors = validate_config(self.__dict__, schema)
        if not self.smtp_host:
            errors.insert(0, "smtp_host is required")
        if not self.key_alias:
            errors.append("key_alias is required")
        if errors:
            raise ConfigurationError(errors[0], details={'errors': errors})
        return True
