"""
Core configuration for the codemagi utilities.

Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
Licensed under the MIT License. See LICENSE for details.
"""

from .config import Config, default_keystore_path, DEFAULT_KEY_ALIAS

__all__ = [
    "Config",
    "default_keystore_path",
    "DEFAULT_KEY_ALIAS",
]
