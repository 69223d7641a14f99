# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Package crypto provides keystore import and secret key generation, each
with a command line entry point (codemagi-importkey, codemagi-keygen).
"""

from .keystore import import_key, read_keystore, load_certificates, load_private_key
from .keygen import SecretKey, generate_key, write_key, read_key, validate_key

__all__ = [
    # Keystore import
    'import_key', 'read_keystore', 'load_certificates', 'load_private_key',

    # Secret keys
    'SecretKey', 'generate_key', 'write_key', 'read_key', 'validate_key',
]
