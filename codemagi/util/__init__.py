# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Utility package providing the general-purpose helpers of the codemagi library.

This package includes:
- Text, value, number and boolean helpers (text, values, numeric, booleans)
- Date arithmetic, formatting and parsing (dates)
- Delimited sequences and ordered mappings (sequences)
- Tables and data loading (tables, loader)
- File, archive and network helpers (files, archive, net)
- SQL literal and form parameter helpers (db, forms)
- Version comparison and caller checks (version, security)
- Configuration management utilities (config)

Several modules share function names (``is_equal`` in text and dates, for
example), so most helpers are reached through their module.
"""

from . import (
    archive, booleans, config, dates, db, files, forms, loader, net, numeric,
    security, sequences, tables, text, values, version
)
from .archive import Zipper
from .tables import OrderedTable, FlatFile, GridList, GridMap
from .version import Version, compare_versions
from .loader import (
    load_data_from_string, load_data_from_quoted_string, load_fixed_width_string,
    load_data_from_file, load_quoted_file, load_fixed_width_file
)
from .net import resolve_domain
from .security import is_allowed_caller
from .values import is_empty, is_non_empty, nvl, no_nulls
from .config import (
    load_config_from_env, get_config_value, parse_duration_string,
    get_duration_config, merge_configs, validate_config, normalize_config_key, load_config_file,
    save_config_file, get_bool_config, get_int_config, get_float_config,
    get_list_config
)

__all__ = [
    # Modules
    'archive', 'booleans', 'config', 'dates', 'db', 'files', 'forms', 'loader',
    'net', 'numeric', 'security', 'sequences', 'tables', 'text', 'values',
    'version',

    # Containers and value types
    'Zipper', 'OrderedTable', 'FlatFile', 'GridList', 'GridMap',
    'Version', 'compare_versions',

    # Data loading
    'load_data_from_string', 'load_data_from_quoted_string',
    'load_fixed_width_string', 'load_data_from_file', 'load_quoted_file',
    'load_fixed_width_file',

    # Network and caller checks
    'resolve_domain', 'is_allowed_caller',

    # Empty-value helpers
    'is_empty', 'is_non_empty', 'nvl', 'no_nulls',

    # Configuration utilities
    'load_config_from_env', 'get_config_value', 'parse_duration_string',
    'get_duration_config',
    'merge_configs', 'validate_config', 'normalize_config_key',
    'load_config_file', 'save_config_file', 'get_bool_config',
    'get_int_config', 'get_float_config', 'get_list_config',
]
