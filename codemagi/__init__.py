"""
codemagi utilities

General-purpose helpers for text, dates, numbers, files, tables, data
loading, mail delivery and key management.
"""

__version__ = "0.1.0"
__author__ = "August Detlefsen"

from .core.config import Config
from .types.errors import CodemagiError, ErrorCode
from .util.tables import OrderedTable, FlatFile, GridList, GridMap
from .util.version import Version

__all__ = [
    "Config",
    "CodemagiError",
    "ErrorCode",
    "OrderedTable",
    "FlatFile",
    "GridList",
    "GridMap",
    "Version",
]
