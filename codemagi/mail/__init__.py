# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Package mail builds MIME messages and delivers them over SMTP.
"""

from .sender import (
    DeliveryResult,
    build_message,
    send_email,
    get_domain,
    is_valid_address,
)

__all__ = [
    'DeliveryResult',
    'build_message',
    'send_email',
    'get_domain',
    'is_valid_address',
]
