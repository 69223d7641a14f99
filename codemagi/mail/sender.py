# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
MIME message building and SMTP delivery.

build_message() raises EmailDeliveryError for a message that cannot be
assembled. send_email() never raises: it reports the outcome through a
DeliveryResult and logs failures.
"""

import logging
import mimetypes
import re
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import getaddresses, parseaddr
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from ..core.config import Config
from ..types.errors import EmailDeliveryError
from ..util.values import is_empty

logger = logging.getLogger(__name__)

EMAIL_ADDRESS_REGEX = re.compile(r".+@.+\.[a-zA-Z]+")

# A path, or (filename, content, mimetype)
Attachment = Union[str, Path, Tuple[str, bytes, str]]
Recipients = Union[str, Sequence[str]]


@dataclass
class DeliveryResult:
    """Outcome of a send attempt; truthy when the message was accepted."""
    success: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


def _join(recipients: Optional[Recipients]) -> str:
    if recipients is None:
        return ""
    if isinstance(recipients, str):
        return recipients
    return ", ".join(r for r in recipients if not is_empty(r))


def _attach(message: EmailMessage, attachment: Attachment) -> None:
    if isinstance(attachment, tuple):
        filename, content, mimetype = attachment
    else:
        path = Path(attachment)
        filename = path.name
        content = path.read_bytes()
        mimetype = mimetypes.guess_type(filename)[0] or "application/octet-stream"

    maintype, _, subtype = mimetype.partition("/")
    message.add_attachment(content, maintype=maintype, subtype=subtype or "octet-stream",
                           filename=filename)


def build_message(sender: str, to: Recipients, subject: str, body: str,
                  html_body: Optional[str] = None, cc: Optional[Recipients] = None,
                  attachment: Optional[Attachment] = None) -> EmailMessage:
    """
    Assemble a message with a plain-text body, an optional HTML alternative
    and an optional attachment.
    """
    to_header = _join(to)
    if is_empty(sender) or is_empty(to_header):
        raise EmailDeliveryError("Message needs a sender and at least one recipient")

    message = EmailMessage()
    try:
        message["From"] = sender
        message["To"] = to_header
        cc_header = _join(cc)
        if not is_empty(cc_header):
            message["Cc"] = cc_header
        message["Subject"] = subject or ""

        message.set_content(body or "")
        if html_body is not None:
            message.add_alternative(html_body, subtype="html")
        if attachment is not None:
            _attach(message, attachment)
    except (OSError, ValueError, TypeError) as e:
        raise EmailDeliveryError(f"Cannot build message: {e}", cause=e) from e

    return message


def send_email(sender: str, to: Recipients, subject: str, body: str,
               html_body: Optional[str] = None, cc: Optional[Recipients] = None,
               attachment: Optional[Attachment] = None,
               smtp_host: Optional[str] = None, smtp_port: Optional[int] = None,
               timeout: Optional[float] = None,
               config: Optional[Config] = None) -> DeliveryResult:
    """
    Build and send one message over SMTP.

    Connection settings not given explicitly come from ``config``
    (``Config.from_env()`` when omitted).
    """
    if smtp_host is None or smtp_port is None or timeout is None:
        config = config or Config.from_env()
        smtp_host = smtp_host or config.smtp_host
        smtp_port = smtp_port or config.smtp_port
        timeout = timeout if timeout is not None else config.smtp_timeout

    try:
        message = build_message(sender, to, subject, body, html_body, cc, attachment)
        logger.debug("Sending '%s' to %s via %s:%s", subject, message['To'], smtp_host, smtp_port)
        with smtplib.SMTP(smtp_host, smtp_port, timeout=timeout) as smtp:
            smtp.send_message(message)
        return DeliveryResult(success=True)
    except Exception as e:
        logger.error("Failed to send email via %s: %s", smtp_host, e)
        return DeliveryResult(success=False, error=str(e))


def get_domain(address: Optional[str]) -> str:
    """The part after the last "@", or the whole string when there is none."""
    if is_empty(address):
        return ""
    return address[address.rfind("@") + 1:]


def is_valid_address(address: Optional[str]) -> bool:
    """
    True for a single well-formed address: it parses as an RFC 5322 address
    and has a dotted domain with an alphabetic top-level label.
    """
    logger.debug("Validating email address: %s", address)
    if is_empty(address):
        return False

    parsed = getaddresses([address])
    if len(parsed) != 1:
        return False
    _, addr = parseaddr(address)
    if not addr or " " in addr or addr.count("@") != 1:
        return False
    return EMAIL_ADDRESS_REGEX.search(addr) is not None
