# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Import a private key and its certificate chain into a password-protected
PKCS#12 keystore.

The key is a PKCS#8 private key and the certificates are X.509, both in DER
(PEM is accepted too). A certificate chain is the certificates concatenated
in order, leaf first.
"""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Union

import click
from cryptography import x509
from cryptography.hazmat.primitives.serialization import (
    BestAvailableEncryption,
    load_der_private_key,
    load_pem_private_key,
    pkcs12,
)

from ..core.config import Config, DEFAULT_KEY_ALIAS, default_keystore_path
from ..types.errors import KeyStoreError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

_PEM_MARKER = b"-----BEGIN"


def _read(path: PathLike) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise KeyStoreError(f"Cannot read {path}", path=str(path), cause=e) from e


def _der_length(data: bytes, offset: int) -> int:
    """Total encoded length of the DER element starting at ``offset``."""
    if offset + 2 > len(data) or data[offset] != 0x30:
        raise ValueError(f"Expected a DER SEQUENCE at offset {offset}")
    first = data[offset + 1]
    if first < 0x80:
        return 2 + first
    count = first & 0x7F
    if count == 0 or offset + 2 + count > len(data):
        raise ValueError(f"Bad DER length at offset {offset}")
    length = int.from_bytes(data[offset + 2:offset + 2 + count], "big")
    return 2 + count + length


def split_der_certificates(data: bytes) -> List[bytes]:
    """Split concatenated DER certificates into their individual encodings."""
    output = []
    offset = 0
    while offset < len(data):
        end = offset + _der_length(data, offset)
        if end > len(data):
            raise ValueError("Truncated certificate data")
        output.append(data[offset:end])
        offset = end
    return output


def load_private_key(data: bytes):
    if data.lstrip().startswith(_PEM_MARKER):
        return load_pem_private_key(data, password=None)
    return load_der_private_key(data, password=None)


def load_certificates(data: bytes) -> List[x509.Certificate]:
    """Every certificate in ``data``, in file order."""
    if data.lstrip().startswith(_PEM_MARKER):
        return x509.load_pem_x509_certificates(data)
    return [x509.load_der_x509_certificate(der) for der in split_der_certificates(data)]


def import_key(key_file: PathLike, cert_file: PathLike, alias: str = DEFAULT_KEY_ALIAS,
               keystore_path: Optional[PathLike] = None,
               password: Union[str, bytes] = b"") -> Path:
    """
    Store ``key_file`` and the certificates of ``cert_file`` under ``alias``
    in a PKCS#12 keystore protected by ``password``. Any existing keystore
    file is replaced. Returns the keystore path.
    """
    if isinstance(password, str):
        password = password.encode("utf-8")
    if not password:
        raise KeyStoreError("Keystore password must not be empty")

    keystore_path = Path(keystore_path or default_keystore_path())
    logger.info("Using keystore-file: %s", keystore_path)

    try:
        key = load_private_key(_read(key_file))
    except (ValueError, TypeError) as e:
        raise KeyStoreError(f"Cannot load private key from {key_file}",
                            path=str(key_file), cause=e) from e

    try:
        certs = load_certificates(_read(cert_file))
    except ValueError as e:
        raise KeyStoreError(f"Cannot load certificates from {cert_file}",
                            path=str(cert_file), cause=e) from e
    if not certs:
        raise KeyStoreError(f"No certificates found in {cert_file}", path=str(cert_file))

    if len(certs) == 1:
        logger.info("One certificate, no chain.")
    else:
        logger.info("Certificate chain length: %d", len(certs))

    try:
        data = pkcs12.serialize_key_and_certificates(
            alias.encode("utf-8"), key, certs[0], certs[1:] or None,
            BestAvailableEncryption(password),
        )
    except (ValueError, TypeError) as e:
        raise KeyStoreError(f"Cannot build keystore: {e}", path=str(keystore_path), cause=e) from e

    try:
        keystore_path.write_bytes(data)
    except OSError as e:
        raise KeyStoreError(f"Cannot write {keystore_path}", path=str(keystore_path), cause=e) from e

    logger.info("Key and certificate stored under alias %s", alias)
    return keystore_path


def read_keystore(keystore_path: PathLike, password: Union[str, bytes]) -> Tuple[
        Optional[str], object, List[x509.Certificate]]:
    """Load a keystore written by import_key: (alias, private key, certificates)."""
    if isinstance(password, str):
        password = password.encode("utf-8")
    try:
        loaded = pkcs12.load_pkcs12(_read(keystore_path), password)
    except ValueError as e:
        raise KeyStoreError(f"Cannot open keystore {keystore_path}",
                            path=str(keystore_path), cause=e) from e

    alias = None
    certs = []
    if loaded.cert is not None:
        certs.append(loaded.cert.certificate)
        if loaded.cert.friendly_name:
            alias = loaded.cert.friendly_name.decode("utf-8")
    certs.extend(c.certificate for c in loaded.additional_certs)
    return alias, loaded.key, certs


@click.command()
@click.argument("keyfile", type=click.Path(exists=True, dir_okay=False))
@click.argument("certfile", type=click.Path(exists=True, dir_okay=False))
@click.argument("alias", required=False)
@click.argument("keystore", required=False)
@click.password_option("--password", prompt="Keystore password",
                       help="Keystore password (prompted when omitted)")
def main(keyfile, certfile, alias, keystore, password):
    """Import KEYFILE and CERTFILE into a PKCS#12 keystore."""
    config = Config.from_env()
    logging.basicConfig(level=config.log_level, format="%(message)s")

    try:
        path = import_key(keyfile, certfile, alias or config.key_alias,
                          keystore or config.keystore_path, password)
    except KeyStoreError as e:
        logger.error("Import failed: %s", e)
        sys.exit(1)

    click.echo(f"Key and certificate stored in {path}")
    click.echo(f"Alias: {alias or config.key_alias}")


if __name__ == "__main__":
    main()
