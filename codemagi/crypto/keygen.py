# Copyright (c) 2025 August Detlefsen and the codemagi-utils contributors.
# Licensed under the MIT License. See LICENSE for details.

"""
Secret key generation to a raw key file and read-back.
"""

import logging
import os
import secrets
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

import click
from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers.algorithms import AES

from ..common.decorators import catch_and_log_exceptions
from ..core.config import Config
from ..types.errors import KeyGenerationError

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]

DES_KEY_LENGTH = 8
DESEDE_KEY_LENGTH = 24


@dataclass
class SecretKey:
    """Raw secret key material tagged with its algorithm name."""
    algorithm: str
    material: bytes = field(repr=False)

    @property
    def size(self) -> int:
        """Key length in bits."""
        return len(self.material) * 8


def _family(algorithm: str) -> str:
    name = algorithm.upper()
    if name in ("DESEDE", "TRIPLEDES", "3DES"):
        return "DESEDE"
    return name


def set_odd_parity(material: bytes) -> bytes:
    """Adjust the low bit of every byte so each byte has odd parity."""
    output = bytearray()
    for b in material:
        high = b & 0xFE
        output.append(high | (bin(high).count("1") + 1) % 2)
    return bytes(output)


def has_odd_parity(material: bytes) -> bool:
    return all(bin(b).count("1") % 2 == 1 for b in material)


def generate_key(key_size: int, algorithm: str) -> SecretKey:
    """
    Random key material for ``algorithm``. DES and DESede keys have a fixed
    length with odd parity; any other algorithm takes ``key_size`` bits.
    """
    family = _family(algorithm)
    if family == "DES":
        material = set_odd_parity(secrets.token_bytes(DES_KEY_LENGTH))
    elif family == "DESEDE":
        material = set_odd_parity(secrets.token_bytes(DESEDE_KEY_LENGTH))
    else:
        if key_size <= 0 or key_size % 8:
            raise KeyGenerationError(f"Key size must be a positive multiple of 8 bits: {key_size}",
                                     algorithm=algorithm)
        material = secrets.token_bytes(key_size // 8)

    key = SecretKey(algorithm, material)
    validate_key(key)
    return key


def validate_key(key: SecretKey) -> None:
    """Raise KeyGenerationError when the key material does not fit its algorithm."""
    family = _family(key.algorithm)
    material = key.material
    try:
        if family == "DES":
            if len(material) < DES_KEY_LENGTH:
                raise ValueError(f"DES keys need {DES_KEY_LENGTH} bytes, got {len(material)}")
        elif family == "DESEDE":
            if len(material) < DESEDE_KEY_LENGTH:
                raise ValueError(f"DESede keys need {DESEDE_KEY_LENGTH} bytes, got {len(material)}")
            TripleDES(material[:DESEDE_KEY_LENGTH])
        elif family == "AES":
            AES(material)
        elif not material:
            raise ValueError("Key material is empty")
    except ValueError as e:
        raise KeyGenerationError(f"Invalid {key.algorithm} key: {e}",
                                 algorithm=key.algorithm, cause=e) from e


def write_key(key_size: int, path: PathLike, algorithm: str) -> SecretKey:
    """Generate a key and write its raw bytes to ``path``."""
    key = generate_key(key_size, algorithm)
    try:
        Path(path).write_bytes(key.material)
    except OSError as e:
        raise KeyGenerationError(f"Cannot write key to {path}", algorithm=algorithm, cause=e) from e

    logger.info("Saved %s key (%d bytes) to %s", key.algorithm, len(key.material), path)
    return key


def read_key(path: PathLike, algorithm: str) -> SecretKey:
    """Read a raw key file written by write_key and check it against ``algorithm``."""
    try:
        material = Path(path).read_bytes()
    except OSError as e:
        raise KeyGenerationError(f"Cannot read key from {path}", algorithm=algorithm, cause=e) from e

    family = _family(algorithm)
    if family == "DES":
        material = material[:DES_KEY_LENGTH]
    elif family == "DESEDE":
        material = material[:DESEDE_KEY_LENGTH]

    key = SecretKey(algorithm, material)
    validate_key(key)
    logger.debug("Read %s key of %d bytes from %s", algorithm, len(material), path)
    return key


@catch_and_log_exceptions(logger_instance=logger, reraise=False,
                          exceptions=(KeyGenerationError,))
def _generate(algorithm: str, key_size: int, output: str) -> SecretKey:
    write_key(key_size, output, algorithm)
    return read_key(output, algorithm)


@click.command()
@click.argument("algorithm")
@click.argument("key_size", type=int)
@click.argument("output", type=click.Path(dir_okay=False))
def main(algorithm, key_size, output):
    """Generate an ALGORITHM key of KEY_SIZE bits into OUTPUT and read it back."""
    logging.basicConfig(level=Config.from_env().log_level, format="%(message)s")

    key = _generate(algorithm, key_size, output)
    if key is None:
        sys.exit(1)

    click.echo(f"Algorithm = {key.algorithm}")
    click.echo(f"Saved File = {output}")
    click.echo(f"Size = {len(key.material)}")


if __name__ == "__main__":
    main()
