"""
server_key_id.py — Server Signing Key Identifier Validation

Signing key ids have the form ``<algorithm>:<version>``, e.g.
``ed25519:key_1``. The version may only contain ASCII letters, digits
and underscores.
"""

from __future__ import annotations
import re
from typing import Optional

from .errors import IdentifierError, IdentifierErrorKind
from .key_algorithms import KeyAlgorithmRecognizer, signing_key_algorithms

_VERSION_RE = re.compile(r"[A-Za-z0-9_]+")


def validate_version(version: str) -> None:
    if not version:
        raise IdentifierError(IdentifierErrorKind.MINIMUM_LENGTH_NOT_SATISFIED)
    if not _VERSION_RE.fullmatch(version):
        raise IdentifierError(IdentifierErrorKind.INVALID_KEY_VERSION, version)


def validate(s: str, algorithms: Optional[KeyAlgorithmRecognizer] = None) -> int:
    """Validate a server signing key id and return the offset of its ``:``.

    Raises:
        IdentifierError: ``MISSING_KEY_DELIMITER``, ``UNKNOWN_KEY_ALGORITHM``,
            ``MINIMUM_LENGTH_NOT_SATISFIED`` (empty version) or
            ``INVALID_KEY_VERSION``, checked in that order.
    """
    colon_idx = s.find(":")
    if colon_idx < 0:
        raise IdentifierError(IdentifierErrorKind.MISSING_KEY_DELIMITER)

    recognizer = algorithms if algorithms is not None else signing_key_algorithms
    algorithm = s[:colon_idx]
    if not algorithm or not recognizer.recognizes(algorithm):
        raise IdentifierError(IdentifierErrorKind.UNKNOWN_KEY_ALGORITHM, algorithm or None)

    validate_version(s[colon_idx + 1:])
    return colon_idx
