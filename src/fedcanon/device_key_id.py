"""
device_key_id.py — Device Key Identifier Validation

Device key ids have the form ``<algorithm>:<key-id>``, e.g.
``ed25519:ABCDEF0123``. ``validate`` returns the offset of the delimiter
so callers can slice the two halves without scanning again.
"""

from __future__ import annotations
from typing import Optional, Tuple

from .errors import IdentifierError, IdentifierErrorKind
from .key_algorithms import KeyAlgorithmRecognizer, device_key_algorithms

# Delimiter offsets are stored in a single byte.
MAX_DELIMITER_OFFSET = 255


def validate(s: str, algorithms: Optional[KeyAlgorithmRecognizer] = None) -> int:
    """Validate a device key id and return the offset of its ``:``.

    Args:
        s: Candidate device key id.
        algorithms: Recognizer for algorithm names. Defaults to the module
            registry of device key algorithms.

    Returns:
        int: Byte offset of the delimiter. Algorithm names are ASCII, so
        this is also the string index.

    Raises:
        IdentifierError: ``MISSING_KEY_DELIMITER`` if there is no ``:``;
            ``UNKNOWN_KEY_ALGORITHM`` if the algorithm name is empty, non-ASCII,
            too long, or not recognized.
    """
    colon_idx = s.find(":")
    if colon_idx < 0:
        raise IdentifierError(IdentifierErrorKind.MISSING_KEY_DELIMITER)

    algorithm = s[:colon_idx]
    # An empty algorithm name is reported as an unknown algorithm.
    if colon_idx == 0 or colon_idx > MAX_DELIMITER_OFFSET or not algorithm.isascii():
        raise IdentifierError(IdentifierErrorKind.UNKNOWN_KEY_ALGORITHM)

    recognizer = algorithms if algorithms is not None else device_key_algorithms
    if not recognizer.recognizes(algorithm):
        raise IdentifierError(IdentifierErrorKind.UNKNOWN_KEY_ALGORITHM, algorithm)

    return colon_idx


def split(s: str, algorithms: Optional[KeyAlgorithmRecognizer] = None) -> Tuple[str, str]:
    """Validate ``s`` and return ``(algorithm, key_id)``."""
    colon_idx = validate(s, algorithms)
    return s[:colon_idx], s[colon_idx + 1:]
