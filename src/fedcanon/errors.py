"""
errors.py — fedcanon Error Taxonomy

Closed sets of failure kinds shared by the identifier validators and the
canonical JSON layer. Kinds carry no payload; they compare and hash by
identity and render through a fixed message table.
"""

from enum import Enum
from typing import Optional

__all__ = [
    "FedcanonError",
    "IdentifierErrorKind",
    "IdentifierError",
    "CanonicalJsonErrorKind",
    "CanonicalJsonError",
]


class FedcanonError(Exception):
    """Base class for all fedcanon errors."""
    def __init__(
        self,
        code: str,
        message: str,
        context: Optional[str] = None,
    ):
        self.code = code
        self.message = message
        self.context = context

        full_msg = f"[{code}] {message}"
        if context:
            full_msg += f" Context: {context}"

        super().__init__(full_msg)


class _ErrorKind(Enum):
    """Enum members are ``(code, message)`` pairs."""

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def message(self) -> str:
        return self.value[1]

    def __str__(self) -> str:
        return self.message


# Identifier syntax errors (E0xx)
class IdentifierErrorKind(_ErrorKind):
    INVALID_CHARACTERS = ("FEDCANON_E001", "localpart contains invalid characters")
    INVALID_KEY_VERSION = ("FEDCANON_E002", "key id version contains invalid characters")
    INVALID_LOCAL_PART = ("FEDCANON_E003", "localpart is empty")
    INVALID_SERVER_NAME = ("FEDCANON_E004", "server name is not a valid IP address or domain name")
    MAXIMUM_LENGTH_EXCEEDED = ("FEDCANON_E005", "ID exceeds 255 bytes")
    MINIMUM_LENGTH_NOT_SATISFIED = ("FEDCANON_E006", "ID must be at least 4 characters")
    MISSING_DELIMITER = ("FEDCANON_E007", "colon is required between localpart and server name")
    MISSING_KEY_DELIMITER = ("FEDCANON_E008", "colon is required between algorithm and key identifier")
    MISSING_SIGIL = ("FEDCANON_E009", "leading sigil is missing")
    UNKNOWN_KEY_ALGORITHM = ("FEDCANON_E010", "unknown key algorithm specified")


# Canonical JSON errors (E1xx)
class CanonicalJsonErrorKind(_ErrorKind):
    INT_CONVERT = ("FEDCANON_E100", "number is not an integer within the interoperable range")
    SERDE = ("FEDCANON_E101", "value cannot be represented as canonical JSON")
    NESTING_TOO_DEEP = ("FEDCANON_E102", "JSON value exceeds the maximum nesting depth")


class _KindError(FedcanonError, ValueError):
    """An error identified by a single kind. Equal errors share a kind."""
    kind: _ErrorKind

    def __init__(self, kind: _ErrorKind, context: Optional[str] = None):
        self.kind = kind
        super().__init__(kind.code, kind.message, context)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.kind is other.kind

    def __hash__(self) -> int:
        return hash((type(self), self.kind))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.kind.name})"


class IdentifierError(_KindError):
    """Raised when an identifier string violates its syntax."""
    kind: IdentifierErrorKind


class CanonicalJsonError(_KindError):
    """Raised when a value cannot become canonical JSON."""
    kind: CanonicalJsonErrorKind
