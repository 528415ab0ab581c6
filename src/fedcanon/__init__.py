"""fedcanon public API.

Canonical JSON values for signing and hashing, and validators for
``<algorithm>:<id>`` key identifiers.

Example:
    from fedcanon import loads, render, validate_device_key_id

    value = loads('{"street": "10 Downing Street", "city": "London"}')
    print(render(value))  # {"city":"London","street":"10 Downing Street"}

    validate_device_key_id("ed25519:ABCDEF")  # -> 7
"""

from .canonical_json import (
    INT_MAX,
    INT_MIN,
    MAX_NESTING_DEPTH,
    NULL,
    Array,
    Bool,
    CanonicalJsonEncoder,
    CanonicalJsonObject,
    CanonicalJsonValue,
    Integer,
    Null,
    Object,
    String,
    canonical_bytes,
    canonical_dumps,
    canonical_hash,
    loads,
    render,
    try_from_json,
    try_from_json_map,
)
from .device_key_id import validate as validate_device_key_id
from .errors import (
    CanonicalJsonError,
    CanonicalJsonErrorKind,
    FedcanonError,
    IdentifierError,
    IdentifierErrorKind,
)
from .key_algorithms import (
    KeyAlgorithmRecognizer,
    KeyAlgorithmRegistry,
    device_key_algorithms,
    signing_key_algorithms,
)
from .server_key_id import validate as validate_server_key_id

__all__ = [
    "INT_MAX",
    "INT_MIN",
    "MAX_NESTING_DEPTH",
    "NULL",
    "Array",
    "Bool",
    "CanonicalJsonEncoder",
    "CanonicalJsonObject",
    "CanonicalJsonValue",
    "Integer",
    "Null",
    "Object",
    "String",
    "canonical_bytes",
    "canonical_dumps",
    "canonical_hash",
    "loads",
    "render",
    "try_from_json",
    "try_from_json_map",
    "validate_device_key_id",
    "validate_server_key_id",
    "CanonicalJsonError",
    "CanonicalJsonErrorKind",
    "FedcanonError",
    "IdentifierError",
    "IdentifierErrorKind",
    "KeyAlgorithmRecognizer",
    "KeyAlgorithmRegistry",
    "device_key_algorithms",
    "signing_key_algorithms",
]
