"""
canonical_json.py — Canonical JSON values for signing and hashing

A ``CanonicalJsonValue`` is an immutable JSON tree that can only hold what
canonical JSON allows:
- null, booleans, strings
- integers in the interoperable range [-(2**53 - 1), 2**53 - 1]
  (no fractions, no NaN/Infinity, no floats at all)
- arrays, kept in order
- objects, whose keys always iterate in ascending code-point order
  (identical to UTF-8 byte order)

Rendering produces the unique compact text for a value: no insignificant
whitespace, ``,`` and ``:`` separators, keys in map order, non-ASCII
characters emitted as-is. These bytes are what gets signed and hashed, so
any change to the output is a protocol break.

Generic JSON enters through ``try_from_json`` (or ``loads`` for text) and
either converts completely or raises ``CanonicalJsonError``; no partial
value is ever produced.
"""

from __future__ import annotations
import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Tuple, Union

from .errors import CanonicalJsonError, CanonicalJsonErrorKind

INT_MAX = 2**53 - 1
INT_MIN = -INT_MAX

# Containers nested deeper than this are rejected during conversion.
MAX_NESTING_DEPTH = 128

# Decimal digits in INT_MAX; longer literals are out of range.
_MAX_INT_DIGITS = len(str(INT_MAX))


def _check_text(text: str) -> str:
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise CanonicalJsonError(CanonicalJsonErrorKind.SERDE, "string is not valid UTF-8") from e
    return str(text)


class CanonicalJsonValue:
    """Base class of the canonical JSON variants."""
    __slots__ = ()

    def to_json(self) -> Any:
        """Return the equivalent plain Python JSON tree."""
        raise NotImplementedError

    def __str__(self) -> str:
        return render(self)


@dataclass(frozen=True)
class Null(CanonicalJsonValue):
    def to_json(self) -> None:
        return None


@dataclass(frozen=True)
class Bool(CanonicalJsonValue):
    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Bool requires a bool, got {type(self.value).__name__}")

    def to_json(self) -> bool:
        return self.value


@dataclass(frozen=True)
class Integer(CanonicalJsonValue):
    value: int

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Integer requires an int, got {type(value).__name__}")
        if isinstance(value, float) or not INT_MIN <= value <= INT_MAX:
            raise CanonicalJsonError(CanonicalJsonErrorKind.INT_CONVERT, repr(value))
        object.__setattr__(self, "value", int(value))

    def to_json(self) -> int:
        return self.value


@dataclass(frozen=True)
class String(CanonicalJsonValue):
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError(f"String requires a str, got {type(self.value).__name__}")
        object.__setattr__(self, "value", _check_text(self.value))

    def to_json(self) -> str:
        return self.value


@dataclass(frozen=True)
class Array(CanonicalJsonValue):
    items: Tuple[CanonicalJsonValue, ...] = ()

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, CanonicalJsonValue):
                raise TypeError(f"Array items must be CanonicalJsonValue, got {type(item).__name__}")
        object.__setattr__(self, "items", items)

    def __iter__(self) -> Iterator[CanonicalJsonValue]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> CanonicalJsonValue:
        return self.items[index]

    def to_json(self) -> list:
        return [item.to_json() for item in self.items]


class CanonicalJsonObject(Mapping):
    """Immutable ``str -> CanonicalJsonValue`` mapping iterating in ascending key order.

    Built from a mapping or from ``(key, value)`` pairs; when a key repeats,
    the last pair wins.
    """
    __slots__ = ("_data", "_keys")

    def __init__(
        self,
        entries: Union[Mapping, Iterable[Tuple[str, CanonicalJsonValue]]] = (),
    ) -> None:
        data = {}
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        for key, value in pairs:
            if not isinstance(key, str):
                raise CanonicalJsonError(
                    CanonicalJsonErrorKind.SERDE,
                    f"object key must be a string, got {type(key).__name__}",
                )
            if not isinstance(value, CanonicalJsonValue):
                raise TypeError(f"Object values must be CanonicalJsonValue, got {type(value).__name__}")
            data[_check_text(key)] = value
        self._data = data
        self._keys = tuple(sorted(data))

    def __getitem__(self, key: str) -> CanonicalJsonValue:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"CanonicalJsonObject({{{inner}}})"

    def to_json(self) -> dict:
        return {key: value.to_json() for key, value in self.items()}


@dataclass(frozen=True)
class Object(CanonicalJsonValue):
    entries: CanonicalJsonObject = CanonicalJsonObject()

    def __post_init__(self) -> None:
        if not isinstance(self.entries, CanonicalJsonObject):
            object.__setattr__(self, "entries", CanonicalJsonObject(self.entries))

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, key: str) -> CanonicalJsonValue:
        return self.entries[key]

    def to_json(self) -> dict:
        return self.entries.to_json()


NULL = Null()


# ---------------------------------------------------------------------------
# Conversion
# ---------------------------------------------------------------------------

def try_from_json(obj: Any, *, max_depth: int = MAX_NESTING_DEPTH) -> CanonicalJsonValue:
    """Convert a plain Python JSON tree into a ``CanonicalJsonValue``.

    Args:
        obj: ``None``, ``bool``, ``int``, ``str``, list/tuple or mapping,
            nested arbitrarily. Existing ``CanonicalJsonValue`` nodes are
            kept as they are.
        max_depth: Maximum number of nested arrays/objects.

    Returns:
        CanonicalJsonValue: The converted tree.

    Raises:
        CanonicalJsonError: ``INT_CONVERT`` for any float or out-of-range
            integer, ``SERDE`` for non-JSON types or non-string keys,
            ``NESTING_TOO_DEEP`` past ``max_depth``. The first failure
            aborts the whole conversion.
    """
    try:
        return _convert(obj, max_depth)
    except RecursionError as e:
        raise CanonicalJsonError(CanonicalJsonErrorKind.NESTING_TOO_DEEP) from e


def _convert(obj: Any, depth_left: int) -> CanonicalJsonValue:
    if isinstance(obj, CanonicalJsonValue):
        return obj
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return Bool(obj)
    if isinstance(obj, (int, float)):
        return Integer(obj)
    if isinstance(obj, str):
        return String(obj)

    if isinstance(obj, (list, tuple, Mapping)) and depth_left <= 0:
        raise CanonicalJsonError(CanonicalJsonErrorKind.NESTING_TOO_DEEP)
    if isinstance(obj, (list, tuple)):
        return Array(tuple([_convert(item, depth_left - 1) for item in obj]))
    if isinstance(obj, Mapping):
        entries = []
        for key, value in obj.items():
            if not isinstance(key, str):
                raise CanonicalJsonError(
                    CanonicalJsonErrorKind.SERDE,
                    f"object key must be a string, got {type(key).__name__}",
                )
            entries.append((key, _convert(value, depth_left - 1)))
        return Object(CanonicalJsonObject(entries))

    raise CanonicalJsonError(CanonicalJsonErrorKind.SERDE, f"unsupported type {type(obj).__name__}")


def try_from_json_map(obj: Mapping, *, max_depth: int = MAX_NESTING_DEPTH) -> CanonicalJsonObject:
    """Convert a JSON object (as a mapping) into a ``CanonicalJsonObject``."""
    if not isinstance(obj, Mapping):
        raise CanonicalJsonError(CanonicalJsonErrorKind.SERDE, f"expected an object, got {type(obj).__name__}")
    return try_from_json(obj, max_depth=max_depth).entries


# ---------------------------------------------------------------------------
# json module adapter
# ---------------------------------------------------------------------------

class CanonicalJsonEncoder(json.JSONEncoder):
    """``json`` encoder that lowers canonical values to native primitives.

    Objects are handed over as dicts already in ascending key order, so the
    encoder never needs ``sort_keys``.
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, Null):
            return None
        if isinstance(o, (Bool, Integer, String)):
            return o.value
        if isinstance(o, Array):
            return list(o.items)
        if isinstance(o, Object):
            return dict(o.entries.items())
        if isinstance(o, CanonicalJsonObject):
            return dict(o.items())
        return super().default(o)


def _parse_int(literal: str) -> int:
    # Skip big-int parsing for literals that cannot be in range.
    if len(literal.lstrip("-")) > _MAX_INT_DIGITS:
        raise CanonicalJsonError(CanonicalJsonErrorKind.INT_CONVERT, literal)
    return int(literal)


def loads(text: Union[str, bytes], *, max_depth: int = MAX_NESTING_DEPTH) -> CanonicalJsonValue:
    """Parse JSON text with ``json`` and convert it to a canonical value.

    Raises:
        CanonicalJsonError: ``SERDE`` if the text is not JSON, otherwise as
            for ``try_from_json``.
    """
    try:
        parsed = json.loads(text, parse_int=_parse_int)
    except CanonicalJsonError:
        raise
    except (ValueError, RecursionError) as e:
        raise CanonicalJsonError(CanonicalJsonErrorKind.SERDE, str(e)) from e
    return try_from_json(parsed, max_depth=max_depth)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render(value: CanonicalJsonValue) -> str:
    """Return the canonical JSON text of ``value``."""
    if not isinstance(value, (CanonicalJsonValue, CanonicalJsonObject)):
        raise TypeError(f"render() requires a CanonicalJsonValue, got {type(value).__name__}")
    try:
        return json.dumps(
            value,
            cls=CanonicalJsonEncoder,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except RecursionError as e:
        raise CanonicalJsonError(CanonicalJsonErrorKind.NESTING_TOO_DEEP) from e


def canonical_dumps(obj: Any) -> str:
    """Return canonical JSON string for a canonical value or a plain JSON tree."""
    return render(obj if isinstance(obj, CanonicalJsonObject) else try_from_json(obj))


def canonical_bytes(obj: Any) -> bytes:
    """Return canonical JSON as UTF-8 bytes."""
    return canonical_dumps(obj).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    """Return lowercase hex SHA-256 digest."""
    return hashlib.sha256(data).hexdigest()


def canonical_hash(obj: Any) -> str:
    """Return SHA-256 hex digest of canonical JSON bytes."""
    return sha256_hex(canonical_bytes(obj))
