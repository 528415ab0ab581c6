"""
key_algorithms.py — Key Algorithm Registry

Answers "is this a known key algorithm name" for the key identifier
validators. Recognizers are pluggable: anything with a
``recognizes(name) -> bool`` method can be passed to a validator, and the
default registries can be extended at runtime or through entry points.

Plugin Discovery:
    Extra algorithm names are discovered via entry points:

    [project.entry-points."fedcanon.key_algorithms"]
    my_algorithm = "my_package:ALGORITHM_NAMES"

    The loaded object may be a name, an iterable of names, or a zero-arg
    callable returning either.

Usage:
    from fedcanon.key_algorithms import device_key_algorithms

    device_key_algorithms.register("org.example.frobnicate")
    assert device_key_algorithms.recognizes("org.example.frobnicate")
"""

from __future__ import annotations
from typing import Protocol, Iterable, List, Set
import importlib.metadata
import logging
import warnings

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "fedcanon.key_algorithms"

# Device key algorithms for end-to-end encryption keys
ED25519 = "ed25519"
CURVE25519 = "curve25519"
SIGNED_CURVE25519 = "signed_curve25519"

DEFAULT_DEVICE_KEY_ALGORITHMS = frozenset({ED25519, CURVE25519, SIGNED_CURVE25519})
DEFAULT_SIGNING_KEY_ALGORITHMS = frozenset({ED25519})


class KeyAlgorithmRecognizer(Protocol):
    """Anything that can tell whether a key algorithm name is known."""

    def recognizes(self, name: str) -> bool:
        ...


class KeyAlgorithmRegistry:
    """Set of recognized key algorithm names.

    Thread-safe for reads after initialization. Registration and discovery
    should complete before concurrent access.
    """

    def __init__(self, builtins: Iterable[str] = ()) -> None:
        self._builtins: frozenset[str] = frozenset(builtins)
        for name in self._builtins:
            _check_name(name)
        self._names: Set[str] = set(self._builtins)
        self._discovered: bool = False

    def register(self, name: str) -> None:
        """Add an algorithm name.

        Raises:
            ValueError: If the name is empty or contains the key delimiter.
        """
        _check_name(name)
        if name not in self._names:
            logger.debug("registered key algorithm %r", name)
        self._names.add(name)

    def unregister(self, name: str) -> None:
        """Remove a previously registered name. Unknown names are ignored."""
        self._names.discard(name)

    def recognizes(self, name: str) -> bool:
        return name in self._names

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def names(self) -> List[str]:
        """Return the recognized names in sorted order."""
        return sorted(self._names)

    def discover(self) -> None:
        """Load extra algorithm names from the entry point group.

        Idempotent. A broken entry point is reported as a warning and
        skipped; the remaining entry points still load.
        """
        if self._discovered:
            return

        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            try:
                loaded = ep.load()
                if callable(loaded):
                    loaded = loaded()
                names = [loaded] if isinstance(loaded, str) else list(loaded)
                for name in names:
                    self.register(name)
            except Exception as e:
                warnings.warn(f"Failed to load key algorithm plugin '{ep.name}': {e}")

        self._discovered = True

    def reload(self) -> None:
        """Reset to the built-in names and discover again."""
        self._names = set(self._builtins)
        self._discovered = False
        self.discover()


def _check_name(name: str) -> None:
    if not isinstance(name, str) or not name:
        raise ValueError(f"Key algorithm name must be a non-empty string, got {name!r}")
    if ":" in name:
        raise ValueError(f"Key algorithm name must not contain ':', got {name!r}")
    if not name.isascii():
        raise ValueError(f"Key algorithm name must be ASCII, got {name!r}")


device_key_algorithms = KeyAlgorithmRegistry(DEFAULT_DEVICE_KEY_ALGORITHMS)
signing_key_algorithms = KeyAlgorithmRegistry(DEFAULT_SIGNING_KEY_ALGORITHMS)
