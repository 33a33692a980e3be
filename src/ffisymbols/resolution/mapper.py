"""Name mappers deciding the native symbol emitted for a declaration."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
import re

from ffisymbols.ir import Marker, MarkerKind
from .errors import InvalidOverrideError


IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

POLICIES = ("identity", "override", "prefix", "override+prefix")


def is_identifier(name: object) -> bool:
    """Check if a value is an identifier-shaped, non-empty string."""
    return isinstance(name, str) and IDENTIFIER_PATTERN.match(name) is not None


class NameMapper(ABC):
    """Maps a declaration's default name to the symbol name to emit.

    Implementations must be pure: the generator may call ``resolve`` from
    several threads at once and relies on identical output across runs.
    """

    @abstractmethod
    def resolve(self, default_name: str, markers: Iterable[Marker]) -> str:
        """Get the symbol name for a declaration.

        Args:
            default_name: Name derived from the source identifier
            markers: Markers attached to the declaration, in enumeration order

        Returns:
            Symbol name to emit
        """
        pass


class IdentityNameMapper(NameMapper):
    """Emits the default name unchanged."""

    def resolve(self, default_name: str, markers: Iterable[Marker]) -> str:
        return default_name

    def __repr__(self) -> str:
        return "IdentityNameMapper()"


class OverrideNameMapper(NameMapper):
    """Honors override-name markers, otherwise defers to a fallback mapper.

    The first override marker in enumeration order wins; any later ones
    are ignored.
    """

    def __init__(self, fallback: Optional[NameMapper] = None) -> None:
        self.fallback = fallback or IdentityNameMapper()

    def resolve(self, default_name: str, markers: Iterable[Marker]) -> str:
        if not is_identifier(default_name):
            raise ValueError(f"Declaration name is not an identifier: {default_name!r}")

        markers = tuple(markers)
        for marker in markers:
            if marker.kind != MarkerKind.OVERRIDE_NAME:
                continue
            if not is_identifier(marker.payload):
                raise InvalidOverrideError(default_name, marker.payload)
            return marker.payload

        return self.fallback.resolve(default_name, markers)

    def __repr__(self) -> str:
        return f"OverrideNameMapper(fallback={self.fallback!r})"


class PrefixNameMapper(NameMapper):
    """Prepends a fixed prefix to the name produced by a base mapper."""

    def __init__(self, prefix: str, base: Optional[NameMapper] = None) -> None:
        if prefix and not is_identifier(prefix):
            raise ValueError(f"Symbol prefix is not an identifier: {prefix!r}")
        self.prefix = prefix
        self.base = base or IdentityNameMapper()

    def resolve(self, default_name: str, markers: Iterable[Marker]) -> str:
        return f"{self.prefix}{self.base.resolve(default_name, markers)}"

    def __repr__(self) -> str:
        return f"PrefixNameMapper(prefix={self.prefix!r}, base={self.base!r})"


def create_name_mapper(policy: str = "override", prefix: str = "") -> NameMapper:
    """Create a name mapper for a naming policy.

    ``override+prefix`` honors override markers and prefixes every other
    name, so explicit native names are emitted verbatim.
    """
    if policy == "identity":
        return IdentityNameMapper()
    if policy == "override":
        return OverrideNameMapper()
    if policy == "prefix":
        return PrefixNameMapper(prefix)
    if policy == "override+prefix":
        return OverrideNameMapper(fallback=PrefixNameMapper(prefix))
    raise ValueError(f"Unknown naming policy: {policy} (expected one of {', '.join(POLICIES)})")
