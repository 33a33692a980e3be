"""IR module initialization."""

from .declaration import (
    Declaration,
    DeclarationKind,
    Parameter,
    Marker,
    MarkerKind,
    OverrideMarker,
    LogMarker,
    BlockingMarker,
    DeprecatedMarker,
    marker_from_dict,
)
from .store import DeclarationStore
from .symbol import ResolvedSymbol

__all__ = [
    "Declaration",
    "DeclarationKind",
    "Parameter",
    "Marker",
    "MarkerKind",
    "OverrideMarker",
    "LogMarker",
    "BlockingMarker",
    "DeprecatedMarker",
    "marker_from_dict",
    "DeclarationStore",
    "ResolvedSymbol"
]
