"""Declaration and metadata marker models."""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple
from enum import Enum


class MarkerKind(Enum):
    """Kinds of declarative markers a declaration can carry."""

    OVERRIDE_NAME = "override_name"
    LOG = "log"
    BLOCKING = "blocking"
    DEPRECATED = "deprecated"


class DeclarationKind(Enum):
    """Kinds of declarations the generator binds."""

    FUNCTION = "FUNCTION"
    CALLBACK = "CALLBACK"
    CONSTANT = "CONSTANT"


@dataclass(frozen=True)
class Marker:
    """Base class for markers attached to a declaration."""

    kind: ClassVar[MarkerKind]

    @property
    def payload(self) -> Optional[str]:
        """Structured data carried by the marker, if any."""
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert marker to dictionary."""
        data: Dict[str, Any] = {"kind": self.kind.value}
        if self.payload is not None:
            data["value"] = self.payload
        return data


@dataclass(frozen=True)
class OverrideMarker(Marker):
    """Explicit native symbol name for a declaration."""

    kind: ClassVar[MarkerKind] = MarkerKind.OVERRIDE_NAME

    name: str = ""

    @property
    def payload(self) -> Optional[str]:
        return self.name


@dataclass(frozen=True)
class LogMarker(Marker):
    """Calls to the declaration should be traced."""

    kind: ClassVar[MarkerKind] = MarkerKind.LOG


@dataclass(frozen=True)
class BlockingMarker(Marker):
    """The native function may block and must release the interpreter lock."""

    kind: ClassVar[MarkerKind] = MarkerKind.BLOCKING


@dataclass(frozen=True)
class DeprecatedMarker(Marker):
    """The declaration is deprecated."""

    kind: ClassVar[MarkerKind] = MarkerKind.DEPRECATED

    message: str = ""

    @property
    def payload(self) -> Optional[str]:
        return self.message or None


_MARKER_TYPES = {
    MarkerKind.OVERRIDE_NAME: lambda value: OverrideMarker(value if value is not None else ""),
    MarkerKind.LOG: lambda value: LogMarker(),
    MarkerKind.BLOCKING: lambda value: BlockingMarker(),
    MarkerKind.DEPRECATED: lambda value: DeprecatedMarker(value or ""),
}


def marker_from_dict(data: Dict[str, Any]) -> Marker:
    """Create a marker from a ``{"kind": ..., "value": ...}`` dictionary."""
    kind = MarkerKind(data["kind"])
    return _MARKER_TYPES[kind](data.get("value"))


@dataclass
class Parameter:
    """A parameter of a function or callback."""

    name: str
    type_name: str = "unknown"
    is_array: bool = False
    description: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type_name": self.type_name,
            "is_array": self.is_array,
            "description": list(self.description)
        }


@dataclass
class Declaration:
    """A declaration bound to a native interface."""

    name: str  # default name, as spelled in the source
    kind: DeclarationKind = DeclarationKind.FUNCTION
    markers: Tuple[Marker, ...] = ()
    parameters: List[Parameter] = field(default_factory=list)
    return_type: str = "void"
    description: List[str] = field(default_factory=list)
    return_description: List[str] = field(default_factory=list)
    value: Optional[str] = None  # constants only

    source_file: str = ""
    line_number: int = 0

    def __post_init__(self) -> None:
        self.markers = tuple(self.markers)

    def has_marker(self, kind: MarkerKind) -> bool:
        """Check whether a marker of the given kind is attached."""
        return self.first_marker(kind) is not None

    def first_marker(self, kind: MarkerKind) -> Optional[Marker]:
        """Get the first attached marker of the given kind."""
        for marker in self.markers:
            if marker.kind == kind:
                return marker
        return None

    @property
    def is_blocking(self) -> bool:
        return self.has_marker(MarkerKind.BLOCKING)

    def to_dict(self) -> Dict[str, Any]:
        """Convert declaration to dictionary."""
        return {
            "name": self.name,
            "kind": self.kind.value,
            "markers": [marker.to_dict() for marker in self.markers],
            "parameters": [param.to_dict() for param in self.parameters],
            "return_type": self.return_type,
            "description": list(self.description),
            "return_description": list(self.return_description),
            "value": self.value,
            "source_file": self.source_file,
            "line_number": self.line_number
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Declaration":
        """Create declaration from dictionary."""
        data = data.copy()
        data["kind"] = DeclarationKind(data["kind"])
        data["markers"] = tuple(marker_from_dict(m) for m in data.get("markers", []))
        data["parameters"] = [Parameter(**p) for p in data.get("parameters", [])]
        return cls(**data)
