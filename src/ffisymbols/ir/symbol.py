"""Resolved symbol model."""

from dataclasses import dataclass
from typing import Any, Dict

from .declaration import Declaration


@dataclass(frozen=True)
class ResolvedSymbol:
    """A declaration paired with the native symbol name it is bound to."""

    declaration: Declaration
    symbol: str

    @property
    def is_overridden(self) -> bool:
        return self.symbol != self.declaration.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.declaration.name,
            "symbol": self.symbol,
            "kind": self.declaration.kind.value,
            "markers": [marker.to_dict() for marker in self.declaration.markers],
            "source_file": self.declaration.source_file,
            "line_number": self.declaration.line_number
        }
