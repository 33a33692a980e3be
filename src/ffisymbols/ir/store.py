"""IR declaration storage and management."""

from typing import List, Dict, Set
from pathlib import Path
import json
from collections import defaultdict

from .declaration import Declaration, DeclarationKind, MarkerKind


class DeclarationStore:
    """Ordered storage for extracted declarations."""

    def __init__(self) -> None:
        self.declarations: List[Declaration] = []
        self._by_file: Dict[str, List[Declaration]] = defaultdict(list)
        self._by_kind: Dict[DeclarationKind, List[Declaration]] = defaultdict(list)

    def add_declaration(self, declaration: Declaration) -> None:
        """Add a declaration to the store."""
        self.declarations.append(declaration)
        self._by_file[declaration.source_file].append(declaration)
        self._by_kind[declaration.kind].append(declaration)

    def add_declarations(self, declarations: List[Declaration]) -> None:
        """Add multiple declarations to the store."""
        for declaration in declarations:
            self.add_declaration(declaration)

    def get_declarations_by_file(self, file_path: str) -> List[Declaration]:
        """Get all declarations from a specific file."""
        return self._by_file.get(file_path, [])

    def get_declarations_by_kind(self, kind: DeclarationKind) -> List[Declaration]:
        """Get all declarations of a specific kind."""
        return self._by_kind.get(kind, [])

    def get_functions(self) -> List[Declaration]:
        return self.get_declarations_by_kind(DeclarationKind.FUNCTION)

    def get_unique_files(self) -> Set[str]:
        """Get set of all unique source files."""
        return set(self._by_file.keys())

    def to_json(self, output_path: Path) -> None:
        """Export declarations to JSON file."""
        data = {
            "total_declarations": len(self.declarations),
            "declarations": [d.to_dict() for d in self.declarations]
        }

        with open(output_path, "w") as f:
            json.dump(data, f, indent=2)

    def from_json(self, input_path: Path) -> None:
        """Load declarations from JSON file."""
        with open(input_path, "r") as f:
            data = json.load(f)

        self.clear()
        self.add_declarations([Declaration.from_dict(d) for d in data["declarations"]])

    def get_stats(self) -> Dict[str, int]:
        """Get statistics about stored declarations."""
        return {
            "total_declarations": len(self.declarations),
            "unique_files": len(self._by_file),
            "functions": len(self.get_declarations_by_kind(DeclarationKind.FUNCTION)),
            "callbacks": len(self.get_declarations_by_kind(DeclarationKind.CALLBACK)),
            "constants": len(self.get_declarations_by_kind(DeclarationKind.CONSTANT)),
            "overridden": len([d for d in self.declarations if d.has_marker(MarkerKind.OVERRIDE_NAME)]),
            "blocking": len([d for d in self.declarations if d.is_blocking])
        }

    def clear(self) -> None:
        """Clear all declarations from the store."""
        self.declarations.clear()
        self._by_file.clear()
        self._by_kind.clear()
