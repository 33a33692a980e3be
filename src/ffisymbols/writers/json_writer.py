"""JSON symbol map writer."""

import json
from typing import Any, Dict, List, Optional, Tuple

from ffisymbols.ir import ResolvedSymbol


class JSONSymbolMapWriter:
    """Writes the resolved symbol table as JSON."""

    def __init__(self, module_name: Optional[str] = None, ffi_lib: Optional[str] = None) -> None:
        self.module_name = module_name
        self.ffi_lib = ffi_lib

    def write(
        self,
        symbols: List[ResolvedSymbol],
        skipped: Optional[List[Tuple[str, str]]] = None
    ) -> str:
        """Generate the JSON document, keeping declaration order."""
        skipped = skipped or []
        data: Dict[str, Any] = {
            "metadata": {
                "module_name": self.module_name,
                "ffi_lib": self.ffi_lib,
                "total_symbols": len(symbols),
                "overridden": len([s for s in symbols if s.is_overridden]),
                "skipped": [{"name": name, "error": error} for name, error in skipped]
            },
            "symbols": [symbol.to_dict() for symbol in symbols]
        }
        return json.dumps(data, indent=2) + "\n"
