"""Extractors module initialization."""

from pathlib import Path
from typing import List, Optional

from .base import BaseExtractor
from .c_header_extractor import CHeaderExtractor
from .python_stub_extractor import PythonStubExtractor
from .java_interface_extractor import JavaInterfaceExtractor


def detect_extractor(file_path: Path, export_macros: Optional[List[str]] = None) -> Optional[BaseExtractor]:
    """Get the extractor for a source file, based on its extension."""
    candidates = [
        CHeaderExtractor(export_macros),
        PythonStubExtractor(),
        JavaInterfaceExtractor(),
    ]
    for extractor in candidates:
        if extractor.can_extract(Path(file_path)):
            return extractor
    return None


__all__ = [
    "BaseExtractor",
    "CHeaderExtractor",
    "PythonStubExtractor",
    "JavaInterfaceExtractor",
    "detect_extractor"
]
