"""Base extractor interface."""

from abc import ABC, abstractmethod
import re
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ffisymbols.ir import Declaration, Parameter


class BaseExtractor(ABC):
    """Abstract base class for all declaration extractors."""

    # File extensions handled by the extractor
    extensions: tuple = ()

    def extract(self, file_path: Path) -> List[Declaration]:
        """Extract declarations from a file.

        Unreadable or unparsable files are reported and yield no declarations.

        Args:
            file_path: Path to the file to extract from

        Returns:
            List of extracted declarations, in source order
        """
        content = self._read(file_path)
        if content is None:
            return []

        try:
            return self.extract_from_content(content, str(file_path))
        except SyntaxError as e:
            print(f"Error extracting from {file_path}: {e}", file=sys.stderr)
            return []

    @abstractmethod
    def extract_from_content(self, content: str, source_file: str) -> List[Declaration]:
        """Extract declarations from file content.

        Args:
            content: File content as string
            source_file: Source file path for reference

        Returns:
            List of extracted declarations, in source order
        """
        pass

    def can_extract(self, file_path: Path) -> bool:
        """Check if this extractor can handle the file.

        Args:
            file_path: Path to check

        Returns:
            True if extractor can handle this file
        """
        return Path(file_path).suffix.lower() in self.extensions

    def _read(self, file_path: Path) -> Optional[str]:
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {file_path}: {e}", file=sys.stderr)
            return None


def clean_comment(comment: str) -> List[str]:
    """Strip C-style comment delimiters, returning the comment's text lines."""
    lines = []
    for line in comment.split("\n"):
        line = re.sub(r'\ ?\*+/\s*$', '', line)
        line = re.sub(r'^\s*/?\*+ ?', '', line)
        line = re.sub(r'^\s*//+ ?', '', line)
        line = re.sub(r'\\(brief|determine) ', '', line)
        lines.append(line.rstrip())
    return lines


PARAM_TAG_PATTERN = re.compile(r'[\\@]param(?:\[[^\]]*\])?\s+(\w+)\s?')
RETURNS_TAG_PATTERN = re.compile(r'[\\@]returns?\b\s?')


def split_doc_tags(lines: List[str]) -> Tuple[List[str], Dict[str, List[str]], List[str]]:
    """Split ``\\param name`` and ``\\returns`` sections out of comment lines.

    A tag starts a section that runs until the next tag, so continuation
    lines stay with the parameter or return value they describe.

    Returns:
        Tuple of (description, parameter descriptions by name, return description)
    """
    description: List[str] = []
    parameters: Dict[str, List[str]] = {}
    returns: List[str] = []
    current = description
    for line in lines:
        param = PARAM_TAG_PATTERN.search(line)
        if param:
            current = []
            parameters[param.group(1)] = current
            line = PARAM_TAG_PATTERN.sub('', line, count=1)
        if RETURNS_TAG_PATTERN.search(line):
            current = returns
            line = RETURNS_TAG_PATTERN.sub('', line, count=1)
        current.append(line)
    return description, parameters, returns


def attach_parameter_descriptions(parameters: List[Parameter], descriptions: Dict[str, List[str]]) -> None:
    """Give each parameter its documented description.

    Parameters are matched by name. When no name matches but the number of
    documented parameters equals the number of parameters, they are matched
    by position instead.
    """
    by_position = list(descriptions.values())
    for index, parameter in enumerate(parameters):
        if parameter.name in descriptions:
            parameter.description = descriptions[parameter.name]
        elif len(by_position) == len(parameters):
            parameter.description = by_position[index]
