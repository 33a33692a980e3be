"""Java interface extractor.

Reads JNA-style library interfaces, where annotations on interface methods
carry the markers::

    public interface Cef extends Library {
        @NativeName("cef_post_task")
        @Blocking
        int postTask(int threadId, Pointer task);
    }
"""

import re
import sys
from typing import List, Optional

from .base import BaseExtractor, attach_parameter_descriptions, clean_comment, split_doc_tags
from ffisymbols.ir import (
    Declaration, DeclarationKind, Parameter, Marker,
    OverrideMarker, LogMarker, BlockingMarker, DeprecatedMarker
)


METHOD_PATTERN = re.compile(
    r'(?P<doc>/\*\*(?:(?!\*/).)*\*/\s*)?'
    r'(?P<annotations>(?:@\w+(?:\s*\([^)]*\))?\s*)*)'
    r'(?:(?:public|static|abstract|default|final|synchronized|native)\s+)*'
    r'(?P<ret>[\w.]+(?:<[^;(){}]*>)?(?:\s*\[\])*)\s+'
    r'(?P<name>\w+)\s*\((?P<params>[^)]*)\)\s*;',
    re.DOTALL
)

ANNOTATION_PATTERN = re.compile(r'@(?P<name>\w+)(?:\s*\((?P<args>[^)]*)\))?')

ANNOTATION_DEFINITION_PATTERN = re.compile(r'@interface\s+\w+\s*\{[^}]*\}', re.DOTALL)

STRING_VALUE_PATTERN = re.compile(r'^\s*(?:value\s*=\s*)?"((?:[^"\\]|\\.)*)"\s*$')

NOT_METHODS = {"return", "new", "throw", "else"}


class JavaInterfaceExtractor(BaseExtractor):
    """Extractor for Java interface files."""

    extensions = (".java",)

    def extract_from_content(self, content: str, source_file: str) -> List[Declaration]:
        """Extract declarations from Java content."""
        declarations = []

        # Annotation type definitions declare elements, not bindings
        content = ANNOTATION_DEFINITION_PATTERN.sub(lambda m: "\n" * m.group(0).count("\n"), content)
        # Line comments could hide or fake annotations
        content = re.sub(r'//[^\n]*', '', content)

        for match in METHOD_PATTERN.finditer(content):
            name = match.group("name")
            if match.group("ret") in NOT_METHODS:
                continue

            line_number = content.count("\n", 0, match.start("name")) + 1
            doc = match.group("doc")
            description, parameter_descriptions, return_description = split_doc_tags(
                clean_comment(doc.strip()) if doc else []
            )
            parameters = self._parse_parameters(match.group("params"))
            attach_parameter_descriptions(parameters, parameter_descriptions)

            declarations.append(Declaration(
                name=name,
                kind=DeclarationKind.FUNCTION,
                markers=tuple(self._markers(match.group("annotations"), name)),
                parameters=parameters,
                return_type=match.group("ret"),
                description=[line for line in description if not line.lstrip().startswith("@")],
                return_description=return_description,
                source_file=source_file,
                line_number=line_number
            ))

        return declarations

    def _markers(self, annotations: str, method: str) -> List[Marker]:
        """Convert method annotations, in source order, to markers."""
        markers = []
        for annotation in ANNOTATION_PATTERN.finditer(annotations or ""):
            kind = annotation.group("name")
            if kind == "NativeName":
                markers.append(OverrideMarker(self._string_value(annotation.group("args"), method) or ""))
            elif kind == "Blocking":
                markers.append(BlockingMarker())
            elif kind == "Log":
                markers.append(LogMarker())
            elif kind == "Deprecated":
                markers.append(DeprecatedMarker(self._string_value(annotation.group("args"), method) or ""))
        return markers

    def _string_value(self, args: Optional[str], method: str) -> Optional[str]:
        if not args or not args.strip():
            return None
        match = STRING_VALUE_PATTERN.match(args)
        if match:
            return match.group(1)
        print(f"Warning: annotation on \"{method}\" needs a string literal, got {args.strip()}", file=sys.stderr)
        return None

    def _parse_parameters(self, params: str) -> List[Parameter]:
        """Parse a Java parameter list."""
        parameters = []
        for param in params.split(","):
            param = re.sub(r'@\w+\s*', '', param).replace("final ", "").strip()
            if not param:
                continue
            is_array = "[]" in param or "..." in param
            words = param.replace("...", "[] ").split()
            name = words[-1]
            type_name = " ".join(words[:-1])
            parameters.append(Parameter(name=name, type_name=type_name, is_array=is_array))
        return parameters
