"""C header extractor.

Reads the declarations a binding is generated for from C headers:
- Function prototypes
- Function pointer typedefs (callbacks)
- Object-like macros with literal values (constants)

Markers are written inside the doc comment preceding a declaration::

    /* Post a task for execution.
     * @native_name(cef_post_task)
     * @blocking
     */
    int post_task(cef_thread_id_t thread_id, cef_task_t* task);
"""

import re
import sys
from typing import List, Optional, Tuple

from .base import BaseExtractor, attach_parameter_descriptions, clean_comment, split_doc_tags
from ffisymbols.ir import (
    Declaration, DeclarationKind, Parameter, Marker,
    OverrideMarker, LogMarker, BlockingMarker, DeprecatedMarker
)


TOKEN_PATTERN = re.compile(
    r'(?P<block_comment>/\*.*?\*/)'
    r'|(?P<line_comment>//[^\n]*(?:\n[ \t]*//[^\n]*)*)'
    r'|(?P<define>^[ \t]*\#[ \t]*define[ \t]+(?P<macro>\w+)(?![\w(])(?P<macro_value>[^\n]*))'
    r'|(?P<directive>^[ \t]*\#[^\n]*)'
    r'|(?P<statement>[^\s;{}#/](?:[^;{}#/]|/\*.*?\*/|//[^\n]*)*'
    r'(?:\{[^{}]*\}(?:[^;{}#/]|/\*.*?\*/|//[^\n]*)*)?;)',
    re.DOTALL | re.MULTILINE
)

MARKER_PATTERN = re.compile(r'@(native_name|blocking|log|deprecated)\b(?:\(\s*"?([^")]*?)"?\s*\))?')

CALLBACK_PATTERN = re.compile(r'^typedef\s+(?P<ret>.+?)\(\s*\*\s*(?P<name>\w+)\s*\)\s*\((?P<params>.*)\)$', re.DOTALL)

FUNCTION_PATTERN = re.compile(r'^(?P<ret>[\w\s\*]+?)\s*\b(?P<name>\w+)\s*\((?P<params>.*)\)$', re.DOTALL)

VALUE_TOKEN_PATTERN = re.compile(
    r'\s*(?:'
    r'(?P<number>0[xX][0-9a-fA-F]+|\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)[uUlLfF]*'
    r'|(?P<string>"(?:[^"\\]|\\.)*")'
    r'|(?P<punct><<|>>|[-+()])'
    r')'
)

# Qualifiers and specifiers that do not affect the binding type
IGNORED_WORDS = {"extern", "static", "inline", "const", "volatile", "register", "restrict", "struct", "union", "enum"}

# Builtin type words that are never parameter names
C_TYPE_WORDS = {"void", "char", "short", "int", "long", "float", "double", "signed", "unsigned", "bool", "_Bool"}

KEYWORD_STATEMENTS = ("typedef", "struct", "union", "enum", "return")


class CHeaderExtractor(BaseExtractor):
    """Extractor for C header files.

    Uses regex-based scanning; it does not run the preprocessor, so
    declarations hidden behind macros are not seen.
    """

    extensions = (".h",)

    def __init__(self, export_macros: Optional[List[str]] = None) -> None:
        super().__init__()
        # Visibility macros such as CEF_EXPORT that prefix prototypes
        self.export_macros = set(export_macros or [])

    def extract_from_content(self, content: str, source_file: str) -> List[Declaration]:
        """Extract declarations from header content."""
        declarations = []
        pending_comment: List[str] = []

        content = re.sub(r'extern\s+"C"\s*\{', lambda m: "\n" * m.group(0).count("\n"), content)

        for match in TOKEN_PATTERN.finditer(content):
            kind = match.lastgroup

            if kind in ("block_comment", "line_comment"):
                pending_comment = clean_comment(match.group(0))
                continue

            if kind == "directive":
                pending_comment = []
                continue

            start = match.start(kind) + len(match.group(kind)) - len(match.group(kind).lstrip())
            line_number = content.count("\n", 0, start) + 1

            if kind == "define":
                declaration = self._read_define(match.group("macro"), match.group("macro_value"))
            else:
                declaration = self._read_statement(match.group("statement"))

            if declaration is not None:
                description, markers = self._split_markers(pending_comment)
                description, parameter_descriptions, return_description = split_doc_tags(description)
                attach_parameter_descriptions(declaration.parameters, parameter_descriptions)
                declaration.description = description
                declaration.return_description = return_description
                declaration.markers = tuple(markers)
                declaration.source_file = source_file
                declaration.line_number = line_number
                declarations.append(declaration)

            pending_comment = []

        return declarations

    def _read_statement(self, statement: str) -> Optional[Declaration]:
        """Classify a top-level statement."""
        # comments inside a prototype, e.g. after a parameter
        statement = re.sub(r'/\*.*?\*/|//[^\n]*', ' ', statement, flags=re.DOTALL)
        text = re.sub(r'\s+', ' ', statement.strip().rstrip(';')).strip()
        if "{" in text:
            # struct/union/enum bodies are not bound here
            return None

        callback = CALLBACK_PATTERN.match(text)
        if callback:
            return Declaration(
                name=callback.group("name"),
                kind=DeclarationKind.CALLBACK,
                parameters=self._parse_parameters(callback.group("params")),
                return_type=self._normalize_type(callback.group("ret"))
            )

        if text.startswith(KEYWORD_STATEMENTS):
            return None

        function = FUNCTION_PATTERN.match(text)
        if function:
            return_type = self._normalize_type(function.group("ret"))
            if not return_type:
                return None
            return Declaration(
                name=function.group("name"),
                kind=DeclarationKind.FUNCTION,
                parameters=self._parse_parameters(function.group("params")),
                return_type=return_type
            )

        return None

    def _read_define(self, name: str, raw_value: str) -> Optional[Declaration]:
        """Read an object-like macro with a literal value."""
        raw_value = re.sub(r'/\*.*?\*/|//.*$', '', raw_value).strip()
        if not raw_value:
            return None

        value = self._read_value(raw_value)
        if value is None:
            print(f"Warning: Could not process value of macro \"{name}\"", file=sys.stderr)
            return None

        return Declaration(name=name, kind=DeclarationKind.CONSTANT, value=value, return_type="")

    def _read_value(self, raw_value: str) -> Optional[str]:
        """Normalize a macro value made only of literals and arithmetic punctuation."""
        parts = []
        position = 0
        while position < len(raw_value):
            token = VALUE_TOKEN_PATTERN.match(raw_value, position)
            if token is None or token.end() == position:
                return None
            parts.append(token.group("number") or token.group("string") or token.group("punct"))
            position = token.end()
            if not raw_value[position:].strip():
                break
        return "".join(parts)

    def _parse_parameters(self, params: str) -> List[Parameter]:
        """Parse a C parameter list."""
        params = params.strip()
        if not params or params == "void":
            return []

        parameters = []
        for index, param in enumerate(self._split_top_level(params)):
            param = param.strip()
            if param == "...":
                parameters.append(Parameter(name="varargs", type_name="..."))
                continue

            # function pointer parameter: ret (*name)(args)
            pointer_match = re.match(r'^(.+?)\(\s*\*\s*(\w*)\s*\)\s*\(.*\)$', param)
            if pointer_match:
                name = pointer_match.group(2) or f"callback{index}"
                parameters.append(Parameter(name=name, type_name="void*"))
                continue

            is_array = "[" in param
            param = re.sub(r'\[[^\]]*\]', '', param).strip()
            type_name, name = self._split_declarator(param)
            if is_array:
                type_name = f"{type_name}*"
            if not name:
                # unnamed parameter; use the type's base word
                words = [w for w in re.findall(r'\w+', type_name) if w not in IGNORED_WORDS]
                name = words[-1] if words else f"arg{index}"
            parameters.append(Parameter(name=name, type_name=type_name, is_array=is_array))

        return parameters

    def _split_declarator(self, param: str) -> Tuple[str, str]:
        """Split ``const char* name`` into (``char*``, ``name``)."""
        match = re.match(r'^(?P<type>.*?[\s\*])(?P<name>\w+)$', param)
        if match:
            type_part = self._normalize_type(match.group("type"))
            # "int" or "unsigned int" alone have no declarator name
            if type_part and match.group("name") not in C_TYPE_WORDS:
                return type_part, match.group("name")
        return self._normalize_type(param), ""

    def _normalize_type(self, type_text: str) -> str:
        """Drop qualifiers and visibility macros, collapse pointer spacing."""
        words = re.findall(r'\w+|\*', type_text)
        words = [w for w in words if w not in IGNORED_WORDS and w not in self.export_macros]
        base = " ".join(w for w in words if w != "*")
        return base + "*" * words.count("*")

    def _split_top_level(self, text: str) -> List[str]:
        """Split on commas that are not nested in parentheses."""
        parts = []
        depth = 0
        current = []
        for char in text:
            if char == "(":
                depth += 1
            elif char == ")":
                depth -= 1
            if char == "," and depth == 0:
                parts.append("".join(current))
                current = []
            else:
                current.append(char)
        parts.append("".join(current))
        return parts

    def _split_markers(self, comment: List[str]) -> Tuple[List[str], List[Marker]]:
        """Separate marker tags from description lines, keeping source order."""
        description = []
        markers: List[Marker] = []
        for line in comment:
            found = list(MARKER_PATTERN.finditer(line))
            if not found:
                description.append(line)
                continue
            for tag in found:
                markers.append(_make_marker(tag.group(1), tag.group(2)))
            rest = MARKER_PATTERN.sub('', line).strip()
            if rest:
                description.append(rest)
        return description, markers


def _make_marker(tag: str, argument: Optional[str]) -> Marker:
    if tag == "native_name":
        return OverrideMarker((argument or "").strip())
    if tag == "blocking":
        return BlockingMarker()
    if tag == "log":
        return LogMarker()
    return DeprecatedMarker((argument or "").strip())
