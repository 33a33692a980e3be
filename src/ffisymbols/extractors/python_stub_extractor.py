"""Python binding stub extractor (AST-based)."""

import ast
import sys
from typing import List, Optional

from .base import BaseExtractor
from ffisymbols.ir import (
    Declaration, DeclarationKind, Parameter, Marker,
    OverrideMarker, LogMarker, BlockingMarker, DeprecatedMarker
)


class StubVisitor(ast.NodeVisitor):
    """AST visitor collecting decorated binding functions.

    Stubs look like::

        @native_name("cef_post_task")
        @blocking
        def post_task(thread_id: int, task: "Task") -> int:
            '''Post a task for execution.'''
    """

    MARKER_DECORATORS = {"native_name", "blocking", "log", "deprecated"}

    def __init__(self, source_file: str) -> None:
        self.source_file = source_file
        self.declarations: List[Declaration] = []
        self._class_depth = 0

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        """Methods of binding classes are bound like functions."""
        self._class_depth += 1
        self.generic_visit(node)
        self._class_depth -= 1

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        if node.name.startswith("_"):
            return

        args = list(node.args.args)
        if self._class_depth and args and args[0].arg in ("self", "cls"):
            args = args[1:]

        parameters = [
            Parameter(name=arg.arg, type_name=self._annotation(arg.annotation, "unknown"))
            for arg in args
        ]
        if node.args.vararg is not None:
            parameters.append(Parameter(name=node.args.vararg.arg, type_name="..."))

        docstring = ast.get_docstring(node)
        self.declarations.append(Declaration(
            name=node.name,
            kind=DeclarationKind.FUNCTION,
            markers=tuple(self._markers(node)),
            parameters=parameters,
            return_type=self._annotation(node.returns, "void"),
            description=docstring.split("\n") if docstring else [],
            source_file=self.source_file,
            line_number=node.lineno
        ))
        # nested functions are implementation details, not bindings

    def _markers(self, node: ast.FunctionDef) -> List[Marker]:
        """Convert marker decorators, in decorator order, to markers."""
        markers = []
        for decorator in node.decorator_list:
            call = decorator if isinstance(decorator, ast.Call) else None
            target = call.func if call is not None else decorator
            name = self._decorator_name(target)
            if name not in self.MARKER_DECORATORS:
                continue

            argument = self._string_argument(call, node.name, name)
            if name == "native_name":
                markers.append(OverrideMarker(argument or ""))
            elif name == "blocking":
                markers.append(BlockingMarker())
            elif name == "log":
                markers.append(LogMarker())
            else:
                markers.append(DeprecatedMarker(argument or ""))
        return markers

    def _decorator_name(self, target: ast.expr) -> Optional[str]:
        if isinstance(target, ast.Name):
            return target.id
        if isinstance(target, ast.Attribute):
            return target.attr
        return None

    def _string_argument(self, call: Optional[ast.Call], function: str, decorator: str) -> Optional[str]:
        """Get the literal string argument of a marker decorator."""
        if call is None:
            return None
        values = list(call.args) + [kw.value for kw in call.keywords]
        if not values:
            return None
        value = values[0]
        if isinstance(value, ast.Constant) and isinstance(value.value, str):
            return value.value
        print(f"Warning: @{decorator} on \"{function}\" needs a string literal, got {ast.unparse(value)}", file=sys.stderr)
        return None

    def _annotation(self, annotation: Optional[ast.expr], default: str) -> str:
        if annotation is None:
            return default
        if isinstance(annotation, ast.Constant):
            if annotation.value is None:
                return "void"
            if isinstance(annotation.value, str):
                return annotation.value
        return ast.unparse(annotation)


class PythonStubExtractor(BaseExtractor):
    """Extractor for Python binding stubs."""

    extensions = (".py", ".pyi")

    def extract_from_content(self, content: str, source_file: str) -> List[Declaration]:
        """Extract declarations from stub content.

        Raises:
            SyntaxError: If the stub is not valid Python
        """
        tree = ast.parse(content, filename=source_file)
        visitor = StubVisitor(source_file)
        visitor.visit(tree)
        return visitor.declarations
