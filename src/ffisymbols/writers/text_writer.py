"""Indentation-aware text buffer used by the output writers."""

from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Sequence
import re


class Writer:
    """Accumulates generated source lines.

    Example:
        writer = Writer("  ", "# ")
        with writer.comment():
            writer.puts("Generated")
        writer.output  # "# Generated\\n"
    """

    def __init__(
        self,
        indentation_prefix: str,
        comment_prefix: str,
        comment_start: Optional[str] = None,
        comment_end: Optional[str] = None
    ) -> None:
        self.indentation_prefix = indentation_prefix
        self.comment_prefix = comment_prefix
        self.comment_start = comment_start
        self.comment_end = comment_end
        self._current_indentation = ""
        self._lines: List[str] = []

    @property
    def output(self) -> str:
        return "".join(self._lines)

    @contextmanager
    def indent(self, prefix: Optional[str] = None) -> Iterator[None]:
        """Indent lines written inside the block."""
        previous_indentation = self._current_indentation
        self._current_indentation += self.indentation_prefix if prefix is None else prefix
        try:
            yield
        finally:
            self._current_indentation = previous_indentation

    @contextmanager
    def comment(self) -> Iterator[None]:
        """Write lines inside the block as a comment."""
        if self.comment_start is not None:
            self.puts(self.comment_start)
        with self.indent(self.comment_prefix):
            yield
        if self.comment_end is not None:
            self.puts(self.comment_end)

    def puts(self, *lines: str) -> None:
        """Write lines at the current indentation."""
        for line in lines:
            self._lines.append(f"{self._current_indentation}{line}".rstrip() + "\n")

    def write_array(
        self,
        array: Sequence[str],
        separator: str = "",
        first_line_prefix: str = "",
        other_lines_prefix: str = "",
        transform: Optional[Callable[[str], str]] = None
    ) -> None:
        """Write one entry per line, separating all but the last entry."""
        for index, entry in enumerate(array):
            if transform is not None:
                entry = transform(entry)
            prefix = first_line_prefix if index == 0 else other_lines_prefix
            suffix = separator if index < len(array) - 1 else ""
            self.puts(f"{prefix}{entry}{suffix}")

    def write_description(
        self,
        description: Sequence[str],
        not_documented_message: bool = True,
        first_line_prefix: str = "",
        other_lines_prefix: str = ""
    ) -> None:
        """Write a description block with blank edges and common indentation removed."""
        lines = [line.replace("\t", "    ") for line in description]
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()

        indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
        if indents:
            shortest = min(indents)
            lines = [line[shortest:] for line in lines]

        if not lines:
            lines = ["(Not documented)" if not_documented_message else ""]

        self.write_array(lines, "", first_line_prefix, other_lines_prefix)


def escape_ruby_string(text: str) -> str:
    """Quote text as a single-quoted Ruby string literal."""
    return "'" + re.sub(r"(['\\])", r"\\\1", text) + "'"
