"""Identifier splitting and target-language name formatting."""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional
import re


SPLIT_PATTERN = re.compile(r'_|(?=[A-Z][a-z])|(?<=[a-z])(?=[A-Z])')

MODES = ("downcase", "upcase", "camelcase", "initial_downcase", "underscores")


@dataclass
class Name:
    """An identifier broken into words.

    ``raw`` keeps the spelling from the source, ``parts`` the words left
    after stripping configured prefixes.
    """

    parts: List[str] = field(default_factory=list)
    raw: Optional[str] = None

    def format(self, *modes: str, keyword_blacklist: Iterable[str] = ()) -> str:
        """Format the name for a target language.

        Examples:
            Name(["post", "Task"]).format("downcase", "underscores") -> post_task
            Name(["post", "task"]).format("camelcase", "initial_downcase") -> postTask
        """
        for mode in modes:
            if mode not in MODES:
                raise ValueError(f"Unknown name format mode: {mode}")

        parts = list(self.parts)
        if "downcase" in modes:
            parts = [p.lower() for p in parts]
        if "upcase" in modes:
            parts = [p.upper() for p in parts]
        if "camelcase" in modes:
            parts = [p[0].upper() + p[1:] for p in parts]
        if "initial_downcase" in modes and parts:
            parts[0] = parts[0][0].lower() + parts[0][1:]

        text = ("_" if "underscores" in modes else "").join(parts)
        text = re.sub(r'^\d', r'_\g<0>', text)  # fix illegal beginnings
        if text in set(keyword_blacklist):
            text = f"{text}_"
        return text

    def empty(self) -> bool:
        return not self.parts

    def __str__(self) -> str:
        return self.raw if self.raw is not None else "_".join(self.parts)


def read_name(raw: str, prefixes: Iterable[str] = ()) -> Name:
    """Split a source identifier into a Name, stripping the first matching prefix."""
    prefixes = [p for p in prefixes if p]
    stripped = raw
    if prefixes:
        stripped = re.sub(r'^(' + '|'.join(re.escape(p) for p in prefixes) + r')', '', raw, count=1)
    parts = [part for part in SPLIT_PATTERN.split(stripped) if part]
    return Name(parts, raw)
