"""Errors raised while resolving symbol names."""

from typing import Any


class InvalidOverrideError(ValueError):
    """An override marker carries an unusable native name."""

    def __init__(self, declaration_name: str, payload: Any) -> None:
        self.declaration_name = declaration_name
        self.payload = payload
        super().__init__(
            f"Invalid native name override {payload!r} on declaration \"{declaration_name}\""
        )
