"""Resolution module initialization."""

from .errors import InvalidOverrideError
from .mapper import (
    NameMapper,
    IdentityNameMapper,
    OverrideNameMapper,
    PrefixNameMapper,
    create_name_mapper,
    is_identifier,
)
from .names import Name, read_name

__all__ = [
    "InvalidOverrideError",
    "NameMapper",
    "IdentityNameMapper",
    "OverrideNameMapper",
    "PrefixNameMapper",
    "create_name_mapper",
    "is_identifier",
    "Name",
    "read_name"
]
