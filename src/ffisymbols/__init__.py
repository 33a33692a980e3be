"""Symbol-name resolution for FFI binding generation."""

__version__ = "0.1.0"
