"""Writers module initialization."""

from .text_writer import Writer
from .ruby_writer import RubyFFIWriter
from .json_writer import JSONSymbolMapWriter

__all__ = ["Writer", "RubyFFIWriter", "JSONSymbolMapWriter"]
