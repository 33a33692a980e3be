"""Ruby FFI binding writer."""

from typing import Dict, Iterable, List, Optional
import re

from ffisymbols.ir import Declaration, DeclarationKind, MarkerKind, Parameter, ResolvedSymbol
from ffisymbols.resolution import read_name
from .text_writer import Writer, escape_ruby_string


# C, Python and Java spellings of primitive types
PRIMITIVE_TYPES: Dict[str, str] = {
    "void": ":void",
    "None": ":void",
    "bool": ":bool",
    "_Bool": ":bool",
    "boolean": ":bool",
    "char": ":char",
    "signed char": ":char",
    "byte": ":int8",
    "unsigned char": ":uchar",
    "short": ":short",
    "unsigned short": ":ushort",
    "int": ":int",
    "signed int": ":int",
    "unsigned": ":uint",
    "unsigned int": ":uint",
    "long": ":long",
    "unsigned long": ":ulong",
    "long long": ":long_long",
    "unsigned long long": ":ulong_long",
    "float": ":float",
    "double": ":double",
    "size_t": ":size_t",
    "int8_t": ":int8",
    "uint8_t": ":uint8",
    "int16_t": ":int16",
    "uint16_t": ":uint16",
    "int32_t": ":int32",
    "uint32_t": ":uint32",
    "int64_t": ":int64",
    "uint64_t": ":uint64",
    "str": ":string",
    "String": ":string",
    "bytes": ":pointer",
    "Pointer": ":pointer",
}

YARD_TYPES: Dict[str, str] = {
    ":void": "nil",
    ":bool": "Boolean",
    ":string": "String",
    ":float": "Float",
    ":double": "Float",
    ":pointer": "FFI::Pointer",
    ":varargs": "Array",
}


class RubyFFIWriter:
    """Writes resolved symbols as a Ruby ``FFI::Library`` module.

    Functions are attached under their resolved native symbol::

        attach_function :post_task, :cef_post_task, [:int, :pointer], :int
    """

    def __init__(
        self,
        module_name: str,
        ffi_lib: str,
        prefixes: Optional[List[str]] = None,
        keyword_blacklist: Iterable[str] = (),
        ffi_lib_flags: Optional[List[str]] = None
    ) -> None:
        self.module_name = module_name
        self.ffi_lib = ffi_lib
        self.prefixes = prefixes or []
        self.keyword_blacklist = list(keyword_blacklist)
        self.ffi_lib_flags = ffi_lib_flags or []
        self._callbacks: Dict[str, str] = {}

    def write(self, symbols: List[ResolvedSymbol]) -> str:
        """Generate the Ruby source for the given symbols, in order."""
        self._callbacks = {
            s.declaration.name: self._ruby_name(s.declaration.name)
            for s in symbols if s.declaration.kind == DeclarationKind.CALLBACK
        }

        writer = Writer("  ", "# ")
        writer.puts("# Generated by ffi-symbols. Please do not change this file by hand.", "", "require 'ffi'", "")
        writer.puts(f"module {self.module_name}")
        with writer.indent():
            writer.puts("extend FFI::Library")
            if self.ffi_lib_flags:
                writer.puts(f"ffi_lib_flags {', '.join(':' + flag for flag in self.ffi_lib_flags)}")
            writer.puts(f"ffi_lib {escape_ruby_string(self.ffi_lib)}", "")
            writer.puts(
                "def self.attach_function(name, *_)",
                "  begin; super; rescue FFI::NotFoundError => e",
                "    (class << self; self; end).class_eval { define_method(name) { |*_| raise e } }",
                "  end",
                "end",
                ""
            )

            for resolved in symbols:
                declaration = resolved.declaration
                if declaration.kind == DeclarationKind.CONSTANT:
                    self._write_constant(writer, declaration)
                elif declaration.kind == DeclarationKind.CALLBACK:
                    self._write_callback(writer, declaration)
                else:
                    self._write_function(writer, resolved)
                writer.puts("")

        writer.puts("end")
        return writer.output

    def _write_constant(self, writer: Writer, declaration: Declaration) -> None:
        name = read_name(declaration.name, self.prefixes).format("upcase", "underscores")
        self._write_header(writer, declaration, [])
        writer.puts(f"{name} = {declaration.value}")

    def _write_callback(self, writer: Writer, declaration: Declaration) -> None:
        name = self._callbacks[declaration.name]
        params = self._parameter_names(declaration.parameters)
        self._write_header(writer, declaration, [
            f"@method _callback_{name}_({', '.join(params)})",
            *self._parameter_tags(declaration.parameters, params),
            f"@return [{self._yard_type(declaration.return_type)}] {_inline(declaration.return_description)}",
            "@scope class",
        ])
        writer.puts(
            f"callback :{name}, [{self._ffi_types(declaration.parameters)}], {self._ffi_type(declaration.return_type)}"
        )

    def _write_function(self, writer: Writer, resolved: ResolvedSymbol) -> None:
        declaration = resolved.declaration
        name = self._ruby_name(declaration.name)
        params = self._parameter_names(declaration.parameters)
        self._write_header(writer, declaration, [
            f"@method {name}({', '.join(params)})",
            *self._parameter_tags(declaration.parameters, params),
            f"@return [{self._yard_type(declaration.return_type)}] {_inline(declaration.return_description)}",
            "@scope class",
        ])

        line = (
            f"attach_function :{name}, :{resolved.symbol}, "
            f"[{self._ffi_types(declaration.parameters)}], {self._ffi_type(declaration.return_type)}"
        )
        if declaration.is_blocking:
            line += ", blocking: true"
        writer.puts(line)

    def _write_header(self, writer: Writer, declaration: Declaration, tags: List[str]) -> None:
        """Write the description comment and YARD tags."""
        with writer.comment():
            writer.write_description(declaration.description)
            deprecated = declaration.first_marker(MarkerKind.DEPRECATED)
            if tags or deprecated is not None:
                writer.puts("")
            if deprecated is not None:
                writer.puts(f"@deprecated {deprecated.payload or ''}")
            writer.write_array(tags)

    def _ruby_name(self, raw: str) -> str:
        return read_name(raw, self.prefixes).format(
            "downcase", "underscores", keyword_blacklist=self.keyword_blacklist
        )

    def _parameter_names(self, parameters: List[Parameter]) -> List[str]:
        names = [self._ruby_name(param.name) for param in parameters]
        return [name or f"arg{index}" for index, name in enumerate(names)]

    def _parameter_tags(self, parameters: List[Parameter], names: List[str]) -> List[str]:
        return [
            f"@param [{self._yard_type(param.type_name)}] {name} {_inline(param.description)}"
            for param, name in zip(parameters, names)
        ]

    def _ffi_types(self, parameters: List[Parameter]) -> str:
        return ", ".join(self._ffi_type(param.type_name) for param in parameters)

    def _ffi_type(self, type_name: str) -> str:
        """Map a source type spelling to a Ruby FFI type."""
        type_name = type_name.strip()
        if type_name == "...":
            return ":varargs"

        depth = len(type_name) - len(type_name.rstrip("*"))
        base = type_name.rstrip("*").strip()
        base = re.sub(r'\[\]$', '', base).strip()

        if base in self._callbacks and depth <= 1:
            return f":{self._callbacks[base]}"
        if depth == 0 and type_name.endswith("[]"):
            return ":pointer"
        if depth == 1 and base in ("char", "const char"):
            return ":string"
        if depth > 0:
            return ":pointer"
        if base in PRIMITIVE_TYPES:
            return PRIMITIVE_TYPES[base]
        # unknown named types are typically enums
        return ":int"

    def _yard_type(self, type_name: str) -> str:
        ffi_type = self._ffi_type(type_name)
        if ffi_type.lstrip(":") in self._callbacks.values():
            return f"Proc(_callback_{ffi_type.lstrip(':')}_)"
        if ffi_type in YARD_TYPES:
            return YARD_TYPES[ffi_type]
        if type_name.strip().rstrip("*").strip() not in PRIMITIVE_TYPES and ffi_type == ":int":
            return "unknown"
        return "Integer"


def _inline(lines: List[str]) -> str:
    """Join a multi-line description into one tag line."""
    return " ".join(line.strip() for line in lines if line.strip())
