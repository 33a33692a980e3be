"""Unit tests for output writers."""

import json

from ffisymbols.ir import (
    Declaration, DeclarationKind, Parameter, ResolvedSymbol,
    OverrideMarker, BlockingMarker, DeprecatedMarker
)
from ffisymbols.writers import Writer, RubyFFIWriter, JSONSymbolMapWriter


class TestWriter:
    def test_indent_and_comment(self):
        writer = Writer("  ", "# ")
        writer.puts("module A")
        with writer.indent():
            with writer.comment():
                writer.puts("doc", "")
            writer.puts("x = 1")
        writer.puts("end")

        assert writer.output == "module A\n  # doc\n  #\n  x = 1\nend\n"

    def test_comment_delimiters(self):
        writer = Writer("    ", " * ", "/**", " */")
        with writer.comment():
            writer.puts("doc")
        assert writer.output == "/**\n * doc\n */\n"

    def test_write_array(self):
        writer = Writer("  ", "# ")
        writer.write_array(["a", "b", "c"], ",", "[", " ")
        assert writer.output == "[a,\n b,\n c\n"

    def test_write_description_trims_and_dedents(self):
        writer = Writer("  ", "# ")
        writer.write_description(["", "    first", "\tsecond", "      third", ""])
        assert writer.output == "first\nsecond\n  third\n"

    def test_write_description_not_documented(self):
        writer = Writer("  ", "# ")
        writer.write_description(["", "  "])
        assert writer.output == "(Not documented)\n"


class TestRubyFFIWriter:
    def setup_method(self):
        self.writer = RubyFFIWriter("CEF", "cef", prefixes=["cef_"], keyword_blacklist=["end"])

    def _function(self, name, symbol, **kwargs):
        return ResolvedSymbol(Declaration(name=name, **kwargs), symbol)

    def test_attaches_resolved_symbol(self):
        output = self.writer.write([
            self._function(
                "cef_post_task", "cef_post_task_v2",
                parameters=[Parameter("thread_id", "cef_thread_id_t"), Parameter("task", "cef_task_t*")],
                return_type="int",
                description=["Post a task."]
            )
        ])

        assert "attach_function :post_task, :cef_post_task_v2, [:int, :pointer], :int\n" in output
        assert "  # Post a task.\n" in output
        assert "  # @method post_task(thread_id, task)\n" in output
        assert "  # @param [FFI::Pointer] task\n" in output
        assert "  # @return [Integer]\n" in output

    def test_parameter_and_return_descriptions(self):
        output = self.writer.write([
            self._function(
                "cef_post_task", "cef_post_task",
                parameters=[
                    Parameter("thread_id", "int", description=["the target thread"]),
                    Parameter("task", "cef_task_t*", description=["the task to run,", "  owned by the caller"]),
                ],
                return_type="int",
                return_description=["1 on success", ""]
            )
        ])

        assert "  # @param [Integer] thread_id the target thread\n" in output
        assert "  # @param [FFI::Pointer] task the task to run, owned by the caller\n" in output
        assert "  # @return [Integer] 1 on success\n" in output

    def test_module_preamble(self):
        output = self.writer.write([])
        assert output.startswith("# Generated by ffi-symbols. Please do not change this file by hand.\n\nrequire 'ffi'\n\nmodule CEF\n")
        assert "  extend FFI::Library\n  ffi_lib 'cef'\n" in output
        assert "rescue FFI::NotFoundError => e" in output
        assert output.endswith("end\n")

    def test_blocking(self):
        output = self.writer.write([
            self._function("cef_wait", "cef_wait", markers=(BlockingMarker(),))
        ])
        assert "attach_function :wait, :cef_wait, [], :void, blocking: true\n" in output

    def test_deprecated(self):
        output = self.writer.write([
            self._function("cef_old", "cef_old", markers=(DeprecatedMarker("use cef_new"),))
        ])
        assert "  # @deprecated use cef_new\n" in output

    def test_type_mapping(self):
        output = self.writer.write([
            ResolvedSymbol(Declaration(
                name="cef_done_cb",
                kind=DeclarationKind.CALLBACK,
                parameters=[Parameter("result", "int")],
                return_type="void"
            ), "cef_done_cb"),
            self._function(
                "cef_set_name", "cef_set_name",
                parameters=[
                    Parameter("name", "char*"),
                    Parameter("done", "cef_done_cb"),
                    Parameter("size", "size_t"),
                    Parameter("values", "int*", is_array=True),
                    Parameter("more", "...")
                ],
                return_type="double"
            )
        ])
        assert "callback :done_cb, [:int], :void\n" in output
        assert "attach_function :set_name, :cef_set_name, [:string, :done_cb, :size_t, :pointer, :varargs], :double\n" in output
        assert "# @param [Proc(_callback_done_cb_)] done\n" in output

    def test_keyword_names_are_escaped(self):
        output = self.writer.write([self._function("cef_end", "cef_end")])
        assert "attach_function :end_, :cef_end, [], :void\n" in output

    def test_constants(self):
        output = self.writer.write([
            ResolvedSymbol(Declaration(name="cef_task_version", kind=DeclarationKind.CONSTANT, value="3"), "cef_task_version")
        ])
        assert "  TASK_VERSION = 3\n" in output

    def test_unknown_types_default_to_int(self):
        output = self.writer.write([
            self._function("cef_currently_on", "cef_currently_on",
                           parameters=[Parameter("thread_id", "cef_thread_id_t")], return_type="int")
        ])
        assert "# @param [unknown] thread_id\n" in output
        assert "[:int], :int\n" in output

    def test_output_is_deterministic(self):
        symbols = [
            self._function("cef_a", "native_a", markers=(OverrideMarker("native_a"),)),
            self._function("cef_b", "cef_b"),
        ]
        assert self.writer.write(symbols) == self.writer.write(symbols)


class TestJSONSymbolMapWriter:
    def test_symbols_and_metadata(self):
        symbols = [
            ResolvedSymbol(Declaration(name="add", markers=(OverrideMarker("native_add"),)), "native_add"),
            ResolvedSymbol(Declaration(name="subtract"), "subtract"),
        ]

        data = json.loads(JSONSymbolMapWriter("Calc", "calc").write(symbols, [("legacy_add", "bad override")]))

        assert data["metadata"]["module_name"] == "Calc"
        assert data["metadata"]["total_symbols"] == 2
        assert data["metadata"]["overridden"] == 1
        assert data["metadata"]["skipped"] == [{"name": "legacy_add", "error": "bad override"}]
        assert [s["symbol"] for s in data["symbols"]] == ["native_add", "subtract"]
