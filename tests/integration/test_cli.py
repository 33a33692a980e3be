"""Integration tests for the command line interface."""

import json
from pathlib import Path
from click.testing import CliRunner

from ffisymbols.cli import main

MOCKS = Path(__file__).parent.parent / "mocks" / "bindings"
HEADER = str(MOCKS / "cef_task.h")


class TestCLI:
    def setup_method(self):
        self.runner = CliRunner()

    def test_writes_ruby_binding(self, tmp_path):
        out = tmp_path / "cef.rb"
        result = self.runner.invoke(main, [
            "--header", HEADER, "--module", "CEF", "--lib", "cef", "--prefix", "cef_", "--out", str(out)
        ])

        assert result.exit_code == 0, result.output
        code = out.read_text()
        assert "attach_function :post_task, :cef_post_task_v2" in code
        assert "Overridden Symbols" in result.output

    def test_prints_to_stdout_without_out(self):
        result = self.runner.invoke(main, ["--header", HEADER, "--module", "CEF", "--lib", "cef"])

        assert result.exit_code == 0
        assert "require 'ffi'" in result.output

    def test_json_format_from_extension(self, tmp_path):
        out = tmp_path / "symbols.json"
        result = self.runner.invoke(main, [
            "--header", HEADER, "--module", "CEF", "--lib", "cef", "--out", str(out)
        ])

        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["metadata"]["total_symbols"] == 7

    def test_policy_option(self, tmp_path):
        out = tmp_path / "symbols.json"
        result = self.runner.invoke(main, [
            "--header", HEADER, "--module", "CEF", "--lib", "cef", "--out", str(out),
            "--policy", "prefix", "--symbol-prefix", "shim_"
        ])

        assert result.exit_code == 0
        symbols = {s["name"]: s["symbol"] for s in json.loads(out.read_text())["symbols"]}
        assert symbols["cef_post_task"] == "shim_cef_post_task"

    def test_config_file(self, tmp_path):
        out = tmp_path / "calc.rb"
        config = tmp_path / "ffi_symbols.yaml"
        config.write_text(
            "module_name: Calculator\n"
            "ffi_lib: calc\n"
            f"headers: ['{MOCKS / 'calculator.py'}']\n"
            "naming:\n"
            "  on_invalid_override: skip\n"
        )

        result = self.runner.invoke(main, ["--config", str(config), "--out", str(out)])

        assert result.exit_code == 0, result.output
        assert "attach_function :multiply, :c_mul" in out.read_text()
        assert "Skipped legacy_add" in result.output

    def test_invalid_override_aborts(self, tmp_path):
        result = self.runner.invoke(main, [
            "--header", str(MOCKS / "calculator.py"), "--module", "Calculator", "--lib", "calc",
            "--out", str(tmp_path / "calc.rb")
        ])

        assert result.exit_code == 1
        assert not (tmp_path / "calc.rb").exists()

    def test_skip_invalid_flag(self, tmp_path):
        out = tmp_path / "calc.rb"
        result = self.runner.invoke(main, [
            "--header", str(MOCKS / "calculator.py"), "--module", "Calculator", "--lib", "calc",
            "--out", str(out), "--skip-invalid"
        ])

        assert result.exit_code == 0
        assert "legacy_add" not in out.read_text()

    def test_missing_module_name(self):
        result = self.runner.invoke(main, ["--header", HEADER, "--lib", "cef"])
        assert result.exit_code == 1
