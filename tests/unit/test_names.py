"""Unit tests for identifier splitting and formatting."""

import pytest

from ffisymbols.resolution import Name, read_name


class TestReadName:
    def test_strips_prefix_and_splits_underscores(self):
        name = read_name("cef_post_delayed_task", ["cef_"])
        assert name.parts == ["post", "delayed", "task"]
        assert name.raw == "cef_post_delayed_task"

    def test_splits_camel_case(self):
        assert read_name("postDelayedTask").parts == ["post", "Delayed", "Task"]
        assert read_name("CXCursorKind", ["CX"]).parts == ["Cursor", "Kind"]
        assert read_name("HTTPServer").parts == ["HTTP", "Server"]

    def test_first_matching_prefix_only(self):
        assert read_name("clang_CXType", ["clang_", "CX"]).parts == ["CX", "Type"]

    def test_prefix_is_literal(self):
        assert read_name("a.b_c", ["a."]).parts == ["b", "c"]
        assert read_name("axb_c", ["a."]).parts == ["axb", "c"]

    def test_empty(self):
        assert read_name("").empty()
        assert not read_name("x").empty()


class TestNameFormat:
    def test_downcase_underscores(self):
        assert Name(["post", "Task"]).format("downcase", "underscores") == "post_task"

    def test_upcase_underscores(self):
        assert Name(["task", "version"]).format("upcase", "underscores") == "TASK_VERSION"

    def test_camelcase(self):
        assert Name(["post", "task"]).format("camelcase") == "PostTask"
        assert Name(["post", "task"]).format("camelcase", "initial_downcase") == "postTask"

    def test_leading_digit(self):
        assert Name(["3d", "view"]).format("downcase", "underscores") == "_3d_view"

    def test_keyword_blacklist(self):
        assert Name(["end"]).format("downcase", keyword_blacklist=["end", "class"]) == "end_"
        assert Name(["ending"]).format("downcase", keyword_blacklist=["end"]) == "ending"

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            Name(["x"]).format("shout")

    def test_str_prefers_raw(self):
        assert str(Name(["a", "b"], "cef_a_b")) == "cef_a_b"
        assert str(Name(["a", "b"])) == "a_b"
