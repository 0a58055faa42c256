"""Tests for the text builder."""

import pytest

from stdext.utils.text_builder import TextScope, build_text


def test_empty_block():
    assert build_text(lambda t: None) == ""


def test_append_single_string():
    assert build_text(lambda t: t.append("hello")) == "hello"


def test_append_single_char():
    assert build_text(lambda t: t.append("x")) == "x"


def test_iadd_appends():
    def block(t):
        t += "hello"
        t += " "
        t += "world"

    assert build_text(block) == "hello world"


def test_mixed_strings_and_chars():
    def block(t):
        t += "hello"
        t += ","
        t += " "
        t += "world"
        t += "!"

    assert build_text(block) == "hello, world!"


def test_append_is_chainable():
    assert build_text(lambda t: t.append("a").append("b").append("c")) == "abc"


def test_multiline_text():
    def block(t):
        t += "line1\n"
        t += "line2\n"
        t += "line3"

    assert build_text(block) == "line1\nline2\nline3"


def test_special_characters():
    def block(t):
        t += "\t"
        t += "indented"
        t += "\r"
        t += "\n"

    assert build_text(block) == "\tindented\r\n"


def test_loop_appending():
    def block(t):
        for i in range(1, 4):
            t += str(i)
            if i < 3:
                t += ","

    assert build_text(block) == "1,2,3"


def test_block_called_once():
    calls = []
    build_text(calls.append)
    assert len(calls) == 1
    assert isinstance(calls[0], TextScope)


def test_rejects_non_string_fragment():
    with pytest.raises(TypeError, match="Expected str fragment, got int"):
        build_text(lambda t: t.append(42))


class TestTrimLastNewline:
    """Tests for TextScope.trim_last_newline."""

    def test_removes_trailing_newline(self):
        def block(t):
            t += "hello\n"
            t.trim_last_newline()

        assert build_text(block) == "hello"

    def test_noop_without_trailing_newline(self):
        def block(t):
            t += "hello"
            t.trim_last_newline()

        assert build_text(block) == "hello"

    def test_noop_on_empty(self):
        assert build_text(lambda t: t.trim_last_newline()) == ""

    def test_only_removes_last_newline(self):
        def block(t):
            t += "line1\n"
            t += "line2\n"
            t.trim_last_newline()

        assert build_text(block) == "line1\nline2"

    def test_removes_single_newline_fragment(self):
        def block(t):
            t += "hello"
            t += "\n"
            t.trim_last_newline()
            t.trim_last_newline()

        assert build_text(block) == "hello"

    def test_removes_one_of_several_newlines(self):
        def block(t):
            t += "hello\n\n"
            t.trim_last_newline()

        assert build_text(block) == "hello\n"


def test_text_property_and_repr():
    scope = TextScope()
    scope += "abc"
    assert scope.text == "abc"
    assert repr(scope) == "TextScope('abc')"
