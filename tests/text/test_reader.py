"""Tests for the recursive-descent Reader.

Covers scalars, arrays, objects (including objects nested in arrays),
quote styles, optional escapes, comma handling, strict terminators, the
depth limit, multi-value streams, and the offsets carried by errors.
"""

from __future__ import annotations

import io

import pytest

from json_value.errors import DepthLimitError, MalformedInputError, UnexpectedEndError
from json_value.model.kinds import Kind
from json_value.model.value import Value
from json_value.text.config import TextConfig
from json_value.text.reader import Reader
from json_value.text.stream import CharStream

# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestScalars:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0", 0.0),
            ("42", 42.0),
            ("-7", -7.0),
            ("+3", 3.0),
            ("3.25", 3.25),
            ("1e3", 1000.0),
            ("2.5E-1", 0.25),
            (".5", 0.5),
        ],
    )
    def test_numbers(self, text: str, expected: float) -> None:
        value = Reader(text).read_value()
        assert value.kind is Kind.NUMBER
        assert value.as_float() == expected

    def test_literals(self) -> None:
        assert Reader("true").read_value().kind is Kind.TRUE
        assert Reader("false").read_value().kind is Kind.FALSE
        assert Reader("null").read_value().kind is Kind.NULL

    def test_double_quoted_string(self) -> None:
        assert Reader('"hello world"').read_value() == Value("hello world")

    def test_single_quoted_string(self) -> None:
        assert Reader("'it'").read_value() == Value("it")

    def test_other_quote_inside_string(self) -> None:
        assert Reader("\"it's\"").read_value().as_str() == "it's"
        assert Reader("'say \"hi\"'").read_value().as_str() == 'say "hi"'

    def test_whitespace_inside_string_is_kept(self) -> None:
        assert Reader('"  a \t b  "').read_value().as_str() == "  a \t b  "

    def test_single_quotes_can_be_disabled(self) -> None:
        with pytest.raises(MalformedInputError):
            Reader("'x'", TextConfig(single_quotes=False)).read_value()

    def test_number_stops_before_delimiter(self) -> None:
        reader = Reader("12,")
        assert reader.read_value() == Value(12)
        assert reader.offset == 2


# ---------------------------------------------------------------------------
# Escapes
# ---------------------------------------------------------------------------


class TestEscapes:
    def test_backslash_copied_verbatim_by_default(self) -> None:
        assert Reader(r'"a\nb"').read_value().as_str() == "a\\nb"

    def test_simple_escapes_when_enabled(self) -> None:
        config = TextConfig(escapes=True)
        text = r'"q\" b\\ s\/ \b\f\n\r\t"'
        assert Reader(text, config).read_value().as_str() == 'q" b\\ s/ \b\f\n\r\t'

    def test_escaped_quote_does_not_end_string(self) -> None:
        config = TextConfig(escapes=True)
        assert Reader(r"'it\'s'", config).read_value().as_str() == "it's"

    def test_unicode_escape(self) -> None:
        config = TextConfig(escapes=True)
        assert Reader(r'"\u00e9"', config).read_value().as_str() == "\u00e9"

    def test_surrogate_pair(self) -> None:
        config = TextConfig(escapes=True)
        assert Reader(r'"\ud83d\ude00"', config).read_value().as_str() == "\U0001f600"

    def test_lone_high_surrogate_is_malformed(self) -> None:
        config = TextConfig(escapes=True)
        with pytest.raises(MalformedInputError, match="low surrogate"):
            Reader(r'"\ud83dx"', config).read_value()

    def test_bad_hex_digit(self) -> None:
        config = TextConfig(escapes=True)
        with pytest.raises(MalformedInputError, match="hex digit"):
            Reader(r'"\u12g4"', config).read_value()

    def test_unknown_escape(self) -> None:
        config = TextConfig(escapes=True)
        with pytest.raises(MalformedInputError, match="escape character"):
            Reader(r'"\q"', config).read_value()


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


class TestArrays:
    def test_three_numbers(self) -> None:
        value = Reader("[1,2,3]").read_value()
        assert value.kind is Kind.ARRAY
        assert len(value) == 3
        assert all(element.kind is Kind.NUMBER for element in value)
        assert value == [1, 2, 3]

    def test_empty(self) -> None:
        value = Reader("[]").read_value()
        assert value.kind is Kind.ARRAY
        assert len(value) == 0

    def test_whitespace_separated(self) -> None:
        assert Reader("[ 1 2\n3 ]").read_value() == [1, 2, 3]

    def test_nested(self) -> None:
        value = Reader("[[1,[2]],[],'x']").read_value()
        assert value == [[1, [2]], [], "x"]

    def test_mixed_scalars(self) -> None:
        value = Reader("[true, false, null, 'a', -1.5]").read_value()
        assert [element.kind for element in value] == [
            Kind.TRUE,
            Kind.FALSE,
            Kind.NULL,
            Kind.STRING,
            Kind.NUMBER,
        ]

    def test_leading_comma_is_tolerated(self) -> None:
        assert Reader("[,1]").read_value() == [1]

    def test_trailing_comma_is_malformed(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            Reader("[1,]").read_value()
        assert exc_info.value.offset == 3
        assert exc_info.value.found == "]"

    def test_unterminated(self) -> None:
        with pytest.raises(UnexpectedEndError):
            Reader("[1, 2").read_value()

    def test_read_array_requires_bracket(self) -> None:
        with pytest.raises(MalformedInputError, match=r"expected '\['"):
            Reader("{}").read_array()

    def test_read_array(self) -> None:
        assert Reader("  [1]").read_array() == [1]


# ---------------------------------------------------------------------------
# Objects
# ---------------------------------------------------------------------------


class TestObjects:
    def test_two_members(self) -> None:
        members = Reader('{"a":1,"b":"s"}').read_object()
        assert list(members) == ["a", "b"]
        assert members["a"] == Value(1)
        assert members["b"] == Value("s")

    def test_members_are_key_sorted(self) -> None:
        members = Reader('{"z":1, "a":2, "m":3}').read_object()
        assert list(members) == ["a", "m", "z"]

    def test_empty(self) -> None:
        assert Reader("{}").read_object() == {}

    def test_duplicate_key_last_wins(self) -> None:
        members = Reader('{"k":1,"k":2}').read_object()
        assert members == {"k": Value(2)}

    def test_object_as_value(self) -> None:
        value = Reader("{'a': {'b': [1]}}").read_value()
        assert value.kind is Kind.OBJECT
        assert value["a"]["b"] == [1]

    def test_objects_inside_array(self) -> None:
        value = Reader('[{"a":1},{"b":2}]').read_value()
        assert value == [{"a": 1}, {"b": 2}]

    def test_missing_colon(self) -> None:
        with pytest.raises(MalformedInputError, match="':'"):
            Reader('{"a" 1}').read_object()

    def test_unquoted_key(self) -> None:
        with pytest.raises(MalformedInputError, match="quoted key"):
            Reader("{a:1}").read_object()

    def test_missing_value(self) -> None:
        with pytest.raises(MalformedInputError, match="value for key 'a'"):
            Reader('{"a":}').read_object()

    def test_trailing_comma_is_malformed(self) -> None:
        with pytest.raises(MalformedInputError):
            Reader('{"a":1,}').read_object()

    def test_read_pair(self) -> None:
        reader = Reader('"k" : [true], "j": null}')
        key, value = reader.read_pair()
        assert key == "k"
        assert value == [True]
        assert reader.read_pair() == ("j", Value(None))
        assert reader.read_pair() is None


# ---------------------------------------------------------------------------
# Terminators and depth
# ---------------------------------------------------------------------------


class TestTerminators:
    def test_strict_rejects_brace_closing_array(self) -> None:
        with pytest.raises(MalformedInputError, match=r"expected '\]'"):
            Reader("[1}").read_value()

    def test_strict_rejects_bracket_closing_object(self) -> None:
        with pytest.raises(MalformedInputError):
            Reader('{"a":1]').read_value()

    def test_lenient_accepts_either_closer(self) -> None:
        config = TextConfig(strict_terminators=False)
        assert Reader("[1}", config).read_value() == [1]
        assert Reader('{"a":1]', config).read_value() == {"a": 1}

    def test_read_value_returns_undefined_at_closer(self) -> None:
        reader = Reader("]")
        assert reader.read_value().kind is Kind.UNDEFINED

    def test_read_document_rejects_stray_closer(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            Reader("  }").read_document()
        assert exc_info.value.offset == 2


class TestDepthLimit:
    def test_within_limit(self) -> None:
        assert Reader("[[1]]", TextConfig(max_depth=2)).read_value() == [[1]]

    def test_exceeding_limit(self) -> None:
        with pytest.raises(DepthLimitError) as exc_info:
            Reader("[[1]]", TextConfig(max_depth=1)).read_value()
        assert exc_info.value.offset == 1
        assert exc_info.value.max_depth == 1

    def test_objects_count_toward_depth(self) -> None:
        with pytest.raises(DepthLimitError):
            Reader('{"a":{"b":1}}', TextConfig(max_depth=1)).read_value()

    def test_depth_resets_between_values(self) -> None:
        reader = Reader("[1] [2]", TextConfig(max_depth=1))
        assert reader.read_value() == [1]
        assert reader.read_value() == [2]

    def test_arrays_at_default_limit(self) -> None:
        depth = TextConfig().max_depth
        value = Reader("[" * depth + "]" * depth).read_value()
        assert _nesting(value) == depth

    def test_objects_at_default_limit(self) -> None:
        depth = TextConfig().max_depth
        value = Reader('{"k":' * (depth - 1) + "{}" + "}" * (depth - 1)).read_value()
        assert _nesting(value) == depth

    def test_one_past_default_limit(self) -> None:
        depth = TextConfig().max_depth + 1
        with pytest.raises(DepthLimitError) as exc_info:
            Reader("[" * depth + "]" * depth).read_value()
        assert exc_info.value.max_depth == depth - 1
        assert exc_info.value.offset == depth - 1

    def test_parsed_children_are_not_copied(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fail_copy(self: Value) -> Value:
            raise AssertionError("parsed child was copied")

        monkeypatch.setattr(Value, "copy", fail_copy)
        value = Reader('[[1, {"a": [true]}], {"b": {"c": "x"}}]').read_value()
        assert value.kind is Kind.ARRAY
        assert value[0][1]["a"][0].kind is Kind.TRUE


def _nesting(value: Value) -> int:
    """Container depth of a value whose containers each hold at most one child."""
    depth = 0
    while value.kind in (Kind.ARRAY, Kind.OBJECT):
        depth += 1
        children = list(value.payload.values() if value.kind is Kind.OBJECT else value.payload)
        if not children:
            break
        value = children[0]
    return depth


# ---------------------------------------------------------------------------
# Errors and offsets
# ---------------------------------------------------------------------------


class TestErrors:
    def test_misspelled_literal(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            Reader("trux").read_value()
        assert exc_info.value.offset == 3
        assert exc_info.value.found == "x"
        assert "'true'" in str(exc_info.value)

    def test_truncated_literal(self) -> None:
        with pytest.raises(UnexpectedEndError) as exc_info:
            Reader("nul").read_value()
        assert exc_info.value.offset == 3

    def test_empty_input(self) -> None:
        with pytest.raises(UnexpectedEndError):
            Reader("   ").read_value()

    def test_unterminated_string(self) -> None:
        with pytest.raises(UnexpectedEndError, match="closing"):
            Reader('"abc').read_value()

    def test_garbage(self) -> None:
        with pytest.raises(MalformedInputError) as exc_info:
            Reader("  @").read_value()
        assert exc_info.value.offset == 2
        assert exc_info.value.found == "@"

    def test_sign_without_digits(self) -> None:
        with pytest.raises(MalformedInputError, match="digit"):
            Reader("-x").read_value()

    def test_exponent_without_digits(self) -> None:
        with pytest.raises(MalformedInputError, match="exponent digit"):
            Reader("1e").read_value()

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            Reader("?").read_value()


# ---------------------------------------------------------------------------
# Streams of values
# ---------------------------------------------------------------------------


class TestStreams:
    def test_iterate_whitespace_separated_values(self) -> None:
        values = list(Reader("1 2 'three'"))
        assert [v.to_python() for v in values] == [1.0, 2.0, "three"]

    def test_iterate_empty(self) -> None:
        assert list(Reader("  \n ")) == []

    def test_sequential_reads(self) -> None:
        reader = Reader('[1,2,3] {"a":1}')
        assert reader.read_value() == [1, 2, 3]
        assert reader.read_value() == {"a": 1}
        assert reader.at_end()

    def test_reads_from_file_object(self) -> None:
        assert Reader(io.StringIO("[true]")).read_value() == [True]

    def test_accepts_char_stream(self) -> None:
        stream = CharStream("'a' 'b'")
        assert Reader(stream).read_value() == "a"
        assert Reader(stream).read_value() == "b"
