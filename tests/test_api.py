"""Tests for the module-level shortcuts in json_value.api."""

from __future__ import annotations

import io
import logging

import pytest

from json_value.api import dump, dumps, dumps_object, iter_values, load, loads, loads_object
from json_value.errors import MalformedInputError
from json_value.model.kinds import Kind
from json_value.model.value import Value
from json_value.text.config import TextConfig


class TestLoads:
    def test_array(self) -> None:
        value = loads("[1,2,3]")
        assert value.kind is Kind.ARRAY
        assert value == [1, 2, 3]

    def test_ignores_trailing_values(self) -> None:
        assert loads("1 2") == 1

    def test_stray_closer_is_malformed(self) -> None:
        with pytest.raises(MalformedInputError):
            loads("]")

    def test_config_forwarded(self) -> None:
        assert loads(r'"a\tb"', TextConfig(escapes=True)) == "a\tb"

    def test_logs_each_document(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="json_value.text.reader"):
            loads("[true]")
        assert "read array value" in caplog.text


class TestLoad:
    def test_file_object(self) -> None:
        assert load(io.StringIO("{'a': null}")) == {"a": None}


class TestLoadsObject:
    def test_members(self) -> None:
        members = loads_object('{"a":1,"b":"s"}')
        assert len(members) == 2
        assert members["a"] == 1
        assert members["b"] == "s"

    def test_requires_brace(self) -> None:
        with pytest.raises(MalformedInputError):
            loads_object("[1]")


class TestIterValues:
    def test_yields_every_value(self) -> None:
        values = list(iter_values('1, "x" [true]'))
        assert [v.kind for v in values] == [Kind.NUMBER, Kind.STRING, Kind.ARRAY]

    def test_file_object(self) -> None:
        assert len(list(iter_values(io.StringIO("{} {} {}")))) == 3

    def test_is_lazy(self) -> None:
        values = iter_values("1 ]")
        assert next(values) == 1
        with pytest.raises(MalformedInputError):
            next(values)


class TestDumps:
    def test_value(self) -> None:
        assert dumps(Value([1, 2, 3])) == "[1,2,3]"

    def test_literal(self) -> None:
        assert dumps({"b": [None], "a": 1.5}) == '{"a":1.5,"b":[null]}'

    def test_unsupported_literal(self) -> None:
        with pytest.raises(TypeError):
            dumps(object())

    def test_config_forwarded(self) -> None:
        assert dumps("a\nb", TextConfig(escapes=True)) == '"a\\nb"'

    def test_dump(self) -> None:
        sink = io.StringIO()
        dump([True, "x"], sink)
        assert sink.getvalue() == '[true,"x"]'

    def test_dumps_object(self) -> None:
        assert dumps_object({"z": Value(1), "a": "s"}) == '{"a":"s","z":1}'
