"""Tests for literal, enum and special-purpose validators."""

import math

import pytest

import vld
from vld import MISSING, Symbol
from vld.errors import IssueCode


class TestLiteral:
    """Tests for the literal validator."""

    def test_exact_match(self):
        assert vld.literal("a").parse("a") == "a"
        assert vld.literal(None).parse(None) is None

    @pytest.mark.parametrize("value, candidate", [(1, True), (True, 1), ("1", 1), (0, False)])
    def test_no_cross_kind_equality(self, value, candidate):
        issue = vld.literal(value).safe_parse(candidate).issues[0]
        assert issue.code == IssueCode.INVALID_LITERAL

    def test_message(self):
        assert vld.literal("a").safe_parse("b").issues[0].message == "Expected 'a', got 'b'"

    def test_int_and_float_are_one_kind(self):
        assert vld.literal(1).is_valid(1.0)


class TestEnum:
    """Tests for the enum validator."""

    def test_membership(self):
        schema = vld.enum_(["red", "green"])
        assert schema.parse("red") == "red"
        issue = schema.safe_parse("blue").issues[0]
        assert issue.code == IssueCode.INVALID_ENUM_VALUE
        assert issue.message == "Expected one of ['red', 'green'], got 'blue'"

    def test_wrong_type(self):
        issue = vld.enum_(["a"]).safe_parse(None).issues[0]
        assert issue.code == IssueCode.INVALID_TYPE
        assert issue.expected == "string | number"

    def test_bool_is_not_a_number_option(self):
        assert not vld.enum_([1, 0]).is_valid(True)

    def test_extract_exclude(self):
        schema = vld.enum_(["a", "b", "c"])
        assert schema.extract("a").options == ("a",)
        assert schema.exclude("a").options == ("b", "c")
        with pytest.raises(ValueError):
            schema.extract("z")

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            vld.enum_([])
        with pytest.raises(TypeError):
            vld.enum_([None])


class TestSimpleKinds:
    """Tests for any, unknown, never, null, undefined, nan, symbol and bytes."""

    @pytest.mark.parametrize("value", [None, 1, "x", MISSING, [1]])
    def test_any_and_unknown(self, value):
        assert vld.any_().parse(value) is value
        assert vld.unknown().parse(value) is value

    def test_never(self):
        issue = vld.never().safe_parse("x").issues[0]
        assert issue.code == IssueCode.INVALID_TYPE
        assert issue.message == "Never type cannot be parsed"

    def test_null(self):
        assert vld.null().parse(None) is None
        assert not vld.null().is_valid(MISSING)

    def test_undefined(self):
        assert vld.undefined().parse() is MISSING
        assert not vld.undefined().is_valid(None)

    def test_nan(self):
        assert math.isnan(vld.nan().parse(math.nan))
        assert not vld.nan().is_valid(1.0)

    def test_symbol(self):
        token = Symbol("token")
        assert vld.symbol().parse(token) is token
        assert not vld.symbol().is_valid("token")
        assert token != Symbol("token")

    def test_bytes(self):
        assert vld.bytes_().parse(bytearray(b"ab")) == b"ab"
        assert vld.bytes_().parse(memoryview(b"ab")) == b"ab"
        assert not vld.bytes_().is_valid("ab")

    def test_missing_is_falsy_singleton(self):
        assert not MISSING
        assert repr(MISSING) == "<MISSING>"


class TestLazy:
    """Tests for recursive schemas."""

    def test_recursive_schema(self):
        node = vld.object_(
            {"value": vld.number(), "children": vld.lazy(lambda: vld.array(node)).optional()}
        )
        tree = {"value": 1, "children": [{"value": 2, "children": [{"value": 3}]}]}
        assert node.parse(tree) == tree
        issue = node.safe_parse({"value": 1, "children": [{"value": "x"}]}).issues[0]
        assert issue.path == ("children", 0, "value")

    def test_getter_must_be_callable(self):
        with pytest.raises(TypeError):
            vld.lazy(vld.string())

    def test_getter_error_becomes_issue(self):
        def broken():
            raise RuntimeError("not ready")

        issue = vld.lazy(broken).safe_parse(1).issues[0]
        assert issue.code == IssueCode.CUSTOM
        assert "not ready" in issue.message
