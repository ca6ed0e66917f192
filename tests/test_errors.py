"""
Tests for the issue and error model.

Covers Issue construction and re-addressing, ValidationError messages
and its HTTP-422 style payload.
"""

from datetime import datetime, timezone

import pytest

import vld
from vld.errors import Issue, IssueCode, ValidationError, get_value_type


class TestIssue:
    """Tests for Issue."""

    def test_default_path_is_root(self):
        issue = Issue(code=IssueCode.CUSTOM, message="boom")
        assert issue.path == ()

    def test_with_prefix_prepends_segment(self):
        issue = Issue(code=IssueCode.TOO_SMALL, path=("name",), message="too short")
        moved = issue.with_prefix("users").with_prefix(0)
        assert moved.path == (0, "users", "name")
        assert moved.code == IssueCode.TOO_SMALL
        assert moved.message == "too short"

    def test_with_prefix_leaves_original_untouched(self):
        issue = Issue(code=IssueCode.CUSTOM, message="boom")
        issue.with_prefix("a")
        assert issue.path == ()

    def test_issue_is_frozen(self):
        issue = Issue(code=IssueCode.CUSTOM, message="boom")
        with pytest.raises(Exception):
            issue.message = "changed"

    def test_to_dict_drops_unset_detail(self):
        issue = Issue(code=IssueCode.INVALID_TYPE, path=("a", 1), message="m", expected="string")
        assert issue.to_dict() == {
            "code": "invalid_type",
            "path": ["a", 1],
            "message": "m",
            "expected": "string",
        }

    def test_to_dict_serializes_dates(self):
        bound = datetime(2024, 1, 1, tzinfo=timezone.utc)
        issue = Issue(code=IssueCode.TOO_SMALL, message="m", minimum=bound)
        assert issue.to_dict()["minimum"] == "2024-01-01T00:00:00+00:00"

    def test_to_dict_includes_union_errors(self):
        inner = Issue(code=IssueCode.INVALID_TYPE, message="Expected string, received number")
        issue = Issue(code=IssueCode.INVALID_UNION, message="no match", union_errors=((inner,),))
        assert issue.to_dict()["union_errors"] == [[inner.to_dict()]]


class TestValidationError:
    """Tests for ValidationError."""

    def test_requires_issues(self):
        with pytest.raises(ValueError):
            ValidationError([])

    def test_single_issue_message(self):
        error = ValidationError([Issue(code=IssueCode.CUSTOM, message="Only one")])
        assert str(error) == "Only one"
        assert error.message == "Only one"

    def test_multiple_issue_summary(self):
        error = ValidationError(
            [
                Issue(code=IssueCode.CUSTOM, message="first"),
                Issue(code=IssueCode.CUSTOM, message="second"),
            ]
        )
        assert str(error) == "2 validation errors"
        assert error.first_error.message == "first"
        assert error.formatted_errors == ["first", "second"]

    def test_to_dict_payload(self):
        error = ValidationError([Issue(code=IssueCode.CUSTOM, path=("x",), message="bad")])
        assert error.to_dict() == {
            "success": False,
            "errors": [{"code": "custom", "path": ["x"], "message": "bad"}],
        }

    def test_parse_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            vld.string().parse(5)
        assert exc_info.value.issues[0].code == IssueCode.INVALID_TYPE
        assert str(exc_info.value) == "Expected string, received number"


class TestGetValueType:
    """Tests for the value-kind names used in messages."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (vld.MISSING, "undefined"),
            (None, "null"),
            (True, "boolean"),
            (1, "number"),
            (1.5, "number"),
            (float("nan"), "nan"),
            ("x", "string"),
            (datetime(2024, 1, 1), "date"),
            ([1], "array"),
            ((1,), "array"),
            ({"a": 1}, "object"),
            ({1, 2}, "set"),
            (b"x", "bytes"),
            (vld.Symbol("s"), "symbol"),
        ],
    )
    def test_value_types(self, value, expected):
        assert get_value_type(value) == expected
