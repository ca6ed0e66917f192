"""Tests for the number and bigint validators."""

import math

import pytest

import vld
from vld.errors import IssueCode


class TestNumberType:
    """Tests for the base number check."""

    @pytest.mark.parametrize("value", [0, -3, 2.5, 10**20, math.inf, -math.inf])
    def test_accepts_numbers(self, value):
        assert vld.number().parse(value) == value

    @pytest.mark.parametrize("value", [True, False, "1", None, [1]])
    def test_rejects_non_numbers(self, value):
        assert vld.number().safe_parse(value).issues[0].code == IssueCode.INVALID_TYPE

    def test_rejects_nan(self):
        issue = vld.number().safe_parse(math.nan).issues[0]
        assert issue.code == IssueCode.INVALID_TYPE
        assert issue.received == "nan"


class TestNumberChecks:
    """Tests for number checks."""

    def test_min_max(self):
        schema = vld.number().min(1).max(10)
        assert schema.is_valid(1) and schema.is_valid(10)
        assert schema.safe_parse(0).issues[0].code == IssueCode.TOO_SMALL
        assert schema.safe_parse(11).issues[0].code == IssueCode.TOO_BIG

    def test_gt_lt_are_exclusive(self):
        schema = vld.number().gt(0).lt(1)
        assert schema.is_valid(0.5)
        issue = schema.safe_parse(0).issues[0]
        assert issue.inclusive is False
        assert not schema.is_valid(1)

    def test_positive_negative(self):
        assert vld.number().positive().is_valid(0.1)
        issue = vld.number().positive().safe_parse(0).issues[0]
        assert issue.code == IssueCode.TOO_SMALL
        assert issue.message == "Number must be positive"
        assert vld.number().negative().is_valid(-1)
        assert not vld.number().negative().is_valid(0)

    def test_nonnegative_nonpositive(self):
        assert vld.number().nonnegative().is_valid(0)
        assert not vld.number().nonnegative().is_valid(-1)
        assert vld.number().nonpositive().is_valid(0)
        assert not vld.number().nonpositive().is_valid(1)

    @pytest.mark.parametrize("value, valid", [(3, True), (3.0, True), (3.5, False), (math.inf, False)])
    def test_int(self, value, valid):
        assert vld.number().int().is_valid(value) is valid

    def test_int_issue_code(self):
        assert vld.number().int().safe_parse(1.5).issues[0].code == IssueCode.NOT_INTEGER

    def test_finite(self):
        assert vld.number().finite().is_valid(10**400)
        issue = vld.number().finite().safe_parse(math.inf).issues[0]
        assert issue.code == IssueCode.NOT_FINITE

    def test_safe(self):
        schema = vld.number().safe()
        assert schema.is_valid(2**53 - 1)
        assert schema.safe_parse(2**53).issues[0].code == IssueCode.NOT_SAFE_INTEGER
        assert not schema.is_valid(1.5)

    def test_multiple_of(self):
        assert vld.number().multiple_of(5).is_valid(15)
        assert vld.number().multiple_of(0.1).is_valid(0.3)
        issue = vld.number().step(5).safe_parse(7).issues[0]
        assert issue.code == IssueCode.NOT_MULTIPLE_OF
        assert issue.message == "Number must be a multiple of 5"

    def test_multiple_of_huge_int_with_float_step(self):
        schema = vld.number().multiple_of(0.5)
        assert schema.is_valid(10**400)
        assert vld.number().multiple_of(0.1).is_valid(10**400)
        issue = vld.number().multiple_of(0.3).safe_parse(10**400 + 1).issues[0]
        assert issue.code == IssueCode.NOT_MULTIPLE_OF

    def test_multiple_of_requires_positive_step(self):
        with pytest.raises(ValueError):
            vld.number().multiple_of(0)

    def test_between(self):
        schema = vld.number().between(1, 3)
        assert schema.is_valid(2)
        assert schema.safe_parse(0).issues[0].message == "Number must be between 1 and 3"
        assert schema.safe_parse(4).issues[0].code == IssueCode.TOO_BIG

    def test_even_odd(self):
        assert vld.number().even().is_valid(4)
        assert not vld.number().even().is_valid(3)
        assert vld.number().odd().is_valid(3)
        assert not vld.number().odd().is_valid(4)
        assert not vld.number().odd().is_valid(2.5)


class TestBigInt:
    """Tests for the bigint validator."""

    def test_accepts_large_ints(self):
        assert vld.bigint().parse(10**30) == 10**30

    @pytest.mark.parametrize("value", [1.0, True, "1", None])
    def test_rejects_non_ints(self, value):
        assert vld.bigint().safe_parse(value).issues[0].code == IssueCode.INVALID_TYPE

    def test_bounds(self):
        schema = vld.bigint().min(10).max(20)
        assert schema.is_valid(15)
        assert schema.safe_parse(9).issues[0].origin == "bigint"
        assert not schema.is_valid(21)

    def test_sign_checks(self):
        assert vld.bigint().positive().is_valid(1)
        assert not vld.bigint().positive().is_valid(0)
        assert vld.bigint().negative().is_valid(-1)
        assert vld.bigint().nonnegative().is_valid(0)
        assert vld.bigint().nonpositive().is_valid(0)
        assert not vld.bigint().nonpositive().is_valid(1)
