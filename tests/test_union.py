"""Tests for union, discriminated union and intersection validators."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import vld
from vld.errors import IssueCode
from vld.validators import accepted_types


class TestUnion:
    """Tests for ordered unions."""

    def test_first_success_wins(self):
        assert vld.union(vld.string().transform(len), vld.string()).parse("abc") == 3
        assert vld.union(vld.string(), vld.string().transform(len)).parse("abc") == "abc"

    def test_matches_any_option(self):
        schema = vld.union(vld.string(), vld.number())
        assert schema.parse("a") == "a"
        assert schema.parse(1) == 1

    def test_no_match_collects_every_option(self):
        result = vld.union(vld.string(), vld.number()).safe_parse(True)
        issue = result.issues[0]
        assert len(result.issues) == 1
        assert issue.code == IssueCode.INVALID_UNION
        assert len(issue.union_errors) == 2
        assert issue.union_errors[0][0].message == "Expected string, received boolean"
        assert issue.union_errors[1][0].message == "Expected number, received boolean"

    def test_checks_failures_reported(self):
        result = vld.union(vld.string().min(5), vld.number()).safe_parse("abc")
        first = result.issues[0].union_errors[0][0]
        assert first.code == IssueCode.TOO_SMALL

    def test_custom_message(self):
        issue = vld.union(vld.string(), message="Bad value").safe_parse(1).issues[0]
        assert issue.message == "Bad value"

    def test_nested_union_path(self):
        schema = vld.object_({"v": vld.union(vld.string(), vld.number())})
        assert schema.safe_parse({"v": None}).issues[0].path == ("v",)

    def test_requires_options(self):
        with pytest.raises(ValueError):
            vld.union()


class TestXor:
    """Tests for the exclusive union."""

    def test_exactly_one_match(self):
        schema = vld.xor(vld.string(), vld.number())
        assert schema.parse("a") == "a"
        assert schema.parse(3) == 3

    def test_multiple_matches_fail(self):
        schema = vld.xor(vld.number(), vld.number().int())
        assert schema.parse(1.5) == 1.5
        issue = schema.safe_parse(2).issues[0]
        assert issue.code == IssueCode.INVALID_UNION
        assert issue.message == "Input matches 2 options, but exactly one is required"

    def test_no_match(self):
        issue = vld.xor(vld.string(), vld.number()).safe_parse(True).issues[0]
        assert issue.code == IssueCode.INVALID_UNION
        assert issue.message == "No option matched in exclusive union"

    def test_output_is_transformed_value(self):
        schema = vld.xor(vld.string().trim(), vld.number())
        assert schema.parse("  x ") == "x"

    def test_requires_two_options(self):
        with pytest.raises(ValueError):
            vld.xor(vld.string())

    def test_accepted_types(self):
        assert accepted_types(vld.xor(vld.string(), vld.boolean())) == frozenset({"string", "boolean"})
        assert accepted_types(vld.stringbool()) == frozenset({"string", "boolean"})


class TestAcceptedTypes:
    """Tests for the kind-based classifier behind the union fast path."""

    def test_primitives(self):
        assert accepted_types(vld.string()) == frozenset({"string"})
        assert accepted_types(vld.array(vld.number())) == frozenset({"array"})

    def test_modifiers_extend_types(self):
        assert accepted_types(vld.string().optional()) == frozenset({"string", "undefined"})
        assert accepted_types(vld.string().nullish()) == frozenset({"string", "undefined", "null"})
        assert accepted_types(vld.string().refine(bool)) == frozenset({"string"})

    def test_literals_and_enums(self):
        assert accepted_types(vld.literal(None)) == frozenset({"null"})
        assert accepted_types(vld.enum_(["a", 1])) == frozenset({"string", "number"})

    def test_undecidable_kinds(self):
        assert accepted_types(vld.any_()) is None
        assert accepted_types(vld.coerce.number()) is None
        assert accepted_types(vld.lazy(vld.string)) is None
        assert accepted_types(vld.union(vld.string(), vld.any_())) is None

    def test_coercing_option_still_runs(self):
        schema = vld.union(vld.boolean(), vld.coerce.number())
        assert schema.parse("42") == 42


class TestDiscriminatedUnion:
    """Tests for tag-selected object unions."""

    @pytest.fixture
    def shape(self):
        return vld.discriminated_union(
            "type",
            [
                vld.object_({"type": vld.literal("circle"), "radius": vld.number()}),
                vld.object_({"type": vld.literal("square"), "side": vld.number()}),
            ],
        )

    def test_selects_option_by_tag(self, shape):
        assert shape.parse({"type": "square", "side": 2}) == {"type": "square", "side": 2}

    def test_selected_option_issues(self, shape):
        issue = shape.safe_parse({"type": "circle", "radius": "x"}).issues[0]
        assert issue.path == ("radius",)

    def test_unknown_tag(self, shape):
        issue = shape.safe_parse({"type": "hexagon"}).issues[0]
        assert issue.code == IssueCode.INVALID_UNION_DISCRIMINATOR
        assert issue.path == ("type",)
        assert "'circle'" in issue.message

    def test_non_object(self, shape):
        assert shape.safe_parse("circle").issues[0].code == IssueCode.INVALID_TYPE

    def test_enum_discriminator(self):
        schema = vld.discriminated_union(
            "kind",
            [
                vld.object_({"kind": vld.enum_(["a", "b"]), "x": vld.number()}),
                vld.object_({"kind": vld.literal("c")}),
            ],
        )
        assert schema.parse({"kind": "b", "x": 1}) == {"kind": "b", "x": 1}

    def test_construction_errors(self):
        with pytest.raises(TypeError):
            vld.discriminated_union("t", [vld.string()])
        with pytest.raises(ValueError):
            vld.discriminated_union("t", [vld.object_({"t": vld.string()})])
        with pytest.raises(ValueError):
            vld.discriminated_union(
                "t",
                [vld.object_({"t": vld.literal("a")}), vld.object_({"t": vld.literal("a")})],
            )


class TestIntersection:
    """Tests for intersections."""

    def test_objects_are_merged(self):
        schema = vld.intersection(
            vld.object_({"a": vld.string()}).passthrough(),
            vld.object_({"b": vld.number()}),
        )
        assert schema.parse({"a": "x", "b": 1}) == {"a": "x", "b": 1}

    def test_nested_merge(self):
        left = vld.object_({"n": vld.object_({"x": vld.number()})})
        right = vld.object_({"n": vld.object_({"y": vld.number()})})
        assert vld.intersection(left, right).parse({"n": {"x": 1, "y": 2}}) == {"n": {"x": 1, "y": 2}}

    def test_both_sides_report(self):
        schema = vld.intersection(vld.object_({"a": vld.string()}), vld.object_({"b": vld.number()}))
        result = schema.safe_parse({})
        assert [issue.path for issue in result.issues] == [("a",), ("b",)]

    def test_primitives_must_agree(self):
        assert vld.intersection(vld.number().min(0), vld.number().max(10)).parse(5) == 5
        schema = vld.intersection(vld.string().trim(), vld.string())
        issue = schema.safe_parse(" a ").issues[0]
        assert issue.code == IssueCode.INVALID_INTERSECTION
        assert issue.message == "Values must be identical for intersection of primitive types"

    def test_category_mismatch(self):
        schema = vld.intersection(vld.any_().transform(lambda v: {"v": v}), vld.any_())
        issue = schema.safe_parse(1).issues[0]
        assert issue.code == IssueCode.INVALID_INTERSECTION
        assert issue.message.startswith("Cannot create intersection of object and primitive types")

    def test_merge_drops_dangerous_keys(self):
        schema = vld.intersection(vld.any_(), vld.record(vld.any_()))
        output = schema.parse({"a": 1, "__proto__": {"polluted": True}})
        assert output == {"a": 1}

    @settings(max_examples=50)
    @given(
        st.one_of(
            st.text(max_size=5),
            st.integers(),
            st.dictionaries(st.text(max_size=3), st.integers(), max_size=3),
            st.none(),
        )
    )
    def test_string_and_object_never_intersect(self, value):
        assert not vld.intersection(vld.string(), vld.object_()).is_valid(value)
