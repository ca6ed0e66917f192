"""Tests for error formatting helpers."""

import vld
from vld.formatting import format_path


def make_error():
    schema = vld.object_(
        {
            "name": vld.string().min(2),
            "tags": vld.array(vld.string()),
            "address": vld.object_({"zip": vld.string().length(5)}),
        }
    ).super_refine(lambda value, ctx: ctx.add_issue("Form is incomplete"))
    result = schema.safe_parse({"name": "A", "tags": ["ok", 1], "address": {"zip": "1"}})
    return result.error


class TestTreeify:
    def test_tree_shape(self):
        tree = vld.treeify_error(make_error())
        assert tree["errors"] == []
        assert tree["properties"]["name"]["errors"] == ["String must be at least 2 characters"]
        assert tree["properties"]["tags"]["items"][0] is None
        assert tree["properties"]["tags"]["items"][1]["errors"] == ["Expected string, received number"]
        assert tree["properties"]["address"]["properties"]["zip"]["errors"] == [
            "String must be exactly 5 characters"
        ]

    def test_root_issues(self):
        error = vld.string().safe_parse(1).error
        assert vld.treeify_error(error) == {"errors": ["Expected string, received number"]}


class TestFlatten:
    def test_groups_by_top_level_field(self):
        flat = vld.flatten_error(make_error())
        assert flat["form_errors"] == []
        assert set(flat["field_errors"]) == {"name", "tags", "address"}

    def test_root_issues_are_form_errors(self):
        error = vld.object_({}).super_refine(lambda v, ctx: ctx.add_issue("Bad form")).safe_parse({}).error
        assert vld.flatten_error(error) == {"form_errors": ["Bad form"], "field_errors": {}}


class TestPrettify:
    def test_lines(self):
        text = vld.prettify_error(make_error())
        assert "✖ String must be at least 2 characters\n  → at name" in text
        assert "→ at tags[1]" in text
        assert "→ at address.zip" in text

    def test_root_issue_has_no_path_line(self):
        assert vld.prettify_error(vld.number().safe_parse("x").error) == "✖ Expected number, received string"


class TestFormatPath:
    def test_paths(self):
        assert format_path(()) == ""
        assert format_path(("a", "b", 0, "c")) == "a.b[0].c"
        assert format_path((0, "a")) == "[0].a"
