import pytest

from fileglob._exceptions import PatternSyntaxError
from fileglob._syntax import Dynamic, Literal, NodeKind, classify_segment, parse


def kinds(pattern):
    return [child.kind for child in parse(pattern).children]


def test_empty_pattern_is_nothing():
    assert parse("").kind is NodeKind.NOTHING


def test_plain_text_is_one_text_node():
    root = parse("file.txt")
    assert root.kind is NodeKind.PATTERN
    assert [(c.kind, c.text) for c in root.children] == [(NodeKind.TEXT, "file.txt")]


def test_escapes_are_merged_into_text():
    root = parse("fo\\*o\\{x\\}")
    assert [(c.kind, c.text) for c in root.children] == [(NodeKind.TEXT, "fo*o{x}")]


def test_single_star_is_any_and_double_is_super():
    assert kinds("a*b") == [NodeKind.TEXT, NodeKind.ANY, NodeKind.TEXT]
    assert kinds("**") == [NodeKind.SUPER]


def test_question_mark_is_single():
    assert kinds("a?") == [NodeKind.TEXT, NodeKind.SINGLE]


def test_character_list():
    node = parse("[abc]").children[0]
    assert node.kind is NodeKind.LIST
    assert node.text == "abc"
    assert not node.negated


@pytest.mark.parametrize("pattern", ["[!bc]", "[^bc]"])
def test_negated_list(pattern):
    node = parse(pattern).children[0]
    assert node.kind is NodeKind.LIST
    assert node.negated
    assert node.text == "bc"


def test_range():
    node = parse("[a-z]").children[0]
    assert node.kind is NodeKind.RANGE
    assert node.text == "az"


def test_escaped_dash_is_a_list_member():
    node = parse("[a\\-z]").children[0]
    assert node.kind is NodeKind.LIST
    assert node.text == "a-z"


def test_mixed_ranges_are_a_list():
    node = parse("[a-zA-Z_]").children[0]
    assert node.kind is NodeKind.LIST


def test_alternation_with_nested_matchers():
    node = parse("{a,[0-9]b}").children[0]
    assert node.kind is NodeKind.ALTERNATION
    assert len(node.children) == 2
    assert [c.kind for c in node.children[1].children] == [NodeKind.RANGE, NodeKind.TEXT]


def test_single_alternative_group_is_still_an_alternation():
    node = parse("{a}").children[0]
    assert node.kind is NodeKind.ALTERNATION
    assert [c.text for c in node.children[0].children] == ["a"]


@pytest.mark.parametrize("pattern, negated", [("[]]", False), ("[!]]", True), ("[]a]", False)])
def test_leading_bracket_is_a_class_member(pattern, negated):
    node = parse(pattern).children[0]
    assert node.kind is NodeKind.LIST
    assert node.negated is negated
    assert node.text.startswith("]")


def test_list_keeps_ranges_apart_from_members():
    node = parse("[a-zA-Z_]").children[0]
    assert node.text == "_"
    assert node.ranges == [("a", "z"), ("A", "Z")]


def test_comma_and_closing_brace_outside_group_are_text():
    assert kinds("a,b}") == [NodeKind.TEXT]


@pytest.mark.parametrize(
    "pattern, reason",
    [
        ("[*", "unexpected end of input"),
        ("{a,b", "unexpected end of input"),
        ("a\\", "unexpected end of input after escape"),
        ("[]", "unexpected end of input"),
        ("[!]", "unexpected end of input"),
        ("[a/b]", "separator in character class"),
        ("[z-a]", "invalid character range z-a"),
    ],
)
def test_malformed_patterns_raise(pattern, reason):
    with pytest.raises(PatternSyntaxError) as exc_info:
        parse(pattern)
    assert exc_info.value.reason == reason
    assert exc_info.value.pattern == pattern


def test_syntax_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse("[")


@pytest.mark.parametrize(
    "segment, expected",
    [
        ("", Literal("")),
        ("foo", Literal("foo")),
        ("fo\\*o", Literal("fo*o")),
        ("\\{foo\\}", Literal("{foo}")),
        ("b*ar", Dynamic("b*ar")),
        ("{b,p}az", Dynamic("{b,p}az")),
        ("?", Dynamic("?")),
        ("[ab]", Dynamic("[ab]")),
        ("**", Dynamic("**")),
    ],
)
def test_classify_segment(segment, expected):
    assert classify_segment(segment) == expected
