import pytest

from ltree.nodes import EMPTY_OBJECT
from ltree.parser import parse_structured

from tests.infrastructure import arr, obj, s


def test_nested_objects_keep_declaration_order():
    tree = parse_structured('{"b": "2", "a": {"y": "Y", "x": "X"}}')

    assert tree == obj(b=s("2"), a=obj(y=s("Y"), x=s("X")))


def test_scalars_are_stringified_like_javascript():
    tree = parse_structured('{"i": 3, "f": 1.5, "whole": 2.0, "t": true, "f2": false, "n": null}')

    assert tree == obj(i=s("3"), f=s("1.5"), whole=s("2"), t=s("true"), f2=s("false"), n=s("null"))


def test_arrays_keep_scalar_items_only():
    tree = parse_structured('{"list": ["a", 1, ["nested"], {"k": "v"}, "b"]}')

    assert tree == obj(list=arr(s("a"), s("1"), s("b")))


def test_json5_syntax_is_accepted():
    text = """
    {
        // comment
        unquoted: 'single',
        trailing: "comma",
    }
    """

    assert parse_structured(text) == obj(unquoted=s("single"), trailing=s("comma"))


def test_duplicate_keys_keep_first_position_and_last_value():
    tree = parse_structured('{"a": "1", "b": "2", "a": "3"}')

    assert tree == obj(a=s("3"), b=s("2"))


@pytest.mark.parametrize("text", ["", "{", "[1, 2]", '"string"', "42", "not json"])
def test_unusable_text_gives_empty_tree(text):
    assert parse_structured(text) == EMPTY_OBJECT
