import pytest

from ltree.errors import CodecError
from ltree.nodes import node_from_dict, node_to_dict, object_from_dict

from tests.infrastructure import arr, block, fn, obj, param, s, tpl, var


def test_tree_survives_dict_round_trip():
    tree = obj(
        title=s("Title"),
        nav=obj(home=tpl("Home ${x}"), brand=var("BRAND")),
        items=arr(s("a"), var("B")),
        plural=fn(block("if (n === 1) return 'one';\nreturn 'many';"), param("n", "number")),
    )

    assert object_from_dict(node_to_dict(tree)) == tree


def test_entries_are_flattened_with_their_key():
    data = node_to_dict(obj(a=s("x")))

    assert data == {"type": "object", "entries": [{"key": "a", "type": "string", "value": "x"}]}


def test_function_dict_shape():
    data = node_to_dict(fn(tpl("Hi ${p}"), param("p", "string")))

    assert data == {
        "type": "function",
        "params": [{"name": "p", "type": "string"}],
        "body": {"type": "string_template", "value": "Hi ${p}"},
    }


@pytest.mark.parametrize("data, message", [
    ({"type": "bogus"}, "unknown node type"),
    ({"type": "string"}, "'value' must be a string"),
    ({"type": "array", "items": [{"type": "object", "entries": []}]}, "arrays hold only"),
    ({"type": "object", "entries": [{"key": "a", "type": "string", "value": ""}, {"key": "a", "type": "string", "value": ""}]}, "duplicate key"),
    ({"type": "block", "text": ""}, "only allowed inside functions"),
    ({"type": "function", "params": [], "body": {"type": "object", "entries": []}}, "unsupported function body"),
    ([], "expected a mapping"),
])
def test_invalid_documents_raise_codec_error(data, message):
    with pytest.raises(CodecError, match=message):
        node_from_dict(data)


def test_object_from_dict_rejects_non_object_root():
    with pytest.raises(CodecError, match="expected an object tree"):
        object_from_dict({"type": "string", "value": "x"})


def test_codec_error_is_a_value_error():
    with pytest.raises(ValueError):
        node_from_dict({"type": "bogus"})
