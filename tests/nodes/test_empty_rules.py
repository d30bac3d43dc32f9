import pytest

from ltree.nodes import FunctionNode, empty_node, is_empty_node

from tests.infrastructure import arr, block, fn, obj, param, s, tpl, var


class TestEmptyNode:

    def test_strings_are_cleared_keeping_their_kind(self):
        assert empty_node(s("Hello")) == s("")
        assert empty_node(tpl("Hi ${name}")) == tpl("")

    def test_variables_are_left_untouched(self):
        assert empty_node(var("BRAND")) == var("BRAND")

    def test_array_keeps_length_and_variables(self):
        assert empty_node(arr(s("a"), var("X"), tpl("${y}"))) == arr(s(""), var("X"), tpl(""))

    def test_object_loses_all_entries(self):
        assert empty_node(obj(a=s("1"), b=obj(c=s("2")))) == obj()

    def test_function_keeps_params_and_body_kind(self):
        params = (param("n", "number"), param("unit"))

        assert empty_node(fn(tpl("${n} ${unit}"), *params)) == fn(tpl(""), *params)
        assert empty_node(fn(block("return 1;"), *params)) == fn(block(""), *params)
        assert empty_node(fn(arr(s("a"), var("B")))) == fn(arr(s(""), var("B")))
        assert empty_node(fn(var("X"))) == fn(var("X"))

    def test_unknown_variant_raises(self):
        with pytest.raises(TypeError):
            empty_node(object())


class TestIsEmptyNode:

    def test_strings(self):
        assert is_empty_node(s(""))
        assert not is_empty_node(s(" "))
        assert is_empty_node(tpl(""))

    def test_blank_string_counts_as_empty_when_returned_by_function(self):
        assert is_empty_node(s("  \n"), fn_return=True)
        assert is_empty_node(fn(tpl("   ")))
        assert not is_empty_node(fn(tpl(" x ")))

    def test_array_ignores_variables(self):
        assert is_empty_node(arr(var("X"), s("")))
        assert is_empty_node(arr())
        assert not is_empty_node(arr(var("X"), s("a")))

    def test_object_is_empty_when_all_children_are(self):
        assert is_empty_node(obj())
        assert is_empty_node(obj(a=s(""), b=obj(c=arr(s("")))))
        assert not is_empty_node(obj(a=s(""), b=obj(c=s("x"))))

    def test_function_block_body(self):
        assert is_empty_node(fn(block("  \n ")))
        assert not is_empty_node(fn(block("return 1;")))

    def test_function_array_body(self):
        assert is_empty_node(FunctionNode((), arr(s(""))))
        assert not is_empty_node(FunctionNode((), arr(s("a"))))

    def test_variable(self):
        assert not is_empty_node(var("X"))
        assert is_empty_node(var(""))
