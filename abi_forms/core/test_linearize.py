import pytest

from abi_forms.core.linearize import (
    display_signature,
    linearize,
    linearize_components,
)
from abi_forms.core.signature.function_signature import parse_signature
from abi_forms.core.signature.type_signature import parse_type_signature
from abi_forms.core.types import Field, LinearizedParameter


def test_flat_parameters():
    fn = parse_signature("function transfer(address to, uint256 amount)")
    assert linearize(fn) == [
        LinearizedParameter("address", "to"),
        LinearizedParameter("uint256", "amount"),
    ]


def test_tuple_becomes_single_expanded_row():
    fn = parse_signature(
        "function swap((address tokenIn, (uint24 fee, bool flag) opts) p, uint256 x)"
    )
    rows = linearize(fn)
    assert len(rows) == 2
    assert rows[0].type == "(address tokenIn, (uint24 fee, bool flag) opts)"
    assert rows[0].name == "p"
    assert rows[0].depth == 0 and rows[0].path == ""
    assert parse_type_signature(rows[0].type) == [
        Field("address", "tokenIn"),
        Field("(uint24 fee, bool flag)", "opts"),
    ]


def test_tuple_array_keeps_suffix():
    fn = parse_signature("function f((uint256 a, address b)[2][] grid)")
    assert linearize(fn)[0].type == "(uint256 a, address b)[2][]"


def test_unnamed_parameters_get_positional_names():
    fn = parse_signature("function f(uint256, address, (bool) )")
    assert [p.name for p in linearize(fn)] == ["param0", "param1", "param2"]


def test_deterministic():
    fn = parse_signature("function f((uint256 a) s, bytes32 h)")
    assert linearize(fn) == linearize(fn)


def test_linearize_components():
    parent = LinearizedParameter("(uint256 a, (bool b) inner, address)[]", "items")
    children = linearize_components(parent)
    assert children == [
        LinearizedParameter("uint256", "a", depth=1, path="items."),
        LinearizedParameter("(bool b)", "inner", depth=1, path="items."),
        LinearizedParameter("address", "param2", depth=1, path="items."),
    ]
    grandchildren = linearize_components(children[1])
    assert grandchildren == [
        LinearizedParameter("bool", "b", depth=2, path="items.inner."),
    ]


def test_linearize_components_of_scalar_is_empty():
    assert linearize_components(LinearizedParameter("uint256", "x")) == []


@pytest.mark.parametrize(
    "signature,expected",
    [
        (
            "function transfer(address to, uint256 amount)",
            "transfer(address to, uint256 amount)",
        ),
        (
            "function f((uint256 a, bool) s, uint x)",
            "f((uint256 a, bool) s, uint256 x)",
        ),
        ("function g()", "g()"),
    ],
)
def test_display_signature(signature, expected):
    assert display_signature(parse_signature(signature)) == expected


def test_synthetic_names_do_not_collide_with_declared_names():
    fn = parse_signature("function f(uint256 param1, uint256)")
    assert [p.name for p in linearize(fn)] == ["param1", "param1_1"]


def test_component_names_do_not_collide():
    parent = LinearizedParameter("(uint256 param1, bool)", "s")
    assert [c.name for c in linearize_components(parent)] == ["param1", "param1_1"]
