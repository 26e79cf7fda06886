import pytest

from core import (
    InvalidAssignmentError, MisplacedSeparatorError, NameKind, NodeKind, Op,
    UnbalancedParensError, to_rpn
)
from core.parser import format_program, resolve_name


def rpn(text):
    return format_program(to_rpn(text))


@pytest.mark.parametrize("text, expected", [
    ("1 + 2 * 3", "1.0 2.0 3.0 * +"),
    ("(1 + 2) * 3", "1.0 2.0 + 3.0 *"),
    ("8 - 3 - 2", "8.0 3.0 - 2.0 -"),
    ("8 / 4 / 2", "8.0 4.0 / 2.0 /"),
    ("2 ^ 3 ^ 2", "2.0 3.0 2.0 ^ ^"),
    ("2 * 3 ^ 2", "2.0 3.0 2.0 ^ *"),
    ("1 - 2 + 3", "1.0 2.0 - 3.0 +"),
])
def test_precedence_and_associativity(text, expected):
    assert rpn(text) == expected


@pytest.mark.parametrize("text, expected", [
    ("-3 + 2", "3.0 u- 2.0 +"),
    ("3 - 2", "3.0 2.0 -"),
    ("2 ^ -1", "2.0 1.0 u- ^"),
    ("-2 ^ 2", "2.0 u- 2.0 ^"),
    ("--3", "3.0 u- u-"),
    ("(-1)", "1.0 u-"),
    ("2 * -x", "2.0 x u- *"),
])
def test_unary_minus(text, expected):
    assert rpn(text) == expected


def test_operator_nodes_carry_arity():
    nodes = to_rpn("-1 - 2")
    ops = [n for n in nodes if n.kind is NodeKind.OPERATOR]
    assert [(n.op, n.arity) for n in ops] == [(Op.NEG, 1), (Op.SUB, 2)]


def test_assignment_node_follows_target():
    nodes = to_rpn("x = 1 + 2")
    assert [n.kind for n in nodes] == [
        NodeKind.NAME, NodeKind.ASSIGN, NodeKind.NUMBER, NodeKind.NUMBER, NodeKind.OPERATOR,
    ]
    assert nodes[0].text == "x"


def test_assignment_rhs_may_start_with_unary_minus():
    assert rpn("y = -2") == "y = 2.0 u-"


def test_function_names_are_resolved_at_parse_time():
    nodes = to_rpn("((1)) sqrt")
    assert nodes[-1].kind is NodeKind.NAME
    assert nodes[-1].name_kind is NameKind.UNARY_FUNCTION

    assert resolve_name("pow") is NameKind.BINARY_FUNCTION
    assert resolve_name("foo") is NameKind.VARIABLE


def test_function_name_as_assignment_target():
    nodes = to_rpn("sin = 5")
    assert nodes[0].text == "sin"
    assert nodes[1].kind is NodeKind.ASSIGN


def test_raw_call_syntax():
    assert rpn("sqrt(1 + 3)") == "1.0 3.0 + sqrt"
    assert rpn("pow(2, 8)") == "2.0 , 8.0 pow"
    assert rpn("pow(1 + 1, 3) * 2") == "1.0 1.0 + , 3.0 pow 2.0 *"


def test_normalized_call_form():
    assert rpn("((2), (8)) pow") == "2.0 , 8.0 pow"


@pytest.mark.parametrize("text", ["(1 + 2", "1 + 2)", ")(", "((1)", "sqrt(4", "x = 1 + 2)", "x = (1))"])
def test_unbalanced_parens(text):
    with pytest.raises(UnbalancedParensError):
        to_rpn(text)


@pytest.mark.parametrize("text", ["1, 2", "1 + 2, 3", "x = 1, 2"])
def test_misplaced_separator(text):
    with pytest.raises(MisplacedSeparatorError):
        to_rpn(text)


def test_assignment_inside_group_is_rejected():
    with pytest.raises(InvalidAssignmentError):
        to_rpn("(x = 1)")


def test_empty_input_gives_empty_program():
    assert to_rpn("") == []


@pytest.mark.parametrize("text", ["-x = 5", "--x = 5", "x + 1 = 2", "1 = 2", "x y = 3"])
def test_assignment_target_must_be_a_single_name(text):
    with pytest.raises(InvalidAssignmentError):
        to_rpn(text)
