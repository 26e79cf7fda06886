import math

import pytest

from core import (
    DivisionByZeroError, InvalidAssignmentError, InvalidExpressionError,
    MissingArgumentError, Node, Op, RPNEvaluator, StackUnderflowError,
    UndefinedVariableError
)

num = Node.number
name = Node.name
op = Node.operator


def test_binary_operator_pops_right_operand_first(env):
    assert RPNEvaluator.evaluate([num(2), num(3), op(Op.SUB)], env) == -1.0
    assert RPNEvaluator.evaluate([num(2), num(3), op(Op.POW)], env) == 8.0
    assert RPNEvaluator.evaluate([num(3), num(2), op(Op.DIV)], env) == 1.5


def test_unary_minus(env):
    assert RPNEvaluator.evaluate([num(4), op(Op.NEG)], env) == -4.0


def test_result_is_builtin_float(env):
    result = RPNEvaluator.evaluate([num(1), num(2), op(Op.ADD)], env)
    assert type(result) is float


def test_variables_are_read_from_environment(env):
    env.set("x", 3.0)
    assert RPNEvaluator.evaluate([name("x"), name("x"), op(Op.MUL)], env) == 9.0
    assert RPNEvaluator.evaluate([name("pi")], env) == math.pi


def test_functions(env):
    assert RPNEvaluator.evaluate([num(16), name("sqrt")], env) == 4.0
    assert RPNEvaluator.evaluate([num(2), num(10), name("pow")], env) == 1024.0


def test_argument_separator_is_inert(env):
    program = [num(2), Node.separator(), num(8), name("pow")]
    assert RPNEvaluator.evaluate(program, env) == 256.0


def test_function_table_shadows_variable(env):
    env.set("sqrt", 5.0)
    assert RPNEvaluator.evaluate([num(9), name("sqrt")], env) == 3.0


@pytest.mark.parametrize("program", [
    [op(Op.ADD)],
    [num(1), op(Op.ADD)],
    [op(Op.NEG)],
])
def test_stack_underflow(env, program):
    with pytest.raises(StackUnderflowError):
        RPNEvaluator.evaluate(program, env)


@pytest.mark.parametrize("program, expected", [
    ([name("sqrt")], 1),
    ([name("pow")], 2),
    ([num(1), name("pow")], 2),
])
def test_missing_argument(env, program, expected):
    with pytest.raises(MissingArgumentError) as info:
        RPNEvaluator.evaluate(program, env)
    assert info.value.expected == expected


def test_undefined_variable(env):
    with pytest.raises(UndefinedVariableError) as info:
        RPNEvaluator.evaluate([name("nope")], env)
    assert info.value.name == "nope"


@pytest.mark.parametrize("divisor", [0.0, -0.0])
def test_division_by_zero(env, divisor):
    with pytest.raises(DivisionByZeroError):
        RPNEvaluator.evaluate([num(1), num(divisor), op(Op.DIV)], env)


@pytest.mark.parametrize("program", [
    [],
    [num(1), num(2)],
    [Node.separator()],
])
def test_invalid_expression(env, program):
    with pytest.raises(InvalidExpressionError):
        RPNEvaluator.evaluate(program, env)


def test_ieee_results_instead_of_exceptions(env):
    assert RPNEvaluator.evaluate([num(10), num(400), op(Op.POW)], env) == math.inf
    assert math.isnan(RPNEvaluator.evaluate([num(-1), num(0.5), op(Op.POW)], env))
    assert math.isnan(RPNEvaluator.evaluate([num(-1), name("sqrt")], env))
    assert RPNEvaluator.evaluate([num(0), name("ln")], env) == -math.inf


def test_assignment_stores_and_returns_value(env):
    program = [name("x"), Node.assign(), num(2), num(3), op(Op.MUL)]
    assert RPNEvaluator.evaluate(program, env) == 6.0
    assert env.get("x") == 6.0


def test_assignment_overwrites(env):
    RPNEvaluator.evaluate([name("x"), Node.assign(), num(1)], env)
    RPNEvaluator.evaluate([name("x"), Node.assign(), num(2)], env)
    assert env.get("x") == 2.0


@pytest.mark.parametrize("program", [
    [num(1), Node.assign(), num(2)],
    [name("x"), Node.assign()],
    [name("x"), num(1), Node.assign()],
    [name("x"), Node.assign(), name("y"), Node.assign(), num(3)],
    [Node.assign(), name("x"), num(3)],
])
def test_invalid_assignment_shapes(env, program):
    with pytest.raises(InvalidAssignmentError):
        RPNEvaluator.evaluate(program, env)
    assert "x" not in env and "y" not in env


def test_failed_assignment_leaves_environment_untouched(env):
    env.set("x", 7.0)
    with pytest.raises(DivisionByZeroError):
        RPNEvaluator.evaluate([name("x"), Node.assign(), num(1), num(0), op(Op.DIV)], env)
    assert env.get("x") == 7.0


def test_stray_assignment_node_in_plain_program(env):
    with pytest.raises(InvalidExpressionError):
        RPNEvaluator.run([num(1), Node.assign()], env)
