"""core/operators.py"""
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple
import logging

import numpy as np

from core.errors import DivisionByZeroError

logger = logging.getLogger(__name__)


class Op(Enum):
    """运算符的封闭枚举；值为显示用的符号"""
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    NEG = "u-"  # 一元负号，与二元减号区分


class OperatorInfo(NamedTuple):
    precedence: int
    right_assoc: bool
    arity: int


OPERATOR_INFO = MappingProxyType({
    Op.ADD: OperatorInfo(1, False, 2),
    Op.SUB: OperatorInfo(1, False, 2),
    Op.MUL: OperatorInfo(2, False, 2),
    Op.DIV: OperatorInfo(2, False, 2),
    Op.POW: OperatorInfo(3, True, 2),
    Op.NEG: OperatorInfo(4, True, 1),
})


class Operators:
    """所有运算的静态方法集合，按 IEEE-754 双精度语义计算"""

    @staticmethod
    def as_float(value):
        """numpy 标量转回内置 float"""
        return float(value)

    # 二元操作符========================================
    @staticmethod
    def add(left, right):
        return np.float64(left) + np.float64(right)

    @staticmethod
    def sub(left, right):
        return np.float64(left) - np.float64(right)

    @staticmethod
    def mul(left, right):
        return np.float64(left) * np.float64(right)

    @staticmethod
    def div(left, right):
        """除法；右操作数恰好为 0.0（含 -0.0）时报错"""
        if right == 0.0:
            raise DivisionByZeroError()
        return np.float64(left) / np.float64(right)

    @staticmethod
    def pow(left, right):
        """乘方：溢出得到 inf，负数的非整数次幂得到 nan，而不是抛出异常"""
        with np.errstate(all='ignore'):
            return np.power(np.float64(left), np.float64(right))

    # 一元操作符====================
    @staticmethod
    def neg(operand):
        return -np.float64(operand)

    @staticmethod
    def round_half_away(operand):
        """四舍五入，.5 远离零（与 numpy 的银行家舍入不同）"""
        x = np.float64(operand)
        if not np.isfinite(x):
            return x
        # 先截断再比较小数部分，避免 |x| + 0.5 的舍入误差
        t = np.trunc(x)
        if np.abs(x - t) >= 0.5:
            return t + np.copysign(1.0, x)
        return t

    @staticmethod
    def apply(op, stack):
        """对栈顶的 arity 个操作数应用 op，结果替换它们（调用方保证操作数足够）"""
        arity = OPERATOR_INFO[op].arity
        with np.errstate(all='ignore'):
            if arity == 1:
                result = OPERATOR_FUNCTIONS[op](stack[-1])
            else:
                result = OPERATOR_FUNCTIONS[op](stack[-2], stack[-1])
        stack[-arity:] = [Operators.as_float(result)]
        return stack[-1]


OPERATOR_FUNCTIONS = MappingProxyType({
    Op.ADD: Operators.add,
    Op.SUB: Operators.sub,
    Op.MUL: Operators.mul,
    Op.DIV: Operators.div,
    Op.POW: Operators.pow,
    Op.NEG: Operators.neg,
})


def _unary(ufunc):
    def apply(operand):
        with np.errstate(all='ignore'):
            return ufunc(np.float64(operand))
    apply.__name__ = getattr(ufunc, '__name__', 'unary')
    return apply


# 一元函数表：名称 -> (double -> double)
UNARY_FUNCTIONS = MappingProxyType({
    'sin': _unary(np.sin),
    'cos': _unary(np.cos),
    'tan': _unary(np.tan),
    'asin': _unary(np.arcsin),
    'acos': _unary(np.arccos),
    'atan': _unary(np.arctan),
    'sqrt': _unary(np.sqrt),
    'cbrt': _unary(np.cbrt),
    'exp': _unary(np.exp),
    'abs': _unary(np.abs),
    'floor': _unary(np.floor),
    'ceil': _unary(np.ceil),
    'round': Operators.round_half_away,
    'ln': _unary(np.log),
    'log': _unary(np.log),
    'log10': _unary(np.log10),
})

# 二元函数表：名称 -> (double, double -> double)
BINARY_FUNCTIONS = MappingProxyType({
    'pow': Operators.pow,
})
