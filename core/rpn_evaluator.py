"""RPN表达式求值器 - 调用统一的Operators类"""
import logging

import numpy as np

from core.errors import (
    InvalidAssignmentError, InvalidExpressionError, MissingArgumentError,
    StackUnderflowError, UndefinedVariableError
)
from core.operators import BINARY_FUNCTIONS, UNARY_FUNCTIONS, Operators
from core.parser import NameKind, NodeKind, format_program

logger = logging.getLogger(__name__)


class RPNEvaluator:
    """评估后缀节点序列的值"""

    @staticmethod
    def evaluate(nodes, env):
        """
        评估后缀程序，赋值形式会写入环境
        Args:
            nodes: 解析器输出的节点序列
            env: Environment，变量在此读取，赋值成功后写入
        Returns:
            结果（float）；赋值时返回被赋的值
        """
        assign_positions = [i for i, node in enumerate(nodes) if node.kind is NodeKind.ASSIGN]
        if not assign_positions:
            return RPNEvaluator.run(nodes, env)

        # 唯一合法的形状：[NAME, ASSIGN, 右侧...]
        if (assign_positions != [1] or len(nodes) < 3
                or nodes[0].kind is not NodeKind.NAME):
            logger.debug(f"Rejected assignment program: {format_program(nodes)}")
            raise InvalidAssignmentError()

        name = nodes[0].text
        value = RPNEvaluator.run(nodes[2:], env)
        # 右侧完整求值成功后才修改环境
        env.set(name, value)
        logger.debug(f"Assigned {name} = {value!r}")
        return value

    @staticmethod
    def run(nodes, env):
        """不含赋值的普通后缀程序求值"""
        stack = []

        with np.errstate(all='ignore'):
            for node in nodes:
                kind = node.kind

                if kind is NodeKind.NUMBER:
                    stack.append(node.value)

                elif kind is NodeKind.NAME:
                    RPNEvaluator._apply_name(node, stack, env)

                elif kind is NodeKind.OPERATOR:
                    if len(stack) < node.arity:
                        raise StackUnderflowError(node.op.value)
                    Operators.apply(node.op, stack)

                elif kind is NodeKind.ARG_SEPARATOR:
                    # 参数分隔符在求值时不起作用
                    continue

                else:
                    raise InvalidExpressionError("Assignment is only allowed as: name = expression")

        if len(stack) != 1:
            logger.debug(f"Stack has {len(stack)} elements after evaluation, expected 1")
            raise InvalidExpressionError()
        return stack[0]

    @staticmethod
    def _apply_name(node, stack, env):
        name = node.text

        # ================== 一元函数 ==================
        if node.name_kind is NameKind.UNARY_FUNCTION:
            if not stack:
                raise MissingArgumentError(name, 1)
            operand = stack.pop()
            stack.append(Operators.as_float(UNARY_FUNCTIONS[name](operand)))

        # ================== 二元函数 ==================
        elif node.name_kind is NameKind.BINARY_FUNCTION:
            if len(stack) < 2:
                raise MissingArgumentError(name, 2)
            right = stack.pop()
            left = stack.pop()
            stack.append(Operators.as_float(BINARY_FUNCTIONS[name](left, right)))

        # ================== 变量 ==================
        else:
            if name not in env:
                raise UndefinedVariableError(name)
            stack.append(env.get(name))
