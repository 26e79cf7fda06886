"""核心模块 - 词法、调用改写、调度场解析和RPN求值"""
from .errors import (
    CalcError, LexError, ParseError, UnbalancedParensError, MisplacedSeparatorError,
    EvalError, InvalidAssignmentError, UndefinedVariableError, MissingArgumentError,
    StackUnderflowError, DivisionByZeroError, InvalidExpressionError
)
from .token_system import TokenType, Token, Lexer, tokenize
from .operators import Op, OperatorInfo, OPERATOR_INFO, Operators, UNARY_FUNCTIONS, BINARY_FUNCTIONS
from .call_normalizer import normalize_calls
from .parser import NodeKind, NameKind, Node, ShuntingYardParser, to_rpn
from .rpn_evaluator import RPNEvaluator
from .environment import Environment
from .calculator import Calculator, compile_line, evaluate

__all__ = [
    'CalcError', 'LexError', 'ParseError', 'UnbalancedParensError', 'MisplacedSeparatorError',
    'EvalError', 'InvalidAssignmentError', 'UndefinedVariableError', 'MissingArgumentError',
    'StackUnderflowError', 'DivisionByZeroError', 'InvalidExpressionError',
    'TokenType', 'Token', 'Lexer', 'tokenize',
    'Op', 'OperatorInfo', 'OPERATOR_INFO', 'Operators', 'UNARY_FUNCTIONS', 'BINARY_FUNCTIONS',
    'normalize_calls',
    'NodeKind', 'NameKind', 'Node', 'ShuntingYardParser', 'to_rpn',
    'RPNEvaluator', 'Environment', 'Calculator', 'compile_line', 'evaluate'
]
