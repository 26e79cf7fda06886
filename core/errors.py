"""core/errors.py - 计算管线的错误类型"""


class CalcError(Exception):
    """所有计算错误的基类，message 为可直接展示给用户的说明"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class LexError(CalcError):
    """扫描时遇到无法识别的字符"""

    def __init__(self, char, pos):
        super().__init__(f"Invalid symbol {char!r} at position {pos}")
        self.char = char
        self.pos = pos


class ParseError(CalcError):
    pass


class UnbalancedParensError(ParseError):
    def __init__(self, message="Unbalanced parentheses"):
        super().__init__(message)


class MisplacedSeparatorError(ParseError):
    def __init__(self, message="Comma outside of a function call or group"):
        super().__init__(message)


class EvalError(CalcError):
    pass


class InvalidAssignmentError(EvalError):
    def __init__(self, message="Invalid assignment. Use: name = expression"):
        super().__init__(message)


class UndefinedVariableError(EvalError):
    def __init__(self, name):
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class MissingArgumentError(EvalError):
    def __init__(self, name, expected):
        plural = "argument" if expected == 1 else "arguments"
        super().__init__(f"Missing {plural} for function {name} (expects {expected})")
        self.name = name
        self.expected = expected


class StackUnderflowError(EvalError):
    def __init__(self, symbol):
        super().__init__(f"Insufficient operands for operator {symbol}")
        self.symbol = symbol


class DivisionByZeroError(EvalError):
    def __init__(self, message="Division by zero"):
        super().__init__(message)


class InvalidExpressionError(EvalError):
    def __init__(self, message="Invalid expression"):
        super().__init__(message)
