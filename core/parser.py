"""core/parser.py - 调度场算法：Token流 -> 后缀(RPN)节点序列"""
from enum import Enum
from typing import NamedTuple, Optional
import logging

from core.errors import (
    InvalidAssignmentError, MisplacedSeparatorError, UnbalancedParensError
)
from core.operators import BINARY_FUNCTIONS, OPERATOR_INFO, UNARY_FUNCTIONS, Op
from core.token_system import Lexer, OPERATOR_TOKENS, TokenStream, TokenType

logger = logging.getLogger(__name__)


class NodeKind(Enum):
    NUMBER = "number"
    NAME = "name"
    OPERATOR = "operator"
    ARG_SEPARATOR = "arg_separator"
    ASSIGN = "assign"


class NameKind(Enum):
    """标识符在解析时就确定的种类"""
    VARIABLE = "variable"
    UNARY_FUNCTION = "unary_function"
    BINARY_FUNCTION = "binary_function"


def resolve_name(name):
    # 函数表优先于变量
    if name in UNARY_FUNCTIONS:
        return NameKind.UNARY_FUNCTION
    if name in BINARY_FUNCTIONS:
        return NameKind.BINARY_FUNCTION
    return NameKind.VARIABLE


class Node(NamedTuple):
    """后缀程序中的一条指令"""
    kind: NodeKind
    value: float = 0.0
    text: str = ""
    op: Optional[Op] = None
    arity: int = 0
    name_kind: Optional[NameKind] = None

    @classmethod
    def number(cls, value):
        return cls(NodeKind.NUMBER, value=float(value))

    @classmethod
    def name(cls, text, name_kind=None):
        return cls(NodeKind.NAME, text=text, name_kind=name_kind or resolve_name(text))

    @classmethod
    def operator(cls, op):
        return cls(NodeKind.OPERATOR, op=op, arity=OPERATOR_INFO[op].arity)

    @classmethod
    def separator(cls):
        return cls(NodeKind.ARG_SEPARATOR)

    @classmethod
    def assign(cls):
        return cls(NodeKind.ASSIGN)

    def __str__(self):
        if self.kind is NodeKind.NUMBER:
            return repr(self.value)
        if self.kind is NodeKind.NAME:
            return self.text
        if self.kind is NodeKind.OPERATOR:
            return self.op.value
        if self.kind is NodeKind.ARG_SEPARATOR:
            return ","
        return "="


def format_program(nodes):
    """后缀程序的可读形式，用于日志"""
    return ' '.join(str(node) for node in nodes)


class _StackKind(Enum):
    LPAREN = "("
    FUNCTION = "function"
    OPERATOR = "operator"
    ASSIGN = "="


class _StackEntry(NamedTuple):
    kind: _StackKind
    op: Optional[Op] = None
    name: str = ""


_BINARY_OPS = {
    TokenType.PLUS: Op.ADD,
    TokenType.MINUS: Op.SUB,
    TokenType.STAR: Op.MUL,
    TokenType.SLASH: Op.DIV,
    TokenType.CARET: Op.POW,
}


class ShuntingYardParser:
    """
    运算符优先级解析器
    输出列表 + 运算符栈（左括号、函数标记、运算符、赋值标记）
    """

    def __init__(self, lexer):
        self.tokens = TokenStream(lexer)
        self.output = []
        self.stack = []
        # 下一个Token是否应为操作数；为真时 '-' 是一元负号
        self.expect_operand = True

    def parse(self):
        while True:
            token = self.tokens.next()
            t = token.type
            if t is TokenType.END:
                break

            if t is TokenType.NUMBER:
                self.output.append(Node.number(token.value))
                self.expect_operand = False
            elif t is TokenType.IDENT:
                self._push_name(token.text)
            elif t is TokenType.LPAREN:
                self.stack.append(_StackEntry(_StackKind.LPAREN))
                self.expect_operand = True
            elif t is TokenType.RPAREN:
                self._close_group()
                self.expect_operand = False
            elif t is TokenType.COMMA:
                self._separate_argument()
                self.expect_operand = True
            elif t is TokenType.ASSIGN:
                self._start_assignment()
            elif t in OPERATOR_TOKENS:
                self._push_operator(token.type)
                self.expect_operand = True

        self._drain()
        logger.debug(f"RPN program: {format_program(self.output)}")
        return self.output

    def _push_name(self, name):
        name_kind = resolve_name(name)
        if name_kind is not NameKind.VARIABLE and self.tokens.peek().type is TokenType.LPAREN:
            # 未经改写的调用语法：函数名等到右括号时再输出
            self.stack.append(_StackEntry(_StackKind.FUNCTION, name=name))
            self.expect_operand = True
            return
        self.output.append(Node.name(name, name_kind))
        self.expect_operand = False

    def _push_operator(self, token_type):
        if token_type is TokenType.MINUS and self.expect_operand:
            op = Op.NEG
        else:
            op = _BINARY_OPS[token_type]
        info = OPERATOR_INFO[op]

        while self.stack and self.stack[-1].kind is _StackKind.OPERATOR:
            top = OPERATOR_INFO[self.stack[-1].op]
            if info.right_assoc:
                should_pop = info.precedence < top.precedence
            else:
                should_pop = info.precedence <= top.precedence
            if not should_pop:
                break
            self.output.append(Node.operator(self.stack.pop().op))
        self.stack.append(_StackEntry(_StackKind.OPERATOR, op=op))

    def _start_assignment(self):
        """'=' 左侧只能是单个名字，且栈必须为空"""
        if (len(self.output) != 1 or self.output[0].kind is not NodeKind.NAME
                or self.stack):
            raise InvalidAssignmentError()
        # 赋值节点立即输出，栈上的标记只作为屏障
        self.output.append(Node.assign())
        self.stack.append(_StackEntry(_StackKind.ASSIGN))
        self.expect_operand = True

    def _pop_until_lparen(self, on_assign):
        """弹出运算符直到左括号（左括号保留在栈上）；返回是否找到左括号"""
        while self.stack:
            top = self.stack[-1]
            if top.kind is _StackKind.LPAREN:
                return True
            if top.kind is _StackKind.ASSIGN:
                raise on_assign()
            self._emit(self.stack.pop())
        return False

    def _close_group(self):
        # 赋值标记总在栈底，遇到它说明没有可匹配的左括号
        if not self._pop_until_lparen(on_assign=UnbalancedParensError):
            raise UnbalancedParensError()
        self.stack.pop()
        if self.stack and self.stack[-1].kind is _StackKind.FUNCTION:
            self._emit(self.stack.pop())

    def _separate_argument(self):
        if not self._pop_until_lparen(on_assign=MisplacedSeparatorError):
            raise MisplacedSeparatorError()
        self.output.append(Node.separator())

    def _emit(self, entry):
        if entry.kind is _StackKind.OPERATOR:
            self.output.append(Node.operator(entry.op))
        elif entry.kind is _StackKind.FUNCTION:
            self.output.append(Node.name(entry.name))

    def _drain(self):
        while self.stack:
            entry = self.stack.pop()
            if entry.kind is _StackKind.LPAREN:
                raise UnbalancedParensError()
            # 赋值标记在此丢弃
            self._emit(entry)


def to_rpn(text):
    """把（已改写调用的）文本解析为后缀节点序列"""
    return ShuntingYardParser(Lexer(text)).parse()
