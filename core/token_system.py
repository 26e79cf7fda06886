"""core/token_system.py"""
from enum import Enum
from typing import NamedTuple, Optional

from core.errors import LexError


class TokenType(Enum):
    NUMBER = "number"
    IDENT = "ident"
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    CARET = "^"
    ASSIGN = "="
    END = "end"


class Token(NamedTuple):
    type: TokenType
    value: float = 0.0
    text: str = ""
    pos: int = 0

    def __repr__(self):
        if self.type is TokenType.NUMBER:
            return f"Token(NUMBER, {self.value!r})"
        if self.type is TokenType.IDENT:
            return f"Token(IDENT, {self.text!r})"
        return f"Token({self.type.name})"


# 单字符Token定义
PUNCTUATION = {
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    ',': TokenType.COMMA,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.STAR,
    '/': TokenType.SLASH,
    '^': TokenType.CARET,
    '=': TokenType.ASSIGN,
}

OPERATOR_TOKENS = frozenset({
    TokenType.PLUS, TokenType.MINUS, TokenType.STAR, TokenType.SLASH, TokenType.CARET,
})


def is_ident_start(c):
    return c.isascii() and (c.isalpha() or c == '_')


def is_ident_char(c):
    return c.isascii() and (c.isalnum() or c == '_')


DIGITS = frozenset('0123456789')


def scan_number(text, start):
    """
    从 start 开始扫描数字字面量，返回 (尾数结束位置, 字面量结束位置)
    尾数：数字与至多一个小数点；指数部分只有在后面至少跟一个数字时才会被消耗
    """
    n = len(text)
    i = start
    seen_dot = False
    while i < n and (text[i] in DIGITS or (text[i] == '.' and not seen_dot)):
        if text[i] == '.':
            seen_dot = True
        i += 1
    mantissa_end = i

    if i < n and text[i] in 'eE':
        j = i + 1
        if j < n and text[j] in '+-':
            j += 1
        digits_start = j
        while j < n and text[j] in DIGITS:
            j += 1
        if j > digits_start:
            i = j
    return mantissa_end, i


class Lexer:
    """按需逐个产生Token；游标只前进不回退"""

    def __init__(self, text):
        self.text = text
        self.pos = 0

    def next(self) -> Token:
        text, n = self.text, len(self.text)
        while self.pos < n and text[self.pos].isspace():
            self.pos += 1
        if self.pos >= n:
            return Token(TokenType.END, pos=n)

        start = self.pos
        c = text[start]

        # 数字（包括小数点开头和科学计数法）
        if c in DIGITS or c == '.':
            mantissa_end, end = scan_number(text, start)
            if mantissa_end - start == 1 and c == '.':
                # 单独的小数点不是数字
                raise LexError(c, start)
            literal = text[start:end]
            self.pos = end
            return Token(TokenType.NUMBER, float(literal), literal, start)

        if is_ident_start(c):
            end = start + 1
            while end < n and is_ident_char(text[end]):
                end += 1
            self.pos = end
            return Token(TokenType.IDENT, text=text[start:end], pos=start)

        token_type = PUNCTUATION.get(c)
        if token_type is None:
            raise LexError(c, start)
        self.pos += 1
        return Token(token_type, text=c, pos=start)

    def __iter__(self):
        while True:
            token = self.next()
            if token.type is TokenType.END:
                return
            yield token


def tokenize(text):
    """把整行文本切分为Token列表（不含END）"""
    return list(Lexer(text))


class TokenStream:
    """为Lexer加一个Token的前瞻"""

    def __init__(self, lexer):
        self.lexer = lexer
        self._pending: Optional[Token] = None

    def peek(self) -> Token:
        if self._pending is None:
            self._pending = self.lexer.next()
        return self._pending

    def next(self) -> Token:
        token = self.peek()
        self._pending = None
        return token
