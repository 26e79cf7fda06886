"""
core/call_normalizer.py - 函数调用的文本级改写

把 name(e1, e2, ...) 改写为 ((e1), (e2), ...) name，函数名移到参数之后，
解析器就能像处理后缀运算符一样处理它。嵌套调用（例如 pow(2, sqrt(9))）
在内层调用闭合时先被改写，所以同样有效。扫描是单遍的，用显式栈保存
尚未闭合的调用，不做递归。
"""
import logging

from core.errors import UnbalancedParensError
from core.token_system import DIGITS, is_ident_char, is_ident_start, scan_number

logger = logging.getLogger(__name__)


class _OpenCall:
    """一个尚未闭合的调用"""

    def __init__(self, name):
        self.name = name
        self.args = []
        self.current = []
        self.depth = 0  # 调用内部普通括号的嵌套深度

    def finish_argument(self):
        self.args.append(''.join(self.current))
        self.current = []

    def rewrite(self):
        self.finish_argument()
        rewritten = ', '.join(f"({arg})" for arg in self.args)
        return f"({rewritten}) {self.name} "


def normalize_calls(text):
    """把文本中所有 name(...) 调用改写为后缀形式"""
    top = []
    calls = []
    i, n = 0, len(text)
    while i < n:
        out = calls[-1].current if calls else top
        c = text[i]

        # 整体跳过数字字面量，指数里的 e 不是标识符
        if c in DIGITS or c == '.':
            _, end = scan_number(text, i)
            out.append(text[i:end])
            i = end
            continue

        if is_ident_start(c):
            j = i + 1
            while j < n and is_ident_char(text[j]):
                j += 1
            k = j
            while k < n and text[k].isspace():
                k += 1
            if k < n and text[k] == '(':
                calls.append(_OpenCall(text[i:j]))
                i = k + 1
                continue
            out.append(text[i:j])
            i = j
            continue

        call = calls[-1] if calls else None
        if call is not None and c == ')' and call.depth == 0:
            calls.pop()
            (calls[-1].current if calls else top).append(call.rewrite())
        elif call is not None and c == ',' and call.depth == 0:
            call.finish_argument()
        else:
            if call is not None and c == '(':
                call.depth += 1
            elif call is not None and c == ')':
                call.depth -= 1
            out.append(c)
        i += 1

    if calls:
        raise UnbalancedParensError(f"Unbalanced parentheses in call to {calls[0].name}")

    result = ''.join(top)
    if result != text:
        logger.debug(f"Normalized calls: {text[:50]!r} -> {result[:50]!r}")
    return result
