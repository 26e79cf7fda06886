"""core/calculator.py - 完整计算管线：调用改写 -> 词法 -> 解析 -> 求值"""
from collections import OrderedDict
import logging

from config.config import CALC_CONFIG
from core.call_normalizer import normalize_calls
from core.environment import Environment
from core.errors import InvalidExpressionError
from core.parser import to_rpn
from core.rpn_evaluator import RPNEvaluator

logger = logging.getLogger(__name__)


def compile_line(line):
    """把一行文本编译为后缀程序（与环境无关）"""
    if not line or line.isspace():
        raise InvalidExpressionError("Empty expression")
    return to_rpn(normalize_calls(line))


def evaluate(line, env):
    """
    对一行文本运行完整管线
    Args:
        line: 表达式或 name = 表达式
        env: Environment，赋值时被修改
    Returns:
        结果（float）
    """
    return RPNEvaluator.evaluate(compile_line(line), env)


class Calculator:
    """持有一个环境，并用有限大小的LRU缓存保存已编译的后缀程序"""

    def __init__(self, env=None, cache_size=None):
        self.env = env if env is not None else Environment()
        self.cache_size = CALC_CONFIG["program_cache_size"] if cache_size is None else cache_size
        self._program_cache = OrderedDict()
        self._cache_hits = 0
        self._cache_misses = 0

    def _manage_cache(self):
        """管理缓存大小"""
        while len(self._program_cache) > self.cache_size:
            # 删除最旧的条目
            self._program_cache.popitem(last=False)

    def clear_cache(self):
        self._program_cache.clear()
        logger.debug(f"Program cache cleared. Hits: {self._cache_hits}, Misses: {self._cache_misses}")
        self._cache_hits = 0
        self._cache_misses = 0

    @property
    def cache_stats(self):
        return {'hits': self._cache_hits, 'misses': self._cache_misses, 'size': len(self._program_cache)}

    def compile(self, line):
        key = line.strip()
        if key in self._program_cache:
            self._program_cache.move_to_end(key)
            self._cache_hits += 1
            logger.debug(f"Cache hit for line: {key[:50]}")
            return self._program_cache[key]

        self._cache_misses += 1
        program = tuple(compile_line(key))
        if self.cache_size > 0:
            self._program_cache[key] = program
            self._manage_cache()
        return program

    def evaluate(self, line):
        return RPNEvaluator.evaluate(self.compile(line), self.env)

    def reset(self):
        self.env.reset()
