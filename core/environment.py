"""core/environment.py - 变量环境"""
import logging

from config.config import CALC_CONFIG

logger = logging.getLogger(__name__)


class Environment:
    """
    变量名 -> 浮点值 的映射，预置 pi 和 e；另带一个只供显示层使用的精度
    每个会话持有一个实例，并显式传给每次求值
    """

    def __init__(self, precision=None):
        self.variables = {}
        self._precision = CALC_CONFIG["default_precision"]
        if precision is not None:
            self.precision = precision
        self.reset()

    @property
    def precision(self):
        return self._precision

    @precision.setter
    def precision(self, value):
        lo, hi = CALC_CONFIG["min_precision"], CALC_CONFIG["max_precision"]
        if isinstance(value, bool) or not isinstance(value, int) or not lo <= value <= hi:
            raise ValueError(f"precision must be an integer in {lo}..{hi}, got {value!r}")
        self._precision = value

    def reset(self):
        """清空所有变量并重新写入常数（可重复调用）"""
        self.variables.clear()
        self.variables.update(CALC_CONFIG["constants"])
        logger.debug("Environment reset")

    def get(self, name):
        return self.variables[name]

    def set(self, name, value):
        self.variables[name] = float(value)

    def names(self):
        return sorted(self.variables)

    def items(self):
        return [(name, self.variables[name]) for name in self.names()]

    def __contains__(self, name):
        return name in self.variables

    def __len__(self):
        return len(self.variables)

    def __repr__(self):
        return f"Environment(variables={self.variables!r}, precision={self._precision})"
