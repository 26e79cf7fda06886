"""配置文件"""
import logging
import math

# 计算核心参数
CALC_CONFIG = {
    "default_precision": 10,  # 输出小数位数
    "min_precision": 0,
    "max_precision": 30,
    # 环境重置时重新写入的常数
    "constants": {
        "pi": math.pi,
        "e": math.e,
    },
    "program_cache_size": 256,  # 已编译后缀程序的LRU缓存大小
}

# 交互式会话参数
REPL_CONFIG = {
    "prompt": "> ",
    "banner": "SuperCalc. Type :help for help. Ctrl+D or :quit to exit.",
    "command_prefix": ":",
    "result_prefix": "= ",
    "ok_prefix": "[ok] ",
    "error_prefix": "[error] ",
    "examples": ["sin(pi/2)", "pow(2,8)", "x=5", "3*x^2 + 1"],
}

# 日志配置
LOGGING_CONFIG = {
    "level": "WARNING",  # 默认不打扰交互输出
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert 0 <= CALC_CONFIG["min_precision"] <= CALC_CONFIG["max_precision"], "精度范围无效"
    assert CALC_CONFIG["min_precision"] <= CALC_CONFIG["default_precision"] <= CALC_CONFIG["max_precision"], \
        "默认精度必须在允许范围内"
    assert set(CALC_CONFIG["constants"]) == {"pi", "e"}, "环境只预置 pi 和 e"
    assert CALC_CONFIG["program_cache_size"] >= 0, "缓存大小不能为负"
    assert REPL_CONFIG["command_prefix"], "命令前缀不能为空"
    assert isinstance(logging.getLevelName(LOGGING_CONFIG["level"]), int), "未知日志级别"
