"""主程序入口 - 交互式会话或命令行直接求值"""
import argparse
import logging
import sys

from config.config import CALC_CONFIG, LOGGING_CONFIG, REPL_CONFIG, validate_config
from core import CalcError, Calculator, Environment
from repl import CalculatorSession, format_value

logger = logging.getLogger(__name__)


def setup_logging(level):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOGGING_CONFIG["format"]
    )


def evaluate_expressions(expressions, env, stdout=None):
    """
    在同一个环境里依次求值，每个结果一行
    Returns:
        退出码：全部成功为0，遇到第一个错误即返回1
    """
    stdout = stdout if stdout is not None else sys.stdout
    calculator = Calculator(env)
    for expression in expressions:
        try:
            value = calculator.evaluate(expression)
        except CalcError as e:
            logger.debug(f"Expression failed: {expression!r}")
            stdout.write(f"{REPL_CONFIG['error_prefix']}{e.message}\n")
            return 1
        stdout.write(format_value(value, env.precision) + "\n")
    return 0


def main(args):
    setup_logging(args.log_level)
    validate_config()

    try:
        env = Environment(precision=args.precision)
    except ValueError as e:
        logger.error(str(e))
        return 2

    if args.expression:
        logger.info(f"Evaluating {len(args.expression)} expression(s)")
        return evaluate_expressions(args.expression, env)

    CalculatorSession(env).run()
    return 0


def build_parser():
    parser = argparse.ArgumentParser(description="SuperCalc arithmetic expression calculator")

    parser.add_argument(
        "-e", "--expression",
        action="append",
        default=[],
        help="Evaluate an expression and exit (repeatable, shares one environment)"
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=CALC_CONFIG["default_precision"],
        help=f"Digits after the decimal point ({CALC_CONFIG['min_precision']}..{CALC_CONFIG['max_precision']})"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG["level"],
        help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    return parser


def cli():
    sys.exit(main(build_parser().parse_args()))


if __name__ == "__main__":
    cli()
