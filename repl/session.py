"""repl/session.py - 交互式会话：元命令、输出格式化"""
import logging
import sys

from config.config import CALC_CONFIG, REPL_CONFIG
from core import BINARY_FUNCTIONS, UNARY_FUNCTIONS, CalcError, Calculator, Environment, RPNEvaluator
from core.parser import NodeKind

logger = logging.getLogger(__name__)


def format_value(value, precision):
    """定点格式，precision 位小数"""
    return f"{value:.{precision}f}"


def help_text():
    functions = ', '.join(list(UNARY_FUNCTIONS) + list(BINARY_FUNCTIONS))
    constants = ', '.join(CALC_CONFIG["constants"])
    examples = ', '.join(REPL_CONFIG["examples"])
    return (
        "Commands: :help, :vars, :clear, :precision N, :quit\n"
        f"Functions: {functions}\n"
        f"Constants: {constants}\n"
        f"Examples: {examples}"
    )


class CalculatorSession:
    """逐行读取输入，处理元命令或交给计算管线"""

    def __init__(self, env=None, stdin=None, stdout=None):
        self.calculator = Calculator(env if env is not None else Environment())
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.running = True

    @property
    def env(self):
        return self.calculator.env

    def write(self, text):
        self.stdout.write(text + "\n")

    def run(self):
        """主循环：直到 :quit 或输入结束"""
        self.write(REPL_CONFIG["banner"])
        while self.running:
            self.stdout.write(REPL_CONFIG["prompt"])
            self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                break
            self.handle_line(line)
        logger.info("Session finished")

    def handle_line(self, line):
        line = line.strip()
        if not line:
            return
        if line.startswith(REPL_CONFIG["command_prefix"]):
            self.handle_command(line)
            return

        try:
            program = self.calculator.compile(line)
            value = RPNEvaluator.evaluate(program, self.env)
        except CalcError as e:
            logger.debug(f"Error evaluating {line!r}: {e.message}")
            self.write(REPL_CONFIG["error_prefix"] + e.message)
            return

        if any(node.kind is NodeKind.ASSIGN for node in program):
            self.write(f"{REPL_CONFIG['ok_prefix']}{program[0].text} = "
                       f"{format_value(value, self.env.precision)}")
        else:
            self.write(REPL_CONFIG["result_prefix"] + format_value(value, self.env.precision))

    def handle_command(self, line):
        command, _, argument = line[len(REPL_CONFIG["command_prefix"]):].partition(' ')
        argument = argument.strip()

        if command == "quit":
            self.running = False
        elif command == "help":
            self.write(help_text())
        elif command == "vars":
            for name, value in self.env.items():
                self.write(f"{name} = {format_value(value, self.env.precision)}")
        elif command == "clear":
            self.calculator.reset()
            self.write(REPL_CONFIG["ok_prefix"] + "variables cleared")
        elif command == "precision":
            self.set_precision(argument)
        else:
            self.write(REPL_CONFIG["error_prefix"] + f"Unknown command: {line}")

    def set_precision(self, argument):
        lo, hi = CALC_CONFIG["min_precision"], CALC_CONFIG["max_precision"]
        try:
            self.env.precision = int(argument)
        except ValueError:
            self.write(f"Usage: :precision N ({lo}..{hi})")
            return
        self.write(f"{REPL_CONFIG['ok_prefix']}precision = {self.env.precision}")
