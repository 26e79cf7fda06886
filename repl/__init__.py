"""交互式会话模块"""
from .session import CalculatorSession, format_value, help_text

__all__ = ['CalculatorSession', 'format_value', 'help_text']
