"""
表达式模块 - {{ }} 模板语言

子模块：
- parser: 表达式 -> 语法树
- functions: 白名单函数注册表与条件求值
- evaluator: 模板求值（片段级容错）
- catalog: 函数目录
"""

from .catalog import FUNCTION_GROUPS, FunctionGroup, FunctionInfo, list_functions
from .evaluator import ExpressionEvaluator, evaluate, is_expression
from .functions import ERROR_MARKER, FunctionName, call_function, eval_condition
from .parser import parse_expression

__all__ = [
    "ExpressionEvaluator",
    "evaluate",
    "is_expression",
    "parse_expression",
    "call_function",
    "eval_condition",
    "FunctionName",
    "ERROR_MARKER",
    "FUNCTION_GROUPS",
    "FunctionGroup",
    "FunctionInfo",
    "list_functions",
]
