"""
函数注册表 - 白名单函数（封闭集合，不存在动态执行路径）

职责：
1. 定义全部可调用函数（FunctionName）
2. 按名称分派到具体实现
3. 条件表达式求值（SI 使用）

未注册的函数名一律返回 #ERR#。

测试要点：
- test_text_functions: MAYUS/MINUS/RECORTAR/CONCAT/REEMPLAZAR/LARGO
- test_date_functions: HOY/AHORA/SUMAR_DIAS/SUMAR_MESES/FORMATO_FECHA
- test_sequence_functions: CONTADOR/LOTE
- test_numeric_functions: REDONDEAR/FORMATO_NUM
- test_conditional_functions: SI/VACIO/POR_DEFECTO
"""

from __future__ import annotations

import logging
import operator
import re
from collections.abc import Callable, Mapping
from datetime import timedelta
from enum import Enum
from typing import Any

from ..models import RenderContext
from .coercion import (
    format_date,
    parse_iso_date,
    parse_number,
    resolve_column,
    to_float,
    to_int,
)

logger = logging.getLogger(__name__)

ERROR_MARKER = "#ERR#"

DEFAULT_DATE_FORMAT = "DD/MM/AAAA"
DEFAULT_DATETIME_FORMAT = "DD/MM/AAAA hh:mm"
DEFAULT_LOT_FORMAT = "AAMM-####"

# SUMAR_MESES 按每月30天近似
DAYS_PER_MONTH = 30

_LOT_COUNTER = re.compile(r"#+")


class FunctionName(str, Enum):
    """白名单函数"""
    # 文本
    MAYUS = "MAYUS"
    MINUS = "MINUS"
    RECORTAR = "RECORTAR"
    CONCAT = "CONCAT"
    REEMPLAZAR = "REEMPLAZAR"
    LARGO = "LARGO"
    # 日期
    HOY = "HOY"
    AHORA = "AHORA"
    SUMAR_DIAS = "SUMAR_DIAS"
    SUMAR_MESES = "SUMAR_MESES"
    FORMATO_FECHA = "FORMATO_FECHA"
    # 序列
    CONTADOR = "CONTADOR"
    LOTE = "LOTE"
    # 数值
    REDONDEAR = "REDONDEAR"
    FORMATO_NUM = "FORMATO_NUM"
    # 条件
    SI = "SI"
    VACIO = "VACIO"
    POR_DEFECTO = "POR_DEFECTO"


FunctionImpl = Callable[[list[str], Mapping[str, Any], RenderContext], str]


def call_function(
    name: str,
    args: list[str],
    row: Mapping[str, Any],
    ctx: RenderContext,
) -> str:
    """按名称调用白名单函数，未知名称返回 #ERR#"""
    try:
        fn = FunctionName(name.upper())
    except ValueError:
        logger.debug(f"未知函数: {name}")
        return ERROR_MARKER
    return _REGISTRY[fn](args, row, ctx)


def _arg(args: list[str], index: int) -> str:
    return args[index] if index < len(args) else ""


# ============================================================================
# 文本函数
# ============================================================================

def _mayus(args, row, ctx) -> str:
    return _arg(args, 0).upper()


def _minus(args, row, ctx) -> str:
    return _arg(args, 0).lower()


def _recortar(args, row, ctx) -> str:
    value = _arg(args, 0)
    length = to_int(_arg(args, 1), len(value))
    if length < 0:
        raise ValueError(f"RECORTAR长度不能为负: {length}")
    return value[:length]


def _concat(args, row, ctx) -> str:
    return "".join(args)


def _reemplazar(args, row, ctx) -> str:
    value = _arg(args, 0)
    search = _arg(args, 1)
    if search == "":
        return value
    return value.replace(search, _arg(args, 2))


def _largo(args, row, ctx) -> str:
    return str(len(_arg(args, 0)))


# ============================================================================
# 日期函数
# ============================================================================

def _hoy(args, row, ctx) -> str:
    return format_date(ctx.now, _arg(args, 0) or DEFAULT_DATE_FORMAT)


def _ahora(args, row, ctx) -> str:
    return format_date(ctx.now, _arg(args, 0) or DEFAULT_DATETIME_FORMAT)


def _sumar_dias(args, row, ctx) -> str:
    base = parse_iso_date(_arg(args, 0)) or ctx.now.date()
    days = to_int(_arg(args, 1), 0)
    return format_date(base + timedelta(days=days), _arg(args, 2) or DEFAULT_DATE_FORMAT)


def _sumar_meses(args, row, ctx) -> str:
    base = parse_iso_date(_arg(args, 0)) or ctx.now.date()
    months = to_int(_arg(args, 1), 0)
    result = base + timedelta(days=months * DAYS_PER_MONTH)
    return format_date(result, _arg(args, 2) or DEFAULT_DATE_FORMAT)


def _formato_fecha(args, row, ctx) -> str:
    # 无法解析时取渲染时刻的日期
    value = parse_iso_date(_arg(args, 0)) or ctx.now.date()
    return format_date(value, _arg(args, 1) or DEFAULT_DATE_FORMAT)


# ============================================================================
# 序列函数
# ============================================================================

def _contador(args, row, ctx) -> str:
    start = to_int(_arg(args, 0), 1)
    step = to_int(_arg(args, 1), 1)
    padding = to_int(_arg(args, 2), 0)
    value = str(start + ctx.row_index * step)
    return value.rjust(padding, "0") if padding > 0 else value


def _lote(args, row, ctx) -> str:
    fmt = _arg(args, 0) or DEFAULT_LOT_FORMAT
    now = ctx.now
    yyyy = str(now.year)
    seq = str(ctx.row_index + 1)

    result = (
        fmt.replace("AAAA", yyyy)
        .replace("AA", yyyy[-2:])
        .replace("MM", f"{now.month:02d}")
        .replace("DD", f"{now.day:02d}")
    )
    # 每段连续的#替换为序号（按#个数补零）
    return _LOT_COUNTER.sub(lambda m: seq.rjust(len(m.group()), "0"), result)


# ============================================================================
# 数值函数
# ============================================================================

def _fixed(value: float, decimals: int) -> str:
    if decimals < 0:
        raise ValueError(f"小数位数不能为负: {decimals}")
    return f"{value:.{decimals}f}"


def _redondear(args, row, ctx) -> str:
    return _fixed(to_float(_arg(args, 0)), to_int(_arg(args, 1), 0))


def _formato_num(args, row, ctx) -> str:
    formatted = _fixed(to_float(_arg(args, 0)), to_int(_arg(args, 1), 0))
    if _arg(args, 2) == ",":
        return formatted.replace(".", ",")
    return formatted


# ============================================================================
# 条件函数
# ============================================================================

def _si(args, row, ctx) -> str:
    matched = eval_condition(_arg(args, 0), lambda token: _resolve_operand(token, row))
    return _arg(args, 1) if matched else _arg(args, 2)


def _vacio(args, row, ctx) -> str:
    return "true" if _arg(args, 0) == "" else "false"


def _por_defecto(args, row, ctx) -> str:
    value = _arg(args, 0)
    return value if value != "" else _arg(args, 1)


_REGISTRY: dict[FunctionName, FunctionImpl] = {
    FunctionName.MAYUS: _mayus,
    FunctionName.MINUS: _minus,
    FunctionName.RECORTAR: _recortar,
    FunctionName.CONCAT: _concat,
    FunctionName.REEMPLAZAR: _reemplazar,
    FunctionName.LARGO: _largo,
    FunctionName.HOY: _hoy,
    FunctionName.AHORA: _ahora,
    FunctionName.SUMAR_DIAS: _sumar_dias,
    FunctionName.SUMAR_MESES: _sumar_meses,
    FunctionName.FORMATO_FECHA: _formato_fecha,
    FunctionName.CONTADOR: _contador,
    FunctionName.LOTE: _lote,
    FunctionName.REDONDEAR: _redondear,
    FunctionName.FORMATO_NUM: _formato_num,
    FunctionName.SI: _si,
    FunctionName.VACIO: _vacio,
    FunctionName.POR_DEFECTO: _por_defecto,
}


# ============================================================================
# 条件求值
# ============================================================================

# 按优先级扫描（非按出现位置）
CONDITION_OPERATORS: tuple[str, ...] = ("==", "!=", ">=", "<=", ">", "<")

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
}


def eval_condition(cond: str, resolve: Callable[[str], str] | None = None) -> bool:
    """
    求值简易条件

    取第一个出现的运算符拆分一次；两侧均为数字时按数值比较，否则按字符串比较。
    无运算符时按真值判断：非空且不为 "0"/"false"。

    Args:
        cond: 条件文本，如 "edad>=18"
        resolve: 可选的操作数解析（列名 -> 值）
    """
    for op in CONDITION_OPERATORS:
        if op not in cond:
            continue
        left, right = cond.split(op, 1)
        left, right = left.strip(), right.strip()
        if resolve is not None:
            left, right = resolve(left), resolve(right)
        return _compare(left, op, right)

    return cond != "" and cond not in ("0", "false")


def _compare(left: str, op: str, right: str) -> bool:
    num_left = parse_number(left)
    num_right = parse_number(right)
    if num_left is not None and num_right is not None:
        return _COMPARATORS[op](num_left, num_right)
    return _COMPARATORS[op](left, right)


def _resolve_operand(token: str, row: Mapping[str, Any]) -> str:
    """条件操作数：数字原样；列名取值；否则按字面量"""
    if token == "" or parse_number(token) is not None:
        return token
    value = resolve_column(token, row)
    return token if value is None else value
