"""
取值与类型转换规则

- 空值 -> "" / 0 / 0.0（按上下文）
- 数字识别必须完整匹配整个token（部分匹配视为非数字）
- 整数/浮点参数允许前缀解析（"3.7" 作整数为 3），失败取默认值
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime
from typing import Any

_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"[+-]?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")


def to_text(value: Any) -> str:
    """标量 -> 字符串"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_int(value: str | None, default: int) -> int:
    if not value:
        return default
    match = _INT_PREFIX.match(value)
    return int(match.group()) if match else default


def to_float(value: str | None) -> float:
    if not value:
        return 0.0
    match = _FLOAT_PREFIX.match(value)
    return float(match.group()) if match else 0.0


def parse_number(text: str) -> float | None:
    """完整解析为数字，否则返回None"""
    if _FLOAT_PREFIX.fullmatch(text):
        return float(text)
    return None


def resolve_column(name: str, row: Mapping[str, Any] | None) -> str | None:
    """按列名取值：精确匹配优先，其次忽略大小写；缺失返回None"""
    if not row:
        return None

    if name in row and row[name] is not None:
        return to_text(row[name])

    lowered = name.lower()
    for key, value in row.items():
        if isinstance(key, str) and key.lower() == lowered and value is not None:
            return to_text(value)
    return None


def parse_iso_date(text: str | None) -> date | None:
    """解析 YYYY-MM-DD，失败返回None"""
    if not text:
        return None
    match = _ISO_DATE.fullmatch(text.strip())
    if not match:
        return None
    try:
        return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))
    except ValueError:
        return None


def format_date(value: date | datetime, fmt: str) -> str:
    """
    按格式串输出日期

    格式符为字面子串替换：DD/MM/AAAA/AA；AAAA先于AA替换。
    hh/mm/ss 固定输出 00（无时刻模型）。
    """
    if isinstance(value, datetime):
        value = value.date()

    yyyy = str(value.year)
    return (
        fmt.replace("DD", f"{value.day:02d}")
        .replace("MM", f"{value.month:02d}")
        .replace("AAAA", yyyy)
        .replace("AA", yyyy[-2:])
        .replace("hh", "00")
        .replace("mm", "00")
        .replace("ss", "00")
    )
