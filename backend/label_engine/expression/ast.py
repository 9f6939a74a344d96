"""
表达式语法树节点

节点均不可变，解析结果可跨行复用（批量渲染时缓存）
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Literal:
    """字面量（数字或引号内文本）"""
    value: str


@dataclass(frozen=True)
class ColumnRef:
    """列引用；fallback为None时缺失列返回空串"""
    name: str
    fallback: str | None = None


@dataclass(frozen=True)
class FunctionCall:
    """函数调用（名称已转大写，参数有序）"""
    name: str
    args: tuple[Node, ...] = ()


@dataclass(frozen=True)
class DefaultOp:
    """默认值运算 primary || alternative"""
    primary: Node
    alternative: Node
    alternative_text: str


Node = Union[Literal, ColumnRef, FunctionCall, DefaultOp]
