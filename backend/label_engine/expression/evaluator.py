"""
表达式求值器 - 解析并求值 {{...}} 模板

职责：
1. 定位模板中的 {{...}} 片段并逐个替换为求值结果
2. 单个片段失败时以 #ERR# 代替，不影响其余片段
3. 模板级默认值：紧跟在片段之后的 || 分隔多个候选模板，取第一个非空结果

不使用任何代码执行机制，函数集合见 functions.FunctionName。

测试要点：
- test_plain_template_unchanged: 无 {{ 时原样返回
- test_column_reference: 列引用（忽略大小写）
- test_default_operator: || 默认值
- test_unknown_function: 未知函数 -> #ERR#
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..interfaces import ExpressionEvaluationError, IExpressionEvaluator
from ..models import RenderContext
from .ast import ColumnRef, DefaultOp, FunctionCall, Literal, Node
from .coercion import resolve_column
from .functions import ERROR_MARKER, call_function
from .parser import DEFAULT_OPERATOR, QUOTES, parse_expression

logger = logging.getLogger(__name__)

SPAN_PATTERN = re.compile(r"\{\{(.+?)\}\}")
_ALTERNATIVE_AFTER_SPAN = re.compile(r"\s*\|\|")


def is_expression(binding: Any) -> bool:
    """绑定是否为表达式（含 {{）"""
    return isinstance(binding, str) and "{{" in binding


class ExpressionEvaluator(IExpressionEvaluator):
    """模板表达式求值器（无状态，可跨线程共享）"""

    def evaluate(
        self,
        template: str | None,
        row: Mapping[str, Any] | None = None,
        ctx: RenderContext | None = None,
    ) -> str:
        """求值模板，永不抛异常"""
        if template is None:
            return ""
        if "{{" not in template:
            return template

        row = row or {}
        ctx = ctx or RenderContext()

        candidates = split_template_alternatives(template)
        if len(candidates) == 1:
            return self._substitute(template, row, ctx)

        for candidate in candidates[:-1]:
            result = self._substitute(candidate, row, ctx).strip()
            if result and ERROR_MARKER not in result:
                return result
        return self._substitute(candidates[-1], row, ctx).strip()

    def evaluate_expression(
        self,
        expr: str,
        row: Mapping[str, Any],
        ctx: RenderContext,
    ) -> str:
        """求值单个表达式（不含 {{ }}），失败返回 #ERR#"""
        try:
            return self.evaluate_node(parse_expression(expr), row, ctx)
        except Exception as e:  # noqa: BLE001
            logger.debug(f"表达式求值失败: {expr!r}: {e}")
            return ERROR_MARKER

    def evaluate_node(self, node: Node, row: Mapping[str, Any], ctx: RenderContext) -> str:
        """递归求值语法树"""
        if isinstance(node, Literal):
            return node.value

        if isinstance(node, ColumnRef):
            value = resolve_column(node.name, row)
            if value is None:
                return node.fallback if node.fallback is not None else ""
            return value

        if isinstance(node, FunctionCall):
            args = [self.evaluate_node(arg, row, ctx) for arg in node.args]
            return call_function(node.name, args, row, ctx)

        if isinstance(node, DefaultOp):
            primary = self.evaluate_node(node.primary, row, ctx)
            if primary != "" and primary != ERROR_MARKER:
                return primary
            alternative = self.evaluate_node(node.alternative, row, ctx)
            # 候选项既非列也非函数时按字面量
            if alternative == "" and node.alternative_text and "(" not in node.alternative_text:
                return _strip_quotes(node.alternative_text)
            return alternative

        raise ExpressionEvaluationError(f"未知语法节点: {node!r}")

    def _substitute(self, template: str, row: Mapping[str, Any], ctx: RenderContext) -> str:
        return SPAN_PATTERN.sub(
            lambda m: self.evaluate_expression(m.group(1).strip(), row, ctx),
            template,
        )


def split_template_alternatives(template: str) -> list[str]:
    """在片段结束后紧跟（仅隔空白）的 || 处拆分模板；其余 || 属于普通文本"""
    parts: list[str] = []
    prev = 0
    for span in SPAN_PATTERN.finditer(template):
        follow = _ALTERNATIVE_AFTER_SPAN.match(template, span.end())
        if follow is None:
            continue
        parts.append(template[prev:follow.end() - len(DEFAULT_OPERATOR)])
        prev = follow.end()
    parts.append(template[prev:])
    return parts


def _strip_quotes(text: str) -> str:
    """去除一对首尾同种引号"""
    if len(text) >= 2 and text[0] in QUOTES and text[-1] == text[0]:
        return text[1:-1]
    return text


_default_evaluator = ExpressionEvaluator()


def evaluate(
    template: str | None,
    row: Mapping[str, Any] | None = None,
    ctx: RenderContext | None = None,
) -> str:
    """使用默认求值器求值模板"""
    return _default_evaluator.evaluate(template, row, ctx)
