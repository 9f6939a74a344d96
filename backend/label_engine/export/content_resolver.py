"""
内容解析 - 决定元素显示内容的来源

优先级：表达式（绑定含 {{）> 列绑定（非空绑定）> 固定文本（text_content）

条码/QR与文本的唯一区别在最终兜底：无任何内容时使用绑定本身作为字面量，
避免条码静默输出空内容。
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..expression import ExpressionEvaluator, is_expression
from ..expression.coercion import resolve_column
from ..models import Element, RenderContext


class ContentResolver:
    """元素内容解析器"""

    def __init__(self, evaluator: ExpressionEvaluator | None = None):
        self.evaluator = evaluator or ExpressionEvaluator()

    def resolve_display_text(
        self,
        element: Element,
        row: Mapping[str, Any],
        ctx: RenderContext,
        column_mapping: Mapping[str, str] | None = None,
    ) -> str:
        """文本元素的显示内容"""
        binding = element.binding
        text_content = element.text_content or ""

        if is_expression(binding):
            return self.evaluator.evaluate(binding, row, ctx)

        if binding:
            value = self._mapped_value(element, row, column_mapping)
            if value is None:
                value = resolve_column(binding, row)
            return value if value is not None else text_content

        return text_content

    def resolve_code_value(
        self,
        element: Element,
        row: Mapping[str, Any],
        ctx: RenderContext,
        column_mapping: Mapping[str, str] | None = None,
    ) -> str:
        """条码/QR元素的编码内容"""
        binding = element.binding

        if is_expression(binding):
            return self.evaluator.evaluate(binding, row, ctx)

        value = self._mapped_value(element, row, column_mapping)
        if value is not None:
            return value

        if binding:
            value = resolve_column(binding, row)
            if value is not None:
                return value

        return element.text_content or binding or ""

    def _mapped_value(
        self,
        element: Element,
        row: Mapping[str, Any],
        column_mapping: Mapping[str, str] | None,
    ) -> str | None:
        """按 元素ID->列名 映射取值"""
        if not column_mapping:
            return None
        column = column_mapping.get(element.id)
        if not column:
            return None
        return resolve_column(column, row)


_default_resolver = ContentResolver()


def resolve_display_text(
    element: Element,
    row: Mapping[str, Any] | None = None,
    ctx: RenderContext | None = None,
) -> str:
    return _default_resolver.resolve_display_text(element, row or {}, ctx or RenderContext())


def resolve_code_value(
    element: Element,
    row: Mapping[str, Any] | None = None,
    ctx: RenderContext | None = None,
) -> str:
    return _default_resolver.resolve_code_value(element, row or {}, ctx or RenderContext())
