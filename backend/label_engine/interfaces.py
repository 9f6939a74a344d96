"""
模块接口契约 - 定义各模块的抽象接口

设计原则：
1. 模块间通过接口通信，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from label_engine.interfaces import ILabelCodeGenerator

    class MyGenerator(ILabelCodeGenerator):
        def generate(self, design, row, opts) -> str:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .models import Design, RenderContext, RenderOptions


# ============================================================================
# 表达式模块接口
# ============================================================================

class IExpressionEvaluator(ABC):
    """表达式求值器接口 - 解析 {{...}} 模板"""

    @abstractmethod
    def evaluate(self, template: str | None, row: Mapping[str, Any], ctx: RenderContext) -> str:
        """
        求值模板字符串

        Args:
            template: 含 {{...}} 片段的模板
            row: 数据行（列名 -> 值）
            ctx: 渲染上下文（行号/批量大小/时间点）

        Returns:
            替换后的纯文本；单个片段失败时以 #ERR# 代替，不抛异常
        """
        ...


# ============================================================================
# 代码生成模块接口
# ============================================================================

class ILabelCodeGenerator(ABC):
    """打印机代码生成器接口 - 设计+数据 -> 设备指令"""

    @abstractmethod
    def generate(
        self,
        design: Design,
        row: Mapping[str, Any] | None = None,
        opts: RenderOptions | None = None,
    ) -> str:
        """
        生成单张标签的设备程序

        Args:
            design: 标签设计（尺寸+元素）
            row: 数据行
            opts: 渲染选项（dpi/行号/批量大小）

        Returns:
            完整的设备程序文本
        """
        ...

    @abstractmethod
    def generate_batch(
        self,
        design: Design,
        rows: Sequence[Mapping[str, Any]],
        opts: RenderOptions | None = None,
    ) -> str:
        """
        生成批量标签（每行一张，按行序拼接）

        Args:
            design: 标签设计
            rows: 数据行序列
            opts: 渲染选项（row_index/batch_size 由批量过程覆盖）

        Returns:
            以换行拼接的多张标签程序
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class LabelEngineError(Exception):
    """基础异常"""
    pass


class ExpressionSyntaxError(LabelEngineError):
    """表达式语法错误"""
    pass


class ExpressionEvaluationError(LabelEngineError):
    """表达式求值错误"""
    pass


class DesignLoadError(LabelEngineError):
    """设计文件加载错误"""
    pass


class BatchTooLargeError(LabelEngineError):
    """批量行数超过调用方设定的上限"""
    pass
