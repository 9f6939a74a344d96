"""
数据模型层 - 定义系统核心数据结构

所有模块通过这些模型交互，实现解耦：
- Design/Element: 标签设计与元素
- RenderContext: 表达式求值上下文
- RenderOptions: 代码生成选项
"""

from .design import BarcodeFormat, Design, Element, ElementType, QRErrorLevel
from .render_context import RenderContext, RenderOptions, utc_now

__all__ = [
    "Design",
    "Element",
    "ElementType",
    "BarcodeFormat",
    "QRErrorLevel",
    "RenderContext",
    "RenderOptions",
    "utc_now",
]
