"""
导出模块 - 设计+数据 -> 打印机指令

子模块：
- units: 毫米/点换算与旋转方向码
- content_resolver: 元素内容来源判定
- text_fit: 文本自适应字高
- zpl_generator: ZPL代码生成
"""

from .content_resolver import ContentResolver, resolve_code_value, resolve_display_text
from .text_fit import calc_auto_fit_font_dots
from .units import (
    DPI_TO_DOTS_PER_MM,
    ZplOrientation,
    dots_per_mm,
    mm_to_dots,
    rotation_to_orientation,
    rotation_to_zpl,
)
from .zpl_generator import ZplGenerator, escape_zpl, generate, generate_batch

__all__ = [
    "ContentResolver",
    "resolve_display_text",
    "resolve_code_value",
    "calc_auto_fit_font_dots",
    "DPI_TO_DOTS_PER_MM",
    "ZplOrientation",
    "dots_per_mm",
    "mm_to_dots",
    "rotation_to_orientation",
    "rotation_to_zpl",
    "ZplGenerator",
    "escape_zpl",
    "generate",
    "generate_batch",
]
