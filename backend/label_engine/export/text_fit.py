"""
文本自适应 - 文本超出元素框时逐点缩小字高
"""

from __future__ import annotations

import math

from .units import round_half_up

# 平均字符宽度 / 字高（等宽字体约0.6）
AVG_CHAR_WIDTH_RATIO = 0.6
LINE_HEIGHT_RATIO = 1.2


def fits_in_box(text: str, box_w: int, box_h: int, font_h: int) -> bool:
    """按估算字宽换行后总高度是否不超过框高"""
    char_w = max(round_half_up(font_h * AVG_CHAR_WIDTH_RATIO), 1)
    chars_per_line = max(box_w // char_w, 1)
    num_lines = math.ceil(len(text) / chars_per_line)
    line_h = round_half_up(font_h * LINE_HEIGHT_RATIO)
    return num_lines * line_h <= box_h


def calc_auto_fit_font_dots(text: str, box_w: int, box_h: int, font_h: int, min_font_h: int) -> int:
    """
    计算适配字高（单位：点）

    Args:
        text: 已转义的显示文本
        box_w / box_h: 元素框宽高（点）
        font_h: 原始字高（点）
        min_font_h: 最小字高（点）

    Returns:
        不小于min_font_h的最大可容纳字高
    """
    while font_h >= min_font_h:
        if fits_in_box(text, box_w, box_h, font_h):
            return font_h
        font_h -= 1
    return min_font_h
