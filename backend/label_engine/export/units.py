"""
单位与旋转换算

- 毫米 -> 打印点：round(mm * 点/毫米)，分辨率表 203/300/600 DPI -> 8/12/24
- 旋转角 -> ZPL方向码：归一化到[0,360)后按四个90°区间（以0/90/180/270为中心）分桶
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

DPI_TO_DOTS_PER_MM: dict[int, int] = {203: 8, 300: 12, 600: 24}
DEFAULT_DOTS_PER_MM = 8


class ZplOrientation(str, Enum):
    """ZPL字段方向"""
    NORMAL = "N"          # 0°
    ROTATED_90 = "R"      # 90°
    INVERTED_180 = "I"    # 180°
    ROTATED_270 = "B"     # 270°


def dots_per_mm(dpi: Any) -> int:
    """DPI -> 点/毫米，未知DPI按203处理"""
    return DPI_TO_DOTS_PER_MM.get(dpi, DEFAULT_DOTS_PER_MM)


def round_half_up(value: float) -> int:
    """四舍五入（.5远离零）"""
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return int(math.copysign(whole, value))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def mm_to_dots(mm: Any, dpmm: int) -> int:
    """毫米 -> 打印点；非数值按0处理"""
    if not _is_number(mm):
        return 0
    return round_half_up(mm * dpmm)


def rotation_to_orientation(degrees: Any) -> ZplOrientation:
    """旋转角 -> 方向枚举；非数值按正常方向"""
    if not _is_number(degrees):
        return ZplOrientation.NORMAL

    normalized = round_half_up(degrees) % 360
    if normalized >= 315 or normalized < 45:
        return ZplOrientation.NORMAL
    if normalized < 135:
        return ZplOrientation.ROTATED_90
    if normalized < 225:
        return ZplOrientation.INVERTED_180
    return ZplOrientation.ROTATED_270


def rotation_to_zpl(degrees: Any) -> str:
    """旋转角 -> ZPL方向码（N/R/I/B）"""
    return rotation_to_orientation(degrees).value
