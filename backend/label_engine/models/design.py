"""
标签设计模型 - 设计尺寸与可视元素

元素坐标/尺寸单位均为毫米（左上角为原点），渲染期只读
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator


class ElementType(str, Enum):
    """元素类型枚举"""
    TEXT = "text"
    BARCODE = "barcode"
    QR = "qr"
    RECTANGLE = "rectangle"
    LINE = "line"
    CIRCLE = "circle"
    IMAGE = "image"


class BarcodeFormat(str, Enum):
    """条码码制"""
    CODE128 = "CODE128"
    CODE39 = "CODE39"
    CODE93 = "CODE93"
    EAN13 = "EAN13"
    EAN8 = "EAN8"
    UPC = "UPC"
    ITF14 = "ITF14"
    CODABAR = "CODABAR"
    MSI = "MSI"
    DATAMATRIX = "DATAMATRIX"
    PDF417 = "PDF417"
    AZTEC = "AZTEC"
    MAXICODE = "MAXICODE"
    POSTNET = "POSTNET"
    PLANET = "PLANET"
    GS1_128 = "GS1_128"
    GS1_DATABAR = "GS1_DATABAR"
    GS1_DATABAR_STACKED = "GS1_DATABAR_STACKED"
    GS1_DATABAR_EXPANDED = "GS1_DATABAR_EXPANDED"


class QRErrorLevel(str, Enum):
    """QR纠错等级"""
    L = "L"
    M = "M"
    Q = "Q"
    H = "H"


class Element(BaseModel):
    """设计元素（按type区分的变体，未知type原样保留，渲染时跳过）"""
    id: str = Field(..., description="元素唯一ID")
    type: str = Field(..., description="元素类型(text/barcode/qr/...)")

    # 几何（mm）
    x: float = 0.0
    y: float = 0.0
    width: float | None = None
    height: float | None = None
    rotation: Any = Field(0.0, description="旋转角度(度)，非数值按0处理")

    # 内容来源：空=固定文本；列名=列绑定；含{{=表达式
    binding: str | None = None
    text_content: str | None = Field(None, description="固定文本（无绑定时使用）")

    # 文本
    font_size: float | None = Field(None, description="字号(CSS px, 6px/mm)")
    font_family: str = "Arial"
    font_weight: str = "normal"
    text_align: str = "left"
    color: str = "#000000"
    text_auto_fit: bool | None = False
    text_min_font_size: float | None = 6.0

    # 条码 / QR
    barcode_format: str | None = BarcodeFormat.CODE128.value
    barcode_show_text: bool = False
    qr_error_level: str | None = QRErrorLevel.M.value

    # 形状
    border_width: float | None = None
    border_color: str = "#000000"
    background_color: str | None = None
    border_radius: float = 0.0

    # 图片（仅占位框）
    image_url: str | None = None

    # 图层
    z_index: int = 0
    visible: bool = True
    name: str | None = None

    model_config = {"frozen": True}

    @field_validator(
        "x", "y", "font_family", "font_weight", "text_align", "color",
        "barcode_show_text", "border_color", "border_radius", "z_index", "visible",
        mode="before",
    )
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        """编辑器导出的null按字段默认值处理"""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def element_type(self) -> ElementType | None:
        """已知元素类型；未知类型返回None"""
        try:
            return ElementType(self.type)
        except ValueError:
            return None


class Design(BaseModel):
    """标签设计（渲染期不可变）"""
    name: str | None = None
    width_mm: float
    height_mm: float
    elements: list[Element] = Field(default_factory=list)

    model_config = {"frozen": True}

    def sorted_elements(self) -> list[Element]:
        """按z_index升序（相同z_index保持原顺序）"""
        return sorted(self.elements, key=lambda el: el.z_index)

    def visible_elements(self) -> list[Element]:
        """按绘制顺序返回可见元素"""
        return [el for el in self.sorted_elements() if el.visible]
