"""
ZPL生成器 - 标签设计 + 数据行 -> ZPL程序

职责：
1. 按z_index升序遍历可见元素
2. 毫米坐标换算为打印点（按DPI）
3. 按元素类型输出ZPL指令（文本/条码/QR/矩形/线/圆/图片占位）
4. 批量：每行一张标签，按行序以换行拼接（行数上限由调用方决定）

依赖：
- expression: 解析元素绑定的表达式
- 运行期配置: 默认DPI/默认字号/批量并发

测试要点：
- test_header_footer: ^XA/^PW/^LL/^XZ 结构
- test_text_escape: ^ 和 ~ 替换为空格
- test_barcode_formats: 各码制指令
- test_qr_error_level: 纠错等级兜底为M
- test_batch_order: 批量输出与逐行生成一致
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..config import RuntimeConfig, get_config
from ..interfaces import ILabelCodeGenerator
from ..models import (
    BarcodeFormat,
    Design,
    Element,
    ElementType,
    QRErrorLevel,
    RenderContext,
    RenderOptions,
    utc_now,
)
from .content_resolver import ContentResolver
from .text_fit import calc_auto_fit_font_dots
from .units import dots_per_mm, mm_to_dots, rotation_to_zpl

logger = logging.getLogger(__name__)

# 元素缺省尺寸（mm）
DEFAULT_SIZE_MM = 10.0
DEFAULT_BORDER_MM = 0.5
DEFAULT_FIT_BOX_W_MM = 60.0
DEFAULT_FIT_BOX_H_MM = 14.0
DEFAULT_MIN_FONT_SIZE = 6.0

# 各码制指令模板（^FO 与 ^FD 之间的部分）
#   rot: 方向码  h: 条高(点)  hr: 是否显示可读文本(Y/N)
#   mag: 二维码放大倍数  cols: PDF417列数
_CODE128 = "^BC{rot},{h},{hr},N,N"

BARCODE_COMMANDS: dict[BarcodeFormat, str] = {
    BarcodeFormat.CODE128: _CODE128,
    BarcodeFormat.CODE39: "^B3{rot},N,{h},{hr},N",
    BarcodeFormat.CODE93: "^BA{rot},{h},{hr},N,N",
    BarcodeFormat.EAN13: "^BE{rot},{h},{hr},N",
    BarcodeFormat.EAN8: "^B8{rot},{h},{hr},N",
    BarcodeFormat.UPC: "^BU{rot},{h},{hr},N,Y",
    BarcodeFormat.ITF14: "^BI{rot},{h},{hr},N",
    BarcodeFormat.CODABAR: "^BK{rot},N,{h},{hr},N,A,A",
    # ZPL无原生MSI，按Code128输出
    BarcodeFormat.MSI: _CODE128,
    BarcodeFormat.DATAMATRIX: "^BXN,{mag},200",
    BarcodeFormat.PDF417: "^B7{rot},{cols},0,0,0,N",
    BarcodeFormat.AZTEC: "^BO{rot},{mag},N",
    BarcodeFormat.MAXICODE: "^BD{rot},1,Y",
    BarcodeFormat.POSTNET: "^BZ{rot},{h},{hr},N",
    BarcodeFormat.PLANET: "^BZ{rot},{h},{hr},N",
    # GS1系列无对应指令，按Code128输出
    BarcodeFormat.GS1_128: _CODE128,
    BarcodeFormat.GS1_DATABAR: _CODE128,
    BarcodeFormat.GS1_DATABAR_STACKED: _CODE128,
    BarcodeFormat.GS1_DATABAR_EXPANDED: _CODE128,
}


def escape_zpl(value: Any) -> str:
    """^ 与 ~ 为ZPL指令前缀，字段数据中替换为空格"""
    if value is None:
        return ""
    return str(value).replace("^", " ").replace("~", " ")


def _size(value: float | None, default: float = DEFAULT_SIZE_MM) -> float:
    return default if value is None else value


class ZplGenerator(ILabelCodeGenerator):
    """ZPL代码生成器"""

    def __init__(
        self,
        config: RuntimeConfig | None = None,
        resolver: ContentResolver | None = None,
    ):
        self.config = config or get_config()
        self.resolver = resolver or ContentResolver()

        self._emitters: dict[ElementType, Callable[..., str]] = {
            ElementType.TEXT: self._text_to_zpl,
            ElementType.BARCODE: self._barcode_to_zpl,
            ElementType.QR: self._qr_to_zpl,
            ElementType.RECTANGLE: self._rectangle_to_zpl,
            ElementType.LINE: self._line_to_zpl,
            ElementType.CIRCLE: self._circle_to_zpl,
            ElementType.IMAGE: self._image_placeholder_to_zpl,
        }

    def default_options(self) -> RenderOptions:
        return RenderOptions(dpi=self.config.render.default_dpi)

    def generate(
        self,
        design: Design,
        row: Mapping[str, Any] | None = None,
        opts: RenderOptions | None = None,
    ) -> str:
        """生成单张标签"""
        opts = opts or self.default_options()
        row = row or {}
        ctx = opts.to_context()
        dpmm = dots_per_mm(opts.dpi)

        w_dots = mm_to_dots(design.width_mm, dpmm)
        h_dots = mm_to_dots(design.height_mm, dpmm)

        blocks = []
        for element in design.visible_elements():
            block = self.render_element(element, row, ctx, dpmm, opts.column_mapping)
            if block is not None:
                blocks.append(block)

        elements_zpl = "\n".join(blocks)
        return f"^XA\n^PW{w_dots}\n^LL{h_dots}\n{elements_zpl}\n^XZ"

    def generate_batch(
        self,
        design: Design,
        rows: Sequence[Mapping[str, Any]],
        opts: RenderOptions | None = None,
    ) -> str:
        """生成批量标签（第i行位于输出第i段）"""
        rows = list(rows)
        base = opts or self.default_options()
        if base.now is None:
            # 整批共用同一时刻
            base = base.model_copy(update={"now": utc_now()})

        batch_size = max(len(rows), 1)
        jobs = [(row, base.for_row(idx, batch_size)) for idx, row in enumerate(rows)]
        workers = min(self.config.batch.max_workers, max(len(jobs), 1))

        logger.info(f"批量生成ZPL: rows={len(rows)} dpi={base.dpi} workers={workers}")

        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                programs = list(pool.map(lambda job: self.generate(design, job[0], job[1]), jobs))
        else:
            programs = [self.generate(design, row, row_opts) for row, row_opts in jobs]

        return "\n".join(programs)

    def render_element(
        self,
        element: Element,
        row: Mapping[str, Any],
        ctx: RenderContext,
        dpmm: int,
        column_mapping: Mapping[str, str] | None = None,
    ) -> str | None:
        """单个元素 -> ZPL；未知类型返回None"""
        element_type = element.element_type
        if element_type is None:
            logger.debug(f"未知元素类型，已跳过: {element.id} ({element.type})")
            return None

        x = mm_to_dots(element.x, dpmm)
        y = mm_to_dots(element.y, dpmm)
        emit = self._emitters[element_type]
        return emit(element, row, ctx, x, y, dpmm, column_mapping)

    # ========================================================================
    # 文本
    # ========================================================================

    def _text_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        text = self.resolver.resolve_display_text(element, row, ctx, column_mapping)
        text = escape_zpl(text)

        # 画布字号单位为px（6px/mm）
        render_cfg = self.config.render
        font_size = element.font_size or render_cfg.default_font_size
        font_h = mm_to_dots(font_size / render_cfg.px_per_mm, dpmm)

        if element.text_auto_fit and text:
            box_w = mm_to_dots(_size(element.width, DEFAULT_FIT_BOX_W_MM), dpmm)
            box_h = mm_to_dots(_size(element.height, DEFAULT_FIT_BOX_H_MM), dpmm)
            min_size = element.text_min_font_size or DEFAULT_MIN_FONT_SIZE
            min_font_h = max(mm_to_dots(min_size / render_cfg.px_per_mm, dpmm), 1)
            font_h = calc_auto_fit_font_dots(text, box_w, box_h, font_h, min_font_h)

        rot = rotation_to_zpl(element.rotation)
        return f"^FO{x},{y}^A0{rot},{font_h},{font_h}^FD{text}^FS"

    # ========================================================================
    # 条码
    # ========================================================================

    def _barcode_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        data = self.resolver.resolve_code_value(element, row, ctx, column_mapping)
        data = escape_zpl(data)
        h = mm_to_dots(_size(element.height), dpmm)

        try:
            fmt = BarcodeFormat(element.barcode_format)
        except ValueError:
            logger.debug(f"未知码制 {element.barcode_format!r}，按CODE128输出: {element.id}")
            fmt = BarcodeFormat.CODE128

        command = BARCODE_COMMANDS[fmt].format(
            rot=rotation_to_zpl(element.rotation),
            h=h,
            hr="Y" if element.barcode_show_text else "N",
            mag=max(h // 20, 1),
            cols=max(h // 10, 1),
        )
        return f"^FO{x},{y}{command}^FD{data}^FS"

    # ========================================================================
    # QR
    # ========================================================================

    def _qr_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        data = self.resolver.resolve_code_value(element, row, ctx, column_mapping)
        data = escape_zpl(data)
        size = mm_to_dots(_size(element.width), dpmm)
        mag = max(size // 30, 2)

        try:
            level = QRErrorLevel(element.qr_error_level)
        except ValueError:
            logger.debug(f"未知纠错等级 {element.qr_error_level!r}，按M输出: {element.id}")
            level = QRErrorLevel.M

        return f"^FO{x},{y}^BQN,2,{mag},{level.value}^FDQA,{data}^FS"

    # ========================================================================
    # 形状
    # ========================================================================

    def _border_dots(self, element: Element, dpmm: int) -> int:
        """边框最小1点"""
        return max(mm_to_dots(_size(element.border_width, DEFAULT_BORDER_MM), dpmm), 1)

    def _rectangle_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        w = mm_to_dots(_size(element.width), dpmm)
        h = mm_to_dots(_size(element.height), dpmm)
        border = self._border_dots(element, dpmm)
        return f"^FO{x},{y}^GB{w},{h},{border}^FS"

    def _line_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        w = mm_to_dots(_size(element.width), dpmm)
        if element.border_width is not None:
            thickness_mm = element.border_width
        else:
            thickness_mm = _size(element.height, DEFAULT_BORDER_MM)
        thickness = max(mm_to_dots(thickness_mm, dpmm), 1)
        return f"^FO{x},{y}^GB{w},{thickness},{thickness}^FS"

    def _circle_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        diameter = mm_to_dots(min(_size(element.width), _size(element.height)), dpmm)
        border = self._border_dots(element, dpmm)
        return f"^FO{x},{y}^GC{diameter},{border}^FS"

    def _image_placeholder_to_zpl(self, element, row, ctx, x, y, dpmm, column_mapping) -> str:
        # 不支持光栅图，输出占位框
        w = mm_to_dots(_size(element.width), dpmm)
        h = mm_to_dots(_size(element.height), dpmm)
        return f"^FO{x},{y}^GB{w},{h},1^FS"


def generate(
    design: Design,
    row: Mapping[str, Any] | None = None,
    opts: RenderOptions | None = None,
) -> str:
    """生成单张标签（使用全局配置）"""
    return ZplGenerator().generate(design, row, opts)


def generate_batch(
    design: Design,
    rows: Sequence[Mapping[str, Any]],
    opts: RenderOptions | None = None,
) -> str:
    """生成批量标签（使用全局配置）"""
    return ZplGenerator().generate_batch(design, rows, opts)
