"""
数据模型单元测试

每个模块完成后必须运行：pytest tests/unit/test_models.py -v
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from label_engine.models import (
    BarcodeFormat,
    Design,
    Element,
    ElementType,
    QRErrorLevel,
    RenderContext,
    RenderOptions,
)


class TestElement:
    """元素模型测试"""

    def test_defaults(self):
        el = Element(id="e", type="text")
        assert el.visible is True
        assert el.z_index == 0
        assert el.rotation == 0.0
        assert el.barcode_format == BarcodeFormat.CODE128.value
        assert el.qr_error_level == QRErrorLevel.M.value

    def test_known_type(self):
        assert Element(id="e", type="qr").element_type is ElementType.QR

    def test_unknown_type_kept(self):
        el = Element(id="e", type="sticker")
        assert el.type == "sticker"
        assert el.element_type is None

    def test_frozen(self):
        el = Element(id="e", type="text")
        with pytest.raises(ValidationError):
            el.x = 5

    def test_rotation_accepts_any(self):
        assert Element(id="e", type="text", rotation="abc").rotation == "abc"

    @pytest.mark.parametrize("field,default", [
        ("x", 0.0),
        ("y", 0.0),
        ("z_index", 0),
        ("visible", True),
        ("barcode_show_text", False),
        ("font_family", "Arial"),
        ("border_radius", 0.0),
    ])
    def test_null_uses_default(self, field, default):
        """编辑器导出的null字段取默认值"""
        el = Element(id="e", type="text", **{field: None})
        assert getattr(el, field) == default

    def test_editor_only_fields_ignored(self):
        el = Element(id="e", type="image", locked=True, image_data="data:image/png;base64,AAAA")
        assert not hasattr(el, "locked")
        assert not hasattr(el, "image_data")


class TestDesign:
    """设计模型测试"""

    def test_sorted_elements_stable(self):
        design = Design(width_mm=10, height_mm=10, elements=[
            Element(id="a", type="text", z_index=1),
            Element(id="b", type="text", z_index=0),
            Element(id="c", type="text", z_index=1),
        ])
        assert [el.id for el in design.sorted_elements()] == ["b", "a", "c"]

    def test_visible_elements(self):
        design = Design(width_mm=10, height_mm=10, elements=[
            Element(id="a", type="text", visible=False),
            Element(id="b", type="text"),
        ])
        assert [el.id for el in design.visible_elements()] == ["b"]

    def test_requires_size(self):
        with pytest.raises(ValidationError):
            Design(width_mm=10)


class TestRenderOptions:
    """渲染选项/上下文测试"""

    def test_negative_row_index(self):
        with pytest.raises(ValidationError):
            RenderContext(row_index=-1)

    def test_zero_batch_size(self):
        with pytest.raises(ValidationError):
            RenderOptions(batch_size=0)

    def test_for_row(self):
        opts = RenderOptions(dpi=300, column_mapping={"a": "b"})
        row_opts = opts.for_row(4, 10)
        assert (row_opts.row_index, row_opts.batch_size, row_opts.dpi) == (4, 10, 300)
        assert row_opts.column_mapping == {"a": "b"}
        assert opts.row_index == 0

    def test_to_context_fixed_now(self, fixed_now):
        ctx = RenderOptions(row_index=2, batch_size=3, now=fixed_now).to_context()
        assert ctx == RenderContext(row_index=2, batch_size=3, now=fixed_now)

    def test_to_context_captures_now(self):
        ctx = RenderOptions().to_context()
        assert ctx.now.tzinfo is not None
        assert ctx.now <= datetime.now(timezone.utc)
