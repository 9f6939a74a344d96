"""
内容解析测试 - 表达式 > 列绑定 > 固定文本
"""

import pytest

from label_engine.export import ContentResolver
from label_engine.export.content_resolver import resolve_code_value, resolve_display_text


@pytest.fixture
def resolver():
    return ContentResolver()


class TestDisplayText:
    """文本元素"""

    def test_expression_binding(self, resolver, make_element, ctx):
        el = make_element("text", binding="{{MAYUS(nombre)}}")
        assert resolver.resolve_display_text(el, {"nombre": "juan"}, ctx) == "JUAN"

    def test_column_binding(self, resolver, make_element, ctx):
        el = make_element("text", binding="nombre")
        assert resolver.resolve_display_text(el, {"nombre": "Juan"}, ctx) == "Juan"

    def test_missing_column_falls_back_to_text_content(self, resolver, make_element, ctx):
        el = make_element("text", binding="nombre", text_content="Default")
        assert resolver.resolve_display_text(el, {}, ctx) == "Default"

    def test_missing_column_without_text_content(self, resolver, make_element, ctx):
        el = make_element("text", binding="nombre")
        assert resolver.resolve_display_text(el, {}, ctx) == ""

    def test_no_binding(self, resolver, make_element, ctx):
        el = make_element("text", text_content="Fijo")
        assert resolver.resolve_display_text(el, {"x": "1"}, ctx) == "Fijo"

    def test_empty_binding(self, resolver, make_element, ctx):
        el = make_element("text", binding="", text_content="Fijo")
        assert resolver.resolve_display_text(el, {"": "nope"}, ctx) == "Fijo"

    def test_module_level(self, make_element):
        el = make_element("text", binding="nombre")
        assert resolve_display_text(el, {"nombre": "Ana"}) == "Ana"


class TestCodeValue:
    """条码/QR元素"""

    def test_expression(self, resolver, make_element, make_ctx):
        el = make_element("barcode", binding="{{CONTADOR(1, 1, 6)}}")
        assert resolver.resolve_code_value(el, {}, make_ctx(0)) == "000001"

    def test_column(self, resolver, make_element, ctx):
        el = make_element("barcode", binding="sku")
        assert resolver.resolve_code_value(el, {"sku": "ABC123"}, ctx) == "ABC123"

    def test_falls_back_to_text_content(self, resolver, make_element, ctx):
        el = make_element("barcode", binding="sku", text_content="000")
        assert resolver.resolve_code_value(el, {}, ctx) == "000"

    def test_falls_back_to_binding_literal(self, resolver, make_element, ctx):
        el = make_element("qr", binding="SKU-FIXED")
        assert resolver.resolve_code_value(el, {}, ctx) == "SKU-FIXED"

    def test_nothing(self, resolver, make_element, ctx):
        el = make_element("qr")
        assert resolver.resolve_code_value(el, {}, ctx) == ""

    def test_module_level(self, make_element):
        el = make_element("barcode", text_content="123")
        assert resolve_code_value(el) == "123"


class TestColumnMapping:
    """元素ID -> 列名映射"""

    def test_mapping_takes_priority(self, resolver, make_element, ctx):
        el = make_element("text", binding="nombre")
        row = {"name_col": "Mapped", "nombre": "Direct"}
        assert resolver.resolve_display_text(el, row, ctx, {"el_1": "name_col"}) == "Mapped"

    def test_mapping_to_missing_column_uses_binding(self, resolver, make_element, ctx):
        el = make_element("text", binding="nombre")
        row = {"nombre": "Direct"}
        assert resolver.resolve_display_text(el, row, ctx, {"el_1": "missing"}) == "Direct"

    def test_mapping_for_other_element_ignored(self, resolver, make_element, ctx):
        el = make_element("barcode", binding="sku")
        row = {"sku": "1", "other": "2"}
        assert resolver.resolve_code_value(el, row, ctx, {"el_2": "other"}) == "1"

    def test_mapping_for_code_without_binding(self, resolver, make_element, ctx):
        el = make_element("qr")
        assert resolver.resolve_code_value(el, {"url": "https://x"}, ctx, {"el_1": "url"}) == "https://x"

    def test_expression_ignores_mapping(self, resolver, make_element, ctx):
        el = make_element("text", binding="{{MAYUS(a)}}")
        row = {"a": "x", "b": "y"}
        assert resolver.resolve_display_text(el, row, ctx, {"el_1": "b"}) == "X"
