"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(ctx, make_element):
        el = make_element("text", text_content="Hola")
"""

from __future__ import annotations

import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Generator

import pytest

from label_engine.config import RuntimeConfig
from label_engine.export import ZplGenerator
from label_engine.models import Design, Element, RenderContext, RenderOptions


# ============================================================================
# 时间与上下文 Fixtures
# ============================================================================

FIXED_NOW = datetime(2026, 3, 15, 10, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """固定渲染时刻 2026-03-15 10:30 UTC"""
    return FIXED_NOW


@pytest.fixture
def ctx(fixed_now: datetime) -> RenderContext:
    """第0行的渲染上下文"""
    return RenderContext(row_index=0, batch_size=1, now=fixed_now)


@pytest.fixture
def make_ctx(fixed_now: datetime) -> Callable[..., RenderContext]:
    """按行号构造上下文"""
    def _make(row_index: int = 0, now: datetime | None = None) -> RenderContext:
        return RenderContext(row_index=row_index, batch_size=max(row_index + 1, 1), now=now or fixed_now)
    return _make


@pytest.fixture
def sample_row() -> dict[str, Any]:
    """示例数据行"""
    return {"nombre": "Juan", "apellido": "Perez", "edad": "20", "lote": "A1"}


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（默认值）"""
    return RuntimeConfig()


@pytest.fixture
def generator(runtime_config: RuntimeConfig) -> ZplGenerator:
    """ZPL生成器"""
    return ZplGenerator(runtime_config)


@pytest.fixture
def opts(fixed_now: datetime) -> RenderOptions:
    """203 DPI、固定时刻的渲染选项"""
    return RenderOptions(dpi=203, now=fixed_now)


# ============================================================================
# 设计 Fixtures
# ============================================================================

@pytest.fixture
def make_element() -> Callable[..., Element]:
    """元素工厂（缺省值：位于5mm,5mm，20x10mm，字号12px，边框0.5mm）"""
    def _make(type_: str, **overrides: Any) -> Element:
        data: dict[str, Any] = {
            "id": "el_1",
            "type": type_,
            "x": 5.0,
            "y": 5.0,
            "width": 20.0,
            "height": 10.0,
            "font_size": 12.0,
            "border_width": 0.5,
        }
        data.update(overrides)
        return Element(**data)
    return _make


@pytest.fixture
def make_design() -> Callable[..., Design]:
    """设计工厂（默认50x30mm）"""
    def _make(elements: list[Element] | None = None, width_mm: float = 50, height_mm: float = 30) -> Design:
        return Design(width_mm=width_mm, height_mm=height_mm, elements=elements or [])
    return _make


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
