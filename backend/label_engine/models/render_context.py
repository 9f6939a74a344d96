"""
渲染上下文 - 单次渲染调用的输入参数

时间点在每次渲染调用开始时捕获一次，同一标签内所有日期函数看到同一时刻
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RenderContext(BaseModel):
    """表达式求值上下文"""
    row_index: int = Field(0, ge=0, description="行号(0起)")
    batch_size: int = Field(1, ge=1, description="批量总行数")
    now: datetime = Field(default_factory=utc_now, description="渲染时刻")

    model_config = {"frozen": True}


class RenderOptions(BaseModel):
    """代码生成选项"""
    dpi: int = 203
    row_index: int = Field(0, ge=0)
    batch_size: int = Field(1, ge=1)
    now: datetime | None = Field(None, description="固定渲染时刻；为空时每次调用捕获当前时间")

    # 元素ID -> 列名 的映射（优先于元素自身绑定）
    column_mapping: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def for_row(self, row_index: int, batch_size: int) -> RenderOptions:
        """派生某一行的渲染选项"""
        return self.model_copy(update={"row_index": row_index, "batch_size": batch_size})

    def to_context(self) -> RenderContext:
        """构造表达式上下文（捕获时间点）"""
        return RenderContext(
            row_index=self.row_index,
            batch_size=self.batch_size,
            now=self.now or utc_now(),
        )
