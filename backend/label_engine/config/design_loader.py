"""
设计加载器 - 读取设计文件与数据行文件

职责：
- 解析JSON/YAML设计文件为 Design 模型
- 解析数据行列表（开发工具/测试使用）

使用方式：
    design = load_design("samples/product_label.yaml")
    rows = load_rows("samples/rows.json")
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from ..interfaces import DesignLoadError
from ..models import Design


def _read_document(path: Path) -> Any:
    """读取JSON/YAML文档（JSON是YAML子集，统一用safe_load）"""
    if not path.exists():
        raise DesignLoadError(f"文件不存在: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DesignLoadError(f"文件解析失败: {path}: {e}") from e


def load_design(design_path: str | Path) -> Design:
    """加载标签设计"""
    path = Path(design_path)
    data = _read_document(path)
    if not isinstance(data, dict):
        raise DesignLoadError(f"设计文件结构错误（应为映射）: {path}")

    # 兼容 {"design": {...}} 包裹格式
    if "design" in data and isinstance(data["design"], dict):
        data = data["design"]

    try:
        return Design(**data)
    except ValidationError as e:
        raise DesignLoadError(f"设计文件校验失败: {path}: {e}") from e


def load_rows(rows_path: str | Path) -> list[dict[str, Any]]:
    """加载数据行列表"""
    path = Path(rows_path)
    data = _read_document(path)
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise DesignLoadError(f"数据文件结构错误（应为映射列表）: {path}")
    return [{str(k): v for k, v in row.items()} for row in data]
