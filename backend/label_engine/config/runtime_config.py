"""
运行期配置 - 读取 documents/label_runtime.yaml

职责：
- 加载渲染默认值/批量并发/日志等运行参数
- 提供环境变量覆盖机制（LABEL_ENGINE_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class RenderConfig(BaseModel):
    """渲染默认值"""

    default_dpi: int = 203
    default_font_size: float = 10.0
    px_per_mm: float = 6.0


class BatchConfig(BaseModel):
    """批量渲染配置"""

    max_workers: int = Field(1, ge=1)
    max_rows: int = Field(10000, ge=1)


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"


class RuntimeConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    render: RenderConfig = Field(default_factory=RenderConfig)
    batch: BatchConfig = Field(default_factory=BatchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "LABEL_ENGINE_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> RuntimeConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        runtime_opts = data.get("runtime_options", {})

        return cls(
            render=RenderConfig(**cls._extract(runtime_opts, "render")),
            batch=BatchConfig(**cls._extract(runtime_opts, "batch")),
            logging=LoggingConfig(**cls._extract(runtime_opts, "logging")),
        )

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result


def setup_logging(config: RuntimeConfig | None = None) -> None:
    """按配置初始化根日志"""
    cfg = config or get_config()
    level = getattr(logging, cfg.logging.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# 全局配置实例
_config: RuntimeConfig | None = None


def get_config() -> RuntimeConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        default_path = Path("documents/label_runtime.yaml")
        if not default_path.exists():
            fallback_path = Path("config/label_runtime.yaml")
            if fallback_path.exists():
                default_path = fallback_path
        _config = RuntimeConfig.from_yaml(default_path)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> RuntimeConfig:
    """重新加载配置"""
    global _config
    path = yaml_path or "documents/label_runtime.yaml"
    _config = RuntimeConfig.from_yaml(path)
    return _config
