"""
配置层 - 加载运行期配置与设计文件

职责：
- 加载 documents/label_runtime.yaml（运行期参数）
- 加载设计文件/数据行文件
- 提供类型安全的配置访问接口
"""

from .design_loader import load_design, load_rows
from .runtime_config import RuntimeConfig, get_config, reload_config, setup_logging

__all__ = [
    "RuntimeConfig",
    "get_config",
    "reload_config",
    "setup_logging",
    "load_design",
    "load_rows",
]
