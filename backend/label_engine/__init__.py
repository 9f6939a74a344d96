"""
标签引擎 - 后端核心模块

模块结构：
- config/      运行期配置与设计文件加载
- models/      数据模型定义（设计/元素/渲染上下文）
- expression/  {{ }} 表达式求值（白名单函数）
- export/      内容解析与ZPL代码生成
"""

__version__ = "0.1.0"
