"""mcmodrename - Minecraft 模组文件重命名工具

根据模组清单、本地译名数据库和 Modrinth 注册表，为 jar 文件加上中文名、端位和分类标签。
"""

__version__ = "0.1.0"

# 导出核心函数
from mcmodrename.archive import extract_identity
from mcmodrename.resolver import resolve_label
from mcmodrename.validator import ILLEGAL_CHARS, sanitize_filename

__all__ = [
    "extract_identity",
    "resolve_label",
    "sanitize_filename",
    "ILLEGAL_CHARS",
]
