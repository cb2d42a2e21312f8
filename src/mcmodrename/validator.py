"""文件名校验

去除非法字符，检测目标路径冲突。
"""

from pathlib import Path

# Windows 与类 Unix 系统中至少一方不允许出现在文件名中的字符
ILLEGAL_CHARS = '/\\:*?"<>|'

_STRIP_TABLE = str.maketrans("", "", ILLEGAL_CHARS)


def sanitize_filename(name: str) -> str:
    """删除文件名中的非法字符（不做替换）

    Args:
        name: 原始文件名

    Returns:
        清理后的文件名
    """
    return name.translate(_STRIP_TABLE)


def build_target_path(src_path: Path, file_name: str) -> Path:
    """只替换文件名部分，保留父目录"""
    return Path(src_path).with_name(sanitize_filename(file_name))


def check_target_exists(src_path: Path, tgt_path: Path) -> bool:
    """检查目标路径是否已存在（且不是源路径本身）

    Args:
        src_path: 源路径
        tgt_path: 目标路径

    Returns:
        目标是否已存在
    """
    if src_path == tgt_path:
        return False
    return tgt_path.exists()
