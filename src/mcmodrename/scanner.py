"""模组文件扫描器

列出目录中（不递归）的 .jar 文件。
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

JAR_SUFFIX = ".jar"


class JarScanner:
    """jar 文件扫描器"""

    def __init__(self, suffix: str = JAR_SUFFIX):
        self.suffix = suffix

    def scan(self, folder: Path) -> list[Path]:
        """扫描目录，返回按文件名排序的 jar 文件列表

        Args:
            folder: 要扫描的目录

        Returns:
            jar 文件路径列表

        Raises:
            NotADirectoryError: 路径不存在或不是目录
        """
        folder = Path(folder)

        if not folder.is_dir():
            raise NotADirectoryError(f"路径不是目录: {folder}")

        jars = sorted(
            (p for p in folder.iterdir() if p.is_file() and p.suffix == self.suffix),
            key=lambda p: p.name,
        )
        logger.debug(f"扫描 {folder}: {len(jars)} 个 jar 文件")
        return jars
