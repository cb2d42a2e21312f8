"""模组译名数据库

使用 SQLite 查询模组中文名；首次使用时从远程下载 gzip 压缩的数据库。
"""

import gzip
import json
import logging
import shutil
import sqlite3
import zlib
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

# PCL2-CE 维护的模组译名数据库
DEFAULT_DB_URL = (
    "https://raw.githubusercontent.com/PCL-Community/PCL2-CE/refs/heads/dev/"
    "Plain%20Craft%20Launcher%202/Resources/ModData.dbcp"
)
DEFAULT_DB_NAME = "ModData.db"
DEFAULT_CATEGORIES_FILE = "categories.json"

LOOKUP_SQL = (
    "SELECT ChineseName FROM ModTranslation "
    "WHERE CurseForgeSlug = ? OR ModrinthSlug = ? LIMIT 1"
)


class TranslationStoreError(Exception):
    """译名数据库初始化失败"""


class CategoryMapError(Exception):
    """分类翻译文件读取失败"""


class TranslationStore:
    """模组译名数据库"""

    def __init__(self, url: str, db_path: Path, timeout: float = 30.0):
        """初始化译名数据库

        本地文件不存在时先下载并解压。

        Args:
            url: 远程 gzip 数据库地址
            db_path: 本地数据库文件路径
            timeout: 下载超时时间（秒）

        Raises:
            TranslationStoreError: 下载、解压或连接失败
        """
        self.url = url
        self.db_path = Path(db_path)
        self.timeout = timeout

        if not self.db_path.exists():
            self._download()

        try:
            self.conn = sqlite3.connect(str(self.db_path))
            # 非 SQLite 文件在这里就会报错
            self.conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as e:
            raise TranslationStoreError(f"无法打开数据库 {self.db_path}: {e}") from e

    def _download(self) -> None:
        """下载并解压数据库到 db_path"""
        logger.info(f"下载译名数据库: {self.url}")
        tmp_path = self.db_path.with_name(self.db_path.name + ".part")

        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = gzip.decompress(response.content)
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_bytes(data)
            shutil.move(str(tmp_path), str(self.db_path))
        except (requests.RequestException, OSError, EOFError, zlib.error) as e:
            tmp_path.unlink(missing_ok=True)
            raise TranslationStoreError(f"下载译名数据库失败 ({self.url}): {e}") from e

        logger.info(f"译名数据库已保存到: {self.db_path}")

    def lookup(self, mod_id: str) -> str | None:
        """查询模组中文名

        Args:
            mod_id: modId，与 CurseForge 或 Modrinth slug 匹配

        Returns:
            中文名，未找到或查询出错时返回 None
        """
        try:
            row = self.conn.execute(LOOKUP_SQL, (mod_id, mod_id)).fetchone()
        except sqlite3.Error as e:
            logger.debug(f"查询译名失败 {mod_id}: {e}")
            return None

        if not row or not row[0]:
            return None
        return row[0]

    def close(self) -> None:
        """关闭数据库连接"""
        self.conn.close()

    def __enter__(self) -> "TranslationStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def load_category_map(path: Path) -> dict[str, str] | None:
    """读取分类翻译表

    Args:
        path: categories.json 路径

    Returns:
        分类 ID 到译名的映射；文件不存在时返回 None

    Raises:
        CategoryMapError: 文件无法读取或不是字符串到字符串的 JSON 对象
    """
    path = Path(path)
    if not path.exists():
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CategoryMapError(f"读取 {path} 失败: {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise CategoryMapError(f"{path} 必须是字符串到字符串的 JSON 对象")

    return data
