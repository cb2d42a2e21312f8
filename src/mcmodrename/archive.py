"""模组归档读取

从 jar 中的 META-INF/neoforge.mods.toml 提取 modId、displayName 和版本号。
"""

import logging
import zipfile
import zlib
from pathlib import Path

import toml

from mcmodrename.models import ModIdentity, ModsToml

logger = logging.getLogger(__name__)

MODS_TOML_ENTRY = "META-INF/neoforge.mods.toml"
MANIFEST_ENTRY = "META-INF/MANIFEST.MF"
JAR_VERSION_PLACEHOLDER = "${file.jarVersion}"
IMPLEMENTATION_VERSION_KEY = "Implementation-Version:"
UNKNOWN_VERSION = "unknown"


class ModArchiveError(Exception):
    """归档处理错误基类"""


class ArchiveError(ModArchiveError):
    """归档无法打开或已损坏"""


class ManifestMissing(ModArchiveError):
    """归档中没有 neoforge.mods.toml"""


class ManifestMalformed(ModArchiveError):
    """neoforge.mods.toml 无法解析"""


def extract_identity(path: Path) -> ModIdentity:
    """读取归档并返回模组身份

    多个 [[mods]] 条目时只使用第一个。

    Args:
        path: jar 文件路径

    Returns:
        ModIdentity

    Raises:
        ArchiveError: 文件无法作为 zip 打开
        ManifestMissing: 缺少 neoforge.mods.toml
        ManifestMalformed: neoforge.mods.toml 格式错误
    """
    path = Path(path)
    try:
        with zipfile.ZipFile(path) as jar:
            config = _read_mods_toml(jar, path)
            entry = config.mods[0]
            version = entry.version
            if version == JAR_VERSION_PLACEHOLDER:
                version = read_manifest_version(jar) or UNKNOWN_VERSION
    except (
        OSError,
        EOFError,
        RuntimeError,  # 加密条目
        NotImplementedError,  # 不支持的压缩方式
        zipfile.BadZipFile,
        zlib.error,
    ) as e:
        raise ArchiveError(f"无法读取归档 {path.name}: {e}") from e

    return ModIdentity(
        mod_id=entry.mod_id,
        display_name=entry.display_name,
        version=version,
    )


def _read_mods_toml(jar: zipfile.ZipFile, path: Path) -> ModsToml:
    try:
        raw = jar.read(MODS_TOML_ENTRY)
    except KeyError as e:
        raise ManifestMissing(f"{path.name} 中没有 {MODS_TOML_ENTRY}") from e

    try:
        data = toml.loads(raw.decode("utf-8"))
        return ModsToml.model_validate(data)
    except ValueError as e:  # TomlDecodeError、ValidationError、UnicodeDecodeError
        raise ManifestMalformed(f"{path.name} 的 {MODS_TOML_ENTRY} 解析失败: {e}") from e


def read_manifest_version(jar: zipfile.ZipFile) -> str | None:
    """从 MANIFEST.MF 读取 Implementation-Version

    Returns:
        版本号，条目缺失或没有该字段时返回 None
    """
    try:
        text = jar.read(MANIFEST_ENTRY).decode("utf-8")
    except (
        KeyError,
        UnicodeDecodeError,
        EOFError,
        RuntimeError,
        NotImplementedError,
        zipfile.BadZipFile,
        zlib.error,
    ) as e:
        logger.debug(f"读取 {MANIFEST_ENTRY} 失败: {e}")
        return None

    return parse_manifest_version(text)


def parse_manifest_version(text: str) -> str | None:
    """在 MANIFEST.MF 文本中查找 Implementation-Version 行"""
    for line in text.splitlines():
        if line.startswith(IMPLEMENTATION_VERSION_KEY):
            return line.split(":", 1)[1].strip()
    logger.debug(f"{MANIFEST_ENTRY} 中没有 {IMPLEMENTATION_VERSION_KEY}")
    return None
