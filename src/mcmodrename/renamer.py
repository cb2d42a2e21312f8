"""模组重命名器

依次处理目录中的每个 jar：提取身份、查询译名与注册表、生成文件名并重命名。
单个文件失败不会中断整个批次。
"""

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol

from mcmodrename.archive import extract_identity
from mcmodrename.models import (
    BatchResult,
    FileFailure,
    RegistryRecord,
    RenameOutcome,
    RenameStatus,
    ResolvedLabel,
)
from mcmodrename.resolver import resolve_label
from mcmodrename.scanner import JarScanner
from mcmodrename.validator import build_target_path, check_target_exists

logger = logging.getLogger(__name__)


class NameLookup(Protocol):
    def lookup(self, mod_id: str) -> str | None: ...


class RecordFetcher(Protocol):
    def fetch(self, mod_id: str) -> RegistryRecord | None: ...


class ModRenamer:
    """单文件重命名"""

    def rename(
        self, src: Path, label: ResolvedLabel, dry_run: bool = False
    ) -> RenameOutcome:
        """按解析结果重命名文件

        目标与源相同或目标已存在时不做任何操作。

        Args:
            src: 源文件路径
            label: 解析结果
            dry_run: 是否只模拟执行

        Returns:
            重命名结果

        Raises:
            OSError: 重命名失败
        """
        tgt = build_target_path(src, label.final_name)

        if tgt == src:
            return RenameOutcome(src, tgt, RenameStatus.UNCHANGED)

        if check_target_exists(src, tgt):
            logger.info(f"目标已存在，跳过: {tgt.name}")
            return RenameOutcome(src, tgt, RenameStatus.SKIPPED_EXISTS)

        if dry_run:
            return RenameOutcome(src, tgt, RenameStatus.DRY_RUN)

        if not _move_no_clobber(src, tgt):
            logger.info(f"目标已存在，跳过: {tgt.name}")
            return RenameOutcome(src, tgt, RenameStatus.SKIPPED_EXISTS)

        logger.info(f"重命名: {src.name} -> {tgt.name}")
        return RenameOutcome(src, tgt, RenameStatus.RENAMED)


def _move_no_clobber(src: Path, tgt: Path) -> bool:
    """同目录内移动文件，目标已存在时返回 False

    优先用硬链接 + 删除源文件，目标在检查之后才出现时也不会被覆盖。
    """
    try:
        os.link(src, tgt)
    except FileExistsError:
        return False
    except OSError:
        # 文件系统不支持硬链接（如 FAT32），退回到 rename
        try:
            src.rename(tgt)
        except FileExistsError:
            return False
        return True

    src.unlink()
    return True


class ModPipeline:
    """批量处理流程"""

    def __init__(
        self,
        store: NameLookup,
        registry: RecordFetcher,
        translations: Mapping[str, str],
        renamer: ModRenamer | None = None,
        scanner: JarScanner | None = None,
    ):
        """初始化处理流程

        Args:
            store: 译名数据库
            registry: 注册表客户端
            translations: 分类翻译表
            renamer: 重命名器
            scanner: 扫描器
        """
        self.store = store
        self.registry = registry
        self.translations = translations
        self.renamer = renamer or ModRenamer()
        self.scanner = scanner or JarScanner()

    def resolve(self, path: Path) -> ResolvedLabel:
        """计算单个 jar 的新文件名"""
        identity = extract_identity(path)
        logger.debug(
            f"DisplayName: {identity.display_name or identity.mod_id} "
            f"(ModID: {identity.mod_id}, Version: {identity.version})"
        )

        localized = self.store.lookup(identity.mod_id)
        record = self.registry.fetch(identity.mod_id)
        label = resolve_label(identity, localized, record, self.translations)

        logger.debug(
            f"名称来源: {label.name_source.value}, "
            f"数据库: {localized is not None}, Modrinth: {record is not None}"
        )
        return label

    def process_file(self, path: Path, dry_run: bool = False) -> RenameOutcome:
        """处理单个 jar

        Raises:
            ModArchiveError: 归档无法读取或清单缺失/损坏
            OSError: 重命名失败
        """
        logger.debug(f"--- 处理文件: {path.name} ---")
        label = self.resolve(path)
        outcome = self.renamer.rename(path, label, dry_run=dry_run)
        logger.debug(f"{path.name} -> {outcome.target.name} ({outcome.status.value})")
        return outcome

    def process_folder(
        self,
        folder: Path,
        dry_run: bool = False,
        on_outcome: Callable[[RenameOutcome], None] | None = None,
    ) -> BatchResult:
        """顺序处理目录中的所有 jar

        Args:
            folder: 模组目录
            dry_run: 是否只模拟执行
            on_outcome: 每个文件处理完成后立即调用，用于实时输出

        Raises:
            NotADirectoryError: 路径不是目录
        """
        result = BatchResult()

        for path in self.scanner.scan(folder):
            try:
                outcome = self.process_file(path, dry_run=dry_run)
            except Exception as e:
                logger.error(f"处理失败 {path.name}: {e}")
                result.failures.append(FileFailure(path=path, message=str(e)))
                continue

            result.outcomes.append(outcome)
            if on_outcome is not None:
                on_outcome(outcome)

        return result
