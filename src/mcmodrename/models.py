"""mcmodrename 数据模型

清单与注册表返回的 JSON 使用 Pydantic 校验，处理过程中的结果使用 dataclass。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ModEntry(BaseModel):
    """neoforge.mods.toml 中的单个 [[mods]] 条目"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    mod_id: str = Field(alias="modId", min_length=1)
    version: str
    display_name: str | None = Field(default=None, alias="displayName")


class ModsToml(BaseModel):
    """neoforge.mods.toml 根结构"""

    model_config = ConfigDict(extra="ignore")

    mods: list[ModEntry] = Field(min_length=1)


@dataclass(frozen=True)
class ModIdentity:
    """从归档中提取的模组身份"""

    mod_id: str
    display_name: str | None
    version: str


class SideSupport(str, Enum):
    """客户端/服务端支持程度"""

    UNSUPPORTED = "unsupported"
    OPTIONAL = "optional"
    REQUIRED = "required"
    UNKNOWN = "unknown"

    @property
    def code(self) -> int:
        return _SIDE_CODES[self]

    @classmethod
    def parse(cls, value: str | None) -> "SideSupport":
        """未知取值（包括 None）一律视为 UNKNOWN"""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


_SIDE_CODES = {
    SideSupport.UNSUPPORTED: -1,
    SideSupport.OPTIONAL: 0,
    SideSupport.REQUIRED: 1,
    SideSupport.UNKNOWN: -99,
}


class RegistryRecord(BaseModel):
    """Modrinth /project/{id} 返回中用到的字段"""

    model_config = ConfigDict(extra="ignore")

    client_side: str
    server_side: str
    categories: list[str] = []


class NameSource(str, Enum):
    """最终名称的来源"""

    DB = "db"
    MANIFEST = "manifest"
    MOD_ID = "mod_id"


@dataclass(frozen=True)
class ResolvedLabel:
    """单个归档的命名结果"""

    side_tag: str
    category_tag: str
    final_name: str
    version: str
    name_source: NameSource = NameSource.MOD_ID


# ============ 重命名结果模型 ============


class RenameStatus(str, Enum):
    """单个文件的重命名结果"""

    RENAMED = "renamed"
    UNCHANGED = "unchanged"  # 目标即源文件
    SKIPPED_EXISTS = "skipped_exists"  # 目标已存在
    DRY_RUN = "dry_run"


@dataclass
class RenameOutcome:
    """单次重命名结果"""

    source: Path
    target: Path
    status: RenameStatus


@dataclass
class FileFailure:
    """处理失败的文件"""

    path: Path
    message: str


@dataclass
class BatchResult:
    """批量处理结果"""

    outcomes: list[RenameOutcome] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    def count(self, status: RenameStatus) -> int:
        return sum(1 for o in self.outcomes if o.status == status)

    @property
    def renamed_count(self) -> int:
        return self.count(RenameStatus.RENAMED)

    @property
    def skipped_count(self) -> int:
        return self.count(RenameStatus.SKIPPED_EXISTS)

    @property
    def unchanged_count(self) -> int:
        return self.count(RenameStatus.UNCHANGED)

    @property
    def failed_count(self) -> int:
        return len(self.failures)
