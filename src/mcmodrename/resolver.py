"""名称与标签解析

根据模组身份、译名和注册表记录生成最终文件名。本模块不做任何 I/O。
"""

from collections.abc import Iterable, Mapping

from mcmodrename.models import (
    ModIdentity,
    NameSource,
    RegistryRecord,
    ResolvedLabel,
    SideSupport,
)

# (客户端, 服务端) -> 端位标签
SIDE_TAGS: dict[tuple[int, int], str] = {
    (1, 1): "[C&S]",
    (0, 0): "[C|S]",
    (-1, -1): "[Toxic]",
    (1, 0): "[C]",
    (0, 1): "[S]",
    (1, -1): "[!S]",
    (-1, 1): "[!C]",
}


def side_code(value: str | None) -> int:
    """unsupported -> -1, optional -> 0, required -> 1, 其他 -> -99"""
    return SideSupport.parse(value).code


def side_tag(client_side: str | None, server_side: str | None) -> str:
    """端位标签，未列出的组合返回空字符串"""
    return SIDE_TAGS.get((side_code(client_side), side_code(server_side)), "")


def category_tag(categories: Iterable[str], translations: Mapping[str, str]) -> str:
    """分类标签，如 ["a", "b"] -> "[a][b]"

    每个分类单独翻译，翻译表中没有的保持原样。
    """
    return "".join(f"[{translations.get(cat, cat)}]" for cat in categories)


def pick_name(
    identity: ModIdentity, localized_name: str | None
) -> tuple[str, NameSource]:
    """按 译名 > displayName > modId 选择名称"""
    if localized_name:
        return localized_name, NameSource.DB
    if identity.display_name:
        return identity.display_name, NameSource.MANIFEST
    return identity.mod_id, NameSource.MOD_ID


def resolve_label(
    identity: ModIdentity,
    localized_name: str | None,
    record: RegistryRecord | None,
    translations: Mapping[str, str],
) -> ResolvedLabel:
    """组合出最终文件名

    格式为 "{端位标签}{分类标签}{名称}-{版本}.jar"，缺失的标签为空字符串。
    """
    name, source = pick_name(identity, localized_name)

    side = ""
    categories = ""
    if record is not None:
        side = side_tag(record.client_side, record.server_side)
        categories = category_tag(record.categories, translations)

    return ResolvedLabel(
        side_tag=side,
        category_tag=categories,
        final_name=f"{side}{categories}{name}-{identity.version}.jar",
        version=identity.version,
        name_source=source,
    )
