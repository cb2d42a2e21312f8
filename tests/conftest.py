from __future__ import annotations

import sqlite3
import zipfile
from pathlib import Path

import pytest


def build_mods_toml(mod_id: str, version: str, display_name: str | None = None) -> str:
    lines = [
        'modLoader = "javafml"',
        'loaderVersion = "[1,)"',
        'license = "MIT"',
        "",
        "[[mods]]",
        f'modId = "{mod_id}"',
        f'version = "{version}"',
    ]
    if display_name is not None:
        lines.append(f'displayName = "{display_name}"')
    return "\n".join(lines) + "\n"


def patch_zip_entry(
    path: Path, entry: str, *, encrypted: bool = False, method: int | None = None
) -> None:
    """直接改写 jar 中某个条目的本地头和中央目录头

    encrypted 置位加密标志，method 改写压缩方式；zipfile 读取时分别抛出
    RuntimeError 和 NotImplementedError。
    """
    data = bytearray(path.read_bytes())
    name = entry.encode("utf-8")
    # (签名, 文件名偏移, 标志位偏移, 压缩方式偏移)
    headers = [(b"PK\x03\x04", 30, 6, 8), (b"PK\x01\x02", 46, 8, 10)]
    for signature, name_offset, flag_offset, method_offset in headers:
        pos = data.find(signature)
        while pos != -1:
            start = pos + name_offset
            if data[start:start + len(name)] == name:
                if encrypted:
                    data[pos + flag_offset] |= 0x01
                if method is not None:
                    data[pos + method_offset:pos + method_offset + 2] = method.to_bytes(2, "little")
            pos = data.find(signature, pos + 1)
    path.write_bytes(bytes(data))


@pytest.fixture
def make_jar(tmp_path):
    """在 tmp_path 下生成一个只含 META-INF 条目的 jar"""

    def _make(
        name: str = "example.jar",
        mods_toml: str | None = None,
        manifest: str | None = None,
        folder: Path | None = None,
    ) -> Path:
        target = (folder or tmp_path) / name
        with zipfile.ZipFile(target, "w") as jar:
            if mods_toml is not None:
                jar.writestr("META-INF/neoforge.mods.toml", mods_toml)
            if manifest is not None:
                jar.writestr("META-INF/MANIFEST.MF", manifest)
        return target

    return _make


@pytest.fixture
def translation_db(tmp_path) -> Path:
    """ModTranslation 表结构与 PCL2-CE 的 ModData 一致"""
    db_path = tmp_path / "ModData.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute(
        "CREATE TABLE ModTranslation ("
        "CurseForgeSlug TEXT, ModrinthSlug TEXT, ChineseName TEXT)"
    )
    conn.executemany(
        "INSERT INTO ModTranslation VALUES (?, ?, ?)",
        [
            ("jei", "jei", "JEI物品管理器"),
            ("create", None, "机械动力"),
            (None, "sodium", "钠"),
            ("blankname", "blankname", ""),
        ],
    )
    conn.commit()
    conn.close()
    return db_path


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, error: Exception | None = None):
        self.status_code = status_code
        self._payload = payload
        self._error = error

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._error is not None:
            raise self._error
        return self._payload


class FakeSession:
    """按 URL 返回预设响应，记录所有请求"""

    def __init__(self, responses: dict | None = None, exc: Exception | None = None):
        self.responses = responses or {}
        self.exc = exc
        self.headers: dict[str, str] = {}
        self.calls: list[str] = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append(url)
        if self.exc is not None:
            raise self.exc
        return self.responses.get(url, FakeResponse(status_code=404))

    def close(self):
        self.closed = True


class FakeStore:
    def __init__(self, names: dict[str, str] | None = None):
        self.names = names or {}

    def lookup(self, mod_id: str) -> str | None:
        return self.names.get(mod_id)
