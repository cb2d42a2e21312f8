"""mcmodrename CLI 入口点"""

import sys

from mcmodrename.cli import app


def ensure_utf8_streams():
    """Windows 控制台下把 stdout/stderr 切换为 UTF-8

    模组中文名和分类标签在 GBK 控制台中会输出乱码或直接抛出编码错误。
    """
    if sys.platform != "win32":
        return
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def main():
    """CLI 主入口"""
    ensure_utf8_streams()
    app()


if __name__ == "__main__":
    main()
