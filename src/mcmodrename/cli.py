"""mcmodrename CLI

使用 typer 实现命令行界面。
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from mcmodrename.models import RenameOutcome, RenameStatus
from mcmodrename.registry import (
    DEFAULT_API_ENDPOINT,
    DEFAULT_TIMEOUT,
    RegistryCache,
    RegistryClient,
)
from mcmodrename.renamer import ModPipeline
from mcmodrename.translation import (
    DEFAULT_CATEGORIES_FILE,
    DEFAULT_DB_NAME,
    DEFAULT_DB_URL,
    CategoryMapError,
    TranslationStore,
    TranslationStoreError,
    load_category_map,
)

app = typer.Typer(
    name="mcmodrename",
    help="Minecraft 模组文件重命名工具 - 添加中文名、端位和分类标签",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    """配置日志输出到 stderr"""
    logger = logging.getLogger("mcmodrename")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def print_outcome(outcome: RenameOutcome) -> None:
    """每个文件处理完后立即输出"""
    if outcome.status == RenameStatus.RENAMED:
        console.print(f"[green]Renamed:[/green] {escape(outcome.target.name)}")
    elif outcome.status == RenameStatus.DRY_RUN:
        console.print(f"  {escape(outcome.source.name)} -> {escape(outcome.target.name)}")


@app.command()
def main(
    path: Annotated[
        Path,
        typer.Option("-p", "--path", help="需要扫描的文件夹路径"),
    ] = Path("./mods"),
    url: Annotated[
        str,
        typer.Option("-u", "--url", help="数据库下载链接"),
    ] = DEFAULT_DB_URL,
    api_endpoint: Annotated[
        str,
        typer.Option("-a", "--api-endpoint", help="Modrinth API 端点 (默认 v2)"),
    ] = DEFAULT_API_ENDPOINT,
    db_name: Annotated[
        Path,
        typer.Option("-d", "--db-name", help="数据库本地存储名称"),
    ] = Path(DEFAULT_DB_NAME),
    categories: Annotated[
        Path,
        typer.Option("-c", "--categories", help="分类翻译文件"),
    ] = Path(DEFAULT_CATEGORIES_FILE),
    timeout: Annotated[
        float,
        typer.Option("--timeout", help="网络请求超时时间（秒）", min=0.1),
    ] = DEFAULT_TIMEOUT,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="只显示新文件名，不实际重命名"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="输出更多调试信息"),
    ] = False,
) -> None:
    """扫描文件夹并重命名其中的模组 jar 文件"""
    setup_logging(verbose)

    # 1. 加载分类翻译
    try:
        category_map = load_category_map(categories)
    except CategoryMapError as e:
        err_console.print(f"[red]错误:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    if category_map is None:
        console.print(f"未发现 {escape(str(categories))}，将使用原始英文标签。")
        category_map = {}

    if not path.is_dir():
        err_console.print(f"[red]错误:[/red] 路径不是目录: {escape(str(path))}")
        raise typer.Exit(1)

    # 2. 初始化数据库和 API
    try:
        store = TranslationStore(url, db_name, timeout=timeout)
    except TranslationStoreError as e:
        err_console.print(f"[red]错误:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    registry = RegistryClient(api_endpoint, cache=RegistryCache(), timeout=timeout)
    console.print(f"数据库和 API 初始化完成，开始处理文件夹: {escape(str(path))}")

    if dry_run:
        console.print("[yellow]模拟执行模式[/yellow]")

    # 3. 顺序处理，避免触发 Modrinth 速率限制
    with store:
        pipeline = ModPipeline(store, registry, category_map)
        try:
            result = pipeline.process_folder(path, dry_run=dry_run, on_outcome=print_outcome)
        finally:
            registry.close()

    console.print(
        f"\n[green]成功:[/green] {result.renamed_count}  "
        f"[yellow]跳过(冲突):[/yellow] {result.skipped_count}  "
        f"未变化: {result.unchanged_count}  "
        f"[red]失败:[/red] {result.failed_count}"
    )


if __name__ == "__main__":
    app()
