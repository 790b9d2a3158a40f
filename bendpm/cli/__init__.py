"""bendpm 命令行接口

命令按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click

from bendpm import __version__
from bendpm.core.config import DEFAULT_CONFIG_FILE, Config
from bendpm.core.exceptions import BendError
from bendpm.core.manager import PackageManager
from bendpm.core.models import Workspace
from bendpm.utils.logger import setup_logging


@contextmanager
def user_errors() -> Iterator[None]:
    """业务异常转为 ClickException：打印消息并以 1 退出"""
    try:
        yield
    except BendError as e:
        raise click.ClickException(str(e)) from e


def _pm(ctx: click.Context) -> PackageManager:
    """按全局选项构造当前工作区的包管理器"""
    opts = ctx.obj
    root = Path(opts["root"])
    config_path = Path(opts["config"]) if opts["config"] else root / DEFAULT_CONFIG_FILE
    with user_errors():
        config = Config.from_file(config_path)
    return PackageManager(Workspace(root, config))


@click.group()
@click.version_option(version=__version__)
@click.option("--root", default=".", type=click.Path(file_okay=False), help="工作区根目录")
@click.option("--config", "-c", default=None, help=f"配置文件路径（默认 <root>/{DEFAULT_CONFIG_FILE}）")
@click.option("--verbose", "-v", count=True, help="输出更多日志（-vv 为调试级别）")
@click.pass_context
def main(ctx: click.Context, root: str, config: str | None, verbose: int) -> None:
    """bend - 源码模块包管理器"""
    level = os.getenv("BEND_LOG_LEVEL", "")
    if verbose:
        level = "DEBUG" if verbose > 1 else "INFO"
    setup_logging(
        level=level or "WARNING",
        json_output=os.getenv("BEND_LOG_JSON", "") == "1",
    )
    ctx.obj = {"root": root, "config": config}


# 注册各领域子命令
from bendpm.cli.cmd_pkg import register as _reg_pkg  # noqa: E402

_reg_pkg(main)
